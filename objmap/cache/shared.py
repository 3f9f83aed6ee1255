"""Process-wide cache shared by every mapper that asks for it."""
import threading
from typing import Any, Dict, Optional

from objmap.cache.memory import InMemoryMappingCache
from objmap.introspection.introspector import TypeId


class SharedMappingCache(InMemoryMappingCache):
    """
    Singleton in-memory cache with hit/miss statistics

    Use get_instance(); direct construction gives an independent cache,
    which is only useful in tests.
    """

    _instance: Optional["SharedMappingCache"] = None
    _instance_lock = threading.Lock()

    def __init__(self):
        super().__init__()
        self.hits = 0
        self.misses = 0

    @classmethod
    def get_instance(cls) -> "SharedMappingCache":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (its plans go with it)."""
        with cls._instance_lock:
            cls._instance = None

    def get(self, source_type: TypeId, destination_type: TypeId) -> Optional[Any]:
        with self._lock:
            plan = super().get(source_type, destination_type)
            if plan is None:
                self.misses += 1
            else:
                self.hits += 1
            return plan

    def clear(self) -> None:
        with self._lock:
            super().clear()
            self.hits = 0
            self.misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Entry count, hits, misses and hit rate."""
        with self._lock:
            total = self.hits + self.misses
            return {
                "entries": len(self._plans),
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": self.hits / total if total else 0.0,
            }
