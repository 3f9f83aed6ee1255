"""In-process cache owned by one mapper instance."""
import threading
from typing import Any, Dict, Optional, Tuple

from objmap.cache.base import MappingCache
from objmap.introspection.introspector import TypeId


class InMemoryMappingCache(MappingCache):
    """Dictionary-backed cache, lost with the mapper."""

    def __init__(self):
        self._plans: Dict[Tuple[str, str], Any] = {}
        self._lock = threading.RLock()

    def has(self, source_type: TypeId, destination_type: TypeId) -> bool:
        with self._lock:
            return self.key(source_type, destination_type) in self._plans

    def get(self, source_type: TypeId, destination_type: TypeId) -> Optional[Any]:
        with self._lock:
            return self._plans.get(self.key(source_type, destination_type))

    def put(self, source_type: TypeId, destination_type: TypeId, plan: Any) -> None:
        with self._lock:
            self._plans[self.key(source_type, destination_type)] = plan

    def forget(self, source_type: TypeId, destination_type: TypeId) -> None:
        with self._lock:
            self._plans.pop(self.key(source_type, destination_type), None)

    def clear(self) -> None:
        with self._lock:
            self._plans.clear()

    def __len__(self) -> int:
        return len(self._plans)
