"""
Persistent Mapping Cache - Plans stored as JSON files

Keeps an in-memory layer and writes every JSON-representable plan to
``<cache_dir>/plan_<hash>.json`` so it survives process restarts. Plans
holding callables (transformers other than registered names, conditions)
stay in memory only.
"""

import hashlib
import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Optional, Tuple

from objmap.cache.memory import InMemoryMappingCache
from objmap.introspection.introspector import TypeId
from objmap.mapper.plan import MappingPlan

logger = logging.getLogger(__name__)

CACHE_FORMAT_VERSION = 1


class PersistentMappingCache(InMemoryMappingCache):
    """File-backed plan cache with optional TTL."""

    def __init__(self, cache_dir: Optional[Path] = None, ttl: Optional[int] = None):
        """
        Initialize PersistentMappingCache

        Args:
            cache_dir: Directory for plan files (default .cache/objmap)
            ttl: Seconds a plan file stays valid (None = forever)
        """
        super().__init__()
        self.cache_dir = Path(cache_dir) if cache_dir else Path(".cache/objmap")
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.ttl = ttl

    def has(self, source_type: TypeId, destination_type: TypeId) -> bool:
        return self.get(source_type, destination_type) is not None

    def get(self, source_type: TypeId, destination_type: TypeId) -> Optional[Any]:
        plan = super().get(source_type, destination_type)
        if plan is not None:
            return plan

        plan = self._try_load_file_cache(self.key(source_type, destination_type))
        if plan is not None:
            super().put(source_type, destination_type, plan)
        return plan

    def put(self, source_type: TypeId, destination_type: TypeId, plan: Any) -> None:
        super().put(source_type, destination_type, plan)
        if isinstance(plan, MappingPlan) and plan.is_serializable():
            self._save_file_cache(self.key(source_type, destination_type), plan)
        else:
            logger.debug(f"Plan {plan!r} holds callables, keeping it in memory only")

    def forget(self, source_type: TypeId, destination_type: TypeId) -> None:
        super().forget(source_type, destination_type)
        cache_file = self._get_cache_file_path(self.key(source_type, destination_type))
        try:
            cache_file.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Error removing cache file {cache_file}: {e}")

    def clear(self) -> None:
        super().clear()
        for cache_file in self.cache_dir.glob("plan_*.json"):
            try:
                cache_file.unlink()
            except OSError as e:
                logger.warning(f"Error removing cache file {cache_file}: {e}")

    def _try_load_file_cache(self, key: Tuple[str, str]) -> Optional[MappingPlan]:
        """Try to load a cached plan from file"""
        cache_file = self._get_cache_file_path(key)
        if not cache_file.exists():
            return None

        try:
            if self.ttl is not None and time.time() - cache_file.stat().st_mtime > self.ttl:
                logger.debug(f"Cache file expired: {cache_file}")
                return None

            with open(cache_file, "r") as f:
                data = json.load(f)

            if data.get("version") != CACHE_FORMAT_VERSION or data.get("key") != list(key):
                logger.debug(f"Ignoring stale cache file: {cache_file}")
                return None

            plan = MappingPlan.from_dict(data["plan"])
            logger.debug(f"Loaded plan from cache file: {cache_file}")
            return plan

        except (OSError, ValueError, KeyError) as e:
            logger.warning(f"Error loading cache file {cache_file}: {e}")
            return None

    def _save_file_cache(self, key: Tuple[str, str], plan: MappingPlan) -> None:
        """Save plan to file cache, replacing any previous file atomically"""
        cache_file = self._get_cache_file_path(key)
        tmp_file = cache_file.with_suffix(".tmp")
        payload = {
            "version": CACHE_FORMAT_VERSION,
            "key": list(key),
            "created_at": time.time(),
            "plan": plan.to_dict(),
        }

        try:
            with open(tmp_file, "w") as f:
                json.dump(payload, f, indent=2)
            os.replace(tmp_file, cache_file)
            logger.debug(f"Saved plan to cache file: {cache_file}")
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Error saving cache file {cache_file}: {e}")

    def _get_cache_file_path(self, key: Tuple[str, str]) -> Path:
        """Get cache file path based on the type pair"""
        pair_hash = hashlib.md5(f"{key[0]}->{key[1]}".encode()).hexdigest()[:16]
        return self.cache_dir / f"plan_{pair_hash}.json"
