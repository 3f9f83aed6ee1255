"""Cache construction from configuration."""
import logging
from pathlib import Path
from typing import Optional, Union

from objmap.cache.base import MappingCache
from objmap.cache.memory import InMemoryMappingCache
from objmap.cache.persistent import PersistentMappingCache
from objmap.cache.shared import SharedMappingCache
from objmap.config import CacheType

logger = logging.getLogger(__name__)


class CacheFactory:
    """Builds the MappingCache for a cache type."""

    @staticmethod
    def create(
        cache_type: Union[CacheType, str] = CacheType.MEMORY,
        cache_dir: Optional[Union[str, Path]] = None,
        ttl: Optional[int] = None,
    ) -> MappingCache:
        """
        Create a cache

        Args:
            cache_type: memory, shared or persistent
            cache_dir: Directory for the persistent cache
            ttl: Persistent plan lifetime in seconds

        Returns:
            MappingCache instance; the shared policy returns the singleton
        """
        cache_type = CacheType(cache_type)

        if cache_type == CacheType.SHARED:
            return SharedMappingCache.get_instance()

        if cache_type == CacheType.PERSISTENT:
            logger.info(f"Using persistent mapping cache in {cache_dir or '.cache/objmap'}")
            return PersistentMappingCache(Path(cache_dir) if cache_dir else None, ttl=ttl)

        return InMemoryMappingCache()
