"""
Mapping Cache Module

Plan caches keyed by (source type, destination type):
- InMemoryMappingCache: per mapper instance
- SharedMappingCache: process-wide singleton with hit/miss statistics
- PersistentMappingCache: JSON files surviving restarts
"""

from .base import MappingCache
from .factory import CacheFactory
from .memory import InMemoryMappingCache
from .persistent import PersistentMappingCache
from .shared import SharedMappingCache

__all__ = [
    "MappingCache",
    "CacheFactory",
    "InMemoryMappingCache",
    "PersistentMappingCache",
    "SharedMappingCache",
]
