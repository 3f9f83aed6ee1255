"""Mapping cache interface."""
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from objmap.introspection.introspector import TypeId, type_name


class MappingCache(ABC):
    """
    Memoizes resolved plans per (source type, destination type)

    A hit and a miss must be observably identical to callers; plans are
    only put() once fully built.
    """

    @staticmethod
    def key(source_type: TypeId, destination_type: TypeId) -> Tuple[str, str]:
        return type_name(source_type), type_name(destination_type)

    @abstractmethod
    def has(self, source_type: TypeId, destination_type: TypeId) -> bool:
        """Check if a plan is cached for the pair."""

    @abstractmethod
    def get(self, source_type: TypeId, destination_type: TypeId) -> Optional[Any]:
        """Cached plan, or None on a miss."""

    @abstractmethod
    def put(self, source_type: TypeId, destination_type: TypeId, plan: Any) -> None:
        """Store a fully built plan."""

    @abstractmethod
    def forget(self, source_type: TypeId, destination_type: TypeId) -> None:
        """Drop the plan for one pair."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every plan."""
