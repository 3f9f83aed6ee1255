"""Registry of property mappings keyed by type pair."""
import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from objmap.introspection.introspector import TypeId, type_name
from objmap.mapper.property_mapping import PropertyMapping

logger = logging.getLogger(__name__)

ChangeListener = Callable[[TypeId, TypeId], None]


class MappingStorage:
    """
    Flat registry: "<source>-><destination>" -> {property: PropertyMapping}

    Every TypeMapping created on the same storage for the same pair shares
    the same entries. Listeners are notified after each registration so
    that cached plans for the pair can be dropped.
    """

    def __init__(self):
        self._mappings: Dict[str, Dict[str, PropertyMapping]] = {}
        self._pairs: Dict[str, Tuple[TypeId, TypeId]] = {}
        self._listeners: List[ChangeListener] = []
        self._lock = threading.RLock()

    @staticmethod
    def key(source_type: TypeId, destination_type: TypeId) -> str:
        return f"{type_name(source_type)}->{type_name(destination_type)}"

    def add_mapping(
        self,
        source_type: TypeId,
        destination_type: TypeId,
        property_name: str,
        mapping: PropertyMapping,
    ) -> None:
        """Store a mapping, replacing any previous one for the property."""
        key = self.key(source_type, destination_type)
        with self._lock:
            self._mappings.setdefault(key, {})[property_name] = mapping
            self._pairs.setdefault(key, (source_type, destination_type))
            listeners = list(self._listeners)

        logger.debug(f"Registered mapping {key}.{property_name}: {mapping!r}")
        for listener in listeners:
            listener(source_type, destination_type)

    def get_mapping(
        self, source_type: TypeId, destination_type: TypeId, property_name: str
    ) -> Optional[PropertyMapping]:
        with self._lock:
            return self._mappings.get(self.key(source_type, destination_type), {}).get(property_name)

    def get_mappings_for_types(self, source_type: TypeId, destination_type: TypeId) -> Dict[str, PropertyMapping]:
        """Snapshot of the mappings registered for a pair."""
        with self._lock:
            return dict(self._mappings.get(self.key(source_type, destination_type), {}))

    def has_mappings_for_types(self, source_type: TypeId, destination_type: TypeId) -> bool:
        with self._lock:
            return bool(self._mappings.get(self.key(source_type, destination_type)))

    def pairs(self) -> List[Tuple[TypeId, TypeId]]:
        """Type pairs with at least one registration, in registration order."""
        with self._lock:
            return list(self._pairs.values())

    def subscribe(self, listener: ChangeListener) -> None:
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def clear(self) -> None:
        with self._lock:
            self._mappings.clear()
            self._pairs.clear()
