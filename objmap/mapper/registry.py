"""Shared create_map() surface for mappers and profiles."""
import threading
from typing import Dict, List, Optional

from objmap.introspection.introspector import TypeId, TypeIntrospector, type_name
from objmap.mapper.bidirectional import BidirectionalTypeMapping
from objmap.mapper.property_mapping import PropertyMapping
from objmap.mapper.storage import MappingStorage
from objmap.mapper.type_mapping import TypeMapping


class MappingRegistry:
    """Owns a MappingStorage and the TypeMappings created on it."""

    def __init__(self, introspector: Optional[TypeIntrospector] = None):
        self.storage = MappingStorage()
        self.introspector = introspector or TypeIntrospector()
        self._type_mappings: List[TypeMapping] = []
        self._registry_lock = threading.RLock()

    def create_map(self, source_type: TypeId, destination_type: TypeId) -> TypeMapping:
        """Start (or continue) configuring a type pair."""
        mapping = TypeMapping(self.storage, source_type, destination_type, self.introspector, mapper=self._owner())
        with self._registry_lock:
            self._type_mappings.append(mapping)
        return mapping

    def create_map_bidirectional(self, type_a: TypeId, type_b: TypeId) -> BidirectionalTypeMapping:
        """Configure A -> B and B -> A together."""
        return BidirectionalTypeMapping(self.create_map(type_a, type_b), self.create_map(type_b, type_a))

    def get_mapping(
        self, source_type: TypeId, destination_type: TypeId, property_name: str
    ) -> Optional[PropertyMapping]:
        return self.storage.get_mapping(source_type, destination_type, property_name)

    def get_mappings_for_types(self, source_type: TypeId, destination_type: TypeId) -> Dict[str, PropertyMapping]:
        return self.storage.get_mappings_for_types(source_type, destination_type)

    def type_mappings_for(self, source_type: TypeId, destination_type: TypeId) -> List[TypeMapping]:
        """TypeMappings created here for a pair, oldest first."""
        source, destination = type_name(source_type), type_name(destination_type)
        with self._registry_lock:
            return [
                mapping
                for mapping in self._type_mappings
                if mapping.source_name == source and mapping.destination_name == destination
            ]

    def all_type_mappings(self) -> List[TypeMapping]:
        with self._registry_lock:
            return list(self._type_mappings)

    def _owner(self):
        return None
