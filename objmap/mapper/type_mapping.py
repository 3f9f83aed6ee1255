"""
Type Mapping - Per type-pair configuration with seal-time validation

A TypeMapping starts OPEN, accepts for_member() registrations and moves to
SEALED exactly once. Sealing validates, in order:
- the destination type resolves (unless it is the generic map sentinel)
- every configured destination property exists on the destination type
- no property is both mapped and ignored
- plain source properties exist on a reflectable source type
- every transformer has a recognized shape
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from objmap.exceptions import MappingConfigurationError
from objmap.introspection.introspector import (
    TypeId,
    TypeIntrospector,
    is_generic_map,
    resolve_type,
    type_name,
)
from objmap.mapper.property_mapping import PropertyMapping
from objmap.mapper.storage import MappingStorage
from objmap.transformer.base import is_transformer

logger = logging.getLogger(__name__)

MemberConfiguration = Optional[Callable[[PropertyMapping], Any]]


class TypeMapping:
    """Fluent configuration for one (source type, destination type) pair."""

    def __init__(
        self,
        storage: MappingStorage,
        source_type: TypeId,
        destination_type: TypeId,
        introspector: Optional[TypeIntrospector] = None,
        mapper: Any = None,
    ):
        """
        Initialize TypeMapping

        Args:
            storage: Shared storage the member mappings are written to
            source_type: Source type identifier
            destination_type: Destination type identifier
            introspector: Used for property checks at seal time
            mapper: Owning ObjectMapper, needed by reverse_map()
        """
        self.storage = storage
        self.source_type = source_type
        self.destination_type = destination_type
        self.introspector = introspector or TypeIntrospector()
        self.mapper = mapper
        self._sealed = False
        self._lock = threading.RLock()

    @property
    def source_name(self) -> str:
        return type_name(self.source_type)

    @property
    def destination_name(self) -> str:
        return type_name(self.destination_type)

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def for_member(self, destination_property: str, configure: MemberConfiguration = None) -> "TypeMapping":
        """
        Configure a destination property

        A fresh PropertyMapping replaces any earlier one for the property.

        Args:
            destination_property: Destination property name
            configure: Receives the new PropertyMapping

        Returns:
            self, for chaining

        Raises:
            MappingConfigurationError: If the mapping is sealed
        """
        with self._lock:
            if self._sealed:
                raise MappingConfigurationError.already_sealed(
                    self.source_name, self.destination_name, destination_property
                )

            mapping = PropertyMapping()
            if configure is not None:
                configure(mapping)

            self.storage.add_mapping(self.source_type, self.destination_type, destination_property, mapping)

        return self

    def for_members(self, members: Dict[str, MemberConfiguration]) -> "TypeMapping":
        """Configure several destination properties at once."""
        for destination_property, configure in members.items():
            self.for_member(destination_property, configure)
        return self

    def get_mapping(self, destination_property: str) -> Optional[PropertyMapping]:
        return self.storage.get_mapping(self.source_type, self.destination_type, destination_property)

    def get_mappings(self) -> Dict[str, PropertyMapping]:
        return self.storage.get_mappings_for_types(self.source_type, self.destination_type)

    def seal(self) -> "TypeMapping":
        """
        Validate and freeze the configuration

        Calling seal() on a sealed mapping is a no-op.

        Raises:
            MappingConfigurationError: On the first violated rule; any other
                exception raised while validating is wrapped
        """
        with self._lock:
            if self._sealed:
                return self

            try:
                self._validate()
            except MappingConfigurationError:
                raise
            except Exception as e:
                raise MappingConfigurationError(
                    f"Validation of mapping {self.source_name} -> {self.destination_name} failed: {e}",
                    rule="validation",
                    source_type=self.source_name,
                    destination_type=self.destination_name,
                    context={"cause": type(e).__name__},
                ) from e

            self._sealed = True

        logger.debug(f"Sealed mapping {self.source_name} -> {self.destination_name}")
        return self

    def reverse_map(self) -> "TypeMapping":
        """Create the reverse mapping through the owning mapper."""
        if self.mapper is None:
            raise MappingConfigurationError(
                "reverse_map() requires a TypeMapping created by an ObjectMapper",
                source_type=self.source_name,
                destination_type=self.destination_name,
            )
        return self.mapper.create_reverse_map(self.source_type, self.destination_type)

    def _validate(self) -> None:
        mappings = self.get_mappings()
        source, destination = self.source_name, self.destination_name

        destination_class = None
        if not is_generic_map(self.destination_type):
            destination_class = resolve_type(self.destination_type)
            if destination_class is None:
                raise MappingConfigurationError.unknown_destination_type(source, destination)

        destination_properties = self._reflectable_properties(destination_class)
        if destination_properties:
            for name in mappings:
                if name not in destination_properties:
                    raise MappingConfigurationError.unknown_destination_property(source, destination, name)

        for name, mapping in mappings.items():
            if mapping.ignored and mapping.is_mapped:
                raise MappingConfigurationError.mapped_and_ignored(source, destination, name)

        source_class = None if is_generic_map(self.source_type) else resolve_type(self.source_type)
        source_properties = self._reflectable_properties(source_class)
        if source_properties:
            for name, mapping in mappings.items():
                source_property = mapping.source_property
                if source_property is None or "." in source_property:
                    continue
                if source_property not in source_properties:
                    raise MappingConfigurationError.unknown_source_property(
                        source, destination, name, source_property
                    )

        for name, mapping in mappings.items():
            if mapping.transformer is not None and not is_transformer(mapping.transformer):
                raise MappingConfigurationError.invalid_transformer(source, destination, name, mapping.transformer)

    def _reflectable_properties(self, cls: Optional[type]) -> List[str]:
        if cls is None or is_generic_map(cls):
            return []
        return self.introspector.list_properties(cls)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"TypeMapping({self.source_name} -> {self.destination_name}, {state})"
