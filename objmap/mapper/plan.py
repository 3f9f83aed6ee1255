"""Resolved mapping plans and the builder that produces them."""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from objmap.exceptions import MappingConfigurationError
from objmap.introspection.declarative import DeclarativeReader
from objmap.introspection.introspector import TypeId, TypeIntrospector, is_generic_map, type_name
from objmap.mapper.convention_mapper import ConventionMapper
from objmap.mapper.property_mapping import PropertyMapping
from objmap.transformer.base import is_transformer
from objmap.transformer.collection import CollectionTransformer

logger = logging.getLogger(__name__)

ORIGIN_EXPLICIT = "explicit"
ORIGIN_DECLARATIVE = "declarative"
ORIGIN_CONVENTION = "convention"
ORIGIN_IMPLICIT = "implicit"


@dataclass
class PlanEntry:
    """How one destination property is produced."""

    property_name: str
    source: str
    mapping: PropertyMapping
    origin: str = ORIGIN_IMPLICIT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "property_name": self.property_name,
            "source": self.source,
            "mapping": self.mapping.to_dict(),
            "origin": self.origin,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanEntry":
        return cls(
            property_name=data["property_name"],
            source=data["source"],
            mapping=PropertyMapping.from_dict(data["mapping"]),
            origin=data.get("origin", ORIGIN_IMPLICIT),
        )


class MappingPlan:
    """
    Final destination property -> PlanEntry map for a type pair

    ``fingerprint`` identifies the mapper settings and pair configuration
    the plan was built under; a cached plan is only reused when it matches.
    """

    def __init__(
        self,
        source_type: str,
        destination_type: str,
        entries: Dict[str, PlanEntry],
        fingerprint: Optional[str] = None,
    ):
        self.source_type = source_type
        self.destination_type = destination_type
        self.entries = entries
        self.fingerprint = fingerprint

    def __iter__(self) -> Iterator[PlanEntry]:
        return iter(self.entries.values())

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, property_name: str) -> bool:
        return property_name in self.entries

    def get(self, property_name: str) -> Optional[PlanEntry]:
        return self.entries.get(property_name)

    def sources(self) -> Dict[str, str]:
        """destination property -> source key, ignored properties excluded."""
        return {entry.property_name: entry.source for entry in self if not entry.mapping.ignored}

    def discovered(self) -> Dict[str, str]:
        """Pairs contributed by convention discovery."""
        return {entry.property_name: entry.source for entry in self if entry.origin == ORIGIN_CONVENTION}

    def implicit_properties(self) -> List[str]:
        return [entry.property_name for entry in self if entry.origin == ORIGIN_IMPLICIT]

    def is_serializable(self) -> bool:
        return all(entry.mapping.is_serializable() for entry in self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source_type": self.source_type,
            "destination_type": self.destination_type,
            "fingerprint": self.fingerprint,
            "entries": [entry.to_dict() for entry in self],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MappingPlan":
        entries = [PlanEntry.from_dict(entry) for entry in data.get("entries", [])]
        return cls(
            data["source_type"],
            data["destination_type"],
            {entry.property_name: entry for entry in entries},
            fingerprint=data.get("fingerprint"),
        )

    def __repr__(self) -> str:
        return f"MappingPlan({self.source_type} -> {self.destination_type}, {len(self)} properties)"


class PlanBuilder:
    """
    Combines configuration sources into a MappingPlan

    Precedence per destination property: explicit configuration (engine
    storage, then profiles in registration order), declarative field
    metadata, convention discovery, then the property's own name.
    """

    def __init__(
        self,
        introspector: TypeIntrospector,
        convention_mapper: ConventionMapper,
        declarative_reader: Optional[DeclarativeReader] = None,
    ):
        self.introspector = introspector
        self.convention_mapper = convention_mapper
        self.declarative_reader = declarative_reader or DeclarativeReader()

    def build(
        self,
        source_type: TypeId,
        destination_type: TypeId,
        explicit: Dict[str, PropertyMapping],
        use_conventions: bool = False,
        mapper: Any = None,
        fingerprint: Optional[str] = None,
    ) -> MappingPlan:
        """
        Resolve the plan for a type pair

        Args:
            source_type: Source type identifier
            destination_type: Destination type identifier
            explicit: Explicit mappings already merged across storages
            use_conventions: Run convention discovery
            mapper: Bound into collection transformers
            fingerprint: Configuration fingerprint stored on the plan

        Returns:
            Fully built plan
        """
        source, destination = type_name(source_type), type_name(destination_type)

        names = [] if is_generic_map(destination_type) else self.introspector.list_properties(destination_type)
        names += [name for name in explicit if name not in names]

        declared = self.declarative_reader.read(destination_type)
        discovered = self.convention_mapper.discover_mappings(source_type, destination_type) if use_conventions else {}

        entries: Dict[str, PlanEntry] = {}
        for name in names:
            if name in explicit:
                mapping, origin = explicit[name].copy(), ORIGIN_EXPLICIT
            elif name in declared:
                mapping, origin = declared[name], ORIGIN_DECLARATIVE
            elif name in discovered and discovered[name] != name:
                mapping, origin = PropertyMapping().map_from(discovered[name]), ORIGIN_CONVENTION
            else:
                mapping, origin = PropertyMapping(), ORIGIN_IMPLICIT

            if mapping.transformer is not None and not is_transformer(mapping.transformer):
                raise MappingConfigurationError.invalid_transformer(source, destination, name, mapping.transformer)

            if isinstance(mapping.transformer, CollectionTransformer) and mapper is not None:
                mapping.transformer = mapping.transformer.bind(mapper)

            entries[name] = PlanEntry(
                property_name=name,
                source=mapping.source_property or name,
                mapping=mapping,
                origin=origin,
            )

        logger.debug(
            f"Resolved plan {source} -> {destination}: "
            f"{len(entries)} properties, {len(discovered)} discovered"
        )
        return MappingPlan(source, destination, entries, fingerprint=fingerprint)
