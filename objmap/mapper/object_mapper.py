"""
Object Mapper - Public mapping API

Integrates:
- MappingRegistry: create_map() / create_map_bidirectional() configuration
- MappingProfile: bundles of configuration registered with add_profile()
- ConventionMapper: name-based discovery when explicit configuration is absent
- MappingCache: resolved plans per type pair
- MappingEngine + ObjectFactory: plan execution and instance construction
"""

import hashlib
import json
import logging
import threading
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from objmap.builder.object_factory import ObjectFactory
from objmap.cache.factory import CacheFactory
from objmap.cache.shared import SharedMappingCache
from objmap.config import CacheType, MapperConfig
from objmap.conventions.base import NamingConvention
from objmap.exceptions import DestinationTypeError, UnsupportedSourceError
from objmap.introspection.introspector import (
    TypeId,
    is_generic_map,
    resolve_type,
    source_type_of,
    type_name,
)
from objmap.mapper.convention_mapper import ConventionMapper
from objmap.mapper.engine import MappingEngine
from objmap.mapper.plan import ORIGIN_IMPLICIT, MappingPlan, PlanBuilder
from objmap.mapper.profile import MappingProfile
from objmap.mapper.property_mapping import PropertyMapping
from objmap.mapper.registry import MappingRegistry
from objmap.mapper.type_mapping import TypeMapping

logger = logging.getLogger(__name__)


class ObjectMapper(MappingRegistry):
    """
    Maps source values to destination types

    Usage:
    ```python
    mapper = ObjectMapper(MapperConfig.for_development())
    mapper.create_map(UserEntity, UserDTO) \\
        .for_member("full_name", lambda m: m.map_from("name")) \\
        .for_member("password", lambda m: m.ignore())

    dto = mapper.map(entity, UserDTO)
    dtos = mapper.map_array(entities, UserDTO)
    ```
    """

    _global_instance: Optional["ObjectMapper"] = None
    _global_lock = threading.RLock()

    def __init__(self, config: Optional[MapperConfig] = None):
        """
        Initialize ObjectMapper

        Args:
            config: Mapper configuration (MapperConfig.default() when omitted)
        """
        super().__init__()
        self.config = (config or MapperConfig.default()).validate()

        self.cache = CacheFactory.create(self.config.cache_type, self.config.cache_dir, self.config.cache_ttl)
        self.convention_mapper = ConventionMapper(
            threshold=self.config.convention_threshold, introspector=self.introspector
        )
        for convention in self.config.conventions:
            self.convention_mapper.register_convention(convention)

        self.conventions_enabled = self.config.use_conventions
        self.factory = ObjectFactory(self.introspector)
        self.plan_builder = PlanBuilder(self.introspector, self.convention_mapper)
        self.engine = MappingEngine(self.convention_mapper)
        self.profiles: List[MappingProfile] = []
        self._plan_lock = threading.RLock()

        self.storage.subscribe(self._on_configuration_changed)

        for profile in self.config.profiles:
            self.add_profile(profile)

        if self.config.warmup and self.profiles:
            self.warmup()

    def _owner(self) -> "ObjectMapper":
        return self

    # ------------------------------------------------------------------
    # Mapping
    # ------------------------------------------------------------------

    def map(self, source: Any, destination_type: TypeId) -> Any:
        """
        Map a source value to a new destination instance

        Args:
            source: Object, mapping or JSON object string
            destination_type: Class, dotted path, or "array" for a dict

        Returns:
            Destination instance

        Raises:
            DestinationTypeError: If the destination type cannot be resolved
            UnsupportedSourceError: If the source cannot be normalized
            MappingConfigurationError: If the pair's configuration is invalid
        """
        destination_class = self._resolve_destination(destination_type)
        source_data = self._normalize(source, destination_type)
        plan = self.get_plan(source_type_of(source), destination_type)
        values = self.engine.resolve_values(plan, source_data, self.conventions_enabled)
        return self.factory.instantiate(destination_class, values)

    def map_array(self, sources: Iterable[Any], destination_type: TypeId) -> Union[List[Any], Dict[Any, Any]]:
        """
        Map every element of a collection

        A mapping of sources keeps its keys; any other iterable yields a list.
        """
        if isinstance(sources, Mapping):
            return {key: self.map(source, destination_type) for key, source in sources.items()}
        if isinstance(sources, (str, bytes)):
            raise UnsupportedSourceError.for_value(sources, type_name(destination_type))

        results = [self.map(source, destination_type) for source in sources]
        logger.debug(f"Mapped {len(results)} items to {type_name(destination_type)}")
        return results

    def map_to(self, source: Any, destination: Any) -> Any:
        """
        Map onto an existing destination instance

        Returns:
            The populated instance (a modified copy for immutable types)
        """
        destination_type = type(destination)
        source_data = self._normalize(source, destination_type)
        plan = self.get_plan(source_type_of(source), destination_type)
        values = self.engine.resolve_values(plan, source_data, self.conventions_enabled)
        return self.factory.populate(destination, values)

    def _resolve_destination(self, destination_type: TypeId) -> type:
        if is_generic_map(destination_type):
            return dict
        destination_class = resolve_type(destination_type)
        if destination_class is None:
            raise DestinationTypeError.not_found(type_name(destination_type))
        return destination_class

    def _normalize(self, source: Any, destination_type: TypeId) -> Dict[str, Any]:
        if source is None:
            raise UnsupportedSourceError.for_value(source, type_name(destination_type))
        return self.introspector.normalize(source, type_name(destination_type))

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def get_plan(self, source_type: TypeId, destination_type: TypeId) -> MappingPlan:
        """
        Resolved plan for a pair, built and cached on first use

        Resolving a plan seals every TypeMapping registered for the pair,
        whether or not the plan came from the cache. A cached plan built
        under a different fingerprint counts as a miss.
        """
        with self._plan_lock:
            for type_mapping in self._type_mappings_for_pair(source_type, destination_type):
                type_mapping.seal()

            explicit = self._explicit_mappings(source_type, destination_type)
            fingerprint = self._fingerprint(explicit)

            plan = self.cache.get(source_type, destination_type)
            if plan is not None and getattr(plan, "fingerprint", None) == fingerprint:
                return plan
            if plan is not None:
                logger.debug(f"Discarding cached plan {plan!r} built under other settings")

            plan = self.plan_builder.build(
                source_type,
                destination_type,
                explicit,
                use_conventions=self.conventions_enabled,
                mapper=self,
                fingerprint=fingerprint,
            )
            self.cache.put(source_type, destination_type, plan)
            return plan

    def _fingerprint(self, explicit: Dict[str, PropertyMapping]) -> str:
        """Digest of the settings and explicit configuration a plan depends on."""
        settings = {
            "conventions": self.conventions_enabled,
            "threshold": self.convention_mapper.threshold,
            "registered": self.convention_mapper.registry.names(),
            "explicit": {name: self._describe(mapping) for name, mapping in sorted(explicit.items())},
        }
        return hashlib.md5(json.dumps(settings, sort_keys=True, default=repr).encode()).hexdigest()

    @staticmethod
    def _describe(mapping: PropertyMapping) -> Dict[str, Any]:
        description = mapping.to_dict()
        if mapping.transformer is not None and mapping.transformer_name is None:
            description["transformer"] = repr(mapping.transformer)
        if mapping.condition is not None:
            description["condition"] = repr(mapping.condition)
        return description

    def _type_mappings_for_pair(self, source_type: TypeId, destination_type: TypeId) -> List[TypeMapping]:
        mappings = self.type_mappings_for(source_type, destination_type)
        for profile in self.profiles:
            mappings.extend(profile.type_mappings_for(source_type, destination_type))
        return mappings

    def _explicit_mappings(self, source_type: TypeId, destination_type: TypeId) -> Dict[str, PropertyMapping]:
        merged: Dict[str, PropertyMapping] = {}
        for profile in reversed(self.profiles):
            merged.update(profile.get_mappings_for_types(source_type, destination_type))
        merged.update(self.storage.get_mappings_for_types(source_type, destination_type))
        return merged

    def _on_configuration_changed(self, source_type: TypeId, destination_type: TypeId) -> None:
        self.cache.forget(source_type, destination_type)

    def configured_pairs(self) -> List[Tuple[TypeId, TypeId]]:
        """Type pairs configured on this mapper or its profiles."""
        seen = {}
        registries: List[MappingRegistry] = [self, *self.profiles]
        for registry in registries:
            for mapping in registry.all_type_mappings():
                key = (mapping.source_name, mapping.destination_name)
                seen.setdefault(key, (mapping.source_type, mapping.destination_type))
        return list(seen.values())

    def warmup(self, pairs: Optional[Iterable[Tuple[TypeId, TypeId]]] = None) -> int:
        """
        Resolve, seal and cache plans eagerly

        Args:
            pairs: Type pairs to warm (every configured pair when omitted)

        Returns:
            Number of plans built (pairs served from the cache are sealed
            but not counted)
        """
        count = 0
        for source_type, destination_type in pairs if pairs is not None else self.configured_pairs():
            cached = self.cache.get(source_type, destination_type)
            if self.get_plan(source_type, destination_type) is not cached:
                count += 1

        logger.info(f"Warmed up {count} mapping plans")
        return count

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def create_reverse_map(self, source_type: TypeId, destination_type: TypeId) -> TypeMapping:
        """
        Create the destination -> source mapping from the forward plan

        Renamed, untransformed, unconditional members are reversed; the
        returned mapping is sealed.
        """
        plan = self.get_plan(source_type, destination_type)
        reverse = self.create_map(destination_type, source_type)

        for entry in plan:
            mapping = entry.mapping
            if entry.origin == ORIGIN_IMPLICIT or mapping.ignored:
                continue
            if mapping.transformer is not None or mapping.condition is not None:
                continue
            if entry.source == entry.property_name or "." in entry.source:
                continue
            reverse.for_member(entry.source, lambda m, prop=entry.property_name: m.map_from(prop))

        return reverse.seal()

    def add_profile(self, profile: MappingProfile) -> "ObjectMapper":
        """Register a profile; earlier profiles win over later ones."""
        self.profiles.append(profile)
        profile.storage.subscribe(self._on_configuration_changed)
        for source_type, destination_type in profile.pairs():
            self.cache.forget(source_type, destination_type)
        logger.debug(f"Added mapping profile {profile.name}")
        return self

    def use_conventions(self, enabled: bool = True) -> "ObjectMapper":
        self.conventions_enabled = enabled
        self.clear_cache()
        return self

    def set_convention_threshold(self, threshold: float) -> "ObjectMapper":
        self.convention_mapper.set_confidence_threshold(threshold)
        self.clear_cache()
        return self

    def register_convention(self, convention: NamingConvention) -> "ObjectMapper":
        self.convention_mapper.register_convention(convention)
        self.clear_cache()
        return self

    def clear_cache(self) -> "ObjectMapper":
        self.cache.clear()
        self.convention_mapper.clear_cache()
        return self

    def get_cache(self):
        return self.cache

    # ------------------------------------------------------------------
    # Process-wide instance
    # ------------------------------------------------------------------

    @classmethod
    def get_instance(cls) -> "ObjectMapper":
        """Global mapper, created on first use with shared cache and conventions."""
        with cls._global_lock:
            if cls._global_instance is None:
                cls._global_instance = cls(
                    MapperConfig.default().with_cache(CacheType.SHARED).with_conventions(True, 0.75)
                )
            return cls._global_instance

    @classmethod
    def configure(cls, configuration: Union[MapperConfig, Callable[["ObjectMapper"], Any]]) -> "ObjectMapper":
        """
        Configure the global mapper

        Args:
            configuration: A MapperConfig replacing the global mapper, or a
                callable receiving the current global mapper

        Returns:
            The global mapper
        """
        with cls._global_lock:
            if isinstance(configuration, MapperConfig):
                cls._global_instance = cls(configuration)
            else:
                configuration(cls.get_instance())
            return cls._global_instance

    @classmethod
    def set_global_instance(cls, mapper: "ObjectMapper") -> None:
        with cls._global_lock:
            cls._global_instance = mapper

    @classmethod
    def reset(cls) -> None:
        """Drop the global mapper and the shared plan cache."""
        with cls._global_lock:
            cls._global_instance = None
            SharedMappingCache.get_instance().clear()
