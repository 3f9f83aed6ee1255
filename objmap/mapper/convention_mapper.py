"""Convention-based property discovery using confidence scoring."""
import inspect
import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from objmap.conventions.base import NamingConvention
from objmap.conventions.registry import ConventionRegistry
from objmap.introspection.introspector import (
    TypeId,
    TypeIntrospector,
    is_generic_map,
    resolve_type,
    type_name,
)

logger = logging.getLogger(__name__)


@dataclass
class ConventionMatch:
    """Best source candidate for one destination property."""

    destination_property: str
    source_property: Optional[str]
    confidence: float = 0.0
    convention: Optional[str] = None
    accepted: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "destination_property": self.destination_property,
            "source_property": self.source_property,
            "confidence": self.confidence,
            "convention": self.convention,
            "accepted": self.accepted,
        }


class ConventionMapper:
    """Infer source properties for destination properties by name alone."""

    DEFAULT_THRESHOLD = 0.8
    NAME_CACHE_SIZE = 256

    def __init__(
        self,
        registry: Optional[ConventionRegistry] = None,
        threshold: float = DEFAULT_THRESHOLD,
        introspector: Optional[TypeIntrospector] = None,
    ):
        """
        Initialize mapper

        Args:
            registry: Conventions in priority order (defaults when omitted)
            threshold: Minimum confidence for an accepted match
            introspector: Property lister for types
        """
        self.registry = registry if registry is not None else ConventionRegistry()
        self.introspector = introspector or TypeIntrospector()
        self.threshold = self._clamp(threshold)
        self._discovered: Dict[Tuple[str, str], Dict[str, str]] = {}
        self._name_matches: "OrderedDict[Tuple, Dict[str, str]]" = OrderedDict()
        self._lock = threading.RLock()

    @staticmethod
    def _clamp(value: float) -> float:
        return max(0.0, min(1.0, float(value)))

    def set_confidence_threshold(self, threshold: float) -> "ConventionMapper":
        """Set the acceptance threshold, clamped to [0.0, 1.0]."""
        self.threshold = self._clamp(threshold)
        self.clear_cache()
        return self

    def register_convention(self, convention: NamingConvention) -> "ConventionMapper":
        self.registry.register(convention)
        self.clear_cache()
        return self

    def get_conventions(self) -> List[NamingConvention]:
        return self.registry.all()

    def clear_cache(self) -> None:
        """Forget memoized discovery results."""
        with self._lock:
            self._discovered.clear()
            self._name_matches.clear()

    # ------------------------------------------------------------------
    # Detection and scoring
    # ------------------------------------------------------------------

    def detect_convention(self, type_or_name: Any) -> Optional[NamingConvention]:
        """
        Detect the naming convention of a property name or a type

        A name gets the first convention (in priority order) that matches.
        A type gets the convention matching most of its property names, ties
        going to the higher-priority convention.
        """
        if inspect.isclass(type_or_name) or (
            isinstance(type_or_name, str) and "." in type_or_name and resolve_type(type_or_name) is not None
        ):
            return self._detect_for_type(type_or_name)
        return self._detect_for_name(type_or_name)

    def _detect_for_name(self, name: str) -> Optional[NamingConvention]:
        for convention in self.registry.all():
            if convention.matches(name):
                return convention
        return None

    def _detect_for_type(self, type_id: TypeId) -> Optional[NamingConvention]:
        conventions = self.registry.all()
        counts = {convention.name: 0 for convention in conventions}

        for name in self.introspector.list_properties(type_id):
            detected = self._detect_for_name(name)
            if detected is not None:
                counts[detected.name] += 1

        best, best_count = None, 0
        for convention in conventions:
            if counts[convention.name] > best_count:
                best, best_count = convention, counts[convention.name]
        return best

    def score(self, source_name: str, destination_name: str) -> Tuple[float, Optional[str]]:
        """Highest confidence for the pair and the convention producing it."""
        best_confidence, best_convention = 0.0, None
        for convention in self.registry.all():
            confidence = convention.calculate_match_confidence(source_name, destination_name)
            if confidence > best_confidence:
                best_confidence, best_convention = confidence, convention.name
        return best_confidence, best_convention

    def calculate_confidence(self, source_name: str, destination_name: str) -> float:
        """Highest confidence any single convention gives the pair."""
        return self.score(source_name, destination_name)[0]

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def match_names(
        self,
        source_names: Iterable[str],
        destination_names: Iterable[str],
        threshold: Optional[float] = None,
    ) -> List[ConventionMatch]:
        """
        Find the best source name for every destination name

        Args:
            source_names: Candidate names in declaration order
            destination_names: Names to find sources for
            threshold: Acceptance threshold (mapper threshold when omitted)

        Returns:
            One ConventionMatch per destination name; ties go to the first
            declared source name
        """
        threshold = self.threshold if threshold is None else self._clamp(threshold)
        sources = list(source_names)
        matches = []

        for destination in destination_names:
            best = ConventionMatch(destination_property=destination, source_property=None)

            for source in sources:
                confidence, convention = self.score(source, destination)
                if confidence > best.confidence:
                    best.source_property = source
                    best.confidence = confidence
                    best.convention = convention

            best.accepted = best.source_property is not None and best.confidence >= threshold
            matches.append(best)

        return matches

    def explain(self, source_type: TypeId, destination_type: TypeId) -> List[ConventionMatch]:
        """Discovery details for every destination property of a type pair."""
        if is_generic_map(source_type) or is_generic_map(destination_type):
            return []
        return self.match_names(
            self.introspector.list_properties(source_type),
            self.introspector.list_properties(destination_type),
        )

    def discover_mappings(self, source_type: TypeId, destination_type: TypeId) -> Dict[str, str]:
        """
        Discover destination -> source property correspondences

        Returns:
            Accepted pairs only; empty for generic maps and unresolvable types
        """
        key = (type_name(source_type), type_name(destination_type))

        with self._lock:
            if key in self._discovered:
                return dict(self._discovered[key])

        discovered = {
            match.destination_property: match.source_property
            for match in self.explain(source_type, destination_type)
            if match.accepted
        }

        with self._lock:
            self._discovered[key] = discovered

        logger.debug(f"Discovered {len(discovered)} convention mappings for {key[0]} -> {key[1]}")
        return dict(discovered)

    def discover_for_names(self, source_names: Iterable[str], destination_names: Iterable[str]) -> Dict[str, str]:
        """Memoized discovery between two explicit name lists."""
        key = (tuple(source_names), tuple(destination_names))

        with self._lock:
            if key in self._name_matches:
                self._name_matches.move_to_end(key)
                return dict(self._name_matches[key])

        discovered = {
            match.destination_property: match.source_property
            for match in self.match_names(key[0], key[1])
            if match.accepted
        }

        with self._lock:
            self._name_matches[key] = discovered
            while len(self._name_matches) > self.NAME_CACHE_SIZE:
                self._name_matches.popitem(last=False)

        return dict(discovered)

    def apply_conventions(self, source_type: TypeId, destination_type: TypeId, type_mapping) -> Any:
        """
        Register discovered pairs on a TypeMapping

        Destination properties with an explicit mapping and pairs with
        identical names are skipped.
        """
        explicit = type_mapping.get_mappings()

        for destination, source in self.discover_mappings(source_type, destination_type).items():
            if destination in explicit or destination == source:
                continue
            type_mapping.for_member(destination, lambda m, source=source: m.map_from(source))

        return type_mapping
