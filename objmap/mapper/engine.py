"""Executes resolved plans against normalized source data."""
import logging
from typing import Any, Dict

from objmap.introspection.introspector import GENERIC_MAP, resolve_path
from objmap.mapper.convention_mapper import ConventionMapper
from objmap.mapper.plan import MappingPlan

logger = logging.getLogger(__name__)


class MappingEngine:
    """
    Produces destination values from a plan

    Usage:
    ```python
    values = engine.resolve_values(plan, source_data, use_conventions=True)
    instance = factory.instantiate(DestinationType, values)
    ```
    """

    def __init__(self, convention_mapper: ConventionMapper):
        self.convention_mapper = convention_mapper

    def resolve_values(
        self,
        plan: MappingPlan,
        source_data: Dict[str, Any],
        use_conventions: bool = False,
    ) -> Dict[str, Any]:
        """
        Run every plan entry against the source data

        Args:
            plan: Resolved plan for the type pair
            source_data: Normalized source view
            use_conventions: Match implicit properties against the keys of
                generic map sources

        Returns:
            destination property -> value. Ignored properties are left out,
            as are plain properties whose source key is absent, so that the
            destination keeps its own default.
        """
        runtime_sources = {}
        if use_conventions and plan.source_type == GENERIC_MAP:
            runtime_sources = self._discover_for_keys(plan, source_data)

        values: Dict[str, Any] = {}
        if plan.destination_type == GENERIC_MAP:
            values.update(source_data)

        for entry in plan:
            mapping = entry.mapping
            if mapping.ignored:
                values.pop(entry.property_name, None)
                continue

            source_key = runtime_sources.get(entry.property_name, entry.source)
            found, raw_value = resolve_path(source_data, source_key)

            if not found and mapping.transformer is None and mapping.condition is None and not mapping.has_default:
                continue

            values[entry.property_name] = mapping.transform(raw_value, source_data)

        return values

    def _discover_for_keys(self, plan: MappingPlan, source_data: Dict[str, Any]) -> Dict[str, str]:
        missing = [name for name in plan.implicit_properties() if name not in source_data]
        if not missing or not source_data:
            return {}

        discovered = self.convention_mapper.discover_for_names(
            [key for key in source_data if isinstance(key, str)], missing
        )
        if discovered:
            logger.debug(f"Matched source keys by convention: {discovered}")
        return discovered
