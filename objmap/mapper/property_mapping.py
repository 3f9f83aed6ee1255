"""Per-property mapping configuration and transform pipeline."""
import copy
import json
from typing import Any, Callable, Dict, Optional

from objmap.introspection.introspector import TypeId
from objmap.transformer.base import call_transformer
from objmap.transformer.collection import CollectionTransformer
from objmap.transformer.registry import default_registry


class PropertyMapping:
    """
    Configuration for a single destination property

    Usage:
    ```python
    mapping = (
        PropertyMapping()
        .map_from("customer.contact_info.email")
        .using(str.lower)
        .only_if(lambda src: src.get("active"))
        .default_value("unknown@example.com")
    )
    value = mapping.transform(raw_value, source_data)
    ```
    """

    def __init__(self):
        self.source_property: Optional[str] = None
        self.transformer: Any = None
        self.transformer_name: Optional[str] = None
        self.condition: Optional[Callable[[Dict[str, Any]], bool]] = None
        self.default: Any = None
        self.has_default = False
        self.ignored = False

    def map_from(self, source_property: str) -> "PropertyMapping":
        """Read the value from a source key or dot-delimited path."""
        self.source_property = source_property
        return self

    def using(self, transformer: Any) -> "PropertyMapping":
        """
        Set the value transformer

        Args:
            transformer: Callable taking (value) or (value, source_data), an
                object exposing transform(value, source_data), or the name of
                a registered transformer such as "UPPERCASE"
        """
        self.transformer_name = None
        if isinstance(transformer, str) and default_registry.has(transformer):
            self.transformer_name = transformer.upper()
            transformer = default_registry.get(transformer)
        self.transformer = transformer
        return self

    def only_if(self, condition: Callable[[Dict[str, Any]], bool]) -> "PropertyMapping":
        """Gate transformation on a predicate over the source data."""
        self.condition = condition
        return self

    def default_value(self, value: Any) -> "PropertyMapping":
        """Value used when the pipeline produces None."""
        self.default = value
        self.has_default = True
        return self

    def ignore(self) -> "PropertyMapping":
        """Exclude the property regardless of other configuration."""
        self.ignored = True
        return self

    def as_collection(
        self,
        destination_type: TypeId,
        preserve_keys: bool = False,
        recursive: bool = False,
        item_transformer: Any = None,
    ) -> "PropertyMapping":
        """Map every element of the source value to destination_type."""
        return self.using(
            CollectionTransformer(
                destination_type,
                preserve_keys=preserve_keys,
                recursive=recursive,
                item_transformer=item_transformer,
            )
        )

    @property
    def is_mapped(self) -> bool:
        """True when a source property or transformer is configured."""
        return self.source_property is not None or self.transformer is not None

    def transform(self, raw_value: Any, source_data: Dict[str, Any]) -> Any:
        """
        Run the pipeline for one property

        Args:
            raw_value: Value read from the source (None when absent)
            source_data: Normalized source view

        Returns:
            Final value; None when ignored
        """
        if self.ignored:
            return None

        if self.condition is not None and not self.condition(source_data):
            value = None
        elif self.transformer is not None:
            value = call_transformer(self.transformer, raw_value, source_data)
        else:
            value = raw_value

        if value is None and self.has_default:
            value = self.default

        return value

    def copy(self) -> "PropertyMapping":
        return copy.copy(self)

    def is_serializable(self) -> bool:
        """Check if the mapping can be stored as JSON."""
        if self.condition is not None:
            return False
        if self.transformer is not None and self.transformer_name is None:
            return False
        if self.has_default:
            try:
                json.dumps(self.default)
            except (TypeError, ValueError):
                return False
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "source_property": self.source_property,
            "transformer": self.transformer_name,
            "default": self.default,
            "has_default": self.has_default,
            "ignored": self.ignored,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PropertyMapping":
        mapping = cls()
        mapping.source_property = data.get("source_property")
        if data.get("transformer"):
            mapping.using(data["transformer"])
        if data.get("has_default"):
            mapping.default_value(data.get("default"))
        mapping.ignored = bool(data.get("ignored"))
        return mapping

    def __repr__(self) -> str:
        parts = []
        if self.source_property is not None:
            parts.append(f"source={self.source_property!r}")
        if self.transformer is not None:
            parts.append(f"transformer={self.transformer_name or self.transformer!r}")
        if self.condition is not None:
            parts.append("conditional")
        if self.has_default:
            parts.append(f"default={self.default!r}")
        if self.ignored:
            parts.append("ignored")
        return f"PropertyMapping({', '.join(parts)})"
