"""
Declarative Mapping - Per-field configuration on dataclass destinations

Mapping options live in dataclass field metadata and are turned into the
same PropertyMapping objects the fluent API produces:

```python
@dataclass
class UserDTO:
    id: int = mapping_field(source="user_id")
    email: str = mapping_field(source="contact.email", using=str.lower)
    status: str = mapping_field(default_value="active")
    password: str = mapping_field(ignore=True, default="")
    roles: list = mapping_field(collection=RoleDTO, default_factory=list)
```
"""

import dataclasses
import logging
from typing import Any, Callable, Dict, Optional

from objmap.introspection.introspector import TypeId, resolve_type
from objmap.mapper.property_mapping import PropertyMapping

logger = logging.getLogger(__name__)

METADATA_KEY = "objmap"

_UNSET = object()


def field_options(
    source: Optional[str] = None,
    using: Any = None,
    when: Optional[Callable[[Dict[str, Any]], bool]] = None,
    default_value: Any = _UNSET,
    ignore: bool = False,
    collection: Optional[TypeId] = None,
    preserve_keys: bool = False,
) -> Dict[str, Any]:
    """
    Build field metadata holding mapping options

    Args:
        source: Source key or dot path
        using: Transformer (callable, transform() object or registered name)
        when: Condition over the source data
        default_value: Value used when the pipeline yields None
        ignore: Skip the field when mapping
        collection: Element type when the field holds a mapped collection
        preserve_keys: Keep collection keys

    Returns:
        Metadata dictionary for dataclasses.field(metadata=...)
    """
    options: Dict[str, Any] = {}
    if source is not None:
        options["source"] = source
    if using is not None:
        options["using"] = using
    if when is not None:
        options["when"] = when
    if default_value is not _UNSET:
        options["default_value"] = default_value
    if ignore:
        options["ignore"] = True
    if collection is not None:
        options["collection"] = collection
        options["preserve_keys"] = preserve_keys
    return {METADATA_KEY: options}


def mapping_field(
    *,
    source: Optional[str] = None,
    using: Any = None,
    when: Optional[Callable[[Dict[str, Any]], bool]] = None,
    default_value: Any = _UNSET,
    ignore: bool = False,
    collection: Optional[TypeId] = None,
    preserve_keys: bool = False,
    **field_kwargs,
) -> Any:
    """dataclasses.field() carrying mapping options; other kwargs pass through."""
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata.update(
        field_options(
            source=source,
            using=using,
            when=when,
            default_value=default_value,
            ignore=ignore,
            collection=collection,
            preserve_keys=preserve_keys,
        )
    )
    return dataclasses.field(metadata=metadata, **field_kwargs)


class DeclarativeReader:
    """Reads mapping options declared on dataclass fields."""

    def read(self, destination_type: TypeId) -> Dict[str, PropertyMapping]:
        """
        Build PropertyMappings from field metadata

        Args:
            destination_type: Destination type identifier

        Returns:
            Fresh mappings keyed by field name; empty for non-dataclasses
        """
        cls = resolve_type(destination_type)
        if cls is None or not dataclasses.is_dataclass(cls):
            return {}

        mappings = {}
        for field in dataclasses.fields(cls):
            options = field.metadata.get(METADATA_KEY)
            if options:
                mappings[field.name] = self.build_mapping(options)

        if mappings:
            logger.debug(f"Read {len(mappings)} declarative mappings from {cls.__name__}")
        return mappings

    @staticmethod
    def build_mapping(options: Dict[str, Any]) -> PropertyMapping:
        mapping = PropertyMapping()
        if "source" in options:
            mapping.map_from(options["source"])
        if "collection" in options:
            mapping.as_collection(
                options["collection"],
                preserve_keys=options.get("preserve_keys", False),
                item_transformer=options.get("using"),
            )
        elif "using" in options:
            mapping.using(options["using"])
        if "when" in options:
            mapping.only_if(options["when"])
        if "default_value" in options:
            mapping.default_value(options["default_value"])
        if options.get("ignore"):
            mapping.ignore()
        return mapping
