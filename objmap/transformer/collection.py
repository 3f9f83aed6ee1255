"""Collection transformer - maps every element of an iterable."""
import copy
import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

from objmap.exceptions import MappingConfigurationError
from objmap.introspection.introspector import TypeId, resolve_type, type_name
from objmap.transformer.base import Transformer, call_transformer

logger = logging.getLogger(__name__)


class CollectionTransformer(Transformer):
    """
    Maps each element of a collection to a destination type

    Usage:
    ```python
    mapper.create_map(OrderEntity, OrderDTO).for_member(
        "items", lambda m: m.map_from("line_items").as_collection(LineItemDTO)
    )
    ```

    Mapping-shaped input is treated as a keyed collection. With
    ``preserve_keys`` the output keeps the keys (a list input is keyed by
    index); otherwise the output is a re-indexed list.
    """

    def __init__(
        self,
        destination_type: TypeId,
        mapper: Any = None,
        preserve_keys: bool = False,
        recursive: bool = False,
        item_transformer: Any = None,
    ):
        """
        Initialize CollectionTransformer

        Args:
            destination_type: Element destination type
            mapper: Mapper used for element mapping (bound at plan resolution
                when omitted)
            preserve_keys: Keep input keys in the output
            recursive: Descend into nested lists of the same shape
            item_transformer: Transformer applied to each element instead of
                the mapper
        """
        self.destination_type = destination_type
        self.mapper = mapper
        self.preserve_keys = preserve_keys
        self.recursive = recursive
        self.item_transformer = item_transformer

    @property
    def is_bound(self) -> bool:
        return self.mapper is not None or self.item_transformer is not None

    def bind(self, mapper: Any) -> "CollectionTransformer":
        """Return a copy bound to mapper, or self if already bound."""
        if self.is_bound:
            return self
        bound = copy.copy(self)
        bound.mapper = mapper
        return bound

    def transform(self, value: Any, source_data: Dict[str, Any]) -> Any:
        if value is None:
            return None

        if isinstance(value, Mapping):
            items = list(value.items())
        elif isinstance(value, (str, bytes)):
            raise TypeError(f"Collection value must be iterable, got {type(value).__name__}")
        else:
            items = list(enumerate(value))

        if self.preserve_keys:
            return {key: self._transform_item(item, source_data) for key, item in items}
        return [self._transform_item(item, source_data) for _, item in items]

    def _transform_item(self, item: Any, source_data: Dict[str, Any]) -> Any:
        if self.recursive and isinstance(item, (list, tuple)):
            return self.transform(item, source_data)

        if self.item_transformer is not None:
            return call_transformer(self.item_transformer, item, source_data)

        if item is None:
            return None

        destination = resolve_type(self.destination_type)
        if destination is not None and destination is not dict and isinstance(item, destination):
            return item

        if self.mapper is None:
            raise MappingConfigurationError(
                f"Collection transformer for '{type_name(self.destination_type)}' is not bound to a mapper",
                rule="transformer_shape",
                destination_type=type_name(self.destination_type),
            )

        return self.mapper.map(item, self.destination_type)

    def __repr__(self) -> str:
        return (
            f"CollectionTransformer({type_name(self.destination_type)!r}, "
            f"preserve_keys={self.preserve_keys}, recursive={self.recursive})"
        )


def collection_of(
    destination_type: TypeId,
    preserve_keys: bool = False,
    recursive: bool = False,
    item_transformer: Optional[Any] = None,
) -> CollectionTransformer:
    """Shortcut for an unbound CollectionTransformer."""
    return CollectionTransformer(
        destination_type,
        preserve_keys=preserve_keys,
        recursive=recursive,
        item_transformer=item_transformer,
    )
