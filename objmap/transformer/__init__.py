"""
Transformer Module

Value transformers usable in PropertyMapping.using():
- Transformer: object form exposing transform(value, source_data)
- CollectionTransformer: element-wise mapping of collections
- DateTimeTransformer: datetime <-> string conversion
- TransformerRegistry: named transformers ("UPPERCASE", "TRIM", ...)
"""

from .base import Transformer, call_transformer, is_transformer
from .collection import CollectionTransformer, collection_of
from .dates import DateTimeTransformer
from .registry import TransformerRegistry, default_registry

__all__ = [
    "Transformer",
    "call_transformer",
    "is_transformer",
    "CollectionTransformer",
    "collection_of",
    "DateTimeTransformer",
    "TransformerRegistry",
    "default_registry",
]
