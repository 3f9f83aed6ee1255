"""
objmap - Object-to-object mapping

Maps objects, mappings and JSON into destination types through per-property
rules, declarative field options and naming-convention discovery:

```python
import objmap

mapper = objmap.ObjectMapper(objmap.MapperConfig.for_development())
mapper.create_map(UserEntity, UserDTO) \\
    .for_member("email", lambda m: m.map_from("contact.email"))

dto = mapper.map(entity, UserDTO)
```
"""

from .builder import ObjectFactory
from .cache import (
    CacheFactory,
    InMemoryMappingCache,
    MappingCache,
    PersistentMappingCache,
    SharedMappingCache,
)
from .config import CacheType, MapperConfig
from .conventions import (
    AbbreviationConvention,
    CamelCaseConvention,
    ConventionRegistry,
    HungarianNotationConvention,
    KebabCaseConvention,
    NamingConvention,
    PascalCaseConvention,
    PrefixConvention,
    SnakeCaseConvention,
)
from .exceptions import (
    DestinationTypeError,
    MappingConfigurationError,
    MappingError,
    UnsupportedSourceError,
)
from .functions import configure_mapper, get_mapper, map, map_array, map_to, reset_mapper
from .introspection import GENERIC_MAP, TypeIntrospector
from .introspection.declarative import DeclarativeReader, field_options, mapping_field
from .mapper.bidirectional import BidirectionalTypeMapping
from .mapper.convention_mapper import ConventionMapper, ConventionMatch
from .mapper.object_mapper import ObjectMapper
from .mapper.plan import MappingPlan
from .mapper.profile import MappingProfile
from .mapper.property_mapping import PropertyMapping
from .mapper.storage import MappingStorage
from .mapper.type_mapping import TypeMapping
from .transformer import CollectionTransformer, DateTimeTransformer, Transformer, TransformerRegistry

__version__ = "0.1.0"

__all__ = [
    "ObjectMapper",
    "MapperConfig",
    "CacheType",
    "MappingProfile",
    "TypeMapping",
    "BidirectionalTypeMapping",
    "PropertyMapping",
    "MappingStorage",
    "MappingPlan",
    "ConventionMapper",
    "ConventionMatch",
    "ConventionRegistry",
    "NamingConvention",
    "CamelCaseConvention",
    "PascalCaseConvention",
    "SnakeCaseConvention",
    "KebabCaseConvention",
    "PrefixConvention",
    "AbbreviationConvention",
    "HungarianNotationConvention",
    "MappingCache",
    "InMemoryMappingCache",
    "SharedMappingCache",
    "PersistentMappingCache",
    "CacheFactory",
    "TypeIntrospector",
    "DeclarativeReader",
    "ObjectFactory",
    "Transformer",
    "CollectionTransformer",
    "DateTimeTransformer",
    "TransformerRegistry",
    "MappingError",
    "MappingConfigurationError",
    "UnsupportedSourceError",
    "DestinationTypeError",
    "GENERIC_MAP",
    "field_options",
    "mapping_field",
    "map",
    "map_array",
    "map_to",
    "configure_mapper",
    "reset_mapper",
    "get_mapper",
]
