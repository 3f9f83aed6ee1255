"""
Introspection Module

Type and source introspection for the mapping engine:
- TypeIntrospector: ordered property lists and normalized source views
- Type identifier helpers (generic map sentinel, canonical names, imports)
- Declarative per-field configuration lives in objmap.introspection.declarative
"""

from .introspector import (
    GENERIC_MAP,
    TypeIntrospector,
    is_generic_map,
    resolve_path,
    resolve_type,
    source_type_of,
    type_name,
)

__all__ = [
    "GENERIC_MAP",
    "TypeIntrospector",
    "is_generic_map",
    "resolve_path",
    "resolve_type",
    "source_type_of",
    "type_name",
]
