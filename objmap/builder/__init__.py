"""
Builder Module

Construction of destination objects from resolved property values:
- ObjectFactory: instantiate destination types or populate existing instances
"""

from .object_factory import ObjectFactory

__all__ = [
    "ObjectFactory",
]
