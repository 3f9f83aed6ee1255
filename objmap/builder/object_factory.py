"""
Object Factory - Builds destination instances from resolved values

Supports:
- dataclasses (frozen included), namedtuples and plain classes
- Constructor arguments matched by name; required arguments without a
  value receive None
- Remaining values assigned as attributes (read-only properties skipped)
- Populating existing instances for map_to()
"""

import dataclasses
import inspect
import logging
from typing import Any, Dict

from objmap.exceptions import DestinationTypeError
from objmap.introspection.introspector import TypeIntrospector, is_namedtuple, type_name

logger = logging.getLogger(__name__)


class ObjectFactory:
    """Creates and populates destination objects."""

    def __init__(self, introspector: TypeIntrospector = None):
        self.introspector = introspector or TypeIntrospector()

    def instantiate(self, cls: type, values: Dict[str, Any]) -> Any:
        """
        Create an instance of cls

        Args:
            cls: Destination class (dict returns a plain dictionary)
            values: Resolved property -> value map

        Returns:
            New destination instance

        Raises:
            DestinationTypeError: If the constructor rejects the arguments
        """
        if cls is dict:
            return dict(values)

        kwargs, remaining = self._constructor_arguments(cls, values)

        try:
            instance = cls(**kwargs)
        except TypeError as e:
            raise DestinationTypeError.instantiation_failed(type_name(cls), e) from e

        return self._assign(instance, remaining)

    def populate(self, instance: Any, values: Dict[str, Any]) -> Any:
        """
        Write values onto an existing instance

        Frozen dataclasses and namedtuples cannot be mutated; a modified
        copy is returned for them instead.
        """
        if isinstance(instance, dict):
            instance.update(values)
            return instance

        cls = type(instance)

        if is_namedtuple(cls):
            return instance._replace(**{k: v for k, v in values.items() if k in cls._fields})

        if dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen:
            init_fields = {f.name for f in dataclasses.fields(cls) if f.init}
            return dataclasses.replace(instance, **{k: v for k, v in values.items() if k in init_fields})

        return self._assign(instance, values)

    def _constructor_arguments(self, cls: type, values: Dict[str, Any]):
        if dataclasses.is_dataclass(cls):
            kwargs = {}
            for field in dataclasses.fields(cls):
                if not field.init:
                    continue
                if field.name in values:
                    kwargs[field.name] = values[field.name]
                elif field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                    kwargs[field.name] = None
            remaining = {k: v for k, v in values.items() if k not in kwargs}
            return kwargs, remaining

        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError):
            return {}, dict(values)

        kwargs = {}
        for param in signature.parameters.values():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD, param.POSITIONAL_ONLY):
                continue
            if param.name in values:
                kwargs[param.name] = values[param.name]
            elif param.default is param.empty:
                kwargs[param.name] = None

        remaining = {k: v for k, v in values.items() if k not in kwargs}
        return kwargs, remaining

    def _assign(self, instance: Any, values: Dict[str, Any]) -> Any:
        cls = type(instance)
        frozen = dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen

        for name, value in values.items():
            if not self.introspector.is_writable(cls, name):
                logger.debug(f"Skipping read-only property {type_name(cls)}.{name}")
                continue
            if frozen:
                object.__setattr__(instance, name, value)
            else:
                setattr(instance, name, value)

        return instance
