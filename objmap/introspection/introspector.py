"""
Type Introspector - Property enumeration and source normalization

Supports:
- Ordered public property lists for dataclasses, namedtuples, annotated
  classes, __init__ signatures, __slots__ and properties
- Type identifiers given as classes, dotted import paths or the generic
  map sentinel ("array")
- Normalizing mappings, JSON strings and objects into one key/value view
- Dot-path lookups into nested mappings, sequences and objects
"""

import dataclasses
import importlib
import inspect
import json
import logging
import threading
from collections.abc import Mapping
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union, get_origin

from objmap.exceptions import UnsupportedSourceError

logger = logging.getLogger(__name__)

GENERIC_MAP = "array"
GENERIC_MAP_ALIASES = ("array", "dict", "mapping")

TypeId = Union[type, str]

_SCALAR_TYPES = (int, float, complex, bool, list, tuple, set, frozenset, type(None))


def is_generic_map(type_id: Any) -> bool:
    """Check if a type identifier denotes "any associative map"."""
    if isinstance(type_id, str):
        return type_id.lower() in GENERIC_MAP_ALIASES
    return inspect.isclass(type_id) and issubclass(type_id, Mapping)


def type_name(type_id: Any) -> str:
    """Canonical name used to key storage, caches and error messages."""
    if is_generic_map(type_id):
        return GENERIC_MAP
    if isinstance(type_id, str):
        return type_id
    if inspect.isclass(type_id):
        if type_id.__module__ == "builtins":
            return type_id.__qualname__
        return f"{type_id.__module__}.{type_id.__qualname__}"
    raise TypeError(f"Invalid type identifier: {type_id!r}")


def resolve_type(type_id: Any) -> Optional[type]:
    """
    Resolve a type identifier to a class

    Args:
        type_id: Class, generic map sentinel, "package.module.Class" or
            "package.module:Class"

    Returns:
        The class, ``dict`` for the generic map sentinel, or None when the
        identifier cannot be resolved
    """
    if is_generic_map(type_id):
        return dict
    if inspect.isclass(type_id):
        return type_id
    if not isinstance(type_id, str):
        return None

    if ":" in type_id:
        module_name, _, qualname = type_id.partition(":")
    elif "." in type_id:
        module_name, _, qualname = type_id.rpartition(".")
    else:
        return None

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError:
        logger.debug(f"Could not import module for type '{type_id}'")
        return None

    for part in qualname.split("."):
        target = getattr(target, part, None)
        if target is None:
            return None

    return target if inspect.isclass(target) else None


def source_type_of(source: Any) -> TypeId:
    """Type identifier used to look up the plan for a source value."""
    if isinstance(source, (Mapping, str, bytes)):
        return GENERIC_MAP
    return type(source)


def is_namedtuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def resolve_path(data: Any, path: str) -> Tuple[bool, Any]:
    """
    Look up a key or dot-delimited path

    Args:
        data: Normalized source view (or any nested value)
        path: "email" or "customer.contact_info.email"

    Returns:
        (found, value) - found is False when any segment is missing
    """
    value = data
    for segment in path.split("."):
        if isinstance(value, Mapping):
            if segment not in value:
                return False, None
            value = value[segment]
        elif isinstance(value, (list, tuple)) and segment.lstrip("-").isdigit():
            index = int(segment)
            if not -len(value) <= index < len(value):
                return False, None
            value = value[index]
        elif value is None or isinstance(value, (str, bytes, int, float, bool)):
            return False, None
        elif hasattr(value, segment):
            value = getattr(value, segment)
        else:
            return False, None
    return True, value


class TypeIntrospector:
    """Lists properties of types and normalizes source values."""

    def __init__(self):
        """Initialize introspector with an empty property cache."""
        self._properties: Dict[type, List[str]] = {}
        self._lock = threading.RLock()

    def list_properties(self, type_id: TypeId) -> List[str]:
        """
        Ordered public property names of a type

        Args:
            type_id: Type identifier

        Returns:
            Property names in declaration order; empty for generic maps and
            unresolvable identifiers
        """
        cls = resolve_type(type_id)
        if cls is None or is_generic_map(cls):
            return []

        with self._lock:
            if cls not in self._properties:
                self._properties[cls] = self._collect_properties(cls)
                logger.debug(f"Introspected {type_name(cls)}: {self._properties[cls]}")
            return list(self._properties[cls])

    def has_property(self, type_id: TypeId, name: str) -> bool:
        return name in self.list_properties(type_id)

    def is_writable(self, cls: type, name: str) -> bool:
        """Check that a property can be assigned on instances of cls."""
        for klass in cls.__mro__:
            attr = vars(klass).get(name)
            if isinstance(attr, property):
                return attr.fset is not None
        return True

    def clear(self) -> None:
        with self._lock:
            self._properties.clear()

    @staticmethod
    def _collect_properties(cls: type) -> List[str]:
        names: List[str] = []

        def add(name: str) -> None:
            if not name.startswith("_") and name not in names:
                names.append(name)

        if dataclasses.is_dataclass(cls):
            for field in dataclasses.fields(cls):
                add(field.name)
        elif is_namedtuple(cls):
            for name in cls._fields:
                add(name)
        else:
            hierarchy = [klass for klass in reversed(cls.__mro__) if klass is not object]

            for klass in hierarchy:
                for name, hint in inspect.get_annotations(klass).items():
                    if not _is_class_var(hint):
                        add(name)

            try:
                signature = inspect.signature(cls.__init__)
            except (TypeError, ValueError):
                signature = None

            if signature is not None:
                for index, param in enumerate(signature.parameters.values()):
                    if index == 0 or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                        continue
                    add(param.name)

            for klass in hierarchy:
                slots = vars(klass).get("__slots__", ())
                if isinstance(slots, str):
                    slots = (slots,)
                for name in slots:
                    add(name)

        for klass in reversed(cls.__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, property):
                    add(name)

        return names

    def normalize(self, source: Any, destination_type: Optional[str] = None) -> Dict[str, Any]:
        """
        Reduce a source value to a key/value view

        Args:
            source: Mapping, JSON object string, dataclass, namedtuple or object
            destination_type: Destination name, used for error context only

        Returns:
            Shallow dictionary of the source's public values

        Raises:
            UnsupportedSourceError: If the source cannot be viewed as key/value
        """
        if isinstance(source, Mapping):
            return dict(source)

        if isinstance(source, (str, bytes)):
            try:
                data = json.loads(source)
            except ValueError as e:
                raise UnsupportedSourceError(
                    f"Source string is not valid JSON: {e}",
                    source_type="str",
                    destination_type=destination_type,
                ) from e
            if not isinstance(data, dict):
                raise UnsupportedSourceError(
                    f"JSON source must be an object, got {type(data).__name__}",
                    source_type="str",
                    destination_type=destination_type,
                )
            return data

        if isinstance(source, _SCALAR_TYPES) and not is_namedtuple(type(source)):
            raise UnsupportedSourceError.for_value(source, destination_type)

        if dataclasses.is_dataclass(source):
            return {field.name: getattr(source, field.name) for field in dataclasses.fields(source)}

        if is_namedtuple(type(source)):
            return dict(source._asdict())

        data: Dict[str, Any] = {}
        if hasattr(source, "__dict__"):
            data = {key: value for key, value in vars(source).items() if not key.startswith("_")}

        for name in self.list_properties(type(source)):
            if name not in data and hasattr(source, name):
                data[name] = getattr(source, name)

        if not data and not hasattr(source, "__dict__") and not hasattr(type(source), "__slots__"):
            raise UnsupportedSourceError.for_value(source, destination_type)

        return data


def _is_class_var(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is ClassVar or get_origin(hint) is ClassVar
