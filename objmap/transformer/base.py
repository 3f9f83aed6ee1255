"""Transformer shapes and dispatch."""
import inspect
from abc import ABC, abstractmethod
from typing import Any, Dict


class Transformer(ABC):
    """Object form of a transformer."""

    @abstractmethod
    def transform(self, value: Any, source_data: Dict[str, Any]) -> Any:
        """Transform a source value."""


def has_transform_method(candidate: Any) -> bool:
    return not inspect.isclass(candidate) and callable(getattr(candidate, "transform", None))


def is_transformer(candidate: Any) -> bool:
    """
    Check if a value is a recognized transformer shape

    Accepted shapes: plain functions, lambdas, bound or static methods,
    callable objects, conversion types such as int or Decimal, and objects
    exposing transform(value, source_data). A class defining transform()
    is rejected; an instance of it was meant.
    """
    if candidate is None:
        return False
    if inspect.isclass(candidate):
        return not hasattr(candidate, "transform")
    return has_transform_method(candidate) or callable(candidate)


def accepts_source_data(func: Any) -> bool:
    """
    Check if a callable takes source_data as a second argument

    True for *args callables and for callables with at least two required
    positional parameters; optional second parameters (str.strip's chars)
    do not count.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    required = 0
    for param in signature.parameters.values():
        if param.kind == param.VAR_POSITIONAL:
            return True
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD) and param.default is param.empty:
            required += 1
    return required >= 2


def call_transformer(transformer: Any, value: Any, source_data: Dict[str, Any]) -> Any:
    """
    Invoke a transformer of any accepted shape

    Exceptions raised by the transformer propagate to the caller.
    """
    if has_transform_method(transformer):
        return transformer.transform(value, source_data)
    if accepts_source_data(transformer):
        return transformer(value, source_data)
    return transformer(value)
