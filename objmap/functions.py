"""Convenience functions backed by the global ObjectMapper."""
from typing import Any, Callable, Iterable, Union

from objmap.config import MapperConfig
from objmap.introspection.introspector import TypeId
from objmap.mapper.object_mapper import ObjectMapper


def get_mapper() -> ObjectMapper:
    """Global mapper (created on first use)."""
    return ObjectMapper.get_instance()


def map(source: Any, destination_type: TypeId) -> Any:  # noqa: A001
    """Map source to a new destination_type instance."""
    return ObjectMapper.get_instance().map(source, destination_type)


def map_array(sources: Iterable[Any], destination_type: TypeId):
    """Map every source to destination_type."""
    return ObjectMapper.get_instance().map_array(sources, destination_type)


def map_to(source: Any, destination: Any) -> Any:
    """Map source onto an existing destination instance."""
    return ObjectMapper.get_instance().map_to(source, destination)


def configure_mapper(configuration: Union[MapperConfig, Callable[[ObjectMapper], Any]]) -> ObjectMapper:
    """Replace or adjust the global mapper."""
    return ObjectMapper.configure(configuration)


def reset_mapper() -> None:
    """Drop the global mapper and the shared plan cache."""
    ObjectMapper.reset()
