"""Exceptions raised by the mapping engine."""
from typing import Any, Dict, Optional


class MappingError(Exception):
    """Base error for every mapping failure.

    Carries the type pair and, where relevant, the destination property so
    that the message is actionable without a debugger.
    """

    def __init__(
        self,
        message: str,
        source_type: Optional[str] = None,
        destination_type: Optional[str] = None,
        property_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source_type = source_type
        self.destination_type = destination_type
        self.property_name = property_name
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "source_type": self.source_type,
            "destination_type": self.destination_type,
            "property_name": self.property_name,
            "context": self.context,
        }


class MappingConfigurationError(MappingError):
    """Invalid mapping configuration, raised at seal time or on mutation after seal."""

    def __init__(self, message: str, rule: str = "configuration", **kwargs):
        super().__init__(message, **kwargs)
        self.rule = rule

    @classmethod
    def unknown_destination_type(cls, source_type: str, destination_type: str) -> "MappingConfigurationError":
        return cls(
            f"Destination type '{destination_type}' could not be resolved "
            f"(mapping {source_type} -> {destination_type})",
            rule="destination_type_exists",
            source_type=source_type,
            destination_type=destination_type,
        )

    @classmethod
    def unknown_destination_property(
        cls, source_type: str, destination_type: str, property_name: str
    ) -> "MappingConfigurationError":
        return cls(
            f"Property '{property_name}' does not exist on destination type '{destination_type}'",
            rule="destination_property_exists",
            source_type=source_type,
            destination_type=destination_type,
            property_name=property_name,
        )

    @classmethod
    def unknown_source_property(
        cls, source_type: str, destination_type: str, property_name: str, source_property: str
    ) -> "MappingConfigurationError":
        return cls(
            f"Source property '{source_property}' mapped to '{property_name}' "
            f"does not exist on source type '{source_type}'",
            rule="source_property_exists",
            source_type=source_type,
            destination_type=destination_type,
            property_name=property_name,
            context={"source_property": source_property},
        )

    @classmethod
    def mapped_and_ignored(
        cls, source_type: str, destination_type: str, property_name: str
    ) -> "MappingConfigurationError":
        return cls(
            f"Property '{property_name}' on '{destination_type}' is both mapped and ignored",
            rule="mapped_and_ignored",
            source_type=source_type,
            destination_type=destination_type,
            property_name=property_name,
        )

    @classmethod
    def invalid_transformer(
        cls, source_type: str, destination_type: str, property_name: str, transformer: Any
    ) -> "MappingConfigurationError":
        return cls(
            f"Transformer for '{property_name}' on '{destination_type}' must be callable "
            f"or expose transform(value, source_data), got {type(transformer).__name__}",
            rule="transformer_shape",
            source_type=source_type,
            destination_type=destination_type,
            property_name=property_name,
            context={"transformer": repr(transformer)},
        )

    @classmethod
    def already_sealed(
        cls, source_type: str, destination_type: str, property_name: Optional[str] = None
    ) -> "MappingConfigurationError":
        target = f" property '{property_name}'" if property_name else ""
        return cls(
            f"Cannot configure{target} on sealed mapping {source_type} -> {destination_type}",
            rule="sealed",
            source_type=source_type,
            destination_type=destination_type,
            property_name=property_name,
        )


class UnsupportedSourceError(MappingError):
    """Source value cannot be normalized into a key/value view."""

    @classmethod
    def for_value(cls, source: Any, destination_type: Optional[str] = None) -> "UnsupportedSourceError":
        return cls(
            f"Unsupported source type: {type(source).__name__}",
            source_type=type(source).__name__,
            destination_type=destination_type,
        )


class DestinationTypeError(MappingError):
    """Destination type cannot be resolved or instantiated."""

    @classmethod
    def not_found(cls, destination_type: str) -> "DestinationTypeError":
        return cls(
            f"Destination type '{destination_type}' not found",
            destination_type=destination_type,
        )

    @classmethod
    def instantiation_failed(cls, destination_type: str, error: Exception) -> "DestinationTypeError":
        return cls(
            f"Could not instantiate '{destination_type}': {error}",
            destination_type=destination_type,
            context={"cause": type(error).__name__},
        )
