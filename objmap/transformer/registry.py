"""Transformer registry."""
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional

from objmap.transformer.base import call_transformer


class TransformerRegistry:
    """Registry of named transformers usable as ``using("UPPERCASE")``."""

    def __init__(self):
        """Initialize registry."""
        self.transformers: Dict[str, Callable] = {
            "NONE": lambda x: x,
            "UPPERCASE": lambda x: str(x).upper() if x else x,
            "LOWERCASE": lambda x: str(x).lower() if x else x,
            "TRIM": lambda x: str(x).strip() if x else x,
            "STRING": lambda x: str(x) if x is not None else x,
            "INTEGER": self._to_int,
            "FLOAT": self._to_float,
            "DECIMAL": self._to_decimal,
            "BOOLEAN": self._to_bool,
            "ISO_FORMAT": self._iso_format,
        }

    def register(self, name: str, transformer: Callable) -> "TransformerRegistry":
        """Register (or replace) a named transformer."""
        self.transformers[name.upper()] = transformer
        return self

    def has(self, name: str) -> bool:
        return name.upper() in self.transformers

    def get(self, name: str) -> Optional[Callable]:
        """Get transformer by name, None when unknown."""
        return self.transformers.get(name.upper())

    def names(self) -> List[str]:
        return sorted(self.transformers)

    def transform(self, value: Any, transformer_name: str, source_data: Optional[Dict[str, Any]] = None) -> Any:
        """Apply transformation."""
        transformer = self.get(transformer_name)
        if transformer is None:
            raise KeyError(f"Unknown transformer: {transformer_name}")
        return call_transformer(transformer, value, source_data or {})

    @staticmethod
    def _to_int(value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        return int(value)

    @staticmethod
    def _to_float(value: Any) -> Optional[float]:
        if value is None or value == "":
            return None
        return float(value)

    @staticmethod
    def _to_decimal(value: Any) -> Optional[Decimal]:
        if value is None or value == "":
            return None
        try:
            return Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal value: {value!r}") from e

    @staticmethod
    def _to_bool(value: Any) -> Optional[bool]:
        if value is None:
            return None
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "y", "on")
        return bool(value)

    @staticmethod
    def _iso_format(value: Any) -> Any:
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        return value


# Shared registry used to resolve transformer names
default_registry = TransformerRegistry()
