"""Ordered registry of naming conventions."""
import threading
from typing import Dict, List, Optional

from objmap.conventions.abbreviation import AbbreviationConvention
from objmap.conventions.base import NamingConvention
from objmap.conventions.casing import (
    CamelCaseConvention,
    KebabCaseConvention,
    PascalCaseConvention,
    SnakeCaseConvention,
)
from objmap.conventions.prefix import PrefixConvention


class ConventionRegistry:
    """
    Conventions keyed by name, in detection priority order

    The defaults are registered most specific first (prefix, abbreviation)
    so that "getUserId" is not read as plain camelCase. Registering a
    convention under an existing name replaces it in place; new names are
    appended.
    """

    def __init__(self, include_defaults: bool = True):
        self._conventions: Dict[str, NamingConvention] = {}
        self._lock = threading.RLock()

        if include_defaults:
            for convention in self.default_conventions():
                self.register(convention)

    @staticmethod
    def default_conventions() -> List[NamingConvention]:
        return [
            PrefixConvention(),
            AbbreviationConvention(),
            CamelCaseConvention(),
            PascalCaseConvention(),
            SnakeCaseConvention(),
            KebabCaseConvention(),
        ]

    def register(self, convention: NamingConvention) -> "ConventionRegistry":
        if not convention.name:
            raise ValueError(f"Convention {convention!r} has no name")
        with self._lock:
            self._conventions[convention.name] = convention
        return self

    def get(self, name: str) -> Optional[NamingConvention]:
        return self._conventions.get(name)

    def all(self) -> List[NamingConvention]:
        with self._lock:
            return list(self._conventions.values())

    def names(self) -> List[str]:
        with self._lock:
            return list(self._conventions)

    def __len__(self) -> int:
        return len(self._conventions)

    def __iter__(self):
        return iter(self.all())
