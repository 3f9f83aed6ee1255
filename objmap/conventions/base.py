"""Naming convention base class and word splitting."""
import re
from abc import ABC, abstractmethod
from typing import List

# Lowercase/digit followed by uppercase, or the last capital of an acronym
_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[\s_\-.]+")

EXACT_CONFIDENCE = 1.0
CROSS_CONVENTION_CONFIDENCE = 0.85
NO_CONFIDENCE = 0.0


def split_words(name: str) -> List[str]:
    """
    Split a property name into lowercase words

    Handles separators and casing boundaries, including acronyms:
    "firstName" -> ["first", "name"], "HTTPServer" -> ["http", "server"],
    "user_ID" -> ["user", "id"].
    """
    words: List[str] = []
    for part in _SEPARATOR_RE.split(name.strip()):
        if part:
            words.extend(word.lower() for word in _BOUNDARY_RE.split(part) if word)
    return words


class NamingConvention(ABC):
    """
    Stateless strategy for one property naming style

    normalize() reduces a name to lowercase space-separated words and
    denormalize() renders such words back in this convention's style.
    """

    name: str = ""

    @abstractmethod
    def matches(self, name: str) -> bool:
        """Check if a name looks like this convention."""

    def normalize(self, name: str) -> str:
        return " ".join(split_words(name))

    @abstractmethod
    def denormalize(self, normalized: str) -> str:
        """Render normalized words in this convention."""

    @abstractmethod
    def calculate_match_confidence(self, source_name: str, destination_name: str) -> float:
        """Confidence in [0, 1] that two names denote the same property."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
