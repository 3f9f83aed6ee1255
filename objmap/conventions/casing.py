"""Casing conventions: camelCase, PascalCase, snake_case and kebab-case."""
import re

from objmap.conventions.base import (
    CROSS_CONVENTION_CONFIDENCE,
    EXACT_CONFIDENCE,
    NO_CONFIDENCE,
    NamingConvention,
)


class CasingConvention(NamingConvention):
    """
    Shared scoring for the casing family

    Identical names score 1.0, as do two names of this convention with the
    same words. Same words across casing styles ("firstName" and
    "first_name") score 0.85. Anything else scores 0.0.
    """

    PATTERN: re.Pattern = re.compile(r"(?!)")

    def matches(self, name: str) -> bool:
        return bool(self.PATTERN.match(name))

    def calculate_match_confidence(self, source_name: str, destination_name: str) -> float:
        if source_name == destination_name:
            return EXACT_CONFIDENCE

        source_normalized = self.normalize(source_name)
        if not source_normalized or source_normalized != self.normalize(destination_name):
            return NO_CONFIDENCE

        if self.matches(source_name) and self.matches(destination_name):
            return EXACT_CONFIDENCE

        return CROSS_CONVENTION_CONFIDENCE


class CamelCaseConvention(CasingConvention):
    """firstName, userID"""

    name = "camel"
    PATTERN = re.compile(r"^[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)+$")

    def denormalize(self, normalized: str) -> str:
        words = normalized.split()
        if not words:
            return ""
        return words[0] + "".join(word.capitalize() for word in words[1:])


class PascalCaseConvention(CasingConvention):
    """FirstName"""

    name = "pascal"
    PATTERN = re.compile(r"^[A-Z][a-z0-9]+(?:[A-Z][a-z0-9]*)*$")

    def denormalize(self, normalized: str) -> str:
        return "".join(word.capitalize() for word in normalized.split())


class SnakeCaseConvention(CasingConvention):
    """first_name"""

    name = "snake"
    PATTERN = re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)*$")

    def denormalize(self, normalized: str) -> str:
        return "_".join(normalized.split())


class KebabCaseConvention(CasingConvention):
    """first-name"""

    name = "kebab"
    PATTERN = re.compile(r"^[a-z][a-z0-9]*(?:-[a-z0-9]+)*$")

    def denormalize(self, normalized: str) -> str:
        return "-".join(normalized.split())
