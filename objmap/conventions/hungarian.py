"""Hungarian notation: strName, bActive, arrItems."""
import re
from typing import Optional

from objmap.conventions.base import CROSS_CONVENTION_CONFIDENCE, NO_CONFIDENCE, NamingConvention, split_words

# Longer prefixes first so "str" wins over "s"
_TYPE_PREFIXES = ("str", "int", "bool", "flt", "arr", "obj", "n", "b", "s", "a", "i", "f", "o")
_HUNGARIAN_RE = re.compile(r"^(?:%s)(?=[A-Z])" % "|".join(_TYPE_PREFIXES))


class HungarianNotationConvention(NamingConvention):
    """
    Type-tagged names

    Not registered by default; add it with
    ``mapper.register_convention(HungarianNotationConvention())``.
    A tagged name whose untagged words equal the other name's words
    scores 0.85.
    """

    name = "hungarian"

    def strip_type_prefix(self, name: str) -> Optional[str]:
        match = _HUNGARIAN_RE.match(name)
        if match is None:
            return None
        return name[match.end():]

    def matches(self, name: str) -> bool:
        return self.strip_type_prefix(name) is not None

    def normalize(self, name: str) -> str:
        stripped = self.strip_type_prefix(name)
        return " ".join(split_words(stripped if stripped is not None else name))

    def denormalize(self, normalized: str) -> str:
        return "str" + "".join(word.capitalize() for word in normalized.split())

    def calculate_match_confidence(self, source_name: str, destination_name: str) -> float:
        if not (self.matches(source_name) or self.matches(destination_name)):
            return NO_CONFIDENCE
        source_words = self.normalize(source_name)
        if source_words and source_words == self.normalize(destination_name):
            return CROSS_CONVENTION_CONFIDENCE
        return NO_CONFIDENCE
