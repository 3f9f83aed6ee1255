"""Accessor/verb prefix convention: getUserId, is_active, setName."""
from typing import List, Optional, Tuple

from objmap.conventions.base import EXACT_CONFIDENCE, NO_CONFIDENCE, NamingConvention, split_words

PREFIXED_CONFIDENCE = 0.9


class PrefixConvention(NamingConvention):
    """
    Names starting with a recognized verb prefix

    Both names prefixed with equal remainders score 1.0; one prefixed
    name whose remainder equals the other name scores 0.9; everything else
    scores 0.0 and is left to the other conventions.
    """

    name = "prefix"

    PREFIXES = (
        "get",
        "set",
        "is",
        "has",
        "find",
        "fetch",
        "retrieve",
        "update",
        "create",
        "delete",
        "remove",
        "build",
        "parse",
        "format",
        "convert",
        "validate",
        "make",
    )

    def split_prefix(self, name: str) -> Optional[Tuple[str, List[str]]]:
        """Return (prefix, remaining words), or None when not prefixed."""
        words = split_words(name)
        if len(words) < 2 or words[0] not in self.PREFIXES:
            return None
        return words[0], words[1:]

    def matches(self, name: str) -> bool:
        return self.split_prefix(name) is not None

    def normalize(self, name: str) -> str:
        split = self.split_prefix(name)
        if split is None:
            return super().normalize(name)
        return " ".join(split[1])

    def denormalize(self, normalized: str) -> str:
        words = normalized.split()
        return "get" + "".join(word.capitalize() for word in words)

    def calculate_match_confidence(self, source_name: str, destination_name: str) -> float:
        source_split = self.split_prefix(source_name)
        destination_split = self.split_prefix(destination_name)

        if source_split and destination_split:
            return EXACT_CONFIDENCE if source_split[1] == destination_split[1] else NO_CONFIDENCE

        if source_split:
            return PREFIXED_CONFIDENCE if source_split[1] == split_words(destination_name) else NO_CONFIDENCE

        if destination_split:
            return PREFIXED_CONFIDENCE if destination_split[1] == split_words(source_name) else NO_CONFIDENCE

        return NO_CONFIDENCE
