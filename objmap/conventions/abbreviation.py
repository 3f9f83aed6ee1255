"""Abbreviation convention: dob vs date_of_birth, userId vs user_identifier."""
from typing import List

from objmap.conventions.base import NO_CONFIDENCE, NamingConvention, split_words
from objmap.conventions.casing import CamelCaseConvention

EXPANDED_CONFIDENCE = 0.8
PARTIAL_CONFIDENCE_CAP = 0.79


class AbbreviationConvention(NamingConvention):
    """
    Expands common abbreviations before comparing words

    Only scores pairs where at least one name contains a known
    abbreviation. Equal expanded word sets score 0.8; partial overlap
    scores 2 * common / (|A| + |B|), capped below 0.8.
    """

    name = "abbreviation"

    ABBREVIATIONS = {
        "id": "identifier",
        "desc": "description",
        "addr": "address",
        "dob": "date of birth",
        "qty": "quantity",
        "num": "number",
        "tel": "telephone",
        "amt": "amount",
        "ctx": "context",
        "pwd": "password",
        "img": "image",
        "src": "source",
        "dest": "destination",
        "msg": "message",
        "cfg": "configuration",
        "req": "request",
        "res": "response",
        "tmp": "temporary",
        "usr": "user",
    }

    def __init__(self, extra_abbreviations=None):
        self.abbreviations = dict(self.ABBREVIATIONS)
        if extra_abbreviations:
            self.abbreviations.update({key.lower(): value.lower() for key, value in extra_abbreviations.items()})

    def has_abbreviation(self, name: str) -> bool:
        return any(word in self.abbreviations for word in split_words(name))

    def expand(self, name: str) -> List[str]:
        """Words of name with every abbreviation expanded."""
        expanded: List[str] = []
        for word in split_words(name):
            expanded.extend(self.abbreviations.get(word, word).split())
        return expanded

    def matches(self, name: str) -> bool:
        """Bare abbreviations or underscore-delimited ones: dob, user_id, id_card."""
        return any(part in self.abbreviations for part in name.lower().split("_"))

    def normalize(self, name: str) -> str:
        return " ".join(self.expand(name))

    def denormalize(self, normalized: str) -> str:
        reverse = {expansion: abbreviation for abbreviation, expansion in self.abbreviations.items()}
        text = " ".join(normalized.split())
        for expansion in sorted(reverse, key=len, reverse=True):
            text = f" {text} ".replace(f" {expansion} ", f" {reverse[expansion]} ").strip()
        return CamelCaseConvention().denormalize(text)

    def calculate_match_confidence(self, source_name: str, destination_name: str) -> float:
        if not (self.has_abbreviation(source_name) or self.has_abbreviation(destination_name)):
            return NO_CONFIDENCE

        source_words = set(self.expand(source_name))
        destination_words = set(self.expand(destination_name))
        if not source_words or not destination_words:
            return NO_CONFIDENCE

        if source_words == destination_words:
            return EXPANDED_CONFIDENCE

        common = len(source_words & destination_words)
        if common == 0:
            return NO_CONFIDENCE

        return min(2 * common / (len(source_words) + len(destination_words)), PARTIAL_CONFIDENCE_CAP)
