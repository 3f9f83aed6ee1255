"""
Naming Conventions Module

Strategies that recognize a property naming style and score how likely two
differently-styled names denote the same property:
- CamelCaseConvention, PascalCaseConvention, SnakeCaseConvention,
  KebabCaseConvention: casing styles
- PrefixConvention: verb/accessor prefixes (getUserId, is_active)
- AbbreviationConvention: dob, addr, qty, ...
- HungarianNotationConvention: type-tagged names (opt-in)
"""

from .abbreviation import AbbreviationConvention
from .base import NamingConvention, split_words
from .casing import (
    CamelCaseConvention,
    CasingConvention,
    KebabCaseConvention,
    PascalCaseConvention,
    SnakeCaseConvention,
)
from .hungarian import HungarianNotationConvention
from .prefix import PrefixConvention
from .registry import ConventionRegistry

__all__ = [
    "NamingConvention",
    "split_words",
    "CasingConvention",
    "CamelCaseConvention",
    "PascalCaseConvention",
    "SnakeCaseConvention",
    "KebabCaseConvention",
    "PrefixConvention",
    "AbbreviationConvention",
    "HungarianNotationConvention",
    "ConventionRegistry",
]
