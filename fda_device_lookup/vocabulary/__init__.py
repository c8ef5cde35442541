"""Vocabulary tables and synonym expansion."""

from .expander import SynonymExpander
from .tables import (
    AI_SOFTWARE_CODES,
    AI_SOFTWARE_TERMS,
    DEFAULT_SYNONYMS,
    DEFAULT_VOCABULARY,
    FILLER_WORDS,
    GENERIC_BRIDGE_TERMS,
    SynonymTable,
    Vocabulary,
)

__all__ = [
    "SynonymExpander",
    "SynonymTable",
    "Vocabulary",
    "DEFAULT_VOCABULARY",
    "DEFAULT_SYNONYMS",
    "FILLER_WORDS",
    "GENERIC_BRIDGE_TERMS",
    "AI_SOFTWARE_TERMS",
    "AI_SOFTWARE_CODES",
]
