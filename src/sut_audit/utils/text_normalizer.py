# ============================================================================
# src/sut_audit/utils/text_normalizer.py
# ============================================================================
"""
Text Normalization Utilities

Canonicalizes text for substring matching between OCR output (drug names)
and the SUT reference document:
- Case folding, including the Turkish dotted capital İ
- Diacritic stripping (ç -> c, ş -> s, ğ -> g, ö -> o, ü -> u)
- Repair of the mojibake form of the dotless ı
- Punctuation removal and whitespace collapsing
"""

import re
import unicodedata
from typing import Optional

# Combining diacritical marks block (U+0300 - U+036F)
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")

# UTF-8 "ı" (C4 B1) read as Latin-1 gives "Ä±", which reads "a±" once
# lower-cased and stripped of its diaeresis.
_MOJIBAKE_DOTLESS_I = "a\u00b1"

# Anything that is not a letter, digit or whitespace (\w also admits "_")
_NON_WORD = re.compile(r"[^\w\s]|_")
_WHITESPACE = re.compile(r"\s+")


def normalize_for_search(value: Optional[str]) -> str:
    """
    Normalize text for search. Idempotent.

    >>> normalize_for_search("İLAÇ")
    'ilac'
    """
    if not value:
        return ""

    text = value.lower()
    text = unicodedata.normalize("NFKD", text)
    text = _COMBINING_MARKS.sub("", text)
    # compatibility decompositions can yield capitals (e.g. U+210C -> "H")
    text = text.lower()
    text = text.replace(_MOJIBAKE_DOTLESS_I, "i")
    text = _NON_WORD.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def lower_tr(value: str) -> str:
    """Lower-case with the Turkish İ mapped to a plain i."""
    return value.replace("İ", "i").lower()


def collapse_whitespace(value: str) -> str:
    return _WHITESPACE.sub(" ", value).strip()
