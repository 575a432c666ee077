# ============================================================================
# src/sut_audit/constants/dosage_forms.py
# ============================================================================
"""
Route / pharmaceutical form keywords.

First substring hit wins. Longer, more specific keywords must stay above the
shorter ones they contain ("ağızdan katı" above "ağızdan"). ASCII spellings
follow each Turkish spelling because OCR often drops diacritics.
"""

from typing import Tuple

# (lower-cased keyword, display label)
FORM_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("ağızdan katı", "Ağızdan Katı"),
    ("agizdan kati", "Ağızdan Katı"),
    ("ağızdan kat", "Ağızdan Katı"),
    ("agizdan kat", "Ağızdan Katı"),
    ("ağızdan", "Ağızdan"),
    ("agizdan", "Ağızdan"),
    ("oral", "Oral"),
    ("iv", "IV"),
    ("intravenöz", "IV"),
    ("intravenoz", "IV"),
    ("enjektabl", "Enjektabl"),
    ("subkutan", "SC"),
    ("sc", "SC"),
    ("tablet", "Tablet"),
    ("kapsül", "Kapsül"),
    ("kapsul", "Kapsül"),
    ("katı", "Katı"),
    ("kati", "Katı"),
)
