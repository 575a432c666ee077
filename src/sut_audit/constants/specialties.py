# ============================================================================
# src/sut_audit/constants/specialties.py
# ============================================================================
"""
Doctor specialty (branş) keywords.

Entries are checked top to bottom and the first specialty with any keyword
present in the lower-cased report text wins, so order matters: a report
mentioning both "kalp ve damar" and "dahiliye" is attributed to cardiovascular
surgery.
"""

from typing import Tuple

# (canonical specialty, lower-cased keyword substrings)
BRANCH_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("kalp ve damar cerrahisi", ("kalp ve damar", "kvc", "damar cerrah")),
    ("enfeksiyon hastalıkları ve klinik mikrobiyoloji", ("enfeksiyon", "mikrobiyoloji")),
    ("iç hastalıkları", ("iç hastalık", "dahiliye")),
    ("gastroenteroloji", ("gastroenteroloji", "gastr")),
    ("romatoloji", ("romatolog", "romatoloji")),
    ("nefroloji", ("nefroloji", "nefro")),
    ("endokrinoloji", ("endokrin", "endokrinoloji")),
    ("kulak burun boğaz", ("kbb", "kulak burun boğaz")),
)
