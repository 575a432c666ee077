# ============================================================================
# src/sut_audit/parsing/fields.py
# ============================================================================
"""
Field-level extraction helpers shared by the table and free-text strategies.
"""

import re
from typing import Optional, Tuple

from sut_audit.constants.dosage_forms import FORM_KEYWORDS
from sut_audit.utils.text_normalizer import collapse_whitespace, lower_tr

# "2 x 500 mg", "1x0,5 gram"
DOSE_REGEX = re.compile(
    r"(\d+\s*x\s*[0-9]+[.,]?[0-9]*\s*(?:mg|mcg|iu|ml|miligram|gram|g|adet))",
    re.IGNORECASE
)
# "günde 2x1", "günde 3"
FREQUENCY_REGEX = re.compile(r"(günde\s*[0-9x.,\s]+)", re.IGNORECASE)
# "30 gün", "90 günlük" but not "2 günde"
DURATION_REGEX = re.compile(r"(\d+)\s*gün(?!de)", re.IGNORECASE)

_KEY_CHARS = re.compile(r"[^a-z0-9ığüşöç\s]")
_SGK_TOKEN = re.compile(r"^sgk\w*", re.IGNORECASE)


def extract_form(line: Optional[str]) -> Optional[str]:
    if not line:
        return None
    lower = lower_tr(line)
    for keyword, label in FORM_KEYWORDS:
        if keyword in lower:
            return label
    return None


def match_dose(text: str) -> Optional[str]:
    match = DOSE_REGEX.search(text)
    return collapse_whitespace(match.group(1)) if match else None


def match_frequency(text: str) -> Optional[str]:
    match = FREQUENCY_REGEX.search(text)
    return collapse_whitespace(match.group(1)) if match else None


def match_duration_days(text: str) -> Optional[int]:
    match = DURATION_REGEX.search(text)
    return int(match.group(1)) if match else None


def parse_regimen_info(text: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Dose and frequency from a treatment-schema (tedavi şeması) cell."""
    if not text:
        return None, None
    return match_dose(text), match_frequency(text)


def normalize_key(value: str) -> str:
    """Label form used for header/key matching: Turkish letters kept."""
    return collapse_whitespace(_KEY_CHARS.sub(" ", lower_tr(value)))


def normalize_drug_name(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    trimmed = collapse_whitespace(value)
    if not trimmed:
        return None
    return trimmed.upper()


def derive_drug_name(text: Optional[str]) -> Optional[str]:
    """
    Name from a code cell such as "SGKF12 PARACETAMOL": the leading SGK
    reimbursement code is dropped when something follows it.
    """
    if not text:
        return None
    trimmed = text.strip()
    if not trimmed:
        return None
    parts = trimmed.split()
    if len(parts) > 1 and _SGK_TOKEN.match(parts[0]):
        return " ".join(parts[1:])
    return trimmed
