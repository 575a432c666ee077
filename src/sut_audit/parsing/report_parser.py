# ============================================================================
# src/sut_audit/parsing/report_parser.py
# ============================================================================
"""
Report Field Parser

Turns OCR text of an SGK medical report (ilaç raporu) into:
- ICD-10 diagnosis codes
- Doctor specialty (branş)
- Prescribed drug lines (name, form, dose, frequency, duration)

Drug lines come from the active-ingredient table when one can be found and
from a line-by-line heuristic otherwise. Parsing never raises: text without
any recognizable content gives an empty ParsedReportMeta.
"""

import logging
import re
from typing import Iterable, List, Optional

from sut_audit.constants.specialties import BRANCH_KEYWORDS
from sut_audit.core.models import ParsedDrugLine, ParsedReportMeta
from sut_audit.utils.logging import log_performance
from sut_audit.utils.text_normalizer import lower_tr

from .drug_table import first_non_empty, parse_drug_table
from .fields import (
    extract_form,
    match_dose,
    match_duration_days,
    match_frequency,
)

logger = logging.getLogger(__name__)

# One letter except U, two digits, optional decimal part: E11.9, J45, M05.80
ICD_REGEX = re.compile(r"\b[A-TV-Z]\d{2}(?:\.\d+)?\b", re.IGNORECASE)

DRUG_LINE_HINT_REGEX = re.compile(
    r"(mg|mcg|iu|ml|miligram|gram|günde|tablet|kapsül|kapsul|ampul|sgk)",
    re.IGNORECASE
)

# Drug name: leading run of name characters up to a wide gap, " - ",
# " | " or end of line; an SGK code in front of the name is skipped
NAME_RUN_REGEX = re.compile(r"[a-zçğıöşüâîûİ0-9+\-/\s]+", re.IGNORECASE)
NAME_END_REGEX = re.compile(r"\s{2,}|\s+-\s+|\s\|\s")
_SGK_PREFIX = re.compile(r"sgk\w*\s+", re.IGNORECASE)
_LIST_NUMBER = re.compile(r"^\d+\.?")
_LINE_BREAK = re.compile(r"\r?\n")

MIN_DRUG_NAME_LENGTH = 3


def parse_icd_codes(text: str) -> List[str]:
    """Unique upper-cased ICD-10 codes in order of first appearance."""
    if not text:
        return []
    return list(dict.fromkeys(match.upper() for match in ICD_REGEX.findall(text)))


def _capitalize_words(line: str) -> str:
    return " ".join(word[:1].upper() + word[1:] for word in line.split(" "))


def parse_doctor_branch(text: str) -> Optional[str]:
    if not text:
        return None
    lower = lower_tr(text)
    for branch, tokens in BRANCH_KEYWORDS:
        if any(token in lower for token in tokens):
            return _capitalize_words(branch)
    return None


def find_drug_name(line: str) -> Optional[str]:
    """
    First name candidate on a line, or None.

    Each run of name characters is scanned once and only up to its own end,
    so the cost stays linear in the line length.
    """
    for run in NAME_RUN_REGEX.finditer(line):
        start = run.start()
        prefix = _SGK_PREFIX.match(line, start, run.end())
        if prefix and prefix.end() < run.end():
            start = prefix.end()

        # a terminator starts inside the run; " | " may reach two chars past it
        end = NAME_END_REGEX.search(line, start + 1, min(len(line), run.end() + 2))
        if end and end.start() < run.end():
            return line[start:end.start()]
        if run.end() == len(line):
            return line[start:]
    return None


def parse_free_text_drug_lines(lines: Iterable[str]) -> List[ParsedDrugLine]:
    """Fallback: any line with a dose/frequency/package cue is a drug line."""
    candidates: List[ParsedDrugLine] = []
    for raw in lines:
        line = raw.strip()
        if not line or not DRUG_LINE_HINT_REGEX.search(line):
            continue

        name = find_drug_name(line)
        if not name:
            continue
        name = name.strip()
        if len(name) < MIN_DRUG_NAME_LENGTH:
            continue

        cleaned = _LIST_NUMBER.sub("", name).strip()
        if not cleaned:
            continue

        candidates.append(ParsedDrugLine(
            raw_line=line,
            drug_name=" ".join(cleaned.split()).upper(),
            form=extract_form(line),
            dose=match_dose(line),
            frequency=match_frequency(line),
            duration_days=match_duration_days(line),
        ))
    return candidates


def dedupe_drugs(drugs: Iterable[ParsedDrugLine]) -> List[ParsedDrugLine]:
    """Keep the first line per drug name."""
    seen = set()
    result: List[ParsedDrugLine] = []
    for drug in drugs:
        key = drug.drug_name.upper()
        if key in seen:
            continue
        seen.add(key)
        result.append(drug)
    return result


def parse_drug_lines(text: str) -> List[ParsedDrugLine]:
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    drugs = first_non_empty(
        lambda: parse_drug_table(lines),
        lambda: parse_free_text_drug_lines(lines),
    )
    return dedupe_drugs(drugs)


@log_performance(logger, "Report parsing")
def parse_report(ocr_text: str) -> ParsedReportMeta:
    text = ocr_text or ""
    meta = ParsedReportMeta(
        icd_codes=tuple(parse_icd_codes(text)),
        doctor_branch=parse_doctor_branch(text),
        drug_lines=tuple(parse_drug_lines(text)),
    )
    logger.info(
        f"Parsed report: {len(meta.icd_codes)} ICD codes, "
        f"branch={meta.doctor_branch or 'N/A'}, {len(meta.drug_lines)} drugs"
    )
    return meta
