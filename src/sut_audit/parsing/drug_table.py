# ============================================================================
# src/sut_audit/parsing/drug_table.py
# ============================================================================
"""
Drug Table Parsing (Strategy A)

The OCR model is asked to keep tables as Markdown, so the active-ingredient
section of a report ("Rapor Etkin Madde Bilgileri") usually arrives as:

    ## Rapor Etkin Madde Bilgileri
    | Etkin Madde Kodu | Etkin Madde Adı | Form | Tedavi Şeması |
    |---|---|---|---|
    | SGKF12 | PARACETAMOL | Ağızdan Katı | 2 x 500 mg, günde 2x |

Two layouts are handled:
- Grid: header row + one drug per data row (columns found by keyword)
- Key-value: two columns of "label | value" describing a single drug

Every function here returns an empty result instead of raising so the caller
can fall through to the free-text strategy.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from sut_audit.core.models import ParsedDrugLine
from sut_audit.utils.text_normalizer import collapse_whitespace, lower_tr

from .fields import (
    derive_drug_name,
    extract_form,
    normalize_drug_name,
    normalize_key,
    parse_regimen_info,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SECTION_MARKER = "rapor etkin madde bilgileri"

_HEADING = re.compile(r"^#{2,}")
_DIVIDER_CELL = re.compile(r"^:?-{2,}:?$")
_MARKUP = re.compile(r"\*\*|__+")

# Column / key keywords, in order of preference
NAME_KEYWORDS = ("adı", "adi", "ad", "ilaç", "ilac", "etkin madde")
CODE_KEYWORDS = ("kodu", "kod")
# Package count labels ("Kutu Adedi", "Adet") also contain "ad"
NAME_EXCLUDE = CODE_KEYWORDS + ("adet", "aded")
FORM_COLUMN_KEYWORDS = ("form",)
REGIMEN_KEYWORDS = ("tedavi", "şema", "sema")

KV_NAME_KEYWORDS = ("adı", "adi", "etkin madde", "ilaç", "ilac", "ad")
KV_REGIMEN_KEYWORDS = ("tedavi şema", "tedavi sema", "şema", "sema", "tedavi")

# Words that make up header labels; a first row made only of these is a header
LABEL_WORDS = frozenset({
    "ad", "adı", "adi", "ilaç", "ilac", "etkin", "madde", "kod", "kodu",
    "form", "formu", "tedavi", "şema", "şeması", "sema", "semasi",
    "doz", "dozu", "sgk", "sıra", "no",
})


def first_non_empty(*strategies: Callable[[], List[T]]) -> List[T]:
    """Run strategies in order; the first non-empty result wins."""
    for strategy in strategies:
        result = strategy()
        if result:
            return result
    return []


def extract_drug_table_lines(lines: Sequence[str]) -> List[str]:
    """Markdown table rows that follow the active-ingredient section heading."""
    idx = next(
        (i for i, line in enumerate(lines) if SECTION_MARKER in lower_tr(line)),
        -1
    )
    if idx == -1:
        return []

    collected: List[str] = []
    started = False

    for current in lines[idx + 1:]:
        trimmed = current.strip()
        if not started:
            if not trimmed:
                continue
            if not trimmed.startswith("|"):
                if _HEADING.match(trimmed):
                    break
                continue
            started = True
            collected.append(current)
            continue

        if not trimmed or not trimmed.startswith("|"):
            break
        lowered = lower_tr(trimmed)
        # a second "... bilgileri" block means the drug section is over
        if "rapor" in lowered and "bilgi" in lowered and collected:
            break
        collected.append(current)

    return collected


def clean_cell(cell: str) -> str:
    return collapse_whitespace(_MARKUP.sub("", cell))


def is_divider_row(row: Sequence[str]) -> bool:
    return all(_DIVIDER_CELL.match(re.sub(r"\s+", "", cell)) for cell in row)


def parse_markdown_table_rows(lines: Sequence[str]) -> List[List[str]]:
    rows: List[List[str]] = []
    for line in lines:
        trimmed = line.strip()
        if not trimmed:
            continue
        if trimmed.startswith("|"):
            trimmed = trimmed[1:]
        if trimmed.endswith("|"):
            trimmed = trimmed[:-1]

        cells = [clean_cell(cell) for cell in trimmed.split("|")]
        if "|" not in trimmed:
            cells = [cell for cell in cells if cell]

        if not any(cells):
            continue
        if is_divider_row(cells):
            continue
        rows.append(cells)
    return rows


def _cell_value(row: Sequence[str], idx: int) -> Optional[str]:
    if idx < 0 or idx >= len(row):
        return None
    return row[idx].strip() or None


def find_column_index(
    header: Sequence[str],
    keywords: Sequence[str],
    exclude: Sequence[str] = ()
) -> int:
    for keyword in keywords:
        for idx, cell in enumerate(header):
            if keyword in cell and not any(ex in cell for ex in exclude):
                return idx
    return -1


def is_header_row(row: Sequence[str]) -> bool:
    cells = [normalize_key(cell) for cell in row if cell.strip()]
    if not cells:
        return False
    return all(
        cell and all(word in LABEL_WORDS for word in cell.split())
        for cell in cells
    )


def build_drugs_from_grid(rows: Sequence[Sequence[str]]) -> List[ParsedDrugLine]:
    if len(rows) <= 1:
        return []

    header = [normalize_key(cell) for cell in rows[0]]
    name_idx = find_column_index(header, NAME_KEYWORDS, exclude=NAME_EXCLUDE)
    code_idx = find_column_index(header, CODE_KEYWORDS)
    form_idx = find_column_index(header, FORM_COLUMN_KEYWORDS)
    regimen_idx = find_column_index(header, REGIMEN_KEYWORDS)

    result: List[ParsedDrugLine] = []
    for row in rows[1:]:
        name_cell = _cell_value(row, name_idx)
        code_cell = _cell_value(row, code_idx)
        regimen = _cell_value(row, regimen_idx)

        drug_name = normalize_drug_name(name_cell or derive_drug_name(code_cell) or code_cell)
        if not drug_name:
            continue

        dose, frequency = parse_regimen_info(regimen)
        result.append(ParsedDrugLine(
            raw_line=" | ".join(row),
            drug_name=drug_name,
            form=extract_form(_cell_value(row, form_idx) or regimen),
            dose=dose,
            frequency=frequency,
        ))
    return result


def _lookup(
    entries: Dict[str, str],
    keywords: Sequence[str],
    exclude: Sequence[str] = ()
) -> Optional[str]:
    for keyword in keywords:
        for key, value in entries.items():
            if keyword in key and not any(ex in key for ex in exclude):
                return value
    return None


def build_drug_from_key_value(rows: Sequence[Sequence[str]]) -> Optional[ParsedDrugLine]:
    entries: Dict[str, str] = {}
    for row in rows:
        if len(row) < 2:
            continue
        key = normalize_key(row[0])
        value = row[1].strip()
        if not key or not value:
            continue
        if "rapor" in key and "bilgi" in key:
            continue
        entries[key] = value

    if not entries:
        return None

    name = _lookup(entries, KV_NAME_KEYWORDS, exclude=NAME_EXCLUDE)
    code_value = _lookup(entries, CODE_KEYWORDS)
    regimen = _lookup(entries, KV_REGIMEN_KEYWORDS)
    form_value = _lookup(entries, FORM_COLUMN_KEYWORDS)

    drug_name = normalize_drug_name(name or derive_drug_name(code_value) or code_value)
    if not drug_name:
        return None

    dose, frequency = parse_regimen_info(regimen)
    return ParsedDrugLine(
        raw_line=" | ".join(f"{key}: {value}" for key, value in entries.items()),
        drug_name=drug_name,
        form=extract_form(form_value or regimen),
        dose=dose,
        frequency=frequency,
    )


def parse_drug_table(lines: Sequence[str]) -> List[ParsedDrugLine]:
    """Drugs from the active-ingredient table, or [] when there is none."""
    table_lines = extract_drug_table_lines(lines)
    if not table_lines:
        return []

    rows = parse_markdown_table_rows(table_lines)
    if not rows:
        return []

    column_count = max(len(row) for row in rows)
    logger.debug(f"Drug table: {len(rows)} rows, {column_count} columns")

    if column_count > 2:
        return build_drugs_from_grid(rows)

    def key_value() -> List[ParsedDrugLine]:
        single = build_drug_from_key_value(rows)
        return [single] if single else []

    def narrow_grid() -> List[ParsedDrugLine]:
        return build_drugs_from_grid(rows) if is_header_row(rows[0]) else []

    return first_non_empty(narrow_grid, key_value)
