# ============================================================================
# src/sut_audit/core/models.py
# ============================================================================
"""
Data model
- Parsed report entities (immutable, created per image)
- SUT match excerpts
- Judgment input and the fixed decision output shape
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class MatchExcerpt:
    """Window of normalized SUT text around one occurrence of a query."""
    match_text: str
    # round(hit / len(corpus) * 100); None when the corpus is empty
    location_pct: Optional[int] = None

    @property
    def location_hint(self) -> str:
        if self.location_pct is None:
            return "Location unknown"
        return f"Approx. position {self.location_pct}% of SUT"

    def to_dict(self) -> Dict[str, Any]:
        return {"matchText": self.match_text, "locationHint": self.location_hint}


@dataclass(frozen=True)
class ParsedDrugLine:
    raw_line: str
    drug_name: str  # upper-cased, never empty
    form: Optional[str] = None
    dose: Optional[str] = None
    frequency: Optional[str] = None
    duration_days: Optional[int] = None


@dataclass(frozen=True)
class ParsedReportMeta:
    icd_codes: Tuple[str, ...] = ()
    doctor_branch: Optional[str] = None
    drug_lines: Tuple[ParsedDrugLine, ...] = ()

    @property
    def drug_names(self) -> List[str]:
        return [line.drug_name for line in self.drug_lines]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class JudgeReportInput:
    report_id: str
    ocr_text: str
    # Insertion order is the evaluation order shown to the model
    sut_matches_by_drug: Dict[str, List[MatchExcerpt]] = field(default_factory=dict)
    icd_codes: List[str] = field(default_factory=list)
    doctor_branch: Optional[str] = None


class DrugDecision(BaseModel):
    drug_name: str = "UNKNOWN_DRUG"
    payable: bool = False
    reason: str = ""
    missing_criteria: List[str] = Field(default_factory=list)


class ReportDecision(BaseModel):
    report_id: str
    items: List[DrugDecision] = Field(default_factory=list)
    global_notes: str = ""
