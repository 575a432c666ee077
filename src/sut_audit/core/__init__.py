# ============================================================================
# src/sut_audit/core/__init__.py
# ============================================================================
"""
Core data model shared by the parser, the retriever and the judgment client.
"""

from .models import (
    MatchExcerpt,
    ParsedDrugLine,
    ParsedReportMeta,
    JudgeReportInput,
    DrugDecision,
    ReportDecision,
)
