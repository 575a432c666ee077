# ============================================================================
# src/sut_audit/__init__.py
# ============================================================================
"""
SUT Audit

Parses OCR text of SGK medical reports and retrieves the SUT reimbursement
rules that apply to each prescribed drug.
"""

from .core.models import (
    MatchExcerpt,
    ParsedDrugLine,
    ParsedReportMeta,
    ReportDecision,
    DrugDecision,
)
from .parsing.report_parser import parse_report
from .retrieval.corpus_cache import ReferenceCorpusCache
from .retrieval.rule_retriever import RuleContextRetriever, find_matches
from .utils.text_normalizer import normalize_for_search

__version__ = "0.1.0"
