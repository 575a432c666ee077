# ============================================================================
# src/sut_audit/utils/__init__.py
# ============================================================================
"""
Shared utilities: text normalization, logging, exceptions.
"""

from .exceptions import (
    SutAuditError,
    CorpusLoadError,
    OCRRequestError,
    JudgmentError,
)
from .text_normalizer import normalize_for_search
from .logging import setup_logging, log_performance
