# ============================================================================
# src/sut_audit/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the SUT audit engine.

Parsing and search misses are never exceptions; they come back as empty
results. Only the failures below cross component boundaries.
"""

from pathlib import Path
from typing import Optional


class SutAuditError(Exception):
    """Base exception for all SUT audit errors."""
    pass


class CorpusLoadError(SutAuditError):
    """The SUT reference document could not be read or its text extracted."""

    def __init__(self, path: Optional[Path], message: str):
        self.path = path
        super().__init__(f"Unable to load SUT reference from {path}: {message}")


class OCRRequestError(SutAuditError):
    """OCR request could not be made or returned no text."""
    pass


class JudgmentError(SutAuditError):
    """Judgment model call failed or returned an unusable decision."""
    pass
