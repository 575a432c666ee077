# ============================================================================
# src/sut_audit/clients/__init__.py
# ============================================================================
"""
Remote model clients: vision OCR and reimbursement judgment.
"""

from .ocr_client import VisionOCRClient
from .judge_client import ReimbursementJudge, parse_decision, build_user_message
