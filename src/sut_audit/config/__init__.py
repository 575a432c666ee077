# ============================================================================
# src/sut_audit/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .base_config import base_settings
from .llm_config import llm_settings
from .retrieval_config import retrieval_settings
from .logging_config import logging_settings
