# ============================================================================
# src/sut_audit/constants/__init__.py
# ============================================================================
"""
Ordered keyword tables used by the report parser.
"""

from .specialties import BRANCH_KEYWORDS
from .dosage_forms import FORM_KEYWORDS
