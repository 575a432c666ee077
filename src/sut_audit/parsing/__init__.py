# ============================================================================
# src/sut_audit/parsing/__init__.py
# ============================================================================
"""
Report field parsing: ICD codes, doctor specialty, drug lines.
"""

from .report_parser import (
    parse_report,
    parse_icd_codes,
    parse_doctor_branch,
    parse_drug_lines,
)
