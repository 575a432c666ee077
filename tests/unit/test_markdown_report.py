# ============================================================================
# tests/unit/test_markdown_report.py
# ============================================================================
"""
Tests for the per-report Markdown section
"""

from sut_audit.core.models import (
    DrugDecision,
    ParsedDrugLine,
    ParsedReportMeta,
    ReportDecision,
)
from sut_audit.reporting.markdown_report import render_markdown_for_report


def test_full_section():
    parsed = ParsedReportMeta(
        icd_codes=("M05.8", "E11.9"),
        doctor_branch="Romatoloji",
        drug_lines=(
            ParsedDrugLine(raw_line="...", drug_name="ADALIMUMAB", form="Enjektabl",
                           dose="1 x 40 mg", frequency="günde 1"),
            ParsedDrugLine(raw_line="...", drug_name="METOTREKSAT"),
        ),
    )
    decision = ReportDecision(report_id="rapor1.jpg", items=[
        DrugDecision(drug_name="ADALIMUMAB", payable=True, reason="Uygun"),
        DrugDecision(drug_name="METOTREKSAT", payable=False, reason="Rapor | eksik\nbilgi"),
    ])

    markdown = render_markdown_for_report("rapor1.jpg", parsed, decision)

    assert markdown.split("\n") == [
        "## rapor1.jpg",
        "",
        "- ICD codes: M05.8, E11.9",
        "- Doctor branch: Romatoloji",
        "",
        "| Drug | Payable | Reason |",
        "| --- | --- | --- |",
        "| ADALIMUMAB | ✅ | Uygun |",
        "| METOTREKSAT | ❌ | Rapor / eksik bilgi |",
        "",
        "Parsed drugs:",
        "- ADALIMUMAB (Enjektabl, 1 x 40 mg, günde 1)",
        "- METOTREKSAT (form N/A, dose N/A, freq N/A)",
    ]


def test_empty_report():
    markdown = render_markdown_for_report(
        "bos.png", ParsedReportMeta(), ReportDecision(report_id="bos.png")
    )

    assert "- ICD codes: N/A" in markdown
    assert "- Doctor branch: N/A" in markdown
    assert markdown.endswith("| No drugs parsed | - | - |")
    assert "Parsed drugs" not in markdown
