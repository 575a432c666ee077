# src/sut_audit/reporting/markdown_report.py
"""
Markdown section for one audited report: parsed fields, per-drug decision
table, and the drug lines the parser found.
"""

from typing import List

from sut_audit.core.models import ParsedReportMeta, ReportDecision


def _cell(value: str) -> str:
    # keep model text from breaking the table
    return " ".join(value.replace("|", "/").split())


def render_markdown_for_report(
    file_name: str,
    parsed: ParsedReportMeta,
    decision: ReportDecision
) -> str:
    icds = ", ".join(parsed.icd_codes) or "N/A"
    branch = parsed.doctor_branch or "N/A"
    rows = "\n".join(
        f"| {_cell(item.drug_name)} | {'✅' if item.payable else '❌'} | {_cell(item.reason or '')} |"
        for item in decision.items
    )

    parts: List[str] = [
        f"## {file_name}",
        "",
        f"- ICD codes: {icds}",
        f"- Doctor branch: {branch}",
        "",
        "| Drug | Payable | Reason |",
        "| --- | --- | --- |",
        rows or "| No drugs parsed | - | - |",
    ]

    if parsed.drug_lines:
        drug_list = "\n".join(
            f"- {drug.drug_name} ({drug.form or 'form N/A'}, "
            f"{drug.dose or 'dose N/A'}, {drug.frequency or 'freq N/A'})"
            for drug in parsed.drug_lines
        )
        parts.append(f"\nParsed drugs:\n{drug_list}")

    return "\n".join(parts)
