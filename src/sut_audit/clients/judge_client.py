# ============================================================================
# src/sut_audit/clients/judge_client.py
# ============================================================================
"""
Reimbursement Judgment Client

Asks an OpenAI-compatible reasoning model (DeepSeek by default) whether each
drug on a report is payable under the SUT, given the OCR text, the parsed
report fields and the SUT excerpts found for every drug.

The model must answer with:
    {
      "report_id": "...",
      "items": [{"drug_name": "...", "payable": true, "reason": "...",
                 "missing_criteria": []}],
      "global_notes": "..."
    }
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from json_repair import repair_json
from openai import AsyncOpenAI

from sut_audit.config import llm_settings
from sut_audit.core.models import (
    DrugDecision,
    JudgeReportInput,
    MatchExcerpt,
    ReportDecision,
)
from sut_audit.utils.exceptions import JudgmentError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a strict medical auditor working for the Turkish Social Security "
    "Institution (SGK). You check whether each medical report and its prescribed "
    "drugs fully comply with the SUT (Sağlık Uygulama Tebliği) reimbursement rules. "
    "All explanations and lists MUST be written in Turkish. Always return valid "
    "JSON only. Do not include markdown or commentary."
)

DECISION_SCHEMA_PROMPT = """
Return strict JSON with the shape:
{
  "report_id": "<string>",
  "items": [
    {
      "drug_name": "<string>",
      "payable": true | false,
      "reason": "<short rationale referencing SUT or missing info>",
      "missing_criteria": ["<string>", "..."]
    }
  ],
  "global_notes": "<optional summary>"
}
Rules:
1. Items array MUST contain one entry for EVERY drug listed under "Drugs to evaluate".
2. If SUT context is missing, infer from general SUT knowledge; if unsure, set payable=false and explain what documentation is missing.
3. "missing_criteria" must always be present. Use [] when drug is payable with no missing items.
4. All free-text fields ("reason", each value inside "missing_criteria", and "global_notes") MUST be written in Turkish.
5. Keep explanations concise and actionable for a pharmacist.""".strip()


def build_context_by_drug(sut_matches_by_drug: Dict[str, List[MatchExcerpt]]) -> str:
    blocks = []
    for drug, matches in sut_matches_by_drug.items():
        contexts = "\n".join(
            f"- [{idx}] ({match.location_hint}) {match.match_text}"
            for idx, match in enumerate(matches, start=1)
        )
        blocks.append(f"Drug: {drug}\n{contexts or '- No SUT context found.'}")
    return "\n\n".join(blocks)


def build_user_message(judge_input: JudgeReportInput) -> str:
    drug_list = list(judge_input.sut_matches_by_drug)
    meta_lines = [
        f"ICD Codes: {', '.join(judge_input.icd_codes)}" if judge_input.icd_codes else "ICD Codes: N/A",
        f"Doctor Branch: {judge_input.doctor_branch}" if judge_input.doctor_branch else "Doctor Branch: N/A",
        f"Drugs: {', '.join(drug_list)}" if drug_list else "Drugs: N/A",
    ]
    if drug_list:
        evaluation_lines = [
            f"- {drug} (SUT matches: {len(judge_input.sut_matches_by_drug[drug])})"
            for drug in drug_list
        ]
    else:
        evaluation_lines = ["- None detected in OCR (if this happens, explain why)."]

    return "\n".join([
        "OCR TEXT:",
        judge_input.ocr_text,
        "",
        "Parsed Meta:",
        "\n".join(meta_lines),
        "",
        "Drugs to evaluate:",
        "\n".join(evaluation_lines),
        "",
        "SUT CONTEXT BY DRUG:",
        build_context_by_drug(judge_input.sut_matches_by_drug),
        "",
        "Respond with pure JSON matching the required schema described below.",
        DECISION_SCHEMA_PROMPT,
    ])


def _load_json(content: str) -> Tuple[Any, bool]:
    """
    Parse model output, falling back to json_repair.

    Returns:
        Tuple of (parsed_value, json_was_repaired)
    """
    try:
        return json.loads(content), False
    except json.JSONDecodeError:
        pass

    repaired = repair_json(content, return_objects=True)
    logger.warning(
        f"json_repair fixed judgment response - potential data loss. "
        f"Original (first 200 chars): {content[:200]}"
    )
    return repaired, True


def _normalize_item(item: Any) -> DrugDecision:
    if not isinstance(item, dict):
        return DrugDecision()
    missing = item.get("missing_criteria")
    return DrugDecision(
        drug_name=str(item.get("drug_name") or "UNKNOWN_DRUG"),
        payable=bool(item.get("payable")),
        reason=str(item.get("reason") or ""),
        missing_criteria=[str(value) for value in missing] if isinstance(missing, list) else [],
    )


def parse_decision(content: str, report_id: str, expected_drugs: List[str]) -> ReportDecision:
    """
    Turn raw model output into a ReportDecision.

    Raises:
        JudgmentError: output is not a JSON object, or it has no items even
            though drugs were sent for evaluation
    """
    parsed, _ = _load_json(content)
    if not isinstance(parsed, dict):
        raise JudgmentError(f"Unable to parse LLM JSON: expected an object\nRaw content:\n{content}")

    raw_items = parsed.get("items")
    if not isinstance(raw_items, list):
        raw_items = parsed.get("drugs") if isinstance(parsed.get("drugs"), list) else []

    items = [_normalize_item(item) for item in raw_items]
    if not items and expected_drugs:
        raise JudgmentError(
            f"Unable to parse LLM JSON: LLM returned 0 items even though "
            f"{len(expected_drugs)} drugs were requested.\nRaw content:\n{content}"
        )

    return ReportDecision(
        report_id=str(parsed.get("report_id") or report_id),
        items=items,
        global_notes=str(parsed.get("global_notes") or ""),
    )


class ReimbursementJudge:
    """SUT payability judgment through an OpenAI-compatible chat endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None
    ):
        self.api_key = api_key or llm_settings.DEEPSEEK_API_KEY
        self.base_url = base_url or llm_settings.DEEPSEEK_BASE_URL
        self.model = model or llm_settings.DEEPSEEK_MODEL
        self.temperature = llm_settings.JUDGE_TEMPERATURE if temperature is None else temperature
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy load the OpenAI-compatible client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
            logger.info(f"Judgment client initialized: base_url={self.base_url}, model={self.model}")
        return self._client

    async def judge_report(self, judge_input: JudgeReportInput) -> ReportDecision:
        if not self.api_key:
            raise JudgmentError("DEEPSEEK_API_KEY is missing in environment.")

        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_message(judge_input)},
            ],
            temperature=self.temperature,
            response_format={"type": "json_object"},
        )

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise JudgmentError("LLM returned empty response.")

        return parse_decision(
            content,
            judge_input.report_id,
            list(judge_input.sut_matches_by_drug),
        )
