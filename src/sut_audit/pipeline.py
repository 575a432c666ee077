# ============================================================================
# src/sut_audit/pipeline.py
# ============================================================================
"""
Audit Pipeline

Per report image:
    OCR → parse (ICD / branch / drugs) → SUT search per drug → judgment → Markdown

Run level:
    1. Load the SUT corpus up front (failure is fatal: CorpusLoadError)
    2. Process images one at a time; a failing image is logged and skipped
    3. Write raw_decisions.json and report.md
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from sut_audit.clients.judge_client import ReimbursementJudge
from sut_audit.clients.ocr_client import VisionOCRClient
from sut_audit.config import base_settings
from sut_audit.core.models import (
    JudgeReportInput,
    MatchExcerpt,
    ParsedReportMeta,
    ReportDecision,
)
from sut_audit.parsing.report_parser import parse_report
from sut_audit.reporting.markdown_report import render_markdown_for_report
from sut_audit.retrieval.rule_retriever import RuleContextRetriever

logger = logging.getLogger(__name__)

DECISIONS_FILE = "raw_decisions.json"
REPORT_FILE = "report.md"


@dataclass
class ReportResult:
    """Everything produced for one image."""
    file_name: str
    ocr_text: str
    parsed: ParsedReportMeta
    sut_matches_by_drug: Dict[str, List[MatchExcerpt]]
    decision: ReportDecision
    markdown: str


@dataclass
class AuditRunSummary:
    processed: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    decisions_path: Optional[Path] = None
    report_path: Optional[Path] = None


class AuditPipeline:
    """Sequences the collaborators for a directory of report images."""

    def __init__(
        self,
        retriever: RuleContextRetriever,
        ocr_client: Optional[VisionOCRClient] = None,
        judge: Optional[ReimbursementJudge] = None,
        image_extensions: Optional[Iterable[str]] = None
    ):
        self.retriever = retriever
        self.ocr_client = ocr_client or VisionOCRClient()
        self.judge = judge or ReimbursementJudge()
        extensions = image_extensions or base_settings.IMAGE_EXTENSIONS
        self.image_extensions = {ext.lower() for ext in extensions}

    def list_image_files(self, input_dir: Path) -> List[Path]:
        return sorted(
            path for path in Path(input_dir).iterdir()
            if path.is_file() and path.suffix.lower() in self.image_extensions
        )

    async def process_image(self, image_path: Path) -> ReportResult:
        image_path = Path(image_path)
        file_name = image_path.name

        logger.info(f"  -> OCR started for {file_name}")
        ocr_text = await self.ocr_client.run_ocr(image_path)

        parsed = parse_report(ocr_text)

        drugs = parsed.drug_names
        logger.info(f"  -> Searching SUT for {len(drugs)} drugs")
        sut_matches_by_drug: Dict[str, List[MatchExcerpt]] = {}
        for drug in drugs:
            sut_matches_by_drug[drug] = await self.retriever.find_by_medicine_name(drug)

        logger.info("  -> Waiting for reimbursement judgment")
        decision = await self.judge.judge_report(JudgeReportInput(
            report_id=file_name,
            ocr_text=ocr_text,
            sut_matches_by_drug=sut_matches_by_drug,
            icd_codes=list(parsed.icd_codes),
            doctor_branch=parsed.doctor_branch,
        ))

        return ReportResult(
            file_name=file_name,
            ocr_text=ocr_text,
            parsed=parsed,
            sut_matches_by_drug=sut_matches_by_drug,
            decision=decision,
            markdown=render_markdown_for_report(file_name, parsed, decision),
        )

    async def run(self, input_dir: Path, output_dir: Path) -> AuditRunSummary:
        """
        Audit every image in input_dir.

        Raises:
            CorpusLoadError: SUT reference could not be loaded
            FileNotFoundError: input_dir does not exist
        """
        await self.retriever.ensure_loaded()

        input_dir = Path(input_dir).resolve()
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        summary = AuditRunSummary()
        image_files = self.list_image_files(input_dir)
        if not image_files:
            logger.warning(f"No image files found in {input_dir}")
            return summary

        decisions: List[ReportDecision] = []
        markdown_parts: List[str] = []

        for image_path in image_files:
            logger.info(f"Processing {image_path}...")
            try:
                result = await self.process_image(image_path)
            except Exception as e:
                logger.error(f"Failed to process {image_path.name}: {e}", exc_info=True)
                summary.failed[image_path.name] = str(e)
                continue

            decisions.append(result.decision)
            markdown_parts.append(result.markdown)
            summary.processed.append(image_path.name)
            logger.info(f"  -> Decision recorded for {image_path.name}")

        output_dir = Path(output_dir).resolve()
        output_dir.mkdir(parents=True, exist_ok=True)

        summary.decisions_path = output_dir / DECISIONS_FILE
        summary.decisions_path.write_text(
            json.dumps([d.model_dump() for d in decisions], indent=2, ensure_ascii=False),
            encoding="utf-8"
        )
        summary.report_path = output_dir / REPORT_FILE
        summary.report_path.write_text("\n\n".join(markdown_parts), encoding="utf-8")

        logger.info(
            f"Done: {len(summary.processed)} processed, {len(summary.failed)} failed. "
            f"Results written to {summary.report_path} and {summary.decisions_path}"
        )
        return summary
