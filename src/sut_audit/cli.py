# ============================================================================
# src/sut_audit/cli.py
# ============================================================================
"""
Command-line entry point.

Usage:
    sut-audit                      # audits ./inputs, writes ./outputs
    sut-audit scans/ --output-dir results/ --sut-path data/SUT.pdf
    sut-audit scans/ --log-level DEBUG --json-logs
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sut_audit.config import base_settings, logging_settings
from sut_audit.pipeline import AuditPipeline
from sut_audit.retrieval.corpus_cache import ReferenceCorpusCache, get_default_corpus_cache
from sut_audit.retrieval.rule_retriever import RuleContextRetriever
from sut_audit.utils.exceptions import CorpusLoadError
from sut_audit.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sut-audit",
        description="Audit scanned SGK medical reports against SUT reimbursement rules"
    )
    parser.add_argument(
        "input_dir",
        nargs="?",
        type=Path,
        default=base_settings.INPUT_DIR,
        help="Directory with report images (png/jpg/jpeg/webp)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=base_settings.OUTPUT_DIR,
        help="Where raw_decisions.json and report.md are written"
    )
    parser.add_argument(
        "--sut-path",
        type=Path,
        default=None,
        help="SUT reference document (defaults to SUT_PATH)"
    )
    parser.add_argument(
        "--log-level",
        default=logging_settings.LOG_LEVEL,
        help="Logging level"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        default=logging_settings.LOG_JSON,
        help="Emit JSON log lines"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, logging_settings.LOG_FILE, args.json_logs)

    cache = ReferenceCorpusCache(args.sut_path) if args.sut_path else get_default_corpus_cache()
    pipeline = AuditPipeline(RuleContextRetriever(cache))

    try:
        asyncio.run(pipeline.run(args.input_dir, args.output_dir))
    except CorpusLoadError as e:
        logger.error(f"SUT reference could not be loaded: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
