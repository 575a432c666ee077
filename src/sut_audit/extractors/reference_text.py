# src/sut_audit/extractors/reference_text.py
"""
Text extraction for the SUT reference document.

The SUT is distributed as a text-bearing PDF; pdfplumber reads it page by
page. Plain-text exports (.txt, .md) are decoded directly, which is also what
tests use.
"""

import io
import logging
from typing import Optional

import pdfplumber

TEXT_SUFFIXES = {".txt", ".md"}


class ReferenceTextExtractor:
    """Bytes of a reference document -> plain text."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, data: bytes, suffix: Optional[str] = None) -> str:
        """
        Extract plain text.

        Args:
            data: Raw document bytes
            suffix: File suffix (".pdf", ".txt", ...); PDF when unknown

        Returns:
            Extracted text, pages joined by newlines

        Raises:
            Whatever pdfplumber/pdfminer raise on unreadable input; the
            corpus cache wraps these in CorpusLoadError.
        """
        if suffix and suffix.lower() in TEXT_SUFFIXES:
            return data.decode("utf-8")
        return self._extract_pdf(data)

    def _extract_pdf(self, data: bytes) -> str:
        pages = []
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                pages.append(page.extract_text() or "")
        self.logger.info(f"Extracted {len(pages)} pages from reference PDF")
        return "\n".join(pages)
