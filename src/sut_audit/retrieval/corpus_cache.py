# ============================================================================
# src/sut_audit/retrieval/corpus_cache.py
# ============================================================================
"""
SUT Corpus Cache

Holds the normalized full text of the SUT reference document for the
lifetime of the process.

- Lazy: nothing is read until the first get_text()
- Write-once: after a successful load the text is never replaced
- Single-flight: concurrent first callers share one load (asyncio.Lock,
  re-checked after acquiring)

A failed load is not memoized: its caller gets CorpusLoadError and the next
caller starts a fresh load. Nothing is retried internally.

Example:
    cache = ReferenceCorpusCache(Path("data/SUT.pdf"))
    text = await cache.get_text()
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from sut_audit.config import base_settings
from sut_audit.extractors.reference_text import ReferenceTextExtractor
from sut_audit.utils.exceptions import CorpusLoadError
from sut_audit.utils.logging import log_performance
from sut_audit.utils.text_normalizer import normalize_for_search

logger = logging.getLogger(__name__)


class ReferenceCorpusCache:
    """Compute-once cell for the normalized SUT text."""

    def __init__(
        self,
        source_path: Path,
        extractor: Optional[ReferenceTextExtractor] = None
    ):
        """
        Args:
            source_path: SUT document (PDF, or .txt/.md plain text)
            extractor: Text extractor, pdfplumber-backed by default
        """
        self.source_path = Path(source_path)
        self.extractor = extractor or ReferenceTextExtractor()

        self._text: Optional[str] = None
        self._lock = asyncio.Lock()

        # Number of underlying loads started (successful or not)
        self.load_count = 0

    @property
    def is_loaded(self) -> bool:
        return self._text is not None

    async def get_text(self) -> str:
        """Normalized corpus text, loading it on first use."""
        if self._text is not None:
            return self._text

        async with self._lock:
            if self._text is None:
                self._text = await self._load()
        return self._text

    @log_performance(logger, "SUT corpus load")
    async def _load(self) -> str:
        self.load_count += 1
        logger.info(f"Loading SUT reference from {self.source_path}")

        try:
            data = await asyncio.to_thread(self.source_path.read_bytes)
            raw_text = await asyncio.to_thread(
                self.extractor.extract, data, self.source_path.suffix
            )
        except CorpusLoadError:
            raise
        except Exception as e:
            raise CorpusLoadError(self.source_path, str(e) or type(e).__name__) from e

        text = normalize_for_search(raw_text)
        if not text:
            logger.warning(f"SUT reference at {self.source_path} contains no text")
        logger.info(f"SUT corpus ready: {len(text)} normalized characters")
        return text


_default_cache: Optional[ReferenceCorpusCache] = None


def get_default_corpus_cache() -> ReferenceCorpusCache:
    """Process-wide cache for the configured SUT_PATH."""
    global _default_cache
    if _default_cache is None:
        _default_cache = ReferenceCorpusCache(base_settings.resolve_sut_path())
    return _default_cache
