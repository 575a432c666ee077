# ============================================================================
# src/sut_audit/retrieval/rule_retriever.py
# ============================================================================
"""
Rule-Context Retriever

Finds where a drug name occurs in the SUT and returns the surrounding text so
the judgment model can read the applicable reimbursement rules.

Search is a literal substring scan over normalized text. After each hit the
scan resumes right after the hit, not after its excerpt window, so two close
occurrences produce two (overlapping) excerpts.
"""

import logging
import math
from typing import List, Optional

from sut_audit.config import retrieval_settings
from sut_audit.core.models import MatchExcerpt
from sut_audit.utils.text_normalizer import normalize_for_search

from .corpus_cache import ReferenceCorpusCache

logger = logging.getLogger(__name__)


def build_location_pct(idx: int, total: int) -> Optional[int]:
    """Hit offset as a whole percentage of the corpus (half rounds up)."""
    if not total:
        return None
    return int(math.floor(idx / total * 100 + 0.5))


def find_matches(
    normalized_text: str,
    keyword: str,
    window: int = 1000,
    max_matches: int = 5
) -> List[MatchExcerpt]:
    """
    Windowed excerpts around occurrences of keyword, in document order.

    Args:
        normalized_text: Corpus already passed through normalize_for_search
        keyword: Raw query; normalized here
        window: Characters kept before and after each hit
        max_matches: Stop after this many hits

    Returns:
        Up to max_matches excerpts; [] for an empty query or no hit
    """
    needle = normalize_for_search(keyword)
    if not needle:
        return []

    matches: List[MatchExcerpt] = []
    total = len(normalized_text)
    start_index = 0

    while start_index < total and len(matches) < max_matches:
        hit = normalized_text.find(needle, start_index)
        if hit == -1:
            break
        slice_start = max(0, hit - window)
        slice_end = min(total, hit + len(needle) + window)
        matches.append(MatchExcerpt(
            match_text=normalized_text[slice_start:slice_end],
            location_pct=build_location_pct(hit, total),
        ))
        start_index = hit + len(needle)

    return matches


class RuleContextRetriever:
    """
    Query interface over a ReferenceCorpusCache.

    Example:
        retriever = RuleContextRetriever(get_default_corpus_cache())
        await retriever.ensure_loaded()
        excerpts = await retriever.find_by_medicine_name("ADALIMUMAB")
    """

    def __init__(
        self,
        cache: ReferenceCorpusCache,
        window: Optional[int] = None,
        max_matches: Optional[int] = None
    ):
        self.cache = cache
        self.window = window if window is not None else retrieval_settings.MATCH_WINDOW
        self.max_matches = max_matches if max_matches is not None else retrieval_settings.MAX_MATCHES

    async def ensure_loaded(self) -> None:
        """Load the corpus now; raises CorpusLoadError on failure."""
        await self.cache.get_text()

    async def find_by_keyword(self, keyword: str) -> List[MatchExcerpt]:
        if not normalize_for_search(keyword):
            return []
        text = await self.cache.get_text()
        return find_matches(text, keyword, self.window, self.max_matches)

    async def find_by_medicine_name(self, drug_name: str) -> List[MatchExcerpt]:
        matches = await self.find_by_keyword(drug_name)
        logger.debug(f"SUT search for '{drug_name}': {len(matches)} matches")
        return matches
