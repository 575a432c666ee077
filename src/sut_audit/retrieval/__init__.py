# ============================================================================
# src/sut_audit/retrieval/__init__.py
# ============================================================================
"""
SUT rule-context retrieval: memoized corpus + windowed substring search.
"""

from .corpus_cache import ReferenceCorpusCache, get_default_corpus_cache
from .rule_retriever import RuleContextRetriever, find_matches
