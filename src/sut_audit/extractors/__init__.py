# src/sut_audit/extractors/__init__.py
"""
Reference document text extraction (PDF via pdfplumber, plain text as UTF-8).
"""

from .reference_text import ReferenceTextExtractor, TEXT_SUFFIXES
