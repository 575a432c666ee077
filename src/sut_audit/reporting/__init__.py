# src/sut_audit/reporting/__init__.py
"""
Human-readable Markdown output.
"""

from .markdown_report import render_markdown_for_report
