# ============================================================================
# tests/unit/test_configuration.py
# ============================================================================
"""
Tests for settings loading
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sut_audit.config import base_settings, llm_settings, logging_settings, retrieval_settings
from sut_audit.config.base_config import BaseSettingsConfig
from sut_audit.config.retrieval_config import RetrievalSettings


def test_defaults():
    """Configuration loads with the documented defaults"""
    assert retrieval_settings.MATCH_WINDOW == 1000
    assert retrieval_settings.MAX_MATCHES == 5
    assert base_settings.SUT_PATH == Path("data/SUT.pdf")
    assert ".png" in base_settings.IMAGE_EXTENSIONS
    assert llm_settings.DEEPSEEK_BASE_URL == "https://api.deepseek.com"
    assert logging_settings.LOG_LEVEL == "INFO"


def test_environment_override(monkeypatch):
    monkeypatch.setenv("MAX_MATCHES", "3")
    monkeypatch.setenv("MATCH_WINDOW", "250")

    settings = RetrievalSettings()
    assert settings.MAX_MATCHES == 3
    assert settings.MATCH_WINDOW == 250


def test_validation():
    with pytest.raises(ValidationError):
        RetrievalSettings(MAX_MATCHES=0)


def test_relative_sut_path_anchored_at_project_root():
    settings = BaseSettingsConfig(SUT_PATH=Path("data/SUT.pdf"))
    assert settings.resolve_sut_path() == settings.PROJECT_ROOT / "data" / "SUT.pdf"


def test_absolute_sut_path(tmp_path):
    settings = BaseSettingsConfig(SUT_PATH=tmp_path / "SUT.pdf")
    assert settings.resolve_sut_path() == tmp_path / "SUT.pdf"


def test_create_directories(tmp_path):
    settings = BaseSettingsConfig(OUTPUT_DIR=tmp_path / "out" / "nested")
    settings.create_directories()
    assert (tmp_path / "out" / "nested").is_dir()
