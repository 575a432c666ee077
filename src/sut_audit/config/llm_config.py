# ============================================================================
# src/sut_audit/config/llm_config.py
# ============================================================================
"""
Remote Model Settings
- OpenAI vision model used for OCR
- DeepSeek (OpenAI-compatible) model used for payability judgment
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # OCR (vision)
    OPENAI_API_KEY: Optional[str] = Field(
        default=None,
        description="API key for the OCR vision model"
    )
    OPENAI_BASE_URL: Optional[str] = Field(
        default=None,
        description="Optional base URL override for the OCR endpoint"
    )
    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Vision model used to transcribe report images"
    )
    OCR_TEMPERATURE: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0
    )

    # Judgment (reasoning)
    DEEPSEEK_API_KEY: Optional[str] = Field(
        default=None,
        description="API key for the judgment model"
    )
    DEEPSEEK_BASE_URL: str = Field(
        default="https://api.deepseek.com",
        description="OpenAI-compatible endpoint of the judgment model"
    )
    DEEPSEEK_MODEL: str = Field(
        default="deepseek-chat",
        description="Model that decides per-drug payability"
    )
    JUDGE_TEMPERATURE: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0
    )


llm_settings = LLMSettings()
