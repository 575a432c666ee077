# ============================================================================
# src/sut_audit/config/retrieval_config.py
# ============================================================================
"""
SUT Retrieval Settings
- Excerpt window around each hit
- Maximum excerpts per query
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MATCH_WINDOW: int = Field(
        default=1000,
        ge=0,
        description="Normalized characters kept on each side of a hit"
    )
    MAX_MATCHES: int = Field(
        default=5,
        ge=1,
        description="Maximum number of excerpts returned per query"
    )


retrieval_settings = RetrievalSettings()
