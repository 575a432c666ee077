# ============================================================================
# src/sut_audit/config/base_config.py
# ============================================================================
"""
Base Configuration
- Project root
- SUT reference document location
- Input/output directories for the audit run
"""

from pathlib import Path
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseSettingsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Root project directory
    PROJECT_ROOT: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent.parent,
        description="Root directory of the project"
    )

    # Reimbursement rules reference document
    SUT_PATH: Path = Field(
        default=Path("data/SUT.pdf"),
        description="SUT (Sağlık Uygulama Tebliği) reference document, PDF or plain text"
    )

    # Scanned report images
    INPUT_DIR: Path = Field(
        default=Path("inputs"),
        description="Directory containing report images to audit"
    )

    # Decision log and Markdown report
    OUTPUT_DIR: Path = Field(
        default=Path("outputs"),
        description="Directory receiving raw_decisions.json and report.md"
    )

    IMAGE_EXTENSIONS: Tuple[str, ...] = Field(
        default=(".png", ".jpg", ".jpeg", ".webp"),
        description="File extensions treated as report images"
    )

    def resolve_sut_path(self) -> Path:
        """SUT path, relative paths anchored at the project root"""
        if self.SUT_PATH.is_absolute():
            return self.SUT_PATH
        return self.PROJECT_ROOT / self.SUT_PATH

    def create_directories(self):
        """Create the output directory if it doesn't exist"""
        self.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)


# Global instance
base_settings = BaseSettingsConfig()
