"""Configuration management for the Excel Analyzer."""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Quality score penalties, each applied at most once per sheet
MAX_QUALITY_SCORE = 100
PENALTY_MISSING_HEADERS = 10
PENALTY_HIGH_NULL_COLUMNS = 15
PENALTY_FORMAT_ISSUES = 10
PENALTY_DUPLICATE_COLUMNS = 15

# Default naming
DEFAULT_COLUMN_PREFIX = "Column_"

# Supported workbook formats
EXCEL_EXTENSIONS = [".xlsx", ".xlsm"]
LEGACY_EXCEL_EXTENSIONS = [".xls"]
CSV_EXTENSIONS = [".csv"]


class Config(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EXCEL_ANALYZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # System Configuration
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)
    max_file_size_mb: int = Field(default=100, gt=0)

    # Profiling Configuration
    sample_values_limit: int = Field(default=5, ge=0)
    top_values_limit: int = Field(default=10, ge=0)
    outlier_std_threshold: float = Field(default=3.0, gt=0)
    high_null_threshold: float = Field(default=50.0, ge=0, le=100)
    numeric_text_ratio: float = Field(default=0.8, ge=0, le=1)

    # Encoding checker Configuration
    script_extensions: List[str] = Field(default_factory=lambda: [".ps1"])


# Global configuration instance - use lazy initialization
_config_instance = None


def get_config() -> Config:
    """Get the global configuration instance with lazy initialization."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config_instance
    _config_instance = None
