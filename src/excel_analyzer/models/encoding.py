"""Data models for the script encoding checker and fixer."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EncodingStatus(str, Enum):
    """Detected encoding of a script file."""
    UTF8_BOM = "utf8-bom"
    UTF8_NO_BOM = "utf8-no-bom"
    UTF16_LE = "utf16-le"
    UTF16_BE = "utf16-be"
    UNKNOWN = "unknown"
    ERROR = "error"


class FixAction(str, Enum):
    """What the fixer did (or would do) to a file."""
    ADDED_BOM = "added_bom"
    CONVERTED = "converted"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


class EncodingCheckResult(BaseModel):
    """Encoding status of a single file."""
    model_config = ConfigDict(frozen=True)

    path: str
    status: EncodingStatus
    message: str


class EncodingFixResult(BaseModel):
    """Outcome of fixing a single file."""
    model_config = ConfigDict(frozen=True)

    path: str
    original_status: EncodingStatus
    action: FixAction
    dry_run: bool = False
    error: Optional[str] = None


class EncodingSummary(BaseModel):
    """Per-status counts for a directory check."""
    model_config = ConfigDict(frozen=True)

    counts: Dict[EncodingStatus, int] = Field(
        default_factory=lambda: {status: 0 for status in EncodingStatus}
    )
    results: List[EncodingCheckResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def needs_fix(self) -> bool:
        return self.counts.get(EncodingStatus.UTF8_NO_BOM, 0) > 0
