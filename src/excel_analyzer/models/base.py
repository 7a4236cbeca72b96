"""Base data models for the Excel Analyzer."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field


class CellKind(str, Enum):
    """Primitive kinds a raw cell value is normalized to."""
    MISSING = "missing"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"


class DataType(str, Enum):
    """Inferred semantic types for columns."""
    EMPTY = "empty"
    MIXED = "mixed"
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    EMAIL = "email"
    BOOLEAN = "boolean"
    TEXT = "text"
    UNKNOWN = "unknown"


NUMERIC_TYPES = (DataType.INTEGER, DataType.FLOAT, DataType.MIXED)


@dataclass(frozen=True)
class Cell:
    """A single normalized cell value."""
    kind: CellKind
    value: Any = None

    @property
    def is_missing(self) -> bool:
        return self.kind == CellKind.MISSING

    @property
    def key(self) -> Tuple[CellKind, Any]:
        """Equality key that keeps ``1``, ``"1"`` and ``True`` apart."""
        return (self.kind, self.value)


MISSING = Cell(CellKind.MISSING)


def to_cell(raw: Any) -> Cell:
    """Normalize a raw workbook value into a tagged ``Cell``."""
    if isinstance(raw, Cell):
        return raw
    if raw is None or raw is pd.NaT or raw is pd.NA:
        return MISSING
    # bool is an int subclass, so it has to be checked first
    if isinstance(raw, (bool, np.bool_)):
        return Cell(CellKind.BOOLEAN, bool(raw))
    if isinstance(raw, (int, float, Decimal, np.integer, np.floating)):
        if isinstance(raw, np.generic):
            raw = raw.item()
        elif isinstance(raw, Decimal):
            raw = float(raw)
        if isinstance(raw, float) and math.isnan(raw):
            return MISSING
        return Cell(CellKind.NUMBER, raw)
    if isinstance(raw, str):
        if raw == "":
            return MISSING
        return Cell(CellKind.TEXT, raw)
    if isinstance(raw, (datetime, date, time)):
        return Cell(CellKind.TEXT, raw.isoformat())
    return Cell(CellKind.TEXT, str(raw))


class ColumnProfile(BaseModel):
    """Column profiling information."""
    model_config = ConfigDict(frozen=True)

    name: str
    index: int
    data_type: DataType
    total_count: int = 0
    distinct_count: int = 0
    missing_count: int = 0
    missing_percentage: float = 0.0
    sample_values: List[Any] = Field(default_factory=list)
    format_issues: List[str] = Field(default_factory=list)
    header_missing: bool = False

    @property
    def non_missing_count(self) -> int:
        return self.total_count - self.missing_count


class TopValue(BaseModel):
    """One row of a value-frequency table."""
    model_config = ConfigDict(frozen=True)

    value: Any
    count: int
    percentage: float


class ColumnStatistics(BaseModel):
    """Type-dependent descriptive statistics for a column."""
    model_config = ConfigDict(frozen=True)

    # Numeric statistics
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    median: Optional[float] = None
    std_dev: Optional[float] = None
    outlier_count: Optional[int] = None
    outliers: List[float] = Field(default_factory=list)

    # Text statistics
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    avg_length: Optional[float] = None

    top_values: List[TopValue] = Field(default_factory=list)

    @property
    def has_numeric(self) -> bool:
        return self.mean is not None

    @property
    def has_text(self) -> bool:
        return self.avg_length is not None


class SheetAnalysis(BaseModel):
    """Analysis results for one sheet."""
    model_config = ConfigDict(frozen=True)

    name: str
    row_count: int = 0
    column_count: int = 0
    columns: List[ColumnProfile] = Field(default_factory=list)
    quality_score: int = Field(default=0, ge=0, le=100)
    issues: List[str] = Field(default_factory=list)
    statistics: Dict[str, ColumnStatistics] = Field(default_factory=dict)


class AnalysisReport(BaseModel):
    """Analysis results for a whole workbook."""
    model_config = ConfigDict(frozen=True)

    file_name: str
    timestamp: datetime = Field(default_factory=datetime.now)
    file_size: int = 0
    sheets: List[SheetAnalysis] = Field(default_factory=list)
    overall_score: float = 0.0
    summary: List[str] = Field(default_factory=list)
