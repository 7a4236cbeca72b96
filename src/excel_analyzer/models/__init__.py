"""Data models for the Excel Analyzer."""

from .base import (
    AnalysisReport,
    Cell,
    CellKind,
    ColumnProfile,
    ColumnStatistics,
    DataType,
    SheetAnalysis,
    TopValue,
    to_cell,
)
from .encoding import (
    EncodingCheckResult,
    EncodingFixResult,
    EncodingStatus,
    EncodingSummary,
    FixAction,
)

__all__ = [
    "AnalysisReport",
    "Cell",
    "CellKind",
    "ColumnProfile",
    "ColumnStatistics",
    "DataType",
    "SheetAnalysis",
    "TopValue",
    "to_cell",
    "EncodingCheckResult",
    "EncodingFixResult",
    "EncodingStatus",
    "EncodingSummary",
    "FixAction",
]
