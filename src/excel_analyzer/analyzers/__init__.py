"""Analyzer implementations for the Excel Analyzer."""

from .column_profiling import ColumnProfiler
from .sheet_analysis import SheetAnalyzer
from .workbook_analysis import WorkbookAnalyzer, quality_grade

__all__ = [
    "ColumnProfiler",
    "SheetAnalyzer",
    "WorkbookAnalyzer",
    "quality_grade",
]
