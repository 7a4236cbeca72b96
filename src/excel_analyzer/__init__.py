"""
Excel Analyzer

Profiles the columns of spreadsheet workbooks, scores sheet quality and
writes markdown reports. Also ships a checker/fixer for the UTF-8 BOM of
PowerShell scripts.
"""

__version__ = "0.1.0"
__author__ = "Excel Agent Team"

from .analyzers import ColumnProfiler, SheetAnalyzer, WorkbookAnalyzer
from .models import AnalysisReport, ColumnProfile, DataType, SheetAnalysis

__all__ = [
    "ColumnProfiler",
    "SheetAnalyzer",
    "WorkbookAnalyzer",
    "AnalysisReport",
    "ColumnProfile",
    "DataType",
    "SheetAnalysis",
]
