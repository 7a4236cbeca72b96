"""Workbook analyzer producing the full analysis report."""

from datetime import datetime
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence, Union

from .sheet_analysis import SheetAnalyzer
from ..models.base import AnalysisReport, SheetAnalysis
from ..utils.config import Config, get_config
from ..utils.logging import get_logger
from ..utils.workbook_reader import WorkbookReader

Grid = Sequence[Sequence[Any]]


def quality_grade(score: float) -> str:
    """Map a quality score to a human-readable grade."""
    if score >= 90:
        return "Excellent"
    if score >= 75:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Poor"


class WorkbookAnalyzer:
    """Runs the sheet analyzer over every sheet of a workbook."""

    def __init__(
        self,
        config: Optional[Config] = None,
        reader: Optional[WorkbookReader] = None,
        sheet_analyzer: Optional[SheetAnalyzer] = None
    ):
        self.config = config or get_config()
        self.reader = reader or WorkbookReader(self.config)
        self.sheet_analyzer = sheet_analyzer or SheetAnalyzer(self.config)
        self.logger = get_logger(f"{__name__}.WorkbookAnalyzer")

    def analyze_file(self, file_path: Union[str, Path]) -> AnalysisReport:
        """Read a workbook from disk and analyze all of its sheets."""
        file_path = Path(file_path)
        sheets = self.reader.read(file_path)
        return self.analyze_workbook(
            sheets,
            file_name=file_path.name,
            file_size=file_path.stat().st_size
        )

    def analyze_workbook(
        self,
        sheets: Mapping[str, Grid],
        file_name: str,
        file_size: int = 0
    ) -> AnalysisReport:
        """Analyze already-loaded sheet grids in workbook order."""
        analyses = [
            self.sheet_analyzer.analyze_sheet(name, grid)
            for name, grid in sheets.items()
        ]

        overall_score = 0.0
        if analyses:
            overall_score = round(
                sum(a.quality_score for a in analyses) / len(analyses), 2
            )

        self.logger.info(
            f"Workbook '{file_name}' analyzed: {len(analyses)} sheet(s), "
            f"overall score {overall_score}"
        )

        return AnalysisReport(
            file_name=file_name,
            timestamp=datetime.now(),
            file_size=file_size,
            sheets=analyses,
            overall_score=overall_score,
            summary=self._build_summary(analyses, overall_score)
        )

    @staticmethod
    def _build_summary(analyses: List[SheetAnalysis], overall_score: float) -> List[str]:
        total_rows = sum(a.row_count for a in analyses)
        total_columns = sum(a.column_count for a in analyses)
        with_issues = sum(1 for a in analyses if a.issues)

        return [
            f"Sheets analyzed: {len(analyses)}",
            f"Total data rows: {total_rows}",
            f"Total columns: {total_columns}",
            f"Overall quality score: {overall_score:g}/100 ({quality_grade(overall_score)})",
            f"Sheets with issues: {with_issues}",
        ]
