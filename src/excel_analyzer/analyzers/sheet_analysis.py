"""Sheet analyzer that folds column profiles into a quality score."""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .column_profiling import ColumnProfiler
from ..models.base import ColumnProfile, ColumnStatistics, SheetAnalysis
from ..utils.config import (
    Config, MAX_QUALITY_SCORE, PENALTY_DUPLICATE_COLUMNS, PENALTY_FORMAT_ISSUES,
    PENALTY_HIGH_NULL_COLUMNS, PENALTY_MISSING_HEADERS, get_config
)
from ..utils.logging import get_logger

EMPTY_SHEET_ISSUE = "Sheet is empty"


class SheetAnalyzer:
    """Profiles every column of a sheet grid and scores its quality."""

    def __init__(
        self,
        config: Optional[Config] = None,
        column_profiler: Optional[ColumnProfiler] = None
    ):
        self.config = config or get_config()
        self.column_profiler = column_profiler or ColumnProfiler(self.config)
        self.logger = get_logger(f"{__name__}.SheetAnalyzer")

    def analyze_sheet(self, name: str, grid: Sequence[Sequence[Any]]) -> SheetAnalysis:
        """Analyze one sheet.

        Args:
            name: Sheet name
            grid: Row-major cell values; row 0 holds the headers

        Returns:
            SheetAnalysis with column profiles, quality score, issues and
            per-column statistics
        """
        if len(grid) == 0:
            self.logger.warning(f"Sheet '{name}' is empty")
            return SheetAnalysis(
                name=name,
                quality_score=0,
                issues=[EMPTY_SHEET_ISSUE]
            )

        column_count = max(len(row) for row in grid)
        headers = self._pad(grid[0], column_count)
        data_rows = [self._pad(row, column_count) for row in grid[1:]]

        profiles: List[ColumnProfile] = []
        statistics: Dict[str, ColumnStatistics] = {}
        for index in range(column_count):
            values = [row[index] for row in data_rows]
            profile = self.column_profiler.analyze_column(headers[index], values, index)
            profiles.append(profile)
            # Later duplicates overwrite earlier ones; duplicates are reported as an issue
            statistics[profile.name] = self.column_profiler.calculate_statistics(
                values, profile.data_type
            )

        quality_score, issues = self._calculate_quality(profiles)

        self.logger.info(
            f"Sheet '{name}' analyzed: {len(data_rows)} rows, "
            f"{column_count} columns, quality score {quality_score}"
        )

        return SheetAnalysis(
            name=name,
            row_count=len(data_rows),
            column_count=column_count,
            columns=profiles,
            quality_score=quality_score,
            issues=issues,
            statistics=statistics
        )

    def _calculate_quality(self, profiles: List[ColumnProfile]) -> Tuple[int, List[str]]:
        """Apply each penalty rule once and collect the matching issues."""
        score = MAX_QUALITY_SCORE
        issues = []

        missing_headers = [p for p in profiles if p.header_missing]
        if missing_headers:
            score -= PENALTY_MISSING_HEADERS
            issues.append(f"Missing headers in {len(missing_headers)} column(s)")

        high_null = [
            p.name for p in profiles
            if p.missing_percentage > self.config.high_null_threshold
        ]
        if high_null:
            score -= PENALTY_HIGH_NULL_COLUMNS
            issues.append(
                f"High null rate (>{self.config.high_null_threshold:g}%) in columns: "
                f"{', '.join(high_null)}"
            )

        with_format_issues = [p.name for p in profiles if p.format_issues]
        if with_format_issues:
            score -= PENALTY_FORMAT_ISSUES
            issues.append(f"Format issues in columns: {', '.join(with_format_issues)}")

        name_counts = Counter(p.name for p in profiles)
        duplicates = [column for column, count in name_counts.items() if count > 1]
        if duplicates:
            score -= PENALTY_DUPLICATE_COLUMNS
            issues.append(f"Duplicate column names: {', '.join(duplicates)}")

        return max(score, 0), issues

    @staticmethod
    def _pad(row: Sequence[Any], width: int) -> List[Any]:
        row = list(row)
        return row + [None] * (width - len(row))
