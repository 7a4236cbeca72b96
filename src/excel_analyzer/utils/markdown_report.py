"""
Markdown renderer for workbook analysis reports.

Turns a frozen ``AnalysisReport`` into a markdown document with a summary,
per-sheet quality information, column profiles and column statistics.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import pandas as pd

from .logging import get_logger
from ..analyzers.workbook_analysis import quality_grade
from ..models.base import AnalysisReport, ColumnStatistics, SheetAnalysis

logger = get_logger(__name__)


def format_file_size(size: int) -> str:
    """Format a byte count for humans."""
    value = float(size)
    for unit in ["B", "KB", "MB"]:
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


class MarkdownReportRenderer:
    """Renders analysis reports as markdown."""

    def __init__(self, max_cell_length: int = 50):
        """
        Initialize MarkdownReportRenderer.

        Args:
            max_cell_length: Maximum characters shown for a sample value
        """
        self.max_cell_length = max_cell_length

    def render(self, report: AnalysisReport) -> str:
        """Render the whole report."""
        markdown_content = []

        markdown_content.append(f"# Excel Analysis Report: {report.file_name}")
        markdown_content.append("")
        markdown_content.append(f"**Generated:** {report.timestamp.strftime('%Y-%m-%d %H:%M:%S')}")
        markdown_content.append(f"**File Size:** {format_file_size(report.file_size)}")
        markdown_content.append(f"**Total Sheets:** {len(report.sheets)}")
        markdown_content.append(
            f"**Overall Quality Score:** {report.overall_score:g}/100 "
            f"({quality_grade(report.overall_score)})"
        )
        markdown_content.append("")

        markdown_content.append("## Summary")
        markdown_content.append("")
        for line in report.summary:
            markdown_content.append(f"- {line}")
        markdown_content.append("")

        for sheet in report.sheets:
            markdown_content.extend(self._render_sheet(sheet))

        return '\n'.join(markdown_content)

    def write(self, report: AnalysisReport, output_path: Union[str, Path]) -> Path:
        """Render the report and write it to ``output_path``."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(report), encoding="utf-8")
        logger.info(f"Report written to {output_path}")
        return output_path

    def _render_sheet(self, sheet: SheetAnalysis) -> List[str]:
        markdown_content = []

        markdown_content.append(f"## Sheet: {sheet.name}")
        markdown_content.append("")
        markdown_content.append(f"**Dimensions:** {sheet.row_count} rows × {sheet.column_count} columns")
        markdown_content.append(
            f"**Quality Score:** {sheet.quality_score}/100 ({quality_grade(sheet.quality_score)})"
        )
        markdown_content.append("")

        markdown_content.append("### Issues")
        markdown_content.append("")
        if sheet.issues:
            for issue in sheet.issues:
                markdown_content.append(f"- ⚠️ {issue}")
        else:
            markdown_content.append("No issues detected.")
        markdown_content.append("")

        if not sheet.columns:
            return markdown_content

        markdown_content.append("### Columns")
        markdown_content.append("")
        rows = [
            {
                "Column": self._clean_cell_value(column.name),
                "Type": column.data_type.value,
                "Missing": f"{column.missing_count}/{column.total_count}",
                "Missing %": f"{column.missing_percentage:.2f}%",
                "Distinct": str(column.distinct_count),
                "Sample Values": ', '.join(
                    self._clean_cell_value(v) for v in column.sample_values
                ) or "N/A",
            }
            for column in sheet.columns
        ]
        markdown_content.append(self._table(rows))
        markdown_content.append("")

        flagged = [column for column in sheet.columns if column.format_issues]
        if flagged:
            markdown_content.append("### Format Issues")
            markdown_content.append("")
            for column in flagged:
                for issue in column.format_issues:
                    name = self._clean_cell_value(column.name)
                    markdown_content.append(f"- **{name}**: {issue}")
            markdown_content.append("")

        markdown_content.append("### Statistics")
        markdown_content.append("")
        for name, stats in sheet.statistics.items():
            markdown_content.extend(self._render_statistics(name, stats))

        return markdown_content

    def _render_statistics(self, name: str, stats: ColumnStatistics) -> List[str]:
        markdown_content = [f"#### {self._clean_cell_value(name)}", ""]

        metrics: List[Dict[str, str]] = []
        if stats.has_numeric:
            metrics.extend([
                {"Metric": "Min", "Value": self._format_number(stats.min)},
                {"Metric": "Max", "Value": self._format_number(stats.max)},
                {"Metric": "Mean", "Value": self._format_number(stats.mean)},
                {"Metric": "Median", "Value": self._format_number(stats.median)},
                {"Metric": "Std Dev", "Value": self._format_number(stats.std_dev)},
                {"Metric": "Outliers (>3σ)", "Value": str(stats.outlier_count)},
            ])
            if stats.outliers:
                metrics.append({
                    "Metric": "Outlier Samples",
                    "Value": ', '.join(self._format_number(v) for v in stats.outliers),
                })
        if stats.has_text:
            metrics.extend([
                {"Metric": "Min Length", "Value": str(stats.min_length)},
                {"Metric": "Max Length", "Value": str(stats.max_length)},
                {"Metric": "Avg Length", "Value": self._format_number(stats.avg_length)},
            ])

        if metrics:
            markdown_content.append(self._table(metrics))
            markdown_content.append("")

        if stats.top_values:
            markdown_content.append("**Top Values:**")
            markdown_content.append("")
            markdown_content.append(self._table([
                {
                    "Value": self._clean_cell_value(top.value),
                    "Count": str(top.count),
                    "Percentage": f"{top.percentage:.2f}%",
                }
                for top in stats.top_values
            ]))
            markdown_content.append("")
        elif not metrics:
            markdown_content.append("*No values*")
            markdown_content.append("")

        return markdown_content

    @staticmethod
    def _table(rows: List[Dict[str, str]]) -> str:
        return pd.DataFrame(rows).to_markdown(
            index=False, tablefmt='github', disable_numparse=True
        )

    @staticmethod
    def _format_number(value: Any) -> str:
        if value is None:
            return "N/A"
        if float(value).is_integer():
            return str(int(value))
        return f"{value:.2f}"

    def _clean_cell_value(self, value: Any) -> str:
        """Clean cell value for markdown display."""
        text = str(value).replace('|', '\\|').replace('\n', ' ')
        if len(text) > self.max_cell_length:
            text = text[:self.max_cell_length] + "..."
        return text
