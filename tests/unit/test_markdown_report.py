"""Unit tests for the Markdown Report Renderer."""

import pytest

from excel_analyzer.analyzers.workbook_analysis import WorkbookAnalyzer
from excel_analyzer.utils.config import Config
from excel_analyzer.utils.markdown_report import MarkdownReportRenderer, format_file_size


class TestMarkdownReportRenderer:
    """Test suite for Markdown Report Renderer."""

    @pytest.fixture
    def renderer(self):
        return MarkdownReportRenderer()

    @pytest.fixture
    def report(self):
        """Analysis report over one populated and one empty sheet."""
        sheets = {
            "Data": [
                ["id", "label", "code"],
                [1, "a|b", "1"],
                [2, "c", "2"],
                [1000, None, "3"],
            ],
            "Blank": [],
        }
        return WorkbookAnalyzer(Config()).analyze_workbook(
            sheets, file_name="book.xlsx", file_size=2048
        )

    def test_render_header_and_summary(self, renderer, report):
        markdown = renderer.render(report)

        assert markdown.startswith("# Excel Analysis Report: book.xlsx")
        assert "**File Size:** 2.0 KB" in markdown
        assert "## Summary" in markdown
        assert "- Sheets analyzed: 2" in markdown

    def test_render_sheet_sections(self, renderer, report):
        markdown = renderer.render(report)

        assert "## Sheet: Data" in markdown
        assert "**Dimensions:** 3 rows × 3 columns" in markdown
        assert "### Columns" in markdown
        assert "### Format Issues" in markdown
        assert "- **code**: Numeric values stored as text" in markdown
        assert "#### id" in markdown
        assert "**Top Values:**" in markdown
        assert "integer" in markdown

    def test_render_empty_sheet(self, renderer, report):
        markdown = renderer.render(report)

        assert "## Sheet: Blank" in markdown
        assert "- ⚠️ Sheet is empty" in markdown

    def test_pipes_are_escaped(self, renderer, report):
        assert "a\\|b" in renderer.render(report)

    def test_column_names_are_escaped(self, renderer):
        report = WorkbookAnalyzer(Config()).analyze_workbook(
            {"S": [["a|b", "c"], [1, 2]]}, file_name="book.xlsx"
        )

        markdown = renderer.render(report)

        assert "| a\\|b " in markdown
        assert "#### a\\|b" in markdown

    def test_long_values_truncated(self):
        renderer = MarkdownReportRenderer(max_cell_length=5)
        assert renderer._clean_cell_value("abcdefgh") == "abcde..."

    def test_write(self, renderer, report, tmp_path):
        output = renderer.write(report, tmp_path / "out" / "report.md")

        assert output.exists()
        assert output.read_text(encoding="utf-8") == renderer.render(report)

    @pytest.mark.parametrize("size,expected", [
        (512, "512 B"), (2048, "2.0 KB"), (3 * 1024 * 1024, "3.0 MB"),
    ])
    def test_format_file_size(self, size, expected):
        assert format_file_size(size) == expected
