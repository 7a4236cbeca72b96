"""Unit tests for the Sheet Analyzer."""

import pytest

from excel_analyzer.analyzers.sheet_analysis import EMPTY_SHEET_ISSUE, SheetAnalyzer
from excel_analyzer.models.base import DataType
from excel_analyzer.utils.config import Config


class TestSheetAnalyzer:
    """Test suite for Sheet Analyzer."""

    @pytest.fixture
    def analyzer(self):
        """Create Sheet Analyzer instance with default settings."""
        return SheetAnalyzer(Config())

    def test_empty_sheet(self, analyzer):
        analysis = analyzer.analyze_sheet("Empty", [])

        assert analysis.quality_score == 0
        assert analysis.issues == [EMPTY_SHEET_ISSUE]
        assert analysis.columns == []
        assert analysis.row_count == 0
        assert analysis.statistics == {}

    def test_clean_sheet(self, analyzer):
        grid = [
            ["id", "name"],
            [1, "Alice"],
            [2, "Bob"],
        ]
        analysis = analyzer.analyze_sheet("People", grid)

        assert analysis.name == "People"
        assert analysis.row_count == 2
        assert analysis.column_count == 2
        assert analysis.quality_score == 100
        assert analysis.issues == []
        assert [c.data_type for c in analysis.columns] == [DataType.INTEGER, DataType.TEXT]
        assert list(analysis.statistics) == ["id", "name"]
        assert analysis.statistics["id"].mean == 1.5

    def test_duplicate_names_penalized_once(self, analyzer):
        analysis = analyzer.analyze_sheet("Dup", [["A", "A", "B"], [1, 2, 3]])

        duplicate_issues = [i for i in analysis.issues if i.startswith("Duplicate")]
        assert duplicate_issues == ["Duplicate column names: A"]
        assert analysis.quality_score == 85

    def test_missing_header(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["A", None], [1, 2]])

        assert analysis.columns[1].name == "Column_2"
        assert analysis.issues == ["Missing headers in 1 column(s)"]
        assert analysis.quality_score == 90

    def test_high_null_column(self, analyzer):
        grid = [["A", "B"], [1, None], [2, None], [3, 4]]
        analysis = analyzer.analyze_sheet("S", grid)

        assert analysis.issues == ["High null rate (>50%) in columns: B"]
        assert analysis.quality_score == 85

    def test_half_null_is_not_high(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["A", "B"], [1, None], [2, 3]])
        assert analysis.quality_score == 100

    def test_format_issue_column(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["code"], ["1"], ["2"]])

        assert analysis.issues == ["Format issues in columns: code"]
        assert analysis.quality_score == 90

    def test_all_rules_fire(self, analyzer):
        grid = [
            ["A", "A", None, "T"],
            [1, 2, None, " x"],
            [3, 4, None, "y"],
        ]
        analysis = analyzer.analyze_sheet("S", grid)

        assert len(analysis.issues) == 4
        assert analysis.quality_score == 50
        assert 0 <= analysis.quality_score <= 100

    def test_ragged_rows_are_padded(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["A", "B", "C"], [1], [2, 3]])

        assert analysis.column_count == 3
        assert analysis.columns[2].missing_percentage == 100.0
        assert analysis.columns[1].missing_percentage == 50.0
        assert analysis.quality_score == 85

    def test_header_only_sheet(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["A", "B"]])

        assert analysis.row_count == 0
        assert analysis.column_count == 2
        assert all(c.data_type == DataType.EMPTY for c in analysis.columns)
        assert analysis.quality_score == 100

    def test_duplicate_statistics_later_column_wins(self, analyzer):
        analysis = analyzer.analyze_sheet("S", [["A", "A"], [1, "x"]])

        assert len(analysis.statistics) == 1
        assert analysis.statistics["A"].has_text
        assert not analysis.statistics["A"].has_numeric
