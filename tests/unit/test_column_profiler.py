"""Unit tests for the Column Profiler."""

import math

import pytest

from excel_analyzer.analyzers.column_profiling import ColumnProfiler
from excel_analyzer.models.base import DataType
from excel_analyzer.utils.config import Config


class TestColumnProfiler:
    """Test suite for Column Profiler."""

    @pytest.fixture
    def profiler(self):
        """Create Column Profiler instance with default settings."""
        return ColumnProfiler(Config())

    # -- type inference -------------------------------------------------

    def test_detect_integer(self, profiler):
        assert profiler.detect_data_type([1, 2, 3]) == DataType.INTEGER

    def test_detect_whole_floats_as_integer(self, profiler):
        assert profiler.detect_data_type([1.0, 2.0, None]) == DataType.INTEGER

    def test_detect_float(self, profiler):
        assert profiler.detect_data_type([1.5, 2, 3]) == DataType.FLOAT

    def test_detect_empty(self, profiler):
        """Missing markers only, or nothing at all, is empty."""
        assert profiler.detect_data_type([None, "", None]) == DataType.EMPTY
        assert profiler.detect_data_type([]) == DataType.EMPTY

    def test_detect_mixed(self, profiler):
        assert profiler.detect_data_type([1, "a"]) == DataType.MIXED
        assert profiler.detect_data_type([True, 1]) == DataType.MIXED

    def test_detect_native_boolean(self, profiler):
        assert profiler.detect_data_type([True, False, None]) == DataType.BOOLEAN

    def test_detect_boolean_tokens(self, profiler):
        assert profiler.detect_data_type(["yes", "No", "1", "TRUE"]) == DataType.BOOLEAN

    def test_detect_date(self, profiler):
        """Date patterns only need to match as a prefix."""
        values = ["2024-01-01", "12/25/2024", "01-15-2024", "2024-03-05 10:30"]
        assert profiler.detect_data_type(values) == DataType.DATE

    def test_detect_email(self, profiler):
        assert profiler.detect_data_type(["a@b.com", "x.y@z.org"]) == DataType.EMAIL

    def test_detect_text(self, profiler):
        assert profiler.detect_data_type(["apple", "banana"]) == DataType.TEXT

    def test_date_takes_priority_over_text(self, profiler):
        assert profiler.detect_data_type(["2024-01-01", "hello"]) == DataType.TEXT

    @pytest.mark.parametrize("values", [
        [1, 2.5, 3],
        ["a", "b", "2024-01-01"],
        [True, False, True],
        ["x@y.com", "not an email"],
    ])
    def test_uniform_kind_is_never_mixed(self, profiler, values):
        assert profiler.detect_data_type(values) != DataType.MIXED

    # -- format issues --------------------------------------------------

    def test_numeric_text_flagged(self, profiler):
        values = ["1", "2", "3"]
        data_type = profiler.detect_data_type(values)
        issues = profiler.detect_format_issues(values, data_type)

        assert data_type == DataType.TEXT
        assert len(issues) == 1
        assert issues[0].startswith("Numeric values stored as text")

    def test_native_numbers_have_no_issues(self, profiler):
        values = [1, 2, 3]
        data_type = profiler.detect_data_type(values)
        assert profiler.detect_format_issues(values, data_type) == []

    def test_numeric_text_ratio_is_strict(self, profiler):
        """Exactly 80% numeric text does not trigger the issue."""
        values = ["1", "2", "3", "4", "x"]
        assert profiler.detect_format_issues(values, DataType.TEXT) == []

    def test_whitespace_flagged(self, profiler):
        issues = profiler.detect_format_issues([" a", "b"], DataType.TEXT)
        assert len(issues) == 1
        assert issues[0].startswith("Leading or trailing whitespace")

    def test_inconsistent_casing_flagged(self, profiler):
        issues = profiler.detect_format_issues(["abc", "ABC", "Abc"], DataType.TEXT)
        assert any("Inconsistent casing" in issue for issue in issues)

    def test_casing_ignored_when_one_group_covers_all(self, profiler):
        issues = profiler.detect_format_issues(["abc", "123"], DataType.TEXT)
        assert not any("casing" in issue for issue in issues)

    def test_issues_accumulate(self, profiler):
        issues = profiler.detect_format_issues([" abc", "ABC", "Abc"], DataType.TEXT)
        assert len(issues) == 2

    def test_mixed_flagged(self, profiler):
        issues = profiler.detect_format_issues([1, "a"], DataType.MIXED)
        assert len(issues) == 1
        assert issues[0].startswith("Mixed data types")

    def test_other_types_not_checked(self, profiler):
        assert profiler.detect_format_issues([" yes", "no"], DataType.BOOLEAN) == []

    # -- statistics -----------------------------------------------------

    def test_integer_statistics(self, profiler):
        stats = profiler.calculate_statistics([1, 2, 3], DataType.INTEGER)

        assert stats.min == 1
        assert stats.max == 3
        assert stats.mean == 2
        assert stats.median == 2
        assert stats.std_dev == pytest.approx(0.8165, abs=1e-3)
        assert stats.outlier_count == 0
        assert stats.min_length is None

    def test_median_uses_upper_middle_element(self, profiler):
        assert profiler.calculate_statistics([1, 2, 3, 4], DataType.INTEGER).median == 3
        assert profiler.calculate_statistics([4, 1, 3, 2], DataType.INTEGER).median == 3

    def test_std_dev_is_population(self, profiler):
        values = [2, 4, 4, 4, 5, 5, 7, 9]
        stats = profiler.calculate_statistics(values, DataType.INTEGER)
        recomputed = math.sqrt(sum((v - stats.mean) ** 2 for v in values) / len(values))

        assert stats.mean == 5
        assert stats.std_dev == pytest.approx(2.0)
        assert stats.std_dev == pytest.approx(recomputed)

    def test_outlier_boundary(self, profiler):
        """792 from the mean is well inside 3 x 396."""
        stats = profiler.calculate_statistics([10, 10, 10, 10, 1000], DataType.INTEGER)

        assert stats.mean == pytest.approx(208)
        assert stats.std_dev == pytest.approx(396)
        assert stats.outlier_count == 0
        assert stats.outliers == []

    def test_outlier_detected(self, profiler):
        values = [10] * 20 + [1000]
        stats = profiler.calculate_statistics(values, DataType.INTEGER)

        assert stats.outlier_count == 1
        assert stats.outliers == [1000]

    def test_mixed_uses_numeric_subset(self, profiler):
        stats = profiler.calculate_statistics([1, "a", 3, True], DataType.MIXED)

        assert stats.min == 1
        assert stats.max == 3
        assert stats.mean == 2

    def test_mixed_without_numbers_has_no_numeric_stats(self, profiler):
        stats = profiler.calculate_statistics(["a", True], DataType.MIXED)

        assert not stats.has_numeric
        assert stats.mean is None
        assert len(stats.top_values) == 2

    def test_text_length_statistics(self, profiler):
        stats = profiler.calculate_statistics(["a", "bbb", None], DataType.TEXT)

        assert stats.min_length == 1
        assert stats.max_length == 3
        assert stats.avg_length == 2.0
        assert not stats.has_numeric

    def test_top_values_order(self, profiler):
        stats = profiler.calculate_statistics(list("aabbbc"), DataType.TEXT)

        assert [t.value for t in stats.top_values] == ["b", "a", "c"]
        assert [t.count for t in stats.top_values] == [3, 2, 1]
        assert stats.top_values[0].percentage == 50.0
        assert stats.top_values[2].percentage == pytest.approx(16.67)

    def test_top_values_ties_keep_first_seen_order(self, profiler):
        stats = profiler.calculate_statistics(["x", "y", "x", "y", "z"], DataType.TEXT)
        assert [t.value for t in stats.top_values] == ["x", "y", "z"]

    def test_top_values_limited_to_ten(self, profiler):
        values = [f"v{i}" for i in range(15)] + ["v0"]
        stats = profiler.calculate_statistics(values, DataType.TEXT)

        assert len(stats.top_values) == 10
        assert stats.top_values[0].value == "v0"
        assert sum(t.percentage for t in stats.top_values) <= 100

    def test_top_values_keep_number_and_text_apart(self, profiler):
        stats = profiler.calculate_statistics([1, "1", True], DataType.MIXED)
        assert len(stats.top_values) == 3

    def test_empty_statistics(self, profiler):
        stats = profiler.calculate_statistics([None, None], DataType.EMPTY)
        assert stats.top_values == []
        assert not stats.has_numeric

    # -- column profiling -----------------------------------------------

    def test_analyze_column_integer(self, profiler):
        profile = profiler.analyze_column("amount", [1, 2, 3, 4, 5], 0)

        assert profile.name == "amount"
        assert profile.index == 0
        assert profile.data_type == DataType.INTEGER
        assert profile.missing_percentage == 0.0
        assert profile.distinct_count == 5
        assert profile.format_issues == []
        assert not profile.header_missing

    def test_analyze_column_with_nulls(self, profiler):
        profile = profiler.analyze_column("with_nulls", [1, None, 3, "", 5], 1)

        assert profile.missing_count == 2
        assert profile.missing_percentage == 40.0
        assert profile.distinct_count == 3
        assert profile.missing_count + profile.non_missing_count == profile.total_count

    def test_analyze_column_all_missing(self, profiler):
        profile = profiler.analyze_column("blank", [None, "", None], 0)

        assert profile.data_type == DataType.EMPTY
        assert profile.distinct_count == 0
        assert profile.missing_percentage == 100.0
        assert profile.sample_values == []

    def test_analyze_column_without_rows(self, profiler):
        profile = profiler.analyze_column("A", [], 0)

        assert profile.total_count == 0
        assert profile.missing_percentage == 0.0
        assert profile.data_type == DataType.EMPTY

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_blank_header_gets_default_name(self, profiler, header):
        profile = profiler.analyze_column(header, [1], 2)

        assert profile.name == "Column_3"
        assert profile.header_missing

    def test_numeric_header(self, profiler):
        assert profiler.analyze_column(2024.0, [1], 0).name == "2024"

    def test_sample_values_first_seen_unique(self, profiler):
        profile = profiler.analyze_column("n", [3, 1, 3, 2, 5, 6, 7, 8], 0)
        assert profile.sample_values == [3, 1, 2, 5, 6]

    def test_distinct_count_separates_kinds(self, profiler):
        profile = profiler.analyze_column("m", [1, "1", True, 1], 0)
        assert profile.distinct_count == 3
