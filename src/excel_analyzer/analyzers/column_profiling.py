"""Column profiler for inferring column types, format issues and statistics."""

import re
from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from ..models.base import (
    Cell, CellKind, ColumnProfile, ColumnStatistics, DataType,
    NUMERIC_TYPES, TopValue, to_cell
)
from ..utils.config import Config, DEFAULT_COLUMN_PREFIX, get_config
from ..utils.logging import get_logger

DATE_PATTERNS = [
    re.compile(r'^\d{4}-\d{2}-\d{2}'),  # YYYY-MM-DD
    re.compile(r'^\d{2}/\d{2}/\d{4}'),  # MM/DD/YYYY
    re.compile(r'^\d{2}-\d{2}-\d{4}'),  # MM-DD-YYYY
]
EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
NUMBER_PATTERN = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')
BOOLEAN_TOKENS = {'true', 'false', 'yes', 'no', '1', '0'}

MAX_OUTLIER_SAMPLES = 5


class ColumnProfiler:
    """Profiles a single column: type, missing values, samples, issues and statistics."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self.logger = get_logger(f"{__name__}.ColumnProfiler")

    def analyze_column(
        self,
        header: Any,
        values: Sequence[Any],
        index: int
    ) -> ColumnProfile:
        """Analyze a single column and create profile.

        Args:
            header: Raw header cell; blank headers get ``Column_<index + 1>``
            values: Raw data cells of the column, header excluded
            index: 0-based column position in the sheet
        """
        cells = [to_cell(v) for v in values]
        present = [c for c in cells if not c.is_missing]

        name = self._header_text(header)
        header_missing = not name
        if header_missing:
            name = f"{DEFAULT_COLUMN_PREFIX}{index + 1}"

        total_count = len(cells)
        missing_count = total_count - len(present)
        missing_percentage = (
            round(missing_count / total_count * 100, 2) if total_count > 0 else 0.0
        )

        # First-seen order of unique values
        unique: Dict[Any, Any] = {}
        for cell in present:
            unique.setdefault(cell.key, cell.value)
        sample_values = list(unique.values())[:self.config.sample_values_limit]

        data_type = self._infer_data_type(present)
        format_issues = self._find_format_issues(present, data_type)

        self.logger.debug(
            f"Column '{name}': type={data_type.value}, "
            f"missing={missing_count}/{total_count}, distinct={len(unique)}"
        )

        return ColumnProfile(
            name=name,
            index=index,
            data_type=data_type,
            total_count=total_count,
            distinct_count=len(unique),
            missing_count=missing_count,
            missing_percentage=missing_percentage,
            sample_values=sample_values,
            format_issues=format_issues,
            header_missing=header_missing
        )

    def detect_data_type(self, values: Sequence[Any]) -> DataType:
        """Infer the semantic type of a column of raw values."""
        return self._infer_data_type(self._present(values))

    def detect_format_issues(self, values: Sequence[Any], data_type: DataType) -> List[str]:
        """Detect stylistic and consistency problems in a column."""
        return self._find_format_issues(self._present(values), data_type)

    def calculate_statistics(self, values: Sequence[Any], data_type: DataType) -> ColumnStatistics:
        """Calculate statistics based on data type."""
        present = self._present(values)
        stats: Dict[str, Any] = {}

        if data_type in NUMERIC_TYPES:
            numbers = [c.value for c in present if c.kind == CellKind.NUMBER]
            # A mixed column may hold no numbers at all
            if numbers:
                stats.update(self._numeric_statistics(numbers))

        elif data_type == DataType.TEXT:
            lengths = [len(c.value) for c in present if c.kind == CellKind.TEXT]
            if lengths:
                stats.update({
                    'min_length': min(lengths),
                    'max_length': max(lengths),
                    'avg_length': sum(lengths) / len(lengths)
                })

        stats['top_values'] = self._top_values(present)
        return ColumnStatistics(**stats)

    @staticmethod
    def _present(values: Sequence[Any]) -> List[Cell]:
        cells = (to_cell(v) for v in values)
        return [c for c in cells if not c.is_missing]

    @staticmethod
    def _header_text(header: Any) -> str:
        cell = to_cell(header)
        if cell.is_missing:
            return ""
        value = cell.value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        text = str(value)
        return text if text.strip() else ""

    def _infer_data_type(self, present: List[Cell]) -> DataType:
        if not present:
            return DataType.EMPTY

        kinds = {c.kind for c in present}
        if len(kinds) > 1:
            return DataType.MIXED

        kind = kinds.pop()
        if kind == CellKind.NUMBER:
            if all(self._is_whole_number(c.value) for c in present):
                return DataType.INTEGER
            return DataType.FLOAT

        if kind == CellKind.TEXT:
            texts = [c.value for c in present]
            if all(self._is_date_string(t) for t in texts):
                return DataType.DATE
            if all(EMAIL_PATTERN.match(t) for t in texts):
                return DataType.EMAIL
            if all(self._is_boolean_string(t) for t in texts):
                return DataType.BOOLEAN
            return DataType.TEXT

        if kind == CellKind.BOOLEAN:
            return DataType.BOOLEAN

        return DataType.UNKNOWN

    def _find_format_issues(self, present: List[Cell], data_type: DataType) -> List[str]:
        issues = []

        if data_type == DataType.MIXED:
            kinds = sorted({c.kind.value for c in present})
            issues.append(f"Mixed data types detected ({', '.join(kinds)})")

        elif data_type == DataType.TEXT:
            texts = [c.value for c in present if c.kind == CellKind.TEXT]
            if not texts:
                return issues

            padded = sum(1 for t in texts if t != t.strip())
            if padded:
                issues.append(f"Leading or trailing whitespace in {padded} value(s)")

            lowercase = sum(1 for t in texts if t == t.lower())
            uppercase = sum(1 for t in texts if t == t.upper())
            if 0 < lowercase < len(texts) and 0 < uppercase < len(texts):
                issues.append("Inconsistent casing (mixed lowercase and uppercase values)")

            numeric = sum(1 for t in texts if self._is_number_string(t))
            if numeric / len(texts) > self.config.numeric_text_ratio:
                issues.append(f"Numeric values stored as text ({numeric} of {len(texts)})")

        return issues

    def _numeric_statistics(self, numbers: List[float]) -> Dict[str, Any]:
        array = np.asarray(numbers, dtype=float)
        mean = float(array.mean())
        # Population standard deviation
        std_dev = float(array.std())

        ordered = sorted(numbers)
        median = ordered[len(ordered) // 2]

        threshold = self.config.outlier_std_threshold * std_dev
        outliers = [v for v in numbers if abs(v - mean) > threshold]

        return {
            'min': ordered[0],
            'max': ordered[-1],
            'mean': mean,
            'median': median,
            'std_dev': std_dev,
            'outlier_count': len(outliers),
            'outliers': outliers[:MAX_OUTLIER_SAMPLES]
        }

    def _top_values(self, present: List[Cell]) -> List[TopValue]:
        if not present:
            return []

        # Counter.most_common keeps first-seen order among equal counts
        counts = Counter(c.key for c in present)
        total = len(present)
        return [
            TopValue(
                value=key[1],
                count=count,
                percentage=round(count / total * 100, 2)
            )
            for key, count in counts.most_common(self.config.top_values_limit)
        ]

    @staticmethod
    def _is_whole_number(value: float) -> bool:
        if isinstance(value, int):
            return True
        return float(value).is_integer()

    @staticmethod
    def _is_date_string(value: str) -> bool:
        """Check if string starts like a date."""
        return any(pattern.match(value) for pattern in DATE_PATTERNS)

    @staticmethod
    def _is_boolean_string(value: str) -> bool:
        """Check if string represents a boolean."""
        return value.lower() in BOOLEAN_TOKENS

    @staticmethod
    def _is_number_string(value: str) -> bool:
        """Check if string parses as a decimal number."""
        return bool(NUMBER_PATTERN.match(value.strip()))
