"""Workbook reader turning spreadsheet files into raw cell grids."""

import csv
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import openpyxl
import pandas as pd

from .config import (
    CSV_EXTENSIONS, Config, EXCEL_EXTENSIONS, LEGACY_EXCEL_EXTENSIONS, get_config
)
from .logging import get_logger

logger = get_logger(__name__)

Grid = List[List[Any]]

_CSV_INTEGER = re.compile(r'^[+-]?\d+$')
_CSV_FLOAT = re.compile(r'^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$')


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be parsed."""


class WorkbookReader:
    """Loads every sheet of a workbook as a row-major grid of raw values."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()

    @property
    def supported_extensions(self) -> List[str]:
        return EXCEL_EXTENSIONS + LEGACY_EXCEL_EXTENSIONS + CSV_EXTENSIONS

    def read(self, file_path: Union[str, Path]) -> Dict[str, Grid]:
        """Read a workbook into ``{sheet name: grid}`` in workbook order.

        Row 0 of each grid holds the header cells. Blank cells are ``None``.

        Raises:
            FileNotFoundError: The file does not exist
            ValueError: Unsupported extension or file too large
            WorkbookReadError: The parser failed
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_path}")

        extension = file_path.suffix.lower()
        if extension not in self.supported_extensions:
            raise ValueError(f"Unsupported file format: {file_path.suffix}")

        file_size = file_path.stat().st_size
        if file_size > self.config.max_file_size_mb * 1024 * 1024:
            raise ValueError(
                f"File too large: {file_size / (1024*1024):.1f}MB > {self.config.max_file_size_mb}MB"
            )

        logger.info(f"Reading workbook: {file_path.name}")
        try:
            if extension in EXCEL_EXTENSIONS:
                sheets = self._read_excel(file_path)
            elif extension in LEGACY_EXCEL_EXTENSIONS:
                sheets = self._read_legacy_excel(file_path)
            else:
                sheets = self._read_csv(file_path)
        except Exception as e:
            logger.error(f"Error reading workbook {file_path}: {e}")
            raise WorkbookReadError(f"Failed to read {file_path.name}: {e}") from e

        return {name: self._trim(grid) for name, grid in sheets.items()}

    def _read_excel(self, file_path: Path) -> Dict[str, Grid]:
        # data_only gives cached formula results instead of formula text
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
        try:
            return {
                sheet_name: [
                    list(row) for row in workbook[sheet_name].iter_rows(values_only=True)
                ]
                for sheet_name in workbook.sheetnames
            }
        finally:
            workbook.close()

    def _read_legacy_excel(self, file_path: Path) -> Dict[str, Grid]:
        frames = pd.read_excel(file_path, sheet_name=None, header=None, engine="xlrd")
        return {
            str(sheet_name): df.astype(object).values.tolist()
            for sheet_name, df in frames.items()
        }

    def _read_csv(self, file_path: Path) -> Dict[str, Grid]:
        # Width of the widest record, so rows longer than the header row parse
        with open(file_path, newline="", encoding="utf-8-sig") as handle:
            width = max((len(record) for record in csv.reader(handle)), default=0)
        if width == 0:
            return {file_path.stem: []}

        df = pd.read_csv(
            file_path,
            header=None,
            names=range(width),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding="utf-8-sig"
        )
        grid = [[self._coerce_csv_value(v) for v in row] for row in df.values.tolist()]
        return {file_path.stem: grid}

    @staticmethod
    def _coerce_csv_value(value: Any) -> Any:
        """Give CSV text the types a spreadsheet would on open."""
        # Short records are padded with NaN
        if not isinstance(value, str):
            return None
        text = value.strip()
        if text == "":
            return None
        if _CSV_INTEGER.match(text):
            return int(text)
        if _CSV_FLOAT.match(text):
            return float(text)
        if text.lower() in ("true", "false"):
            return text.lower() == "true"
        return value

    @staticmethod
    def _trim(grid: Iterable[Iterable[Any]]) -> Grid:
        """Drop trailing empty rows and trailing empty columns."""
        rows = [list(row) for row in grid]

        def is_blank(value: Any) -> bool:
            return value is None or value == "" or (isinstance(value, float) and value != value)

        while rows and all(is_blank(v) for v in rows[-1]):
            rows.pop()

        width = 0
        for row in rows:
            for position, value in enumerate(row):
                if not is_blank(value):
                    width = max(width, position + 1)

        return [row[:width] for row in rows]
