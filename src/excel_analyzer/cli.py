"""Command line entry points for the workbook analyzer and the encoding tools."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .analyzers.workbook_analysis import WorkbookAnalyzer
from .encoding.checker import check_directory, check_file
from .encoding.fixer import fix_directory, fix_file
from .models.encoding import EncodingStatus, FixAction
from .utils.config import get_config
from .utils.logging import LOG_LEVELS, get_logger, setup_logging
from .utils.markdown_report import MarkdownReportRenderer
from .utils.workbook_reader import WorkbookReadError

logger = get_logger(__name__)

SEPARATOR = "=" * 80


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_analyze_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="excel-analyzer",
        description="Profile every column of a workbook and write a markdown quality report"
    )
    parser.add_argument("file", help="Workbook to analyze (.xlsx, .xlsm, .xls, .csv)")
    parser.add_argument("--output", "-o", help="Report path (default: <file>_analysis.md)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override the configured log level"
    )
    return parser


def analyze_main(argv: Optional[List[str]] = None) -> int:
    """Analyze a workbook and write the markdown report."""
    args = build_analyze_parser().parse_args(argv)
    if args.log_level:
        setup_logging(args.log_level)

    file_path = Path(args.file)
    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        return 1

    output_path = (
        Path(args.output) if args.output
        else file_path.with_name(f"{file_path.stem}_analysis.md")
    )

    try:
        report = WorkbookAnalyzer().analyze_file(file_path)
        MarkdownReportRenderer().write(report, output_path)
    except (FileNotFoundError, ValueError, WorkbookReadError, OSError) as e:
        logger.error(f"Analysis failed: {e}")
        print(f"Error: {e}")
        return 1

    print(f"📊 Analysis of {report.file_name} complete")
    for line in report.summary:
        print(f"  {line}")
    print(f"Report written to: {output_path}")
    return 0


def build_encoding_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="ps1-encoding",
        description="Check or fix the UTF-8 BOM of PowerShell scripts"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Report the encoding of script files")
    check_parser.add_argument("target", help="Script file or directory")

    fix_parser = subparsers.add_parser("fix", help="Rewrite script files as UTF-8 with BOM")
    fix_parser.add_argument("target", help="Script file or directory")
    fix_parser.add_argument("--dry-run", action="store_true", help="Show what would change")
    return parser


def encoding_main(argv: Optional[List[str]] = None) -> int:
    """Check or fix script file encodings."""
    args = build_encoding_parser().parse_args(argv)

    target = Path(args.target)
    if not target.exists():
        print(f"Error: {target} does not exist")
        return 1
    if not (target.is_file() or target.is_dir()):
        print(f"Error: {target} is neither a file nor directory")
        return 1

    if args.command == "check":
        return _run_check(target)
    return _run_fix(target, args.dry_run)


def _run_check(target: Path) -> int:
    print(f"Checking: {target}")
    print(SEPARATOR)

    if target.is_file():
        result = check_file(target)
        if result is None:
            extensions = ', '.join(get_config().script_extensions)
            print(f"Skipped: {target} is not a script file ({extensions})")
        else:
            print(f"{result.message:<40} {result.path}")
        return 0

    summary = check_directory(target)
    if not summary.results:
        print("No PowerShell files found.")
        return 0

    for result in summary.results:
        print(f"{result.message:<40} {result.path}")

    counts = summary.counts
    print(SEPARATOR)
    print("\nSummary:")
    print(f"  ✓ UTF-8 with BOM:    {counts[EncodingStatus.UTF8_BOM]}")
    print(f"  ⚠ UTF-8 without BOM: {counts[EncodingStatus.UTF8_NO_BOM]} (should be fixed)")
    print(f"  ⚠ UTF-16 LE:         {counts[EncodingStatus.UTF16_LE]}")
    print(f"  ⚠ UTF-16 BE:         {counts[EncodingStatus.UTF16_BE]}")
    print(f"  ✗ Unknown:           {counts[EncodingStatus.UNKNOWN]}")
    print(f"  ✗ Errors:            {counts[EncodingStatus.ERROR]}")

    if summary.needs_fix:
        print("\n💡 Run 'ps1-encoding fix' to add a UTF-8 BOM to files without it.")
        return 1
    return 0


def _run_fix(target: Path, dry_run: bool) -> int:
    if target.is_file():
        results = [fix_file(target, dry_run=dry_run)]
    else:
        results = fix_directory(target, dry_run=dry_run)

    if not results:
        print("No PowerShell files found.")
        return 0

    prefix = "[dry run] " if dry_run else ""
    for result in results:
        line = f"{prefix}{result.action.value:<10} {result.path}"
        if result.error:
            line += f" ({result.error})"
        print(line)

    changed = sum(1 for r in results if r.action in (FixAction.ADDED_BOM, FixAction.CONVERTED))
    failed = sum(1 for r in results if r.action == FixAction.FAILED)
    print(f"\n{prefix}{changed} file(s) fixed, {failed} failed, {len(results)} checked")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(analyze_main())
