"""Script encoding fixer that rewrites files as UTF-8 with BOM."""

import codecs
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .checker import check_encoding, find_script_files
from ..models.encoding import EncodingFixResult, EncodingStatus, FixAction
from ..utils.logging import get_logger

logger = get_logger(__name__)

_UTF16_CODECS = {
    EncodingStatus.UTF16_LE: "utf-16-le",
    EncodingStatus.UTF16_BE: "utf-16-be",
}


def fix_file(file_path: Union[str, Path], dry_run: bool = False) -> EncodingFixResult:
    """Ensure a file is UTF-8 with BOM.

    BOM-less UTF-8 gets the BOM prepended, UTF-16 is re-encoded. Files with
    an undetectable encoding are skipped rather than guessed at.
    """
    file_path = Path(file_path)
    status, _ = check_encoding(file_path)

    def result(action: FixAction, error: Optional[str] = None) -> EncodingFixResult:
        return EncodingFixResult(
            path=str(file_path),
            original_status=status,
            action=action,
            dry_run=dry_run,
            error=error
        )

    if status == EncodingStatus.UTF8_BOM:
        return result(FixAction.UNCHANGED)
    if status == EncodingStatus.ERROR:
        return result(FixAction.FAILED, "File could not be read")
    if status == EncodingStatus.UNKNOWN:
        logger.warning(f"Skipping {file_path}: unknown encoding")
        return result(FixAction.SKIPPED)

    action = FixAction.ADDED_BOM if status == EncodingStatus.UTF8_NO_BOM else FixAction.CONVERTED
    if dry_run:
        return result(action)

    try:
        data = file_path.read_bytes()
        if status == EncodingStatus.UTF8_NO_BOM:
            file_path.write_bytes(codecs.BOM_UTF8 + data)
        else:
            bom = codecs.BOM_UTF16_LE if status == EncodingStatus.UTF16_LE else codecs.BOM_UTF16_BE
            text = data[len(bom):].decode(_UTF16_CODECS[status])
            file_path.write_bytes(codecs.BOM_UTF8 + text.encode("utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to fix {file_path}: {e}")
        return result(FixAction.FAILED, str(e))

    logger.info(f"Fixed {file_path} ({action.value})")
    return result(action)


def fix_directory(
    directory: Union[str, Path],
    dry_run: bool = False,
    extensions: Optional[Iterable[str]] = None
) -> List[EncodingFixResult]:
    """Fix every script file below ``directory``."""
    return [
        fix_file(script_file, dry_run=dry_run)
        for script_file in find_script_files(directory, extensions)
    ]
