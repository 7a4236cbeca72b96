"""
Script encoding checker.

Checks whether script files (PowerShell ``.ps1`` by default) carry a UTF-8
byte-order mark. Windows PowerShell 5.1 reads BOM-less files in the ANSI
code page, which corrupts any non-ASCII text in them.
"""

import codecs
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from ..models.encoding import EncodingCheckResult, EncodingStatus, EncodingSummary
from ..utils.config import get_config
from ..utils.logging import get_logger

logger = get_logger(__name__)

STATUS_MESSAGES = {
    EncodingStatus.UTF8_BOM: "✓ UTF-8 with BOM",
    EncodingStatus.UTF8_NO_BOM: "⚠ UTF-8 without BOM (may cause issues)",
    EncodingStatus.UTF16_LE: "⚠ UTF-16 LE",
    EncodingStatus.UTF16_BE: "⚠ UTF-16 BE",
    EncodingStatus.UNKNOWN: "✗ Unknown encoding",
}


def check_encoding(file_path: Union[str, Path]) -> Tuple[EncodingStatus, str]:
    """Detect the encoding of a file from its leading bytes."""
    try:
        data = Path(file_path).read_bytes()
    except OSError as e:
        logger.warning(f"Could not read {file_path}: {e}")
        return EncodingStatus.ERROR, f"✗ Error: {e}"

    if data.startswith(codecs.BOM_UTF8):
        status = EncodingStatus.UTF8_BOM
    elif data.startswith(codecs.BOM_UTF16_LE):
        status = EncodingStatus.UTF16_LE
    elif data.startswith(codecs.BOM_UTF16_BE):
        status = EncodingStatus.UTF16_BE
    else:
        try:
            data.decode("utf-8")
            status = EncodingStatus.UTF8_NO_BOM
        except UnicodeDecodeError:
            status = EncodingStatus.UNKNOWN

    return status, STATUS_MESSAGES[status]


def is_script_file(file_path: Union[str, Path], extensions: Optional[Iterable[str]] = None) -> bool:
    """Check the extension against the configured script extensions."""
    if extensions is None:
        extensions = get_config().script_extensions
    return Path(file_path).suffix.lower() in {ext.lower() for ext in extensions}


def check_file(
    file_path: Union[str, Path],
    extensions: Optional[Iterable[str]] = None
) -> Optional[EncodingCheckResult]:
    """Check a single script file; non-script files yield ``None``."""
    if not is_script_file(file_path, extensions):
        return None

    status, message = check_encoding(file_path)
    return EncodingCheckResult(path=str(file_path), status=status, message=message)


def find_script_files(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None
) -> List[Path]:
    """Recursively find all script files in a directory."""
    return sorted(
        path for path in Path(directory).rglob("*")
        if path.is_file() and is_script_file(path, extensions)
    )


def check_directory(
    directory: Union[str, Path],
    extensions: Optional[Iterable[str]] = None
) -> EncodingSummary:
    """Check every script file below ``directory``."""
    counts = {status: 0 for status in EncodingStatus}
    results = []

    for script_file in find_script_files(directory, extensions):
        result = check_file(script_file, extensions)
        if result:
            counts[result.status] += 1
            results.append(result)

    logger.debug(f"Checked {len(results)} script file(s) in {directory}")
    return EncodingSummary(counts=counts, results=results)
