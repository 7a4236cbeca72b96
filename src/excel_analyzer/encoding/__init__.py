"""Script encoding checker and fixer."""

from .checker import (
    check_directory,
    check_encoding,
    check_file,
    find_script_files,
    is_script_file,
)
from .fixer import fix_directory, fix_file

__all__ = [
    "check_directory",
    "check_encoding",
    "check_file",
    "find_script_files",
    "is_script_file",
    "fix_directory",
    "fix_file",
]
