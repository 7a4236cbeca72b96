"""Utility modules for the Excel Analyzer."""

from .config import Config, get_config
from .logging import get_logger, setup_logging

__all__ = [
    "Config",
    "get_config",
    "get_logger",
    "setup_logging",
]
