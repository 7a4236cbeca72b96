"""Logging for the analyzer and the script encoding tool.

Diagnostics go to stderr so reports and check output on stdout stay clean.
Setting ``EXCEL_ANALYZER_LOG_FILE`` adds a rotating DEBUG log on disk.
Libraries that log through the standard ``logging`` module (openpyxl, pandas)
are routed into the same loguru sinks.
"""

import logging
import sys
from typing import Optional

from loguru import logger

from .config import get_config

# Levels accepted by --log-level
LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


class InterceptHandler(logging.Handler):
    """Forwards standard logging records from third-party readers to loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip logging internals so the record points at the library call site
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(level: Optional[str] = None):
    """Configure sinks; ``level`` overrides the configured stderr level."""
    config = get_config()
    level = (level or config.log_level).upper()

    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
               "<level>{message}</level>",
        level=level,
        colorize=True,
    )

    # Full DEBUG trail of every workbook read and script fix, kept for 10 days
    if config.log_file:
        logger.add(
            config.log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="10 days",
            encoding="utf-8",
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def get_logger(name: Optional[str] = None):
    """Logger bound to a module name, shown in the ``{name}`` column."""
    if name:
        return logger.bind(name=name)
    return logger


setup_logging()
