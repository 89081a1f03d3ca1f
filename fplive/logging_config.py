"""Logging setup for the FPLive scorer and CLI."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

LOGGER_NAME = 'fplive'

CONSOLE_FORMAT = '%(levelname)s: %(message)s'
FILE_FORMAT = '%(asctime)s %(levelname)-8s %(name)s (%(module)s:%(lineno)d) %(message)s'


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def log_file_path(log_dir: Path) -> Path:
    """Timestamped log file for one scoring run, e.g. ``fplive_20241012_151500.log``."""
    return log_dir / time.strftime('fplive_%Y%m%d_%H%M%S.log')


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
) -> logging.Logger:
    """
    Configure the ``fplive`` logger for a scoring run.

    Calling it again replaces the handlers from the previous call, so the
    CLI can reconfigure verbosity without duplicating output.

    Args:
        log_dir: Where to write the run log (default: ./logs)
        level: Minimum level for every handler
        log_to_file: Also write a timestamped run log
        log_to_console: Echo messages to stdout

    Returns:
        The ``fplive`` logger

    Example:
        from fplive.logging_config import setup_logging
        logger = setup_logging(level=logging.DEBUG)
        logger.debug("Substitution decisions will be shown")
    """
    logger = logging.getLogger(LOGGER_NAME)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.setLevel(level)

    if log_to_console:
        logger.addHandler(_handler(logging.StreamHandler(sys.stdout), level, CONSOLE_FORMAT))

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file_path(log_dir)), level, FILE_FORMAT))

    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Get a logger in the ``fplive`` hierarchy."""
    if name != LOGGER_NAME and not name.startswith(f'{LOGGER_NAME}.'):
        name = f'{LOGGER_NAME}.{name}'
    return logging.getLogger(name)
