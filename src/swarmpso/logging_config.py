"""
Logging configuration for swarmpso.

Usage:
    from swarmpso.logging_config import get_logger

    logger = get_logger(__name__)
    logger.info("Swarm constructed")

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached when an application (the grid runner, a script, a test session)
calls ``setup_logging`` or ``get_logger``.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER_NAME = 'swarmpso'

# Module-level flag to track if logging has been configured
_logging_configured = False


def setup_logging(
    level: int = logging.INFO,
    log_file: Path | str | None = None,
    console: bool = True,
) -> None:
    """
    Configure the ``swarmpso`` logger hierarchy.

    Args:
        level: Logging level (default: INFO)
        log_file: Optional path to an append-mode log file
        console: Whether to also log to stdout (default: True)
    """
    global _logging_configured

    if _logging_configured:
        return

    formatter = logging.Formatter(
        fmt='%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger in the ``swarmpso`` namespace, configuring logging first
    if nobody has yet.

    Example:
        >>> logger = get_logger('grid')
        >>> logger.info("Run %d finished: best_f=%.3e", run, best_f)
    """
    if not _logging_configured:
        setup_logging()

    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{name}')


def log_separator(logger: logging.Logger, title: str = '') -> None:
    """Log a visual separator line for readability."""
    if title:
        logger.info('=' * 20 + f' {title} ' + '=' * 20)
    else:
        logger.info('=' * 50)
