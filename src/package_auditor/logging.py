"""Logging for package-auditor.

Audit progress arrives as plain status strings and repository counts; the
helpers here turn those callbacks into log records so the CLI and the
library share one ``package_auditor`` logger tree.
"""

from __future__ import annotations

import logging
from typing import Callable

_LOGGER_NAME = "package_auditor"
_PLAIN_FORMAT = "[package-auditor] %(levelname)s %(message)s"
_VERBOSE_FORMAT = "[package-auditor] %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger named ``package_auditor.<name>``, or the package root."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Route package_auditor records to stderr; ``verbose`` adds DEBUG and logger names."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Exactly one stderr handler on the package logger.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _PLAIN_FORMAT))
    logger.addHandler(handler)
    return logger


def status_logger(name: str = "status") -> Callable[[str], None]:
    """An ``on_status`` callback that logs each note at INFO."""
    return get_logger(name).info


def progress_logger(name: str = "status") -> Callable[[int, int], None]:
    """An ``on_progress`` callback that logs ``done/total`` repositories at DEBUG."""
    logger = get_logger(name)

    def _report(done: int, total: int) -> None:
        logger.debug("Repositories processed: %d/%d", done, total)

    return _report


__all__ = ["configure_logging", "get_logger", "progress_logger", "status_logger"]
