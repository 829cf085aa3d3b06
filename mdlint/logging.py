"""Logging utilities for mdlint commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "mdlint"
_CONSOLE_FORMAT = "[mdlint] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the mdlint hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send mdlint diagnostics to stderr, and to ``log_file`` when given.

    Lint results are written to stdout by the CLI; only diagnostics go
    through logging.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    # Drop handlers from earlier calls so output is not duplicated.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    formats = [_CONSOLE_FORMAT]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        formats.append(_FILE_FORMAT)

    for handler, fmt in zip(handlers, formats):
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
