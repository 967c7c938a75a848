"""Logging configuration for the ``ledger`` package.

Entrypoints (the CLI, a host web application) call :func:`configure_logging`
once at startup; it attaches a single ``StreamHandler`` to the ``"ledger"``
logger. Library modules only ever call ``get_logger("ledger.<module>")``.

Log records never carry secrets: session tokens, verification tokens and
password credentials are logged by row id only. :class:`SecretRedactingFilter`
masks the known secret-bearing keys if a caller passes them via ``extra=``.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "ledger"
_DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
_SECRET_ATTRS = ("session_token", "token", "password", "access_token", "refresh_token")

_handler: logging.Handler | None = None


class SecretRedactingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for attr in _SECRET_ATTRS:
            if getattr(record, attr, None):
                setattr(record, attr, "***")
        return True


def _parse_level(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    if level is None:
        level = os.getenv("LEDGER_LOG_LEVEL") or "INFO"
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Attach the package handler; later calls only adjust the level.

    ``level`` falls back to ``LEDGER_LOG_LEVEL`` and then ``INFO``; ``fmt``
    falls back to ``LEDGER_LOG_FORMAT`` and then a timestamped default.
    """

    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    resolved = _parse_level(level)
    logger.setLevel(resolved)

    if _handler is not None:
        _handler.setLevel(resolved)
        return logger

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    fmt = fmt or os.getenv("LEDGER_LOG_FORMAT") or _DEFAULT_FORMAT
    handler.setFormatter(logging.Formatter(fmt))
    handler.addFilter(SecretRedactingFilter())
    logger.addHandler(handler)
    logger.propagate = False
    _handler = handler
    return logger


def reset_logging() -> None:
    """Detach the package handler installed by :func:`configure_logging`."""

    global _handler
    logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger; silent (``NullHandler``) until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "SecretRedactingFilter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
