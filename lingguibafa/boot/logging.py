"""Logging helpers for the Linggui Bafa CLI and API server."""

from __future__ import annotations

import logging
from typing import Any

__all__ = ["configure_logging", "resolve_level"]

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# The ticker logs every recomputation at DEBUG; keep third-party chatter
# at WARNING even when the package itself runs verbose.
_QUIET_LOGGERS = ("uvicorn.access", "httpx", "watchfiles")


def resolve_level(value: str | int | None) -> int:
    """Return a numeric logging level for ``value``.

    Level names are case insensitive and numeric strings are honoured.
    Unknown names fall back to :data:`logging.INFO`.
    """

    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value

    candidate = value.strip()
    if not candidate:
        return logging.INFO
    if candidate.isdigit():
        return int(candidate)

    resolved = logging.getLevelName(candidate.upper())
    if isinstance(resolved, int):
        return resolved
    return logging.INFO


def configure_logging(*, level: str | int | None = None, **kwargs: Any) -> int:
    """Configure the root logger once per entry point.

    When ``level`` is omitted the ``LOG_LEVEL`` value from
    :data:`lingguibafa.runtime_config.runtime_settings` is used. Remaining
    ``kwargs`` are forwarded to :func:`logging.basicConfig`.

    Returns the effective level applied to the root logger.
    """

    if level is None:
        from lingguibafa.runtime_config import runtime_settings

        level = runtime_settings.log_level

    effective_level = resolve_level(level)

    logging.basicConfig(
        level=effective_level,
        format=kwargs.pop("format", _DEFAULT_FORMAT),
        datefmt=kwargs.pop("datefmt", _DEFAULT_DATEFMT),
        force=kwargs.pop("force", True),
        **kwargs,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(effective_level, logging.WARNING))

    return effective_level
