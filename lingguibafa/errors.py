"""Exception hierarchy shared by the Linggui Bafa engines and boundaries."""

from __future__ import annotations

__all__ = [
    "LingguiError",
    "InvalidInstantError",
    "TableConsistencyError",
    "ControllerStateError",
]


class LingguiError(Exception):
    """Base class for errors raised by :mod:`lingguibafa`."""


class InvalidInstantError(LingguiError, ValueError):
    """Raised when a caller supplies a date/time that cannot be resolved.

    Validation happens at the boundary (:mod:`lingguibafa.instants`, the HTTP
    API and the CLI). The calendar engines never raise this for a well-formed
    :class:`~datetime.datetime`.
    """


class TableConsistencyError(LingguiError, RuntimeError):
    """Raised at import time when a static lookup table is incomplete."""


class ControllerStateError(LingguiError, RuntimeError):
    """Raised for illegal :class:`LiveRecomputeController` transitions."""
