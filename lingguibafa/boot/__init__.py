"""Process bootstrap helpers (logging) for Linggui Bafa entry points."""

from __future__ import annotations

from .logging import configure_logging

__all__ = ["configure_logging"]
