"""API router modules for the Linggui Bafa service."""

from __future__ import annotations

__all__ = ["health", "linggui"]
