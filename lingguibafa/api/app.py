"""ASGI entry point (``lingguibafa.api.app:app``) for uvicorn."""

from __future__ import annotations

from ..boot.logging import configure_logging
from . import get_app

configure_logging()
app = get_app()

__all__ = ["app"]
