"""Command line interface for the Linggui Bafa resolver."""

from __future__ import annotations

from collections.abc import Sequence

from .app import app

__all__ = ["app", "main"]


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Typer application and return its exit status."""

    try:
        app(args=list(argv) if argv is not None else None, prog_name="lingguibafa")
    except SystemExit as exc:
        code = exc.code
        if code is None:
            return 0
        return code if isinstance(code, int) else 1
    return 0
