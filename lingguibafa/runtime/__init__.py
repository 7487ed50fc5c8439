"""Lifecycle wrapper that keeps a resolved state current for live displays."""

from __future__ import annotations

from .controller import (
    ControllerState,
    LiveRecomputeController,
    ResolvedState,
    TickerHandle,
    compute_at,
)

__all__ = [
    "ControllerState",
    "LiveRecomputeController",
    "ResolvedState",
    "TickerHandle",
    "compute_at",
]
