"""Linggui Bafa numerology: value tables, bagua palaces and the resolver."""

from __future__ import annotations

from .open_point import (
    NumerologyTrace,
    OpenPointResult,
    PointPairing,
    Sex,
    TraceTerm,
    resolve_open_point,
)
from .tables import (
    BAGUA_SLOTS,
    EIGHT_POINTS,
    AcupointEntry,
    BaguaSlot,
    acupoint,
    bagua_for_number,
    partner,
)

__all__ = [
    "NumerologyTrace",
    "OpenPointResult",
    "PointPairing",
    "Sex",
    "TraceTerm",
    "resolve_open_point",
    "BAGUA_SLOTS",
    "EIGHT_POINTS",
    "AcupointEntry",
    "BaguaSlot",
    "acupoint",
    "bagua_for_number",
    "partner",
]
