"""Sexagenary calendar tables and the day/hour pillar engine."""

from __future__ import annotations

from .constants import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    TWELVE_PERIODS,
    EarthlyBranch,
    HeavenlyStem,
    Polarity,
    TimePeriod,
)
from .sexagenary import (
    EPOCH,
    DerivedPillars,
    Pillar,
    day_pillar,
    days_since_epoch,
    derive_pillars,
    hour_pillar,
    hour_window_index,
    period_for_hour,
    sexagenary_index,
)

__all__ = [
    "EARTHLY_BRANCHES",
    "HEAVENLY_STEMS",
    "TWELVE_PERIODS",
    "EarthlyBranch",
    "HeavenlyStem",
    "Polarity",
    "TimePeriod",
    "EPOCH",
    "DerivedPillars",
    "Pillar",
    "day_pillar",
    "days_since_epoch",
    "derive_pillars",
    "hour_pillar",
    "hour_window_index",
    "period_for_hour",
    "sexagenary_index",
]
