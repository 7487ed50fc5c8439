"""Day and hour pillars from the sixty Jia-Zi combinations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Final

from .constants import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    HOUR_PILLAR_LABELS,
    STEM_GROUP_COUNT,
    TWELVE_PERIODS,
    EarthlyBranch,
    HeavenlyStem,
    TimePeriod,
    branch_by_name,
    stem_by_name,
)

SEXAGENARY_CYCLE_LENGTH: Final[int] = 60

# Reference day for the pillar sequence. With the alignment offset below the
# epoch itself resolves to 庚午 (stem 6, branch 6).
EPOCH: Final[date] = date(2000, 1, 1)
EPOCH_ALIGNMENT: Final[int] = 6


@dataclass(frozen=True)
class Pillar:
    """A single pillar made up of a Heavenly Stem and Earthly Branch."""

    stem: HeavenlyStem
    branch: EarthlyBranch

    @classmethod
    def from_label(cls, label: str) -> "Pillar":
        """Build a pillar from its two-glyph label (e.g. ``庚午``)."""

        if len(label) != 2:
            raise ValueError(f"Pillar labels have two glyphs, got {label!r}")
        return cls(stem=stem_by_name(label[0]), branch=branch_by_name(label[1]))

    @property
    def cycle_index(self) -> int:
        return sexagenary_index(self.stem.index, self.branch.index)

    def label(self) -> str:
        return f"{self.stem.name}{self.branch.name}"

    def __str__(self) -> str:
        return self.label()


@dataclass(frozen=True)
class DerivedPillars:
    """Day and hour pillars for one instant, plus the inputs that chose them."""

    day: Pillar
    hour: Pillar
    days_since_epoch: int
    period: TimePeriod

    @property
    def day_stem(self) -> HeavenlyStem:
        return self.day.stem

    @property
    def day_branch(self) -> EarthlyBranch:
        return self.day.branch

    @property
    def hour_stem(self) -> HeavenlyStem:
        return self.hour.stem

    @property
    def hour_branch(self) -> EarthlyBranch:
        return self.hour.branch


def _build_hour_tables() -> tuple[tuple[Pillar, ...], ...]:
    tables: list[tuple[Pillar, ...] | None] = [None] * STEM_GROUP_COUNT
    for group, labels in HOUR_PILLAR_LABELS.items():
        slot = stem_by_name(group[0]).index % STEM_GROUP_COUNT
        tables[slot] = tuple(Pillar.from_label(label) for label in labels)
    return tuple(table for table in tables if table is not None)


# Indexed by ``stem_group_index(day_stem)`` then by hour window.
_HOUR_PILLARS: Final[tuple[tuple[Pillar, ...], ...]] = _build_hour_tables()


def sexagenary_index(stem_index: int, branch_index: int) -> int:
    """Return the 0-59 index for the provided stem/branch combination."""

    target_stem = stem_index % 10
    target_branch = branch_index % 12
    if target_stem % 2 != target_branch % 2:
        msg = f"Invalid stem/branch pairing: stem={stem_index}, branch={branch_index}"
        raise ValueError(msg)
    # Solve idx = stem (mod 10), idx = branch (mod 12) with idx in [0, 60).
    return (6 * target_stem - 5 * target_branch) % SEXAGENARY_CYCLE_LENGTH


def days_since_epoch(moment: datetime | date) -> int:
    """Whole calendar days from :data:`EPOCH` to the wall-clock date of ``moment``."""

    day = moment.date() if isinstance(moment, datetime) else moment
    return (day - EPOCH).days


def hour_window_index(hour: float) -> int:
    """Return the double-hour window (0-11) containing ``hour``.

    Window 0 (子时) covers 23:00-00:59; window ``n`` covers ``[2n-1, 2n+1)``.
    """

    if hour >= 23 or hour < 1:
        return 0
    return int((hour + 1) // 2)


def period_for_hour(hour: float) -> TimePeriod:
    return TWELVE_PERIODS[hour_window_index(hour)]


def stem_group_index(stem: HeavenlyStem) -> int:
    """Return the pairing group (甲己, 乙庚, 丙辛, 丁壬, 戊癸) of ``stem``."""

    return stem.index % STEM_GROUP_COUNT


def day_pillar(days: int) -> Pillar:
    """Return the day pillar ``days`` calendar days after the epoch."""

    offset = days + EPOCH_ALIGNMENT
    return Pillar(stem=HEAVENLY_STEMS[offset % 10], branch=EARTHLY_BRANCHES[offset % 12])


def hour_pillar(day_stem: HeavenlyStem, window: int) -> Pillar:
    """Read the hour pillar for ``window`` from the day stem's group table."""

    return _HOUR_PILLARS[stem_group_index(day_stem)][window]


def derive_pillars(moment: datetime) -> DerivedPillars:
    """Derive the day and hour pillars for ``moment``.

    ``moment`` is read on its own wall clock: aware datetimes use their
    local date and hour, naive ones are taken as already local. The day
    pillar follows the civil date, so 23:00 belongs to 子时 of the same day.
    """

    days = days_since_epoch(moment)
    day = day_pillar(days)
    window = hour_window_index(moment.hour)
    return DerivedPillars(
        day=day,
        hour=hour_pillar(day.stem, window),
        days_since_epoch=days,
        period=TWELVE_PERIODS[window],
    )


__all__ = [
    "SEXAGENARY_CYCLE_LENGTH",
    "EPOCH",
    "EPOCH_ALIGNMENT",
    "Pillar",
    "DerivedPillars",
    "sexagenary_index",
    "days_since_epoch",
    "hour_window_index",
    "period_for_hour",
    "stem_group_index",
    "day_pillar",
    "hour_pillar",
    "derive_pillars",
]
