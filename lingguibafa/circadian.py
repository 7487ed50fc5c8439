"""Midday-midnight (子午流注) meridian clock.

Each double hour hands qi to one of the twelve regular meridians. The
windows come from :func:`~lingguibafa.chinese.sexagenary.hour_window_index`
so the clock and the hour pillar always agree on where 子时 begins.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

from .chinese.constants import TWELVE_PERIODS, Polarity, TimePeriod
from .chinese.sexagenary import hour_window_index
from .errors import InvalidInstantError, TableConsistencyError


@dataclass(frozen=True)
class MeridianSlot:
    """The meridian on duty during one double hour."""

    period: TimePeriod
    meridian: str
    organ: str
    organ_en: str
    element: str
    nature: Polarity

    @property
    def label(self) -> str:
        return f"{self.period.name}({self.meridian})"


_MERIDIAN_ROWS: Final[tuple[tuple[str, str, str, str, Polarity], ...]] = (
    ("足少阳胆经", "胆", "Gallbladder", "木", Polarity.YANG),
    ("足厥阴肝经", "肝", "Liver", "木", Polarity.YIN),
    ("手太阴肺经", "肺", "Lung", "金", Polarity.YIN),
    ("手阳明大肠经", "大肠", "Large Intestine", "金", Polarity.YANG),
    ("足阳明胃经", "胃", "Stomach", "土", Polarity.YANG),
    ("足太阴脾经", "脾", "Spleen", "土", Polarity.YIN),
    ("手少阴心经", "心", "Heart", "火", Polarity.YIN),
    ("手太阳小肠经", "小肠", "Small Intestine", "火", Polarity.YANG),
    ("足太阳膀胱经", "膀胱", "Bladder", "水", Polarity.YANG),
    ("足少阴肾经", "肾", "Kidney", "水", Polarity.YIN),
    ("手厥阴心包经", "心包", "Pericardium", "火", Polarity.YIN),
    ("手少阳三焦经", "三焦", "San Jiao", "火", Polarity.YANG),
)

if len(_MERIDIAN_ROWS) != len(TWELVE_PERIODS):
    raise TableConsistencyError("Every double hour needs exactly one meridian")

MERIDIAN_SLOTS: Final[tuple[MeridianSlot, ...]] = tuple(
    MeridianSlot(period, meridian, organ, organ_en, element, nature)
    for period, (meridian, organ, organ_en, element, nature) in zip(TWELVE_PERIODS, _MERIDIAN_ROWS)
)


def meridian_for_hour(hour_of_day: float) -> MeridianSlot:
    """Return the meridian on duty at ``hour_of_day`` (``0 <= hour < 24``)."""

    if isinstance(hour_of_day, bool) or not 0 <= hour_of_day < 24:
        raise InvalidInstantError(f"Hour of day must be in [0, 24), got {hour_of_day!r}")
    return MERIDIAN_SLOTS[hour_window_index(hour_of_day)]


def meridian_for_instant(moment: datetime) -> MeridianSlot:
    return MERIDIAN_SLOTS[hour_window_index(moment.hour)]


__all__ = ["MeridianSlot", "MERIDIAN_SLOTS", "meridian_for_hour", "meridian_for_instant"]
