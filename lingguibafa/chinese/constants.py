"""Lookup tables for Heavenly Stems, Earthly Branches and the twelve 时辰."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping

from ..errors import TableConsistencyError


class Polarity(Enum):
    """Yin/yang classification shared by stems, branches and meridians."""

    YANG = "yang"
    YIN = "yin"


@dataclass(frozen=True)
class HeavenlyStem:
    """Representation of one of the ten Heavenly Stems (天干)."""

    name: str
    pinyin: str
    element: str
    polarity: Polarity
    index: int

    @property
    def is_yang(self) -> bool:
        return self.polarity is Polarity.YANG


@dataclass(frozen=True)
class EarthlyBranch:
    """Representation of one of the twelve Earthly Branches (地支)."""

    name: str
    pinyin: str
    animal: str
    element: str
    polarity: Polarity
    index: int


@dataclass(frozen=True)
class TimePeriod:
    """A two-hour double hour (时辰) anchored on its Earthly Branch."""

    name: str
    branch: EarthlyBranch
    start_hour: int
    end_hour: int
    index: int

    @property
    def time_range(self) -> str:
        return f"{self.start_hour:02d}:00-{self.end_hour:02d}:00"


HEAVENLY_STEMS: Final[tuple[HeavenlyStem, ...]] = (
    HeavenlyStem("甲", "Jia", "Wood", Polarity.YANG, 0),
    HeavenlyStem("乙", "Yi", "Wood", Polarity.YIN, 1),
    HeavenlyStem("丙", "Bing", "Fire", Polarity.YANG, 2),
    HeavenlyStem("丁", "Ding", "Fire", Polarity.YIN, 3),
    HeavenlyStem("戊", "Wu", "Earth", Polarity.YANG, 4),
    HeavenlyStem("己", "Ji", "Earth", Polarity.YIN, 5),
    HeavenlyStem("庚", "Geng", "Metal", Polarity.YANG, 6),
    HeavenlyStem("辛", "Xin", "Metal", Polarity.YIN, 7),
    HeavenlyStem("壬", "Ren", "Water", Polarity.YANG, 8),
    HeavenlyStem("癸", "Gui", "Water", Polarity.YIN, 9),
)


EARTHLY_BRANCHES: Final[tuple[EarthlyBranch, ...]] = (
    EarthlyBranch("子", "Zi", "Rat", "Water", Polarity.YANG, 0),
    EarthlyBranch("丑", "Chou", "Ox", "Earth", Polarity.YIN, 1),
    EarthlyBranch("寅", "Yin", "Tiger", "Wood", Polarity.YANG, 2),
    EarthlyBranch("卯", "Mao", "Rabbit", "Wood", Polarity.YIN, 3),
    EarthlyBranch("辰", "Chen", "Dragon", "Earth", Polarity.YANG, 4),
    EarthlyBranch("巳", "Si", "Snake", "Fire", Polarity.YIN, 5),
    EarthlyBranch("午", "Wu", "Horse", "Fire", Polarity.YANG, 6),
    EarthlyBranch("未", "Wei", "Goat", "Earth", Polarity.YIN, 7),
    EarthlyBranch("申", "Shen", "Monkey", "Metal", Polarity.YANG, 8),
    EarthlyBranch("酉", "You", "Rooster", "Metal", Polarity.YIN, 9),
    EarthlyBranch("戌", "Xu", "Dog", "Earth", Polarity.YANG, 10),
    EarthlyBranch("亥", "Hai", "Pig", "Water", Polarity.YIN, 11),
)

STEMS_BY_NAME: Final[Mapping[str, HeavenlyStem]] = {s.name: s for s in HEAVENLY_STEMS}
BRANCHES_BY_NAME: Final[Mapping[str, EarthlyBranch]] = {b.name: b for b in EARTHLY_BRANCHES}

# 子时 straddles midnight, so it starts at 23 and ends at 01.
TWELVE_PERIODS: Final[tuple[TimePeriod, ...]] = tuple(
    TimePeriod(
        name=f"{branch.name}时",
        branch=branch,
        start_hour=(2 * branch.index - 1) % 24,
        end_hour=(2 * branch.index + 1) % 24,
        index=branch.index,
    )
    for branch in EARTHLY_BRANCHES
)

# 五鼠遁: hour pillars of each day-stem pairing group, in window order.
HOUR_PILLAR_LABELS: Final[Mapping[str, tuple[str, ...]]] = {
    "甲己": ("甲子", "乙丑", "丙寅", "丁卯", "戊辰", "己巳", "庚午", "辛未", "壬申", "癸酉", "甲戌", "乙亥"),
    "乙庚": ("丙子", "丁丑", "戊寅", "己卯", "庚辰", "辛巳", "壬午", "癸未", "甲申", "乙酉", "丙戌", "丁亥"),
    "丙辛": ("戊子", "己丑", "庚寅", "辛卯", "壬辰", "癸巳", "甲午", "乙未", "丙申", "丁酉", "戊戌", "己亥"),
    "丁壬": ("庚子", "辛丑", "壬寅", "癸卯", "甲辰", "乙巳", "丙午", "丁未", "戊申", "己酉", "庚戌", "辛亥"),
    "戊癸": ("壬子", "癸丑", "甲寅", "乙卯", "丙辰", "丁巳", "戊午", "己未", "庚申", "辛酉", "壬戌", "癸亥"),
}

STEM_GROUP_COUNT: Final[int] = 5


def stem_for_index(index: int) -> HeavenlyStem:
    """Return the Heavenly Stem for ``index`` (wraps modulo 10)."""

    return HEAVENLY_STEMS[index % len(HEAVENLY_STEMS)]


def branch_for_index(index: int) -> EarthlyBranch:
    """Return the Earthly Branch for ``index`` (wraps modulo 12)."""

    return EARTHLY_BRANCHES[index % len(EARTHLY_BRANCHES)]


def stem_by_name(name: str) -> HeavenlyStem:
    try:
        return STEMS_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown Heavenly Stem: {name!r}") from None


def branch_by_name(name: str) -> EarthlyBranch:
    try:
        return BRANCHES_BY_NAME[name]
    except KeyError:
        raise KeyError(f"Unknown Earthly Branch: {name!r}") from None


def _validate() -> None:
    if len(HEAVENLY_STEMS) != 10 or len(EARTHLY_BRANCHES) != 12:
        raise TableConsistencyError("Expected 10 stems and 12 branches")
    for position, stem in enumerate(HEAVENLY_STEMS):
        if stem.index != position:
            raise TableConsistencyError(f"Stem {stem.name} is out of order")
    for position, branch in enumerate(EARTHLY_BRANCHES):
        if branch.index != position:
            raise TableConsistencyError(f"Branch {branch.name} is out of order")

    yang = sum(1 for stem in HEAVENLY_STEMS if stem.is_yang)
    if yang != 5:
        raise TableConsistencyError(f"Stems must split 5/5 yang/yin, found {yang} yang")

    # Each hour of the day must land in exactly one period.
    covered = [0] * 24
    for period in TWELVE_PERIODS:
        hour = period.start_hour
        while hour != period.end_hour:
            covered[hour] += 1
            hour = (hour + 1) % 24
    if any(count != 1 for count in covered):
        raise TableConsistencyError("Double hours do not tile the 24-hour day")

    if len(HOUR_PILLAR_LABELS) != STEM_GROUP_COUNT:
        raise TableConsistencyError("Expected five stem pairing groups")
    seen: set[str] = set()
    for group, labels in HOUR_PILLAR_LABELS.items():
        if any(name not in STEMS_BY_NAME for name in group + "".join(labels)[::2]):
            raise TableConsistencyError(f"Group {group} references an unknown stem")
        if any(label[1] not in BRANCHES_BY_NAME for label in labels):
            raise TableConsistencyError(f"Group {group} references an unknown branch")
        first, second = (STEMS_BY_NAME[name] for name in group)
        if (first.index + STEM_GROUP_COUNT) % 10 != second.index:
            raise TableConsistencyError(f"Group {group} does not pair stems five apart")
        seen.update(group)
        if len(labels) != len(TWELVE_PERIODS):
            raise TableConsistencyError(f"Group {group} needs one pillar per double hour")
        for window, label in enumerate(labels):
            if BRANCHES_BY_NAME[label[1]].index != window:
                raise TableConsistencyError(f"Group {group} has {label} in window {window}")
    if seen != set(STEMS_BY_NAME):
        raise TableConsistencyError("Stem pairing groups must cover all ten stems")


_validate()


__all__ = [
    "Polarity",
    "HeavenlyStem",
    "EarthlyBranch",
    "TimePeriod",
    "HEAVENLY_STEMS",
    "EARTHLY_BRANCHES",
    "STEMS_BY_NAME",
    "BRANCHES_BY_NAME",
    "TWELVE_PERIODS",
    "HOUR_PILLAR_LABELS",
    "STEM_GROUP_COUNT",
    "stem_for_index",
    "branch_for_index",
    "stem_by_name",
    "branch_by_name",
]
