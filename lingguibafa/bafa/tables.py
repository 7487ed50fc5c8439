"""Static tables for the Linggui Bafa (灵龟八法) numerology.

The four value tables assign a weight to each stem or branch. The same
glyph weighs differently in the day and hour positions. The tables are
authored keyed by glyph, as they appear in the classical mnemonics, and
frozen at import into tuples indexed by stem/branch ordinal. A missing or
unknown label raises :class:`~lingguibafa.errors.TableConsistencyError`
immediately instead of surfacing as a bad sum later.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Mapping

from ..chinese.constants import EARTHLY_BRANCHES, HEAVENLY_STEMS, EarthlyBranch, HeavenlyStem
from ..errors import TableConsistencyError

YANG_DIVISOR: Final[int] = 9
YIN_DIVISOR: Final[int] = 6
CENTER_NUMBER: Final[int] = 5

_DAY_STEM_WEIGHTS: Final[Mapping[str, int]] = {
    "甲": 10, "己": 10,
    "乙": 9, "庚": 9,
    "丙": 7, "辛": 7,
    "丁": 8, "壬": 8,
    "戊": 7, "癸": 7,
}

_DAY_BRANCH_WEIGHTS: Final[Mapping[str, int]] = {
    "子": 7, "丑": 10, "寅": 8, "卯": 8,
    "辰": 10, "巳": 7, "午": 7, "未": 10,
    "申": 9, "酉": 9, "戌": 10, "亥": 7,
}

_HOUR_STEM_WEIGHTS: Final[Mapping[str, int]] = {
    "甲": 9, "己": 9,
    "乙": 8, "庚": 8,
    "丙": 7, "辛": 7,
    "丁": 6, "壬": 6,
    "戊": 5, "癸": 5,
}

_HOUR_BRANCH_WEIGHTS: Final[Mapping[str, int]] = {
    "子": 9, "丑": 8, "寅": 7, "卯": 6,
    "辰": 5, "巳": 4, "午": 9, "未": 8,
    "申": 7, "酉": 6, "戌": 5, "亥": 4,
}


@dataclass(frozen=True)
class ValueTable:
    """Weights for one position, indexed by stem or branch ordinal."""

    name: str
    weights: tuple[int, ...]

    def weight(self, symbol: HeavenlyStem | EarthlyBranch) -> int:
        return self.weights[symbol.index]


@dataclass(frozen=True)
class AcupointEntry:
    """One of the eight confluent points (八脉交会穴)."""

    name: str
    meridian: str
    location: str
    paired_point: str
    vessel: str
    indications: tuple[str, ...]


@dataclass(frozen=True)
class BaguaSlot:
    """A Luoshu palace (九宫) position and the point(s) it opens."""

    name: str
    number: int
    position: str
    points: tuple[str, ...]

    @property
    def is_center(self) -> bool:
        return self.number == CENTER_NUMBER


def _freeze(name: str, weights: Mapping[str, int], symbols: tuple[HeavenlyStem, ...] | tuple[EarthlyBranch, ...]) -> ValueTable:
    expected = {symbol.name for symbol in symbols}
    missing = expected - set(weights)
    unknown = set(weights) - expected
    if missing or unknown:
        raise TableConsistencyError(
            f"{name} table mismatch: missing={sorted(missing)} unknown={sorted(unknown)}"
        )
    if any(value <= 0 for value in weights.values()):
        raise TableConsistencyError(f"{name} table weights must be positive")
    return ValueTable(name=name, weights=tuple(weights[symbol.name] for symbol in symbols))


DAY_STEM_VALUES: Final[ValueTable] = _freeze("day-stem", _DAY_STEM_WEIGHTS, HEAVENLY_STEMS)
DAY_BRANCH_VALUES: Final[ValueTable] = _freeze("day-branch", _DAY_BRANCH_WEIGHTS, EARTHLY_BRANCHES)
HOUR_STEM_VALUES: Final[ValueTable] = _freeze("hour-stem", _HOUR_STEM_WEIGHTS, HEAVENLY_STEMS)
HOUR_BRANCH_VALUES: Final[ValueTable] = _freeze("hour-branch", _HOUR_BRANCH_WEIGHTS, EARTHLY_BRANCHES)


EIGHT_POINTS: Final[Mapping[str, AcupointEntry]] = {
    entry.name: entry
    for entry in (
        AcupointEntry(
            name="公孙",
            meridian="足太阴脾经",
            location="足内侧缘，第一跖骨基底部的前下方",
            paired_point="内关",
            vessel="冲脉",
            indications=("胃脘痛", "呕吐", "腹胀", "泄泻", "痢疾", "月经不调"),
        ),
        AcupointEntry(
            name="内关",
            meridian="手厥阴心包经",
            location="前臂掌侧，腕横纹上2寸",
            paired_point="公孙",
            vessel="阴维脉",
            indications=("心痛", "胸闷", "心悸", "失眠", "癫狂", "胃痛"),
        ),
        AcupointEntry(
            name="外关",
            meridian="手少阳三焦经",
            location="前臂背侧，腕背横纹上2寸",
            paired_point="临泣",
            vessel="阳维脉",
            indications=("头痛", "耳鸣", "胁痛", "手臂痛", "感冒发热"),
        ),
        AcupointEntry(
            name="临泣",
            meridian="足少阳胆经",
            location="足背侧，第四、五跖骨结合部的前方",
            paired_point="外关",
            vessel="带脉",
            indications=("偏头痛", "目疾", "耳聋", "胁痛", "月经不调"),
        ),
        AcupointEntry(
            name="列缺",
            meridian="手太阴肺经",
            location="前臂桡侧缘，桡骨茎突上方",
            paired_point="照海",
            vessel="任脉",
            indications=("咳嗽", "气喘", "咽喉痛", "头项痛", "感冒"),
        ),
        AcupointEntry(
            name="照海",
            meridian="足少阴肾经",
            location="足内侧，内踝尖下方凹陷处",
            paired_point="列缺",
            vessel="阴跷脉",
            indications=("咽喉痛", "失眠", "癫痫", "月经不调", "小便不利"),
        ),
        AcupointEntry(
            name="后溪",
            meridian="手太阳小肠经",
            location="手掌尺侧，第五掌指关节后方",
            paired_point="申脉",
            vessel="督脉",
            indications=("头项强痛", "腰背痛", "癫痫", "疟疾", "耳聋"),
        ),
        AcupointEntry(
            name="申脉",
            meridian="足太阳膀胱经",
            location="足外侧，外踝尖下方凹陷处",
            paired_point="后溪",
            vessel="阳跷脉",
            indications=("头痛", "眩晕", "腰腿痛", "癫痫", "失眠"),
        ),
    )
}


# 戴九履一，左三右七，二四为肩，六八为足，五居中宫.
# The center opens 照海 for men and 内关 for women.
BAGUA_SLOTS: Final[tuple[BaguaSlot, ...]] = (
    BaguaSlot("坎", 1, "north", ("申脉",)),
    BaguaSlot("坤", 2, "southwest", ("照海",)),
    BaguaSlot("震", 3, "east", ("外关",)),
    BaguaSlot("巽", 4, "southeast", ("临泣",)),
    BaguaSlot("中", 5, "center", ("照海", "内关")),
    BaguaSlot("乾", 6, "northwest", ("公孙",)),
    BaguaSlot("兑", 7, "west", ("后溪",)),
    BaguaSlot("艮", 8, "northeast", ("内关",)),
    BaguaSlot("离", 9, "south", ("列缺",)),
)


def divisor_for(stem: HeavenlyStem) -> int:
    """Return 9 for yang day stems and 6 for yin day stems."""

    return YANG_DIVISOR if stem.is_yang else YIN_DIVISOR


def bagua_for_number(number: int) -> BaguaSlot:
    if not 1 <= number <= len(BAGUA_SLOTS):
        raise ValueError(f"Bagua numbers run 1-9, got {number}")
    return BAGUA_SLOTS[number - 1]


def acupoint(name: str) -> AcupointEntry:
    try:
        return EIGHT_POINTS[name]
    except KeyError:
        raise KeyError(f"Not one of the eight confluent points: {name!r}") from None


def partner(name: str) -> str:
    """Return the fixed partner of ``name`` (e.g. 列缺 -> 照海)."""

    return acupoint(name).paired_point


def _validate() -> None:
    if len(EIGHT_POINTS) != 8:
        raise TableConsistencyError("Expected exactly eight confluent points")
    vessels = {entry.vessel for entry in EIGHT_POINTS.values()}
    if len(vessels) != 8:
        raise TableConsistencyError("Each point must couple a distinct extraordinary vessel")
    for name, entry in EIGHT_POINTS.items():
        mate = EIGHT_POINTS.get(entry.paired_point)
        if mate is None or mate.name == name or mate.paired_point != name:
            raise TableConsistencyError(f"Pairing for {name} is not symmetric")

    for position, slot in enumerate(BAGUA_SLOTS, start=1):
        if slot.number != position:
            raise TableConsistencyError(f"Bagua slot {slot.name} is out of order")
        expected = 2 if slot.is_center else 1
        if len(slot.points) != expected:
            raise TableConsistencyError(f"Bagua slot {slot.name} needs {expected} point(s)")
        for point in slot.points:
            if point not in EIGHT_POINTS:
                raise TableConsistencyError(f"Bagua slot {slot.name} opens unknown point {point}")
    outer = {slot.points[0] for slot in BAGUA_SLOTS if not slot.is_center}
    if outer != set(EIGHT_POINTS):
        raise TableConsistencyError("The eight outer palaces must open all eight points")


_validate()


__all__ = [
    "YANG_DIVISOR",
    "YIN_DIVISOR",
    "CENTER_NUMBER",
    "ValueTable",
    "AcupointEntry",
    "BaguaSlot",
    "DAY_STEM_VALUES",
    "DAY_BRANCH_VALUES",
    "HOUR_STEM_VALUES",
    "HOUR_BRANCH_VALUES",
    "EIGHT_POINTS",
    "BAGUA_SLOTS",
    "divisor_for",
    "bagua_for_number",
    "acupoint",
    "partner",
]
