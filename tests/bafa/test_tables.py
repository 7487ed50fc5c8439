from __future__ import annotations

from dataclasses import replace

import pytest

from lingguibafa.bafa import BAGUA_SLOTS, EIGHT_POINTS, acupoint, bagua_for_number, partner, tables
from lingguibafa.bafa.tables import (
    DAY_BRANCH_VALUES,
    DAY_STEM_VALUES,
    HOUR_BRANCH_VALUES,
    HOUR_STEM_VALUES,
    _freeze,
    divisor_for,
)
from lingguibafa.chinese import EARTHLY_BRANCHES, HEAVENLY_STEMS
from lingguibafa.chinese.constants import branch_by_name, stem_by_name
from lingguibafa.errors import TableConsistencyError


def test_pairing_is_an_involution() -> None:
    for name in EIGHT_POINTS:
        assert partner(name) != name
        assert partner(partner(name)) == name


@pytest.mark.parametrize(
    ("point", "mate"),
    [("公孙", "内关"), ("外关", "临泣"), ("列缺", "照海"), ("后溪", "申脉")],
)
def test_classic_couples(point: str, mate: str) -> None:
    assert partner(point) == mate
    assert partner(mate) == point


def test_each_point_couples_one_vessel() -> None:
    vessels = {entry.vessel for entry in EIGHT_POINTS.values()}
    assert len(vessels) == 8
    assert acupoint("后溪").vessel == "督脉"
    assert acupoint("列缺").vessel == "任脉"


def test_unknown_point_raises() -> None:
    with pytest.raises(KeyError):
        acupoint("足三里")


def test_bagua_numbers() -> None:
    assert [slot.number for slot in BAGUA_SLOTS] == list(range(1, 10))
    assert bagua_for_number(1).name == "坎"
    assert bagua_for_number(1).points == ("申脉",)
    assert bagua_for_number(9).points == ("列缺",)
    assert bagua_for_number(5).is_center
    assert bagua_for_number(5).points == ("照海", "内关")
    for number in (0, 10):
        with pytest.raises(ValueError):
            bagua_for_number(number)


def test_outer_palaces_cover_all_points_once() -> None:
    outer = [slot.points[0] for slot in BAGUA_SLOTS if not slot.is_center]
    assert sorted(outer) == sorted(EIGHT_POINTS)


def test_value_tables_cover_every_symbol() -> None:
    for stem in HEAVENLY_STEMS:
        assert DAY_STEM_VALUES.weight(stem) > 0
        assert HOUR_STEM_VALUES.weight(stem) > 0
    for branch in EARTHLY_BRANCHES:
        assert DAY_BRANCH_VALUES.weight(branch) > 0
        assert HOUR_BRANCH_VALUES.weight(branch) > 0

    assert DAY_STEM_VALUES.weight(stem_by_name("甲")) == 10
    assert DAY_BRANCH_VALUES.weight(branch_by_name("丑")) == 10
    assert HOUR_STEM_VALUES.weight(stem_by_name("戊")) == 5
    assert HOUR_BRANCH_VALUES.weight(branch_by_name("巳")) == 4


def test_divisor_follows_day_stem_polarity() -> None:
    assert divisor_for(stem_by_name("庚")) == 9
    assert divisor_for(stem_by_name("辛")) == 6


@pytest.mark.parametrize(
    "weights",
    [
        {"子": 7, "丑": 10},
        {**{branch.name: 5 for branch in EARTHLY_BRANCHES}, "甲": 3},
        {**{branch.name: 5 for branch in EARTHLY_BRANCHES}, "午": 0},
    ],
    ids=["missing-label", "unknown-label", "non-positive-weight"],
)
def test_freeze_rejects_incomplete_tables(weights: dict[str, int]) -> None:
    with pytest.raises(TableConsistencyError):
        _freeze("day-branch", weights, EARTHLY_BRANCHES)


def test_freeze_orders_weights_by_index() -> None:
    weights = {branch.name: branch.index + 1 for branch in EARTHLY_BRANCHES}
    table = _freeze("hour-branch", weights, EARTHLY_BRANCHES)

    assert table.weights == tuple(range(1, 13))


def test_validate_rejects_one_sided_pairing(monkeypatch: pytest.MonkeyPatch) -> None:
    broken = dict(EIGHT_POINTS)
    broken["公孙"] = replace(EIGHT_POINTS["公孙"], paired_point="外关")
    monkeypatch.setattr(tables, "EIGHT_POINTS", broken)

    with pytest.raises(TableConsistencyError):
        tables._validate()


def test_validate_rejects_misnumbered_palace(monkeypatch: pytest.MonkeyPatch) -> None:
    slots = list(BAGUA_SLOTS)
    slots[0], slots[1] = slots[1], slots[0]
    monkeypatch.setattr(tables, "BAGUA_SLOTS", tuple(slots))

    with pytest.raises(TableConsistencyError):
        tables._validate()


def test_shipped_tables_validate() -> None:
    tables._validate()
