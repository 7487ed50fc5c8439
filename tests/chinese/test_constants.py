from __future__ import annotations

import pytest

from lingguibafa.chinese import EARTHLY_BRANCHES, HEAVENLY_STEMS, TWELVE_PERIODS, constants
from lingguibafa.chinese.constants import (
    HOUR_PILLAR_LABELS,
    branch_for_index,
    stem_by_name,
    stem_for_index,
)
from lingguibafa.errors import TableConsistencyError


def test_stems_split_evenly_by_polarity() -> None:
    yang = [stem.name for stem in HEAVENLY_STEMS if stem.is_yang]

    assert yang == ["甲", "丙", "戊", "庚", "壬"]
    assert len(HEAVENLY_STEMS) - len(yang) == 5


def test_indices_wrap() -> None:
    assert stem_for_index(-1).name == "癸"
    assert stem_for_index(16).name == "庚"
    assert branch_for_index(12).name == "子"
    assert stem_by_name("辛").index == 7


def test_periods_tile_the_day() -> None:
    covered = []
    for period in TWELVE_PERIODS:
        hour = period.start_hour
        while hour != period.end_hour:
            covered.append(hour)
            hour = (hour + 1) % 24

    assert sorted(covered) == list(range(24))
    assert TWELVE_PERIODS[0].time_range == "23:00-01:00"
    assert TWELVE_PERIODS[5].time_range == "09:00-11:00"
    assert [period.branch for period in TWELVE_PERIODS] == list(EARTHLY_BRANCHES)


def test_hour_groups_pair_stems_five_apart() -> None:
    for group in HOUR_PILLAR_LABELS:
        first, second = (stem_by_name(glyph) for glyph in group)
        assert second.index - first.index == 5


def test_validate_rejects_misordered_hour_group(monkeypatch: pytest.MonkeyPatch) -> None:
    labels = dict(HOUR_PILLAR_LABELS)
    first, second, *rest = labels["甲己"]
    labels["甲己"] = (second, first, *rest)
    monkeypatch.setattr(constants, "HOUR_PILLAR_LABELS", labels)

    with pytest.raises(TableConsistencyError):
        constants._validate()


def test_validate_rejects_unpaired_group(monkeypatch: pytest.MonkeyPatch) -> None:
    labels = dict(HOUR_PILLAR_LABELS)
    labels["甲庚"] = labels.pop("甲己")
    monkeypatch.setattr(constants, "HOUR_PILLAR_LABELS", labels)

    with pytest.raises(TableConsistencyError):
        constants._validate()


def test_shipped_calendar_tables_validate() -> None:
    constants._validate()
