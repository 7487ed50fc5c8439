from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from lingguibafa.chinese import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    Pillar,
    day_pillar,
    days_since_epoch,
    derive_pillars,
    hour_pillar,
    hour_window_index,
    sexagenary_index,
)


def test_epoch_day_is_geng_wu() -> None:
    """The reference day resolves to 庚午 with the 乙庚 hour table."""

    pillars = derive_pillars(datetime(2000, 1, 1, 10, 0))

    assert pillars.days_since_epoch == 0
    assert pillars.day.label() == "庚午"
    assert pillars.hour.label() == "辛巳"
    assert pillars.period.name == "巳时"


def test_dates_before_epoch_wrap_into_the_cycle() -> None:
    assert days_since_epoch(date(1999, 12, 31)) == -1
    assert day_pillar(-1).label() == "己巳"
    assert derive_pillars(datetime(1999, 12, 31, 12, 0)).day.label() == "己巳"
    assert day_pillar(-7).label() == "癸亥"


def test_sixty_day_cycle_repeats_both_pillars() -> None:
    start = datetime(2023, 5, 17, 14, 20)
    later = start + timedelta(days=60)

    assert derive_pillars(start).day == derive_pillars(later).day
    assert derive_pillars(start).hour == derive_pillars(later).hour


def test_ten_day_cycle_keeps_stem() -> None:
    start = datetime(2010, 3, 3, 8, 0)
    first = derive_pillars(start)
    second = derive_pillars(start + timedelta(days=10))

    assert first.day_stem == second.day_stem
    assert first.day_branch != second.day_branch
    assert first.hour == second.hour


@pytest.mark.parametrize(
    ("hour", "expected"),
    [
        (0, 0),
        (0.99, 0),
        (1, 1),
        (2.5, 1),
        (3, 2),
        (10, 5),
        (12, 6),
        (21, 11),
        (22.99, 11),
        (23, 0),
        (23.5, 0),
    ],
)
def test_hour_window_boundaries(hour: float, expected: int) -> None:
    assert hour_window_index(hour) == expected


def test_zi_hour_spans_midnight_without_day_rollover() -> None:
    """23:00 and 00:59 share the 子 window; the day follows the civil date."""

    late = derive_pillars(datetime(2000, 1, 1, 23, 0))
    early = derive_pillars(datetime(2000, 1, 1, 0, 59))

    assert late.period.name == early.period.name == "子时"
    assert late.hour.label() == early.hour.label() == "丙子"
    assert late.day.label() == early.day.label() == "庚午"


@pytest.mark.parametrize(
    ("day_stem", "first_hour"),
    [("甲", "甲子"), ("己", "甲子"), ("乙", "丙子"), ("庚", "丙子"), ("丙", "戊子"),
     ("辛", "戊子"), ("丁", "庚子"), ("壬", "庚子"), ("戊", "壬子"), ("癸", "壬子")],
)
def test_hour_tables_follow_stem_pairing(day_stem: str, first_hour: str) -> None:
    stem = next(s for s in HEAVENLY_STEMS if s.name == day_stem)
    assert hour_pillar(stem, 0).label() == first_hour


def test_hour_pillar_branch_matches_window() -> None:
    for stem in HEAVENLY_STEMS:
        for window, branch in enumerate(EARTHLY_BRANCHES):
            assert hour_pillar(stem, window).branch == branch


def test_aware_datetimes_use_local_wall_clock() -> None:
    moment = datetime(2000, 1, 1, 23, 30, tzinfo=ZoneInfo("Asia/Shanghai"))
    as_utc = moment.astimezone(ZoneInfo("UTC"))

    assert derive_pillars(moment).day.label() == "庚午"
    assert derive_pillars(moment).period.name == "子时"
    assert derive_pillars(as_utc).period.name == "申时"


def test_sexagenary_index_and_labels() -> None:
    assert sexagenary_index(0, 0) == 0
    assert sexagenary_index(9, 11) == 59
    assert sexagenary_index(6, 6) == 6
    assert Pillar.from_label("庚午").cycle_index == 6
    assert str(Pillar.from_label("癸亥")) == "癸亥"
    with pytest.raises(ValueError):
        sexagenary_index(0, 1)
    with pytest.raises(ValueError):
        Pillar.from_label("庚")
