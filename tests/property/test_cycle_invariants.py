from __future__ import annotations

from datetime import datetime, timedelta

import pytest

hypothesis = pytest.importorskip("hypothesis")
given = hypothesis.given
settings = hypothesis.settings
st = hypothesis.strategies

from lingguibafa.bafa import resolve_open_point  # noqa: E402
from lingguibafa.chinese import derive_pillars, hour_window_index  # noqa: E402
from lingguibafa.circadian import meridian_for_instant  # noqa: E402

INSTANTS = st.datetimes(min_value=datetime(1900, 1, 1), max_value=datetime(2100, 12, 31))


@settings(max_examples=200, deadline=None)
@given(moment=INSTANTS)
def test_sixty_day_shift_preserves_everything(moment: datetime) -> None:
    shifted = moment + timedelta(days=60)

    assert derive_pillars(shifted).day == derive_pillars(moment).day
    assert derive_pillars(shifted).hour == derive_pillars(moment).hour
    assert resolve_open_point(derive_pillars(shifted)) == resolve_open_point(derive_pillars(moment))


@settings(max_examples=200, deadline=None)
@given(moment=INSTANTS)
def test_remainder_within_divisor(moment: datetime) -> None:
    result = resolve_open_point(derive_pillars(moment))

    assert 1 <= result.remainder <= result.divisor
    assert result.divisor == (9 if derive_pillars(moment).day_stem.is_yang else 6)
    for candidate in result.candidates:
        assert candidate.partner.paired_point == candidate.point.name


@settings(max_examples=200, deadline=None)
@given(moment=INSTANTS)
def test_pillar_parity_and_meridian_agree(moment: datetime) -> None:
    pillars = derive_pillars(moment)

    assert pillars.day.stem.index % 2 == pillars.day.branch.index % 2
    assert pillars.hour.branch.index == hour_window_index(moment.hour)
    assert meridian_for_instant(moment).period == pillars.period


@given(hour=st.floats(min_value=0, max_value=24, exclude_max=True, allow_nan=False))
def test_window_index_in_range(hour: float) -> None:
    assert 0 <= hour_window_index(hour) <= 11
