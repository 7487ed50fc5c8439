from __future__ import annotations

import logging
import threading
import time
from datetime import datetime

import pytest

from lingguibafa.errors import ControllerStateError
from lingguibafa.runtime import (
    ControllerState,
    LiveRecomputeController,
    ResolvedState,
    compute_at,
)

FIXED = datetime(2000, 1, 1, 10, 0)


def _fixed_clock() -> datetime:
    return FIXED


def test_compute_at_is_deterministic() -> None:
    first = compute_at(FIXED)
    second = compute_at(FIXED)

    assert first == second
    assert first.open_point.point == "列缺"
    assert first.meridian.label == "巳时(足太阴脾经)"


def test_start_emits_before_returning() -> None:
    controller = LiveRecomputeController(_fixed_clock, period=60)
    received: list[ResolvedState] = []

    handle = controller.start(received.append)
    try:
        assert len(received) == 1
        assert received[0].instant == FIXED
        assert controller.state is ControllerState.RUNNING
    finally:
        controller.stop(handle)

    assert controller.state is ControllerState.IDLE
    assert handle.cancelled


def test_ticks_until_stopped() -> None:
    controller = LiveRecomputeController(_fixed_clock, period=0.01)
    received: list[ResolvedState] = []
    enough = threading.Event()

    def on_tick(state: ResolvedState) -> None:
        received.append(state)
        if len(received) >= 3:
            enough.set()

    handle = controller.start(on_tick)
    assert enough.wait(5)
    controller.stop(handle)
    delivered = len(received)
    time.sleep(0.05)

    assert len(received) == delivered
    assert {state.open_point.point for state in received} == {"列缺"}


def test_double_start_is_rejected() -> None:
    controller = LiveRecomputeController(_fixed_clock, period=60)
    handle = controller.start(lambda state: None)
    try:
        with pytest.raises(ControllerStateError):
            controller.start(lambda state: None)
    finally:
        controller.stop(handle)


def test_stale_handle_is_ignored() -> None:
    controller = LiveRecomputeController(_fixed_clock, period=60)
    old = controller.start(lambda state: None)
    controller.stop(old)
    current = controller.start(lambda state: None)
    try:
        controller.stop(old)
        assert controller.state is ControllerState.RUNNING
        assert not current.cancelled
    finally:
        controller.stop(current)


def test_stop_from_inside_callback() -> None:
    controller = LiveRecomputeController(_fixed_clock, period=0.01)
    calls: list[ResolvedState] = []
    holder: dict[str, object] = {}
    ready = threading.Event()
    stopped = threading.Event()

    def on_tick(state: ResolvedState) -> None:
        calls.append(state)
        if len(calls) == 2:
            assert ready.wait(5)
            controller.stop(holder["handle"])  # type: ignore[arg-type]
            stopped.set()

    holder["handle"] = controller.start(on_tick)
    ready.set()
    assert stopped.wait(5)
    time.sleep(0.05)

    assert len(calls) == 2
    assert controller.state is ControllerState.IDLE


def test_failing_callback_keeps_ticking(caplog: pytest.LogCaptureFixture) -> None:
    controller = LiveRecomputeController(_fixed_clock, period=0.01)
    attempts: list[int] = []
    enough = threading.Event()

    def on_tick(state: ResolvedState) -> None:
        attempts.append(1)
        if len(attempts) >= 3:
            enough.set()
        raise RuntimeError("display unavailable")

    with caplog.at_level(logging.ERROR, logger="lingguibafa.runtime.controller"):
        handle = controller.start(on_tick)
        assert enough.wait(5)
        controller.stop(handle)

    assert any("Tick callback failed" in record.getMessage() for record in caplog.records)


def test_failing_clock_does_not_wedge_controller(caplog: pytest.LogCaptureFixture) -> None:
    """A clock error on the first frame is logged; the handle still stops cleanly."""

    calls: list[int] = []

    def flaky_clock() -> datetime:
        calls.append(1)
        if len(calls) == 1:
            raise OSError("clock unavailable")
        return FIXED

    controller = LiveRecomputeController(flaky_clock, period=0.01)
    received: list[ResolvedState] = []
    recovered = threading.Event()

    def on_tick(state: ResolvedState) -> None:
        received.append(state)
        recovered.set()

    with caplog.at_level(logging.ERROR, logger="lingguibafa.runtime.controller"):
        handle = controller.start(on_tick)
        assert controller.state is ControllerState.RUNNING
        assert recovered.wait(5)
        controller.stop(handle)

    assert controller.state is ControllerState.IDLE
    assert received[0].instant == FIXED
    assert any("Tick recompute failed" in record.getMessage() for record in caplog.records)

    again = controller.start(lambda state: None)
    controller.stop(again)
    assert controller.state is ControllerState.IDLE


def test_clock_failing_on_ticker_thread_keeps_ticking() -> None:
    calls: list[int] = []
    recovered = threading.Event()

    def clock() -> datetime:
        calls.append(1)
        if len(calls) == 2:
            raise OSError("clock unavailable")
        return FIXED

    controller = LiveRecomputeController(clock, period=0.01)
    received: list[ResolvedState] = []

    def on_tick(state: ResolvedState) -> None:
        received.append(state)
        if len(received) >= 2:
            recovered.set()

    handle = controller.start(on_tick)
    try:
        assert recovered.wait(5)
    finally:
        controller.stop(handle)

    assert len(calls) >= 3


@pytest.mark.parametrize("period", [0, -1.5])
def test_period_must_be_positive(period: float) -> None:
    with pytest.raises(ValueError):
        LiveRecomputeController(_fixed_clock, period=period)


def test_default_period_from_settings() -> None:
    controller = LiveRecomputeController(_fixed_clock)
    assert controller.period > 0
