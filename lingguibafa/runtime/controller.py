"""Live recomputation of the open point for a ticking display."""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import Enum
from functools import partial

from ..bafa.open_point import OpenPointResult, Sex, resolve_open_point
from ..chinese.sexagenary import DerivedPillars, derive_pillars
from ..circadian import MeridianSlot, meridian_for_instant
from ..errors import ControllerStateError
from ..instants import now as _now
from ..instants import resolve_timezone

LOG = logging.getLogger(__name__)

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class ResolvedState:
    """Everything a display needs for one instant."""

    instant: datetime
    pillars: DerivedPillars
    open_point: OpenPointResult
    meridian: MeridianSlot


TickCallback = Callable[[ResolvedState], None]


class ControllerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(eq=False)
class TickerHandle:
    """Token returned by :meth:`LiveRecomputeController.start`."""

    id: int
    period: float
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


def compute_at(instant: datetime, *, sex: Sex | None = None) -> ResolvedState:
    """Resolve pillars, open point and meridian for ``instant``.

    Pure: the result depends only on ``instant`` and ``sex``.
    """

    pillars = derive_pillars(instant)
    return ResolvedState(
        instant=instant,
        pillars=pillars,
        open_point=resolve_open_point(pillars, sex=sex),
        meridian=meridian_for_instant(instant),
    )


class LiveRecomputeController:
    """Recompute :class:`ResolvedState` once per period for a live display.

    The controller is either idle or running. :meth:`start` emits one state
    synchronously and then ticks on a daemon thread. :meth:`stop` cancels
    the ticker and waits for an in-flight callback, so no callback runs
    after it returns. A failing clock or callback is logged and skips that
    tick only; the controller keeps running until stopped.
    """

    _ids = itertools.count(1)

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        period: float | None = None,
        tz: str | tzinfo | None = None,
        sex: Sex | None = None,
    ) -> None:
        if period is None:
            from ..runtime_config import runtime_settings

            period = runtime_settings.tick_seconds
        if period <= 0:
            raise ValueError(f"Tick period must be positive, got {period}")
        if clock is None:
            zone = resolve_timezone(tz)
            clock = partial(_now, zone)
        self._clock = clock
        self._period = float(period)
        self._sex = sex
        self._lock = threading.Lock()
        # Held while a callback runs; reentrant so on_tick may call stop().
        self._tick_lock = threading.RLock()
        self._handle: TickerHandle | None = None
        self._thread: threading.Thread | None = None

    @property
    def period(self) -> float:
        return self._period

    @property
    def state(self) -> ControllerState:
        with self._lock:
            return ControllerState.RUNNING if self._handle is not None else ControllerState.IDLE

    def compute_at(self, instant: datetime) -> ResolvedState:
        return compute_at(instant, sex=self._sex)

    def start(self, on_tick: TickCallback) -> TickerHandle:
        """Transition idle -> running and return the handle for :meth:`stop`."""

        with self._lock:
            if self._handle is not None:
                raise ControllerStateError("Controller is already running")
            handle = TickerHandle(id=next(self._ids), period=self._period)
            self._handle = handle

        # First frame before the first period elapses.
        with self._tick_lock:
            self._emit(handle, on_tick)

        thread = threading.Thread(
            target=self._run,
            args=(handle, on_tick),
            name=f"linggui-ticker-{handle.id}",
            daemon=True,
        )
        with self._lock:
            if self._handle is handle:
                self._thread = thread
                thread.start()
        LOG.info("Live recompute started (handle=%s, period=%.3fs)", handle.id, self._period)
        return handle

    def stop(self, handle: TickerHandle) -> None:
        """Transition running -> idle. Stale handles are ignored."""

        with self._lock:
            if handle is not self._handle:
                LOG.debug("Ignoring stop for inactive handle %s", handle.id)
                return
            handle._cancelled.set()
            self._handle = None
            thread, self._thread = self._thread, None

        # Wait out a callback that is already running.
        with self._tick_lock:
            pass
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        LOG.info("Live recompute stopped (handle=%s)", handle.id)

    def _run(self, handle: TickerHandle, on_tick: TickCallback) -> None:
        while not handle._cancelled.wait(self._period):
            with self._tick_lock:
                if handle._cancelled.is_set():
                    break
                self._emit(handle, on_tick)

    def _emit(self, handle: TickerHandle, on_tick: TickCallback) -> None:
        if handle._cancelled.is_set():
            return
        try:
            state = self.compute_at(self._clock())
        except Exception:
            LOG.exception("Tick recompute failed (handle=%s)", handle.id)
            return
        try:
            on_tick(state)
        except Exception:
            LOG.exception("Tick callback failed (handle=%s)", handle.id)


__all__ = [
    "ControllerState",
    "LiveRecomputeController",
    "ResolvedState",
    "TickCallback",
    "TickerHandle",
    "compute_at",
]
