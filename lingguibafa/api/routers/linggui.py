"""FastAPI router exposing the open-point resolver and meridian clock."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query

from ...bafa.open_point import Sex
from ...bafa.tables import EIGHT_POINTS
from ...circadian import MERIDIAN_SLOTS, meridian_for_hour
from ...instants import now, parse_instant
from ...runtime.controller import compute_at
from ..schemas import (
    AcupointOut,
    MeridianOut,
    OpenPointRequest,
    ResolvedStateOut,
    SexLiteral,
    acupoint_out,
    meridian_out,
    resolved_state_out,
)

LOG = logging.getLogger(__name__)

router = APIRouter()


def _resolve(request: OpenPointRequest) -> ResolvedStateOut:
    if request.moment is not None:
        instant = parse_instant(request.moment, tz=request.tz)
    else:
        instant = parse_instant(request.date, request.time, tz=request.tz)
    LOG.debug("Resolving open point for %s", instant.isoformat())
    return resolved_state_out(compute_at(instant, sex=request.sex_enum()))


@router.get(
    "/open-point",
    summary="Open point for a date and time",
    response_model=ResolvedStateOut,
)
async def open_point_query(
    date: str = Query(..., description="Calendar date (YYYY-MM-DD)."),
    time: str | None = Query(None, description="Clock time (HH:MM); midnight when omitted."),
    tz: str | None = Query(None, description="IANA timezone of the wall clock."),
    sex: SexLiteral | None = Query(None, description="Settles the center palace case."),
) -> ResolvedStateOut:
    return _resolve(OpenPointRequest(date=date, time=time, tz=tz, sex=sex))


@router.post(
    "/open-point",
    summary="Open point for a JSON payload",
    response_model=ResolvedStateOut,
)
async def open_point_body(request: OpenPointRequest) -> ResolvedStateOut:
    return _resolve(request)


@router.get(
    "/now",
    summary="Open point for the current instant",
    response_model=ResolvedStateOut,
)
async def open_point_now(
    tz: str | None = Query(None, description="IANA timezone of the wall clock."),
    sex: SexLiteral | None = Query(None, description="Settles the center palace case."),
) -> ResolvedStateOut:
    state = compute_at(now(tz), sex=Sex(sex) if sex else None)
    return resolved_state_out(state)


@router.get(
    "/meridian",
    summary="Meridian on duty at an hour of the day",
    response_model=MeridianOut,
)
async def meridian(
    hour: float = Query(..., description="Hour of day in [0, 24)."),
) -> MeridianOut:
    return meridian_out(meridian_for_hour(hour))


@router.get(
    "/periods",
    summary="The twelve double hours and their meridians",
    response_model=list[MeridianOut],
)
async def periods() -> list[MeridianOut]:
    return [meridian_out(slot) for slot in MERIDIAN_SLOTS]


@router.get(
    "/points",
    summary="The eight confluent points and their partners",
    response_model=list[AcupointOut],
)
async def points() -> list[AcupointOut]:
    return [acupoint_out(entry) for entry in EIGHT_POINTS.values()]


__all__ = ["router"]
