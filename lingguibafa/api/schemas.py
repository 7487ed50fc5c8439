"""Pydantic models shared by the public API surface."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..bafa.open_point import OpenPointResult, PointPairing, Sex
from ..bafa.tables import AcupointEntry
from ..chinese.constants import TimePeriod
from ..chinese.sexagenary import Pillar
from ..circadian import MeridianSlot
from ..runtime.controller import ResolvedState

SexLiteral = Literal["male", "female"]


class OpenPointRequest(BaseModel):
    """Instant to resolve, either as ``moment`` or as a ``date``/``time`` pair."""

    model_config = ConfigDict(extra="forbid")

    moment: str | None = Field(default=None, description="ISO-8601 datetime.")
    date: str | None = Field(default=None, description="Calendar date (YYYY-MM-DD).")
    time: str | None = Field(default=None, description="Clock time (HH:MM).")
    tz: str | None = Field(default=None, description="IANA timezone for the wall clock.")
    sex: SexLiteral | None = Field(
        default=None, description="Settles the center palace case when supplied."
    )

    @model_validator(mode="after")
    def _require_instant(self) -> "OpenPointRequest":
        if self.moment is None and self.date is None:
            raise ValueError("Provide either 'moment' or 'date'")
        if self.moment is not None and self.date is not None:
            raise ValueError("Provide 'moment' or 'date', not both")
        return self

    def sex_enum(self) -> Sex | None:
        return Sex(self.sex) if self.sex else None


class StemOut(BaseModel):
    name: str
    pinyin: str
    index: int
    polarity: str


class BranchOut(BaseModel):
    name: str
    pinyin: str
    index: int


class PillarOut(BaseModel):
    label: str
    cycle_index: int
    stem: StemOut
    branch: BranchOut


class PeriodOut(BaseModel):
    name: str
    index: int
    time_range: str


class TraceTermOut(BaseModel):
    role: str
    label: str
    weight: int


class TraceOut(BaseModel):
    terms: list[TraceTermOut]
    total: int
    divisor: int
    remainder: int
    text: str


class PairingOut(BaseModel):
    point: str
    partner: str
    vessel: str
    partner_vessel: str


class OpenPointOut(BaseModel):
    point: str
    paired_point: str
    ambiguous: bool
    remainder: int
    divisor: int
    bagua: str
    bagua_number: int
    candidates: list[PairingOut]
    trace: TraceOut


class MeridianOut(BaseModel):
    period: PeriodOut
    meridian: str
    organ: str
    organ_en: str
    element: str
    nature: str
    label: str


class ResolvedStateOut(BaseModel):
    instant: datetime
    days_since_epoch: int
    day_pillar: PillarOut
    hour_pillar: PillarOut
    period: PeriodOut
    open_point: OpenPointOut
    meridian: MeridianOut


class AcupointOut(BaseModel):
    name: str
    meridian: str
    location: str
    paired_point: str
    vessel: str
    indications: list[str]


def pillar_out(pillar: Pillar) -> PillarOut:
    return PillarOut(
        label=pillar.label(),
        cycle_index=pillar.cycle_index,
        stem=StemOut(
            name=pillar.stem.name,
            pinyin=pillar.stem.pinyin,
            index=pillar.stem.index,
            polarity=pillar.stem.polarity.value,
        ),
        branch=BranchOut(
            name=pillar.branch.name,
            pinyin=pillar.branch.pinyin,
            index=pillar.branch.index,
        ),
    )


def period_out(period: TimePeriod) -> PeriodOut:
    return PeriodOut(name=period.name, index=period.index, time_range=period.time_range)


def _pairing_out(pairing: PointPairing) -> PairingOut:
    return PairingOut(
        point=pairing.point.name,
        partner=pairing.partner.name,
        vessel=pairing.point.vessel,
        partner_vessel=pairing.partner.vessel,
    )


def open_point_out(result: OpenPointResult) -> OpenPointOut:
    return OpenPointOut(
        point=result.point,
        paired_point=result.paired_point,
        ambiguous=result.is_ambiguous,
        remainder=result.remainder,
        divisor=result.divisor,
        bagua=result.bagua.name,
        bagua_number=result.bagua.number,
        candidates=[_pairing_out(candidate) for candidate in result.candidates],
        trace=TraceOut(
            terms=[
                TraceTermOut(role=term.role, label=term.label, weight=term.weight)
                for term in result.trace.terms
            ],
            total=result.trace.total,
            divisor=result.trace.divisor,
            remainder=result.trace.remainder,
            text=result.trace.render(),
        ),
    )


def meridian_out(slot: MeridianSlot) -> MeridianOut:
    return MeridianOut(
        period=period_out(slot.period),
        meridian=slot.meridian,
        organ=slot.organ,
        organ_en=slot.organ_en,
        element=slot.element,
        nature=slot.nature.value,
        label=slot.label,
    )


def resolved_state_out(state: ResolvedState) -> ResolvedStateOut:
    return ResolvedStateOut(
        instant=state.instant,
        days_since_epoch=state.pillars.days_since_epoch,
        day_pillar=pillar_out(state.pillars.day),
        hour_pillar=pillar_out(state.pillars.hour),
        period=period_out(state.pillars.period),
        open_point=open_point_out(state.open_point),
        meridian=meridian_out(state.meridian),
    )


def acupoint_out(entry: AcupointEntry) -> AcupointOut:
    return AcupointOut(
        name=entry.name,
        meridian=entry.meridian,
        location=entry.location,
        paired_point=entry.paired_point,
        vessel=entry.vessel,
        indications=list(entry.indications),
    )


__all__ = [
    "AcupointOut",
    "MeridianOut",
    "OpenPointOut",
    "OpenPointRequest",
    "PillarOut",
    "ResolvedStateOut",
    "acupoint_out",
    "meridian_out",
    "open_point_out",
    "resolved_state_out",
]
