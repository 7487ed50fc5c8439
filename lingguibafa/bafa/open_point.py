"""Open-point (开穴) resolution for the Linggui Bafa method."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping

from ..chinese.sexagenary import DerivedPillars
from .tables import (
    CENTER_NUMBER,
    DAY_BRANCH_VALUES,
    DAY_STEM_VALUES,
    HOUR_BRANCH_VALUES,
    HOUR_STEM_VALUES,
    AcupointEntry,
    BaguaSlot,
    acupoint,
    bagua_for_number,
    divisor_for,
)

LOG = logging.getLogger(__name__)


class Sex(Enum):
    """Optional attribute that settles the center palace (中宫) case."""

    MALE = "male"
    FEMALE = "female"


# 男照海，女内关
_CENTER_CHOICE: Final[Mapping[Sex, str]] = {Sex.MALE: "照海", Sex.FEMALE: "内关"}


@dataclass(frozen=True)
class TraceTerm:
    """One weighted operand of the numerology sum."""

    role: str
    label: str
    weight: int


@dataclass(frozen=True)
class NumerologyTrace:
    """The arithmetic behind an :class:`OpenPointResult`."""

    terms: tuple[TraceTerm, ...]
    total: int
    divisor: int
    remainder: int

    def render(self) -> str:
        operands = " + ".join(f"{term.label}{term.weight}" for term in self.terms)
        return (
            f"({operands}) ÷ {self.divisor} = "
            f"{self.total} ÷ {self.divisor} = 余{self.remainder}"
        )

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class PointPairing:
    """An opened point and the partner it is always needled with."""

    point: AcupointEntry
    partner: AcupointEntry

    @property
    def vessel(self) -> str:
        return self.point.vessel


@dataclass(frozen=True)
class OpenPointResult:
    """Outcome of the numerology step.

    ``candidates`` holds a single pairing except in the center palace case,
    where both the male and female openings are returned unless the caller
    supplied a :class:`Sex`.
    """

    remainder: int
    divisor: int
    total: int
    bagua: BaguaSlot
    candidates: tuple[PointPairing, ...]
    trace: NumerologyTrace

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1

    @property
    def point(self) -> str:
        return "/".join(candidate.point.name for candidate in self.candidates)

    @property
    def paired_point(self) -> str:
        return "/".join(candidate.partner.name for candidate in self.candidates)


def weighted_terms(pillars: DerivedPillars) -> tuple[TraceTerm, ...]:
    """Return the four weights in day-stem, day-branch, hour-stem, hour-branch order."""

    return (
        TraceTerm("day_stem", pillars.day_stem.name, DAY_STEM_VALUES.weight(pillars.day_stem)),
        TraceTerm("day_branch", pillars.day_branch.name, DAY_BRANCH_VALUES.weight(pillars.day_branch)),
        TraceTerm("hour_stem", pillars.hour_stem.name, HOUR_STEM_VALUES.weight(pillars.hour_stem)),
        TraceTerm("hour_branch", pillars.hour_branch.name, HOUR_BRANCH_VALUES.weight(pillars.hour_branch)),
    )


def reduce_total(total: int, divisor: int) -> int:
    """Reduce ``total`` into ``1..divisor``; an exact multiple maps to ``divisor``."""

    return total % divisor or divisor


def _pairing(name: str) -> PointPairing:
    entry = acupoint(name)
    return PointPairing(point=entry, partner=acupoint(entry.paired_point))


def resolve_open_point(pillars: DerivedPillars, *, sex: Sex | None = None) -> OpenPointResult:
    """Resolve the opened point and its partner for ``pillars``.

    Parameters
    ----------
    pillars:
        Output of :func:`~lingguibafa.chinese.sexagenary.derive_pillars`.
    sex:
        Only consulted when the remainder lands on the center palace. When
        omitted both candidates are returned and the caller decides.
    """

    terms = weighted_terms(pillars)
    total = sum(term.weight for term in terms)
    divisor = divisor_for(pillars.day_stem)
    remainder = reduce_total(total, divisor)
    bagua = bagua_for_number(remainder)

    if bagua.number == CENTER_NUMBER and sex is not None:
        names: tuple[str, ...] = (_CENTER_CHOICE[sex],)
    else:
        names = bagua.points
    candidates = tuple(_pairing(name) for name in names)

    trace = NumerologyTrace(terms=terms, total=total, divisor=divisor, remainder=remainder)
    LOG.debug("Opened %s via %s", "/".join(names), trace.render())

    return OpenPointResult(
        remainder=remainder,
        divisor=divisor,
        total=total,
        bagua=bagua,
        candidates=candidates,
        trace=trace,
    )


__all__ = [
    "Sex",
    "TraceTerm",
    "NumerologyTrace",
    "PointPairing",
    "OpenPointResult",
    "weighted_terms",
    "reduce_total",
    "resolve_open_point",
]
