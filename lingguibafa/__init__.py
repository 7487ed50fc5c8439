"""Linggui Bafa (灵龟八法) open-point resolver and meridian clock."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version as _get_version

LOG = logging.getLogger(__name__)

try:
    __version__ = _get_version("lingguibafa")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.0.0"

from .bafa import (  # noqa: E402
    BAGUA_SLOTS,
    EIGHT_POINTS,
    OpenPointResult,
    Sex,
    partner,
    resolve_open_point,
)
from .chinese import (  # noqa: E402
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    TWELVE_PERIODS,
    DerivedPillars,
    Pillar,
    derive_pillars,
)
from .circadian import MERIDIAN_SLOTS, MeridianSlot, meridian_for_hour  # noqa: E402
from .errors import (  # noqa: E402
    ControllerStateError,
    InvalidInstantError,
    LingguiError,
    TableConsistencyError,
)
from .instants import parse_instant  # noqa: E402
from .runtime import (  # noqa: E402
    ControllerState,
    LiveRecomputeController,
    ResolvedState,
    TickerHandle,
    compute_at,
)

__all__ = [
    "__version__",
    "BAGUA_SLOTS",
    "EIGHT_POINTS",
    "OpenPointResult",
    "Sex",
    "partner",
    "resolve_open_point",
    "EARTHLY_BRANCHES",
    "HEAVENLY_STEMS",
    "TWELVE_PERIODS",
    "DerivedPillars",
    "Pillar",
    "derive_pillars",
    "MERIDIAN_SLOTS",
    "MeridianSlot",
    "meridian_for_hour",
    "ControllerStateError",
    "InvalidInstantError",
    "LingguiError",
    "TableConsistencyError",
    "parse_instant",
    "ControllerState",
    "LiveRecomputeController",
    "ResolvedState",
    "TickerHandle",
    "compute_at",
]
