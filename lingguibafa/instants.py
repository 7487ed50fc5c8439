"""Validation of caller-supplied dates and times.

Free-form input is parsed and rejected here. The pillar engines only ever
see a well-formed :class:`~datetime.datetime`.
"""

from __future__ import annotations

from datetime import date, datetime, time, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidInstantError

_DATETIME_ADAPTER = TypeAdapter(datetime)
_DATE_ADAPTER = TypeAdapter(date)
_TIME_ADAPTER = TypeAdapter(time)


def resolve_timezone(value: str | tzinfo | None) -> tzinfo:
    """Return a ``tzinfo`` for an IANA name, falling back to the configured zone."""

    if isinstance(value, tzinfo):
        return value
    if value is None or not value.strip():
        from .runtime_config import runtime_settings

        return runtime_settings.tzinfo
    try:
        return ZoneInfo(value.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidInstantError(f"Unknown timezone: {value!r}") from exc


def _localize(moment: datetime, tz: str | tzinfo | None) -> datetime:
    if tz is None:
        return moment
    zone = resolve_timezone(tz)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=zone)
    return moment.astimezone(zone)


def parse_instant(
    value: Any,
    time_of_day: Any | None = None,
    *,
    tz: str | tzinfo | None = None,
) -> datetime:
    """Parse ``value`` (and optionally ``time_of_day``) into a datetime.

    Accepted forms:

    * a :class:`datetime`, or an ISO-8601 string such as
      ``2000-01-01T10:00`` / ``2000-01-01T10:00:00+08:00``;
    * a date (``YYYY-MM-DD`` or :class:`date`) together with a separate
      ``HH:MM`` time, matching the date and time fields of an entry form.
      A date without a time means midnight.

    When ``tz`` is given, naive results are pinned to it and aware results
    are converted to it, so the pillars follow that zone's wall clock.
    Anything that cannot be parsed raises :class:`InvalidInstantError`.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidInstantError("A date or datetime is required")

    if time_of_day is not None and not (isinstance(time_of_day, str) and not time_of_day.strip()):
        try:
            day = _DATE_ADAPTER.validate_python(value)
            clock = _TIME_ADAPTER.validate_python(time_of_day)
        except ValidationError as exc:
            raise InvalidInstantError(
                f"Invalid date/time pair: {value!r} {time_of_day!r}"
            ) from exc
        return _localize(datetime.combine(day, clock), tz)

    if isinstance(value, str) and "T" not in value.upper() and " " not in value.strip():
        try:
            day = _DATE_ADAPTER.validate_python(value)
        except ValidationError as exc:
            raise InvalidInstantError(f"Invalid date: {value!r}") from exc
        return _localize(datetime.combine(day, time()), tz)

    try:
        moment = _DATETIME_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise InvalidInstantError(f"Invalid ISO-8601 datetime: {value!r}") from exc
    return _localize(moment, tz)


def now(tz: str | tzinfo | None = None) -> datetime:
    """Return the current instant on the wall clock of ``tz``."""

    return datetime.now(resolve_timezone(tz))


__all__ = ["now", "parse_instant", "resolve_timezone"]
