"""Typer application for the Linggui Bafa CLI."""

from __future__ import annotations

import json
import threading
from typing import Any, Optional

import typer

from ..bafa.open_point import Sex
from ..bafa.tables import EIGHT_POINTS
from ..boot.logging import configure_logging
from ..circadian import meridian_for_hour
from ..errors import InvalidInstantError
from ..instants import parse_instant
from ..runtime.controller import LiveRecomputeController, ResolvedState, compute_at

app = typer.Typer(help="Linggui Bafa open-point resolver and meridian clock.")


def _sex_option(value: Optional[str]) -> Optional[Sex]:
    if value is None:
        return None
    try:
        return Sex(value.strip().lower())
    except ValueError as exc:
        raise typer.BadParameter("Use 'male' or 'female'.") from exc


def _state_payload(state: ResolvedState) -> dict[str, Any]:
    result = state.open_point
    return {
        "instant": state.instant.isoformat(),
        "day_pillar": state.pillars.day.label(),
        "hour_pillar": state.pillars.hour.label(),
        "period": state.pillars.period.name,
        "point": result.point,
        "paired_point": result.paired_point,
        "ambiguous": result.is_ambiguous,
        "bagua": result.bagua.name,
        "remainder": result.remainder,
        "divisor": result.divisor,
        "calculation": result.trace.render(),
        "meridian": state.meridian.label,
    }


def _state_line(state: ResolvedState) -> str:
    result = state.open_point
    return (
        f"{state.instant:%Y-%m-%d %H:%M:%S} "
        f"{state.pillars.day.label()}日 {state.pillars.hour.label()}时 "
        f"开{result.point} 配{result.paired_point} | {state.meridian.label}"
    )


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Configure logging before executing subcommands."""

    configure_logging()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("resolve")
def resolve(
    date: str = typer.Argument(..., metavar="DATE", help="YYYY-MM-DD or a full ISO-8601 datetime."),
    time: Optional[str] = typer.Argument(None, metavar="[TIME]", help="HH:MM clock time."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA timezone of the wall clock."),
    sex: Optional[str] = typer.Option(
        None, "--sex", help="male/female; settles the center palace case."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit the result as JSON."),
) -> None:
    """Resolve the open point for a date and time."""

    try:
        instant = parse_instant(date, time, tz=tz_name)
    except InvalidInstantError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from exc

    state = compute_at(instant, sex=_sex_option(sex))
    if json_output:
        typer.echo(json.dumps(_state_payload(state), ensure_ascii=False, indent=2))
        return

    result = state.open_point
    typer.echo(f"日柱: {state.pillars.day.label()}  时柱: {state.pillars.hour.label()}")
    typer.echo(f"计算: {result.trace.render()}")
    typer.echo(f"卦宫: {result.bagua.name} ({result.bagua.number})")
    typer.echo(f"开穴: {result.point}  配穴: {result.paired_point}")
    if result.is_ambiguous:
        typer.echo("中宫: 男取照海，女取内关 (use --sex to choose)")
    typer.echo(f"流注: {state.meridian.label}")


@app.command("meridian")
def meridian(
    hour: float = typer.Argument(..., help="Hour of day in [0, 24)."),
    json_output: bool = typer.Option(False, "--json", help="Emit the slot as JSON."),
) -> None:
    """Show the meridian on duty at an hour of the day."""

    try:
        slot = meridian_for_hour(hour)
    except InvalidInstantError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from exc

    if json_output:
        payload = {
            "period": slot.period.name,
            "time_range": slot.period.time_range,
            "meridian": slot.meridian,
            "organ": slot.organ,
            "element": slot.element,
            "nature": slot.nature.value,
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    typer.echo(f"{slot.period.name} {slot.period.time_range}: {slot.meridian} ({slot.organ_en})")


@app.command("points")
def points(
    json_output: bool = typer.Option(False, "--json", help="Emit the table as JSON."),
) -> None:
    """List the eight confluent points with their partners and vessels."""

    if json_output:
        payload = [
            {
                "name": entry.name,
                "paired_point": entry.paired_point,
                "vessel": entry.vessel,
                "meridian": entry.meridian,
            }
            for entry in EIGHT_POINTS.values()
        ]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for entry in EIGHT_POINTS.values():
        typer.echo(f"{entry.name} ↔ {entry.paired_point}  {entry.vessel}  {entry.meridian}")


@app.command("watch")
def watch(
    count: int = typer.Option(0, "--count", min=0, help="Stop after N updates (0 runs until Ctrl-C)."),
    period: Optional[float] = typer.Option(None, "--period", help="Seconds between updates."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA timezone of the wall clock."),
    sex: Optional[str] = typer.Option(None, "--sex", help="male/female for the center palace."),
) -> None:
    """Print the open point for the current instant once per period."""

    if period is not None and period <= 0:
        raise typer.BadParameter("--period must be positive")
    try:
        controller = LiveRecomputeController(period=period, tz=tz_name, sex=_sex_option(sex))
    except InvalidInstantError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from exc

    finished = threading.Event()
    seen = 0

    def on_tick(state: ResolvedState) -> None:
        nonlocal seen
        typer.echo(_state_line(state))
        seen += 1
        if count and seen >= count:
            finished.set()

    handle = controller.start(on_tick)
    try:
        while not finished.wait(0.25):
            pass
    except KeyboardInterrupt:
        typer.echo("")
    finally:
        controller.stop(handle)


@app.command("serve-api")
def serve_api(
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind."),
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on."),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload (development only)."),
    log_level: str = typer.Option("info", "--log-level", help="Log level for uvicorn."),
) -> None:
    """Run the FastAPI service using uvicorn."""

    import uvicorn

    from ..runtime_config import runtime_settings

    uvicorn.run(
        "lingguibafa.api.app:app",
        host=host or runtime_settings.api_host,
        port=port or runtime_settings.api_port,
        reload=reload,
        log_level=log_level,
    )


__all__ = ["app"]
