from __future__ import annotations

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.excalidraw.repository import FileSystemExcalidrawRepository
from adapters.excalidraw.url_encoder import build_excalidraw_url
from adapters.filesystem.schedule_repository import FileSystemScheduleRepository
from app.config import AppSettings, load_settings
from app.timeline_wiring import build_day_timeline, build_layout_engine
from domain.models import DaySchedule
from domain.services.convert_timeline_to_excalidraw import TimelineToExcalidrawConverter
from domain.services.time_axis import y_to_time

app = typer.Typer(no_args_is_help=True)
console = Console()


def _settings(config_path: Path | None) -> AppSettings:
    try:
        return load_settings(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc


def _load_schedule(path: Path) -> DaySchedule:
    try:
        return FileSystemScheduleRepository().load_by_path(path)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {path}")
        raise typer.Exit(code=1) from exc
    except ValidationError as exc:
        console.print(f"[red]Invalid schedule:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("layout")
def layout(
    schedule_path: Path = typer.Argument(..., help="Day schedule JSON file."),
    width: float | None = typer.Option(None, help="Container width, overrides config."),
    as_json: bool = typer.Option(False, "--json", help="Print frames as JSON."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _settings(config_path)
    schedule = _load_schedule(schedule_path)
    timeline = build_day_timeline(settings, schedule.day, width)
    timeline.set_layout_attributes(schedule.layout_attributes())

    if as_json:
        payload = [
            {"event_id": item.descriptor.event_id, **item.frame.to_dict()}
            for item in timeline.layout_attributes
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"{schedule.day.isoformat()} ({len(timeline.event_blocks)} events)")
    for column in ("event", "start", "end", "x", "y", "width", "height"):
        table.add_column(column)
    for item in timeline.layout_attributes:
        frame = item.frame
        table.add_row(
            item.descriptor.title or item.descriptor.event_id,
            item.descriptor.start.strftime("%H:%M"),
            item.descriptor.end.strftime("%H:%M"),
            f"{frame.x:.1f}",
            f"{frame.y:.1f}",
            f"{frame.width:.1f}",
            f"{frame.height:.1f}",
        )
    console.print(table)


@app.command("render")
def render(
    schedule_path: Path = typer.Argument(..., help="Day schedule JSON file."),
    output: Path = typer.Option(..., help="Target .excalidraw file."),
    width: float | None = typer.Option(None, help="Container width, overrides config."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _settings(config_path)
    schedule = _load_schedule(schedule_path)
    converter = TimelineToExcalidrawConverter(build_layout_engine(settings))
    document = converter.convert(
        schedule,
        settings.timeline.to_timeline_config(width),
        settings.timeline.clock_format,
    )
    FileSystemExcalidrawRepository().save(document, output)
    console.print(f"[green]Wrote[/] {output}")
    url = build_excalidraw_url(
        settings.timeline.excalidraw_base_url,
        document,
        settings.timeline.excalidraw_max_url_length,
    )
    if url:
        console.print(url, soft_wrap=True)


@app.command("locate")
def locate(
    y: float = typer.Argument(..., help="Vertical coordinate inside the timeline."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _settings(config_path)
    time = y_to_time(y, settings.timeline.to_timeline_config())
    typer.echo(time.label())


@app.command("validate")
def validate(schedule_path: Path = typer.Argument(..., help="Day schedule JSON file.")) -> None:
    schedule = _load_schedule(schedule_path)
    console.print(
        f"[green]Valid schedule:[/] {schedule_path} ({len(schedule.events)} events)"
    )


if __name__ == "__main__":
    app()
