from __future__ import annotations

import json
from datetime import date, datetime, timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

from domain.models import DaySchedule, EventDescriptor, LayoutAttributes

REFERENCE_DAY = date(2024, 3, 14)


@lru_cache(maxsize=1)
def repo_root() -> Path:
    for parent in Path(__file__).resolve().parents:
        if (parent / "pyproject.toml").exists():
            return parent
    raise RuntimeError("Repository root not found")


def schedule_fixture_path(name: str) -> Path:
    return repo_root() / "examples" / "schedules" / name


def load_schedule_payload(name: str) -> dict[str, Any]:
    payload = json.loads(schedule_fixture_path(name).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise TypeError(f"Expected dict payload in {name}")
    return payload


def load_schedule_fixture(name: str) -> DaySchedule:
    return DaySchedule.model_validate(load_schedule_payload(name))


def at(clock: str, day_offset: int = 0, day: date = REFERENCE_DAY) -> datetime:
    hour, minute = (int(part) for part in clock.split(":"))
    base = datetime(day.year, day.month, day.day, hour, minute)
    return base + timedelta(days=day_offset)


def event(
    event_id: str,
    start: str,
    end: str,
    *,
    start_day_offset: int = 0,
    end_day_offset: int = 0,
    title: str = "",
) -> EventDescriptor:
    return EventDescriptor(
        event_id=event_id,
        start=at(start, start_day_offset),
        end=at(end, end_day_offset),
        title=title,
    )


def attributes(*descriptors: EventDescriptor) -> list[LayoutAttributes]:
    return [LayoutAttributes(descriptor=descriptor) for descriptor in descriptors]


def schedule_payload(events: list[dict[str, Any]], day: date = REFERENCE_DAY) -> dict[str, Any]:
    return {"day": day.isoformat(), "events": events}
