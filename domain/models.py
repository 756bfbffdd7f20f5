from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Dict, List, NamedTuple, Set

from pydantic import BaseModel, Field, field_validator

METADATA_SCHEMA_VERSION = "1.0"
CUSTOM_DATA_KEY = "daytl"
HOURS_PER_DAY = 24


class EventDescriptor(BaseModel):
    event_id: str = Field(..., min_length=1)
    start: datetime
    end: datetime
    title: str = ""
    payload: Dict[str, Any] = Field(default_factory=dict)

    def duration_seconds(self) -> float:
        return (self.end - self.start).total_seconds()

    def overlaps(self, other: EventDescriptor) -> bool:
        return self.start < other.end and other.start < self.end


class DaySchedule(BaseModel):
    day: date
    events: List[EventDescriptor] = Field(default_factory=list)

    @field_validator("events", mode="after")
    @classmethod
    def ensure_valid_events(cls, events: List[EventDescriptor]) -> List[EventDescriptor]:
        seen: Set[str] = set()
        for event in events:
            if event.event_id in seen:
                msg = f"Duplicate event_id found: {event.event_id}"
                raise ValueError(msg)
            seen.add(event.event_id)
            if event.end < event.start:
                msg = f"Event {event.event_id} ends before it starts"
                raise ValueError(msg)
        return events

    def layout_attributes(self) -> List[LayoutAttributes]:
        return [LayoutAttributes(descriptor=event) for event in self.events]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass
class LayoutAttributes:
    descriptor: EventDescriptor
    frame: Rect = field(default_factory=Rect)


@dataclass(frozen=True)
class TimelineConfig:
    """Geometry of one day axis.

    ``hour_height`` is the vertical distance between two hour gridlines,
    ``vertical_inset`` the margin above hour 0 and below hour 24 and
    ``left_inset`` the horizontal band reserved for time labels.
    """

    hour_height: float = 45.0
    vertical_inset: float = 10.0
    left_inset: float = 53.0
    container_width: float = 375.0

    @property
    def available_width(self) -> float:
        return self.container_width - self.left_inset

    @property
    def full_height(self) -> float:
        return self.vertical_inset * 2 + self.hour_height * HOURS_PER_DAY

    def with_width(self, container_width: float) -> TimelineConfig:
        return replace(self, container_width=container_width)


class TimeOfDay(NamedTuple):
    hour: int
    minute: int

    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class ExcalidrawDocument:
    elements: List[dict]
    app_state: dict
    files: dict

    def to_dict(self) -> dict:
        return {
            "type": "excalidraw",
            "version": 2,
            "source": "day-timeline",
            "elements": self.elements,
            "appState": self.app_state,
            "files": self.files,
        }
