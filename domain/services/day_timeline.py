from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from typing import List, Protocol

from domain.models import EventDescriptor, LayoutAttributes, Rect, TimeOfDay, TimelineConfig
from domain.ports.layout import EventLayoutEngine
from domain.ports.pool import ElementPool
from domain.services.time_axis import current_time_y, y_to_time


class EventBlock:
    """Display element for one event, recycled through an element pool."""

    def __init__(self) -> None:
        self.frame = Rect()
        self.descriptor: EventDescriptor | None = None
        self.attached = False

    def update(self, attributes: LayoutAttributes) -> None:
        self.frame = attributes.frame
        self.descriptor = attributes.descriptor
        self.attached = True

    def prepare_for_reuse(self) -> None:
        self.frame = Rect()
        self.descriptor = None
        self.attached = False


class TimelineDelegate(Protocol):
    def timeline_did_long_press(self, timeline: DayTimeline, time: TimeOfDay) -> None: ...


class DayTimeline:
    """Presentation state of one day: layout attributes and their display blocks."""

    def __init__(
        self,
        layout_engine: EventLayoutEngine,
        config: TimelineConfig,
        day: date,
        pool: ElementPool[EventBlock],
        delegate: TimelineDelegate | None = None,
    ) -> None:
        self.layout_engine = layout_engine
        self.config = config
        self.day = day
        self.pool = pool
        self.delegate = delegate
        self.layout_attributes: List[LayoutAttributes] = []
        self.event_blocks: List[EventBlock] = []

    @property
    def full_height(self) -> float:
        return self.config.full_height

    @property
    def first_event_y(self) -> float | None:
        if not self.layout_attributes:
            return None
        return min(attributes.frame.y for attributes in self.layout_attributes)

    def set_layout_attributes(self, attributes: Sequence[LayoutAttributes]) -> None:
        self.layout_attributes = list(attributes)
        self.recalculate_layout()
        self._prepare_event_blocks()
        self.layout_events()

    def set_day(self, day: date) -> None:
        self.day = day
        self.recalculate_layout()
        self.layout_events()

    def set_container_width(self, container_width: float) -> None:
        self.config = self.config.with_width(container_width)
        self.recalculate_layout()
        self.layout_events()

    def recalculate_layout(self) -> None:
        self.layout_engine.layout(self.layout_attributes, self.day, self.config)

    def layout_events(self) -> None:
        for attributes, block in zip(self.layout_attributes, self.event_blocks):
            block.update(attributes)

    def long_press(self, y: float) -> TimeOfDay:
        time = y_to_time(y, self.config)
        if self.delegate is not None:
            self.delegate.timeline_did_long_press(self, time)
        return time

    def is_today(self, now: datetime) -> bool:
        return now.date() == self.day

    def now_line_y(self, now: datetime) -> float | None:
        return current_time_y(now, self.day, self.config)

    def prepare_for_reuse(self) -> None:
        self.pool.release(self.event_blocks)
        self.event_blocks = []

    def _prepare_event_blocks(self) -> None:
        self.pool.release(self.event_blocks)
        self.event_blocks = [self.pool.acquire() for _ in self.layout_attributes]
