from __future__ import annotations

from datetime import date

from adapters.layout.interval_partition import IntervalPartitionLayoutEngine
from adapters.layout.overlap import OverlapLayoutEngine
from adapters.pool.reuse_pool import ReusePool
from app.config import AppSettings
from domain.ports.layout import EventLayoutEngine
from domain.services.day_timeline import DayTimeline, EventBlock


def build_layout_engine(settings: AppSettings) -> EventLayoutEngine:
    if settings.timeline.layout_strategy == "interval_partition":
        return IntervalPartitionLayoutEngine()
    return OverlapLayoutEngine()


def build_day_timeline(
    settings: AppSettings,
    day: date,
    container_width: float | None = None,
) -> DayTimeline:
    return DayTimeline(
        layout_engine=build_layout_engine(settings),
        config=settings.timeline.to_timeline_config(container_width),
        day=day,
        pool=ReusePool(EventBlock),
    )
