from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from domain.models import LayoutAttributes, TimelineConfig


class EventLayoutEngine(Protocol):
    def layout(
        self,
        events: Sequence[LayoutAttributes],
        reference_day: date,
        config: TimelineConfig,
    ) -> None:
        ...
