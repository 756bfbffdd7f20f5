from __future__ import annotations

from pathlib import Path
from typing import Protocol

from domain.models import DaySchedule, ExcalidrawDocument


class ScheduleRepository(Protocol):
    def load_by_path(self, path: Path) -> DaySchedule: ...


class ExcalidrawRepository(Protocol):
    def save(self, document: ExcalidrawDocument, path: Path) -> None: ...
