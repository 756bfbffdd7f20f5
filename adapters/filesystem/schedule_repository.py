from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import load_json
from domain.models import DaySchedule
from domain.ports.repositories import ScheduleRepository


class FileSystemScheduleRepository(ScheduleRepository):
    def load_by_path(self, path: Path) -> DaySchedule:
        if not path.exists():
            raise FileNotFoundError(path)
        return DaySchedule.model_validate(load_json(path))
