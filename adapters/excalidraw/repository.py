from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import write_json_atomic
from domain.models import ExcalidrawDocument
from domain.ports.repositories import ExcalidrawRepository


class FileSystemExcalidrawRepository(ExcalidrawRepository):
    def save(self, document: ExcalidrawDocument, path: Path) -> None:
        write_json_atomic(path, document.to_dict())
