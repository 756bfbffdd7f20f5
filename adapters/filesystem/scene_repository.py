from __future__ import annotations

from pathlib import Path

from filelock import FileLock

from adapters.excalidraw.repository import FileSystemExcalidrawRepository
from domain.models import ExcalidrawDocument


class LockedSceneRepository(FileSystemExcalidrawRepository):
    """Scene writer guarded by a sidecar lock file, for concurrent web requests."""

    def save(self, document: ExcalidrawDocument, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        with FileLock(str(lock_path)):
            super().save(document, path)

    def clear_cache(self, directory: Path) -> int:
        if not directory.exists():
            return 0
        removed = 0
        for path in directory.iterdir():
            if not path.is_file():
                continue
            if path.suffix.lower() == ".excalidraw" or path.name.endswith(".lock"):
                path.unlink()
                removed += 1
        return removed
