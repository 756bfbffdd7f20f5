from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson


def load_json(path: Path) -> dict[str, Any]:
    data = orjson.loads(path.read_bytes())
    return data if isinstance(data, dict) else {}


def write_json_atomic(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
    tmp_path.replace(path)
