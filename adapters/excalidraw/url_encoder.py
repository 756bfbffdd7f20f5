from __future__ import annotations

import json
from typing import Any, cast

from lzstring import LZString  # type: ignore[import-untyped]

from domain.models import ExcalidrawDocument


def encode_scene_payload(scene: dict[str, Any]) -> str:
    payload = json.dumps(scene, ensure_ascii=True, separators=(",", ":"))
    return cast(str, LZString().compressToEncodedURIComponent(payload))


def build_excalidraw_url(
    base_url: str,
    document: ExcalidrawDocument,
    max_length: int | None = None,
) -> str | None:
    """Shareable ``#json=`` link for a scene, or None when it exceeds ``max_length``."""
    clean_base = base_url.split("#", 1)[0]
    url = f"{clean_base}#json={encode_scene_payload(document.to_dict())}"
    if max_length is not None and len(url) > max_length:
        return None
    return url
