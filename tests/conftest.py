from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, TimelineSettings
from domain.models import TimelineConfig


def _clear_daytl_env() -> None:
    for key in list(os.environ):
        if key.startswith("DAYTL_"):
            os.environ.pop(key, None)


_clear_daytl_env()


@pytest.fixture(autouse=True)
def clear_daytl_env() -> Generator[None, None, None]:
    _clear_daytl_env()
    yield
    _clear_daytl_env()


@pytest.fixture
def timeline_config() -> TimelineConfig:
    return TimelineConfig(
        hour_height=60.0,
        vertical_inset=10.0,
        left_inset=53.0,
        container_width=300.0,
    )


@pytest.fixture
def timeline_settings(tmp_path: Path) -> TimelineSettings:
    return TimelineSettings(
        title="Test Timeline",
        hour_height=60.0,
        vertical_inset=10.0,
        left_inset=53.0,
        container_width=300.0,
        clock_format="24h",
        layout_strategy="greedy",
        excalidraw_base_url="http://testserver/excalidraw",
        excalidraw_max_url_length=100_000,
        scene_dir=tmp_path / "scenes",
        invalidate_scene_cache_on_start=False,
    )


@pytest.fixture
def timeline_settings_factory(
    timeline_settings: TimelineSettings,
) -> Callable[..., TimelineSettings]:
    def _factory(**overrides: object) -> TimelineSettings:
        return timeline_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(timeline_settings: TimelineSettings) -> AppSettings:
    return AppSettings(timeline=timeline_settings)


@pytest.fixture
def app_settings_factory(
    timeline_settings_factory: Callable[..., TimelineSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(timeline=timeline_settings_factory(**overrides))

    return _factory
