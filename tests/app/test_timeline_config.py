from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from adapters.layout.interval_partition import IntervalPartitionLayoutEngine
from adapters.layout.overlap import OverlapLayoutEngine
from app.config import AppSettings, TimelineSettings, load_settings
from app.timeline_wiring import build_day_timeline, build_layout_engine
from domain.services.time_labels import ClockFormat
from tests.helpers.schedule_fixtures import REFERENCE_DAY


def test_defaults_match_timeline_geometry() -> None:
    config = TimelineSettings().to_timeline_config()
    assert config.vertical_inset == 10.0
    assert config.left_inset == 53.0
    assert config.available_width == 375.0 - 53.0


def test_container_width_override(timeline_settings: TimelineSettings) -> None:
    assert timeline_settings.to_timeline_config(500.0).container_width == 500.0
    assert timeline_settings.to_timeline_config().container_width == 300.0


def test_rejects_non_positive_hour_height() -> None:
    with pytest.raises(ValidationError, match="hour_height"):
        TimelineSettings(hour_height=0)


def test_normalizes_choices() -> None:
    settings = TimelineSettings(clock_format=" 12H ", layout_strategy="Interval_Partition")
    assert settings.clock_format == ClockFormat.TWELVE_HOUR
    assert settings.layout_strategy == "interval_partition"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DAYTL_TIMELINE__HOUR_HEIGHT", "80")
    monkeypatch.setenv("DAYTL_TIMELINE__LAYOUT_STRATEGY", "interval_partition")
    settings = load_settings()
    assert settings.timeline.hour_height == 80.0
    assert settings.timeline.layout_strategy == "interval_partition"


def test_yaml_config_file(tmp_path: Path) -> None:
    config_path = tmp_path / "timeline.yaml"
    config_path.write_text(
        "timeline:\n  container_width: 640\n  clock_format: 12h\n", encoding="utf-8"
    )
    settings = load_settings(config_path)
    assert settings.timeline.container_width == 640.0
    assert settings.timeline.clock_format == ClockFormat.TWELVE_HOUR


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml")


def test_layout_engine_wiring(app_settings_factory) -> None:  # type: ignore[no-untyped-def]
    greedy = app_settings_factory()
    partition = app_settings_factory(layout_strategy="interval_partition")
    assert isinstance(build_layout_engine(greedy), OverlapLayoutEngine)
    assert isinstance(build_layout_engine(partition), IntervalPartitionLayoutEngine)


def test_day_timeline_wiring(app_settings: AppSettings) -> None:
    timeline = build_day_timeline(app_settings, REFERENCE_DAY, container_width=420.0)
    assert timeline.day == REFERENCE_DAY
    assert timeline.config.container_width == 420.0
    assert timeline.config.hour_height == 60.0
