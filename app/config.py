from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar, Literal

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import TimelineConfig
from domain.services.time_labels import ClockFormat

DEFAULT_CONFIG_PATH = Path("config/timeline.yaml")

LayoutStrategy = Literal["greedy", "interval_partition"]


class TimelineSettings(BaseModel):
    title: str = "Day Timeline"
    hour_height: float = 45.0
    vertical_inset: float = 10.0
    left_inset: float = 53.0
    container_width: float = 375.0
    clock_format: ClockFormat = ClockFormat.TWENTY_FOUR_HOUR
    layout_strategy: LayoutStrategy = "greedy"
    excalidraw_base_url: str = "https://excalidraw.com/"
    excalidraw_max_url_length: int = 8000
    scene_dir: Path = Path("data/scenes")
    invalidate_scene_cache_on_start: bool = False

    @field_validator("hour_height")
    @classmethod
    def ensure_positive_hour_height(cls, value: float) -> float:
        if value <= 0:
            msg = "timeline.hour_height must be positive"
            raise ValueError(msg)
        return value

    @field_validator("clock_format", "layout_strategy", mode="before")
    @classmethod
    def normalize_choice(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_timeline_config(self, container_width: float | None = None) -> TimelineConfig:
        return TimelineConfig(
            hour_height=self.hour_height,
            vertical_inset=self.vertical_inset,
            left_inset=self.left_inset,
            container_width=(
                self.container_width if container_width is None else container_width
            ),
        )


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DAYTL_", env_nested_delimiter="__")

    timeline: TimelineSettings = TimelineSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("DAYTL_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
