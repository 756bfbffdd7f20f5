from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, cast

from fastapi import Body, Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import ORJSONResponse
from pydantic import ValidationError

from adapters.excalidraw.url_encoder import build_excalidraw_url
from adapters.filesystem.scene_repository import LockedSceneRepository
from app.config import AppSettings, load_settings
from app.timeline_wiring import build_day_timeline, build_layout_engine
from domain.models import DaySchedule
from domain.services.convert_timeline_to_excalidraw import TimelineToExcalidrawConverter
from domain.services.time_axis import y_to_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineContext:
    settings: AppSettings
    scene_repo: LockedSceneRepository
    to_excalidraw: TimelineToExcalidrawConverter


def create_app(settings: AppSettings) -> FastAPI:
    context = TimelineContext(
        settings=settings,
        scene_repo=LockedSceneRepository(),
        to_excalidraw=TimelineToExcalidrawConverter(build_layout_engine(settings)),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.timeline.invalidate_scene_cache_on_start:
            removed = context.scene_repo.clear_cache(settings.timeline.scene_dir)
            logger.info("Removed %d cached scenes from %s", removed, settings.timeline.scene_dir)
        yield

    app = FastAPI(title=settings.timeline.title, lifespan=lifespan)
    app.state.context = context

    @app.get("/health")
    def health() -> ORJSONResponse:
        return ORJSONResponse(
            {"status": "ok", "layout_strategy": settings.timeline.layout_strategy}
        )

    @app.post("/api/layout")
    def api_layout(
        payload: dict[str, Any] = Body(...),
        width: float | None = Query(default=None),
        context: TimelineContext = Depends(get_context),
    ) -> ORJSONResponse:
        schedule = parse_schedule(payload)
        timeline = build_day_timeline(context.settings, schedule.day, width)
        timeline.set_layout_attributes(schedule.layout_attributes())
        return ORJSONResponse(
            {
                "day": schedule.day.isoformat(),
                "full_height": timeline.full_height,
                "first_event_y": timeline.first_event_y,
                "frames": [
                    {"event_id": item.descriptor.event_id, **item.frame.to_dict()}
                    for item in timeline.layout_attributes
                ],
            }
        )

    @app.get("/api/time-at")
    def api_time_at(
        y: float = Query(...),
        context: TimelineContext = Depends(get_context),
    ) -> ORJSONResponse:
        time = y_to_time(y, context.settings.timeline.to_timeline_config())
        return ORJSONResponse({"hour": time.hour, "minute": time.minute, "label": time.label()})

    @app.post("/api/scene")
    def api_scene(
        payload: dict[str, Any] = Body(...),
        width: float | None = Query(default=None),
        now: datetime | None = Query(default=None),
        store: bool = Query(default=False),
        context: TimelineContext = Depends(get_context),
    ) -> ORJSONResponse:
        schedule = parse_schedule(payload)
        timeline_settings = context.settings.timeline
        document = context.to_excalidraw.convert(
            schedule,
            timeline_settings.to_timeline_config(width),
            timeline_settings.clock_format,
            now=now,
        )
        response: dict[str, Any] = {
            "scene": document.to_dict(),
            "url": build_excalidraw_url(
                timeline_settings.excalidraw_base_url,
                document,
                timeline_settings.excalidraw_max_url_length,
            ),
        }
        if store:
            target_path = timeline_settings.scene_dir / f"{schedule.day.isoformat()}.excalidraw"
            context.scene_repo.save(document, target_path)
            response["stored_path"] = str(target_path)
        return ORJSONResponse(response)

    return app


def get_context(request: Request) -> TimelineContext:
    return cast(TimelineContext, request.app.state.context)


def parse_schedule(payload: dict[str, Any]) -> DaySchedule:
    try:
        return DaySchedule.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=422, detail=exc.errors(include_url=False, include_context=False)
        ) from exc


def build_default_app() -> FastAPI:
    return create_app(load_settings())
