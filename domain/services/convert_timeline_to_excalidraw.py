from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List

from domain.models import (
    CUSTOM_DATA_KEY,
    HOURS_PER_DAY,
    METADATA_SCHEMA_VERSION,
    DaySchedule,
    ExcalidrawDocument,
    LayoutAttributes,
    TimelineConfig,
)
from domain.ports.layout import EventLayoutEngine
from domain.services.time_axis import current_time_y
from domain.services.time_labels import ClockFormat, HiddenLabels, hidden_labels, time_strings

Element = Dict[str, Any]
Metadata = Dict[str, Any]

LABEL_X = 2.0
LABEL_OFFSET_Y = 7.0
LABEL_RIGHT_PADDING = 8.0
LABEL_FONT_SIZE = 12.0
EVENT_FONT_SIZE = 14.0
EVENT_TEXT_PADDING = 4.0
NOW_LINE_COLOR = "#e03131"
GRID_LINE_COLOR = "#d0d0d0"
TIME_LABEL_COLOR = "#868e96"
EVENT_STROKE_COLOR = "#1971c2"
EVENT_BACKGROUND_COLOR = "#d0ebff"


class TimelineToExcalidrawConverter:
    def __init__(self, layout_engine: EventLayoutEngine) -> None:
        self.layout_engine = layout_engine
        self.namespace = uuid.uuid5(uuid.NAMESPACE_DNS, "day-timeline")

    def convert(
        self,
        schedule: DaySchedule,
        config: TimelineConfig,
        clock_format: ClockFormat = ClockFormat.TWENTY_FOUR_HOUR,
        now: datetime | None = None,
    ) -> ExcalidrawDocument:
        attributes = schedule.layout_attributes()
        self.layout_engine.layout(attributes, schedule.day, config)
        base_metadata: Metadata = {
            "schema_version": METADATA_SCHEMA_VERSION,
            "day": schedule.day.isoformat(),
        }
        is_today = now is not None and now.date() == schedule.day
        hidden = hidden_labels(now, is_today) if now is not None else HiddenLabels()

        elements: List[Element] = []
        elements.extend(self._build_axis(config, clock_format, hidden, base_metadata))
        elements.extend(self._build_events(attributes, base_metadata))
        if now is not None:
            now_y = current_time_y(now, schedule.day, config)
            if now_y is not None:
                elements.append(
                    self._line_element(
                        element_id=self._stable_id("now-line", schedule.day.isoformat()),
                        start=(config.left_inset, now_y),
                        end=(config.container_width, now_y),
                        metadata=self._with_role(base_metadata, "now_line"),
                        stroke_color=NOW_LINE_COLOR,
                        stroke_width=2,
                    )
                )

        app_state = {
            "viewBackgroundColor": "#ffffff",
            "gridSize": None,
            "currentItemFontFamily": 1,
            "currentItemFontSize": 20,
            "currentItemStrokeColor": "#1e1e1e",
        }
        return ExcalidrawDocument(elements=elements, app_state=app_state, files={})

    def _build_axis(
        self,
        config: TimelineConfig,
        clock_format: ClockFormat,
        hidden: HiddenLabels,
        base_metadata: Metadata,
    ) -> List[Element]:
        elements: List[Element] = []
        label_width = config.left_inset - LABEL_RIGHT_PADDING
        quarter_height = config.hour_height / 4
        for index, label in enumerate(time_strings(clock_format)):
            y = config.vertical_inset + index * config.hour_height
            elements.append(
                self._line_element(
                    element_id=self._stable_id("hour-line", str(index)),
                    start=(config.left_inset, y),
                    end=(config.container_width, y),
                    metadata=self._with_role(base_metadata, "hour_line", hour=index),
                    stroke_color=GRID_LINE_COLOR,
                    stroke_width=1,
                )
            )
            if index == HOURS_PER_DAY:
                labels = [(label, 0.0, hidden.hour)]
            else:
                labels = [
                    (label, 0.0, hidden.hour),
                    ("15", quarter_height, hidden.quarter),
                    ("30", quarter_height * 2, hidden.half),
                    ("45", quarter_height * 3, hidden.three_quarters),
                ]
            for text, offset, hide in labels:
                if hide and index == hidden.hour_index:
                    continue
                elements.append(
                    self._text_element(
                        element_id=self._stable_id("time-label", str(index), text),
                        text=text,
                        x=LABEL_X,
                        y=y - LABEL_OFFSET_Y + offset,
                        width=label_width,
                        height=LABEL_FONT_SIZE + 2,
                        font_size=LABEL_FONT_SIZE,
                        metadata=self._with_role(base_metadata, "time_label", hour=index),
                        align="right",
                        color=TIME_LABEL_COLOR,
                    )
                )
        return elements

    def _build_events(
        self, attributes: List[LayoutAttributes], base_metadata: Metadata
    ) -> List[Element]:
        elements: List[Element] = []
        for item in attributes:
            descriptor = item.descriptor
            frame = item.frame
            group_id = self._stable_id("event-group", descriptor.event_id)
            meta = self._with_role(base_metadata, "event", event_id=descriptor.event_id)
            elements.append(
                self._base_shape(
                    element_id=self._stable_id("event", descriptor.event_id),
                    type_name="rectangle",
                    x=frame.x,
                    y=frame.y,
                    width=frame.width,
                    height=frame.height,
                    group_ids=[group_id],
                    extra={
                        "strokeColor": EVENT_STROKE_COLOR,
                        "backgroundColor": EVENT_BACKGROUND_COLOR,
                        "fillStyle": "solid",
                    },
                    metadata=meta,
                )
            )
            if not descriptor.title:
                continue
            elements.append(
                self._text_element(
                    element_id=self._stable_id("event-title", descriptor.event_id),
                    text=descriptor.title,
                    x=frame.x + EVENT_TEXT_PADDING,
                    y=frame.y + EVENT_TEXT_PADDING,
                    width=max(frame.width - EVENT_TEXT_PADDING * 2, 0.0),
                    height=EVENT_FONT_SIZE * 1.35,
                    font_size=EVENT_FONT_SIZE,
                    metadata=self._with_role(
                        base_metadata, "event_title", event_id=descriptor.event_id
                    ),
                    group_ids=[group_id],
                )
            )
        return elements

    def _text_element(
        self,
        element_id: str,
        text: str,
        x: float,
        y: float,
        width: float,
        height: float,
        font_size: float,
        metadata: Metadata,
        align: str = "left",
        color: str = "#1e1e1e",
        group_ids: List[str] | None = None,
    ) -> Element:
        return self._base_shape(
            element_id=element_id,
            type_name="text",
            x=x,
            y=y,
            width=width,
            height=height,
            group_ids=group_ids or [],
            extra={
                "strokeColor": color,
                "backgroundColor": "transparent",
                "fillStyle": "solid",
                "text": text,
                "fontSize": font_size,
                "fontFamily": 1,
                "textAlign": align,
                "verticalAlign": "top",
                "baseline": height / 2,
                "containerId": None,
            },
            metadata=metadata,
        )

    def _line_element(
        self,
        element_id: str,
        start: tuple[float, float],
        end: tuple[float, float],
        metadata: Metadata,
        stroke_color: str,
        stroke_width: float,
    ) -> Element:
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        return self._base_shape(
            element_id=element_id,
            type_name="line",
            x=start[0],
            y=start[1],
            width=abs(dx),
            height=abs(dy),
            group_ids=[],
            extra={
                "strokeColor": stroke_color,
                "backgroundColor": "transparent",
                "fillStyle": "solid",
                "strokeWidth": stroke_width,
                "points": [[0.0, 0.0], [dx, dy]],
            },
            metadata=metadata,
        )

    def _base_shape(
        self,
        element_id: str,
        type_name: str,
        x: float,
        y: float,
        width: float,
        height: float,
        group_ids: List[str],
        extra: Dict[str, Any],
        metadata: Metadata,
    ) -> Element:
        return {
            "id": element_id,
            "type": type_name,
            "x": x,
            "y": y,
            "width": width,
            "height": height,
            "angle": 0,
            "strokeWidth": 1,
            "strokeStyle": "solid",
            "roughness": 0,
            "opacity": 100,
            "groupIds": group_ids,
            "roundness": None,
            "seed": self._stable_seed(element_id),
            "version": 1,
            "versionNonce": self._stable_seed(f"{element_id}:nonce"),
            "isDeleted": False,
            "boundElements": [],
            "locked": False,
            "frameId": None,
            "customData": {CUSTOM_DATA_KEY: metadata},
            **extra,
        }

    def _with_role(self, base: Metadata, role: str, **extra: Any) -> Metadata:
        merged = dict(base)
        merged["role"] = role
        merged.update(extra)
        return merged

    def _stable_id(self, *parts: str) -> str:
        return str(uuid.uuid5(self.namespace, "|".join(parts)))

    def _stable_seed(self, label: str) -> int:
        return int(uuid.uuid5(self.namespace, label).int % (2**31 - 1))
