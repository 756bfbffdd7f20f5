from __future__ import annotations

from typing import Any

from adapters.layout.overlap import OverlapLayoutEngine
from domain.models import CUSTOM_DATA_KEY, TimelineConfig
from domain.services.convert_timeline_to_excalidraw import TimelineToExcalidrawConverter
from domain.services.time_labels import ClockFormat
from tests.helpers.schedule_fixtures import at, load_schedule_fixture


def _role(element: dict[str, Any]) -> str | None:
    return element.get("customData", {}).get(CUSTOM_DATA_KEY, {}).get("role")


def _by_role(elements: list[dict[str, Any]], role: str) -> list[dict[str, Any]]:
    return [element for element in elements if _role(element) == role]


def test_scene_contains_axis_and_events(timeline_config: TimelineConfig) -> None:
    schedule = load_schedule_fixture("workday.json")
    document = TimelineToExcalidrawConverter(OverlapLayoutEngine()).convert(
        schedule, timeline_config
    )
    elements = document.elements

    assert len(_by_role(elements, "hour_line")) == 25
    # four labels per hour plus the closing midnight label
    assert len(_by_role(elements, "time_label")) == 24 * 4 + 1
    events = _by_role(elements, "event")
    assert {element["customData"][CUSTOM_DATA_KEY]["event_id"] for element in events} == {
        item.event_id for item in schedule.events
    }
    assert len(_by_role(elements, "event_title")) == len(schedule.events)
    assert not _by_role(elements, "now_line")
    assert document.to_dict()["type"] == "excalidraw"


def test_event_rectangles_match_layout(timeline_config: TimelineConfig) -> None:
    schedule = load_schedule_fixture("workday.json")
    engine = OverlapLayoutEngine()
    document = TimelineToExcalidrawConverter(engine).convert(schedule, timeline_config)
    items = schedule.layout_attributes()
    engine.layout(items, schedule.day, timeline_config)
    frames = {item.descriptor.event_id: item.frame for item in items}

    for element in _by_role(document.elements, "event"):
        frame = frames[element["customData"][CUSTOM_DATA_KEY]["event_id"]]
        assert (element["x"], element["y"], element["width"], element["height"]) == (
            frame.x,
            frame.y,
            frame.width,
            frame.height,
        )


def test_scene_ids_are_stable(timeline_config: TimelineConfig) -> None:
    schedule = load_schedule_fixture("workday.json")
    converter = TimelineToExcalidrawConverter(OverlapLayoutEngine())
    first = converter.convert(schedule, timeline_config)
    second = converter.convert(schedule, timeline_config)
    assert [element["id"] for element in first.elements] == [
        element["id"] for element in second.elements
    ]
    ids = [element["id"] for element in first.elements]
    assert len(ids) == len(set(ids))


def test_now_line_hides_covered_label(timeline_config: TimelineConfig) -> None:
    schedule = load_schedule_fixture("workday.json")
    now = at("10:02")
    document = TimelineToExcalidrawConverter(OverlapLayoutEngine()).convert(
        schedule, timeline_config, ClockFormat.TWELVE_HOUR, now=now
    )
    now_lines = _by_role(document.elements, "now_line")
    assert len(now_lines) == 1
    assert now_lines[0]["y"] == 10.0 + 10 * 60.0 + 2.0

    labels = _by_role(document.elements, "time_label")
    texts = [element["text"] for element in labels]
    assert "10 AM" not in texts
    assert "11 AM" in texts
    assert len(labels) == 24 * 4


def test_now_on_other_day_draws_no_line(timeline_config: TimelineConfig) -> None:
    schedule = load_schedule_fixture("workday.json")
    document = TimelineToExcalidrawConverter(OverlapLayoutEngine()).convert(
        schedule, timeline_config, now=at("10:02", day_offset=1)
    )
    assert not _by_role(document.elements, "now_line")
    assert len(_by_role(document.elements, "time_label")) == 24 * 4 + 1
