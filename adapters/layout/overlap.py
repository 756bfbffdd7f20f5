from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from typing import List

from domain.models import LayoutAttributes, Rect, TimelineConfig
from domain.ports.layout import EventLayoutEngine
from domain.services.time_axis import time_to_y

logger = logging.getLogger(__name__)

Cluster = List[LayoutAttributes]


class OverlapLayoutEngine(EventLayoutEngine):
    """Greedy column layout for one day of events.

    Events are clustered in a single pass: an event joins the open cluster when
    it overlaps the cluster's longest member or its most recently added member.
    This is not a transitive closure, so an event overlapping only some other
    earlier member can start a new cluster. Every member of a cluster gets an
    equal share of the available width.
    """

    def layout(
        self,
        events: Sequence[LayoutAttributes],
        reference_day: date,
        config: TimelineConfig,
    ) -> None:
        clusters = self.clusters(events)
        available_width = config.available_width
        for cluster in clusters:
            total_count = len(cluster)
            equal_width = available_width / total_count
            for index, attributes in enumerate(cluster):
                period = attributes.descriptor
                start_y = time_to_y(period.start, reference_day, config)
                end_y = time_to_y(period.end, reference_day, config)
                x = config.left_inset + index / total_count * available_width
                attributes.frame = Rect(x=x, y=start_y, width=equal_width, height=end_y - start_y)
        logger.debug("Laid out %d events in %d clusters", len(events), len(clusters))

    def clusters(self, events: Sequence[LayoutAttributes]) -> List[Cluster]:
        # sorted() is stable, equal starts keep input order.
        sorted_events = sorted(events, key=lambda attributes: attributes.descriptor.start)

        groups: List[Cluster] = []
        overlapping: Cluster = []
        longest: LayoutAttributes | None = None
        longest_duration = 0.0
        for event in sorted_events:
            duration = event.descriptor.duration_seconds()
            if longest is None:
                overlapping.append(event)
                longest, longest_duration = event, duration
                continue

            last = overlapping[-1]
            if longest.descriptor.overlaps(event.descriptor) or last.descriptor.overlaps(
                event.descriptor
            ):
                overlapping.append(event)
                # Strictly greater, the earlier member wins ties.
                if duration > longest_duration:
                    longest, longest_duration = event, duration
            else:
                groups.append(overlapping)
                overlapping = [event]
                longest, longest_duration = event, duration

        if overlapping:
            groups.append(overlapping)
        return groups
