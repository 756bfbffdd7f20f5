from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Dict, List, Tuple

from domain.models import LayoutAttributes, Rect, TimelineConfig
from domain.ports.layout import EventLayoutEngine
from domain.services.time_axis import time_to_y

logger = logging.getLogger(__name__)


class IntervalPartitionLayoutEngine(EventLayoutEngine):
    """Column layout based on transitive overlap groups.

    Events are grouped into connected components of the overlap graph, then a
    sweep line assigns each event the lowest column whose previous occupant has
    already ended. All events of a component share the component's column count.
    Overlapping events never share a column.
    """

    def layout(
        self,
        events: Sequence[LayoutAttributes],
        reference_day: date,
        config: TimelineConfig,
    ) -> None:
        components = self.components(events)
        available_width = config.available_width
        for component in components:
            columns, column_count = self._assign_columns(component)
            width = available_width / column_count
            for attributes in component:
                period = attributes.descriptor
                start_y = time_to_y(period.start, reference_day, config)
                end_y = time_to_y(period.end, reference_day, config)
                x = config.left_inset + columns[id(attributes)] / column_count * available_width
                attributes.frame = Rect(x=x, y=start_y, width=width, height=end_y - start_y)
        logger.debug("Partitioned %d events into %d components", len(events), len(components))

    def components(self, events: Sequence[LayoutAttributes]) -> List[List[LayoutAttributes]]:
        sorted_events = sorted(events, key=lambda attributes: attributes.descriptor.start)
        if not sorted_events:
            return []

        groups: List[List[LayoutAttributes]] = []
        current = [sorted_events[0]]
        group_end = sorted_events[0].descriptor.end
        for attributes in sorted_events[1:]:
            period = attributes.descriptor
            if period.start < group_end:
                current.append(attributes)
                group_end = max(group_end, period.end)
            else:
                groups.append(current)
                current = [attributes]
                group_end = period.end
        groups.append(current)
        return groups

    def _assign_columns(
        self, component: Sequence[LayoutAttributes]
    ) -> Tuple[Dict[int, int], int]:
        active: List[Tuple[datetime, int]] = []
        free: List[int] = []
        columns: Dict[int, int] = {}
        column_count = 0
        for attributes in component:
            period = attributes.descriptor
            while active and active[0][0] <= period.start:
                _, released = heapq.heappop(active)
                heapq.heappush(free, released)
            if free:
                column = heapq.heappop(free)
            else:
                column = column_count
                column_count += 1
            columns[id(attributes)] = column
            heapq.heappush(active, (period.end, column))
        return columns, max(column_count, 1)
