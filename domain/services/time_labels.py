from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List

from domain.models import HOURS_PER_DAY


class ClockFormat(str, Enum):
    TWENTY_FOUR_HOUR = "24h"
    TWELVE_HOUR = "12h"


@dataclass(frozen=True)
class HiddenLabels:
    hour_index: int = -1
    hour: bool = False
    quarter: bool = False
    half: bool = False
    three_quarters: bool = False


def time_strings(clock_format: ClockFormat) -> List[str]:
    if clock_format == ClockFormat.TWELVE_HOUR:
        return _time_strings_12h()
    return _time_strings_24h()


def _time_strings_24h() -> List[str]:
    return [f"{hour % HOURS_PER_DAY:02d}:00" for hour in range(HOURS_PER_DAY + 1)]


def _time_strings_12h() -> List[str]:
    labels: List[str] = []
    for hour in range(HOURS_PER_DAY + 1):
        hour_of_day = hour % HOURS_PER_DAY
        if hour_of_day == 12:
            labels.append("Noon")
            continue
        suffix = "AM" if hour_of_day < 12 else "PM"
        display = hour_of_day % 12 or 12
        labels.append(f"{display} {suffix}")
    return labels


def hidden_labels(now: datetime, is_today: bool) -> HiddenLabels:
    """Labels covered by the current-time indicator on today's axis."""
    if not is_today:
        return HiddenLabels()
    minute = now.minute
    hour_index = now.hour + 1 if minute > 55 else now.hour
    return HiddenLabels(
        hour_index=hour_index,
        hour=minute <= 5 or minute >= 55,
        quarter=10 <= minute <= 20,
        half=25 <= minute <= 35,
        three_quarters=40 <= minute <= 50,
    )
