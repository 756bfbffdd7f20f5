from __future__ import annotations

import math
from datetime import date, datetime

from domain.models import HOURS_PER_DAY, TimeOfDay, TimelineConfig

# Fraction-of-hour to minute conversion ("rule of three" against 0.98 == 59 min).
MINUTES_RULE_NUMERATOR = 59
MINUTES_RULE_DENOMINATOR = 0.98


def axis_height(config: TimelineConfig) -> float:
    return HOURS_PER_DAY * config.hour_height


def time_to_y(instant: datetime, reference_day: date, config: TimelineConfig) -> float:
    """Map ``instant`` onto the vertical axis of ``reference_day``.

    Instants on a later calendar day clip to the bottom of the axis, instants
    on an earlier day clip to the top. Only hour and minute are represented.
    """
    instant_day = instant.date()
    if instant_day > reference_day:
        return HOURS_PER_DAY * config.hour_height + config.vertical_inset
    if instant_day < reference_day:
        return config.vertical_inset
    hour_y = instant.hour * config.hour_height + config.vertical_inset
    minute_y = instant.minute * config.hour_height / 60
    return hour_y + minute_y


def y_to_time(y: float, config: TimelineConfig) -> TimeOfDay:
    """Map a vertical coordinate back to an ``(hour, minute)`` pair.

    Coordinates outside the axis extrapolate linearly. The minute is derived
    from the hour fraction rounded to hundredths and scaled by 59/0.98, so it
    is not an exact inverse of :func:`time_to_y` and may reach 60.
    """
    percent_of_height = (y - config.vertical_inset) / axis_height(config)
    whole_fraction_of_hour = HOURS_PER_DAY * percent_of_height
    hour = int(whole_fraction_of_hour)
    fraction_of_hour = abs(whole_fraction_of_hour - hour)
    rounded_fraction = _round_half_away(fraction_of_hour * 100) / 100
    minute = int(rounded_fraction * MINUTES_RULE_NUMERATOR / MINUTES_RULE_DENOMINATOR)
    return TimeOfDay(hour=hour, minute=minute)


def current_time_y(now: datetime, reference_day: date, config: TimelineConfig) -> float | None:
    if now.date() != reference_day:
        return None
    return time_to_y(now, reference_day, config)


def _round_half_away(value: float) -> float:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)
