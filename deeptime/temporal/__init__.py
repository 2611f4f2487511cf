"""
Temporal Layer
==============

Exact calendar arithmetic and the time axis built on top of it.

WHAT THIS LAYER MUST NOT DO:
============================
- Know about layers, entities or the Y axis
- Hold a global display format
- Use floats for day counts
"""

from .calendar import (
    YEAR_LIMIT, CalendarDate, DateFormat, DateFormatter,
    days_from_civil, civil_from_days, is_leap_year, days_in_month,
    era_year_label,
)
from .axis import (
    DAYS_PER_YEAR, DEFAULT_MIN_MARKER_SPACING, DEFAULT_MARKER_LIMIT,
    ScaleLevel, SCALE_LEVELS, TimeAxis,
    days_per_unit, mean_days_per_unit, scale_level_for,
    day_to_world_x, world_x_to_day, day_to_screen_x, screen_x_to_day,
    snap_to_nearest_marker, next_marker, markers, format_day_for_level,
)

__all__ = [
    'YEAR_LIMIT',
    'CalendarDate',
    'DateFormat',
    'DateFormatter',
    'days_from_civil',
    'civil_from_days',
    'is_leap_year',
    'days_in_month',
    'era_year_label',
    'DAYS_PER_YEAR',
    'DEFAULT_MIN_MARKER_SPACING',
    'DEFAULT_MARKER_LIMIT',
    'ScaleLevel',
    'SCALE_LEVELS',
    'TimeAxis',
    'days_per_unit',
    'mean_days_per_unit',
    'scale_level_for',
    'day_to_world_x',
    'world_x_to_day',
    'day_to_screen_x',
    'screen_x_to_day',
    'snap_to_nearest_marker',
    'next_marker',
    'markers',
    'format_day_for_level',
]
