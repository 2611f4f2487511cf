"""
Time Axis
=========

Conversions between day counts, world X and screen X, plus the discrete
scale levels that keep marker density readable at any zoom.

COORDINATE SYSTEM:
==================
    world_x  = day * time_scale
    screen_x = world_x + translate_x      (no Y-axis scale on X)

Scale levels are chosen from time_scale alone. Level-aligned boundaries are
calendar boundaries (first of month, 1 January of a year divisible by the
level's unit), computed with exact integer day counts.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple
import math

from .calendar import (
    DateFormatter, MONTH_ABBR, civil_from_days, days_from_civil, era_year_label,
)


DAYS_PER_YEAR = 365.2425
DEFAULT_MIN_MARKER_SPACING = 50.0   # pixels between adjacent markers
DEFAULT_MARKER_LIMIT = 500


class ScaleLevel(Enum):
    """Zoom granularities, finest first."""
    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    DECADE = "decade"
    CENTURY = "century"
    MILLENNIUM = "millennium"
    MILLION_YEARS = "million_years"
    BILLION_YEARS = "billion_years"


SCALE_LEVELS: Tuple[ScaleLevel, ...] = tuple(ScaleLevel)

# Whole years per unit for the year-based levels.
_UNIT_YEARS: Dict[ScaleLevel, int] = {
    ScaleLevel.YEAR: 1,
    ScaleLevel.DECADE: 10,
    ScaleLevel.CENTURY: 100,
    ScaleLevel.MILLENNIUM: 1_000,
    ScaleLevel.MILLION_YEARS: 1_000_000,
    ScaleLevel.BILLION_YEARS: 1_000_000_000,
}

# Integer sizing unit used when creating new entities.
_DAYS_PER_UNIT: Dict[ScaleLevel, int] = {
    ScaleLevel.DAY: 1,
    ScaleLevel.MONTH: 30,
    ScaleLevel.YEAR: 365,
    ScaleLevel.DECADE: 3_652,
    ScaleLevel.CENTURY: 36_524,
    ScaleLevel.MILLENNIUM: 365_242,
    ScaleLevel.MILLION_YEARS: 365_242_500,
    ScaleLevel.BILLION_YEARS: 365_242_500_000,
}


def days_per_unit(level: ScaleLevel) -> int:
    return _DAYS_PER_UNIT[level]


def mean_days_per_unit(level: ScaleLevel) -> float:
    """Average unit length in days, used for level selection."""
    if level is ScaleLevel.DAY:
        return 1.0
    if level is ScaleLevel.MONTH:
        return DAYS_PER_YEAR / 12
    return _UNIT_YEARS[level] * DAYS_PER_YEAR


def scale_level_for(
    time_scale: float,
    min_spacing: float = DEFAULT_MIN_MARKER_SPACING
) -> ScaleLevel:
    """Finest level whose unit is at least min_spacing pixels wide."""
    if not math.isfinite(time_scale) or time_scale <= 0:
        return ScaleLevel.BILLION_YEARS
    for level in SCALE_LEVELS:
        if mean_days_per_unit(level) * time_scale >= min_spacing:
            return level
    return ScaleLevel.BILLION_YEARS


# =============================================================================
# PURE CONVERSIONS
# =============================================================================

def day_to_world_x(day: float, time_scale: float) -> float:
    return day * time_scale


def world_x_to_day(world_x: float, time_scale: float) -> float:
    if time_scale == 0:
        return 0.0
    return world_x / time_scale


def day_to_screen_x(day: float, time_scale: float, translate_x: float) -> float:
    return day * time_scale + translate_x


def screen_x_to_day(screen_x: float, time_scale: float, translate_x: float) -> float:
    if time_scale == 0:
        return 0.0
    return (screen_x - translate_x) / time_scale


# =============================================================================
# LEVEL-ALIGNED BOUNDARIES
# =============================================================================

def _floor_boundary(day: int, level: ScaleLevel) -> Tuple[int, int]:
    """(boundary at or before day, next boundary after it)."""
    if level is ScaleLevel.DAY:
        return day, day + 1

    year, month, _ = civil_from_days(day)
    if level is ScaleLevel.MONTH:
        floor = days_from_civil(year, month, 1)
        if month == 12:
            return floor, days_from_civil(year + 1, 1, 1)
        return floor, days_from_civil(year, month + 1, 1)

    unit = _UNIT_YEARS[level]
    floor_year = (year // unit) * unit
    return days_from_civil(floor_year, 1, 1), days_from_civil(floor_year + unit, 1, 1)


def snap_to_nearest_marker(day: float, level: ScaleLevel) -> int:
    """
    Round a day count to the nearest level-aligned boundary.

    Ties resolve to the earlier boundary.
    """
    day = int(round(day))
    floor, ceiling = _floor_boundary(day, level)
    if day - floor <= ceiling - day:
        return floor
    return ceiling


def next_marker(boundary: int, level: ScaleLevel) -> int:
    """The boundary following an aligned boundary."""
    return _floor_boundary(boundary, level)[1]


def markers(
    first_day: float,
    last_day: float,
    level: ScaleLevel,
    formatter: DateFormatter,
    limit: int = DEFAULT_MARKER_LIMIT
) -> Tuple[Tuple[int, str], ...]:
    """
    Level-aligned boundaries inside [first_day, last_day] as (day, label).

    At most `limit` ticks are produced so a single frame stays bounded.
    """
    if not (math.isfinite(first_day) and math.isfinite(last_day)):
        return ()
    if last_day < first_day or limit <= 0:
        return ()

    start = int(math.ceil(first_day))
    floor, ceiling = _floor_boundary(start, level)
    current = floor if floor == start else ceiling

    ticks = []
    while current <= last_day and len(ticks) < limit:
        ticks.append((current, format_day_for_level(current, level, formatter)))
        current = next_marker(current, level)
    return tuple(ticks)


# =============================================================================
# LEVEL FORMATTING
# =============================================================================

def _ordinal(n: int) -> str:
    if 11 <= n % 100 <= 13:
        return f"{n}th"
    return f"{n}{ {1: 'st', 2: 'nd', 3: 'rd'}.get(n % 10, 'th') }"


def _numbered_period(year: int, unit: int, noun: str) -> str:
    if year > 0:
        return f"{_ordinal((year - 1) // unit + 1)} {noun}"
    return f"{_ordinal((-year) // unit + 1)} {noun} BCE"


def _decade(year: int) -> str:
    if year > 0:
        return f"{(year // 10) * 10}s"
    return f"{((1 - year) // 10) * 10}s BCE"


def _compact_years(year: int, unit: int, suffix: str) -> str:
    text = f"{abs(year) / unit:.1f}".rstrip('0').rstrip('.')
    return f"{text}{suffix} BCE" if year < 0 else f"{text}{suffix}"


def format_day_for_level(day: int, level: ScaleLevel, formatter: DateFormatter) -> str:
    """Label for a day at a given scale level. Defined for all 8 levels."""
    year, month, _ = civil_from_days(int(day))

    if level is ScaleLevel.DAY:
        return formatter.format_day(int(day))
    if level is ScaleLevel.MONTH:
        return f"{MONTH_ABBR[month - 1]} {era_year_label(year)}"
    if level is ScaleLevel.YEAR:
        return era_year_label(year)
    if level is ScaleLevel.DECADE:
        return _decade(year)
    if level is ScaleLevel.CENTURY:
        return _numbered_period(year, 100, "century")
    if level is ScaleLevel.MILLENNIUM:
        return _numbered_period(year, 1_000, "millennium")
    if level is ScaleLevel.MILLION_YEARS:
        return _compact_years(year, 1_000_000, "M")
    if level is ScaleLevel.BILLION_YEARS:
        return _compact_years(year, 1_000_000_000, "B")
    raise ValueError(f"unknown scale level {level!r}")


# =============================================================================
# TIME AXIS
# =============================================================================

@dataclass(frozen=True)
class TimeAxis:
    """
    X-axis view of a camera: time_scale (pixels/day) and translate_x.

    Pure and cheap to construct; build a new one per frame.
    """
    time_scale: float
    translate_x: float = 0.0

    def day_to_world_x(self, day: float) -> float:
        return day_to_world_x(day, self.time_scale)

    def world_x_to_day(self, world_x: float) -> float:
        return world_x_to_day(world_x, self.time_scale)

    def screen_x_for_day(self, day: float) -> float:
        return day_to_screen_x(day, self.time_scale, self.translate_x)

    def day_for_screen_x(self, screen_x: float) -> float:
        return screen_x_to_day(screen_x, self.time_scale, self.translate_x)

    def level(self, min_spacing: float = DEFAULT_MIN_MARKER_SPACING) -> ScaleLevel:
        return scale_level_for(self.time_scale, min_spacing)

    def visible_day_range(self, viewport_width: float) -> Tuple[float, float]:
        return self.day_for_screen_x(0.0), self.day_for_screen_x(viewport_width)

    def snap(self, day: float, level: Optional[ScaleLevel] = None) -> int:
        return snap_to_nearest_marker(day, level or self.level())

    def markers(
        self,
        viewport_width: float,
        formatter: DateFormatter,
        min_spacing: float = DEFAULT_MIN_MARKER_SPACING,
        limit: int = DEFAULT_MARKER_LIMIT
    ) -> Tuple[Tuple[float, str], ...]:
        """Visible ticks as (screen_x, label), the shape renderers consume."""
        first, last = self.visible_day_range(viewport_width)
        level = self.level(min_spacing)
        return tuple(
            (self.screen_x_for_day(day), label)
            for day, label in markers(first, last, level, formatter, limit)
        )
