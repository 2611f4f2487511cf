"""
Engine Configuration

One plain dataclass per layer, combined in EngineConfig. Values are read
once when the engine is built; nothing here is consulted at call time.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from .contracts.viewport import DEFAULT_SCALE, DEFAULT_TIME_SCALE
from .layout.layers import MIN_PROBE_COUNT
from .temporal.axis import DEFAULT_MARKER_LIMIT, DEFAULT_MIN_MARKER_SPACING
from .temporal.calendar import DateFormat


@dataclass
class CalendarConfig:
    """Configuration for date display."""
    date_format: DateFormat = DateFormat.ISO


@dataclass
class AxisConfig:
    """Configuration for the time axis."""
    min_marker_spacing: float = DEFAULT_MIN_MARKER_SPACING  # pixels
    marker_limit: int = DEFAULT_MARKER_LIMIT


@dataclass
class LayoutConfig:
    """Configuration for layer packing."""
    min_probe_count: int = MIN_PROBE_COUNT
    max_probe_count: Optional[int] = None  # None searches at least 2N layers


@dataclass
class CameraConfig:
    """Initial camera state for a view with no cached viewport."""
    initial_time_scale: float = DEFAULT_TIME_SCALE
    initial_scale: float = DEFAULT_SCALE
    fit_margin: float = 0.1  # fraction of width left free on each side


@dataclass
class EngineConfig:
    """Unified configuration for the entire engine."""
    calendar: CalendarConfig = None
    axis: AxisConfig = None
    layout: LayoutConfig = None
    camera: CameraConfig = None

    def __post_init__(self):
        self.calendar = self.calendar or CalendarConfig()
        self.axis = self.axis or AxisConfig()
        self.layout = self.layout or LayoutConfig()
        self.camera = self.camera or CameraConfig()
