"""
deeptime
========

Coordinate engine for timelines that span from days to billions of years.

ARCHITECTURE:
=============
contracts  - immutable value types shared by every layer
temporal   - exact calendar arithmetic and the time axis
camera     - viewport limits, pan/zoom, world<->screen, card clamping
layout     - layer packing and entity geometry
ingestion  - raw items -> parsed intervals with explicit error records
engine     - TimelineEngine facade wiring the layers together
"""

from .config import (
    EngineConfig, CalendarConfig, AxisConfig, LayoutConfig, CameraConfig,
)
from .engine import TimelineEngine, LayoutSnapshot
from .camera import Camera
from .contracts import ViewportSize, ViewportState, CachedViewport
from .temporal import CalendarDate, DateFormat, DateFormatter, ScaleLevel, TimeAxis

__version__ = "0.1.0"

__all__ = [
    'EngineConfig',
    'CalendarConfig',
    'AxisConfig',
    'LayoutConfig',
    'CameraConfig',
    'TimelineEngine',
    'LayoutSnapshot',
    'Camera',
    'ViewportSize',
    'ViewportState',
    'CachedViewport',
    'CalendarDate',
    'DateFormat',
    'DateFormatter',
    'ScaleLevel',
    'TimeAxis',
]
