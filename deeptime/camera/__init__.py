"""
Camera Layer
============

Viewport limits, pan/zoom, world<->screen transforms and per-entity
clamping.

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate a ViewportState in place
- Apply the Y-axis scale to X
- Perform I/O (caching is the caller's job; see Camera.to_cached)
"""

from .limits import (
    MAX_YEAR, MAX_DAYS_FROM_EPOCH, MIN_SCALE, MAX_SCALE, ZERO_WIDTH_TIME_SCALE,
    get_min_time_scale, clamp_time_scale, clamp_scale, clamp_translate_x,
    clamp_state, zoom_unified, zoom_time_scale_only, pan,
)
from .clamp import (
    ClampedBounds, RenderRect,
    calculate_clamped_bounds, render_rect_for, render_rects_batch, filter_visible,
)
from .camera import Camera

__all__ = [
    'MAX_YEAR',
    'MAX_DAYS_FROM_EPOCH',
    'MIN_SCALE',
    'MAX_SCALE',
    'ZERO_WIDTH_TIME_SCALE',
    'get_min_time_scale',
    'clamp_time_scale',
    'clamp_scale',
    'clamp_translate_x',
    'clamp_state',
    'zoom_unified',
    'zoom_time_scale_only',
    'pan',
    'ClampedBounds',
    'RenderRect',
    'calculate_clamped_bounds',
    'render_rect_for',
    'render_rects_batch',
    'filter_visible',
    'Camera',
]
