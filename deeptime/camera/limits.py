"""
Viewport Limits and Zoom
========================

Pure functions that keep a ViewportState inside the navigable space and
apply pan/zoom gestures to it.

COORDINATE SYSTEM:
==================
    X-axis: screen_x = world_x + translate_x          (NO scale)
    Y-axis: screen_y = world_y * scale + translate_y

GUARANTEES:
- Every returned state satisfies all clamps for the given viewport width
- Zoom keeps the world point under the anchor fixed (until the X clamp binds)
- translate_y is never clamped
- No function raises on degenerate input (zero width, zero scale)
"""

from __future__ import annotations
from dataclasses import replace
import math

from ..contracts.viewport import ViewportState
from ..temporal.axis import DAYS_PER_YEAR, day_to_world_x, screen_x_to_day


# The camera cannot show beyond +/- 20 billion years.
MAX_YEAR = 20_000_000_000
MAX_DAYS_FROM_EPOCH = MAX_YEAR * DAYS_PER_YEAR

# Y-axis zoom limits.
MIN_SCALE = 0.5
MAX_SCALE = 2.0

# Minimum time scale reported while the host panel has no width.
ZERO_WIDTH_TIME_SCALE = 0.001


# =============================================================================
# CLAMPS
# =============================================================================

def get_min_time_scale(viewport_width: float) -> float:
    """
    Smallest time_scale that keeps the viewport within +/- MAX_YEAR.

    Widths too small to yield a positive minimum (including 0 and subnormal
    widths that underflow) fall back to ZERO_WIDTH_TIME_SCALE.
    """
    min_time_scale = viewport_width / (2 * MAX_DAYS_FROM_EPOCH)
    if not min_time_scale > 0:
        return ZERO_WIDTH_TIME_SCALE
    return min_time_scale


def clamp_time_scale(time_scale: float, viewport_width: float) -> float:
    return max(get_min_time_scale(viewport_width), time_scale)


def clamp_scale(scale: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, scale))


def clamp_translate_x(
    translate_x: float,
    time_scale: float,
    viewport_width: float
) -> float:
    max_tx = MAX_DAYS_FROM_EPOCH * time_scale
    min_tx = viewport_width - MAX_DAYS_FROM_EPOCH * time_scale
    return max(min_tx, min(max_tx, translate_x))


def clamp_state(state: ViewportState, viewport_width: float) -> ViewportState:
    """Apply every clamp. translate_x is clamped against the clamped time_scale."""
    time_scale = clamp_time_scale(state.time_scale, viewport_width)
    return ViewportState(
        scale=clamp_scale(state.scale),
        time_scale=time_scale,
        translate_x=clamp_translate_x(state.translate_x, time_scale, viewport_width),
        translate_y=state.translate_y,
    )


def _usable_multiplier(multiplier: float) -> bool:
    return math.isfinite(multiplier) and multiplier > 0


# =============================================================================
# ZOOM AND PAN
# =============================================================================

def zoom_unified(
    anchor_x: float,
    anchor_y: float,
    multiplier: float,
    state: ViewportState,
    viewport_width: float
) -> ViewportState:
    """
    Zoom both axes toward a screen-space anchor.

    Used for pinch and plain wheel gestures.
    """
    if not _usable_multiplier(multiplier):
        return clamp_state(state, viewport_width)

    new_scale = clamp_scale(state.scale * multiplier)
    new_time_scale = clamp_time_scale(state.time_scale * multiplier, viewport_width)

    world_day = screen_x_to_day(anchor_x, state.time_scale, state.translate_x)
    world_y = 0.0 if state.scale == 0 else (anchor_y - state.translate_y) / state.scale

    translate_x = anchor_x - day_to_world_x(world_day, new_time_scale)
    translate_x = clamp_translate_x(translate_x, new_time_scale, viewport_width)
    translate_y = anchor_y - world_y * new_scale

    return ViewportState(
        scale=new_scale,
        time_scale=new_time_scale,
        translate_x=translate_x,
        translate_y=translate_y,
    )


def zoom_time_scale_only(
    anchor_x: float,
    multiplier: float,
    state: ViewportState,
    viewport_width: float
) -> ViewportState:
    """Zoom the time axis only (modifier + wheel). scale and translate_y are kept."""
    if not _usable_multiplier(multiplier):
        return clamp_state(state, viewport_width)

    new_time_scale = clamp_time_scale(state.time_scale * multiplier, viewport_width)
    world_day = screen_x_to_day(anchor_x, state.time_scale, state.translate_x)

    translate_x = anchor_x - day_to_world_x(world_day, new_time_scale)
    translate_x = clamp_translate_x(translate_x, new_time_scale, viewport_width)

    return replace(state, time_scale=new_time_scale, translate_x=translate_x)


def pan(
    state: ViewportState,
    delta_x: float,
    delta_y: float,
    viewport_width: float
) -> ViewportState:
    """Shift by a screen-space delta. Only translate_x is re-clamped."""
    translate_x = clamp_translate_x(
        state.translate_x + delta_x, state.time_scale, viewport_width
    )
    return replace(
        state,
        translate_x=translate_x,
        translate_y=state.translate_y + delta_y,
    )
