"""
Camera
======

A ViewportState bound to the host panel size. Every per-frame question the
renderer asks (where is this day, what is visible, where does this card go)
is answered here as a pure function of the two.

COORDINATE SYSTEM:
==================
    X-axis: screen_x = world_x + translate_x          (NO scale)
    Y-axis: screen_y = world_y * scale + translate_y

GUARANTEES:
- Camera values are immutable; gestures return a new Camera
- Every Camera built through a gesture or factory is fully clamped
- Degenerate state (scale == 0, zero-size panel) yields neutral values
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence

from ..contracts.base import ScreenPoint, WorldBounds, WorldPoint, WorldRect
from ..contracts.viewport import CachedViewport, ViewportSize, ViewportState
from ..layout.layers import GRID_SPACING, layer_to_y
from ..temporal.axis import TimeAxis
from .clamp import RenderRect, render_rect_for, render_rects_batch
from .limits import (
    clamp_scale, clamp_state, clamp_time_scale,
    pan, zoom_time_scale_only, zoom_unified,
)


@dataclass(frozen=True)
class Camera:
    state: ViewportState
    size: ViewportSize

    @staticmethod
    def create(size: ViewportSize, state: Optional[ViewportState] = None) -> Camera:
        """Build a clamped camera; the default state is the epoch at the left edge."""
        return Camera(state=clamp_state(state or ViewportState(), size.width), size=size)

    # =========================================================================
    # COORDINATE TRANSFORMS
    # =========================================================================

    @property
    def time_axis(self) -> TimeAxis:
        return TimeAxis(self.state.time_scale, self.state.translate_x)

    def world_to_screen(self, world_x: float, world_y: float) -> ScreenPoint:
        if self.state.scale == 0:
            return ScreenPoint(0.0, 0.0)
        return ScreenPoint(
            x=world_x + self.state.translate_x,
            y=world_y * self.state.scale + self.state.translate_y,
        )

    def screen_to_world(self, screen_x: float, screen_y: float) -> WorldPoint:
        world_y = 0.0
        if self.state.scale != 0:
            world_y = (screen_y - self.state.translate_y) / self.state.scale
        return WorldPoint(x=screen_x - self.state.translate_x, y=world_y)

    def screen_x_for_day(self, day: float) -> float:
        return self.time_axis.screen_x_for_day(day)

    def day_for_screen_x(self, screen_x: float) -> float:
        return self.time_axis.day_for_screen_x(screen_x)

    # =========================================================================
    # VISIBILITY
    # =========================================================================

    def visible_bounds(self) -> WorldBounds:
        """World-space window covered by the panel."""
        if self.state.scale == 0:
            return WorldBounds.empty()
        top_left = self.screen_to_world(0.0, 0.0)
        bottom_right = self.screen_to_world(self.size.width, self.size.height)
        return WorldBounds(
            left=top_left.x,
            right=bottom_right.x,
            top=top_left.y,
            bottom=bottom_right.y,
        )

    def is_in_viewport(self, rect: WorldRect) -> bool:
        if self.state.scale == 0:
            return False
        left = rect.x + self.state.translate_x
        top = rect.y * self.state.scale + self.state.translate_y
        right = left + rect.width
        bottom = top + rect.height * self.state.scale
        return not (
            right < 0
            or left > self.size.width
            or bottom < 0
            or top > self.size.height
        )

    def render_rect_for(self, rect: WorldRect) -> RenderRect:
        return render_rect_for(rect, self.state, self.size)

    def render_rects(self, rects: Sequence[WorldRect]) -> List[RenderRect]:
        return render_rects_batch(rects, self.state, self.size)

    # =========================================================================
    # GESTURES (arrival order; each result is clamped)
    # =========================================================================

    def zoom(self, anchor_x: float, anchor_y: float, multiplier: float) -> Camera:
        return replace(
            self,
            state=zoom_unified(anchor_x, anchor_y, multiplier, self.state, self.size.width),
        )

    def zoom_time(self, anchor_x: float, multiplier: float) -> Camera:
        return replace(
            self,
            state=zoom_time_scale_only(anchor_x, multiplier, self.state, self.size.width),
        )

    def pan(self, delta_x: float, delta_y: float) -> Camera:
        return replace(self, state=pan(self.state, delta_x, delta_y, self.size.width))

    def resize(self, size: ViewportSize) -> Camera:
        return Camera(state=clamp_state(self.state, size.width), size=size)

    # =========================================================================
    # NAVIGATION
    # =========================================================================

    def center_on(self, world_x: float, world_y: float) -> Camera:
        """Put a world point at the panel center."""
        state = replace(
            self.state,
            translate_x=self.size.width / 2 - world_x,
            translate_y=self.size.height / 2 - world_y * self.state.scale,
        )
        return Camera(state=clamp_state(state, self.size.width), size=self.size)

    def center_on_day(self, day: float, layer: Optional[int] = None) -> Camera:
        """
        Center on a day, and on a layer's lane when one is given.

        Without a layer the vertical position is kept.
        """
        if layer is None:
            world_y = self.screen_to_world(0.0, self.size.height / 2).y
        else:
            world_y = layer_to_y(layer) + GRID_SPACING / 2
        return self.center_on(self.time_axis.day_to_world_x(day), world_y)

    def fit_to_days(self, day_start: float, day_end: float, margin: float = 0.1) -> Camera:
        """
        Zoom the time axis so [day_start, day_end] fills the panel width,
        leaving `margin` (a fraction of the width) free on each side.
        """
        if not 0 <= margin < 0.5:
            raise ValueError("margin must be in [0, 0.5)")
        width = self.size.width
        if day_end < day_start:
            day_start, day_end = day_end, day_start
        span = max(day_end - day_start, 1)

        time_scale = self.state.time_scale
        if width > 0:
            time_scale = clamp_time_scale(width * (1 - 2 * margin) / span, width)

        center_day = (day_start + day_end) / 2
        state = replace(
            self.state,
            time_scale=time_scale,
            translate_x=width / 2 - center_day * time_scale,
        )
        return Camera(state=clamp_state(state, width), size=self.size)

    # =========================================================================
    # CACHE CONVERSION (no I/O)
    # =========================================================================

    def to_cached(self) -> CachedViewport:
        center = self.screen_to_world(self.size.width / 2, self.size.height / 2)
        return CachedViewport(
            center_day=self.day_for_screen_x(self.size.width / 2),
            center_y=center.y,
            time_scale=self.state.time_scale,
            scale=self.state.scale,
            center_x=center.x,
        )

    @staticmethod
    def from_cached(cached: CachedViewport, size: ViewportSize) -> Camera:
        """Restore so the cached center day and world Y sit at the panel center."""
        time_scale = clamp_time_scale(cached.time_scale, size.width)
        scale = clamp_scale(cached.scale)
        state = ViewportState(
            scale=scale,
            time_scale=time_scale,
            translate_x=size.width / 2 - cached.center_day * time_scale,
            translate_y=size.height / 2 - cached.center_y * scale,
        )
        return Camera(state=clamp_state(state, size.width), size=size)
