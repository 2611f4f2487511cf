"""
Card Clamping
=============

Per-entity screen geometry. An entity that runs past a viewport edge is
drawn clamped to that edge while its world coordinates stay intact for
interaction.

All comparisons happen in screen space:
    screen_left  = world_x + translate_x
    screen_right = screen_left + world_width

Screen coordinates stay inside a few viewport widths no matter how far from
the epoch the camera sits, which is what keeps rendering precise at
billions of years.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ..contracts.base import WorldRect
from ..contracts.viewport import ViewportSize, ViewportState


@dataclass(frozen=True)
class ClampedBounds:
    """
    Visual X extent of an entity, in world X units.

    visual_x is the world X to draw from; visual_width the width to draw.
    """
    visual_x: float
    visual_width: float
    is_clamped_left: bool
    is_clamped_right: bool
    is_clamped_both: bool
    is_completely_outside: bool


def calculate_clamped_bounds(
    world_x: float,
    world_width: float,
    translate_x: float,
    viewport_width: float
) -> ClampedBounds:
    """
    Clamp an entity's X extent to the viewport.

    The left/right flags are independent of the outside test, so an entity
    entirely left of the viewport is both clamped-left and outside.
    """
    screen_left = world_x + translate_x
    screen_right = screen_left + world_width

    is_clamped_left = screen_left < 0
    is_clamped_right = screen_right > viewport_width
    is_clamped_both = is_clamped_left and is_clamped_right
    is_completely_outside = screen_right < 0 or screen_left > viewport_width

    if is_completely_outside:
        visual_x, visual_width = world_x, 0.0
    elif is_clamped_both:
        # world X at the left screen edge
        visual_x, visual_width = -translate_x, viewport_width
    elif is_clamped_left:
        visual_x, visual_width = -translate_x, screen_right
    elif is_clamped_right:
        visual_x, visual_width = world_x, viewport_width - screen_left
    else:
        visual_x, visual_width = world_x, world_width

    return ClampedBounds(
        visual_x=visual_x,
        visual_width=visual_width,
        is_clamped_left=is_clamped_left,
        is_clamped_right=is_clamped_right,
        is_clamped_both=is_clamped_both,
        is_completely_outside=is_completely_outside,
    )


# =============================================================================
# RENDER RECTS (screen pixels)
# =============================================================================

@dataclass(frozen=True)
class RenderRect:
    """Screen-space placement of one entity for the current frame."""
    x: float
    y: float
    width: float
    visible: bool
    clamped_left: bool = False
    clamped_right: bool = False

    def to_dict(self) -> dict:
        return {
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'visible': self.visible,
            'clamped_left': self.clamped_left,
            'clamped_right': self.clamped_right,
        }


_HIDDEN = RenderRect(x=0.0, y=0.0, width=0.0, visible=False)


def render_rect_for(
    rect: WorldRect,
    state: ViewportState,
    size: ViewportSize
) -> RenderRect:
    """
    Screen placement of a world rect.

    X ignores scale; Y and vertical visibility honour it. A zero scale
    yields an invisible zero rect.
    """
    if state.scale == 0:
        return _HIDDEN

    screen_x = rect.x + state.translate_x
    screen_y = rect.y * state.scale + state.translate_y
    screen_right = screen_x + rect.width

    visible = not (
        screen_right < 0
        or screen_x > size.width
        or screen_y + rect.height * state.scale < 0
        or screen_y > size.height
    )
    if not visible:
        return RenderRect(x=screen_x, y=screen_y, width=rect.width, visible=False)

    clamped_left = screen_x < 0
    clamped_right = screen_right > size.width

    visual_x, visual_width = screen_x, rect.width
    if clamped_left and clamped_right:
        visual_x, visual_width = 0.0, size.width
    elif clamped_left:
        visual_x, visual_width = 0.0, screen_right
    elif clamped_right:
        visual_width = size.width - screen_x

    return RenderRect(
        x=visual_x,
        y=screen_y,
        width=visual_width,
        visible=True,
        clamped_left=clamped_left,
        clamped_right=clamped_right,
    )


def render_rects_batch(
    rects: Sequence[WorldRect],
    state: ViewportState,
    size: ViewportSize
) -> List[RenderRect]:
    """Vectorised render_rect_for over many rects; same results, same order."""
    if not rects:
        return []
    if state.scale == 0:
        return [_HIDDEN] * len(rects)

    geometry = np.array(
        [(r.x, r.y, r.width, r.height) for r in rects], dtype=np.float64
    )
    world_x, world_y, width, height = geometry.T

    screen_x = world_x + state.translate_x
    screen_y = world_y * state.scale + state.translate_y
    screen_right = screen_x + width

    visible = ~(
        (screen_right < 0)
        | (screen_x > size.width)
        | (screen_y + height * state.scale < 0)
        | (screen_y > size.height)
    )
    clamped_left = visible & (screen_x < 0)
    clamped_right = visible & (screen_right > size.width)

    visual_x = np.where(clamped_left, 0.0, screen_x)
    visual_width = np.where(
        clamped_left & clamped_right, size.width,
        np.where(
            clamped_left, screen_right,
            np.where(clamped_right, size.width - screen_x, width)
        )
    )

    return [
        RenderRect(
            x=float(visual_x[i]),
            y=float(screen_y[i]),
            width=float(visual_width[i]),
            visible=bool(visible[i]),
            clamped_left=bool(clamped_left[i]),
            clamped_right=bool(clamped_right[i]),
        )
        for i in range(len(rects))
    ]


def filter_visible(rects: Sequence[RenderRect]) -> List[RenderRect]:
    return [r for r in rects if r.visible]
