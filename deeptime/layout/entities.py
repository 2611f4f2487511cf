"""
Timeline Entities

World geometry of placed intervals and the day/layer arithmetic behind
creating, moving and resizing them. Nothing here touches files; callers
persist the returned values.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

from ..contracts.base import DaySpan, WorldRect
from ..temporal.axis import (
    DEFAULT_MIN_MARKER_SPACING, days_per_unit, scale_level_for,
    snap_to_nearest_marker, world_x_to_day,
)
from .layers import (
    GRID_SPACING, PlacedInterval, find_available_layer, layer_to_y, y_to_layer,
)


# Units of the active scale level spanned by a newly created entity.
NEW_ENTITY_UNITS = 3


@dataclass(frozen=True)
class TimelineEntity:
    """A placed interval. Zero-length entities still render one day wide."""
    key: str
    day_start: int
    day_end: int
    layer: int = 0

    def __post_init__(self):
        if self.day_start > self.day_end:
            raise ValueError("TimelineEntity day_start must not be after day_end")

    @property
    def span(self) -> DaySpan:
        return DaySpan(self.day_start, self.day_end)

    @property
    def world_y(self) -> float:
        return layer_to_y(self.layer)

    def world_x(self, time_scale: float) -> float:
        return self.day_start * time_scale

    def width(self, time_scale: float) -> float:
        return max(self.day_end - self.day_start, 1) * time_scale

    def world_rect(self, time_scale: float) -> WorldRect:
        return WorldRect(
            x=self.world_x(time_scale),
            y=self.world_y,
            width=self.width(time_scale),
            height=GRID_SPACING,
        )

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'day_start': self.day_start,
            'day_end': self.day_end,
            'layer': self.layer,
        }


def build_entities(placed: Iterable[PlacedInterval]) -> Tuple[TimelineEntity, ...]:
    return tuple(
        TimelineEntity(key=p.key, day_start=p.day_start, day_end=p.day_end, layer=p.layer)
        for p in placed
    )


def timeline_span(intervals: Iterable) -> Optional[DaySpan]:
    """Earliest start to latest end, or None for an empty timeline."""
    start = end = None
    for item in intervals:
        if start is None or item.day_start < start:
            start = item.day_start
        if end is None or item.day_end > end:
            end = item.day_end
    if start is None:
        return None
    return DaySpan(start, end)


# =============================================================================
# EDITING
# =============================================================================

def plan_new_entity(
    key: str,
    world_x: float,
    world_y: float,
    time_scale: float,
    existing: Sequence[TimelineEntity],
    min_spacing: float = DEFAULT_MIN_MARKER_SPACING
) -> TimelineEntity:
    """
    Entity for a click at a world point.

    The clicked day snaps to the active scale level, the entity spans
    NEW_ENTITY_UNITS units of that level, and it lands on the nearest free
    layer to the one clicked.
    """
    level = scale_level_for(time_scale, min_spacing)
    day = round(world_x_to_day(world_x, time_scale))
    day_start = snap_to_nearest_marker(day, level)
    day_end = day_start + days_per_unit(level) * NEW_ENTITY_UNITS

    layer = find_available_layer(y_to_layer(world_y), day_start, day_end, existing)
    return TimelineEntity(key=key, day_start=day_start, day_end=day_end, layer=layer)


def move_entity(
    entity: TimelineEntity,
    delta_x: float,
    delta_y: float,
    time_scale: float
) -> TimelineEntity:
    """Drag by a world-pixel delta. Duration is kept; the layer snaps from Y."""
    day_start = entity.day_start + round(world_x_to_day(delta_x, time_scale))
    layer = y_to_layer(entity.world_y + delta_y)
    return replace(
        entity,
        day_start=day_start,
        day_end=day_start + (entity.day_end - entity.day_start),
        layer=layer,
    )


def resize_entity(
    entity: TimelineEntity,
    edge: str,
    delta_x: float,
    time_scale: float
) -> TimelineEntity:
    """
    Drag one edge ('left' or 'right') by a world-pixel delta.

    Edges are measured from the stored days, so a zero delta is a no-op.
    The dragged edge stops at the opposite one.
    """
    if edge == 'left':
        day_start = entity.day_start + round(world_x_to_day(delta_x, time_scale))
        return replace(entity, day_start=min(day_start, entity.day_end))
    if edge == 'right':
        day_end = entity.day_end + round(world_x_to_day(delta_x, time_scale))
        return replace(entity, day_end=max(day_end, entity.day_start))
    raise ValueError(f"unknown resize edge {edge!r}")
