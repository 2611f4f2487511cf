"""
Layout Layer
============

Vertical lane assignment and entity geometry.

WHAT THIS LAYER MUST NOT DO:
============================
- Depend on the camera (layout is camera-independent)
- Perform file or cache I/O
"""

from .layers import (
    GRID_SPACING, MIN_PROBE_COUNT,
    LayerableInterval, PlacedInterval, LayerAssignment, LayerPackResult, LayerPacker,
    layer_to_y, y_to_layer, ranges_overlap, is_layer_busy,
    find_available_layer, sort_by_date,
)
from .entities import (
    NEW_ENTITY_UNITS, TimelineEntity,
    build_entities, timeline_span, plan_new_entity, move_entity, resize_entity,
)

__all__ = [
    'GRID_SPACING',
    'MIN_PROBE_COUNT',
    'LayerableInterval',
    'PlacedInterval',
    'LayerAssignment',
    'LayerPackResult',
    'LayerPacker',
    'layer_to_y',
    'y_to_layer',
    'ranges_overlap',
    'is_layer_busy',
    'find_available_layer',
    'sort_by_date',
    'NEW_ENTITY_UNITS',
    'TimelineEntity',
    'build_entities',
    'timeline_span',
    'plan_new_entity',
    'move_entity',
    'resize_entity',
]
