"""
Layer Packing
=============

Assigns every interval a vertical lane (layer) so that intervals sharing a
lane never overlap in time.

ALGORITHM:
==========
Intervals are processed in (day_start, day_end) order; equal keys keep
their input order. Each interval first tries its preferred layer (the
layer it had last time, else 0). On conflict the search alternates
    preferred + 1, preferred - 1, preferred + 2, preferred - 2, ...
for i in 1 .. max(2 * N, 100) - 1, optionally capped. If every probe conflicts, the interval
is force-placed on its preferred layer and the overlap is reported.

GUARANTEES:
- Deterministic: same input, same layers
- Same-layer intervals never overlap, except the reported forced overlaps
- Overlap is inclusive: ranges that touch at a single day conflict
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
import math

from ..observability import get_logger


logger = get_logger(__name__)

# Vertical pitch between layers, in world pixels.
GRID_SPACING = 50

# Lower bound on alternating probes, independent of input size.
MIN_PROBE_COUNT = 100


# =============================================================================
# TYPES
# =============================================================================

@dataclass(frozen=True)
class LayerableInterval:
    """One interval awaiting a layer."""
    key: str
    day_start: int
    day_end: int
    preferred_layer: Optional[int] = None
    current_layer: Optional[int] = None


@dataclass(frozen=True)
class PlacedInterval:
    key: str
    day_start: int
    day_end: int
    layer: int


@dataclass(frozen=True)
class LayerAssignment:
    """A layer change: emitted only when layer differs from the current one."""
    key: str
    layer: int
    previous_layer: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'layer': self.layer,
            'previous_layer': self.previous_layer,
        }


@dataclass(frozen=True)
class LayerPackResult:
    placed: Tuple[PlacedInterval, ...] = field(default_factory=tuple)
    assignments: Tuple[LayerAssignment, ...] = field(default_factory=tuple)
    forced_overlaps: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def forced_overlap_count(self) -> int:
        return len(self.forced_overlaps)

    def layers(self) -> Dict[str, int]:
        return {p.key: p.layer for p in self.placed}

    def to_dict(self) -> dict:
        return {
            'placed': [
                {'key': p.key, 'day_start': p.day_start, 'day_end': p.day_end, 'layer': p.layer}
                for p in self.placed
            ],
            'assignments': [a.to_dict() for a in self.assignments],
            'forced_overlaps': list(self.forced_overlaps),
        }


# =============================================================================
# LAYER GEOMETRY
# =============================================================================

def layer_to_y(layer: int) -> float:
    """
    World Y of a layer's top edge.

    Layer 0 sits at Y = 0; positive layers above (negative Y), negative
    layers below.
    """
    return -layer * GRID_SPACING


def y_to_layer(y: float) -> int:
    """Layer whose lane contains world Y (a card extends GRID_SPACING downward)."""
    return -math.floor(y / GRID_SPACING)


# =============================================================================
# OVERLAP SEARCH
# =============================================================================

def ranges_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return not start_a > end_b and not end_a < start_b


def is_layer_busy(
    target_layer: int,
    day_start: int,
    day_end: int,
    placed: Iterable[PlacedInterval],
    exclude_key: Optional[str] = None
) -> bool:
    """True if any placed interval on target_layer overlaps [day_start, day_end]."""
    for item in placed:
        if exclude_key is not None and item.key == exclude_key:
            continue
        if item.layer != target_layer:
            continue
        if ranges_overlap(day_start, day_end, item.day_start, item.day_end):
            return True
    return False


def _probe_order(target: int, probe_count: int):
    for i in range(1, probe_count):
        yield target + i
        yield target - i


def find_available_layer(
    target: int,
    day_start: int,
    day_end: int,
    placed: Sequence[PlacedInterval]
) -> int:
    """
    Nearest free layer to target using the alternating probe order.

    Falls back to target when nothing is free.
    """
    if not is_layer_busy(target, day_start, day_end, placed):
        return target
    probe_count = max(len(placed) * 2, MIN_PROBE_COUNT)
    for layer in _probe_order(target, probe_count):
        if not is_layer_busy(layer, day_start, day_end, placed):
            return layer
    return target


def sort_by_date(intervals: Iterable[LayerableInterval]) -> List[LayerableInterval]:
    """Stable sort by start day, then end day."""
    return sorted(intervals, key=lambda i: (i.day_start, i.day_end))


# =============================================================================
# PACKER
# =============================================================================

class LayerPacker:
    """
    Full recomputation of layers for one timeline.

    Lanes are indexed by layer so each probe only scans intervals already
    on that layer. With the default probe count of at least 2N a free layer
    is always found; max_probe_count caps the search, after which
    intervals are force-placed.
    """

    def __init__(
        self,
        min_probe_count: int = MIN_PROBE_COUNT,
        max_probe_count: Optional[int] = None
    ):
        self._min_probe_count = min_probe_count
        self._max_probe_count = max_probe_count

    def pack(self, intervals: Sequence[LayerableInterval]) -> LayerPackResult:
        ordered = sort_by_date(intervals)
        probe_count = max(len(ordered) * 2, self._min_probe_count)
        if self._max_probe_count is not None:
            probe_count = min(probe_count, self._max_probe_count)

        lanes: Dict[int, List[Tuple[int, int]]] = {}
        placed: List[PlacedInterval] = []
        assignments: List[LayerAssignment] = []
        forced: List[str] = []

        def busy(layer: int, start: int, end: int) -> bool:
            return any(
                ranges_overlap(start, end, s, e) for s, e in lanes.get(layer, ())
            )

        for interval in ordered:
            preferred = interval.preferred_layer if interval.preferred_layer is not None else 0
            layer = preferred

            if busy(preferred, interval.day_start, interval.day_end):
                for candidate in _probe_order(preferred, probe_count):
                    if not busy(candidate, interval.day_start, interval.day_end):
                        layer = candidate
                        break
                else:
                    forced.append(interval.key)
                    logger.debug(
                        "all %d probes busy for %s; forcing layer %d",
                        probe_count, interval.key, preferred
                    )

            lanes.setdefault(layer, []).append((interval.day_start, interval.day_end))
            placed.append(PlacedInterval(
                key=interval.key,
                day_start=interval.day_start,
                day_end=interval.day_end,
                layer=layer,
            ))
            if layer != interval.current_layer:
                assignments.append(LayerAssignment(
                    key=interval.key,
                    layer=layer,
                    previous_layer=interval.current_layer,
                ))

        return LayerPackResult(
            placed=tuple(placed),
            assignments=tuple(assignments),
            forced_overlaps=tuple(forced),
        )
