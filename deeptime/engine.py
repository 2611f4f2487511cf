"""
Engine Orchestration Module

Unified entry point that wires ingestion, layer packing, entity geometry
and camera construction for one timeline view.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts and plain values
2. The engine orchestrates flow; it owns no geometry logic itself
3. The only state kept between calls is the prior-layer cache
4. Nothing here performs I/O; callers persist what they need
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .camera.camera import Camera
from .config import EngineConfig
from .contracts.base import DaySpan, WorldRect
from .contracts.viewport import CachedViewport, ViewportSize, ViewportState
from .ingestion.intervals import IntervalNormalizer, IntervalReport
from .layout.entities import (
    TimelineEntity, build_entities, move_entity, plan_new_entity,
    resize_entity, timeline_span,
)
from .layout.layers import LayerAssignment, LayerPacker
from .observability import get_logger
from .temporal.axis import ScaleLevel, scale_level_for
from .temporal.calendar import DateFormatter


logger = get_logger(__name__)


@dataclass(frozen=True)
class LayoutSnapshot:
    """
    Result of one refresh: every accepted interval placed on a layer.

    `assignments` lists only the layer changes since the previous refresh.
    """
    time_scale: float
    entities: Tuple[TimelineEntity, ...] = field(default_factory=tuple)
    assignments: Tuple[LayerAssignment, ...] = field(default_factory=tuple)
    forced_overlaps: Tuple[str, ...] = field(default_factory=tuple)
    span: Optional[DaySpan] = None
    report: Optional[IntervalReport] = None

    def entity(self, key: str) -> Optional[TimelineEntity]:
        for entity in self.entities:
            if entity.key == key:
                return entity
        return None

    def world_rects(self) -> List[WorldRect]:
        return [e.world_rect(self.time_scale) for e in self.entities]

    def to_dict(self) -> dict:
        return {
            'time_scale': self.time_scale,
            'entities': [e.to_dict() for e in self.entities],
            'assignments': [a.to_dict() for a in self.assignments],
            'forced_overlaps': list(self.forced_overlaps),
            'span': (
                {'start_day': self.span.start_day, 'end_day': self.span.end_day}
                if self.span else None
            ),
            'report': self.report.to_dict() if self.report else None,
        }


class TimelineEngine:
    """
    Layout engine for a single timeline.

    LAYER FLOW:
    ===========
    1. Ingestion: raw items -> ParsedInterval (+ malformed report)
    2. Packing: ParsedInterval + prior layers -> PlacedInterval
    3. Geometry: PlacedInterval -> TimelineEntity
    4. Camera: ViewportSize (+ CachedViewport) -> Camera

    Not re-entrant: callers serialize calls per timeline.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()
        self._formatter = DateFormatter(self._config.calendar.date_format)
        self._normalizer = IntervalNormalizer()
        self._packer = LayerPacker(
            min_probe_count=self._config.layout.min_probe_count,
            max_probe_count=self._config.layout.max_probe_count,
        )
        self._layer_cache: Dict[str, int] = {}

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def formatter(self) -> DateFormatter:
        return self._formatter

    # =========================================================================
    # PRIOR-LAYER CACHE
    # =========================================================================

    @property
    def layer_cache(self) -> Dict[str, int]:
        """Copy of key -> last assigned layer."""
        return dict(self._layer_cache)

    def seed_layer_cache(self, layers: Mapping[str, int]):
        """Load layers persisted by the caller from an earlier session."""
        self._layer_cache = {str(k): int(v) for k, v in layers.items()}

    def record_layer(self, key: str, layer: int):
        self._layer_cache[key] = layer

    # =========================================================================
    # LAYOUT
    # =========================================================================

    def refresh(self, items: Iterable[Any], time_scale: float) -> LayoutSnapshot:
        """
        Full recomputation for the current item set.

        Prior layers are preferred over an item's own cached_layer. Keys that
        are no longer present are dropped from the cache.
        """
        report = self._normalizer.normalize_batch(items)

        layerables = [
            interval.to_layerable(
                preferred_layer=self._layer_cache.get(interval.key),
                current_layer=self._layer_cache.get(interval.key),
            )
            for interval in report.intervals
        ]
        result = self._packer.pack(layerables)

        dropped = set(self._layer_cache) - {p.key for p in result.placed}
        self._layer_cache = result.layers()

        logger.info(
            "refresh: %d items, %d placed, %d skipped, %d layer changes, %d dropped from cache",
            report.processed_count, len(result.placed), report.malformed_count,
            len(result.assignments), len(dropped)
        )
        if result.forced_overlaps:
            logger.warning("forced overlaps for %s", ", ".join(result.forced_overlaps))

        return LayoutSnapshot(
            time_scale=time_scale,
            entities=build_entities(result.placed),
            assignments=result.assignments,
            forced_overlaps=result.forced_overlaps,
            span=timeline_span(result.placed),
            report=report,
        )

    # =========================================================================
    # EDITING (caller persists dates; the engine records layers)
    # =========================================================================

    def create_entity(
        self,
        key: str,
        world_x: float,
        world_y: float,
        time_scale: float,
        existing: Iterable[TimelineEntity]
    ) -> TimelineEntity:
        entity = plan_new_entity(
            key, world_x, world_y, time_scale, list(existing),
            min_spacing=self._config.axis.min_marker_spacing,
        )
        self.record_layer(entity.key, entity.layer)
        return entity

    def move_entity(
        self,
        entity: TimelineEntity,
        delta_x: float,
        delta_y: float,
        time_scale: float
    ) -> TimelineEntity:
        moved = move_entity(entity, delta_x, delta_y, time_scale)
        self.record_layer(moved.key, moved.layer)
        return moved

    def resize_entity(
        self,
        entity: TimelineEntity,
        edge: str,
        delta_x: float,
        time_scale: float
    ) -> TimelineEntity:
        return resize_entity(entity, edge, delta_x, time_scale)

    # =========================================================================
    # CAMERA
    # =========================================================================

    def camera(
        self,
        size: ViewportSize,
        cached: Optional[CachedViewport] = None
    ) -> Camera:
        """Clamped camera, restored from the cached viewport when given."""
        if cached is not None:
            return Camera.from_cached(cached, size)
        camera_config = self._config.camera
        return Camera.create(size, ViewportState(
            scale=camera_config.initial_scale,
            time_scale=camera_config.initial_time_scale,
        ))

    def fit_camera(self, camera: Camera, snapshot: LayoutSnapshot) -> Camera:
        """Zoom to show the whole timeline; unchanged when it is empty."""
        if snapshot.span is None:
            return camera
        return camera.fit_to_days(
            snapshot.span.start_day, snapshot.span.end_day,
            margin=self._config.camera.fit_margin,
        )

    def scale_level(self, time_scale: float) -> ScaleLevel:
        return scale_level_for(time_scale, self._config.axis.min_marker_spacing)

    def markers(self, camera: Camera) -> Tuple[Tuple[float, str], ...]:
        """Visible axis ticks as (screen_x, label)."""
        return camera.time_axis.markers(
            camera.size.width,
            self._formatter,
            min_spacing=self._config.axis.min_marker_spacing,
            limit=self._config.axis.marker_limit,
        )
