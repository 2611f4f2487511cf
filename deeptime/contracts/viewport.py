"""
Viewport Contracts

Camera state values exchanged between the camera layer, the engine facade
and the caller-owned viewport cache.

COORDINATE SYSTEM:
==================
    X-axis: screen_x = world_x + translate_x          (NO scale)
    Y-axis: screen_y = world_y * scale + translate_y

INVARIANTS (enforced by deeptime.camera.limits, not here):
- scale in [MIN_SCALE, MAX_SCALE]
- time_scale >= min_time_scale(viewport width)
- translate_x inside the +/- MAX_DAYS_FROM_EPOCH window
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Optional


DEFAULT_TIME_SCALE = 10.0
DEFAULT_SCALE = 1.0


@dataclass(frozen=True)
class ViewportSize:
    """Pixel dimensions of the host panel. Zero while the panel is hidden."""
    width: float
    height: float


@dataclass(frozen=True)
class ViewportState:
    """
    Camera state for one timeline view.

    Replaced (never mutated) on every pan or zoom so that gesture events
    applied in arrival order always produce a valid, clamped value.
    """
    scale: float = DEFAULT_SCALE            # Y-axis zoom only
    time_scale: float = DEFAULT_TIME_SCALE  # pixels per day
    translate_x: float = 0.0
    translate_y: float = 0.0

    def to_dict(self) -> dict:
        return {
            'scale': self.scale,
            'time_scale': self.time_scale,
            'translate_x': self.translate_x,
            'translate_y': self.translate_y,
        }


@dataclass(frozen=True)
class CachedViewport:
    """
    Persisted viewport representation.

    center_day is time-scale independent and preferred on restore.
    center_x (world X of the viewport center) is kept for older caches
    that predate center_day.
    """
    center_day: float
    center_y: float
    time_scale: float
    scale: float = DEFAULT_SCALE
    center_x: float = 0.0

    def to_dict(self) -> dict:
        return {
            'centerX': self.center_x,
            'centerDay': self.center_day,
            'centerY': self.center_y,
            'timeScale': self.time_scale,
            'scale': self.scale,
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> Optional[CachedViewport]:
        """
        Rebuild from a cache entry. Returns None if the entry is unusable.

        Missing scale defaults to 1; a missing centerDay is derived from
        the legacy centerX.
        """
        if not isinstance(data, Mapping):
            return None
        try:
            time_scale = float(data.get('timeScale', DEFAULT_TIME_SCALE))
            center_x = float(data.get('centerX', 0.0))
            center_y = float(data.get('centerY', 0.0))
            scale = float(data.get('scale', DEFAULT_SCALE))
            if 'centerDay' in data and data['centerDay'] is not None:
                center_day = float(data['centerDay'])
            elif time_scale != 0:
                center_day = center_x / time_scale
            else:
                center_day = 0.0
        except (TypeError, ValueError):
            return None

        return CachedViewport(
            center_day=center_day,
            center_y=center_y,
            time_scale=time_scale,
            scale=scale,
            center_x=center_x,
        )
