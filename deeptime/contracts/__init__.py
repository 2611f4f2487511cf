"""
Contracts Layer
===============

Immutable value types shared by all deeptime layers.
"""

from .base import (
    ErrorCode, Error, DaySpan,
    WorldPoint, ScreenPoint, WorldBounds, WorldRect,
)
from .viewport import ViewportSize, ViewportState, CachedViewport

__all__ = [
    'ErrorCode',
    'Error',
    'DaySpan',
    'WorldPoint',
    'ScreenPoint',
    'WorldBounds',
    'WorldRect',
    'ViewportSize',
    'ViewportState',
    'CachedViewport',
]
