"""
Base Contracts and Shared Types

Foundational value types shared by every engine layer.
All types here are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module imports nothing from other deeptime layers
- Layers may import types but MUST NOT subclass them to add state
- All types are frozen dataclasses for immutability guarantee
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Tuple


# =============================================================================
# ERROR STATES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for data the engine refuses to place.
    Every skipped input item carries exactly one of these.
    """
    # Interval ingestion errors
    MISSING_DATE = auto()
    MALFORMED_DATE = auto()
    INVERTED_RANGE = auto()
    INVALID_LAYER = auto()
    DUPLICATE_KEY = auto()


@dataclass(frozen=True)
class Error:
    """
    Immutable error representation with full context.
    Errors are data, not exceptions - they can be stored and reported.
    """
    code: ErrorCode
    message: str
    context: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)

    def with_context(self, key: str, value: str) -> Error:
        """Return new Error with additional context (immutable)."""
        return Error(
            code=self.code,
            message=self.message,
            context=self.context + ((key, value),)
        )

    def to_dict(self) -> dict:
        return {
            'code': self.code.name,
            'message': self.message,
            'context': dict(self.context),
        }


# =============================================================================
# TEMPORAL TYPES
# =============================================================================

@dataclass(frozen=True)
class DaySpan:
    """Inclusive range of integer day counts."""
    start_day: int
    end_day: int

    def __post_init__(self):
        if self.start_day > self.end_day:
            raise ValueError("DaySpan start_day must be before or equal to end_day")

    @property
    def length(self) -> int:
        return self.end_day - self.start_day

    def contains(self, day: int) -> bool:
        return self.start_day <= day <= self.end_day

    def overlaps(self, other: DaySpan) -> bool:
        return self.start_day <= other.end_day and other.start_day <= self.end_day


# =============================================================================
# GEOMETRY TYPES (world = before camera transform, screen = after)
# =============================================================================

@dataclass(frozen=True)
class WorldPoint:
    x: float
    y: float


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float


@dataclass(frozen=True)
class WorldBounds:
    """The world-space window currently covered by the viewport."""
    left: float
    right: float
    top: float
    bottom: float

    @staticmethod
    def empty() -> WorldBounds:
        return WorldBounds(left=0.0, right=0.0, top=0.0, bottom=0.0)


@dataclass(frozen=True)
class WorldRect:
    """
    Axis-aligned rectangle in world coordinates.

    X is time (day * time_scale), Y is the layer lane top edge.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height
