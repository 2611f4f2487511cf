"""
Interval Ingestion
==================

Turns the file-scanning collaborator's raw items into parsed intervals.

Each raw item is a mapping:
    key          - stable identifier (required)
    date_start   - calendar string or year (also read from 'date-start')
    date_end     - calendar string or year (also read from 'date-end')
    cached_layer - optional integer layer from a previous layout

GUARANTEES:
- Every input item results in exactly one of:
    an entry in `intervals`, or an entry in `malformed_items`
- Every skip carries an ErrorCode and is logged at WARNING
- Never raises for malformed data
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from ..contracts.base import Error, ErrorCode
from ..layout.layers import LayerableInterval
from ..observability import get_logger
from ..temporal.calendar import CalendarDate


logger = get_logger(__name__)

_START_KEYS = ('date_start', 'date-start')
_END_KEYS = ('date_end', 'date-end')
_SAMPLE_LENGTH = 200


@dataclass(frozen=True)
class ParsedInterval:
    """A raw item whose dates parsed and whose range is ordered."""
    key: str
    start: CalendarDate
    end: CalendarDate
    cached_layer: Optional[int] = None

    @property
    def day_start(self) -> int:
        return self.start.day_count

    @property
    def day_end(self) -> int:
        return self.end.day_count

    def to_layerable(
        self,
        preferred_layer: Optional[int] = None,
        current_layer: Optional[int] = None
    ) -> LayerableInterval:
        """
        Packer input. Explicit layers override cached_layer, which otherwise
        serves as both the preferred and the current layer.
        """
        return LayerableInterval(
            key=self.key,
            day_start=self.day_start,
            day_end=self.day_end,
            preferred_layer=preferred_layer if preferred_layer is not None else self.cached_layer,
            current_layer=current_layer if current_layer is not None else self.cached_layer,
        )

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'date_start': self.start.to_iso(),
            'date_end': self.end.to_iso(),
            'cached_layer': self.cached_layer,
        }


@dataclass(frozen=True)
class MalformedInterval:
    """Record of an item that was skipped."""
    key: str
    error: Error
    raw_sample: str  # First 200 chars for debugging

    def to_dict(self) -> dict:
        return {
            'key': self.key,
            'error': self.error.to_dict(),
            'raw_sample': self.raw_sample,
        }


@dataclass
class IntervalReport:
    processed_count: int = 0
    intervals: List[ParsedInterval] = field(default_factory=list)
    malformed_items: List[MalformedInterval] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return len(self.intervals)

    @property
    def malformed_count(self) -> int:
        return len(self.malformed_items)

    def counts_by_code(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for item in self.malformed_items:
            name = item.error.code.name
            counts[name] = counts.get(name, 0) + 1
        return counts

    def to_dict(self) -> dict:
        return {
            'processed_count': self.processed_count,
            'success_count': self.success_count,
            'malformed_count': self.malformed_count,
            'intervals': [i.to_dict() for i in self.intervals],
            'malformed_items': [m.to_dict() for m in self.malformed_items],
        }


def _first_present(item: Mapping[str, Any], names) -> Any:
    for name in names:
        value = item.get(name)
        if value is not None:
            return value
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_layer(value: Any) -> Optional[int]:
    """Integer layer, or raise ValueError."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a layer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip('+-').isdigit():
        return int(value.strip())
    raise ValueError(f"not an integer layer: {value!r}")


class IntervalNormalizer:
    """
    Validates raw items and parses their calendar dates.

    Keys must be unique within a batch: the first valid item with a key
    wins, later ones are reported as DUPLICATE_KEY.
    """

    def normalize_batch(self, items: Iterable[Any]) -> IntervalReport:
        items = list(items)
        report = IntervalReport(processed_count=len(items))
        accepted: Set[str] = set()

        for index, item in enumerate(items):
            result = self._normalize_item(index, item, accepted)
            if isinstance(result, ParsedInterval):
                accepted.add(result.key)
                report.intervals.append(result)
            else:
                logger.warning(
                    "skipping interval %s: %s (%s)",
                    result.key, result.error.message, result.error.code.name
                )
                report.malformed_items.append(result)

        return report

    def _normalize_item(self, index: int, item: Any, accepted: Set[str]):
        sample = str(item)[:_SAMPLE_LENGTH]

        if not isinstance(item, Mapping):
            return self._malformed(
                f"#{index}", ErrorCode.MISSING_DATE, "item is not a mapping", sample
            )

        raw_key = item.get('key')
        key = f"#{index}" if _is_blank(raw_key) else str(raw_key)

        if key in accepted:
            return self._malformed(
                key, ErrorCode.DUPLICATE_KEY, "key already used in this batch", sample
            )

        raw_start = _first_present(item, _START_KEYS)
        raw_end = _first_present(item, _END_KEYS)
        if _is_blank(raw_start) or _is_blank(raw_end):
            return self._malformed(
                key, ErrorCode.MISSING_DATE, "missing date_start or date_end", sample
            )

        start = CalendarDate.parse(raw_start)
        if start is None:
            return self._malformed(
                key, ErrorCode.MALFORMED_DATE, f"unparseable date_start {raw_start!r}",
                sample, field_name='date_start'
            )
        end = CalendarDate.parse(raw_end)
        if end is None:
            return self._malformed(
                key, ErrorCode.MALFORMED_DATE, f"unparseable date_end {raw_end!r}",
                sample, field_name='date_end'
            )

        if end.is_before(start):
            return self._malformed(
                key, ErrorCode.INVERTED_RANGE,
                f"date_end {end.to_iso()} is before date_start {start.to_iso()}",
                sample
            )

        cached_layer = None
        raw_layer = item.get('cached_layer')
        if raw_layer is not None:
            try:
                cached_layer = _parse_layer(raw_layer)
            except ValueError as e:
                return self._malformed(
                    key, ErrorCode.INVALID_LAYER, str(e), sample, field_name='cached_layer'
                )

        return ParsedInterval(key=key, start=start, end=end, cached_layer=cached_layer)

    @staticmethod
    def _malformed(
        key: str,
        code: ErrorCode,
        message: str,
        sample: str,
        field_name: Optional[str] = None
    ) -> MalformedInterval:
        error = Error(code=code, message=message).with_context('key', key)
        if field_name:
            error = error.with_context('field', field_name)
        return MalformedInterval(key=key, error=error, raw_sample=sample)
