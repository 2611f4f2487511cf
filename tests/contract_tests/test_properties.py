"""
Property Tests for deeptime Invariants
Verifies clamping, zoom anchoring, calendar round trips and packing
across generated inputs.
"""

import pytest
from hypothesis import assume, example, given, settings, strategies as st
from hypothesis.strategies import composite

from deeptime.camera.camera import Camera
from deeptime.camera.limits import (
    MAX_DAYS_FROM_EPOCH, MAX_SCALE, MIN_SCALE,
    clamp_scale, clamp_time_scale, clamp_translate_x, get_min_time_scale,
    zoom_time_scale_only, zoom_unified,
)
from deeptime.contracts.viewport import ViewportSize, ViewportState
from deeptime.layout.layers import LayerableInterval, LayerPacker, ranges_overlap
from deeptime.temporal.axis import (
    SCALE_LEVELS, ScaleLevel, scale_level_for, snap_to_nearest_marker,
)
from deeptime.temporal.calendar import CalendarDate, civil_from_days

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

# Roughly +/- 10.1 billion years of day counts.
DAY_COUNTS = st.integers(min_value=-3_700_000_000_000, max_value=3_700_000_000_000)
FINITE = dict(allow_nan=False, allow_infinity=False)

YEAR_UNITS = {
    ScaleLevel.YEAR: 1,
    ScaleLevel.DECADE: 10,
    ScaleLevel.CENTURY: 100,
    ScaleLevel.MILLENNIUM: 1_000,
    ScaleLevel.MILLION_YEARS: 1_000_000,
    ScaleLevel.BILLION_YEARS: 1_000_000_000,
}


@composite
def viewport_states(draw):
    """States well inside the navigable space, so X clamping never binds."""
    return ViewportState(
        scale=draw(st.floats(min_value=MIN_SCALE, max_value=MAX_SCALE, **FINITE)),
        time_scale=draw(st.floats(min_value=1e-3, max_value=1e3, **FINITE)),
        translate_x=draw(st.floats(min_value=-1e6, max_value=1e6, **FINITE)),
        translate_y=draw(st.floats(min_value=-1e4, max_value=1e4, **FINITE)),
    )


@composite
def interval_lists(draw):
    """Unordered intervals with unique keys and optional preferred layers."""
    count = draw(st.integers(min_value=0, max_value=40))
    items = []
    for i in range(count):
        start = draw(st.integers(min_value=-500, max_value=500))
        length = draw(st.integers(min_value=0, max_value=200))
        preferred = draw(st.one_of(st.none(), st.integers(min_value=-5, max_value=5)))
        items.append(LayerableInterval(
            key=f"item_{i}", day_start=start, day_end=start + length,
            preferred_layer=preferred,
        ))
    return items


# =============================================================================
# CLAMPS
# =============================================================================

class TestClampInvariants:

    @given(st.floats(**FINITE))
    def test_clamp_scale_idempotent_and_bounded(self, scale):
        once = clamp_scale(scale)
        assert MIN_SCALE <= once <= MAX_SCALE
        assert clamp_scale(once) == once

    @given(st.floats(min_value=-1e6, max_value=1e6, **FINITE),
           st.floats(min_value=0, max_value=1e5, **FINITE))
    @example(0.0, 2.225073858507e-311)
    def test_clamp_time_scale_idempotent(self, time_scale, width):
        once = clamp_time_scale(time_scale, width)
        assert once >= get_min_time_scale(width) > 0
        assert clamp_time_scale(once, width) == once

    @given(st.floats(min_value=-1e30, max_value=1e30, **FINITE),
           st.floats(min_value=1e-6, max_value=1e3, **FINITE),
           st.floats(min_value=0, max_value=1e5, **FINITE))
    def test_clamp_translate_x_idempotent(self, translate_x, time_scale, width):
        once = clamp_translate_x(translate_x, time_scale, width)
        assert clamp_translate_x(once, time_scale, width) == once
        assert once <= MAX_DAYS_FROM_EPOCH * time_scale


# =============================================================================
# ZOOM
# =============================================================================

class TestZoomInvariants:

    @given(viewport_states(),
           st.floats(min_value=0, max_value=1000, **FINITE),
           st.floats(min_value=0, max_value=800, **FINITE),
           st.floats(min_value=0.5, max_value=2.0, **FINITE))
    def test_unified_zoom_keeps_anchor(self, state, anchor_x, anchor_y, multiplier):
        result = zoom_unified(anchor_x, anchor_y, multiplier, state, 1000)

        day_before = (anchor_x - state.translate_x) / state.time_scale
        day_after = (anchor_x - result.translate_x) / result.time_scale
        y_before = (anchor_y - state.translate_y) / state.scale
        y_after = (anchor_y - result.translate_y) / result.scale

        assert day_after == pytest.approx(day_before, rel=1e-5, abs=1e-3)
        assert y_after == pytest.approx(y_before, rel=1e-5, abs=1e-6)

    @given(viewport_states(),
           st.floats(min_value=0, max_value=1000, **FINITE),
           st.floats(min_value=0.1, max_value=10.0, **FINITE))
    def test_time_zoom_keeps_anchor_and_y(self, state, anchor_x, multiplier):
        result = zoom_time_scale_only(anchor_x, multiplier, state, 1000)

        day_before = (anchor_x - state.translate_x) / state.time_scale
        day_after = (anchor_x - result.translate_x) / result.time_scale
        assert day_after == pytest.approx(day_before, rel=1e-5, abs=1e-3)
        assert result.scale == state.scale
        assert result.translate_y == state.translate_y

    @given(viewport_states(), st.floats(min_value=-1e3, max_value=1e3, **FINITE))
    def test_day_screen_round_trip(self, state, day):
        camera = Camera(state=state, size=ViewportSize(1000, 800))
        assert camera.day_for_screen_x(camera.screen_x_for_day(day)) == \
            pytest.approx(day, rel=1e-6, abs=1e-3)


# =============================================================================
# CALENDAR AND AXIS
# =============================================================================

class TestCalendarInvariants:

    @given(DAY_COUNTS)
    def test_iso_round_trip(self, day):
        date = CalendarDate.from_day_count(day)
        assert CalendarDate.parse(date.to_iso()).days_from_epoch == day

    @given(DAY_COUNTS, DAY_COUNTS)
    def test_ordering_follows_day_count(self, a, b):
        first, second = CalendarDate(a), CalendarDate(b)
        assert first.is_before(second) == (a < b)
        assert first.is_same_day(second) == (a == b)

    @given(st.text(max_size=40))
    @settings(max_examples=300)
    def test_parse_never_raises(self, text):
        result = CalendarDate.parse(text)
        assert result is None or isinstance(result, CalendarDate)


class TestAxisInvariants:

    @given(DAY_COUNTS, st.sampled_from(list(YEAR_UNITS)))
    def test_snap_lands_on_year_boundary(self, day, level):
        year, month, dom = civil_from_days(snap_to_nearest_marker(day, level))
        assert (month, dom) == (1, 1)
        assert year % YEAR_UNITS[level] == 0

    @given(DAY_COUNTS)
    def test_month_snap_lands_on_first(self, day):
        assert civil_from_days(snap_to_nearest_marker(day, ScaleLevel.MONTH))[2] == 1

    @given(st.floats(min_value=1e-12, max_value=1e6, **FINITE),
           st.floats(min_value=1e-12, max_value=1e6, **FINITE))
    def test_level_is_monotonic_in_time_scale(self, a, b):
        assume(a <= b)
        finer = SCALE_LEVELS.index(scale_level_for(b))
        coarser = SCALE_LEVELS.index(scale_level_for(a))
        assert finer <= coarser


# =============================================================================
# PACKING
# =============================================================================

class TestPackingInvariants:

    @given(interval_lists())
    def test_same_layer_never_overlaps(self, items):
        result = LayerPacker().pack(items)
        assert result.forced_overlaps == ()
        placed = result.placed
        for i, a in enumerate(placed):
            for b in placed[i + 1:]:
                if a.layer == b.layer:
                    assert not ranges_overlap(a.day_start, a.day_end, b.day_start, b.day_end)

    @given(interval_lists())
    def test_every_interval_placed_once(self, items):
        result = LayerPacker().pack(items)
        assert sorted(p.key for p in result.placed) == sorted(i.key for i in items)

    @given(interval_lists())
    def test_repacking_is_stable(self, items):
        first = LayerPacker().pack(items).layers()
        again = [
            LayerableInterval(
                key=i.key, day_start=i.day_start, day_end=i.day_end,
                preferred_layer=first[i.key], current_layer=first[i.key],
            )
            for i in items
        ]
        result = LayerPacker().pack(again)
        assert result.layers() == first
        assert result.assignments == ()
