"""
Unit tests for chart/scales.py

Expected pixel values are what d3 produces for the same inputs with
``scaleBand().rangeRound([0, 900]).padding(0.1)`` and
``scaleLinear().rangeRound([450, 0])``.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from chart.scales import (
    BandScale,
    LinearScale,
    amount_domain,
    build_scales,
    js_round,
    tick_step,
    ticks,
)
from utils.config import ChartConfig


# ── js_round ──────────────────────────────────────────────────────────────────

class TestJsRound:
    @pytest.mark.parametrize("value,expected", [
        (0.5, 1), (1.5, 2), (2.5, 3), (-0.5, 0), (18.8, 19), (158.4, 158),
    ])
    def test_half_up(self, value, expected):
        assert js_round(value) == expected


# ── BandScale ─────────────────────────────────────────────────────────────────

class TestBandScale:
    def _scale(self, n=5):
        return BandScale([f"c{i}" for i in range(n)], (0, 900), padding=0.1)

    def test_step_and_bandwidth(self):
        scale = self._scale()
        assert scale.step == 176
        assert scale.bandwidth == 158

    def test_band_starts(self):
        scale = self._scale()
        assert [scale(f"c{i}") for i in range(5)] == [19, 195, 371, 547, 723]

    def test_centre(self):
        assert self._scale().center("c0") == 19 + 79

    def test_centre_rounds_odd_bandwidth(self):
        scale = BandScale(["a", "b", "c"], (0, 100), padding=0.1)
        assert (scale("a"), scale.bandwidth) == (4, 29)
        assert scale.center("a") == 19
        assert isinstance(scale.center("a"), int)

    def test_centre_unrounded(self):
        scale = BandScale(["a", "b", "c"], (0, 100), padding=0.1, round_=False)
        assert scale.center("a") == scale("a") + scale.bandwidth / 2

    def test_bands_stay_inside_range(self):
        scale = self._scale(37)
        starts = [scale(c) for c in scale.domain]
        assert min(starts) >= 0
        assert max(starts) + scale.bandwidth <= 900

    def test_positions_strictly_increase(self):
        scale = self._scale(12)
        starts = [scale(c) for c in scale.domain]
        assert starts == sorted(starts)
        assert len(set(starts)) == len(starts)

    def test_unknown_value_is_none(self):
        assert self._scale()("nope") is None
        assert self._scale().center("nope") is None

    def test_duplicates_share_one_band(self):
        scale = BandScale(["a", "b", "a"], (0, 900))
        assert scale.domain == ["a", "b"]

    def test_single_category(self):
        scale = BandScale(["only"], (0, 900), padding=0.1)
        assert scale("only") is not None
        assert scale("only") + scale.bandwidth <= 900

    def test_empty_domain(self):
        scale = BandScale([], (0, 900))
        assert scale.domain == []

    def test_with_domain_keeps_range(self):
        scale = self._scale()
        reordered = scale.with_domain(["c4", "c3", "c2", "c1", "c0"])
        assert reordered("c4") == 19
        assert reordered.bandwidth == scale.bandwidth
        assert reordered.range == scale.range

    def test_unrounded(self):
        scale = BandScale(["a", "b"], (0, 100), padding=0, round_=False)
        assert scale("a") == 0
        assert scale("b") == 50
        assert scale.bandwidth == 50


# ── ticks ─────────────────────────────────────────────────────────────────────

class TestTicks:
    def test_thousands(self):
        assert ticks(0, 46000, 10) == [i * 5000 for i in range(10)]

    def test_unit_interval(self):
        assert ticks(0, 1, 10) == pytest.approx([i / 10 for i in range(11)])

    def test_degenerate(self):
        assert ticks(5, 5, 10) == [5]

    def test_zero_count(self):
        assert ticks(0, 10, 0) == []

    def test_reversed_domain(self):
        assert ticks(10, 0, 5) == [10, 8, 6, 4, 2, 0]

    def test_tick_step(self):
        assert tick_step(0, 46000, 10) == 5000
        assert tick_step(0, 1, 10) == pytest.approx(0.1)


# ── LinearScale ───────────────────────────────────────────────────────────────

class TestLinearScale:
    def _scale(self):
        return LinearScale((0, 46000), (450, 0))

    @pytest.mark.parametrize("value,expected", [
        (0, 450), (46000, 0), (2500, 426), (37000, 88), (390, 446), (40, 450),
        (45000, 10), (5000, 401),
    ])
    def test_maps_amounts(self, value, expected):
        assert self._scale()(value) == expected

    def test_zero_maps_to_bottom(self):
        assert self._scale()(0) == 450

    def test_degenerate_domain_uses_midpoint(self):
        assert LinearScale((3, 3), (450, 0))(3) == 225

    def test_tick_labels(self):
        scale = self._scale()
        fmt = scale.tick_format(10)
        assert [fmt(t) for t in scale.ticks(10)] == [f"{i * 5}k" for i in range(10)]

    def test_small_values_no_prefix(self):
        scale = LinearScale((0, 900), (450, 0))
        fmt = scale.tick_format(10)
        assert fmt(300) == "300"


# ── domain helpers ────────────────────────────────────────────────────────────

class TestAmountDomain:
    def test_zero_to_max(self):
        assert amount_domain([3, 9, 1]) == (0.0, 9)

    def test_all_zero(self):
        assert amount_domain([0, 0]) == (0.0, 1.0)

    def test_empty(self):
        assert amount_domain([]) == (0.0, 1.0)

    def test_build_scales(self, sample_records, file_order):
        x, y = build_scales(sample_records, ChartConfig())
        assert x.domain == file_order
        assert x.range == (0, 900)
        assert y.domain == (0.0, 46000.0)
        assert y.range == (450, 0)
