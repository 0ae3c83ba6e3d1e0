"""
Tests for fixed-axis gear pair chains.
"""

import pytest

from geartrain.calculator import (
    DegenerateRatio,
    EmptyChain,
    GearPair,
    InvalidGeometry,
    solve_simple_chain,
)


class TestSolveSimpleChain:
    """Product of driving/driven ratios."""

    def test_two_pairs(self, sample_pairs):
        result = solve_simple_chain(sample_pairs, 1500.0)

        assert result.stage_ratios == pytest.approx((20 / 45, 18 / 60))
        assert result.total_ratio == pytest.approx(20 / 45 * 18 / 60)
        assert result.output_speed == pytest.approx(200.0)

    def test_single_pair_speed_up(self):
        result = solve_simple_chain([GearPair(60, 20)], 100.0)

        assert result.total_ratio == pytest.approx(3.0)
        assert result.output_speed == pytest.approx(300.0)

    def test_pair_ratio_property(self):
        assert GearPair(20, 45).ratio == pytest.approx(20 / 45)

    def test_zero_speed(self, sample_pairs):
        result = solve_simple_chain(sample_pairs, 0.0)

        assert result.output_speed == 0.0
        assert result.total_ratio == pytest.approx(2 / 15)

    def test_fractional_teeth_accepted(self):
        result = solve_simple_chain([GearPair(20.5, 41)], 10.0)
        assert result.output_speed == pytest.approx(5.0)

    def test_named_fields(self, sample_pairs):
        total_ratio, stage_ratios, output_speed = solve_simple_chain(sample_pairs, 1500.0)

        assert len(stage_ratios) == 2
        assert output_speed == pytest.approx(1500.0 * total_ratio)


class TestSimpleChainErrors:
    def test_empty(self):
        with pytest.raises(EmptyChain):
            solve_simple_chain([], 100.0)

    @pytest.mark.parametrize("pair", [GearPair(0, 45), GearPair(20, 0), GearPair(-20, 45)])
    def test_non_positive_teeth(self, pair):
        with pytest.raises(InvalidGeometry):
            solve_simple_chain([pair], 100.0)

    def test_bad_pair_tagged(self, sample_pairs):
        with pytest.raises(InvalidGeometry) as exc_info:
            solve_simple_chain(sample_pairs + [GearPair(12, 0)], 100.0)

        assert exc_info.value.stage_index == 2
        assert str(exc_info.value).startswith("Stage 3:")

    def test_non_finite_speed(self, sample_pairs):
        with pytest.raises(DegenerateRatio):
            solve_simple_chain(sample_pairs, float("nan"))
