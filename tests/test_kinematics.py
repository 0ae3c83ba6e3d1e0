"""
Tests for planetary stage kinematics and chain accumulation.
"""

import math
import pytest

from geartrain.calculator import (
    DegenerateRatio,
    EmptyChain,
    GearTrainError,
    InvalidGeometry,
    InvalidTopology,
    KinematicCase,
    PlanetaryStage,
    solve_chain,
    solve_stage,
    stage_gear_ratio,
)
from geartrain.enums import Member, Role

from conftest import make_stage


# (input, output, expected case, expected ratio) for sun=20, ring=60
CASE_TABLE = [
    ("ring", "carrier", KinematicCase.RING_TO_CARRIER, 60 / 80),
    ("carrier", "ring", KinematicCase.CARRIER_TO_RING, 80 / 60),
    ("sun", "carrier", KinematicCase.SUN_TO_CARRIER, 20 / 80),
    ("carrier", "sun", KinematicCase.CARRIER_TO_SUN, 80 / 20),
    ("sun", "ring", KinematicCase.SUN_TO_RING, -20 / 60),
    ("ring", "sun", KinematicCase.RING_TO_SUN, -60 / 20),
]


class TestCaseTable:
    """Each of the six configurations with sun=20, ring=60."""

    @pytest.mark.parametrize("input_member,output_member,case,ratio", CASE_TABLE)
    def test_case_and_ratio(self, input_member, output_member, case, ratio):
        result = solve_stage(make_stage(input_member, output_member), 100.0)

        assert result.case is case
        assert result.gear_ratio == pytest.approx(ratio, rel=1e-12)
        assert result.output_speed == pytest.approx(100.0 * ratio, rel=1e-12)

    @pytest.mark.parametrize("input_member,output_member,case,ratio", CASE_TABLE)
    def test_willis_equation_holds(self, input_member, output_member, case, ratio):
        """n_ring*z_ring + n_sun*z_sun == n_carrier*(z_ring + z_sun)"""
        result = solve_stage(make_stage(input_member, output_member), 100.0)

        speeds = {m: 0.0 for m in Member}
        speeds[case.input] = 100.0
        speeds[case.output] = result.output_speed
        lhs = speeds[Member.RING] * 60 + speeds[Member.SUN] * 20
        rhs = speeds[Member.CARRIER] * 80
        assert lhs == pytest.approx(rhs, abs=1e-9)

    def test_sun_fixed_ring_input(self):
        """100 rpm on the ring with sun fixed gives 75 rpm at the carrier."""
        result = solve_stage(make_stage("ring", "carrier"), 100.0)

        assert result.output_speed == pytest.approx(75.0)
        assert result.gear_ratio == pytest.approx(0.75)
        assert result.ratio_type == "Ring->Carrier (Sun fixed)"

    def test_internal_ratio(self, sun_to_carrier):
        result = solve_stage(sun_to_carrier, 100.0)
        assert result.internal_ratio == pytest.approx(3.0)


class TestDirectionReversal:
    """Carrier-fixed stages keep their negative sign."""

    def test_sun_to_ring_negative(self, sun_to_ring):
        result = solve_stage(sun_to_ring, 100.0)

        assert result.output_speed == pytest.approx(-100.0 * 20 / 60)
        assert result.gear_ratio == pytest.approx(-1 / 3)
        assert result.gear_ratio < 0

    def test_reverses_direction_flag(self):
        assert KinematicCase.SUN_TO_RING.reverses_direction
        assert KinematicCase.RING_TO_SUN.reverses_direction
        assert not KinematicCase.SUN_TO_CARRIER.reverses_direction

    def test_two_reversals_cancel(self, sun_to_ring):
        result = solve_chain([sun_to_ring, sun_to_ring], 90.0)

        assert result.total_ratio == pytest.approx(1 / 9)
        assert result.final_output_speed == pytest.approx(10.0)


class TestTopologyErrors:
    """Role assignments that are not a permutation of input/output/fixed."""

    def test_all_input(self, all_input_stage):
        with pytest.raises(InvalidTopology):
            solve_stage(all_input_stage, 100.0)

    def test_two_fixed(self):
        stage = PlanetaryStage(
            sun=Role.FIXED, carrier=Role.FIXED, ring=Role.INPUT,
            sun_teeth=20, ring_teeth=60,
        )
        with pytest.raises(InvalidTopology):
            solve_stage(stage, 100.0)

    def test_non_role_value(self):
        stage = PlanetaryStage(
            sun="input", carrier=Role.OUTPUT, ring=Role.FIXED,
            sun_teeth=20, ring_teeth=60,
        )
        with pytest.raises(InvalidTopology):
            solve_stage(stage, 100.0)

    def test_same_input_and_output_member(self):
        with pytest.raises(InvalidTopology):
            PlanetaryStage.from_input_output(Member.SUN, Member.SUN, sun_teeth=20, ring_teeth=60)

    def test_topology_error_is_value_error(self, all_input_stage):
        with pytest.raises(ValueError):
            solve_stage(all_input_stage, 100.0)


class TestGeometryErrors:
    """Tooth and planet counts must be positive."""

    @pytest.mark.parametrize("sun_teeth,ring_teeth", [(0, 60), (20, 0), (-20, 60), (20, -1)])
    def test_non_positive_teeth(self, sun_teeth, ring_teeth):
        stage = make_stage("sun", "carrier", sun_teeth=sun_teeth, ring_teeth=ring_teeth)
        with pytest.raises(InvalidGeometry):
            solve_stage(stage, 100.0)

    def test_nan_teeth(self):
        stage = make_stage("sun", "carrier", sun_teeth=float("nan"))
        with pytest.raises(InvalidGeometry):
            solve_stage(stage, 100.0)

    def test_non_numeric_teeth(self):
        stage = make_stage("sun", "carrier", ring_teeth="60")
        with pytest.raises(InvalidGeometry):
            solve_stage(stage, 100.0)

    def test_invalid_planet_teeth(self):
        stage = make_stage("sun", "carrier", planet_teeth=0)
        with pytest.raises(InvalidGeometry):
            solve_stage(stage, 100.0)

    def test_zero_planets(self):
        stage = make_stage("sun", "carrier", num_planets=0)
        with pytest.raises(InvalidGeometry):
            solve_stage(stage, 100.0)

    def test_topology_checked_before_geometry(self):
        stage = PlanetaryStage(
            sun=Role.INPUT, carrier=Role.INPUT, ring=Role.INPUT,
            sun_teeth=0, ring_teeth=0,
        )
        with pytest.raises(InvalidTopology):
            solve_stage(stage, 100.0)


class TestInputSpeed:
    """Edge cases of the input speed."""

    def test_zero_input_speed(self, sun_to_carrier):
        result = solve_stage(sun_to_carrier, 0.0)

        assert result.output_speed == 0.0
        assert math.isfinite(result.gear_ratio)
        assert result.gear_ratio == pytest.approx(0.25)

    def test_negative_input_speed(self, sun_to_carrier):
        result = solve_stage(sun_to_carrier, -400.0)
        assert result.output_speed == pytest.approx(-100.0)

    @pytest.mark.parametrize("speed", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_speed(self, sun_to_carrier, speed):
        with pytest.raises(DegenerateRatio):
            solve_stage(sun_to_carrier, speed)

    def test_idempotent(self, sun_to_ring):
        """Identical inputs give identical results."""
        first = solve_stage(sun_to_ring, 123.456)
        second = solve_stage(sun_to_ring, 123.456)
        assert first == second
        assert first.output_speed == second.output_speed


class TestStageGearRatio:
    def test_independent_of_speed(self, sun_to_carrier):
        assert stage_gear_ratio(sun_to_carrier) == solve_stage(sun_to_carrier, 777.0).gear_ratio

    def test_invalid_topology(self, all_input_stage):
        with pytest.raises(InvalidTopology):
            stage_gear_ratio(all_input_stage)


class TestSolveChain:
    """Planetary stages in series."""

    def test_speed_propagates(self, sun_to_carrier):
        result = solve_chain([sun_to_carrier, sun_to_carrier], 1600.0)

        assert result.stages[0].output_speed == pytest.approx(400.0)
        assert result.stages[1].input_speed == pytest.approx(400.0)
        assert result.final_output_speed == pytest.approx(100.0)
        assert result.total_ratio == pytest.approx(1 / 16)

    def test_ratio_is_multiplicative(self):
        a = make_stage("ring", "carrier", sun_teeth=24, ring_teeth=72)
        b = make_stage("sun", "ring", sun_teeth=18, ring_teeth=54)
        v = 250.0

        first = solve_stage(a, v)
        second = solve_stage(b, first.output_speed)
        chain = solve_chain([a, b], v)

        assert chain.total_ratio == pytest.approx(first.gear_ratio * second.gear_ratio, rel=1e-12)
        assert chain.final_output_speed == pytest.approx(second.output_speed, rel=1e-12)

    def test_order_matters_for_intermediate_speeds(self):
        a = make_stage("sun", "carrier")
        b = make_stage("ring", "sun")

        ab = solve_chain([a, b], 100.0)
        ba = solve_chain([b, a], 100.0)

        assert ab.total_ratio == pytest.approx(ba.total_ratio)
        assert ab.stages[0].output_speed != pytest.approx(ba.stages[0].output_speed)

    def test_zero_speed_keeps_total_ratio(self, sun_to_carrier, sun_to_ring):
        result = solve_chain([sun_to_carrier, sun_to_ring], 0.0)

        assert result.final_output_speed == 0.0
        assert result.total_ratio == pytest.approx(0.25 * -1 / 3)

    def test_stage_indices(self, sun_to_carrier):
        result = solve_chain([sun_to_carrier] * 3, 100.0)
        assert [s.stage_index for s in result.stages] == [0, 1, 2]

    def test_empty_chain(self):
        with pytest.raises(EmptyChain):
            solve_chain([], 100.0)

    def test_failure_tagged_with_stage_index(self, sun_to_carrier, all_input_stage):
        with pytest.raises(InvalidTopology) as exc_info:
            solve_chain([sun_to_carrier, all_input_stage], 100.0)

        assert exc_info.value.stage_index == 1
        assert "Stage 2" in str(exc_info.value)

    def test_geometry_failure_tagged(self, sun_to_carrier):
        bad = make_stage("sun", "carrier", ring_teeth=0)
        with pytest.raises(InvalidGeometry) as exc_info:
            solve_chain([sun_to_carrier, sun_to_carrier, bad], 100.0)
        assert exc_info.value.stage_index == 2


class TestErrors:
    def test_codes(self):
        assert InvalidGeometry("x").code == "INVALID_GEOMETRY"
        assert InvalidTopology("x").code == "INVALID_TOPOLOGY"
        assert EmptyChain("x").code == "EMPTY_CHAIN"
        assert DegenerateRatio("x").code == "DEGENERATE_RATIO"

    def test_at_stage_keeps_type_and_detail(self):
        error = InvalidGeometry("Sun teeth must be a positive number").at_stage(4)

        assert isinstance(error, InvalidGeometry)
        assert isinstance(error, GearTrainError)
        assert error.stage_index == 4
        assert error.detail == "Sun teeth must be a positive number"
        assert str(error) == "Stage 5: Sun teeth must be a positive number"


class TestKinematicCaseEnum:
    def test_from_members(self):
        assert KinematicCase.from_members(Member.RING, Member.SUN) is KinematicCase.SUN_TO_CARRIER
        assert KinematicCase.from_members(Member.CARRIER, Member.RING) is KinematicCase.RING_TO_SUN

    def test_from_members_rejects_fixed_driver(self):
        with pytest.raises(ValueError):
            KinematicCase.from_members(Member.SUN, Member.SUN)

    def test_description(self):
        assert KinematicCase.SUN_TO_RING.description == "Sun->Ring (Carrier fixed)"

    def test_stage_reports_case(self, sun_to_carrier):
        assert sun_to_carrier.kinematic_case() is KinematicCase.SUN_TO_CARRIER
        assert sun_to_carrier.member_with(Role.FIXED) is Member.RING
        assert sun_to_carrier.role_of(Member.CARRIER) is Role.OUTPUT
