"""
Tests for the extra planet row stage builders.
"""

import pytest

from geartrain.calculator import StageInertia, solve_chain
from geartrain.enums import Role
from geartrain.io import build_half_stage_chain, build_half_stage_inertias

from conftest import make_stage


class TestBuildHalfStageChain:
    def test_rows_become_stages(self):
        main = make_stage("sun", "carrier", sun_teeth=20, ring_teeth=60, planet_teeth=20)
        stages = build_half_stage_chain(main, [15, 30])

        assert len(stages) == 3
        assert stages[0] is main
        assert stages[1].sun_teeth == 15
        assert stages[1].planet_teeth == 15
        assert stages[2].ring_teeth == 60
        assert stages[2].carrier is Role.OUTPUT
        assert stages[2].num_planets == main.num_planets

    def test_solves_as_ordinary_chain(self):
        main = make_stage("sun", "carrier")
        chain = solve_chain(build_half_stage_chain(main, [15]), 1000.0)

        assert chain.total_ratio == pytest.approx(0.25 * 15 / 75)

    def test_planet_count_override(self):
        main = make_stage("sun", "carrier", num_planets=3)
        stages = build_half_stage_chain(main, [15, 30], [None, 5])

        assert stages[1].num_planets == 3
        assert stages[2].num_planets == 5

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            build_half_stage_chain(make_stage("sun", "carrier"), [15, 30], [4])


class TestBuildHalfStageInertias:
    def test_rows_share_ring_and_carrier(self):
        main = StageInertia(j_sun=1.0, j_planet_each=0.1, j_ring=5.0, j_carrier=2.0)
        inertias = build_half_stage_inertias(main, [0.3])

        assert inertias[0] is main
        assert inertias[1] == StageInertia(j_sun=0.3, j_planet_each=0.3, j_ring=5.0, j_carrier=2.0)
