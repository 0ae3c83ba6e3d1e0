"""
Pytest configuration and shared fixtures for geartrain tests.
"""

import json
import pytest

from geartrain.calculator import GearPair, PlanetaryStage, StageInertia
from geartrain.enums import Member, Role
from geartrain.io.schema import create_example_planetary_design, create_example_simple_design


# ─── Helper functions (no pytest dependency) ──────────────────────────────


def make_stage(input_member, output_member, sun_teeth=20, ring_teeth=60, planet_teeth=None, num_planets=3):
    """Stage with the given drive path; the third member is fixed."""
    return PlanetaryStage.from_input_output(
        Member(input_member),
        Member(output_member),
        sun_teeth=sun_teeth,
        ring_teeth=ring_teeth,
        planet_teeth=planet_teeth,
        num_planets=num_planets,
    )


# ─── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def sun_to_carrier():
    """Classic reducer: sun in, carrier out, ring fixed (20/60 teeth, ratio 0.25)."""
    return make_stage("sun", "carrier")


@pytest.fixture
def sun_to_ring():
    """Star arrangement: carrier fixed, ratio -1/3."""
    return make_stage("sun", "ring")


@pytest.fixture
def sample_inertia():
    """Component inertias in kg·m²."""
    return StageInertia(j_sun=1e-4, j_planet_each=1e-5, j_ring=5e-4, j_carrier=2e-4)


@pytest.fixture
def sample_pairs():
    """Two spur pairs: 20/45 then 18/60."""
    return [GearPair(20, 45), GearPair(18, 60)]


@pytest.fixture
def all_input_stage():
    """Stage whose members all claim the input role."""
    return PlanetaryStage(
        sun=Role.INPUT,
        carrier=Role.INPUT,
        ring=Role.INPUT,
        sun_teeth=20,
        ring_teeth=60,
    )


@pytest.fixture
def planetary_design_file(tmp_path):
    """Example planetary design written to disk."""
    path = tmp_path / "planetary.json"
    path.write_text(json.dumps(create_example_planetary_design()))
    return path


@pytest.fixture
def simple_design_file(tmp_path):
    """Example simple design written to disk."""
    path = tmp_path / "simple.json"
    path.write_text(json.dumps(create_example_simple_design()))
    return path
