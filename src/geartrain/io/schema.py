"""
Design file schema version and example documents.

The design file is the contract between front ends (web calculator, CLI)
and the calculator. Field-level validation lives in the Pydantic models in
loaders.py; this module only versions the format and provides examples.
"""

from typing import Any, Dict

SCHEMA_VERSION = "1.0"


def create_example_planetary_design() -> Dict[str, Any]:
    """Two-stage sun-driven reducer with inertia data (ring fixed in both stages)."""
    return {
        "schema_version": SCHEMA_VERSION,
        "input_speed_rpm": 3000.0,
        "planetary_stages": [
            {
                "sun": "input",
                "carrier": "output",
                "ring": "fixed",
                "sun_teeth": 20,
                "planet_teeth": 20,
                "ring_teeth": 60,
                "num_planets": 4,
                "inertia": {
                    "j_sun": 2.0e-5,
                    "j_planet_each": 1.5e-5,
                    "j_ring": 4.0e-4,
                    "j_carrier": 1.2e-4,
                },
            },
            {
                "sun": "input",
                "carrier": "output",
                "ring": "fixed",
                "sun_teeth": 18,
                "planet_teeth": 27,
                "ring_teeth": 72,
                "num_planets": 3,
                "inertia": {
                    "j_sun": 4.0e-5,
                    "j_planet_each": 6.0e-5,
                    "j_ring": 1.1e-3,
                    "j_carrier": 5.0e-4,
                },
            },
        ],
    }


def create_example_simple_design() -> Dict[str, Any]:
    """Two-pair spur reduction."""
    return {
        "schema_version": SCHEMA_VERSION,
        "input_speed_rpm": 1500.0,
        "simple_stages": [
            {"driving_teeth": 20, "driven_teeth": 45},
            {"driving_teeth": 18, "driven_teeth": 60},
        ],
    }
