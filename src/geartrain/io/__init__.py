"""
Gear train IO - design files, schema and stage list builders.

Example:
    >>> from geartrain.io import load_design_json
    >>> from geartrain.calculator import analyze_planetary
    >>>
    >>> design = load_design_json("design.json")
    >>> analysis = analyze_planetary(
    ...     design.to_planetary_stages(),
    ...     design.input_speed_rpm,
    ...     design.to_stage_inertias(),
    ... )
"""

from .loaders import (
    load_design_json,
    save_design_json,
    GearPairParams,
    StageInertiaParams,
    PlanetaryStageParams,
    GearTrainDesign,
)

from .schema import (
    SCHEMA_VERSION,
    create_example_planetary_design,
    create_example_simple_design,
)

from .stages import (
    build_half_stage_chain,
    build_half_stage_inertias,
)

__all__ = [
    # Loaders
    "load_design_json",
    "save_design_json",

    # Parameters
    "GearPairParams",
    "StageInertiaParams",
    "PlanetaryStageParams",
    "GearTrainDesign",

    # Schema
    "SCHEMA_VERSION",
    "create_example_planetary_design",
    "create_example_simple_design",

    # Stage builders
    "build_half_stage_chain",
    "build_half_stage_inertias",
]
