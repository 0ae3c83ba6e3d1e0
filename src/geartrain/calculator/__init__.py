"""
Gear Train Calculator - speed ratios and reflected inertia for gear chains.

This module provides calculator functions for simple (fixed-axis) gear
chains and planetary (sun/carrier/ring) chains in series.

Example:
    >>> from geartrain.calculator import PlanetaryStage, solve_chain
    >>> from geartrain.enums import Member
    >>>
    >>> stage = PlanetaryStage.from_input_output(
    ...     Member.SUN, Member.CARRIER, sun_teeth=20, ring_teeth=60
    ... )
    >>> solve_chain([stage, stage], input_speed=1600).final_output_speed
    100.0
"""

from .core import (
    # Records
    GearPair,
    PlanetaryStage,
    StageKinematicResult,
    ChainResult,
    SimpleChainResult,

    # Kinematics
    check_planetary_geometry,
    stage_gear_ratio,
    solve_stage,
    solve_chain,
    solve_simple_chain,
)

from .inertia import (
    # Records
    StageInertia,
    StageInertiaResult,
    InertiaBreakdown,
    InertiaResult,
    PlanetaryAnalysis,

    # Inertia
    reflect_inertia,
    solve_stage_inertia,
    solve_chain_inertia,
    analyze_planetary,
)

from .errors import (
    GearTrainError,
    InvalidGeometry,
    InvalidTopology,
    EmptyChain,
    LengthMismatch,
    DegenerateRatio,
)

from .validation import (
    validate_planetary_stages,
    validate_simple_chain,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from ..enums import (
    # Type-safe enums
    Member,
    Role,
    KinematicCase,
)

from .output import (
    # Output formatters
    format_ratio,
    format_ratio_text,
    to_dict,
    to_json,
    to_markdown,
    to_summary,
)


__all__ = [
    # Enums
    "Member",
    "Role",
    "KinematicCase",

    # Records
    "GearPair",
    "PlanetaryStage",
    "StageKinematicResult",
    "ChainResult",
    "SimpleChainResult",
    "StageInertia",
    "StageInertiaResult",
    "InertiaBreakdown",
    "InertiaResult",
    "PlanetaryAnalysis",

    # Kinematics
    "check_planetary_geometry",
    "stage_gear_ratio",
    "solve_stage",
    "solve_chain",
    "solve_simple_chain",

    # Inertia
    "reflect_inertia",
    "solve_stage_inertia",
    "solve_chain_inertia",
    "analyze_planetary",

    # Errors
    "GearTrainError",
    "InvalidGeometry",
    "InvalidTopology",
    "EmptyChain",
    "LengthMismatch",
    "DegenerateRatio",

    # Validation
    "validate_planetary_stages",
    "validate_simple_chain",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "format_ratio",
    "format_ratio_text",
    "to_dict",
    "to_json",
    "to_markdown",
    "to_summary",
]
