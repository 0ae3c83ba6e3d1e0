"""
Geartrain - speed ratio and reflected inertia calculator for gear chains.

Simple fixed-axis gear pairs and planetary (sun/carrier/ring) stages,
cascaded in series.

Example:
    >>> from geartrain import GearPair, solve_simple_chain
    >>>
    >>> result = solve_simple_chain([GearPair(20, 45), GearPair(18, 60)], 1500)
    >>> round(result.output_speed, 1)
    200.0

Note: All imports are lazy-loaded, so `import geartrain` stays cheap and
the IO layer (Pydantic design files) is only imported when used.
"""

__version__ = "1.0.0"

# Define which names come from which submodule

_ENUMS = {"Member", "Role", "KinematicCase"}

_CALCULATOR = {
    "GearPair",
    "PlanetaryStage",
    "StageKinematicResult",
    "ChainResult",
    "SimpleChainResult",
    "StageInertia",
    "InertiaBreakdown",
    "InertiaResult",
    "PlanetaryAnalysis",
    "solve_stage",
    "solve_chain",
    "solve_simple_chain",
    "solve_stage_inertia",
    "solve_chain_inertia",
    "analyze_planetary",
    "reflect_inertia",
    "GearTrainError",
    "InvalidGeometry",
    "InvalidTopology",
    "EmptyChain",
    "LengthMismatch",
    "DegenerateRatio",
    "validate_planetary_stages",
    "validate_simple_chain",
    "Severity",
    "ValidationResult",
    "format_ratio",
}

_IO = {
    "load_design_json",
    "save_design_json",
    "GearTrainDesign",
    "build_half_stage_chain",
    "build_half_stage_inertias",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    raise AttributeError(f"module 'geartrain' has no attribute {name!r}")


__all__ = ["__version__"] + sorted(_ENUMS | _CALCULATOR | _IO)
