"""
Numerical constants for gear train calculations.

Centralizes tolerances, display precision and the engineering thresholds
used by the advisory validation rules.

MODIFICATION GUIDELINES:
- Add new constants here rather than hardcoding in functions
- Include units in constant names where a unit applies (_RPM, _KGM2)
"""

# =============================================================================
# Numerical tolerances
# =============================================================================

# Ratios with smaller magnitude are displayed as "0:1"
ZERO_RATIO_TOLERANCE: float = 1e-12

# Fractional part below this counts as a whole tooth
INTEGER_TEETH_TOLERANCE: float = 1e-9

# =============================================================================
# Defaults
# =============================================================================

DEFAULT_NUM_PLANETS: int = 3

# =============================================================================
# Display precision (decimal places)
# =============================================================================

RATIO_DECIMALS: int = 6          # Decimal gear ratio
RATIO_TEXT_DECIMALS: int = 3     # "N:1" form
SPEED_DECIMALS: int = 6          # Speeds in rpm
INERTIA_DECIMALS: int = 8        # Inertia in kg·m²

# =============================================================================
# Engineering practice (advisory validation)
# =============================================================================

# A single spur/helical pair beyond this reduction or step-up is unusual
# Source: Machinery's Handbook, practical single-mesh limits
SINGLE_PAIR_RATIO_MAX: float = 10.0

# Planet tip clearance with unit module and standard addendum (1 × module
# each side): adjacent planet tips must not touch
PLANET_ADDENDUM_TEETH: float = 2.0
