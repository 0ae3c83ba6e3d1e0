"""
Gear Train Calculator - Core Kinematics

Pure functions for speed ratios of simple and planetary gear chains.

Planetary stages obey the Willis equation for a single-planet train:

    n_ring * z_ring + n_sun * z_sun = n_carrier * (z_ring + z_sun)

With one member fixed (speed 0) and one driven at the input speed, the
remaining member's speed follows by isolating it. The six possible
configurations are enumerated by KinematicCase.
"""

import logging
from dataclasses import dataclass
from math import isfinite
from typing import Callable, Dict, NamedTuple, Optional, Sequence, Tuple

from ..enums import KinematicCase, Member, Role
from .constants import DEFAULT_NUM_PLANETS
from .errors import (
    DegenerateRatio,
    EmptyChain,
    GearTrainError,
    InvalidGeometry,
    InvalidTopology,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Records
# =============================================================================

@dataclass(frozen=True)
class GearPair:
    """Simple fixed-axis stage: driving gear meshing with driven gear."""
    driving_teeth: float
    driven_teeth: float

    @property
    def ratio(self) -> float:
        """Output speed / input speed"""
        return self.driving_teeth / self.driven_teeth


@dataclass(frozen=True)
class PlanetaryStage:
    """
    One sun/carrier/ring stage.

    Each member holds a Role; a valid stage uses each Role exactly once.
    Planet teeth do not enter the speed equation and are optional.
    """
    sun: Role
    carrier: Role
    ring: Role
    sun_teeth: float
    ring_teeth: float
    planet_teeth: Optional[float] = None
    num_planets: int = DEFAULT_NUM_PLANETS

    @classmethod
    def from_input_output(
        cls,
        input_member: Member,
        output_member: Member,
        sun_teeth: float,
        ring_teeth: float,
        planet_teeth: Optional[float] = None,
        num_planets: int = DEFAULT_NUM_PLANETS
    ) -> "PlanetaryStage":
        """
        Build a stage from the driving and driven members; the third is fixed.

        Raises:
            InvalidTopology: If input and output are the same member
        """
        if input_member is output_member:
            raise InvalidTopology(
                f"Input and output must be different members (both {input_member.value})"
            )
        roles = {member: Role.FIXED for member in Member}
        roles[input_member] = Role.INPUT
        roles[output_member] = Role.OUTPUT
        return cls(
            sun=roles[Member.SUN],
            carrier=roles[Member.CARRIER],
            ring=roles[Member.RING],
            sun_teeth=sun_teeth,
            ring_teeth=ring_teeth,
            planet_teeth=planet_teeth,
            num_planets=num_planets,
        )

    @property
    def internal_ratio(self) -> float:
        """K = z_ring / z_sun"""
        return self.ring_teeth / self.sun_teeth

    def role_of(self, member: Member) -> Role:
        return getattr(self, member.value)

    def member_with(self, role: Role) -> Member:
        """Member holding ``role``. Only meaningful for a valid topology."""
        for member in Member:
            if self.role_of(member) is role:
                return member
        raise InvalidTopology(f"No member is assigned the {role.value} role")

    def kinematic_case(self) -> KinematicCase:
        """
        Identify which of the six configurations this stage uses.

        Raises:
            InvalidTopology: If the roles are not a permutation of
                input/output/fixed
        """
        roles = [self.role_of(member) for member in Member]
        if not all(isinstance(role, Role) for role in roles):
            raise InvalidTopology(
                "Roles must be input, output or fixed, got "
                + ", ".join(f"{m.value}={r!r}" for m, r in zip(Member, roles))
            )
        if set(roles) != set(Role):
            raise InvalidTopology(
                "Exactly one member must be input, one output and one fixed, got "
                + ", ".join(f"{m.value}={r.value}" for m, r in zip(Member, roles))
            )
        return KinematicCase.from_members(
            fixed=self.member_with(Role.FIXED),
            driving=self.member_with(Role.INPUT),
        )


@dataclass(frozen=True)
class StageKinematicResult:
    """Solved speeds for one planetary stage."""
    stage_index: int
    case: KinematicCase
    input_speed: float
    output_speed: float
    gear_ratio: float       # output_speed / input_speed
    internal_ratio: float   # K = z_ring / z_sun

    @property
    def ratio_type(self) -> str:
        return self.case.description


@dataclass(frozen=True)
class ChainResult:
    """Accumulated result of a planetary chain."""
    total_ratio: float
    input_speed: float
    final_output_speed: float
    stages: Tuple[StageKinematicResult, ...]


class SimpleChainResult(NamedTuple):
    """Accumulated result of a simple gear chain."""
    total_ratio: float
    stage_ratios: Tuple[float, ...]
    output_speed: float


# =============================================================================
# Validation helpers
# =============================================================================

def _check_teeth(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidGeometry(f"{name} must be a number, got {value!r}")
    if not isfinite(value) or value <= 0:
        raise InvalidGeometry(f"{name} must be a positive number, got {value}")


def _check_speed(input_speed) -> None:
    if isinstance(input_speed, bool) or not isinstance(input_speed, (int, float)):
        raise DegenerateRatio(f"Input speed must be a number, got {input_speed!r}")
    if not isfinite(input_speed):
        raise DegenerateRatio(f"Input speed must be finite, got {input_speed}")


def check_planetary_geometry(stage: PlanetaryStage) -> None:
    """
    Raise InvalidGeometry unless all tooth counts and the planet count are usable.
    """
    _check_teeth("Sun teeth", stage.sun_teeth)
    _check_teeth("Ring teeth", stage.ring_teeth)
    if stage.planet_teeth is not None:
        _check_teeth("Planet teeth", stage.planet_teeth)
    if (isinstance(stage.num_planets, bool)
            or not isinstance(stage.num_planets, int)
            or stage.num_planets < 1):
        raise InvalidGeometry(
            f"Number of planets must be a whole number >= 1, got {stage.num_planets!r}"
        )


# =============================================================================
# Planetary kinematics
# =============================================================================

# gear_ratio = output_speed / input_speed for each case, from (z_sun, z_ring)
_RATIO_FORMULAS: Dict[KinematicCase, Callable[[float, float], float]] = {
    KinematicCase.RING_TO_CARRIER: lambda zs, zr: zr / (zr + zs),
    KinematicCase.CARRIER_TO_RING: lambda zs, zr: (zr + zs) / zr,
    KinematicCase.SUN_TO_CARRIER: lambda zs, zr: zs / (zr + zs),
    KinematicCase.CARRIER_TO_SUN: lambda zs, zr: (zr + zs) / zs,
    KinematicCase.SUN_TO_RING: lambda zs, zr: -zs / zr,
    KinematicCase.RING_TO_SUN: lambda zs, zr: -zr / zs,
}


def stage_gear_ratio(stage: PlanetaryStage) -> float:
    """
    Speed ratio (output / input) of a planetary stage.

    Depends only on geometry and topology, never on speed. Carrier-fixed
    stages return a negative ratio (direction reversal).

    Raises:
        InvalidTopology: If the roles are not a valid permutation
        InvalidGeometry: If sun or ring teeth are not positive
    """
    case = stage.kinematic_case()
    check_planetary_geometry(stage)
    return _RATIO_FORMULAS[case](stage.sun_teeth, stage.ring_teeth)


def solve_stage(stage: PlanetaryStage, input_speed: float, stage_index: int = 0) -> StageKinematicResult:
    """
    Solve one planetary stage for its output speed.

    Args:
        stage: Stage topology and tooth counts
        input_speed: Speed of the input member (any unit, typically rpm)
        stage_index: Position of the stage in its chain (for the result record)

    Returns:
        StageKinematicResult with output speed, gear ratio and case

    Raises:
        InvalidTopology: If the roles are not a permutation of input/output/fixed
        InvalidGeometry: If tooth or planet counts are invalid
        DegenerateRatio: If input_speed is not a finite number
    """
    case = stage.kinematic_case()
    check_planetary_geometry(stage)
    _check_speed(input_speed)

    gear_ratio = _RATIO_FORMULAS[case](stage.sun_teeth, stage.ring_teeth)
    output_speed = input_speed * gear_ratio

    logger.debug(
        f"Stage {stage_index + 1}: {case.description}, K={stage.internal_ratio:.3f}, "
        f"ratio={gear_ratio:.6f}, out={output_speed:.6f}"
    )

    return StageKinematicResult(
        stage_index=stage_index,
        case=case,
        input_speed=input_speed,
        output_speed=output_speed,
        gear_ratio=gear_ratio,
        internal_ratio=stage.internal_ratio,
    )


def solve_chain(stages: Sequence[PlanetaryStage], input_speed: float) -> ChainResult:
    """
    Solve planetary stages in series.

    Each stage's output speed drives the next stage. The total ratio is the
    product of the stage ratios, so it stays correct when an intermediate
    speed is zero.

    Raises:
        EmptyChain: If no stages are given
        GearTrainError: Any stage failure, tagged with that stage's index
    """
    if not stages:
        raise EmptyChain("At least one planetary stage is required")

    results = []
    total_ratio = 1.0
    speed = input_speed

    for index, stage in enumerate(stages):
        try:
            result = solve_stage(stage, speed, stage_index=index)
        except GearTrainError as e:
            raise e.at_stage(index) from e
        results.append(result)
        total_ratio *= result.gear_ratio
        speed = result.output_speed

    logger.debug(f"Planetary chain: {len(results)} stage(s), total ratio {total_ratio:.6f}")

    return ChainResult(
        total_ratio=total_ratio,
        input_speed=input_speed,
        final_output_speed=speed,
        stages=tuple(results),
    )


# =============================================================================
# Simple gear chains
# =============================================================================

def solve_simple_chain(pairs: Sequence[GearPair], input_speed: float) -> SimpleChainResult:
    """
    Solve a chain of fixed-axis gear pairs.

    Each pair contributes driving_teeth / driven_teeth; the output speed is
    input_speed times the product.

    Raises:
        EmptyChain: If no pairs are given
        InvalidGeometry: If any tooth count is not positive (tagged with its stage)
        DegenerateRatio: If input_speed is not a finite number
    """
    if not pairs:
        raise EmptyChain("At least one gear pair is required")
    _check_speed(input_speed)

    ratios = []
    for index, pair in enumerate(pairs):
        try:
            _check_teeth("Driving teeth", pair.driving_teeth)
            _check_teeth("Driven teeth", pair.driven_teeth)
        except GearTrainError as e:
            raise e.at_stage(index) from e
        ratios.append(pair.ratio)

    total_ratio = 1.0
    for ratio in ratios:
        total_ratio *= ratio

    logger.debug(f"Simple chain: {len(ratios)} pair(s), total ratio {total_ratio:.6f}")

    return SimpleChainResult(
        total_ratio=total_ratio,
        stage_ratios=tuple(ratios),
        output_speed=input_speed * total_ratio,
    )
