"""
Gear Train Calculator - Reflected Inertia

Moment of inertia of planetary chains referred to the input shaft.

A component turning at ``r`` times the input speed stores the kinetic
energy of an inertia ``J * r**2`` on the input shaft. Each stage sums its
input member, its output member reflected through the stage ratio, and the
planet set reflected through the carrier's speed ratio. Fixed members do
not turn and contribute nothing. Stage totals are then reflected through
the ratio accumulated by all upstream stages.

The planet term lumps every planet at the carrier speed and ignores the
spin of each planet about its own axis. It is an approximation.
"""

import logging
from dataclasses import dataclass
from math import isfinite
from typing import Optional, Sequence, Tuple

from ..enums import Member, Role
from .core import (
    ChainResult,
    PlanetaryStage,
    check_planetary_geometry,
    solve_chain,
    stage_gear_ratio,
)
from .errors import DegenerateRatio, EmptyChain, GearTrainError, InvalidGeometry, LengthMismatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StageInertia:
    """Component inertias of one planetary stage (kg·m²)."""
    j_sun: float = 0.0
    j_planet_each: float = 0.0   # One planet; the stage multiplies by num_planets
    j_ring: float = 0.0
    j_carrier: float = 0.0

    def of(self, member: Member) -> float:
        return {
            Member.SUN: self.j_sun,
            Member.CARRIER: self.j_carrier,
            Member.RING: self.j_ring,
        }[member]


@dataclass(frozen=True)
class StageInertiaResult:
    """Equivalent inertia of a single stage at that stage's input member."""
    j_input: float
    j_output_reflected: float
    j_planets_reflected: float

    @property
    def j_stage_equivalent(self) -> float:
        return self.j_input + self.j_output_reflected + self.j_planets_reflected


@dataclass(frozen=True)
class InertiaBreakdown:
    """One stage's contribution to the inertia seen at the chain input."""
    stage_index: int
    j_input: float
    j_output_reflected: float
    j_planets_reflected: float
    j_stage_equivalent: float
    accumulated_ratio_before_stage: float
    j_stage_reflected_to_input: float


@dataclass(frozen=True)
class InertiaResult:
    """Total inertia reflected to the chain input."""
    j_total: float
    stages: Tuple[InertiaBreakdown, ...]


@dataclass(frozen=True)
class PlanetaryAnalysis:
    """Kinematics plus optional inertia for one planetary chain."""
    chain: ChainResult
    inertia: Optional[InertiaResult] = None


def reflect_inertia(inertia: float, ratio: float) -> float:
    """J_reflected = J * ratio²"""
    return inertia * ratio * ratio


def _check_inertia(inertia: StageInertia) -> None:
    for name in ("j_sun", "j_planet_each", "j_ring", "j_carrier"):
        value = getattr(inertia, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidGeometry(f"{name} must be a number, got {value!r}")
        if not isfinite(value) or value < 0:
            raise InvalidGeometry(f"{name} must be a non-negative number, got {value}")


def solve_stage_inertia(
    stage: PlanetaryStage,
    inertia: StageInertia,
    gear_ratio: Optional[float] = None
) -> StageInertiaResult:
    """
    Equivalent inertia of one stage, referred to its own input member.

    Args:
        stage: Stage topology and planet count
        inertia: Component inertias
        gear_ratio: Stage speed ratio (output / input). Derived from the
            stage geometry when omitted.

    Raises:
        InvalidTopology: If the roles are not a permutation of input/output/fixed
        InvalidGeometry: If tooth counts or inertias are invalid
        DegenerateRatio: If gear_ratio is not finite
    """
    case = stage.kinematic_case()
    check_planetary_geometry(stage)
    _check_inertia(inertia)
    if gear_ratio is None:
        gear_ratio = stage_gear_ratio(stage)
    if not isfinite(gear_ratio):
        raise DegenerateRatio(f"Gear ratio {gear_ratio} cannot be used for inertia reflection")

    j_input = inertia.of(case.input)
    j_output_reflected = reflect_inertia(inertia.of(case.output), gear_ratio)

    if stage.carrier is Role.INPUT:
        carrier_speed_ratio = 1.0
    elif stage.carrier is Role.OUTPUT:
        carrier_speed_ratio = gear_ratio
    else:
        carrier_speed_ratio = 0.0

    j_planets_total = inertia.j_planet_each * stage.num_planets
    j_planets_reflected = reflect_inertia(j_planets_total, carrier_speed_ratio)

    return StageInertiaResult(
        j_input=j_input,
        j_output_reflected=j_output_reflected,
        j_planets_reflected=j_planets_reflected,
    )


def solve_chain_inertia(
    stages: Sequence[PlanetaryStage],
    per_stage_ratios: Sequence[float],
    inertias: Sequence[StageInertia]
) -> InertiaResult:
    """
    Total inertia of a planetary chain reflected to the chain input.

    A stage's equivalent inertia is weighted by the square of the ratio
    accumulated *before* it; its own ratio only affects downstream stages.

    Args:
        stages: Planetary stages in drive order
        per_stage_ratios: Each stage's gear ratio (from solve_chain)
        inertias: Component inertias, one per stage

    Raises:
        EmptyChain: If no stages are given
        LengthMismatch: If ratios or inertias do not match the stage count
        GearTrainError: Any stage failure, tagged with that stage's index
    """
    if not stages:
        raise EmptyChain("At least one planetary stage is required for inertia calculation")
    if len(inertias) != len(stages):
        raise LengthMismatch(
            f"Got inertia data for {len(inertias)} stage(s) but the chain has {len(stages)}"
        )
    if len(per_stage_ratios) != len(stages):
        raise LengthMismatch(
            f"Got {len(per_stage_ratios)} stage ratio(s) but the chain has {len(stages)}"
        )

    breakdowns = []
    j_total = 0.0
    accumulated_ratio = 1.0

    for index, (stage, ratio, inertia) in enumerate(zip(stages, per_stage_ratios, inertias)):
        try:
            stage_result = solve_stage_inertia(stage, inertia, gear_ratio=ratio)
        except GearTrainError as e:
            raise e.at_stage(index) from e

        j_equivalent = stage_result.j_stage_equivalent
        j_reflected = reflect_inertia(j_equivalent, accumulated_ratio)
        breakdowns.append(InertiaBreakdown(
            stage_index=index,
            j_input=stage_result.j_input,
            j_output_reflected=stage_result.j_output_reflected,
            j_planets_reflected=stage_result.j_planets_reflected,
            j_stage_equivalent=j_equivalent,
            accumulated_ratio_before_stage=accumulated_ratio,
            j_stage_reflected_to_input=j_reflected,
        ))
        j_total += j_reflected

        logger.debug(
            f"Stage {index + 1}: J_eq={j_equivalent:.8f} through ratio "
            f"{accumulated_ratio:.6f} -> {j_reflected:.8f} kg·m²"
        )
        accumulated_ratio *= ratio

    return InertiaResult(j_total=j_total, stages=tuple(breakdowns))


def analyze_planetary(
    stages: Sequence[PlanetaryStage],
    input_speed: float,
    inertias: Optional[Sequence[StageInertia]] = None
) -> PlanetaryAnalysis:
    """
    Solve a planetary chain and, when inertias are given, its reflected inertia.

    Either everything succeeds or an error is raised; no partial results.
    """
    chain = solve_chain(stages, input_speed)
    if inertias is None:
        return PlanetaryAnalysis(chain=chain)

    ratios = [result.gear_ratio for result in chain.stages]
    inertia = solve_chain_inertia(stages, ratios, inertias)
    logger.info(f"Equivalent inertia at input: {inertia.j_total:.8f} kg·m²")
    return PlanetaryAnalysis(chain=chain, inertia=inertia)
