"""
Gear Train Calculator - Validation Rules

Advisory engineering checks for gear chains. These never raise for
engineering concerns; they report findings with a severity so a front end
can show them next to the calculated result. Hard input errors (non-positive
teeth, invalid role assignment) are raised by the solvers in core.py.

Planetary rules follow common design practice:
- Coaxial condition: z_ring = z_sun + 2 * z_planet
- Equal spacing (assembly) condition: (z_sun + z_ring) divisible by planet count
- Neighbour condition: adjacent planet tips must not touch
"""

from dataclasses import dataclass, field
from enum import Enum
from math import inf, isfinite, pi, sin
from typing import List, Optional, Sequence

from ..enums import Role
from .constants import INTEGER_TEETH_TOLERANCE, PLANET_ADDENDUM_TEETH, SINGLE_PAIR_RATIO_MAX
from .core import GearPair, PlanetaryStage, _check_teeth, check_planetary_geometry
from .errors import GearTrainError


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None
    stage_index: Optional[int] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def _result(messages: List[ValidationMessage]) -> ValidationResult:
    has_errors = any(m.severity == Severity.ERROR for m in messages)
    return ValidationResult(valid=not has_errors, messages=messages)


def _is_whole(value: float) -> bool:
    return isfinite(value) and abs(value - round(value)) < INTEGER_TEETH_TOLERANCE


def validate_planetary_stages(stages: Sequence[PlanetaryStage]) -> ValidationResult:
    """
    Check planetary stages against engineering rules.

    Stages with invalid topology or geometry are reported as errors rather
    than raised, so the whole chain can be reviewed at once.
    """
    messages: List[ValidationMessage] = []

    for index, stage in enumerate(stages):
        stage_messages = _validate_stage_inputs(stage)
        if not stage_messages:
            stage_messages.extend(_validate_ring_size(stage))
            stage_messages.extend(_validate_non_integer_teeth(stage))
            stage_messages.extend(_validate_coaxial(stage))
            stage_messages.extend(_validate_assembly(stage))
            stage_messages.extend(_validate_planet_interference(stage))
            stage_messages.extend(_validate_direction(stage))
        for message in stage_messages:
            message.stage_index = index
        messages.extend(stage_messages)

    return _result(messages)


def validate_simple_chain(pairs: Sequence[GearPair]) -> ValidationResult:
    """Check simple gear pairs against engineering rules."""
    messages: List[ValidationMessage] = []

    for index, pair in enumerate(pairs):
        pair_messages = _validate_pair_inputs(pair)
        if not pair_messages:
            if not (_is_whole(pair.driving_teeth) and _is_whole(pair.driven_teeth)):
                pair_messages.append(ValidationMessage(
                    severity=Severity.INFO,
                    code="NON_INTEGER_TEETH",
                    message="Tooth counts are not whole numbers",
                    suggestion=None
                ))
            ratio = pair.ratio
            # Underflow to 0 or overflow to inf is an unbounded reduction
            reduction = max(ratio, 1.0 / ratio) if 0 < ratio < inf else inf
            if reduction > SINGLE_PAIR_RATIO_MAX:
                pair_messages.append(ValidationMessage(
                    severity=Severity.WARNING,
                    code="SINGLE_PAIR_RATIO_HIGH",
                    message=f"Single mesh ratio {reduction:.1f}:1 exceeds {SINGLE_PAIR_RATIO_MAX:.0f}:1",
                    suggestion="Split the ratio across two stages"
                ))
        for message in pair_messages:
            message.stage_index = index
        messages.extend(pair_messages)

    return _result(messages)


def _validate_pair_inputs(pair: GearPair) -> List[ValidationMessage]:
    """Turn tooth count errors into ERROR messages"""
    try:
        _check_teeth("Driving teeth", pair.driving_teeth)
        _check_teeth("Driven teeth", pair.driven_teeth)
    except GearTrainError as e:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code=e.code,
            message=e.detail,
            suggestion="Enter positive tooth counts for both gears"
        )]
    return []


def _validate_stage_inputs(stage: PlanetaryStage) -> List[ValidationMessage]:
    """Turn hard solver errors into ERROR messages"""
    try:
        stage.kinematic_case()
    except GearTrainError as e:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code=e.code,
            message=e.detail,
            suggestion="Assign one member as input, one as output and one as fixed"
        )]

    try:
        check_planetary_geometry(stage)
    except GearTrainError as e:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code=e.code,
            message=e.detail,
            suggestion="Tooth counts must be positive and at least one planet is required"
        )]
    return []


def _validate_ring_size(stage: PlanetaryStage) -> List[ValidationMessage]:
    if stage.ring_teeth > stage.sun_teeth:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="RING_NOT_LARGER_THAN_SUN",
        message=f"Ring ({stage.ring_teeth:g} teeth) is not larger than sun ({stage.sun_teeth:g} teeth)",
        suggestion="The internal ring gear must have more teeth than the sun"
    )]


def _validate_non_integer_teeth(stage: PlanetaryStage) -> List[ValidationMessage]:
    teeth = [stage.sun_teeth, stage.ring_teeth]
    if stage.planet_teeth is not None:
        teeth.append(stage.planet_teeth)
    if all(_is_whole(t) for t in teeth):
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="NON_INTEGER_TEETH",
        message="Tooth counts are not whole numbers",
        suggestion=None
    )]


def _validate_coaxial(stage: PlanetaryStage) -> List[ValidationMessage]:
    """Sun, planet and ring must share a centre distance"""
    if stage.planet_teeth is None:
        return []
    expected_ring = stage.sun_teeth + 2 * stage.planet_teeth
    if abs(stage.ring_teeth - expected_ring) < INTEGER_TEETH_TOLERANCE:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="COAXIAL_CONDITION",
        message=f"Ring ({stage.ring_teeth:g}) ≠ Sun ({stage.sun_teeth:g}) + 2×Planet "
                f"({stage.planet_teeth:g}) = {expected_ring:g}",
        suggestion="Adjust teeth or use profile shift so the planets mesh with both sun and ring"
    )]


def _validate_assembly(stage: PlanetaryStage) -> List[ValidationMessage]:
    """Equally spaced planets need (z_sun + z_ring) divisible by the planet count"""
    total = stage.sun_teeth + stage.ring_teeth
    if not _is_whole(total):
        return []
    if round(total) % stage.num_planets == 0:
        return []
    return [ValidationMessage(
        severity=Severity.WARNING,
        code="ASSEMBLY_CONDITION",
        message=f"(Sun + Ring) = {round(total)} not divisible by {stage.num_planets} planets",
        suggestion="Planets cannot be equally spaced; change tooth counts or planet count"
    )]


def _validate_planet_interference(stage: PlanetaryStage) -> List[ValidationMessage]:
    """
    Adjacent planets must clear each other.

    With unit module the sun-planet centre distance is (z_s + z_p) / 2, the
    planet spacing is 2 * a * sin(pi / N), and the planet tip diameter is
    z_p + 2.
    """
    if stage.planet_teeth is None or stage.num_planets < 2:
        return []
    spacing = (stage.sun_teeth + stage.planet_teeth) * sin(pi / stage.num_planets)
    tip_diameter = stage.planet_teeth + PLANET_ADDENDUM_TEETH
    if spacing > tip_diameter:
        return []
    return [ValidationMessage(
        severity=Severity.ERROR,
        code="PLANET_INTERFERENCE",
        message=f"{stage.num_planets} planets overlap (spacing {spacing:.1f} modules, "
                f"tip diameter {tip_diameter:.1f} modules)",
        suggestion="Reduce the number of planets or use a larger sun gear"
    )]


def _validate_direction(stage: PlanetaryStage) -> List[ValidationMessage]:
    if stage.carrier is not Role.FIXED:
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="DIRECTION_REVERSAL",
        message="Carrier is fixed: output turns opposite to input",
        suggestion=None
    )]
