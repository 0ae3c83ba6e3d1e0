"""
JavaScript-Python bridge for Pyodide.

Provides a single entry point for the web calculator. All inputs are
validated via Pydantic models before processing, and every failure comes
back as a JSON error payload instead of an exception.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from geartrain.calculator.js_bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import TypedDict

from ..enums import Member
from .constants import DEFAULT_NUM_PLANETS
from .core import GearPair, PlanetaryStage, solve_simple_chain
from .errors import GearTrainError
from .inertia import StageInertia, analyze_planetary
from .output import format_ratio, to_json, to_markdown, to_summary
from .validation import validate_planetary_stages, validate_simple_chain

logger = logging.getLogger(__name__)


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to JavaScript."""
    severity: str  # "error", "warning", "info"
    code: str  # e.g., "ASSEMBLY_CONDITION"
    message: str
    suggestion: Optional[str]
    stage: Optional[int]  # 1-based


# ============================================================================
# Input Models (Pydantic validation for JS inputs)
# ============================================================================

class PairInputs(BaseModel):
    """One row of the simple gear chain form."""
    model_config = ConfigDict(extra='ignore')

    driving_teeth: float
    driven_teeth: float


class InertiaInputs(BaseModel):
    """Inertia panel of one planetary stage (kg·m²). Blank fields count as 0."""
    model_config = ConfigDict(extra='ignore')

    j_sun: float = 0.0
    j_planet: float = 0.0
    j_ring: float = 0.0
    j_carrier: float = 0.0

    @field_validator('j_sun', 'j_planet', 'j_ring', 'j_carrier', mode='before')
    @classmethod
    def blank_is_zero(cls, v):
        if v is None or v == '':
            return 0.0
        return v


class StageInputs(BaseModel):
    """One planetary stage block of the form."""
    model_config = ConfigDict(extra='ignore')

    sun_teeth: float
    ring_teeth: float
    planet_teeth: Optional[float] = None
    num_planets: int = DEFAULT_NUM_PLANETS
    inertia: Optional[InertiaInputs] = None


class CalculatorInputs(BaseModel):
    """
    All inputs from the calculator UI.

    Planetary roles are chosen once for the whole chain: the UI picks the
    input and output members and the remaining member is fixed.
    """
    model_config = ConfigDict(extra='ignore')

    mode: str = "simple"  # "simple" | "planetary"
    input_speed: float

    # Simple mode
    pairs: List[PairInputs] = Field(default_factory=list)

    # Planetary mode
    input_member: str = "sun"
    output_member: str = "carrier"
    stages: List[StageInputs] = Field(default_factory=list)
    inertia_enabled: bool = False

    @field_validator('mode', 'input_member', 'output_member', mode='before')
    @classmethod
    def normalize_choice(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate() - matches what JS expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None
    error_code: Optional[str] = None
    stage: Optional[int] = None  # 1-based stage that failed

    # Result data (JSON string for JS to parse)
    result_json: Optional[str] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None
    ratio_display: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from JavaScript.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        if inputs.mode == 'simple':
            output = _calculate_simple(inputs)
        elif inputs.mode == 'planetary':
            output = _calculate_planetary(inputs)
        else:
            raise ValueError(f"Unknown mode: {inputs.mode}")

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except ValidationError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid input: {e.errors()[0]['msg']} ({'.'.join(str(p) for p in e.errors()[0]['loc'])})",
            error_code="INVALID_INPUT"
        ).model_dump_json()

    except GearTrainError as e:
        logger.info(f"Calculation rejected: {e}")
        return CalculatorOutput(
            success=False,
            error=str(e),
            error_code=e.code,
            stage=None if e.stage_index is None else e.stage_index + 1
        ).model_dump_json()

    except ValueError as e:
        return CalculatorOutput(
            success=False,
            error=str(e)
        ).model_dump_json()


def _messages(validation) -> List[ValidationMessageDict]:
    return [
        {
            'severity': m.severity.value,
            'code': m.code,
            'message': m.message,
            'suggestion': m.suggestion,
            'stage': None if m.stage_index is None else m.stage_index + 1,
        }
        for m in validation.messages
    ]


def _calculate_simple(inputs: CalculatorInputs) -> CalculatorOutput:
    pairs = [GearPair(p.driving_teeth, p.driven_teeth) for p in inputs.pairs]
    result = solve_simple_chain(pairs, inputs.input_speed)
    validation = validate_simple_chain(pairs)

    return CalculatorOutput(
        success=True,
        result_json=to_json(result, validation),
        summary=to_summary(result, input_speed=inputs.input_speed, pairs=pairs),
        markdown=to_markdown(result, validation),
        ratio_display=format_ratio(result.total_ratio),
        valid=validation.valid,
        messages=_messages(validation),
    )


def _member(name: str, field: str) -> Member:
    try:
        return Member(name)
    except ValueError:
        raise ValueError(f"{field} must be sun, carrier or ring, got {name!r}") from None


def _calculate_planetary(inputs: CalculatorInputs) -> CalculatorOutput:
    input_member = _member(inputs.input_member, "input_member")
    output_member = _member(inputs.output_member, "output_member")

    stages = [
        PlanetaryStage.from_input_output(
            input_member,
            output_member,
            sun_teeth=s.sun_teeth,
            ring_teeth=s.ring_teeth,
            planet_teeth=s.planet_teeth,
            num_planets=s.num_planets,
        )
        for s in inputs.stages
    ]

    inertias = None
    if inputs.inertia_enabled:
        inertias = [
            StageInertia(
                j_sun=s.inertia.j_sun,
                j_planet_each=s.inertia.j_planet,
                j_ring=s.inertia.j_ring,
                j_carrier=s.inertia.j_carrier,
            ) if s.inertia else StageInertia()
            for s in inputs.stages
        ]

    analysis = analyze_planetary(stages, inputs.input_speed, inertias)
    validation = validate_planetary_stages(stages)

    return CalculatorOutput(
        success=True,
        result_json=to_json(analysis, validation),
        summary=to_summary(analysis),
        markdown=to_markdown(analysis, validation),
        ratio_display=format_ratio(analysis.chain.total_ratio),
        valid=validation.valid,
        messages=_messages(validation),
    )
