"""
JSON input/output for gear train designs.

A design file holds the input speed and either a list of simple gear pairs
or a list of planetary stages (optionally with component inertias).

Uses Pydantic for structural validation and enum coercion. Engineering
validity (positive teeth, valid role permutations) is left to the
calculator so errors are reported against the offending stage.
"""

import json
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..calculator.constants import DEFAULT_NUM_PLANETS
from ..calculator.core import GearPair, PlanetaryStage
from ..calculator.inertia import StageInertia
from ..enums import Role
from .schema import SCHEMA_VERSION


class GearPairParams(BaseModel):
    """Simple stage: driving and driven tooth counts."""
    model_config = ConfigDict(extra='ignore')

    driving_teeth: float
    driven_teeth: float

    def to_gear_pair(self) -> GearPair:
        return GearPair(driving_teeth=self.driving_teeth, driven_teeth=self.driven_teeth)


class StageInertiaParams(BaseModel):
    """Component inertias of one planetary stage (kg·m²)."""
    model_config = ConfigDict(extra='ignore')

    j_sun: float = 0.0
    j_planet_each: float = 0.0
    j_ring: float = 0.0
    j_carrier: float = 0.0

    def to_stage_inertia(self) -> StageInertia:
        return StageInertia(
            j_sun=self.j_sun,
            j_planet_each=self.j_planet_each,
            j_ring=self.j_ring,
            j_carrier=self.j_carrier,
        )


class PlanetaryStageParams(BaseModel):
    """Planetary stage: role per member, tooth counts and planet count."""
    model_config = ConfigDict(extra='ignore')

    sun: Role
    carrier: Role
    ring: Role
    sun_teeth: float
    ring_teeth: float
    planet_teeth: Optional[float] = None
    num_planets: int = DEFAULT_NUM_PLANETS
    inertia: Optional[StageInertiaParams] = None

    @field_validator('sun', 'carrier', 'ring', mode='before')
    @classmethod
    def coerce_role(cls, v):
        if isinstance(v, str):
            return Role(v.lower())
        return v

    def to_planetary_stage(self) -> PlanetaryStage:
        return PlanetaryStage(
            sun=self.sun,
            carrier=self.carrier,
            ring=self.ring,
            sun_teeth=self.sun_teeth,
            ring_teeth=self.ring_teeth,
            planet_teeth=self.planet_teeth,
            num_planets=self.num_planets,
        )


class GearTrainDesign(BaseModel):
    """Complete gear train design file."""
    model_config = ConfigDict(extra='ignore')

    schema_version: str = SCHEMA_VERSION
    input_speed_rpm: float
    simple_stages: List[GearPairParams] = Field(default_factory=list)
    planetary_stages: List[PlanetaryStageParams] = Field(default_factory=list)

    @model_validator(mode='after')
    def check_one_chain_type(self):
        if self.simple_stages and self.planetary_stages:
            raise ValueError("A design holds either simple_stages or planetary_stages, not both")
        if not self.simple_stages and not self.planetary_stages:
            raise ValueError("A design needs simple_stages or planetary_stages")
        return self

    @property
    def is_planetary(self) -> bool:
        return bool(self.planetary_stages)

    @property
    def has_inertia(self) -> bool:
        """True if any planetary stage carries inertia data"""
        return any(stage.inertia is not None for stage in self.planetary_stages)

    def to_gear_pairs(self) -> List[GearPair]:
        return [pair.to_gear_pair() for pair in self.simple_stages]

    def to_planetary_stages(self) -> List[PlanetaryStage]:
        return [stage.to_planetary_stage() for stage in self.planetary_stages]

    def to_stage_inertias(self) -> List[StageInertia]:
        """Inertias per stage; stages without data count as massless."""
        return [
            stage.inertia.to_stage_inertia() if stage.inertia else StageInertia()
            for stage in self.planetary_stages
        ]


def load_design_json(filepath: Union[str, Path]) -> GearTrainDesign:
    """
    Load a gear train design from JSON.

    Args:
        filepath: Path to the design file

    Returns:
        GearTrainDesign with all parameters

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If JSON is missing required fields
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Design file not found: {filepath}")

    with open(filepath, 'r') as f:
        data = json.load(f)

    # Some exports wrap the design
    if 'design' in data:
        data = data['design']

    return GearTrainDesign.model_validate(data)


def save_design_json(design: GearTrainDesign, filepath: Union[str, Path]) -> None:
    """
    Save a gear train design to JSON.

    Empty chain lists and unset optional fields are omitted.
    """
    filepath = Path(filepath)

    data = design.model_dump(mode='json', exclude_none=True)
    data['schema_version'] = SCHEMA_VERSION
    for key in ('simple_stages', 'planetary_stages'):
        if not data.get(key):
            data.pop(key, None)

    with open(filepath, 'w') as f:
        json.dump(data, f, indent=2)
