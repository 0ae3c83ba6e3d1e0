"""
Stage list builders for front ends.

The web calculator form grows extra "planet rows" under one main planetary
stage. Each extra row is treated as its own stage whose sun gear is that
row's planet and whose ring is the main ring. That is a UI shorthand, not a
kinematic law, so it lives here and produces ordinary independent stages
for the calculator.
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from ..calculator.core import PlanetaryStage
from ..calculator.inertia import StageInertia


def build_half_stage_chain(
    main_stage: PlanetaryStage,
    extra_planet_teeth: Sequence[float],
    extra_num_planets: Optional[Sequence[Optional[int]]] = None
) -> List[PlanetaryStage]:
    """
    Expand a main stage plus extra planet rows into a stage list.

    Args:
        main_stage: First (full) planetary stage
        extra_planet_teeth: Planet teeth for each extra row
        extra_num_planets: Optional planet count per extra row; None entries
            (or a missing list) reuse the main stage's count

    Returns:
        [main_stage, half_stage_1, ...] with roles and ring shared from main_stage
    """
    if extra_num_planets is not None and len(extra_num_planets) != len(extra_planet_teeth):
        raise ValueError("extra_num_planets must match extra_planet_teeth in length")

    stages = [main_stage]
    for row, planet_teeth in enumerate(extra_planet_teeth):
        num_planets = main_stage.num_planets
        if extra_num_planets is not None and extra_num_planets[row] is not None:
            num_planets = extra_num_planets[row]
        stages.append(replace(
            main_stage,
            sun_teeth=planet_teeth,
            planet_teeth=planet_teeth,
            num_planets=num_planets,
        ))
    return stages


def build_half_stage_inertias(
    main_inertia: StageInertia,
    extra_planet_inertias: Sequence[float]
) -> List[StageInertia]:
    """
    Inertia list matching build_half_stage_chain.

    Extra rows reuse the main ring and carrier; the row's planet inertia
    stands in for both its sun and its planets.
    """
    inertias = [main_inertia]
    for j_planet in extra_planet_inertias:
        inertias.append(StageInertia(
            j_sun=j_planet,
            j_planet_each=j_planet,
            j_ring=main_inertia.j_ring,
            j_carrier=main_inertia.j_carrier,
        ))
    return inertias
