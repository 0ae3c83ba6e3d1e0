"""
Two-stage planetary reducer with reflected inertia.

Solves the example design, prints per-stage speeds and the equivalent
inertia seen by the motor, then writes the design to a JSON file that
`geartrain file` can read back.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from geartrain.calculator import analyze_planetary, to_summary, validate_planetary_stages
from geartrain.io import GearTrainDesign, create_example_planetary_design, save_design_json

print("="*70)
print("TWO-STAGE PLANETARY REDUCER")
print("="*70)
print()

design = GearTrainDesign.model_validate(create_example_planetary_design())
stages = design.to_planetary_stages()

print("Stages:")
for index, stage in enumerate(stages):
    print(f"  {index + 1}: sun {stage.sun_teeth:g}, planet {stage.planet_teeth:g}, "
          f"ring {stage.ring_teeth:g}, {stage.num_planets} planets")
print()

analysis = analyze_planetary(stages, design.input_speed_rpm, design.to_stage_inertias())
print(to_summary(analysis))
print()

validation = validate_planetary_stages(stages)
if validation.messages:
    print("Checks:")
    for msg in validation.messages:
        print(f"  {msg.severity.value.upper()} stage {msg.stage_index + 1}: {msg.message}")
else:
    print("Checks: all passed")
print()

output_file = "two_stage_reducer.json"
save_design_json(design, output_file)
print(f"Saved design to {output_file}")
print(f"Try: geartrain file {output_file} --inertia --format markdown")
