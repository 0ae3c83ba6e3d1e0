"""Output formatters for gear train results.

Converts calculator results to JSON, Markdown and plain-text summaries, and
implements the ratio display policy: a decimal ratio alongside an "N:1"
form, where reductions are shown by their reciprocal.

JSON conversion uses Pydantic's TypeAdapter with mode='json', which handles
the result dataclasses and turns enums into their string values.
"""

import json
from typing import Optional, Sequence, Union

from pydantic import TypeAdapter

from ..io.schema import SCHEMA_VERSION
from .constants import (
    INERTIA_DECIMALS,
    RATIO_DECIMALS,
    RATIO_TEXT_DECIMALS,
    SPEED_DECIMALS,
    ZERO_RATIO_TOLERANCE,
)
from .core import ChainResult, GearPair, SimpleChainResult
from .inertia import InertiaResult, PlanetaryAnalysis
from .validation import ValidationResult

Result = Union[SimpleChainResult, ChainResult, PlanetaryAnalysis]

_ANALYSIS_ADAPTER = TypeAdapter(PlanetaryAnalysis)


def format_ratio_text(ratio: float, decimals: int = RATIO_TEXT_DECIMALS) -> str:
    """
    Render a ratio as "N:1".

    Magnitudes >= 1 print as themselves, smaller ones as their reciprocal
    (a 0.25 reduction is "4.000:1"). The sign is dropped; near-zero ratios
    print as "0:1".
    """
    magnitude = abs(ratio)
    if magnitude < ZERO_RATIO_TOLERANCE:
        return "0:1"
    if magnitude >= 1:
        return f"{magnitude:.{decimals}f}:1"
    return f"{1 / magnitude:.{decimals}f}:1"


def format_ratio(ratio: float, decimals: int = RATIO_DECIMALS) -> str:
    """Decimal ratio followed by its N:1 form, e.g. '-0.333333 / 3.000:1'"""
    return f"{ratio:.{decimals}f} / {format_ratio_text(ratio)}"


def _as_analysis(result: Result) -> Optional[PlanetaryAnalysis]:
    if isinstance(result, PlanetaryAnalysis):
        return result
    if isinstance(result, ChainResult):
        return PlanetaryAnalysis(chain=result)
    return None


def _validation_to_dict(validation: ValidationResult) -> dict:
    return {
        "valid": validation.valid,
        "messages": [
            {
                "severity": m.severity.value,
                "code": m.code,
                "message": m.message,
                "suggestion": m.suggestion,
                "stage": None if m.stage_index is None else m.stage_index + 1,
            }
            for m in validation.messages
        ],
    }


def to_dict(result: Result, validation: Optional[ValidationResult] = None) -> dict:
    """Convert a calculator result to a JSON-compatible dict."""
    analysis = _as_analysis(result)
    if analysis is None:
        data = {
            "type": "simple",
            "total_ratio": result.total_ratio,
            "stage_ratios": list(result.stage_ratios),
            "output_speed": result.output_speed,
        }
        total_ratio = result.total_ratio
    else:
        data = {"type": "planetary"}
        data.update(_ANALYSIS_ADAPTER.dump_python(analysis, mode='json'))
        for stage_dict, stage in zip(data["chain"]["stages"], analysis.chain.stages):
            stage_dict["ratio_type"] = stage.ratio_type
        if data.get("inertia") is None:
            data.pop("inertia", None)
        total_ratio = analysis.chain.total_ratio

    data["ratio_display"] = format_ratio(total_ratio)
    data["schema_version"] = SCHEMA_VERSION

    if validation is not None:
        data["validation"] = _validation_to_dict(validation)

    return data


def to_json(
    result: Result,
    validation: Optional[ValidationResult] = None,
    indent: int = 2
) -> str:
    """Convert a calculator result to a JSON string.

    Args:
        result: Result from solve_simple_chain, solve_chain or analyze_planetary
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)
    """
    return json.dumps(to_dict(result, validation), indent=indent)


def _inertia_lines(inertia: InertiaResult) -> list:
    lines = [
        "",
        "=== INERTIA ANALYSIS ===",
        f"Total Equivalent Inertia (reflected to input): "
        f"{inertia.j_total:.{INERTIA_DECIMALS}f} kg·m²",
        "",
    ]
    for stage in inertia.stages:
        lines.extend([
            f"Stage {stage.stage_index + 1} contribution:",
            f"  J_input component: {stage.j_input:.{INERTIA_DECIMALS}f} kg·m²",
            f"  J_output reflected: {stage.j_output_reflected:.{INERTIA_DECIMALS}f} kg·m²",
            f"  J_planets reflected: {stage.j_planets_reflected:.{INERTIA_DECIMALS}f} kg·m²",
            f"  Stage equivalent: {stage.j_stage_equivalent:.{INERTIA_DECIMALS}f} kg·m²",
            f"  Reflected through ratio {stage.accumulated_ratio_before_stage:.{RATIO_DECIMALS}f}: "
            f"{stage.j_stage_reflected_to_input:.{INERTIA_DECIMALS}f} kg·m²",
            "",
        ])
    return lines


def to_summary(
    result: Result,
    input_speed: Optional[float] = None,
    pairs: Optional[Sequence[GearPair]] = None
) -> str:
    """Convert a calculator result to a formatted text summary.

    Args:
        result: Result from solve_simple_chain, solve_chain or analyze_planetary
        input_speed: Input speed (simple chains only; planetary results carry it)
        pairs: Gear pairs (simple chains only) for per-stage tooth counts

    Returns:
        Multi-line summary string
    """
    analysis = _as_analysis(result)

    if analysis is None:
        lines = ["═══ Simple Gear Chain ═══"]
        if input_speed is not None:
            lines.append(f"Input Speed: {input_speed:g} rpm")
        lines.append("")
        for index, ratio in enumerate(result.stage_ratios):
            if pairs is not None:
                pair = pairs[index]
                lines.append(
                    f"Stage {index + 1}: {pair.driving_teeth:g}/{pair.driven_teeth:g} = {ratio:.4f}"
                )
            else:
                lines.append(f"Stage {index + 1}: {ratio:.4f}")
        lines.extend([
            "",
            f"Total Ratio: {format_ratio(result.total_ratio)}",
        ])
        if input_speed is not None:
            lines.append(
                f"Output Speed = {input_speed:g} × {result.total_ratio:.{RATIO_DECIMALS}f} "
                f"= {result.output_speed:.1f} rpm"
            )
        else:
            lines.append(f"Output Speed: {result.output_speed:.1f} rpm")
        return "\n".join(lines)

    chain = analysis.chain
    lines = [
        "═══ Planetary Gear Chain ═══",
        f"Input Speed: {chain.input_speed:g} rpm",
        "",
    ]
    for stage in chain.stages:
        lines.append(
            f"Stage {stage.stage_index + 1}: K={stage.internal_ratio:.3f}, "
            f"type={stage.ratio_type}, gearRatio={stage.gear_ratio:.{RATIO_DECIMALS}f}, "
            f"out={stage.output_speed:.{SPEED_DECIMALS}f}"
        )
    lines.extend([
        "",
        f"Total combined gear ratio (product of stage ratios): {format_ratio(chain.total_ratio)}",
        f"Internal ratios: {', '.join(f'{s.internal_ratio:.3f}' for s in chain.stages)}",
        f"Final output speed: {chain.final_output_speed:.{SPEED_DECIMALS}f} rpm",
    ])
    if analysis.inertia is not None:
        lines.extend(_inertia_lines(analysis.inertia))
    return "\n".join(lines).rstrip("\n")


def to_markdown(result: Result, validation: Optional[ValidationResult] = None) -> str:
    """Convert a calculator result to a Markdown report.

    Args:
        result: Result from solve_simple_chain, solve_chain or analyze_planetary
        validation: Optional validation results to include

    Returns:
        Markdown formatted string
    """
    analysis = _as_analysis(result)

    if analysis is None:
        md = "# Simple Gear Chain\n\n"
        md += "## Summary\n\n"
        md += "| Parameter | Value |\n"
        md += "|-----------|-------|\n"
        md += f"| Total Ratio | {format_ratio(result.total_ratio)} |\n"
        md += f"| Output Speed | {result.output_speed:.{SPEED_DECIMALS}f} rpm |\n"
        md += "\n## Stages\n\n"
        md += "| Stage | Ratio |\n"
        md += "|-------|-------|\n"
        for index, ratio in enumerate(result.stage_ratios):
            md += f"| {index + 1} | {format_ratio(ratio)} |\n"
    else:
        chain = analysis.chain
        md = "# Planetary Gear Chain\n\n"
        md += "## Summary\n\n"
        md += "| Parameter | Value |\n"
        md += "|-----------|-------|\n"
        md += f"| Input Speed | {chain.input_speed:.{SPEED_DECIMALS}f} rpm |\n"
        md += f"| Total Ratio | {format_ratio(chain.total_ratio)} |\n"
        md += f"| Output Speed | {chain.final_output_speed:.{SPEED_DECIMALS}f} rpm |\n"
        if analysis.inertia is not None:
            md += f"| Equivalent Inertia | {analysis.inertia.j_total:.{INERTIA_DECIMALS}f} kg·m² |\n"
        md += "\n## Stages\n\n"
        md += "| Stage | Configuration | K | Ratio | Output Speed (rpm) |\n"
        md += "|-------|---------------|---|-------|--------------------|\n"
        for stage in chain.stages:
            md += (
                f"| {stage.stage_index + 1} | {stage.ratio_type} | {stage.internal_ratio:.3f} "
                f"| {format_ratio(stage.gear_ratio)} | {stage.output_speed:.{SPEED_DECIMALS}f} |\n"
            )

        if analysis.inertia is not None:
            md += "\n## Inertia\n\n"
            md += "| Stage | J input | J output refl. | J planets refl. | J stage | Ratio before | J at input |\n"
            md += "|-------|---------|----------------|-----------------|---------|--------------|------------|\n"
            for stage in analysis.inertia.stages:
                md += (
                    f"| {stage.stage_index + 1} | {stage.j_input:.{INERTIA_DECIMALS}f} "
                    f"| {stage.j_output_reflected:.{INERTIA_DECIMALS}f} "
                    f"| {stage.j_planets_reflected:.{INERTIA_DECIMALS}f} "
                    f"| {stage.j_stage_equivalent:.{INERTIA_DECIMALS}f} "
                    f"| {stage.accumulated_ratio_before_stage:.{RATIO_DECIMALS}f} "
                    f"| {stage.j_stage_reflected_to_input:.{INERTIA_DECIMALS}f} |\n"
                )

    if validation:
        md += "\n## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Design is valid\n\n"
        else:
            md += "**Status:** ❌ Design has errors\n\n"

        for title, group in (("Errors", validation.errors), ("Warnings", validation.warnings)):
            if group:
                md += f"### {title}\n\n"
                for msg in group:
                    stage = f" (stage {msg.stage_index + 1})" if msg.stage_index is not None else ""
                    md += f"- **{msg.code}**{stage}: {msg.message}\n"
                    if msg.suggestion:
                        md += f"  - *Suggestion*: {msg.suggestion}\n"
                md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "\n## Notes\n\n"
    md += "- Ratios are output speed / input speed; negative values reverse direction\n"
    if analysis is not None and analysis.inertia is not None:
        md += "- Inertia in kg·m², reflected to the input shaft\n"
        md += "- Planets are lumped at carrier speed; planet spin is not included\n"
    md += "\n---\n"
    md += "*Generated by Gear Train Calculator*\n"

    return md
