"""
Command-line interface for gear train calculations.
"""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from pydantic import ValidationError

from ..calculator.constants import DEFAULT_NUM_PLANETS
from ..calculator.core import GearPair, PlanetaryStage, solve_simple_chain
from ..calculator.errors import EmptyChain, GearTrainError
from ..calculator.inertia import analyze_planetary
from ..calculator.output import to_json, to_markdown, to_summary
from ..calculator.validation import (
    ValidationResult,
    validate_planetary_stages,
    validate_simple_chain,
)
from ..enums import Member
from ..io.loaders import GearTrainDesign, load_design_json

logger = logging.getLogger(__name__)

FORMATS = ("summary", "markdown", "json")


def parse_pair(text: str) -> GearPair:
    """Parse 'DRIVING:DRIVEN' (e.g. '20:45') into a GearPair."""
    parts = text.split(":")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected DRIVING:DRIVEN, got {text!r}")
    try:
        driving, driven = float(parts[0]), float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"tooth counts must be numbers, got {text!r}") from None
    return GearPair(driving_teeth=driving, driven_teeth=driven)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geartrain",
        description="Calculate speed ratios and reflected inertia for gear chains",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Two spur pairs in series
  geartrain simple --speed 1500 --pair 20:45 --pair 18:60

  # Sun-driven planetary stage with fixed ring
  geartrain planetary --speed 3000 --input sun --output carrier \\
      --sun-teeth 20 --planet-teeth 20 --ring-teeth 60

  # Three identical stages in series, as a Markdown report
  geartrain planetary --speed 3000 --input sun --output carrier \\
      --sun-teeth 20 --ring-teeth 60 --stages 3 --format markdown

  # Design file, including reflected inertia when the file has inertia data
  geartrain file design.json --inertia --validate
        """
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log calculation steps'
    )
    parser.add_argument(
        '-q', '--quiet',
        action='store_true',
        help='Only log errors'
    )

    # Options shared by every subcommand
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '--format',
        choices=FORMATS,
        default='summary',
        help='Output format (default: summary)'
    )
    common.add_argument(
        '--validate',
        action='store_true',
        help='Run engineering checks and include their findings'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    simple = subparsers.add_parser(
        'simple',
        parents=[common],
        help='Chain of fixed-axis gear pairs'
    )
    simple.add_argument(
        '--speed',
        type=float,
        required=True,
        help='Input speed (rpm)'
    )
    simple.add_argument(
        '--pair',
        type=parse_pair,
        action='append',
        required=True,
        metavar='DRIVING:DRIVEN',
        help='Gear pair tooth counts; repeat for each stage'
    )

    planetary = subparsers.add_parser(
        'planetary',
        parents=[common],
        help='Identical planetary stages in series'
    )
    planetary.add_argument(
        '--speed',
        type=float,
        required=True,
        help='Input speed (rpm)'
    )
    planetary.add_argument(
        '--input',
        choices=[m.value for m in Member],
        required=True,
        help='Driving member'
    )
    planetary.add_argument(
        '--output',
        choices=[m.value for m in Member],
        required=True,
        help='Driven member (the remaining member is fixed)'
    )
    planetary.add_argument(
        '--sun-teeth',
        type=float,
        required=True,
        help='Sun gear teeth'
    )
    planetary.add_argument(
        '--ring-teeth',
        type=float,
        required=True,
        help='Ring gear teeth'
    )
    planetary.add_argument(
        '--planet-teeth',
        type=float,
        default=None,
        help='Planet gear teeth (used by --validate)'
    )
    planetary.add_argument(
        '--planets',
        type=int,
        default=DEFAULT_NUM_PLANETS,
        help=f'Number of planets (default: {DEFAULT_NUM_PLANETS})'
    )
    planetary.add_argument(
        '--stages',
        type=int,
        default=1,
        help='Number of identical stages in series (default: 1)'
    )

    design = subparsers.add_parser(
        'file',
        parents=[common],
        help='Calculate a JSON design file'
    )
    design.add_argument(
        'design_file',
        type=str,
        help='JSON design file'
    )
    design.add_argument(
        '--inertia',
        action='store_true',
        help='Include reflected inertia (planetary designs only)'
    )

    return parser


def _configure_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger("geartrain").setLevel(level)


def _render(result, fmt: str, validation: Optional[ValidationResult], **summary_kwargs) -> str:
    if fmt == 'json':
        return to_json(result, validation)
    if fmt == 'markdown':
        return to_markdown(result, validation)

    text = to_summary(result, **summary_kwargs)
    if validation is not None:
        lines = ["", "Validation: " + ("OK" if validation.valid else "ERRORS")]
        for msg in validation.messages:
            stage = f" [stage {msg.stage_index + 1}]" if msg.stage_index is not None else ""
            lines.append(f"  {msg.severity.value.upper()}{stage} {msg.code}: {msg.message}")
        text += "\n" + "\n".join(lines)
    return text


def _run_simple(pairs: List[GearPair], speed: float, args) -> str:
    result = solve_simple_chain(pairs, speed)
    validation = validate_simple_chain(pairs) if args.validate else None
    return _render(result, args.format, validation, input_speed=speed, pairs=pairs)


def _run_planetary(stages: List[PlanetaryStage], speed: float, args, inertias=None) -> str:
    analysis = analyze_planetary(stages, speed, inertias)
    validation = validate_planetary_stages(stages) if args.validate else None
    return _render(analysis, args.format, validation)


def _stages_from_args(args) -> Tuple[List[PlanetaryStage], float]:
    if args.stages < 1:
        raise EmptyChain("--stages must be at least 1")
    stage = PlanetaryStage.from_input_output(
        Member(args.input),
        Member(args.output),
        sun_teeth=args.sun_teeth,
        ring_teeth=args.ring_teeth,
        planet_teeth=args.planet_teeth,
        num_planets=args.planets,
    )
    return [stage] * args.stages, args.speed


def _run_design(design: GearTrainDesign, args) -> str:
    if not design.is_planetary:
        if args.inertia:
            logger.warning("--inertia ignored: simple chains carry no inertia data")
        return _run_simple(design.to_gear_pairs(), design.input_speed_rpm, args)

    inertias = None
    if args.inertia:
        if not design.has_inertia:
            logger.warning("Design has no inertia data; all stages treated as massless")
        inertias = design.to_stage_inertias()
    return _run_planetary(design.to_planetary_stages(), design.input_speed_rpm, args, inertias)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.quiet)

    if args.command == 'file':
        try:
            design = load_design_json(args.design_file)
        except (OSError, ValueError, ValidationError) as e:
            print(f"Error loading design: {e}", file=sys.stderr)
            return 1

    try:
        if args.command == 'simple':
            output = _run_simple(args.pair, args.speed, args)
        elif args.command == 'planetary':
            stages, speed = _stages_from_args(args)
            output = _run_planetary(stages, speed, args)
        else:
            output = _run_design(design, args)
    except GearTrainError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
