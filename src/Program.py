import sys
import os
import json
import argparse
from schedules.SalaryDetails import SalaryDetails
from schedules.FSPSDetails import FSPSDetails
from schedules.CareerProgressionDetails import CareerProgressionDetails
from schedules.HealthPlanDetails import HealthPlanDetails
from calc.separation_calculator import SeparationCalculator, parse_as_of
from model.errors import SeparationCalculationError
from render.renderers import RENDERER_REGISTRY
from spec_generator import run_generator


def load_spec(program_name: str) -> dict:
    """Load input-parameters/<program_name>/spec.json.

    Raises:
        FileNotFoundError: the program has no spec.json
    """
    spec_path = os.path.join(os.path.dirname(__file__), '../input-parameters', program_name, 'spec.json')
    if not os.path.exists(spec_path):
        raise FileNotFoundError(f"Spec file not found: {spec_path}")
    with open(spec_path, 'r') as f:
        return json.load(f)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Foreign Service separation and retirement calculator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  Summary     Print a one-screen overview of all results (default)
  Severance   Print severance pay, installments and annual leave payout
  Retirement  Print all four FSPS retirement scenarios
  Health      Print the FEHB / COBRA / ACA comparison

Examples:
  python src/Program.py program1
  python src/Program.py program1 --mode Retirement
  python src/Program.py program1 --mode Severance --as-of 2026-01-15
  python src/Program.py --generate
        """
    )
    parser.add_argument('program_name', nargs='?', help='Name of the program (folder in input-parameters)')
    parser.add_argument('--mode', '-m',
                        choices=list(RENDERER_REGISTRY.keys()),
                        default='Summary',
                        help='Output mode: Summary (default), Severance, Retirement or Health')
    parser.add_argument('--as-of',
                        help='Calculation date (YYYY-MM-DD); defaults to today')
    parser.add_argument('--generate', '-g',
                        action='store_true',
                        help='Launch interactive wizard to create a new spec.json configuration')

    args = parser.parse_args(argv)

    # If --generate flag is set, run the interactive generator
    if args.generate:
        program_name = run_generator()
        if program_name is None:
            sys.exit(0)
        run_plan = input("Would you like to run the calculation now? [Y/n]: ").strip().lower()
        if run_plan in ('', 'y', 'yes'):
            args.program_name = program_name
        else:
            sys.exit(0)

    if not args.program_name:
        parser.error("program_name is required (or use --generate to create a new configuration)")

    try:
        spec = load_spec(args.program_name)
    except FileNotFoundError as e:
        print(str(e))
        sys.exit(1)

    try:
        as_of = parse_as_of(args.as_of)
    except ValueError:
        parser.error(f"--as-of must be a date in YYYY-MM-DD format, got {args.as_of!r}")

    calculator = SeparationCalculator(
        SalaryDetails(),
        FSPSDetails(),
        CareerProgressionDetails(),
        HealthPlanDetails(),
    )
    try:
        report = calculator.calculate(spec, as_of)
    except SeparationCalculationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    renderer = RENDERER_REGISTRY[args.mode]()
    renderer.render(report)


if __name__ == "__main__":
    main()
