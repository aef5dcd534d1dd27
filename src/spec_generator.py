"""Interactive spec.json generator for separation calculations.

This module provides an interactive command-line interface to generate
a spec.json configuration file by prompting for employment, leave,
retirement and health insurance parameters.
"""

import os
import json
from datetime import datetime
from typing import Any, Optional

from schedules.SalaryDetails import SalaryDetails, MAX_STEP
from schedules.HealthPlanDetails import HealthPlanDetails


YEARS_OF_SERVICE_RANGE = (1, 40)
SALARY_BAND_RANGE = (92000, 205000, 5000)
TERA_YEARS_RANGE = (10, 20)
TERA_AGE_RANGE = (43, 50)


def years_of_service_options() -> list[int]:
    return list(range(YEARS_OF_SERVICE_RANGE[0], YEARS_OF_SERVICE_RANGE[1] + 1))


def salary_band_options() -> list[int]:
    """High-three salary choices: $92,000 to $205,000 in $5,000 steps."""
    low, high, step = SALARY_BAND_RANGE
    return list(range(low, high + 1, step))


def tera_years_options() -> list[int]:
    return list(range(TERA_YEARS_RANGE[0], TERA_YEARS_RANGE[1] + 1))


def tera_age_options() -> list[int]:
    return list(range(TERA_AGE_RANGE[0], TERA_AGE_RANGE[1] + 1))


def prompt_int(prompt: str, default: Optional[int] = None, min_val: Optional[int] = None, max_val: Optional[int] = None) -> int:
    """Prompt for an integer value with optional default and validation."""
    while True:
        default_str = f" [{default}]" if default is not None else ""
        try:
            value = input(f"{prompt}{default_str}: ").strip()
            if value == "" and default is not None:
                return default
            result = int(value)
            if min_val is not None and result < min_val:
                print(f"  Value must be at least {min_val}")
                continue
            if max_val is not None and result > max_val:
                print(f"  Value must be at most {max_val}")
                continue
            return result
        except ValueError:
            print("  Please enter a valid integer")


def prompt_salary_band(prompt: str, default: Optional[int] = None) -> int:
    """Prompt for a high-three salary band, or 0 to use the current salary."""
    bands = salary_band_options()
    while True:
        default_str = f" [${default:,}]" if default else " [0]"
        value = input(f"{prompt} ($){default_str}: ").strip().lstrip('$').replace(',', '')
        if value == "":
            return default or 0
        try:
            result = int(value)
        except ValueError:
            print("  Please enter a whole dollar amount (e.g., 145000)")
            continue
        if result == 0 or result in bands:
            return result
        print(f"  Please enter 0 or a multiple of ${bands[1] - bands[0]:,} "
              f"between ${bands[0]:,} and ${bands[-1]:,}")


def prompt_yes_no(prompt: str, default: bool = False) -> bool:
    """Prompt for a yes/no answer."""
    default_str = "Y/n" if default else "y/N"
    while True:
        value = input(f"{prompt} [{default_str}]: ").strip().lower()
        if value == "":
            return default
        if value in ('y', 'yes'):
            return True
        if value in ('n', 'no'):
            return False
        print("  Please enter 'y' or 'n'")


def prompt_string(prompt: str, default: Optional[str] = None) -> str:
    """Prompt for a string value."""
    default_str = f" [{default}]" if default else ""
    value = input(f"{prompt}{default_str}: ").strip()
    if value == "" and default:
        return default
    return value


def prompt_choice(prompt: str, choices: list[str], default: Optional[str] = None) -> str:
    """Prompt for a choice from a list of options."""
    choices_str = "/".join(choices)
    default_str = f" [{default}]" if default else ""
    while True:
        value = input(f"{prompt} ({choices_str}){default_str}: ").strip()
        if value == "" and default:
            return default
        # Case-insensitive match
        for choice in choices:
            if value.lower() == choice.lower():
                return choice
        print(f"  Please enter one of: {choices_str}")


def prompt_date(prompt: str, default: Optional[str] = None, allow_blank: bool = False) -> Optional[str]:
    """Prompt for a date in YYYY-MM-DD format."""
    default_str = f" [{default}]" if default else ""
    while True:
        value = input(f"{prompt} (YYYY-MM-DD){default_str}: ").strip()
        if value == "" and default:
            return default
        if value == "" and allow_blank:
            return None
        try:
            datetime.strptime(value, "%Y-%m-%d")
            return value
        except ValueError:
            print("  Please enter a valid date in YYYY-MM-DD format (e.g., 2003-06-15)")


def print_section(title: str) -> None:
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)
    print()


def load_existing_spec(program_name: str, base_path: str) -> Optional[dict]:
    """Load an existing spec.json if it exists.

    Args:
        program_name: Name of the program folder
        base_path: Base path to the project directory

    Returns:
        The spec dictionary if it exists, None otherwise
    """
    spec_path = os.path.join(base_path, 'input-parameters', program_name, 'spec.json')
    if os.path.exists(spec_path):
        try:
            with open(spec_path, 'r') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            return None
    return None


def get_nested(d: dict, *keys, default=None):
    """Safely get a nested dictionary value.

    Args:
        d: The dictionary to search
        *keys: The sequence of keys to traverse
        default: Default value if path doesn't exist

    Returns:
        The value at the nested path, or default
    """
    for key in keys:
        if not isinstance(d, dict):
            return default
        d = d.get(key, default)
        if d is None:
            return default
    return d


def generate_spec(existing_spec: Optional[dict] = None,
                  salary_details: Optional[SalaryDetails] = None,
                  health_details: Optional[HealthPlanDetails] = None) -> dict:
    """Interactive wizard to generate a spec.json configuration.

    Args:
        existing_spec: Optional existing spec to use for default values
        salary_details: Salary schedule offering the grade choices
        health_details: Health tables offering plan, coverage and state choices
    """
    ex = existing_spec or {}
    salary_details = salary_details or SalaryDetails()
    health_details = health_details or HealthPlanDetails()

    spec: dict[str, Any] = {}

    # =========================================================================
    # EMPLOYMENT
    # =========================================================================
    print_section("Employment")

    employee: dict[str, Any] = {}
    employee['grade'] = prompt_choice(
        "Grade",
        salary_details.grades(),
        default=get_nested(ex, 'employee', 'grade', default='FS-02')
    )
    if employee['grade'] == salary_details.senior_grade:
        print("  SFS steps: 1-10 Counselor, 11-13 Minister Counselor, 14 Career Minister")
    employee['step'] = prompt_int(
        "Step",
        default=get_nested(ex, 'employee', 'step', default=1),
        min_val=1,
        max_val=MAX_STEP
    )
    employee['age'] = prompt_int(
        "Current age",
        default=get_nested(ex, 'employee', 'age'),
        min_val=18,
        max_val=100
    )
    scd = prompt_date(
        "Service computation date (leave blank to enter years instead)",
        default=get_nested(ex, 'employee', 'serviceComputationDate'),
        allow_blank=True
    )
    if scd:
        employee['serviceComputationDate'] = scd
    else:
        employee['yearsOfService'] = prompt_int(
            "Years of service",
            default=get_nested(ex, 'employee', 'yearsOfService'),
            min_val=YEARS_OF_SERVICE_RANGE[0],
            max_val=YEARS_OF_SERVICE_RANGE[1]
        )
    employee['post'] = get_nested(ex, 'employee', 'post', default='Washington, DC')
    spec['employee'] = employee

    # =========================================================================
    # LEAVE BALANCES
    # =========================================================================
    print_section("Leave Balances")

    spec['leave'] = {
        'annualLeaveHours': prompt_int(
            "Annual leave balance (hours)",
            default=get_nested(ex, 'leave', 'annualLeaveHours', default=0),
            min_val=0
        ),
        'sickLeaveHours': prompt_int(
            "Sick leave balance (hours)",
            default=get_nested(ex, 'leave', 'sickLeaveHours', default=0),
            min_val=0
        ),
    }

    # =========================================================================
    # HIGH-THREE SALARY
    # =========================================================================
    print_section("High-Three Salary (0 to use current salary plus post allowance)")

    existing_high_three = ex.get('highThreeSalaries') or [0, 0, 0]
    spec['highThreeSalaries'] = [
        prompt_salary_band(f"Highest salary year {n}", default=existing_high_three[n - 1])
        for n in range(1, 4)
    ]

    # =========================================================================
    # V/TERA
    # =========================================================================
    print_section("Voluntary/Temporary Early Retirement Authority")

    tera: dict[str, Any] = {
        'eligible': prompt_yes_no(
            "Has a V/TERA offer been made to you?",
            default=get_nested(ex, 'tera', 'eligible', default=False)
        )
    }
    if tera['eligible']:
        tera['yearsRequired'] = prompt_int(
            "V/TERA minimum years of service",
            default=get_nested(ex, 'tera', 'yearsRequired', default=TERA_YEARS_RANGE[0]),
            min_val=TERA_YEARS_RANGE[0],
            max_val=TERA_YEARS_RANGE[1]
        )
        tera['ageRequired'] = prompt_int(
            "V/TERA minimum age",
            default=get_nested(ex, 'tera', 'ageRequired', default=TERA_AGE_RANGE[0]),
            min_val=TERA_AGE_RANGE[0],
            max_val=TERA_AGE_RANGE[1]
        )
    spec['tera'] = tera

    # =========================================================================
    # HEALTH INSURANCE
    # =========================================================================
    print_section("Health Insurance")

    plans = health_details.plan_keys()
    spec['health'] = {
        'plan': prompt_choice(
            "Current FEHB plan",
            plans,
            default=get_nested(ex, 'health', 'plan', default=plans[0])
        ),
        'coverageType': prompt_choice(
            "Coverage type",
            health_details.coverage_types(),
            default=get_nested(ex, 'health', 'coverageType', default='self')
        ),
        'state': prompt_choice(
            "State of residence after separation",
            health_details.state_codes(),
            default=get_nested(ex, 'health', 'state', default='DC')
        ),
    }

    return spec


def save_spec(spec: dict, program_name: str, base_path: str) -> str:
    """Save the spec to a JSON file.

    Args:
        spec: The specification dictionary
        program_name: Name for the program folder
        base_path: Base path to the project directory

    Returns:
        Path to the saved file
    """
    program_dir = os.path.join(base_path, 'input-parameters', program_name)
    os.makedirs(program_dir, exist_ok=True)

    spec_path = os.path.join(program_dir, 'spec.json')
    with open(spec_path, 'w') as f:
        json.dump(spec, f, indent=4)

    return spec_path


def list_existing_programs(base_path: str) -> list[str]:
    """List all existing programs in the input-parameters directory.

    Args:
        base_path: Base path to the project directory

    Returns:
        List of program names
    """
    input_params_path = os.path.join(base_path, 'input-parameters')
    if not os.path.exists(input_params_path):
        return []

    programs = []
    for name in os.listdir(input_params_path):
        program_dir = os.path.join(input_params_path, name)
        spec_path = os.path.join(program_dir, 'spec.json')
        if os.path.isdir(program_dir) and os.path.exists(spec_path):
            programs.append(name)

    return sorted(programs)


def run_generator() -> Optional[str]:
    """Run the interactive generator and return the program name if successful."""
    try:
        base_path = os.path.normpath(os.path.join(os.path.dirname(__file__), '..'))

        print()
        print("╔════════════════════════════════════════════════════════════╗")
        print("║    FS Separation Calculator - Configuration Generator     ║")
        print("╚════════════════════════════════════════════════════════════╝")
        print()

        existing_programs = list_existing_programs(base_path)
        if existing_programs:
            print("Existing programs:")
            for prog in existing_programs:
                print(f"  - {prog}")
            print()
            print("Enter an existing program name to update it, or a new name to create.")
        else:
            print("No existing programs found. Enter a name for your new program.")
        print()

        program_name = prompt_string(
            "Program name",
            default="myprogram"
        )

        # Clean up the name (remove spaces, special chars)
        program_name = "".join(c if c.isalnum() or c in '-_' else '_' for c in program_name)

        existing_spec = load_existing_spec(program_name, base_path)
        if existing_spec:
            print()
            print(f"Found existing program '{program_name}'. Values will be used as defaults.")
        else:
            print()
            print(f"Creating new program '{program_name}'.")

        spec = generate_spec(existing_spec)
        spec_path = save_spec(spec, program_name, base_path)

        print()
        print(f"  Saved to: {spec_path}")
        print()
        print("  To run the calculation:")
        print(f"    python src/Program.py {program_name}")
        print()
        print("  Available modes:")
        print(f"    python src/Program.py {program_name} --mode Severance")
        print(f"    python src/Program.py {program_name} --mode Retirement")
        print(f"    python src/Program.py {program_name} --mode Health")
        print()

        return program_name

    except KeyboardInterrupt:
        print("\n\nCancelled. No changes made.")
        return None


if __name__ == "__main__":
    run_generator()
