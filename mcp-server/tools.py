"""Separation Calculator Tools for MCP Server.

This module provides the tool implementations that wrap the separation
calculators and expose their results through MCP.
"""

import os
import sys
import json
from dataclasses import asdict
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from calc.separation_calculator import SeparationCalculator, DEFAULT_POST, parse_as_of
from calc.service_duration import calculate_service_duration, duration_from_sick_leave_hours
from model.SeparationReport import SeparationReport
from model.RetirementScenario import RetirementScenario


def to_jsonable(value: Any) -> Any:
    """Convert dataclasses, enums and dates into JSON-friendly structures."""
    if hasattr(value, '__dataclass_fields__'):
        return to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(item) for item in value]
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def scenario_summary(scenario: RetirementScenario) -> dict:
    result = {
        "type": scenario.type.value,
        "is_eligible": scenario.is_eligible,
        "description": scenario.description,
        "effective_years": scenario.effective_years,
        "annuity_percentage": scenario.annuity_percentage,
        "annual_annuity": scenario.annual_annuity,
        "monthly_annuity": scenario.monthly_annuity,
        "mra_reduction": scenario.mra_reduction,
        "is_supplement_eligible": scenario.is_supplement_eligible,
        "monthly_supplemental": scenario.monthly_supplemental,
        "supplemental_annuity": scenario.supplemental_annuity,
    }
    if scenario.age62_comparison is not None:
        comparison = scenario.age62_comparison
        result["age62_comparison"] = {
            "description": comparison.description,
            "annuity_percentage": comparison.annuity_percentage,
            "annual_annuity": comparison.annual_annuity,
            "monthly_annuity": comparison.monthly_annuity,
            "years_to_wait": comparison.years_to_wait,
        }
    return result


class SeparationTools:
    """Tools that wrap the separation calculators for one program."""

    def __init__(self, base_path: str, program_name: str, as_of: Optional[date] = None):
        """Initialize with paths and calculate the program's report.

        Args:
            base_path: Path to the project root directory
            program_name: Name of the program folder in input-parameters
            as_of: Calculation date; defaults to today
        """
        self.base_path = base_path
        self.program_name = program_name
        self.spec = self._load_spec()
        self.calculator = SeparationCalculator.from_reference()
        self.report: SeparationReport = self.calculator.calculate(self.spec, as_of)

    def _load_spec(self) -> dict:
        """Load the program specification."""
        spec_path = os.path.join(
            self.base_path, 'input-parameters', self.program_name, 'spec.json'
        )
        with open(spec_path, 'r') as f:
            return json.load(f)

    def get_program_overview(self) -> dict:
        report = self.report
        return {
            "program_name": self.program_name,
            "as_of": report.as_of.isoformat(),
            "employee": {
                "grade": report.grade,
                "step": report.step,
                "rank": report.rank,
                "age": report.age,
                "years_of_service": report.years_of_service,
                "post": report.annuity.post,
            },
            "service_reconciliation": to_jsonable(report.service_reconciliation),
            "sick_leave_years": report.sick_leave_duration.total_years if report.sick_leave_duration else 0,
            "has_health_inputs": report.health is not None,
        }

    def get_severance(self) -> dict:
        return to_jsonable(self.report.severance)

    def get_retirement_scenarios(self) -> dict:
        annuity = self.report.annuity
        return {
            "base_salary": annuity.base_salary,
            "post_allowance_rate": annuity.post_allowance_rate,
            "adjusted_salary": annuity.adjusted_salary,
            "high_three_average": annuity.high_three_average,
            "mra_age": annuity.mra_age,
            "best_scenario": annuity.best.type.value,
            "scenarios": {s.type.value: scenario_summary(s) for s in annuity.scenarios},
        }

    def get_best_scenario(self) -> dict:
        return scenario_summary(self.report.annuity.best)

    def get_health_comparison(self) -> dict:
        if self.report.health is None:
            return {"error": f"Program '{self.program_name}' has no health insurance inputs"}
        return to_jsonable(self.report.health)

    def get_report(self) -> dict:
        return {
            "overview": self.get_program_overview(),
            "severance": self.get_severance(),
            "retirement": self.get_retirement_scenarios(),
            "health": self.get_health_comparison() if self.report.health else None,
        }


class MultiProgramTools:
    """Manager for multiple separation programs.

    Discovers all available programs and caches their calculations,
    allowing queries to specify which program to use.
    """

    def __init__(self, base_path: str, default_program: Optional[str] = None):
        """Initialize and discover all available programs.

        Args:
            base_path: Path to the project root directory
            default_program: Default program to use when none specified
        """
        self.base_path = base_path
        self.programs: Dict[str, SeparationTools] = {}
        self.default_program = default_program
        self.calculator = SeparationCalculator.from_reference()
        self._discover_programs()

    def _discover_programs(self):
        """Discover and load all available programs."""
        input_params_path = os.path.join(self.base_path, 'input-parameters')

        if not os.path.exists(input_params_path):
            return

        for name in sorted(os.listdir(input_params_path)):
            program_dir = os.path.join(input_params_path, name)
            spec_path = os.path.join(program_dir, 'spec.json')

            if os.path.isdir(program_dir) and os.path.exists(spec_path):
                try:
                    self.programs[name] = SeparationTools(self.base_path, name)
                except Exception as e:
                    # Log but don't fail on individual program errors
                    print(f"Warning: Failed to load program '{name}': {e}", file=sys.stderr)

        if self.default_program is None and self.programs:
            self.default_program = list(self.programs.keys())[0]

    def _get_program(self, program: Optional[str] = None, require_explicit: bool = False) -> SeparationTools:
        """Get the specified program or default.

        Args:
            program: Program name to use, or None for default
            require_explicit: If True, raise error when program not specified and multiple exist
        """
        if program is None and len(self.programs) > 1 and require_explicit:
            available = list(self.programs.keys())
            raise ValueError(
                f"Multiple programs available: {available}. Please specify which program to query."
            )

        program_name = program or self.default_program

        if program_name not in self.programs:
            available = list(self.programs.keys())
            raise ValueError(
                f"Program '{program_name}' not found. Available programs: {available}"
            )

        return self.programs[program_name]

    def list_programs(self) -> dict:
        """List all available programs."""
        programs_info = {}
        for name, tools in self.programs.items():
            report = tools.report
            programs_info[name] = {
                "grade": report.grade,
                "step": report.step,
                "age": report.age,
                "years_of_service": report.years_of_service,
            }

        return {
            "available_programs": list(self.programs.keys()),
            "default_program": self.default_program,
            "programs_info": programs_info
        }

    def reload_programs(self) -> dict:
        """Reload all programs from disk, refreshing the cache."""
        old_programs = set(self.programs.keys())

        self.programs.clear()
        self.default_program = None
        self._discover_programs()

        new_programs = set(self.programs.keys())

        return {
            "status": "success",
            "message": f"Reloaded {len(self.programs)} programs",
            "programs_loaded": list(self.programs.keys()),
            "default_program": self.default_program,
            "changes": {
                "added": sorted(new_programs - old_programs),
                "removed": sorted(old_programs - new_programs),
                "reloaded": sorted(old_programs & new_programs)
            }
        }

    def _for_program(self, method: str, program: Optional[str]) -> dict:
        result = getattr(self._get_program(program, require_explicit=True), method)()
        result["program"] = program or self.default_program
        return result

    def get_program_overview(self, program: Optional[str] = None) -> dict:
        """Get an overview of the specified program."""
        return self._for_program('get_program_overview', program)

    def get_severance(self, program: Optional[str] = None) -> dict:
        return self._for_program('get_severance', program)

    def get_retirement_scenarios(self, program: Optional[str] = None) -> dict:
        return self._for_program('get_retirement_scenarios', program)

    def get_best_scenario(self, program: Optional[str] = None) -> dict:
        return self._for_program('get_best_scenario', program)

    def get_health_comparison(self, program: Optional[str] = None) -> dict:
        return self._for_program('get_health_comparison', program)

    def get_report(self, program: Optional[str] = None) -> dict:
        return self._for_program('get_report', program)

    def compare_programs(self, program1: str, program2: str) -> dict:
        """Compare severance, best annuity and health costs of two programs."""
        first = self._get_program(program1).report
        second = self._get_program(program2).report

        def compare_metric(val1: float, val2: float) -> dict:
            return {
                program1: val1,
                program2: val2,
                "difference": val2 - val1,
                "better": program1 if val1 > val2 else program2 if val2 > val1 else "equal",
            }

        comparison = {
            "severance_amount": compare_metric(first.severance.severance_amount,
                                               second.severance.severance_amount),
            "best_monthly_annuity": compare_metric(first.annuity.best.monthly_annuity,
                                                   second.annuity.best.monthly_annuity),
            "best_monthly_total": compare_metric(first.annuity.best.monthly_total,
                                                 second.annuity.best.monthly_total),
        }
        return {
            "program1": program1,
            "program2": program2,
            "best_scenarios": {
                program1: first.annuity.best.type.value,
                program2: second.annuity.best.type.value,
            },
            "comparison": comparison,
        }

    def calculate_severance(self, grade: str, step: int, years_service: float, age: int,
                            annual_leave_hours: float = 0,
                            service_computation_date: Optional[str] = None,
                            as_of: Optional[str] = None) -> dict:
        """Ad-hoc severance calculation from raw inputs."""
        as_of_date = parse_as_of(as_of) or date.today()
        duration = calculate_service_duration(service_computation_date, as_of_date)
        result = self.calculator.severance_calculator.calculate(
            grade, step, years_service, age, DEFAULT_POST,
            annual_leave_hours=annual_leave_hours,
            service_duration=duration,
            as_of=as_of_date,
        )
        return to_jsonable(result)

    def calculate_annuity(self, grade: str, step: int, years_service: float, age: int,
                          high_three: Optional[List[float]] = None,
                          tera_eligible: bool = False,
                          tera_years_required: int = 10,
                          tera_age_required: int = 43,
                          sick_leave_hours: float = 0,
                          service_computation_date: Optional[str] = None,
                          as_of: Optional[str] = None) -> dict:
        """Ad-hoc retirement scenario calculation from raw inputs."""
        as_of_date = parse_as_of(as_of) or date.today()
        duration = calculate_service_duration(service_computation_date, as_of_date)
        result = self.calculator.annuity_calculator.calculate(
            grade, step, years_service, age, high_three, DEFAULT_POST,
            tera_eligible=tera_eligible,
            tera_years_required=tera_years_required,
            tera_age_required=tera_age_required,
            sick_leave_duration=duration_from_sick_leave_hours(sick_leave_hours),
            service_duration=duration,
            as_of=as_of_date,
        )
        return {
            "service_duration": to_jsonable(duration),
            "high_three_average": result.high_three_average,
            "mra_age": result.mra_age,
            "best_scenario": result.best.type.value,
            "scenarios": {s.type.value: scenario_summary(s) for s in result.scenarios},
        }

    def calculate_health(self, plan: str, coverage_type: str, state: Optional[str] = None) -> dict:
        """Ad-hoc FEHB / COBRA / ACA comparison."""
        return to_jsonable(self.calculator.health_calculator.calculate(plan, coverage_type, state))
