"""Builds a complete separation report from a program spec.

The calculator reads the employee, leave, high-three, TERA and health
sections of a spec, captures the calculation date once, and runs the
severance, annuity and health calculators against the same inputs.

The module-level ``calculate_*`` functions are convenience entry points
that load the default reference tables on each call.
"""

from datetime import date, datetime
from typing import Optional, Sequence

from model.SeparationReport import SeparationReport
from model.ServiceDuration import ServiceDuration
from model.SeveranceResult import SeveranceResult
from model.RetirementScenario import AnnuityResult
from model.HealthEstimate import HealthEstimate
from model.errors import InvalidInputError
from schedules.SalaryDetails import SalaryDetails
from schedules.FSPSDetails import FSPSDetails
from schedules.CareerProgressionDetails import CareerProgressionDetails
from schedules.HealthPlanDetails import HealthPlanDetails
from calc.service_duration import (
    calculate_service_duration as _service_duration_from_date,
    duration_from_sick_leave_hours,
    reconcile_service_years,
)
from calc.severance_calculator import SeveranceCalculator
from calc.career_simulator import CareerSimulator
from calc.annuity_calculator import AnnuityCalculator
from calc.health_calculator import HealthInsuranceCalculator


DEFAULT_POST = "Washington, DC"
DEFAULT_TERA_YEARS = 10
DEFAULT_TERA_AGE = 43


class SeparationCalculator:
    """Runs every separation calculation for one employee."""

    def __init__(self,
                 salary_details: SalaryDetails,
                 fsps_details: FSPSDetails,
                 progression_details: CareerProgressionDetails,
                 health_details: HealthPlanDetails):
        self.salary_details = salary_details
        self.severance_calculator = SeveranceCalculator(salary_details)
        self.annuity_calculator = AnnuityCalculator(
            salary_details, fsps_details, CareerSimulator(progression_details)
        )
        self.health_calculator = HealthInsuranceCalculator(health_details)

    @classmethod
    def from_reference(cls) -> 'SeparationCalculator':
        """Build a calculator from the JSON tables in ``reference/``."""
        return cls(SalaryDetails(), FSPSDetails(), CareerProgressionDetails(), HealthPlanDetails())

    def calculate(self, spec: dict, as_of: Optional[date] = None) -> SeparationReport:
        """Calculate severance, retirement scenarios and health costs.

        Args:
            spec: The program specification dictionary
            as_of: Calculation date; defaults to today, captured once

        Returns:
            SeparationReport with every result for this request
        """
        as_of = as_of or date.today()

        employee = spec.get('employee') or {}
        leave = spec.get('leave') or {}
        tera = spec.get('tera') or {}
        health_spec = spec.get('health')

        grade = employee.get('grade')
        step = employee.get('step')
        age = employee.get('age')
        post = employee.get('post', DEFAULT_POST)
        manual_years = employee.get('yearsOfService')

        service_duration = _service_duration_from_date(employee.get('serviceComputationDate'), as_of)
        reconciliation = reconcile_service_years(manual_years, service_duration)
        if service_duration is None and manual_years is None:
            raise InvalidInputError("Either yearsOfService or serviceComputationDate is required",
                                    field='years_service')
        years_service = reconciliation.years_of_service
        sick_leave_duration = duration_from_sick_leave_hours(leave.get('sickLeaveHours', 0))

        severance = self.severance_calculator.calculate(
            grade, step, years_service, age, post,
            annual_leave_hours=leave.get('annualLeaveHours', 0),
            service_duration=service_duration,
            as_of=as_of,
        )
        annuity = self.annuity_calculator.calculate(
            grade, step, years_service, age,
            spec.get('highThreeSalaries'),
            post,
            tera_eligible=bool(tera.get('eligible', False)),
            tera_years_required=tera.get('yearsRequired') or DEFAULT_TERA_YEARS,
            tera_age_required=tera.get('ageRequired') or DEFAULT_TERA_AGE,
            sick_leave_duration=sick_leave_duration,
            service_duration=service_duration,
            as_of=as_of,
        )
        health = None
        if health_spec:
            health = self.health_calculator.calculate(
                health_spec.get('plan'),
                health_spec.get('coverageType'),
                health_spec.get('state'),
            )

        return SeparationReport(
            as_of=as_of,
            grade=grade,
            step=int(step),
            age=age,
            years_of_service=years_service,
            rank=self.salary_details.rank_for(grade, step),
            service_duration=service_duration,
            sick_leave_duration=sick_leave_duration,
            service_reconciliation=reconciliation,
            severance=severance,
            annuity=annuity,
            health=health,
        )


def parse_as_of(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()


def calculate_service_duration(computation_date, as_of: Optional[date] = None) -> Optional[ServiceDuration]:
    return _service_duration_from_date(computation_date, as_of)


def calculate_severance(grade: str, step, years_service, age, post: str = DEFAULT_POST,
                        annual_leave_hours: float = 0,
                        service_duration: Optional[ServiceDuration] = None,
                        as_of: Optional[date] = None) -> SeveranceResult:
    return SeveranceCalculator(SalaryDetails()).calculate(
        grade, step, years_service, age, post, annual_leave_hours, service_duration, as_of
    )


def calculate_fsps_annuity(grade: str, step, years_service, age,
                           high_three: Optional[Sequence[float]] = None,
                           post: str = DEFAULT_POST,
                           tera_eligible: bool = False,
                           tera_years_required: float = DEFAULT_TERA_YEARS,
                           tera_age_required: float = DEFAULT_TERA_AGE,
                           sick_leave_duration: Optional[ServiceDuration] = None,
                           service_duration: Optional[ServiceDuration] = None,
                           as_of: Optional[date] = None) -> AnnuityResult:
    calculator = AnnuityCalculator(
        SalaryDetails(), FSPSDetails(), CareerSimulator(CareerProgressionDetails())
    )
    return calculator.calculate(
        grade, step, years_service, age, high_three, post,
        tera_eligible=tera_eligible,
        tera_years_required=tera_years_required,
        tera_age_required=tera_age_required,
        sick_leave_duration=sick_leave_duration,
        service_duration=service_duration,
        as_of=as_of,
    )


def calculate_health_insurance(plan_key: str, coverage_type: str, state: Optional[str] = None) -> HealthEstimate:
    return HealthInsuranceCalculator(HealthPlanDetails()).calculate(plan_key, coverage_type, state)
