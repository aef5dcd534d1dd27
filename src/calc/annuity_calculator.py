"""Foreign Service Pension System annuity scenarios.

Four retirement paths are evaluated independently for every request:

- immediate: senior grade (FS-01/SFS) with 5 years, age 62 with 5, age 50
  with 20, or 25 years at any age. Tiered annuity.
- tera: only under a Voluntary/Temporary Early Retirement Authority offer,
  at or above the offered age and years. Tiered annuity.
- mra+10: 10 years of service. Flat 1% per year, reduced 5% for each year
  under 62, with an unreduced wait-until-62 alternative.
- deferred: 5 years of service, payable later. Flat 1% per year before 65,
  tiered from 65.

The tiered annuity is 1.7% of the high-three average for each of the first
20 years plus 1.0% for each year beyond. Immediate and TERA retirees under
62 may also receive the Special Retirement Supplement.
"""

from datetime import date
from typing import Optional, Sequence

from model.RetirementScenario import (
    AnnuityResult,
    RetirementScenario,
    ScenarioSet,
    ScenarioType,
)
from model.ServiceDuration import ServiceDuration
from model.errors import InvalidInputError
from schedules.SalaryDetails import SENIOR_GRADES, SalaryDetails
from schedules.FSPSDetails import FSPSDetails
from calc.career_simulator import CareerSimulator
from calc.service_duration import round_to_months


def format_age(age: float) -> str:
    """Render a fractional age such as 56.8333 as '56 years 10 months'."""
    years = int(age)
    months = round((age - years) * 12)
    if months == 12:
        years, months = years + 1, 0
    if months == 0:
        return f"{years}"
    return f"{years} years {months} months"


class AnnuityCalculator:

    def __init__(self,
                 salary_details: SalaryDetails,
                 fsps_details: FSPSDetails,
                 career_simulator: CareerSimulator):
        self.salary_details = salary_details
        self.fsps = fsps_details
        self.career_simulator = career_simulator

    def annuity_percentage(self, years: float) -> float:
        """Tiered FSPS multiplier: enhanced rate for the first 20 years, standard after."""
        first_tier = min(self.fsps.enhanced_years, years) * self.fsps.enhanced_multiplier
        second_tier = max(0, years - self.fsps.enhanced_years) * self.fsps.standard_multiplier
        return first_tier + second_tier

    def flat_annuity_percentage(self, years: float) -> float:
        return years * self.fsps.standard_multiplier

    def mra_for_age(self, age, as_of: date) -> float:
        return self.fsps.minimum_retirement_age(as_of.year - age)

    def supplement_monthly(self, grade: str, step, years_service: float, age) -> float:
        """Monthly Special Retirement Supplement estimate.

        40% of simulated average career earnings, prorated by service up to
        30 years, capped at the Social Security monthly maximum. Zero at or
        after age 62.
        """
        if age >= self.fsps.supplement_end_age:
            return 0.0
        if grade not in self.career_simulator.progression.grades:
            return 0.0
        simulation = self.career_simulator.simulate(grade, step, years_service)
        supplemental_base = simulation.average_annual_salary * self.fsps.supplement_earnings_factor
        service_fraction = min(years_service / self.fsps.supplement_full_service_years, 1)
        monthly = supplemental_base * service_fraction / 12
        return min(monthly, self.fsps.supplement_max_monthly)

    def _effective_years(self, scenario_type: ScenarioType, years_service,
                         sick_leave_duration: Optional[ServiceDuration],
                         service_duration: Optional[ServiceDuration]) -> float:
        if service_duration is not None:
            years = round_to_months(service_duration.total_years)
        else:
            years = round_to_months(years_service)
        # Sick leave counts toward computing an immediate annuity only
        if scenario_type in (ScenarioType.IMMEDIATE, ScenarioType.TERA) and sick_leave_duration:
            years += round_to_months(sick_leave_duration.total_years)
        return years

    def evaluate_scenario(self,
                          scenario_type: ScenarioType,
                          high_three_average: float,
                          years_service,
                          age,
                          grade: str,
                          step,
                          tera_eligible: bool = False,
                          tera_years_required: float = 10,
                          tera_age_required: float = 43,
                          sick_leave_duration: Optional[ServiceDuration] = None,
                          service_duration: Optional[ServiceDuration] = None,
                          as_of: Optional[date] = None) -> RetirementScenario:
        as_of = as_of or date.today()
        years = self._effective_years(scenario_type, years_service, sick_leave_duration, service_duration)
        mra_age = self.mra_for_age(age, as_of)
        scenario = RetirementScenario(type=scenario_type, effective_years=years, mra_age=mra_age)

        if scenario_type is ScenarioType.IMMEDIATE:
            if grade in SENIOR_GRADES and years >= 5:
                scenario.is_eligible = True
                scenario.description = "Immediate retirement (Senior Grade)"
            elif age >= 62 and years >= 5:
                scenario.is_eligible = True
                scenario.description = "Immediate retirement (age 62 with 5 years)"
            elif age >= 50 and years >= 20:
                scenario.is_eligible = True
                scenario.description = "Immediate retirement (age 50 with 20 years)"
            elif years >= 25:
                scenario.is_eligible = True
                scenario.description = "Immediate retirement (25 years any age)"
            else:
                scenario.description = "Not eligible for immediate retirement"

        elif scenario_type is ScenarioType.TERA:
            if tera_eligible and age >= tera_age_required and years >= tera_years_required:
                scenario.is_eligible = True
                scenario.description = (
                    f"V/TERA retirement (age {tera_age_required} with {tera_years_required} years)"
                )
            elif tera_eligible:
                scenario.description = (
                    f"Not eligible for V/TERA (requires age {tera_age_required} with {tera_years_required} years)"
                )
            else:
                scenario.description = "No V/TERA authority offered"

        elif scenario_type is ScenarioType.MRA_PLUS_10:
            if years >= self.fsps.mra_plus_ten_minimum_years:
                scenario.is_eligible = True
                scenario.description = "MRA+10 retirement"
                if age < mra_age:
                    scenario.description += f" (eligible at MRA {format_age(mra_age)})"
                if age < self.fsps.unreduced_age:
                    reduction = self.fsps.mra_reduction_per_year * (self.fsps.unreduced_age - age)
                    scenario.mra_reduction = min(max(reduction, 0.0), 1.0)
                    if age >= mra_age:
                        scenario.description += f" with {scenario.mra_reduction * 100:.1f}% reduction"
                    scenario.age62_comparison = self._age62_comparison(high_three_average, years, age, mra_age)
            else:
                scenario.description = (
                    f"Not eligible for MRA+10 (requires {self.fsps.mra_plus_ten_minimum_years} years)"
                )

        elif scenario_type is ScenarioType.DEFERRED:
            if years >= self.fsps.deferred_minimum_years:
                scenario.is_eligible = True
                scenario.description = "Deferred retirement (payable at 62)"
            else:
                scenario.description = (
                    f"Not eligible for deferred retirement (requires {self.fsps.deferred_minimum_years} years)"
                )

        if scenario.is_eligible:
            if scenario_type is ScenarioType.MRA_PLUS_10 or (
                    scenario_type is ScenarioType.DEFERRED and age < self.fsps.deferred_enhanced_age):
                scenario.annuity_percentage = self.flat_annuity_percentage(years)
            else:
                scenario.annuity_percentage = self.annuity_percentage(years)

        gross_annuity = high_three_average * scenario.annuity_percentage
        scenario.annual_annuity = gross_annuity * (1 - scenario.mra_reduction)
        scenario.monthly_annuity = scenario.annual_annuity / 12

        scenario.is_supplement_eligible = (
            scenario.is_eligible
            and scenario_type in (ScenarioType.IMMEDIATE, ScenarioType.TERA)
            and age < self.fsps.supplement_end_age
            and ((age >= 50 and years >= 20)
                 or years >= 25
                 or (scenario_type is ScenarioType.TERA and tera_eligible))
        )
        if scenario.is_supplement_eligible:
            scenario.monthly_supplemental = self.supplement_monthly(grade, step, years, age)
            scenario.supplemental_annuity = scenario.monthly_supplemental * 12

        return scenario

    def _age62_comparison(self, high_three_average: float, years: float, age, mra_age: float) -> RetirementScenario:
        percentage = self.flat_annuity_percentage(years)
        annual = high_three_average * percentage
        return RetirementScenario(
            type=ScenarioType.MRA_PLUS_10,
            is_eligible=True,
            description="MRA+10 (wait until 62)",
            effective_years=years,
            annuity_percentage=percentage,
            monthly_annuity=annual / 12,
            annual_annuity=annual,
            mra_age=mra_age,
            mra_reduction=0.0,
            years_to_wait=self.fsps.unreduced_age - age,
        )

    def calculate(self,
                  grade: str,
                  step,
                  years_service,
                  age,
                  high_three: Optional[Sequence[float]],
                  post: str,
                  tera_eligible: bool = False,
                  tera_years_required: float = 10,
                  tera_age_required: float = 43,
                  sick_leave_duration: Optional[ServiceDuration] = None,
                  service_duration: Optional[ServiceDuration] = None,
                  as_of: Optional[date] = None) -> AnnuityResult:
        """Evaluate all four retirement scenarios and surface the best one.

        When no high-three salary is supplied (all zero or missing), the
        current salary including post allowance is used as the average.

        Raises:
            InvalidInputError: a required input is missing, the post is
                unknown, or ``high_three`` does not hold three salaries.
            UnknownGradeError: the grade is not in the salary table.
        """
        if not grade:
            raise InvalidInputError("Missing required input for annuity calculation: grade", field='grade')
        if not step:
            raise InvalidInputError("Missing required input for annuity calculation: step", field='step')
        if not age:
            raise InvalidInputError("Missing required input for annuity calculation: age", field='age')
        if not post:
            raise InvalidInputError("Missing required input for annuity calculation: post", field='post')
        if years_service is None and service_duration is None:
            raise InvalidInputError("Missing required input for annuity calculation: years_service",
                                    field='years_service')
        for value, field in ((tera_years_required, 'tera_years_required'),
                             (tera_age_required, 'tera_age_required')):
            if value is None:
                raise InvalidInputError(f"Missing required input for annuity calculation: {field}", field=field)
        salaries = list(high_three or [0, 0, 0])
        if len(salaries) != 3:
            raise InvalidInputError("High-three salaries must contain exactly three values", field='high_three')

        as_of = as_of or date.today()
        current_salary = self.salary_details.salary(grade, step)
        post_allowance_rate = self.fsps.post_allowance_rate(post)
        adjusted_salary = current_salary * (1 + post_allowance_rate)
        if any(s > 0 for s in salaries):
            high_three_average = sum(salaries) / 3
        else:
            high_three_average = adjusted_salary

        def evaluate(scenario_type: ScenarioType) -> RetirementScenario:
            return self.evaluate_scenario(
                scenario_type, high_three_average, years_service, age, grade, step,
                tera_eligible=tera_eligible,
                tera_years_required=tera_years_required,
                tera_age_required=tera_age_required,
                sick_leave_duration=sick_leave_duration,
                service_duration=service_duration,
                as_of=as_of,
            )

        scenarios = ScenarioSet(
            immediate=evaluate(ScenarioType.IMMEDIATE),
            tera=evaluate(ScenarioType.TERA),
            mra_plus_10=evaluate(ScenarioType.MRA_PLUS_10),
            deferred=evaluate(ScenarioType.DEFERRED),
        )
        return AnnuityResult(
            best=scenarios.best(),
            scenarios=scenarios,
            base_salary=current_salary,
            post=post,
            post_allowance_rate=post_allowance_rate,
            adjusted_salary=adjusted_salary,
            high_three_average=high_three_average,
            mra_age=self.mra_for_age(age, as_of),
            service_duration=service_duration,
            sick_leave_duration=sick_leave_duration,
        )
