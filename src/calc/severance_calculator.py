from datetime import date
from typing import Optional

from model.ServiceDuration import ServiceDuration
from model.SeveranceResult import Installment, SeveranceResult
from model.errors import InvalidInputError
from schedules.SalaryDetails import SENIOR_GRADES, SalaryDetails
from calc.service_duration import WORK_HOURS_PER_YEAR


INSTALLMENT_COUNT = 3
SENIOR_EXCLUSION_NOTE = (
    "Severance pay is not available for FS-01 and Senior Foreign Service members "
    "who are involuntarily separated, as they are eligible for immediate retirement."
)


class SeveranceCalculator:
    """Severance pay for an involuntarily separated Foreign Service member.

    One month of base salary per year of service, capped at one year of
    base salary, paid in three equal installments on January 1 of each of
    the following three years. Post allowances are not included. FS-01 and
    SFS members receive no severance, only the annual leave payout.
    """

    def __init__(self, salary_details: SalaryDetails):
        self.salary_details = salary_details

    def calculate(self,
                  grade: str,
                  step,
                  years_service,
                  age,
                  post: str,
                  annual_leave_hours: float = 0,
                  service_duration: Optional[ServiceDuration] = None,
                  as_of: Optional[date] = None) -> SeveranceResult:
        """Calculate severance, installments and the annual leave payout.

        Args:
            grade: Salary table grade, e.g. 'FS-02' or 'SFS'.
            step: Step 1-14 (SFS steps map to ranks).
            years_service: Whole or fractional years; ignored when
                ``service_duration`` is given. Zero is allowed.
            age: Age in years.
            post: Assignment post; required but not used in the amount.
            annual_leave_hours: Unused annual leave to be paid out.
            service_duration: Duration from a service computation date.
            as_of: Calculation date; installments start the following year.

        Raises:
            InvalidInputError: a required input is missing or out of range.
            UnknownGradeError: the grade is not in the salary table.
        """
        for value, field in ((grade, 'grade'), (step, 'step'), (age, 'age'), (post, 'post')):
            if not value:
                raise InvalidInputError(f"Missing required input for severance calculation: {field}", field=field)
        if years_service is None:
            raise InvalidInputError("Missing required input for severance calculation: years_service", field='years_service')
        if years_service < 0:
            raise InvalidInputError("Years of service cannot be negative", field='years_service')

        as_of = as_of or date.today()
        base_salary = self.salary_details.salary(grade, step)
        monthly_pay = base_salary / 12
        effective_years = service_duration.total_years if service_duration else years_service
        is_eligible = grade not in SENIOR_GRADES

        severance_amount = 0.0
        installments = []
        if is_eligible:
            severance_amount = min(monthly_pay * effective_years, base_salary)
            installment_amount = severance_amount / INSTALLMENT_COUNT
            installments = [
                Installment(amount=installment_amount, date=date(as_of.year + n, 1, 1))
                for n in range(1, INSTALLMENT_COUNT + 1)
            ]

        leave_hours = annual_leave_hours or 0
        hourly_rate = base_salary / WORK_HOURS_PER_YEAR
        return SeveranceResult(
            base_salary=base_salary,
            monthly_pay=monthly_pay,
            severance_amount=severance_amount,
            installments=installments,
            hourly_rate=hourly_rate,
            annual_leave_hours=leave_hours,
            annual_leave_payout=hourly_rate * leave_hours,
            years_of_service=effective_years,
            service_duration=service_duration,
            is_eligible=is_eligible,
            eligibility_note="" if is_eligible else SENIOR_EXCLUSION_NOTE,
        )
