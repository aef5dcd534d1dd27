"""Service duration helpers.

Durations are derived either from a service computation date (measured
against an ``as_of`` date the caller captures once) or from a sick-leave
balance, where 2087 hours count as one year of service.
"""

import math
from datetime import date, datetime
from typing import Optional, Union

from model.ServiceDuration import ServiceDuration, ServiceReconciliation


DAYS_PER_YEAR = 365.25
DAYS_PER_MONTH = 30.44
WORK_HOURS_PER_YEAR = 2087


def _parse_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def _decompose(total_days: int) -> tuple:
    years = math.floor(total_days / DAYS_PER_YEAR)
    remaining_days = total_days - years * DAYS_PER_YEAR
    months = math.floor(remaining_days / DAYS_PER_MONTH)
    days = math.floor(remaining_days - months * DAYS_PER_MONTH)
    return years, months, days


def duration_from_date(computation_date: Union[date, str], as_of: date) -> ServiceDuration:
    """Duration between a service computation date and ``as_of``."""
    start = _parse_date(computation_date)
    total_days = abs((as_of - start).days)
    years, months, days = _decompose(total_days)
    return ServiceDuration(
        years=years,
        months=months,
        days=days,
        total_years=total_days / DAYS_PER_YEAR,
        total_days=total_days,
    )


def duration_from_sick_leave_hours(hours) -> Optional[ServiceDuration]:
    """Service credit for an unused sick-leave balance, or None if there is none."""
    if not hours or hours <= 0:
        return None
    total_days = math.floor((hours / WORK_HOURS_PER_YEAR) * DAYS_PER_YEAR)
    years, months, days = _decompose(total_days)
    return ServiceDuration(
        years=years,
        months=months,
        days=days,
        total_years=total_days / DAYS_PER_YEAR,
    )


def calculate_service_duration(computation_date, as_of: Optional[date] = None) -> Optional[ServiceDuration]:
    if not computation_date:
        return None
    return duration_from_date(computation_date, as_of or date.today())


def round_to_months(years: float) -> float:
    """Round fractional years to the nearest whole month."""
    return math.floor(years * 12 + 0.5) / 12


def reconcile_service_years(manual_years, duration: Optional[ServiceDuration]) -> ServiceReconciliation:
    """Pick the years of service to use when both inputs may be present.

    The computation date always wins. A gap of more than one month between
    the two is flagged so the caller can warn, but it is not an error.
    """
    if duration is None:
        return ServiceReconciliation(years_of_service=manual_years or 0)

    reconciliation = ServiceReconciliation(
        years_of_service=duration.total_years,
        used_computation_date=True,
    )
    if manual_years is None:
        return reconciliation

    if abs(duration.total_years - manual_years) > 1 / 12:
        whole_years = math.floor(duration.total_years)
        months = round((duration.total_years - whole_years) * 12)
        reconciliation.discrepancy = True
        reconciliation.message = (
            f"Computation date gives {whole_years} years, {months} months vs. "
            f"manual entry of {manual_years} years. Computation date will be used."
        )
    return reconciliation
