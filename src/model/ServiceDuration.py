from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ServiceDuration:
    """A length of creditable service broken into calendar-like parts.

    ``total_days`` is only known for durations measured from a service
    computation date; sick-leave credit has no day count.
    """
    years: int
    months: int
    days: int
    total_years: float
    total_days: Optional[int] = None


@dataclass
class ServiceReconciliation:
    """Outcome of comparing a manual year count with a computation date."""
    years_of_service: float
    used_computation_date: bool = False
    discrepancy: bool = False
    message: str = ""
