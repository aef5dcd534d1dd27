from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from model.ServiceDuration import ServiceDuration


@dataclass
class Installment:
    amount: float
    date: date


@dataclass
class SeveranceResult:
    base_salary: float
    monthly_pay: float
    severance_amount: float
    installments: List[Installment] = field(default_factory=list)
    hourly_rate: float = 0.0
    annual_leave_hours: float = 0.0
    annual_leave_payout: float = 0.0
    years_of_service: float = 0.0  # Effective years actually used
    service_duration: Optional[ServiceDuration] = None
    is_eligible: bool = True
    eligibility_note: str = ""

    @property
    def total_installments(self) -> float:
        return sum(i.amount for i in self.installments)
