"""Aggregate result for one separation calculation request."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from model.ServiceDuration import ServiceDuration, ServiceReconciliation
from model.SeveranceResult import SeveranceResult
from model.RetirementScenario import AnnuityResult
from model.HealthEstimate import HealthEstimate


@dataclass
class SeparationReport:
    """Everything calculated for a single employee as of one date.

    Health estimates are computed independently of the employment inputs,
    so ``health`` is None when the spec carries no health section.
    """
    as_of: date
    grade: str
    step: int
    age: int
    years_of_service: float
    rank: Optional[str] = None
    service_duration: Optional[ServiceDuration] = None
    sick_leave_duration: Optional[ServiceDuration] = None
    service_reconciliation: Optional[ServiceReconciliation] = None
    severance: Optional[SeveranceResult] = None
    annuity: Optional[AnnuityResult] = None
    health: Optional[HealthEstimate] = None
