"""Retirement scenario results for the Foreign Service Pension System.

Every request evaluates the same four retirement paths. They are held in a
``ScenarioSet`` with one named field per path rather than a free-form
collection, so the set is always complete and always iterates in the same
order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from model.ServiceDuration import ServiceDuration


class ScenarioType(Enum):
    IMMEDIATE = "immediate"
    TERA = "tera"
    MRA_PLUS_10 = "mra+10"
    DEFERRED = "deferred"

    @property
    def label(self) -> str:
        return SCENARIO_LABELS[self]


SCENARIO_LABELS = {
    ScenarioType.IMMEDIATE: "Immediate Retirement",
    ScenarioType.TERA: "V/TERA Early Retirement",
    ScenarioType.MRA_PLUS_10: "MRA+10 Retirement",
    ScenarioType.DEFERRED: "Deferred Retirement",
}


@dataclass
class RetirementScenario:
    """Eligibility and annuity amounts for one retirement path."""
    type: ScenarioType
    is_eligible: bool = False
    description: str = ""
    effective_years: float = 0.0
    annuity_percentage: float = 0.0
    monthly_annuity: float = 0.0
    annual_annuity: float = 0.0
    mra_age: float = 0.0
    mra_reduction: float = 0.0  # Fraction of the gross annuity, 0-1
    is_supplement_eligible: bool = False
    supplemental_annuity: float = 0.0
    monthly_supplemental: float = 0.0
    age62_comparison: Optional['RetirementScenario'] = None
    years_to_wait: Optional[float] = None  # Set only on the age-62 comparison

    @property
    def monthly_total(self) -> float:
        """Monthly annuity plus any Special Retirement Supplement."""
        return self.monthly_annuity + self.monthly_supplemental


@dataclass
class ScenarioSet:
    immediate: RetirementScenario
    tera: RetirementScenario
    mra_plus_10: RetirementScenario
    deferred: RetirementScenario

    def __iter__(self) -> Iterator[RetirementScenario]:
        return iter((self.immediate, self.tera, self.mra_plus_10, self.deferred))

    def get(self, scenario_type: ScenarioType) -> RetirementScenario:
        if scenario_type is ScenarioType.IMMEDIATE:
            return self.immediate
        if scenario_type is ScenarioType.TERA:
            return self.tera
        if scenario_type is ScenarioType.MRA_PLUS_10:
            return self.mra_plus_10
        return self.deferred

    def best(self) -> RetirementScenario:
        """Return the scenario with the highest monthly annuity.

        Ties keep the earlier scenario (immediate, tera, mra+10, deferred).
        """
        best = self.immediate
        for candidate in (self.tera, self.mra_plus_10, self.deferred):
            if candidate.monthly_annuity > best.monthly_annuity:
                best = candidate
        return best

    def eligible(self) -> list:
        return [s for s in self if s.is_eligible]


@dataclass
class AnnuityResult:
    best: RetirementScenario
    scenarios: ScenarioSet
    base_salary: float
    post: str
    post_allowance_rate: float
    adjusted_salary: float
    high_three_average: float
    mra_age: float
    service_duration: Optional[ServiceDuration] = None
    sick_leave_duration: Optional[ServiceDuration] = None


@dataclass
class CareerSimulation:
    average_annual_salary: float
    years_in_service: int
    final_grade: str
    final_step: int
