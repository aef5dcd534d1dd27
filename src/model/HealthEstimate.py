from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class FEHBRates:
    monthly: float  # Employee share of the current FEHB premium
    cobra: float    # Full premium plus the 2% COBRA administrative fee


@dataclass
class CobraCost:
    monthly: float
    duration: int = 18
    total_cost: float = 0.0


@dataclass
class ACAEstimate:
    monthly: float
    deductible: float
    out_of_pocket: float
    total_premium_base: float  # Employer + employee premium without the COBRA fee
    state_factor: float = 1.0


@dataclass
class HealthEstimate:
    plan_key: str
    plan_option: str
    coverage_type: str
    state: Optional[str]
    fehb: FEHBRates
    cobra: CobraCost
    aca: ACAEstimate
    recommendations: List[str] = field(default_factory=list)

    @property
    def cobra_is_cheaper(self) -> bool:
        return self.cobra.monthly < self.aca.monthly
