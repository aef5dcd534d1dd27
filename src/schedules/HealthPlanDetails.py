import os
import json
from typing import Optional

from model.HealthEstimate import FEHBRates
from model.errors import UnknownPlanError, UnknownStateError


class HealthPlanDetails:
    """FEHB rates, COBRA terms and ACA marketplace adjustment tables.

    Stored COBRA rates already include the 2% administrative fee; the
    combined employer and employee premium is recovered by dividing it out.
    """

    def __init__(self, details: Optional[dict] = None):
        if details is None:
            ref_path = os.path.join(os.path.dirname(__file__), '../../reference/health-insurance.json')
            with open(ref_path, 'r') as f:
                details = json.load(f)

        self.plan_year = details.get('planYear')
        self.cobra_admin_fee = details.get('cobraAdminFee', 0.02)
        self.cobra_duration_months = details.get('cobraDurationMonths', 18)
        self.default_plan_option = details.get('defaultPlanOption', 'standard')
        self.fallback_plan_option = details.get('fallbackPlanOption', 'basic')
        self.plans = details.get('plans', {})
        self.state_factors = details.get('stateAcaFactors', {'default': 1.0})
        self.coverage_factors = details.get('acaCoverageFactors', {})

    def plan_keys(self) -> list:
        return list(self.plans.keys())

    def coverage_types(self) -> list:
        return list(self.coverage_factors.keys())

    def state_codes(self) -> list:
        return sorted(code for code in self.state_factors if code != 'default')

    def rates(self, plan_key: str, coverage_type: str) -> FEHBRates:
        plan = self.plans.get(plan_key)
        if plan is None:
            raise UnknownPlanError(f"Invalid health insurance plan: {plan_key}",
                                   plan_key=plan_key, coverage_type=coverage_type)
        rates = plan.get(coverage_type)
        if rates is None:
            raise UnknownPlanError(f"Invalid coverage type {coverage_type} for plan {plan_key}",
                                   plan_key=plan_key, coverage_type=coverage_type)
        return FEHBRates(monthly=rates['monthly'], cobra=rates['cobra'])

    def state_factor(self, state: str, strict: bool = False) -> float:
        """ACA premium factor for a state; unknown states get the default.

        With ``strict=True`` an unknown state raises UnknownStateError instead.
        """
        if state in self.state_factors and state != 'default':
            return self.state_factors[state]
        if strict:
            raise UnknownStateError(f"Invalid state: {state}")
        return self.state_factors.get('default', 1.0)

    def plan_option(self, plan_key: str) -> str:
        """The option suffix after the hyphen in a plan key ('BCBS-basic' -> 'basic')."""
        if '-' in plan_key:
            return plan_key.split('-')[1]
        return self.default_plan_option

    def cost_sharing(self, coverage_type: str, plan_option: str) -> tuple:
        """Return (deductible, out_of_pocket) for a coverage tier and plan option."""
        factors = self.coverage_factors.get(coverage_type)
        if factors is None:
            raise UnknownPlanError(f"Missing ACA coverage factors for type: {coverage_type}",
                                   coverage_type=coverage_type)
        deductibles = factors.get('deductible', {})
        out_of_pocket = factors.get('outOfPocket', {})
        option = plan_option if plan_option in deductibles else self.fallback_plan_option
        return deductibles.get(option, 0), out_of_pocket.get(option, 0)
