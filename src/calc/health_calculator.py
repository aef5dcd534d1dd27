import math
from typing import Optional

from model.HealthEstimate import ACAEstimate, CobraCost, HealthEstimate
from model.errors import InvalidInputError
from schedules.HealthPlanDetails import HealthPlanDetails


def round_half_up(amount: float) -> int:
    return math.floor(amount + 0.5)


class HealthInsuranceCalculator:
    """Compares keeping FEHB through COBRA with buying an ACA marketplace plan.

    The ACA estimate starts from the full FEHB premium (COBRA rate with the
    administrative fee removed) and applies a state adjustment factor.
    Deductible and out-of-pocket figures come from the coverage tier and
    the plan option encoded in the plan key.
    """

    def __init__(self, health_details: HealthPlanDetails):
        self.health_details = health_details

    def calculate(self, plan_key: str, coverage_type: str, state: Optional[str] = None) -> HealthEstimate:
        for value, field in ((plan_key, 'plan'), (coverage_type, 'coverage_type')):
            if not value:
                raise InvalidInputError(f"Missing required health insurance parameter: {field}", field=field)

        details = self.health_details
        fehb = details.rates(plan_key, coverage_type)

        cobra_monthly = fehb.cobra
        cobra = CobraCost(
            monthly=cobra_monthly,
            duration=details.cobra_duration_months,
            total_cost=cobra_monthly * details.cobra_duration_months,
        )

        total_monthly_premium = cobra_monthly / (1 + details.cobra_admin_fee)
        state_factor = details.state_factor(state)
        plan_option = details.plan_option(plan_key)
        deductible, out_of_pocket = details.cost_sharing(coverage_type, plan_option)
        aca = ACAEstimate(
            monthly=round_half_up(total_monthly_premium * state_factor),
            deductible=deductible,
            out_of_pocket=out_of_pocket,
            total_premium_base=total_monthly_premium,
            state_factor=state_factor,
        )

        return HealthEstimate(
            plan_key=plan_key,
            plan_option=plan_option,
            coverage_type=coverage_type,
            state=state,
            fehb=fehb,
            cobra=cobra,
            aca=aca,
            recommendations=self.recommendations(cobra, aca, plan_option),
        )

    @staticmethod
    def recommendations(cobra: CobraCost, aca: ACAEstimate, plan_option: str) -> list:
        recommendations = []
        if cobra.monthly < aca.monthly:
            recommendations.append(
                f"COBRA coverage may be more cost-effective initially, providing {cobra.duration} "
                "months of your current coverage."
            )
        else:
            recommendations.append(
                "ACA marketplace plans may offer more affordable monthly premiums than COBRA."
            )

        if plan_option == 'high':
            recommendations.append(
                "Your current high-option plan suggests you may benefit from comprehensive coverage. "
                "Consider similar coverage levels when comparing marketplace plans."
            )
        else:
            recommendations.append(
                "Your current plan choice suggests you may prefer lower monthly premiums. "
                "Look for bronze or silver marketplace plans to maintain similar cost structure."
            )

        recommendations.append("Compare plan networks to ensure your preferred healthcare providers are covered.")
        recommendations.append("Consider any upcoming medical needs when choosing between COBRA and marketplace plans.")
        recommendations.append("Check if you qualify for ACA premium tax credits based on your expected income.")
        return recommendations
