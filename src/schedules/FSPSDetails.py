import os
import json
from typing import Optional

from model.errors import InvalidInputError


class FSPSDetails:
    """Foreign Service Pension System statutory values.

    Holds annuity multipliers, the Minimum Retirement Age schedule, MRA+10
    reduction rules, the Special Retirement Supplement parameters and post
    allowance rates, all read from ``reference/fsps-details.json``.
    """

    def __init__(self, details: Optional[dict] = None):
        if details is None:
            ref_path = os.path.join(os.path.dirname(__file__), '../../reference/fsps-details.json')
            with open(ref_path, 'r') as f:
                details = json.load(f)

        annuity = details.get('annuity', {})
        self.enhanced_multiplier = annuity.get('enhancedMultiplier', 0.017)
        self.enhanced_years = annuity.get('enhancedYears', 20)
        self.standard_multiplier = annuity.get('standardMultiplier', 0.01)

        mra = details.get('mra', {})
        self.mra_base_age = mra.get('baseAge', 55)
        self.mra_maximum_age = mra.get('maximumAge', 57)
        self.mra_base_birth_year = mra.get('baseBirthYear', 1947)
        self.mra_final_birth_year = mra.get('finalBirthYear', 1970)
        self.mra_months_per_birth_year = mra.get('monthsPerBirthYear', 2)

        mra_plus_ten = details.get('mraPlusTen', {})
        self.mra_plus_ten_minimum_years = mra_plus_ten.get('minimumYears', 10)
        self.mra_reduction_per_year = mra_plus_ten.get('reductionPerYear', 0.05)
        self.unreduced_age = mra_plus_ten.get('unreducedAge', 62)

        deferred = details.get('deferred', {})
        self.deferred_minimum_years = deferred.get('minimumYears', 5)
        self.deferred_enhanced_age = deferred.get('enhancedMultiplierAge', 65)

        supplement = details.get('supplement', {})
        self.supplement_end_age = supplement.get('endAge', 62)
        self.supplement_earnings_factor = supplement.get('earningsFactor', 0.4)
        self.supplement_full_service_years = supplement.get('fullServiceYears', 30)
        self.supplement_max_monthly = supplement.get('maxMonthlyBenefit', 3627)

        self.post_allowances = dict(details.get('postAllowances', {}))

    def post_allowance_rate(self, post: str) -> float:
        """Return the post allowance for ``post`` as a fraction (33.94% -> 0.3394)."""
        if post not in self.post_allowances:
            raise InvalidInputError(f"Unknown post: {post}", field='post')
        return self.post_allowances[post] / 100

    def minimum_retirement_age(self, birth_year: int) -> float:
        """Minimum Retirement Age for a birth year.

        55 through 1947, 57 from 1970, and two months more per year between.
        """
        if birth_year <= self.mra_base_birth_year:
            return self.mra_base_age
        if birth_year >= self.mra_final_birth_year:
            return self.mra_maximum_age
        additional_months = (birth_year - self.mra_base_birth_year) * self.mra_months_per_birth_year
        return self.mra_base_age + additional_months / 12
