import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.health_calculator import HealthInsuranceCalculator, round_half_up
from calc.separation_calculator import calculate_health_insurance
from schedules.HealthPlanDetails import HealthPlanDetails
from model.errors import InvalidInputError, UnknownPlanError


def injected_tables(state_factors):
    return HealthPlanDetails({
        'plans': {
            'TEST-high': {'self': {'monthly': 50, 'cobra': 102}},
            'TEST-basic': {'self': {'monthly': 40, 'cobra': 204}},
        },
        'stateAcaFactors': state_factors,
        'acaCoverageFactors': {
            'self': {
                'deductible': {'high': 1500, 'basic': 3000},
                'outOfPocket': {'high': 4000, 'basic': 7000},
            }
        },
    })


@pytest.fixture(scope="module")
def calculator():
    return HealthInsuranceCalculator(HealthPlanDetails())


def test_geha_standard_self_in_virginia(calculator):
    result = calculator.calculate('GEHA-standard', 'self', 'VA')
    assert result.fehb.monthly == 71.40
    assert result.cobra.monthly == pytest.approx(291.312)
    assert result.cobra.duration == 18
    assert result.cobra.total_cost == pytest.approx(291.312 * 18)
    # 291.312 / 1.02 = 285.60, state factor 1.00
    assert result.aca.total_premium_base == pytest.approx(285.6)
    assert result.aca.monthly == 286
    assert result.aca.deductible == 2500
    assert result.aca.out_of_pocket == 6000
    assert result.plan_option == 'standard'


def test_recommendations(calculator):
    result = calculator.calculate('GEHA-standard', 'self', 'VA')
    assert len(result.recommendations) == 5
    assert result.recommendations[0] == (
        "ACA marketplace plans may offer more affordable monthly premiums than COBRA."
    )
    assert "lower monthly premiums" in result.recommendations[1]
    assert not result.cobra_is_cheaper


def test_aca_scales_linearly_with_state_factor():
    calculator = HealthInsuranceCalculator(injected_tables({'default': 1.0, 'AA': 1.5, 'BB': 0.5}))
    base = calculator.calculate('TEST-high', 'self', 'AA')
    assert base.aca.total_premium_base == pytest.approx(100)
    assert base.aca.monthly == 150
    assert calculator.calculate('TEST-high', 'self', 'BB').aca.monthly == 50
    assert calculator.calculate('TEST-basic', 'self', 'AA').aca.monthly == 300


def test_unknown_state_uses_default_factor():
    calculator = HealthInsuranceCalculator(injected_tables({'default': 1.0, 'AA': 1.5}))
    result = calculator.calculate('TEST-high', 'self', 'ZZ')
    assert result.aca.state_factor == 1.0
    assert result.aca.monthly == 100


@pytest.mark.parametrize("state", [None, ''])
def test_missing_state_uses_default_factor(state):
    calculator = HealthInsuranceCalculator(injected_tables({'default': 1.0, 'AA': 1.5}))
    result = calculator.calculate('TEST-high', 'self', state)
    assert result.aca.state_factor == 1.0
    assert result.aca.monthly == 100


def test_module_entry_point_without_state():
    result = calculate_health_insurance('GEHA-standard', 'self', None)
    assert result.aca.monthly == 286


def test_cheaper_cobra_recommendation_and_high_option():
    calculator = HealthInsuranceCalculator(injected_tables({'default': 1.0, 'AA': 1.5}))
    result = calculator.calculate('TEST-high', 'self', 'AA')
    assert result.cobra_is_cheaper
    assert result.recommendations[0] == (
        "COBRA coverage may be more cost-effective initially, providing 18 "
        "months of your current coverage."
    )
    assert "high-option plan" in result.recommendations[1]
    assert result.aca.deductible == 1500


@pytest.mark.parametrize("plan,coverage,state", [
    ('', 'self', 'VA'),
    ('GEHA-standard', '', 'VA'),
    (None, 'self', 'VA'),
])
def test_missing_input_raises(calculator, plan, coverage, state):
    with pytest.raises(InvalidInputError):
        calculator.calculate(plan, coverage, state)


def test_unknown_plan_raises(calculator):
    with pytest.raises(UnknownPlanError):
        calculator.calculate('NOPE-standard', 'self', 'VA')


@pytest.mark.parametrize("amount,expected", [
    (2.5, 3),
    (2.4999, 2),
    (285.6, 286),
    (0, 0),
])
def test_round_half_up(amount, expected):
    assert round_half_up(amount) == expected


def test_module_entry_point():
    result = calculate_health_insurance('BCBS-basic', 'family', 'MD')
    assert result.plan_option == 'basic'
    assert result.aca.monthly == round_half_up(2019.3756 / 1.02 * 0.96)
