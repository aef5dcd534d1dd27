import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from schedules.HealthPlanDetails import HealthPlanDetails
from model.errors import UnknownPlanError, UnknownStateError, InvalidPlanError


@pytest.fixture(scope="module")
def health():
    return HealthPlanDetails()


def test_rates_lookup(health):
    rates = health.rates('GEHA-standard', 'self')
    assert rates.monthly == 71.40
    assert rates.cobra == pytest.approx(291.312)


def test_cobra_rates_include_admin_fee(health):
    # Stored COBRA rates are the full premium with the 2% fee already applied
    for plan in health.plan_keys():
        for coverage in ('self', 'self-plus-one', 'family'):
            rates = health.rates(plan, coverage)
            assert rates.cobra > rates.monthly


def test_unknown_plan_raises(health):
    with pytest.raises(UnknownPlanError) as exc:
        health.rates('KAISER-gold', 'self')
    assert exc.value.plan_key == 'KAISER-gold'
    assert str(exc.value) == "Invalid health insurance plan: KAISER-gold"


def test_unknown_coverage_raises(health):
    with pytest.raises(InvalidPlanError):
        health.rates('GEHA-standard', 'extended-family')


def test_state_factor(health):
    assert health.state_factor('MD') == 0.96
    assert health.state_factor('AK') == 1.15


def test_unknown_state_uses_default(health):
    assert health.state_factor('ZZ') == 1.0


def test_strict_state_lookup_raises(health):
    with pytest.raises(UnknownStateError):
        health.state_factor('ZZ', strict=True)


def test_state_codes_exclude_default(health):
    codes = health.state_codes()
    assert 'default' not in codes
    assert 'DC' in codes
    assert len(codes) == 51


@pytest.mark.parametrize("plan_key,option", [
    ('BCBS-basic', 'basic'),
    ('GEHA-standard', 'standard'),
    ('AETNA-direct', 'direct'),
    ('Compass Rose', 'standard'),
])
def test_plan_option(health, plan_key, option):
    assert health.plan_option(plan_key) == option


def test_cost_sharing(health):
    assert health.cost_sharing('self', 'standard') == (2500, 6000)
    assert health.cost_sharing('self', 'high') == (1500, 4000)


def test_cost_sharing_falls_back_to_basic(health):
    assert health.cost_sharing('self', 'direct') == health.cost_sharing('self', 'basic')
