import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from schedules.FSPSDetails import FSPSDetails
from model.errors import InvalidInputError


@pytest.fixture(scope="module")
def fsps():
    return FSPSDetails()


def test_statutory_constants(fsps):
    assert fsps.enhanced_multiplier == 0.017
    assert fsps.enhanced_years == 20
    assert fsps.standard_multiplier == 0.01
    assert fsps.unreduced_age == 62
    assert fsps.supplement_max_monthly == 3627


@pytest.mark.parametrize("birth_year,expected", [
    (1940, 55),
    (1945, 55),
    (1947, 55),
    (1948, 55 + 2 / 12),
    (1958, 55 + 22 / 12),
    (1969, 55 + 44 / 12),
    (1970, 57),
    (1975, 57),
])
def test_minimum_retirement_age(fsps, birth_year, expected):
    assert fsps.minimum_retirement_age(birth_year) == pytest.approx(expected)


def test_mra_grows_two_months_per_year_until_1969(fsps):
    ages = [fsps.minimum_retirement_age(year) for year in range(1947, 1970)]
    steps = [later - earlier for earlier, later in zip(ages, ages[1:])]
    assert steps == pytest.approx([2 / 12] * len(steps))


def test_mra_is_57_from_1970(fsps):
    for year in range(1970, 1990):
        assert fsps.minimum_retirement_age(year) == 57
    assert fsps.minimum_retirement_age(1969) > fsps.minimum_retirement_age(1970)


def test_post_allowance_rate(fsps):
    assert fsps.post_allowance_rate("Washington, DC") == pytest.approx(0.3394)


def test_unknown_post_raises(fsps):
    with pytest.raises(InvalidInputError) as exc:
        fsps.post_allowance_rate("Ulaanbaatar")
    assert exc.value.field == 'post'


def test_injected_details_use_defaults_for_missing_sections():
    fsps = FSPSDetails({'postAllowances': {'Somewhere': 10}})
    assert fsps.post_allowance_rate('Somewhere') == pytest.approx(0.10)
    assert fsps.mra_base_age == 55
    assert fsps.deferred_minimum_years == 5
