import os
import sys
import json
import copy
from datetime import date
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.separation_calculator import SeparationCalculator, parse_as_of
from model.RetirementScenario import ScenarioType
from model.errors import InvalidInputError, UnknownGradeError, UnknownPlanError

AS_OF = date(2025, 6, 1)


def load_program_spec(name):
    spec_path = os.path.join(os.path.dirname(__file__), f'../input-parameters/{name}/spec.json')
    with open(spec_path, 'r') as f:
        return json.load(f)


@pytest.fixture(scope="module")
def calculator():
    return SeparationCalculator.from_reference()


@pytest.fixture
def program1():
    return load_program_spec('program1')


def test_program1_report(calculator, program1):
    report = calculator.calculate(program1, AS_OF)
    assert report.as_of == AS_OF
    assert report.grade == 'FS-02'
    assert report.step == 5
    assert report.rank is None
    assert report.years_of_service == 22
    assert report.service_duration is None
    assert report.service_reconciliation.used_computation_date is False

    # Capped at one year of base pay
    assert report.severance.severance_amount == 114121
    assert report.severance.annual_leave_payout == pytest.approx(114121 / 2087 * 240)
    assert report.severance.installments[0].date == date(2026, 1, 1)


def test_program1_retirement(calculator, program1):
    annuity = calculator.calculate(program1, AS_OF).annuity
    assert annuity.high_three_average == pytest.approx(145000)
    assert annuity.mra_age == 57

    immediate = annuity.scenarios.immediate
    # 22 years plus 1044 hours of sick leave (six months)
    assert immediate.effective_years == pytest.approx(22.5)
    assert immediate.annuity_percentage == pytest.approx(0.365)
    assert immediate.annual_annuity == pytest.approx(52925)
    assert immediate.is_supplement_eligible
    assert immediate.monthly_supplemental > 0

    assert annuity.scenarios.tera.is_eligible
    assert annuity.scenarios.deferred.effective_years == pytest.approx(22)
    assert annuity.best.type is ScenarioType.IMMEDIATE


def test_program1_health(calculator, program1):
    health = calculator.calculate(program1, AS_OF).health
    assert health.plan_key == 'GEHA-standard'
    assert health.aca.monthly == 286


def test_calculation_is_repeatable(calculator, program1):
    first = calculator.calculate(program1, AS_OF)
    second = calculator.calculate(program1, AS_OF)
    assert first == second


def test_spec_is_not_modified(calculator, program1):
    original = copy.deepcopy(program1)
    calculator.calculate(program1, AS_OF)
    assert program1 == original


def test_computation_date_program(calculator):
    spec = load_program_spec('quickexample')
    report = calculator.calculate(spec, date(2025, 9, 7))
    assert report.rank == 'Minister Counselor'
    assert report.service_duration.years == 26
    assert report.service_reconciliation.used_computation_date is True
    assert report.years_of_service == pytest.approx(9497 / 365.25)
    assert report.severance.base_salary == 192100
    assert report.severance.is_eligible is False
    assert report.severance.severance_amount == 0
    assert report.annuity.scenarios.immediate.description == "Immediate retirement (Senior Grade)"
    assert report.annuity.high_three_average == pytest.approx(192100 * 1.3394)
    assert report.sick_leave_duration is None


def test_discrepancy_between_manual_years_and_date(calculator, program1):
    program1['employee']['serviceComputationDate'] = '2005-06-01'
    report = calculator.calculate(program1, AS_OF)
    reconciliation = report.service_reconciliation
    assert reconciliation.discrepancy is True
    assert "Computation date will be used." in reconciliation.message
    assert report.years_of_service == pytest.approx(report.service_duration.total_years)
    assert report.service_duration.years == 20


def test_health_is_optional(calculator, program1):
    del program1['health']
    report = calculator.calculate(program1, AS_OF)
    assert report.health is None
    assert report.severance is not None


def test_missing_service_inputs_raise(calculator, program1):
    del program1['employee']['yearsOfService']
    with pytest.raises(InvalidInputError) as exc:
        calculator.calculate(program1, AS_OF)
    assert exc.value.field == 'years_service'


def test_missing_sections_default(calculator):
    spec = {'employee': {'grade': 'FS-03', 'step': 2, 'age': 40, 'yearsOfService': 8}}
    report = calculator.calculate(spec, AS_OF)
    assert report.severance.annual_leave_payout == 0
    assert report.sick_leave_duration is None
    assert not report.annuity.scenarios.tera.is_eligible
    assert report.annuity.post == "Washington, DC"


def test_null_tera_thresholds_use_defaults(calculator, program1):
    program1['tera']['ageRequired'] = None
    program1['tera']['yearsRequired'] = None
    tera = calculator.calculate(program1, AS_OF).annuity.scenarios.tera
    assert tera.is_eligible
    assert tera.description == "V/TERA retirement (age 43 with 10 years)"


def test_null_sections_are_treated_as_absent(calculator, program1):
    program1['tera'] = None
    program1['leave'] = None
    report = calculator.calculate(program1, AS_OF)
    assert not report.annuity.scenarios.tera.is_eligible
    assert report.severance.annual_leave_payout == 0


def test_unknown_grade_raises(calculator, program1):
    program1['employee']['grade'] = 'FS-07'
    with pytest.raises(UnknownGradeError):
        calculator.calculate(program1, AS_OF)


def test_unknown_plan_raises(calculator, program1):
    program1['health']['plan'] = 'NOPE-standard'
    with pytest.raises(UnknownPlanError):
        calculator.calculate(program1, AS_OF)


def test_parse_as_of():
    assert parse_as_of('2026-01-15') == date(2026, 1, 15)
    assert parse_as_of(None) is None
    assert parse_as_of('') is None
    with pytest.raises(ValueError):
        parse_as_of('01/15/2026')
