import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))
from calc.career_simulator import CareerSimulator
from schedules.CareerProgressionDetails import CareerProgressionDetails


def small_ladder(maximum_years=40):
    return CareerProgressionDetails({
        'gradeSequence': ['A', 'B'],
        'maximumSimulatedYears': maximum_years,
        'grades': {
            'A': {'baseStep': 100, 'stepIncrement': 10, 'maxStep': 2},
            'B': {'baseStep': 1000, 'stepIncrement': 0, 'maxStep': 1},
        },
    })


def test_zero_years_averages_zero():
    result = CareerSimulator(CareerProgressionDetails()).simulate('FS-02', 5, 0)
    assert result.average_annual_salary == 0
    assert result.years_in_service == 0


def test_first_year_is_entry_salary():
    result = CareerSimulator(CareerProgressionDetails()).simulate('FS-01', 3, 1)
    assert result.average_annual_salary == 66574
    assert result.years_in_service == 1


def test_simulation_ignores_starting_grade():
    simulator = CareerSimulator(CareerProgressionDetails())
    low = simulator.simulate('FS-04', 1, 10)
    high = simulator.simulate('SFS', 14, 10)
    assert low.average_annual_salary == high.average_annual_salary
    assert high.final_grade == 'SFS'
    assert high.final_step == 14


def test_promotion_after_max_step():
    result = CareerSimulator(small_ladder()).simulate('A', 1, 3)
    # A1 = 100, A2 = 110, then B1 = 1000
    assert result.average_annual_salary == pytest.approx((100 + 110 + 1000) / 3)


def test_last_grade_never_promotes():
    result = CareerSimulator(small_ladder()).simulate('A', 1, 4)
    assert result.average_annual_salary == pytest.approx((100 + 110 + 1000 + 1000) / 4)


def test_simulation_is_capped():
    result = CareerSimulator(small_ladder(maximum_years=2)).simulate('A', 1, 30)
    assert result.years_in_service == 2
    assert result.average_annual_salary == pytest.approx(105)


def test_fractional_years_round_up_to_whole_simulated_year():
    result = CareerSimulator(small_ladder()).simulate('A', 1, 1.5)
    assert result.years_in_service == 2


def test_full_career_average():
    progression = CareerProgressionDetails()
    result = CareerSimulator(progression).simulate('FS-02', 5, 22)
    fs04 = sum(progression.salary('FS-04', s) for s in range(1, 15))
    fs03 = sum(progression.salary('FS-03', s) for s in range(1, 9))
    assert result.average_annual_salary == pytest.approx((fs04 + fs03) / 22)
