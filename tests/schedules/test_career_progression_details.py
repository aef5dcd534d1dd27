import os
import sys
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from schedules.CareerProgressionDetails import CareerProgressionDetails


def test_grade_sequence_runs_entry_to_senior():
    progression = CareerProgressionDetails()
    assert progression.grade_sequence == ('FS-04', 'FS-03', 'FS-02', 'FS-01', 'SFS')
    assert progression.maximum_simulated_years == 40


def test_salary_is_linear_in_step():
    progression = CareerProgressionDetails()
    assert progression.salary('FS-04', 1) == 66574
    assert progression.salary('FS-04', 3) == 66574 + 2 * 2000


def test_next_grade():
    progression = CareerProgressionDetails()
    assert progression.next_grade('FS-04') == 'FS-03'
    assert progression.next_grade('SFS') is None


def test_empty_sequence_is_rejected():
    with pytest.raises(ValueError):
        CareerProgressionDetails({'gradeSequence': [], 'grades': {}})


def test_sequence_grade_without_entry_is_rejected():
    with pytest.raises(ValueError):
        CareerProgressionDetails({'gradeSequence': ['A', 'B'],
                                  'grades': {'A': {'baseStep': 1, 'stepIncrement': 1}}})
