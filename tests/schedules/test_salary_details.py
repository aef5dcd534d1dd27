import os
import sys
import math
import pytest
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))
from schedules.SalaryDetails import SalaryDetails, MAX_STEP
from model.errors import InvalidInputError, UnknownGradeError, SeparationCalculationError


@pytest.fixture(scope="module")
def salaries():
    return SalaryDetails()


def test_grades_include_fs_and_senior(salaries):
    grades = salaries.grades()
    for grade in ('FS-01', 'FS-02', 'FS-03', 'FS-04', 'SFS'):
        assert grade in grades
    assert salaries.senior_grade == 'SFS'


def test_every_grade_has_fourteen_steps(salaries):
    for grade in salaries.grades():
        assert len(salaries.steps(grade)) == MAX_STEP


def test_salary_lookup(salaries):
    assert salaries.salary('FS-02', 5) == 114121
    assert salaries.salary('FS-04', 1) == 66574
    assert salaries.salary('FS-01', 14) == 162672


def test_string_step_is_accepted(salaries):
    assert salaries.salary('FS-03', '2') == salaries.salary('FS-03', 2)


def test_sfs_steps_map_to_ranks(salaries):
    assert salaries.salary('SFS', 1) == 172500
    assert salaries.salary('SFS', 10) == 195000
    assert salaries.salary('SFS', 12) == 192100
    assert salaries.salary('SFS', 14) == 203700
    assert salaries.sfs_rank(3) == 'Counselor'
    assert salaries.sfs_rank(11) == 'Minister Counselor'
    assert salaries.sfs_rank(14) == 'Career Minister'


def test_rank_only_for_senior_grade(salaries):
    assert salaries.rank_for('SFS', 12) == 'Minister Counselor'
    assert salaries.rank_for('FS-02', 12) is None


def test_unknown_grade_raises(salaries):
    with pytest.raises(UnknownGradeError) as exc:
        salaries.salary('FS-09', 1)
    assert str(exc.value) == "Invalid grade: FS-09"
    assert exc.value.field == 'grade'
    # UnknownGradeError is an input error, which is a calculation error
    assert isinstance(exc.value, InvalidInputError)
    assert isinstance(exc.value, SeparationCalculationError)


@pytest.mark.parametrize("step", [0, 15, -1, 'abc', None])
def test_invalid_step_raises(salaries, step):
    with pytest.raises(InvalidInputError):
        salaries.salary('FS-02', step)


def test_non_finite_table_entry_raises():
    tables = {'grades': {'FS-X': [100000, math.nan, None]}}
    salaries = SalaryDetails(tables)
    assert salaries.salary('FS-X', 1) == 100000
    with pytest.raises(InvalidInputError):
        salaries.salary('FS-X', 2)
    with pytest.raises(InvalidInputError):
        salaries.salary('FS-X', 3)


def test_injected_tables_without_senior_service():
    salaries = SalaryDetails({'grades': {'FS-04': [1, 2, 3]}})
    assert salaries.grades() == ['FS-04']
    assert salaries.senior_grade is None
    assert salaries.rank_for('FS-04', 1) is None


def test_tables_are_read_only(salaries):
    with pytest.raises(TypeError):
        salaries._grades['FS-02'] = ()
