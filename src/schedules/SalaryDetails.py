import os
import json
import math
from types import MappingProxyType
from typing import Dict, List, Optional

from model.errors import InvalidInputError, UnknownGradeError


MAX_STEP = 14
SENIOR_GRADES = ('FS-01', 'SFS')


class SalaryDetails:
    """Foreign Service base salary schedule.

    Loads the FS-04 through FS-01 step tables and the Senior Foreign Service
    rank ladder from ``reference/salary-tables.json``. SFS steps 1-10 are
    Counselor, 11-13 Minister Counselor and 14 Career Minister; they are
    flattened into a 14-entry step list like the other grades.

    Pass ``tables`` (in the same shape as the JSON file) to use an alternate
    schedule without touching the filesystem.
    """

    def __init__(self, tables: Optional[dict] = None):
        if tables is None:
            ref_path = os.path.join(os.path.dirname(__file__), '../../reference/salary-tables.json')
            with open(ref_path, 'r') as f:
                tables = json.load(f)
        self.schedule_year = tables.get('scheduleYear')
        grades: Dict[str, tuple] = {}
        for grade, steps in tables.get('grades', {}).items():
            grades[grade] = tuple(steps)

        self._rank_by_step: Dict[int, str] = {}
        sfs = tables.get('seniorForeignService')
        if sfs:
            sfs_steps = [None] * MAX_STEP
            for rank in sfs.get('ranks', []):
                for step, salary in rank.get('salaries', {}).items():
                    step_number = int(step)
                    sfs_steps[step_number - 1] = salary
                    self._rank_by_step[step_number] = rank['title']
            grades[sfs.get('grade', 'SFS')] = tuple(sfs_steps)
            self.senior_grade = sfs.get('grade', 'SFS')
        else:
            self.senior_grade = None

        self._grades = MappingProxyType(grades)

    def grades(self) -> List[str]:
        return list(self._grades.keys())

    def has_grade(self, grade: str) -> bool:
        return grade in self._grades

    def steps(self, grade: str) -> tuple:
        if grade not in self._grades:
            raise UnknownGradeError(grade)
        return self._grades[grade]

    def salary(self, grade: str, step) -> float:
        """Return the annual base salary for a grade and step (1-14).

        Raises:
            UnknownGradeError: the grade is not in the schedule.
            InvalidInputError: the step is not an integer in range, or the
                table holds no finite salary for it.
        """
        steps = self.steps(grade)
        try:
            step_number = int(step)
        except (TypeError, ValueError):
            raise InvalidInputError(f"Invalid step for grade {grade}: {step}", field='step')
        if step_number < 1 or step_number > len(steps):
            raise InvalidInputError(f"Invalid salary for grade {grade} step {step}", field='step')

        salary = steps[step_number - 1]
        if not isinstance(salary, (int, float)) or isinstance(salary, bool) or not math.isfinite(salary):
            raise InvalidInputError(f"Invalid salary for grade {grade} step {step}", field='step')
        return float(salary)

    def sfs_rank(self, step) -> Optional[str]:
        """Return the SFS rank title for a step, or None for an unknown step."""
        return self._rank_by_step.get(int(step))

    def rank_for(self, grade: str, step) -> Optional[str]:
        if grade != self.senior_grade:
            return None
        return self.sfs_rank(step)
