import os
import json
from typing import Optional


class CareerProgressionDetails:
    """Synthetic career ladder used to estimate supplement earnings.

    Each grade has a starting salary, a fixed raise per step and a maximum
    step; ``grade_sequence`` is the promotion order from entry level to the
    Senior Foreign Service.
    """

    def __init__(self, details: Optional[dict] = None):
        if details is None:
            ref_path = os.path.join(os.path.dirname(__file__), '../../reference/career-progression.json')
            with open(ref_path, 'r') as f:
                details = json.load(f)

        self.grade_sequence = tuple(details.get('gradeSequence', []))
        if not self.grade_sequence:
            raise ValueError("career-progression.json must contain a non-empty 'gradeSequence'")
        self.maximum_simulated_years = details.get('maximumSimulatedYears', 40)
        self.grades = {grade: dict(info) for grade, info in details.get('grades', {}).items()}
        for grade in self.grade_sequence:
            if grade not in self.grades:
                raise ValueError(f"career-progression.json has no entry for grade {grade}")

    def salary(self, grade: str, step: int) -> float:
        info = self.grades[grade]
        return info['baseStep'] + (step - 1) * info['stepIncrement']

    def max_step(self, grade: str) -> int:
        return self.grades[grade].get('maxStep', 14)

    def next_grade(self, grade: str) -> Optional[str]:
        """Return the promotion target, or None at the top of the ladder."""
        index = self.grade_sequence.index(grade)
        if index + 1 < len(self.grade_sequence):
            return self.grade_sequence[index + 1]
        return None
