"""Exceptions raised by the separation calculators."""

from typing import Optional


class SeparationCalculationError(ValueError):
    """Base class for every calculation-layer error."""


class InvalidInputError(SeparationCalculationError):
    """A required input is missing, falsy, or out of range.

    The offending input name is kept on ``field`` so callers can point the
    user at it.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class UnknownGradeError(InvalidInputError):
    """The grade is not present in the salary table."""

    def __init__(self, grade):
        super().__init__(f"Invalid grade: {grade}", field='grade')
        self.grade = grade


class UnknownPlanError(SeparationCalculationError):
    """The plan/coverage combination is not present in the rate table."""

    def __init__(self, message: str, plan_key=None, coverage_type=None):
        super().__init__(message)
        self.plan_key = plan_key
        self.coverage_type = coverage_type


InvalidPlanError = UnknownPlanError


class UnknownStateError(SeparationCalculationError):
    """A state code is not in the ACA factor table.

    State lookups fall back to the default factor, so the health estimator
    never raises this; it exists for callers that want strict validation.
    """
