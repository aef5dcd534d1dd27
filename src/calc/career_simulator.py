from model.RetirementScenario import CareerSimulation
from schedules.CareerProgressionDetails import CareerProgressionDetails


class CareerSimulator:
    """Projects a typical full Foreign Service career.

    The simulation always starts at the bottom of the ladder (first grade,
    step 1) regardless of the member's actual grade: it models a standard
    career to approximate average earnings for the supplement, not the
    member's own history. Each simulated year earns the grade/step salary
    and advances one step; past the grade's maximum step the member is
    promoted to step 1 of the next grade, and the last grade never promotes.
    Salaries are nominal, with no inflation or indexing.
    """

    def __init__(self, progression: CareerProgressionDetails):
        self.progression = progression

    def simulate(self, start_grade: str, start_step: int, years_service: float) -> CareerSimulation:
        simulated_years = min(years_service, self.progression.maximum_simulated_years)
        grade = self.progression.grade_sequence[0]
        step = 1
        total_earnings = 0.0
        years_in_service = 0

        while years_in_service < simulated_years:
            total_earnings += self.progression.salary(grade, step)
            years_in_service += 1
            step += 1
            if step > self.progression.max_step(grade):
                next_grade = self.progression.next_grade(grade)
                if next_grade is not None:
                    grade = next_grade
                    step = 1

        average = total_earnings / years_in_service if years_in_service else 0.0
        return CareerSimulation(
            average_annual_salary=average,
            years_in_service=years_in_service,
            final_grade=start_grade,
            final_step=start_step,
        )
