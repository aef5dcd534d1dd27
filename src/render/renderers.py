"""Renderer classes for displaying separation calculation results.

This module contains renderer classes that handle the presentation logic
for the separation report. Each renderer takes the unified
SeparationReport and prints the sections it is responsible for.
"""

import math
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from model.SeparationReport import SeparationReport
from model.ServiceDuration import ServiceDuration
from model.RetirementScenario import RetirementScenario


def format_currency(amount: float) -> str:
    """Format as whole US dollars: 1234.5 -> '$1,235'."""
    rounded = math.floor(abs(amount) + 0.5)
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}${rounded:,}"


def format_date(d: date) -> str:
    """Format as 'Month D, YYYY'."""
    return f"{d:%B} {d.day}, {d.year}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_service_duration(years: Optional[float]) -> str:
    """Format fractional years as '20 years, 3 months' (nearest month)."""
    if not years:
        return "0 years"
    total_months = math.floor(years * 12 + 0.5)
    whole_years, months = divmod(total_months, 12)
    if whole_years == 0:
        return _plural(months, "month")
    if months == 0:
        return _plural(whole_years, "year")
    return f"{_plural(whole_years, 'year')}, {_plural(months, 'month')}"


def format_duration(duration: Optional[ServiceDuration]) -> str:
    """Format a ServiceDuration, rounding 15 or more leftover days up a month."""
    if duration is None:
        return ""
    total_months = duration.years * 12 + duration.months
    if duration.days >= 15:
        total_months += 1
    years, months = divmod(total_months, 12)
    parts = []
    if years > 0:
        parts.append(_plural(years, "year"))
    if months > 0:
        parts.append(_plural(months, "month"))
    return ", ".join(parts) or "0 months"


def _line(label: str, value: str) -> None:
    print(f"  {label:<40} {value:>16}")


def _section(title: str) -> None:
    print()
    print("-" * 60)
    print(title)
    print("-" * 60)


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    @abstractmethod
    def render(self, data: SeparationReport) -> None:
        """Render the data to output.

        Args:
            data: The SeparationReport for one employee
        """
        pass


class SeveranceRenderer(BaseRenderer):
    """Renderer for severance pay and annual leave payout."""

    def render(self, data: SeparationReport) -> None:
        severance = data.severance
        if severance is None:
            print("No severance data available")
            return

        print()
        print("=" * 60)
        print(f"{'SEVERANCE ESTIMATE':^60}")
        print("=" * 60)

        _section("SALARY")
        grade_label = f"{data.grade} step {data.step}"
        if data.rank:
            grade_label = f"{data.grade} {data.rank}"
        _line("Grade:", grade_label)
        _line("Base Salary:", format_currency(severance.base_salary))
        _line("Monthly Pay:", format_currency(severance.monthly_pay))
        _line("Years of Service:", format_service_duration(severance.years_of_service))

        _section("SEVERANCE PAY")
        if severance.is_eligible:
            _line("Severance Amount:", format_currency(severance.severance_amount))
            for number, installment in enumerate(severance.installments, start=1):
                _line(f"Installment {number} ({format_date(installment.date)}):",
                      format_currency(installment.amount))
        else:
            print(f"  Note: {severance.eligibility_note}")

        _section("ANNUAL LEAVE")
        _line("Hourly Rate:", f"${severance.hourly_rate:,.2f}")
        _line("Annual Leave Balance (hours):", f"{severance.annual_leave_hours:,.0f}")
        _line("Annual Leave Payout:", format_currency(severance.annual_leave_payout))
        print()


class RetirementRenderer(BaseRenderer):
    """Renderer for FSPS retirement scenarios."""

    def render(self, data: SeparationReport) -> None:
        annuity = data.annuity
        if annuity is None:
            print("No retirement data available")
            return

        print()
        print("=" * 60)
        print(f"{'FSPS RETIREMENT SCENARIOS':^60}")
        print("=" * 60)

        _section("SERVICE AND SALARY SUMMARY")
        if data.service_duration:
            _line("Service (computation date):", format_duration(data.service_duration))
        else:
            _line("Service:", format_service_duration(data.years_of_service))
        if data.sick_leave_duration:
            _line("Sick Leave Credit:", format_duration(data.sick_leave_duration))
        reconciliation = data.service_reconciliation
        if reconciliation and reconciliation.discrepancy:
            print(f"  Note: {reconciliation.message}")
        _line("Base Salary:", format_currency(annuity.base_salary))
        _line(f"Post Allowance ({annuity.post}):", f"{annuity.post_allowance_rate:.2%}")
        _line("Adjusted Salary:", format_currency(annuity.adjusted_salary))
        _line("High-Three Average:", format_currency(annuity.high_three_average))
        _line("Minimum Retirement Age:", f"{annuity.mra_age:.2f}")

        for scenario in annuity.scenarios:
            self._render_scenario(scenario, scenario is annuity.best)
        print()

    def _render_scenario(self, scenario: RetirementScenario, is_best: bool) -> None:
        title = scenario.type.label.upper()
        if is_best and scenario.is_eligible:
            title += "  <- best"
        _section(title)
        print(f"  {scenario.description}")
        if not scenario.is_eligible:
            return
        _line("Annuity Percentage:", f"{scenario.annuity_percentage:.2%}")
        if scenario.mra_reduction > 0:
            _line("Age Reduction:", f"{scenario.mra_reduction:.1%}")
        _line("Annual Annuity:", format_currency(scenario.annual_annuity))
        _line("Monthly Annuity:", format_currency(scenario.monthly_annuity))
        if scenario.is_supplement_eligible:
            _line("Monthly Supplement (to age 62):", format_currency(scenario.monthly_supplemental))
            _line("Monthly Total:", format_currency(scenario.monthly_total))
        comparison = scenario.age62_comparison
        if comparison is not None:
            _line(f"If you wait {comparison.years_to_wait:g} years to age 62:",
                  format_currency(comparison.monthly_annuity) + "/mo")


class HealthRenderer(BaseRenderer):
    """Renderer for the FEHB vs. COBRA vs. ACA comparison."""

    def render(self, data: SeparationReport) -> None:
        health = data.health
        if health is None:
            print("No health insurance data available")
            return

        print()
        print("=" * 60)
        print(f"{'HEALTH INSURANCE COMPARISON':^60}")
        print("=" * 60)

        _section(f"CURRENT FEHB ({health.plan_key}, {health.coverage_type})")
        _line("Employee Monthly Premium:", format_currency(health.fehb.monthly))

        _section("COBRA CONTINUATION")
        _line("Monthly Premium:", format_currency(health.cobra.monthly))
        _line("Coverage Duration:", f"{health.cobra.duration} months")
        _line("Total Cost:", format_currency(health.cobra.total_cost))

        _section(f"ACA MARKETPLACE ESTIMATE ({health.state or 'national default'})")
        _line("Monthly Premium:", format_currency(health.aca.monthly))
        _line("Annual Deductible:", format_currency(health.aca.deductible))
        _line("Out-of-Pocket Maximum:", format_currency(health.aca.out_of_pocket))

        _section("RECOMMENDATIONS")
        for recommendation in health.recommendations:
            print(f"  * {recommendation}")
        print()


class SummaryRenderer(BaseRenderer):
    """Renderer for a one-screen overview of the whole report."""

    def render(self, data: SeparationReport) -> None:
        print()
        print("=" * 60)
        print(f"{'SEPARATION SUMMARY AS OF ' + format_date(data.as_of).upper():^60}")
        print("=" * 60)
        print()
        _line("Grade / Step:", f"{data.grade} / {data.step}")
        _line("Age:", f"{data.age}")
        _line("Years of Service:", format_service_duration(data.years_of_service))

        if data.severance:
            if data.severance.is_eligible:
                _line("Severance Amount:", format_currency(data.severance.severance_amount))
            else:
                _line("Severance Amount:", "Not available (FS-01/SFS)")
            _line("Annual Leave Payout:", format_currency(data.severance.annual_leave_payout))

        if data.annuity:
            best = data.annuity.best
            if best.is_eligible:
                _line("Best Retirement Option:", best.type.label)
                _line("Monthly Annuity:", format_currency(best.monthly_annuity))
                if best.monthly_supplemental:
                    _line("Monthly Supplement:", format_currency(best.monthly_supplemental))
            else:
                _line("Best Retirement Option:", "None eligible")
            eligible = [s.type.value for s in data.annuity.scenarios.eligible()]
            _line("Eligible Scenarios:", ", ".join(eligible) or "none")

        if data.health:
            _line("COBRA Monthly:", format_currency(data.health.cobra.monthly))
            _line("ACA Monthly Estimate:", format_currency(data.health.aca.monthly))
        print()


# Registry mapping mode names to renderer classes
RENDERER_REGISTRY = {
    'Summary': SummaryRenderer,
    'Severance': SeveranceRenderer,
    'Retirement': RetirementRenderer,
    'Health': HealthRenderer,
}
