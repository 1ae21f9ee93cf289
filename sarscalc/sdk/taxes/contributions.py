"""Capped contributions: UIF and pension fund limits."""

from typing import Optional

from .schemas import TaxRules
from .tables import resolve_rules


def calculate_uif(gross_salary: float, rules: Optional[TaxRules] = None) -> float:
    """Calculate the employee UIF contribution for a month.

    Remuneration above the monthly ceiling is ignored and the result is
    further capped at the maximum monthly contribution.
    """
    uif = resolve_rules(rules).uif
    capped_salary = min(gross_salary, uif.max_monthly_salary)
    return min(capped_salary * uif.rate, uif.max_monthly_contribution)


def validate_pension_fund(
    pension_fund: float,
    gross_income: float,
    rules: Optional[TaxRules] = None,
) -> float:
    """Limit a monthly pension contribution to its deductible maximum.

    The deductible amount is the lesser of a percentage of gross income
    and the annual cap spread over twelve months. Negative input is
    returned as-is; rejecting it is validate_salary_inputs' job.
    """
    limits = resolve_rules(rules).pension_fund
    max_by_percentage = gross_income * limits.max_deduction_percentage
    return min(pension_fund, max_by_percentage, limits.max_monthly_amount)
