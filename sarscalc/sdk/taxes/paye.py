"""PAYE (Pay-As-You-Earn) income tax calculation.

Monthly taxable income is annualized, run through the progressive
brackets of the active table for the employee's age category, reduced by
the annual rebates and brought back to a monthly figure. No rounding is
applied here; rounding is a presentation concern.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .schemas import TaxBracketResult, TaxRules
from .tables import get_active_tax_table

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class PAYEResult:
    """Monthly PAYE plus the per-bracket working (annual amounts)."""

    tax: float
    breakdown: List[TaxBracketResult] = field(default_factory=list)

    @property
    def annual_tax_before_rebates(self) -> float:
        return sum(item.tax_amount for item in self.breakdown)


def calculate_paye_tax(
    monthly_taxable_income: float,
    age_category: str,
    rules: Optional[TaxRules] = None,
) -> PAYEResult:
    """Calculate monthly PAYE for a monthly taxable income.

    Args:
        monthly_taxable_income: Taxable income for the month (>= 0)
        age_category: under_65, 65_to_75 or over_75
        rules: Tax rules for the year; default tax year if None

    Returns:
        PAYEResult with the monthly tax and the annual bracket breakdown

    Raises:
        ConfigurationError: If no active table exists for the age category
    """
    table = get_active_tax_table(age_category, rules=rules)

    annual_income = monthly_taxable_income * MONTHS_PER_YEAR

    total_tax = 0.0
    breakdown = []
    for bracket in table.tax_brackets:
        # Brackets ascend; once income is at or below a lower bound nothing further applies
        if annual_income <= bracket.min:
            break

        bracket_max = annual_income if bracket.max is None else bracket.max
        income_in_bracket = min(annual_income, bracket_max) - max(0, bracket.min)

        if income_in_bracket > 0:
            tax_in_bracket = income_in_bracket * bracket.rate
            total_tax += tax_in_bracket
            breakdown.append(TaxBracketResult(
                bracket=bracket,
                taxable_amount=income_in_bracket,
                tax_amount=tax_in_bracket,
            ))

    annual_tax = max(0.0, total_tax - table.rebates.total)
    monthly_tax = annual_tax / MONTHS_PER_YEAR

    logger.debug(
        f"PAYE {table.id}: annual income {annual_income:.2f}, "
        f"tax {total_tax:.2f} - rebates {table.rebates.total:.2f} -> monthly {monthly_tax:.2f}"
    )

    return PAYEResult(tax=monthly_tax, breakdown=breakdown)
