"""Gross-to-net salary calculation.

calculate_salary() never rejects input: negative intermediate results are
clamped to zero and the only exception that can escape is a
ConfigurationError from the tax table lookup. Callers that want to refuse
bad input run validate_salary_inputs() first and show its messages.
"""

import logging
from typing import List, Optional

from .schemas import (
    AdditionBreakdown,
    DeductionBreakdown,
    SalaryCalculation,
    SalaryInputs,
)
from .taxes import TaxRules, calculate_paye_tax, calculate_uif, resolve_rules, validate_pension_fund

logger = logging.getLogger(__name__)


def calculate_salary(inputs: SalaryInputs, rules: Optional[TaxRules] = None) -> SalaryCalculation:
    """Calculate PAYE, UIF and net salary for one employee's month.

    Medical aid and (limited) pension fund contributions are deducted
    before tax. Overtime and allowances are added to gross and taxed
    like basic salary. Other deductions come off after tax.

    Args:
        inputs: Monthly salary inputs
        rules: Tax rules for the year; default tax year if None

    Returns:
        SalaryCalculation with unrounded monthly amounts

    Raises:
        ConfigurationError: If no active tax table exists for the age category
    """
    rules = resolve_rules(rules)

    total_additions = inputs.overtime_pay + inputs.allowances
    total_gross_income = inputs.gross_salary + total_additions

    validated_pension_fund = validate_pension_fund(inputs.pension_fund, total_gross_income, rules)
    total_pre_tax_deductions = validated_pension_fund + inputs.medical_aid
    total_deductions = total_pre_tax_deductions + inputs.other_deductions

    taxable_income = max(0.0, total_gross_income - total_pre_tax_deductions)

    paye = calculate_paye_tax(taxable_income, inputs.age_category, rules)
    uif_contribution = calculate_uif(total_gross_income, rules)

    net_salary = total_gross_income - paye.tax - uif_contribution - total_deductions
    if net_salary < 0:
        logger.debug(f"Net salary {net_salary:.2f} below zero, clamping")

    return SalaryCalculation(
        gross_salary=total_gross_income,
        taxable_income=taxable_income,
        paye_tax=paye.tax,
        uif_contribution=uif_contribution,
        net_salary=max(0.0, net_salary),
        deductions=DeductionBreakdown(
            medical_aid=inputs.medical_aid,
            pension_fund=validated_pension_fund,
            other=inputs.other_deductions,
            total=total_deductions,
        ),
        additions=AdditionBreakdown(
            overtime=inputs.overtime_pay,
            allowances=inputs.allowances,
            total=total_additions,
        ),
        tax_breakdown=tuple(paye.breakdown),
    )


def validate_salary_inputs(inputs: SalaryInputs, rules: Optional[TaxRules] = None) -> List[str]:
    """Check salary inputs before calculating.

    Returns:
        Human-readable error messages (empty list if inputs are acceptable)
    """
    limits = resolve_rules(rules).limits
    errors = []

    if inputs.gross_salary <= 0:
        errors.append("Gross salary must be greater than 0")

    if inputs.gross_salary > limits.max_gross_salary:
        errors.append("Gross salary seems unreasonably high")

    if inputs.medical_aid < 0:
        errors.append("Medical aid contribution cannot be negative")

    if inputs.pension_fund < 0:
        errors.append("Pension fund contribution cannot be negative")

    if inputs.other_deductions < 0:
        errors.append("Other deductions cannot be negative")

    if inputs.overtime_pay < 0:
        errors.append("Overtime pay cannot be negative")

    if inputs.allowances < 0:
        errors.append("Allowances cannot be negative")

    # Uses the pension figure as entered, before limits are applied
    total_deductions = inputs.medical_aid + inputs.pension_fund + inputs.other_deductions
    total_gross = inputs.gross_salary + inputs.overtime_pay + inputs.allowances
    if total_deductions > total_gross:
        errors.append("Total deductions cannot exceed gross income")

    return errors


def calculate_tax_percentage(paye_tax: float, gross_salary: float) -> float:
    """PAYE as a percentage of gross (0 when gross is 0)."""
    if gross_salary == 0:
        return 0.0
    return paye_tax / gross_salary * 100


def calculate_net_percentage(net_salary: float, gross_salary: float) -> float:
    """Net salary as a percentage of gross (0 when gross is 0)."""
    if gross_salary == 0:
        return 0.0
    return net_salary / gross_salary * 100
