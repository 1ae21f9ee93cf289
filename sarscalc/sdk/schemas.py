"""Pydantic schemas for salary calculation inputs and results.

Input schemas use extra='forbid' so typos in field names fail loudly.
Monetary inputs are deliberately NOT range-checked here: callers run
validate_salary_inputs() when they want to reject bad values, and the
calculator clamps rather than raises (see salary.py).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .taxes.schemas import AgeCategory, TaxBracketResult


# =============================================================================
# Single-employee calculation
# =============================================================================


class SalaryInputs(BaseModel):
    """Monthly amounts for one employee, as entered by the caller."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(..., description="Basic monthly salary")
    medical_aid: float = Field(default=0, description="Medical aid contribution (pre-tax)")
    pension_fund: float = Field(default=0, description="Pension fund contribution (pre-tax, capped)")
    other_deductions: float = Field(default=0, description="Post-tax deductions")
    overtime_pay: float = Field(default=0)
    allowances: float = Field(default=0)
    age_category: AgeCategory


class DeductionBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    medical_aid: float
    pension_fund: float = Field(..., description="Pension fund after applying limits")
    other: float
    total: float


class AdditionBreakdown(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    overtime: float
    allowances: float
    total: float


class SalaryCalculation(BaseModel):
    """Gross-to-net result for one employee. All amounts monthly, unrounded."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    gross_salary: float = Field(..., description="Gross salary including additions")
    taxable_income: float
    paye_tax: float
    uif_contribution: float
    net_salary: float
    deductions: DeductionBreakdown
    additions: AdditionBreakdown
    tax_breakdown: tuple[TaxBracketResult, ...] = ()


# =============================================================================
# Bulk (roster) processing
# =============================================================================


class BulkEmployeeData(BaseModel):
    """One valid roster row."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_name: str = Field(..., min_length=1)
    gross_salary: float = Field(..., gt=0)
    age_category: AgeCategory
    medical_aid: Optional[float] = Field(default=None, gt=0)
    pension_fund: Optional[float] = Field(default=None, gt=0)
    other_deductions: Optional[float] = Field(default=None, gt=0)

    def to_salary_inputs(self) -> SalaryInputs:
        """Build calculator inputs; roster rows carry no additions."""
        return SalaryInputs(
            gross_salary=self.gross_salary,
            age_category=self.age_category,
            medical_aid=self.medical_aid or 0,
            pension_fund=self.pension_fund or 0,
            other_deductions=self.other_deductions or 0,
            overtime_pay=0,
            allowances=0,
        )


class BulkCalculationResult(BulkEmployeeData):
    """Roster row with its calculation attached."""

    calculation_result: SalaryCalculation
