"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to tax tables, rebates, UIF caps and pension fund limits. Everything here
is reference data: models are frozen once loaded.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


AgeCategory = Literal["under_65", "65_to_75", "over_75"]

AGE_CATEGORIES: tuple = ("under_65", "65_to_75", "over_75")

AGE_CATEGORY_LABELS = {
    "under_65": "Under 65",
    "65_to_75": "65 to 75",
    "over_75": "Over 75",
}


class TaxBracket(BaseModel):
    """Single annual tax bracket entry."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    min: float = Field(..., ge=0, description="Lower bound of the bracket (annual)")
    max: Optional[float] = Field(default=None, description="Upper bound (None if unbounded)")
    rate: float = Field(..., ge=0, le=1, description="Marginal rate as decimal")


class TaxBracketResult(BaseModel):
    """Portion of annual income taxed in one bracket."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    bracket: TaxBracket
    taxable_amount: float = Field(..., description="Annual income falling in the bracket")
    tax_amount: float = Field(..., description="Annual tax on that portion, before rebates")


class Rebates(BaseModel):
    """Annual tax rebates. Secondary and tertiary depend on age."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    primary: float = Field(..., ge=0)
    secondary: Optional[float] = Field(default=None, ge=0)
    tertiary: Optional[float] = Field(default=None, ge=0)

    @property
    def total(self) -> float:
        """Sum of every rebate present."""
        return self.primary + (self.secondary or 0) + (self.tertiary or 0)


class SARSTaxTable(BaseModel):
    """Tax table for one age bracket in one tax year."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    tax_year: str
    age_bracket: AgeCategory
    threshold_amount: float = Field(..., ge=0, description="Annual tax-free threshold")
    tax_brackets: tuple[TaxBracket, ...] = Field(..., min_length=1)
    rebates: Rebates
    is_active: bool = True

    @model_validator(mode="after")
    def check_brackets(self) -> "SARSTaxTable":
        """Brackets must ascend, touch each other and end unbounded."""
        brackets = self.tax_brackets
        for i, bracket in enumerate(brackets):
            last = i == len(brackets) - 1
            if bracket.max is None:
                if not last:
                    raise ValueError(f"{self.id}: only the final bracket may be unbounded")
                continue
            if last:
                raise ValueError(f"{self.id}: final bracket must be unbounded")
            if bracket.max <= bracket.min:
                raise ValueError(f"{self.id}: bracket max ({bracket.max}) must exceed min ({bracket.min})")

            # Whole-rand inclusive bounds: the next band starts at most R1 above this max
            gap = brackets[i + 1].min - bracket.max
            if gap < 0 or gap > 1:
                raise ValueError(
                    f"{self.id}: brackets not contiguous between "
                    f"{bracket.max} and {brackets[i + 1].min}"
                )
        return self


class UIFRules(BaseModel):
    """Unemployment Insurance Fund contribution rules (employee share)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    rate: float = Field(..., ge=0, le=1)
    max_monthly_salary: float = Field(..., gt=0, description="Monthly remuneration ceiling")
    max_monthly_contribution: float = Field(..., ge=0)


class PensionFundRules(BaseModel):
    """Deductibility limits for retirement fund contributions."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_deduction_percentage: float = Field(..., ge=0, le=1)
    max_annual_amount: float = Field(..., ge=0)

    @property
    def max_monthly_amount(self) -> float:
        return self.max_annual_amount / 12


class MedicalAidCredits(BaseModel):
    """Monthly medical scheme fees tax credits."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    main_member: float = Field(..., ge=0)
    first_dependant: float = Field(..., ge=0)
    additional_dependants: float = Field(..., ge=0, description="Per additional dependant")


class ValidationLimits(BaseModel):
    """Plausibility limits applied when validating salary inputs."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    max_gross_salary: float = Field(default=10_000_000, gt=0)


class TaxRules(BaseModel):
    """Complete tax rules for a year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields (YAML anchors etc.)

    tax_year: str
    tables: tuple[SARSTaxTable, ...]
    uif: UIFRules
    pension_fund: PensionFundRules
    medical_aid_credits: Optional[MedicalAidCredits] = None
    limits: ValidationLimits = Field(default_factory=ValidationLimits)

    @model_validator(mode="before")
    @classmethod
    def inherit_tax_year(cls, data):
        """Tables default to the file's tax year; YAML may give the year unquoted."""
        if not isinstance(data, dict) or "tax_year" not in data:
            return data
        data = dict(data)
        data["tax_year"] = str(data["tax_year"])
        if isinstance(data.get("tables"), list):
            data["tables"] = [
                {"tax_year": data["tax_year"], **table} if isinstance(table, dict) else table
                for table in data["tables"]
            ]
        return data

    @model_validator(mode="after")
    def check_tables(self) -> "TaxRules":
        """Tables must belong to this year, with one active table per age bracket."""
        active = {}
        for table in self.tables:
            if table.tax_year != self.tax_year:
                raise ValueError(
                    f"table {table.id} is for tax year {table.tax_year}, expected {self.tax_year}"
                )
            if not table.is_active:
                continue
            if table.age_bracket in active:
                raise ValueError(
                    f"multiple active tables for {table.age_bracket}: "
                    f"{active[table.age_bracket]}, {table.id}"
                )
            active[table.age_bracket] = table.id
        return self
