"""Bulk salary calculation from employee roster files.

A roster is comma-separated text with a header row followed by one row per
employee:

    Employee Name, Gross Salary, Age Category[, Medical Aid, Pension Fund, Other Deductions]

Fields may be double-quoted to embed commas. Amounts may carry currency
symbols or thousands separators ("R35,000" must then be quoted).

Bad rows never fail the batch. Each data row produces either a ParsedRow
or a SkippedRow with the reason, so callers can report exactly what was
dropped. Only a roster with no usable rows at all raises.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Union

from .salary import calculate_salary
from .schemas import BulkCalculationResult, BulkEmployeeData
from .taxes import AGE_CATEGORIES, TaxRules, resolve_rules

logger = logging.getLogger(__name__)

TEMPLATE_HEADER = (
    "Employee Name,Gross Salary (R),Age Category,"
    "Medical Aid (R),Pension Fund (R),Other Deductions (R)"
)

TEMPLATE_ROWS = [
    "John Smith,35000,under_65,1200,3500,0",
    "Sarah Johnson,45000,under_65,1500,4500,500",
    "Mike Wilson,28000,65_to_75,800,2800,0",
    "Jane Doe,55000,over_75,2000,5500,200",
]

MIN_COLUMNS = 3

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_LEADING_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


class ParseError(Exception):
    """Raised when a roster cannot be processed at all."""
    pass


class EmptyResultError(ParseError):
    """Raised when no roster row survives validation."""
    pass


class SkipReason(str, Enum):
    """Why a roster row was left out."""

    INSUFFICIENT_COLUMNS = "insufficient_columns"
    MISSING_REQUIRED_FIELDS = "missing_required_fields"
    INVALID_GROSS_SALARY = "invalid_gross_salary"
    INVALID_AGE_CATEGORY = "invalid_age_category"


@dataclass(frozen=True)
class ParsedRow:
    line_number: int
    employee: BulkEmployeeData

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class SkippedRow:
    line_number: int
    line: str
    reason: SkipReason
    detail: str = ""

    @property
    def ok(self) -> bool:
        return False


RowOutcome = Union[ParsedRow, SkippedRow]


@dataclass(frozen=True)
class BulkTotals:
    """Batch totals, summed over calculated rows."""

    employees: int
    gross_salary: float
    net_salary: float
    paye_tax: float
    uif_contribution: float
    total_deductions: float


def parse_csv_line(line: str) -> List[str]:
    """Split one line on commas, honouring double-quoted fields.

    A double quote toggles between the plain and quoted states; commas
    only split in the plain state. Quote characters are dropped and each
    field is stripped.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_amount(text: str) -> Optional[float]:
    """Parse a monetary field, ignoring currency symbols and separators.

    Everything except digits, '.' and '-' is removed, then the leading
    number is read ("1.5.2" -> 1.5). An empty result reads as 0.

    Returns:
        The amount, or None if no number can be read
    """
    cleaned = _NON_NUMERIC.sub("", text) or "0"
    match = _LEADING_NUMBER.match(cleaned)
    if not match:
        return None
    return float(match.group())


def _optional_amount(text: str) -> Optional[float]:
    if not text.strip():
        return None
    amount = parse_amount(text)
    if amount is None or amount <= 0:
        return None
    return amount


def _is_header(line: str) -> bool:
    return "employee" in line.lower() or "Name" in line


def _parse_row(line_number: int, line: str) -> RowOutcome:
    values = parse_csv_line(line)

    if len(values) < MIN_COLUMNS:
        return SkippedRow(line_number, line, SkipReason.INSUFFICIENT_COLUMNS,
                          f"expected at least {MIN_COLUMNS} columns, found {len(values)}")

    values = values + [""] * (6 - len(values))
    name, gross_text, age_category, medical_text, pension_text, other_text = values[:6]

    if not name or not gross_text or not age_category:
        return SkippedRow(line_number, line, SkipReason.MISSING_REQUIRED_FIELDS,
                          "name, gross salary and age category are required")

    gross_salary = parse_amount(gross_text)
    if gross_salary is None or gross_salary <= 0:
        return SkippedRow(line_number, line, SkipReason.INVALID_GROSS_SALARY,
                          f"invalid gross salary '{gross_text}'")

    if age_category not in AGE_CATEGORIES:
        return SkippedRow(line_number, line, SkipReason.INVALID_AGE_CATEGORY,
                          f"invalid age category '{age_category}'")

    employee = BulkEmployeeData(
        employee_name=name,
        gross_salary=gross_salary,
        age_category=age_category,
        medical_aid=_optional_amount(medical_text),
        pension_fund=_optional_amount(pension_text),
        other_deductions=_optional_amount(other_text),
    )
    return ParsedRow(line_number, employee)


def parse_bulk_rows(raw_text: str) -> List[RowOutcome]:
    """Parse roster text into one outcome per data row.

    Rows are split on newlines only (a trailing carriage return is
    stripped), so other control characters stay inside their field.

    Blank lines, '#' comments and rows made only of commas produce no
    outcome. The header is the first line mentioning "employee" (any case)
    or "Name"; without one the first line is treated as the header.

    Raises:
        ParseError: If there is not at least a header and one data row
    """
    lines = []
    for line_number, line in enumerate(raw_text.lstrip("\ufeff").split("\n"), start=1):
        line = line.strip()
        if line and not line.startswith("#"):
            lines.append((line_number, line))

    if len(lines) < 2:
        raise ParseError("File must contain at least a header row and one data row")

    header_index = next((i for i, (_, line) in enumerate(lines) if _is_header(line)), 0)

    outcomes = []
    for line_number, line in lines[header_index + 1:]:
        if not line.replace(",", "").strip():
            continue

        outcome = _parse_row(line_number, line)
        if not outcome.ok:
            logger.debug(f"Row {line_number} skipped ({outcome.reason.value}): {outcome.detail}")
        outcomes.append(outcome)

    return outcomes


def process_bulk_file(raw_text: str) -> List[BulkEmployeeData]:
    """Parse roster text into valid employee rows.

    Raises:
        ParseError: If the file has no data rows
        EmptyResultError: If no row is valid
    """
    outcomes = parse_bulk_rows(raw_text)
    employees = [outcome.employee for outcome in outcomes if outcome.ok]

    logger.debug(f"Roster parsed: {len(employees)} valid, {len(outcomes) - len(employees)} skipped")

    if not employees:
        raise EmptyResultError(
            "No valid employee data found. Please check that your file has the correct "
            "format with Employee Name, Gross Salary, and Age Category columns."
        )

    return employees


def calculate_bulk_salaries(
    employees: Iterable[BulkEmployeeData],
    rules: Optional[TaxRules] = None,
) -> List[BulkCalculationResult]:
    """Run every roster row through calculate_salary (no overtime or allowances)."""
    rules = resolve_rules(rules)
    results = []
    for employee in employees:
        calculation = calculate_salary(employee.to_salary_inputs(), rules)
        results.append(BulkCalculationResult(
            **employee.model_dump(),
            calculation_result=calculation,
        ))
    return results


def summarize_bulk_results(results: Iterable[BulkCalculationResult]) -> BulkTotals:
    """Fold calculated rows into batch totals."""
    results = list(results)
    return BulkTotals(
        employees=len(results),
        gross_salary=sum(r.gross_salary for r in results),
        net_salary=sum(r.calculation_result.net_salary for r in results),
        paye_tax=sum(r.calculation_result.paye_tax for r in results),
        uif_contribution=sum(r.calculation_result.uif_contribution for r in results),
        total_deductions=sum(r.calculation_result.deductions.total for r in results),
    )


def generate_bulk_template() -> str:
    """Roster template: header plus sample rows."""
    return "\n".join([TEMPLATE_HEADER] + TEMPLATE_ROWS) + "\n"
