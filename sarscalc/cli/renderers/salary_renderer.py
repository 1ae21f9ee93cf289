"""Rich renderers for salary calculations and tax tables.

Transforms SDK results into formatted Rich tables. All rounding and
currency formatting happens here, never in the SDK.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from sarscalc.sdk import (
    AGE_CATEGORY_LABELS,
    BulkCalculationResult,
    BulkTotals,
    SalaryCalculation,
    SARSTaxTable,
    SkippedRow,
    TaxRules,
    calculate_net_percentage,
    calculate_tax_percentage,
)


def format_rand(amount: float) -> str:
    """Format an amount as rands, e.g. R 25 000.00 (space thousands separator)."""
    sign = "-" if amount < 0 else ""
    return f"{sign}R {abs(amount):,.2f}".replace(",", " ")


def format_rate(rate: float) -> str:
    return f"{rate * 100:g}%"


def render_salary_calculation(
    console: Console,
    calc: SalaryCalculation,
    age_category: str,
    tax_year: str,
    employee_name: Optional[str] = None,
) -> None:
    """Render a single gross-to-net calculation.

    Args:
        console: Rich Console instance
        calc: Result from calculate_salary()
        age_category: Age category used for the calculation
        tax_year: Tax year whose tables were applied
        employee_name: Optional name for the title
    """
    title = f"Salary breakdown - {employee_name}" if employee_name else "Salary breakdown"
    subtitle = f"Tax year {tax_year}, {AGE_CATEGORY_LABELS.get(age_category, age_category)}"

    table = Table(box=box.SIMPLE, show_header=False, padding=(0, 2))
    table.add_column("item")
    table.add_column("amount", justify="right")

    table.add_row("Basic salary", format_rand(calc.gross_salary - calc.additions.total))
    if calc.additions.overtime:
        table.add_row("  + Overtime", format_rand(calc.additions.overtime))
    if calc.additions.allowances:
        table.add_row("  + Allowances", format_rand(calc.additions.allowances))
    table.add_row("[bold]Gross income[/bold]", f"[bold]{format_rand(calc.gross_salary)}[/bold]")
    table.add_row("", "")

    if calc.deductions.medical_aid:
        table.add_row("  - Medical aid", format_rand(calc.deductions.medical_aid))
    if calc.deductions.pension_fund:
        table.add_row("  - Pension fund", format_rand(calc.deductions.pension_fund))
    table.add_row("Taxable income", format_rand(calc.taxable_income))
    table.add_row("  - PAYE", f"[red]{format_rand(calc.paye_tax)}[/red]")
    table.add_row("  - UIF", f"[red]{format_rand(calc.uif_contribution)}[/red]")
    if calc.deductions.other:
        table.add_row("  - Other deductions", format_rand(calc.deductions.other))
    table.add_row("", "")
    table.add_row("[bold green]Net salary[/bold green]", f"[bold green]{format_rand(calc.net_salary)}[/bold green]")

    console.print(Panel(table, title=title, subtitle=subtitle, border_style="blue"))

    tax_pct = calculate_tax_percentage(calc.paye_tax, calc.gross_salary)
    net_pct = calculate_net_percentage(calc.net_salary, calc.gross_salary)
    console.print(f"  Effective PAYE rate: {tax_pct:.1f}%   Take-home: {net_pct:.1f}%")

    if calc.tax_breakdown:
        _render_tax_breakdown(console, calc)


def _render_tax_breakdown(console: Console, calc: SalaryCalculation) -> None:
    """Render the annual per-bracket working."""
    table = Table(title="Annual tax by bracket", box=box.SIMPLE_HEAD)
    table.add_column("Bracket")
    table.add_column("Rate", justify="right")
    table.add_column("Income in bracket", justify="right")
    table.add_column("Tax", justify="right")

    for item in calc.tax_breakdown:
        upper = format_rand(item.bracket.max) if item.bracket.max is not None else "and above"
        table.add_row(
            f"{format_rand(item.bracket.min)} - {upper}",
            format_rate(item.bracket.rate),
            format_rand(item.taxable_amount),
            format_rand(item.tax_amount),
        )

    console.print(table)


def render_bulk_results(
    console: Console,
    results: List[BulkCalculationResult],
    totals: BulkTotals,
    skipped: Optional[List[SkippedRow]] = None,
) -> None:
    """Render per-employee results with a totals row."""
    table = Table(title="Bulk salary calculations", box=box.SIMPLE_HEAD)
    table.add_column("Employee")
    table.add_column("Age")
    table.add_column("Gross", justify="right")
    table.add_column("PAYE", justify="right")
    table.add_column("UIF", justify="right")
    table.add_column("Deductions", justify="right")
    table.add_column("Net", justify="right", style="green")

    for result in results:
        calc = result.calculation_result
        table.add_row(
            result.employee_name,
            result.age_category.replace("_", "-"),
            format_rand(result.gross_salary),
            format_rand(calc.paye_tax),
            format_rand(calc.uif_contribution),
            format_rand(calc.deductions.total),
            format_rand(calc.net_salary),
        )

    table.add_section()
    table.add_row(
        f"[bold]TOTALS ({totals.employees})[/bold]",
        "",
        format_rand(totals.gross_salary),
        format_rand(totals.paye_tax),
        format_rand(totals.uif_contribution),
        format_rand(totals.total_deductions),
        f"[bold]{format_rand(totals.net_salary)}[/bold]",
    )
    console.print(table)

    if skipped:
        render_skipped_rows(console, skipped)


def render_skipped_rows(console: Console, skipped: List[SkippedRow]) -> None:
    table = Table(title=f"Skipped rows ({len(skipped)})", box=box.SIMPLE_HEAD)
    table.add_column("Line", justify="right")
    table.add_column("Reason", style="yellow")
    table.add_column("Detail")
    for row in skipped:
        table.add_row(str(row.line_number), row.reason.value, row.detail)
    console.print(table)


def render_tax_table(console: Console, table: SARSTaxTable, rules: TaxRules) -> None:
    """Render one age bracket's tax table plus the year's contribution limits."""
    brackets = Table(box=box.SIMPLE_HEAD)
    brackets.add_column("From", justify="right")
    brackets.add_column("To", justify="right")
    brackets.add_column("Rate", justify="right")
    for bracket in table.tax_brackets:
        brackets.add_row(
            format_rand(bracket.min),
            format_rand(bracket.max) if bracket.max is not None else "-",
            format_rate(bracket.rate),
        )

    title = f"{table.id} ({AGE_CATEGORY_LABELS.get(table.age_bracket, table.age_bracket)})"
    status = "active" if table.is_active else "[yellow]inactive[/yellow]"
    console.print(Panel(brackets, title=title, subtitle=status, border_style="blue"))

    info = Table(show_header=False, box=None, padding=(0, 2))
    info.add_column("key", style="dim")
    info.add_column("value")
    info.add_row("Tax threshold", format_rand(table.threshold_amount))
    info.add_row("Primary rebate", format_rand(table.rebates.primary))
    if table.rebates.secondary is not None:
        info.add_row("Secondary rebate", format_rand(table.rebates.secondary))
    if table.rebates.tertiary is not None:
        info.add_row("Tertiary rebate", format_rand(table.rebates.tertiary))
    info.add_row("UIF", f"{format_rate(rules.uif.rate)} up to {format_rand(rules.uif.max_monthly_contribution)}/month")
    info.add_row(
        "Pension fund limit",
        f"{format_rate(rules.pension_fund.max_deduction_percentage)} of gross, "
        f"max {format_rand(rules.pension_fund.max_annual_amount)}/year",
    )
    console.print(info)
