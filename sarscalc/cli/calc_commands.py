"""Single-employee salary calculation command."""

import json

import click
from rich.console import Console

from sarscalc.sdk import (
    AGE_CATEGORIES,
    ConfigurationError,
    SalaryInputs,
    calculate_salary,
    get_registry,
    validate_salary_inputs,
)
from .renderers.salary_renderer import render_salary_calculation


@click.command("calc")
@click.argument("gross_salary", type=float)
@click.option("--age-category", "-a", type=click.Choice(AGE_CATEGORIES), default="under_65",
              show_default=True, help="Employee age category")
@click.option("--medical-aid", type=float, default=0, help="Monthly medical aid contribution")
@click.option("--pension-fund", type=float, default=0, help="Monthly pension fund contribution")
@click.option("--other-deductions", type=float, default=0, help="Monthly post-tax deductions")
@click.option("--overtime", "overtime_pay", type=float, default=0, help="Overtime pay for the month")
@click.option("--allowances", type=float, default=0, help="Allowances for the month")
@click.option("--name", "employee_name", help="Employee name (display only)")
@click.option("--tax-year", help="Tax year (default: configured or latest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
@click.option("--skip-validation", is_flag=True, help="Calculate even if inputs fail validation")
def calc(gross_salary, age_category, medical_aid, pension_fund, other_deductions,
         overtime_pay, allowances, employee_name, tax_year, output_format, skip_validation):
    """Calculate PAYE, UIF and net salary for one employee.

    GROSS_SALARY is the basic monthly salary in rands.

    Examples:
      sars-calc calc 25000
      sars-calc calc 42000 --age-category 65_to_75 --medical-aid 1800 --pension-fund 3000
      sars-calc calc 30000 --overtime 2500 --format json
    """
    try:
        rules = get_registry().rules(tax_year)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    inputs = SalaryInputs(
        gross_salary=gross_salary,
        medical_aid=medical_aid,
        pension_fund=pension_fund,
        other_deductions=other_deductions,
        overtime_pay=overtime_pay,
        allowances=allowances,
        age_category=age_category,
    )

    errors = validate_salary_inputs(inputs, rules)
    if errors and not skip_validation:
        for error in errors:
            click.echo(click.style(f"  - {error}", fg="red"), err=True)
        raise click.ClickException("Invalid salary inputs (use --skip-validation to calculate anyway)")

    try:
        result = calculate_salary(inputs, rules)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = {
            "tax_year": rules.tax_year,
            "inputs": inputs.model_dump(mode="json"),
            "result": result.model_dump(mode="json"),
            "warnings": errors,
        }
        click.echo(json.dumps(output, indent=2))
        return

    console = Console()
    for error in errors:
        console.print(f"[yellow]Warning: {error}[/yellow]")
    render_salary_calculation(console, result, age_category, rules.tax_year, employee_name)
