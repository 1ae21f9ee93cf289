"""Bulk (roster) calculation commands."""

import json
from dataclasses import asdict
from pathlib import Path

import click
from rich.console import Console

from sarscalc.sdk import (
    ConfigurationError,
    ParseError,
    calculate_bulk_salaries,
    generate_bulk_template,
    get_registry,
    parse_bulk_rows,
    summarize_bulk_results,
)
from .renderers.salary_renderer import render_bulk_results, render_skipped_rows


@click.group()
def bulk():
    """Calculate salaries for a whole roster file.

    A roster is CSV text with a header row and one row per employee:

    \b
    Employee Name, Gross Salary, Age Category[, Medical Aid, Pension Fund, Other Deductions]

    Run 'sars-calc bulk template' for a starting file.
    """
    pass


@bulk.command("run")
@click.argument("roster", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--tax-year", help="Tax year (default: configured or latest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
@click.option("--show-skipped", is_flag=True, help="List rows that were skipped and why")
def bulk_run(roster: Path, tax_year, output_format, show_skipped):
    """Calculate every valid row in ROSTER.

    Invalid rows (bad salary, unknown age category, missing fields) are
    skipped; the command only fails if no row is usable.
    """
    try:
        rules = get_registry().rules(tax_year)
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    try:
        raw_text = roster.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        raise click.ClickException(f"{roster.name} is not valid UTF-8 text")

    try:
        outcomes = parse_bulk_rows(raw_text)
    except ParseError as e:
        raise click.ClickException(str(e))

    employees = [o.employee for o in outcomes if o.ok]
    skipped = [o for o in outcomes if not o.ok]

    if not employees:
        if skipped:
            render_skipped_rows(Console(stderr=True), skipped)
        raise click.ClickException(
            f"No valid employee data found in {roster.name} ({len(skipped)} row(s) skipped)"
        )

    try:
        results = calculate_bulk_salaries(employees, rules)
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    totals = summarize_bulk_results(results)

    if output_format == "json":
        output = {
            "tax_year": rules.tax_year,
            "results": [r.model_dump(mode="json") for r in results],
            "totals": asdict(totals),
            "skipped": [
                {"line": s.line_number, "reason": s.reason.value, "detail": s.detail}
                for s in skipped
            ],
        }
        click.echo(json.dumps(output, indent=2))
        return

    console = Console()
    render_bulk_results(console, results, totals, skipped if show_skipped else None)
    if skipped and not show_skipped:
        console.print(f"[yellow]{len(skipped)} row(s) skipped (use --show-skipped for details)[/yellow]")


@bulk.command("template")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path),
              help="Write the template to a file instead of stdout")
def bulk_template(output):
    """Print (or write) a roster template with sample rows."""
    content = generate_bulk_template()
    if output is None:
        click.echo(content, nl=False)
        return

    if output.exists():
        click.confirm(f"{output} exists. Overwrite?", abort=True)
    output.write_text(content, encoding="utf-8")
    click.echo(f"Template written to {output}")
