"""Tax table inspection commands."""

import json

import click
from rich.console import Console

from sarscalc.sdk import AGE_CATEGORIES, ConfigurationError, get_registry
from .renderers.salary_renderer import render_tax_table


@click.group()
def tables():
    """Inspect the loaded SARS tax tables."""
    pass


@tables.command("years")
def tables_years():
    """List tax years with rules available."""
    try:
        registry = get_registry()
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    for year in registry.tax_years:
        marker = " (default)" if year == registry.default_year else ""
        click.echo(f"{year}{marker}")

    if registry.default_year not in registry.tax_years:
        click.echo(
            click.style(f"Configured tax year {registry.default_year} has no rules", fg="yellow"),
            err=True,
        )


@tables.command("show")
@click.argument("age_category", required=False, type=click.Choice(AGE_CATEGORIES))
@click.option("--tax-year", help="Tax year (default: configured or latest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format (default: table)")
def tables_show(age_category, tax_year, output_format):
    """Show brackets and rebates for one or all age categories."""
    categories = [age_category] if age_category else list(AGE_CATEGORIES)

    try:
        registry = get_registry()
        rules = registry.rules(tax_year)
        found = [registry.get_active_tax_table(category, rules.tax_year) for category in categories]
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = {
            "tax_year": rules.tax_year,
            "tables": [table.model_dump(mode="json") for table in found],
            "uif": rules.uif.model_dump(mode="json"),
            "pension_fund": rules.pension_fund.model_dump(mode="json"),
        }
        click.echo(json.dumps(output, indent=2))
        return

    console = Console()
    for table in found:
        render_tax_table(console, table, rules)
