"""Settings CLI commands for SARS Calc.

Manages settings.json - default tax year and extra tax rules directory.
"""

import click
from pathlib import Path

from sarscalc.sdk import (
    KNOWN_SETTINGS,
    SettingsError,
    get_settings_path,
    load_settings,
    reset_registry,
    set_setting,
    unset_setting,
)


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax year for calculations
    - tax_rules_dir: directory with additional <year>.yaml rule files
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    if not current:
        click.echo("No settings configured (using defaults).")
        return

    click.echo("Current settings:")
    for key, value in current.items():
        click.echo(f"  {key}: {value}")


@settings.command("set")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE.

    Examples:
        sars-calc settings set tax_year 2025
        sars-calc settings set tax_rules_dir ~/sars-rules
    """
    if key == "tax_rules_dir":
        rules_dir = Path(value).expanduser().resolve()
        if not rules_dir.is_dir():
            raise click.ClickException(f"Not a directory: {rules_dir}")
        value = str(rules_dir)
    elif key == "tax_year" and not (value.isdigit() and len(value) == 4):
        raise click.BadParameter(f"Invalid year '{value}'. Must be 4 digits.")

    try:
        path = set_setting(key, value)
    except SettingsError as e:
        raise click.ClickException(str(e))

    reset_registry()
    click.echo(f"Set {key}: {value}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key", type=click.Choice(sorted(KNOWN_SETTINGS)))
def settings_unset(key):
    """Remove KEY, reverting to its default."""
    if unset_setting(key):
        reset_registry()
        click.echo(f"Cleared {key}.")
    else:
        click.echo(f"{key} was not set.")
