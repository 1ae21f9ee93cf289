"""SARS Calc CLI - Command-line interface for South African salary calculations."""

import logging
import os

import click

from sarscalc import __version__

from .bulk_commands import bulk as bulk_group
from .calc_commands import calc as calc_command
from .settings_commands import settings as settings_group
from .tables_commands import tables as tables_group


def _configure_logging() -> None:
    """Configure logging based on LOG_LEVEL environment variable."""
    log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
        datefmt="%H:%M:%S"
    )


@click.group()
@click.version_option(version=__version__, prog_name="sars-calc")
def cli():
    """SARS Calc - South African PAYE and UIF salary calculator.

    Calculates monthly PAYE, UIF and net salary from gross salary using
    the SARS tax tables for the selected tax year.

    The tax year is chosen (in order) from:

    \b
    1. --tax-year option on the command
    2. SARS_CALC_TAX_YEAR environment variable
    3. settings.json 'tax_year' key (set via 'sars-calc settings set')
    4. The latest year with tax rules available

    Set LOG_LEVEL=DEBUG to see the tax working and skipped roster rows.
    """
    pass


cli.add_command(calc_command)
cli.add_command(bulk_group)
cli.add_command(tables_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    _configure_logging()
    cli()


if __name__ == "__main__":
    main()
