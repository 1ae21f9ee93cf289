"""Tax table loading and lookup.

Tax rules are kept per tax year in <year>.yaml files. The bundled files
live in sarscalc/tax_rules/; a user directory configured through the
tax_rules_dir setting may add new years or override a bundled year.

All years found are loaded once into a TaxTableRegistry keyed by
(tax_year, age_bracket). The registry and the models it holds are
immutable, so the cached instance can be shared freely.
"""

import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Optional

import yaml
from pydantic import ValidationError

from ..config import get_configured_tax_year, get_user_tax_rules_dir
from .schemas import SARSTaxTable, TaxRules

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when tax configuration is missing, ambiguous or invalid."""
    pass


def get_bundled_rules_dir() -> Path:
    """Get the tax_rules directory shipped with the package."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> sarscalc


def get_tax_rules_dirs() -> List[Path]:
    """Get rule directories in ascending priority (later directories win)."""
    dirs = [get_bundled_rules_dir()]
    user_dir = get_user_tax_rules_dir()
    if user_dir:
        dirs.append(user_dir)
    return dirs


def available_tax_years(rules_dirs: Optional[List[Path]] = None) -> List[str]:
    """Get sorted list of available tax years (descending)."""
    if rules_dirs is None:
        rules_dirs = get_tax_rules_dirs()

    years = set()
    for rules_dir in rules_dirs:
        if not rules_dir.is_dir():
            logger.warning(f"Tax rules directory not found, ignoring: {rules_dir}")
            continue
        years.update(p.stem for p in rules_dir.glob("*.yaml") if p.stem.isdigit())

    return sorted(years, key=int, reverse=True)


def _find_rules_file(year: str, rules_dirs: List[Path]) -> Optional[Path]:
    for rules_dir in reversed(rules_dirs):
        candidate = rules_dir / f"{year}.yaml"
        if candidate.exists():
            return candidate
    return None


def load_tax_rules(year: str, rules_dirs: Optional[List[Path]] = None) -> TaxRules:
    """Load and validate tax rules for a specific year.

    Args:
        year: Tax year (e.g. "2025")
        rules_dirs: Directories to search, lowest priority first.
            Defaults to the bundled directory plus the user's tax_rules_dir.

    Raises:
        FileNotFoundError: If no <year>.yaml exists in any directory
        ConfigurationError: If the file does not describe valid tax rules
    """
    year = str(year)
    if rules_dirs is None:
        rules_dirs = get_tax_rules_dirs()

    config_file = _find_rules_file(year, rules_dirs)
    if config_file is None:
        searched = ", ".join(str(d) for d in rules_dirs)
        raise FileNotFoundError(f"Tax rules file not found for year {year} (searched: {searched})")

    with open(config_file, "r") as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e

    try:
        rules = TaxRules.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid tax rules in {config_file}:\n{e}") from e

    if rules.tax_year != year:
        raise ConfigurationError(
            f"{config_file} declares tax_year {rules.tax_year}, expected {year}"
        )

    logger.debug(f"Loaded tax rules for {year} from {config_file} ({len(rules.tables)} tables)")
    return rules


class TaxTableRegistry:
    """Immutable set of tax rules keyed by (tax_year, age_bracket)."""

    def __init__(self, rules: Iterable[TaxRules], default_year: Optional[str] = None):
        by_year = {}
        tables = {}
        for year_rules in rules:
            if year_rules.tax_year in by_year:
                raise ConfigurationError(f"Tax rules for {year_rules.tax_year} loaded twice")
            by_year[year_rules.tax_year] = year_rules
            for table in year_rules.tables:
                tables.setdefault((year_rules.tax_year, table.age_bracket), []).append(table)

        if not by_year:
            raise ConfigurationError("No tax rules available")

        self._rules = MappingProxyType(by_year)
        self._tables = MappingProxyType({key: tuple(value) for key, value in tables.items()})
        self._default_year = str(default_year) if default_year else max(by_year, key=int)

    @property
    def tax_years(self) -> List[str]:
        return sorted(self._rules, key=int, reverse=True)

    @property
    def default_year(self) -> str:
        return self._default_year

    def rules(self, tax_year: Optional[str] = None) -> TaxRules:
        """Get the rules for a tax year (default year if None).

        An unknown default year only fails here, when it is actually used.
        """
        if not tax_year and self._default_year not in self._rules:
            raise ConfigurationError(
                f"Default tax year {self._default_year} has no rules. "
                f"Available: {', '.join(self.tax_years)}"
            )

        year = str(tax_year) if tax_year else self._default_year
        if year not in self._rules:
            raise ConfigurationError(
                f"No tax rules for tax year {year}. Available: {', '.join(self.tax_years)}"
            )
        return self._rules[year]

    def tables(self, age_category: str, tax_year: Optional[str] = None) -> tuple:
        """Get every table (active or not) for an age bracket and year."""
        year = self.rules(tax_year).tax_year
        return self._tables.get((year, age_category), ())

    def get_active_tax_table(self, age_category: str, tax_year: Optional[str] = None) -> SARSTaxTable:
        """Get the active table for an age bracket.

        Raises:
            ConfigurationError: If the year is unknown or no active table matches
        """
        for table in self.tables(age_category, tax_year):
            if table.is_active:
                return table
        year = self.rules(tax_year).tax_year
        raise ConfigurationError(
            f"No active tax table found for age category: {age_category} (tax year {year})"
        )


def build_registry(
    rules_dirs: Optional[List[Path]] = None,
    default_year: Optional[str] = None,
) -> TaxTableRegistry:
    """Load every available tax year into a new registry."""
    if rules_dirs is None:
        rules_dirs = get_tax_rules_dirs()
    years = available_tax_years(rules_dirs)
    return TaxTableRegistry(
        (load_tax_rules(year, rules_dirs) for year in years),
        default_year=default_year,
    )


@lru_cache(maxsize=1)
def get_registry() -> TaxTableRegistry:
    """Get the process-wide registry, loading it on first use."""
    return build_registry(default_year=get_configured_tax_year())


def reset_registry() -> None:
    """Drop the cached registry so the next lookup reloads from disk."""
    get_registry.cache_clear()


def resolve_rules(rules: Optional[TaxRules] = None) -> TaxRules:
    """Return rules unchanged, or the default year's rules if None."""
    if rules is not None:
        return rules
    return get_registry().rules()


def get_active_tax_table(
    age_category: str,
    tax_year: Optional[str] = None,
    rules: Optional[TaxRules] = None,
) -> SARSTaxTable:
    """Get the active tax table for an age category.

    Looks in the given rules when provided, otherwise in the registry for
    tax_year (default year if None).

    Raises:
        ConfigurationError: If no active table matches
    """
    if rules is None:
        return get_registry().get_active_tax_table(age_category, tax_year)

    for table in rules.tables:
        if table.age_bracket == age_category and table.is_active:
            return table
    raise ConfigurationError(
        f"No active tax table found for age category: {age_category} (tax year {rules.tax_year})"
    )
