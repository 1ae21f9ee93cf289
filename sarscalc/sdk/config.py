"""Configuration management for SARS Calc.

Configuration lives in a single settings.json file. Tax constants are NOT
settings: they live in per-year YAML files (see taxes/tables.py). Settings
only choose which year applies and where extra rule files are found.

Known settings:
- tax_year: default tax year for calculations (e.g. "2025")
- tax_rules_dir: directory holding additional or overriding <year>.yaml files

Config directory resolution:
1. SARS_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/sars-calc/ (XDG_CONFIG_HOME fallback)

The default tax year can also be forced with SARS_CALC_TAX_YEAR, which
wins over settings.json.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional


APP_NAME = "sars-calc"
SETTINGS_FILENAME = "settings.json"
CONFIG_PATH_ENV = "SARS_CALC_CONFIG_PATH"
TAX_YEAR_ENV = "SARS_CALC_TAX_YEAR"

KNOWN_SETTINGS = {
    "tax_year": "Default tax year used for calculations",
    "tax_rules_dir": "Directory with additional <year>.yaml tax rule files",
}


class SettingsError(Exception):
    """Raised when a settings key is unknown or a value is unusable."""
    pass


def get_config_dir() -> Path:
    """Directory holding settings.json.

    SARS_CALC_CONFIG_PATH wins; otherwise $XDG_CONFIG_HOME/sars-calc,
    falling back to ~/.config/sars-calc.
    """
    override = os.environ.get(CONFIG_PATH_ENV)
    if override:
        return Path(override)

    config_home = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(config_home) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Read tax_year / tax_rules_dir from settings.json ({} before first save)."""
    path = get_settings_path()
    if not path.exists():
        return {}
    return json.loads(path.read_text())


def save_settings(settings: dict) -> Path:
    """Write settings.json, creating the config directory on first use."""
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2))
    return path


def _check_key(key: str) -> None:
    if key not in KNOWN_SETTINGS:
        known = ", ".join(sorted(KNOWN_SETTINGS))
        raise SettingsError(f"Unknown setting '{key}'. Known settings: {known}")


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json."""
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a known setting value in settings.json.

    Raises:
        SettingsError: If key is not a known setting
    """
    _check_key(key)
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was present."""
    _check_key(key)
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


def get_configured_tax_year() -> Optional[str]:
    """Get the tax year chosen by environment or settings, if any."""
    env_year = os.environ.get(TAX_YEAR_ENV)
    if env_year:
        return env_year
    year = get_setting("tax_year")
    return str(year) if year is not None else None


def get_user_tax_rules_dir() -> Optional[Path]:
    """Get the user's extra tax rules directory from settings, if configured."""
    rules_dir = get_setting("tax_rules_dir")
    if not rules_dir:
        return None
    return Path(rules_dir).expanduser()
