"""Shared fixtures.

Every test runs against an empty, temporary config directory so a
developer's own settings.json never leaks into results.
"""

import pytest

from sarscalc.sdk.taxes import load_tax_rules, reset_registry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the SDK at an empty config directory and a fresh registry."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    monkeypatch.setenv("SARS_CALC_CONFIG_PATH", str(config_dir))
    monkeypatch.delenv("SARS_CALC_TAX_YEAR", raising=False)

    reset_registry()
    yield config_dir
    reset_registry()


@pytest.fixture
def rules_2025():
    """Bundled 2025 tax rules."""
    return load_tax_rules("2025")
