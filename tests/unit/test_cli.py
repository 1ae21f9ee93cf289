"""Tests for the sars-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from sarscalc.cli.__main__ import cli
from sarscalc.sdk import TEMPLATE_HEADER, load_settings, set_setting


@pytest.fixture
def runner():
    # Wide terminal so Rich never wraps names or totals
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def roster(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text(
        "Employee Name,Gross Salary,Age Category,Medical Aid,Pension Fund,Other\n"
        "John Smith,25000,under_65\n"
        "Jane Doe,10000,under_65,,,500\n"
        "Bad Row,abc,under_65\n"
    )
    return path


class TestCalc:

    def test_table_output(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "--name", "John"])

        assert result.exit_code == 0, result.output
        assert "Net salary" in result.output
        assert "Annual tax by bracket" in result.output

    def test_json_output(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "--medical-aid", "1000", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tax_year"] == "2025"
        assert data["inputs"]["medical_aid"] == 1000
        assert data["result"]["uif_contribution"] == pytest.approx(177.12)
        assert data["result"]["taxable_income"] == 24000
        assert data["warnings"] == []

    def test_age_category(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "-a", "over_75", "--format", "json"])
        data = json.loads(result.output)
        assert data["result"]["paye_tax"] == pytest.approx((59031.74 - 29824) / 12)

    def test_invalid_inputs_rejected(self, runner):
        result = runner.invoke(cli, ["calc", "0"])

        assert result.exit_code == 1
        assert "Gross salary must be greater than 0" in result.output
        assert "Invalid salary inputs" in result.output

    def test_skip_validation(self, runner):
        result = runner.invoke(cli, ["calc", "0", "--skip-validation", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["warnings"] == ["Gross salary must be greater than 0"]
        assert data["result"]["net_salary"] == 0

    def test_unknown_tax_year(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "--tax-year", "1999"])

        assert result.exit_code == 1
        assert "No tax rules for tax year 1999" in result.output

    def test_bad_age_category(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "-a", "senior"])
        assert result.exit_code == 2


class TestBulk:

    def test_run_table(self, runner, roster):
        result = runner.invoke(cli, ["bulk", "run", str(roster)])

        assert result.exit_code == 0, result.output
        assert "John Smith" in result.output
        assert "TOTALS (2)" in result.output
        assert "1 row(s) skipped" in result.output

    def test_run_show_skipped(self, runner, roster):
        result = runner.invoke(cli, ["bulk", "run", str(roster), "--show-skipped"])

        assert result.exit_code == 0, result.output
        assert "invalid_gross_salary" in result.output

    def test_run_json(self, runner, roster):
        result = runner.invoke(cli, ["bulk", "run", str(roster), "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [r["employee_name"] for r in data["results"]] == ["John Smith", "Jane Doe"]
        assert data["totals"]["employees"] == 2
        assert data["totals"]["gross_salary"] == 35000
        assert data["skipped"] == [{
            "line": 4,
            "reason": "invalid_gross_salary",
            "detail": "invalid gross salary 'abc'",
        }]

    def test_no_valid_rows(self, runner, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("Employee Name,Gross,Age\nBad,abc,under_65\n")

        result = runner.invoke(cli, ["bulk", "run", str(path)])

        assert result.exit_code == 1
        assert "No valid employee data found in bad.csv (1 row(s) skipped)" in result.output

    def test_header_only(self, runner, tmp_path):
        path = tmp_path / "empty.csv"
        path.write_text("Employee Name,Gross,Age\n")

        result = runner.invoke(cli, ["bulk", "run", str(path)])

        assert result.exit_code == 1
        assert "at least a header row and one data row" in result.output

    def test_non_utf8_roster(self, runner, tmp_path):
        path = tmp_path / "latin1.csv"
        path.write_bytes("Employee Name,Gross,Age\nJos\xe9,25000,under_65\n".encode("latin-1"))

        result = runner.invoke(cli, ["bulk", "run", str(path)])

        assert result.exit_code == 1
        assert "latin1.csv is not valid UTF-8 text" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_template_stdout(self, runner):
        result = runner.invoke(cli, ["bulk", "template"])

        assert result.exit_code == 0
        assert result.output.splitlines()[0] == TEMPLATE_HEADER

    def test_template_file(self, runner, tmp_path):
        path = tmp_path / "template.csv"
        result = runner.invoke(cli, ["bulk", "template", "-o", str(path)])

        assert result.exit_code == 0, result.output
        assert path.read_text().startswith(TEMPLATE_HEADER)

    def test_template_overwrite_declined(self, runner, tmp_path):
        path = tmp_path / "template.csv"
        path.write_text("keep me")

        result = runner.invoke(cli, ["bulk", "template", "-o", str(path)], input="n\n")

        assert result.exit_code == 1
        assert path.read_text() == "keep me"


class TestTables:

    def test_years(self, runner):
        result = runner.invoke(cli, ["tables", "years"])

        assert result.exit_code == 0
        assert "2025 (default)" in result.output

    def test_show_json(self, runner):
        result = runner.invoke(cli, ["tables", "show", "65_to_75", "--format", "json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [t["id"] for t in data["tables"]] == ["sars-2025-65-to-75"]
        assert data["tables"][0]["rebates"]["secondary"] == 9444
        assert data["uif"]["max_monthly_contribution"] == 177.12

    def test_show_all(self, runner):
        result = runner.invoke(cli, ["tables", "show"])

        assert result.exit_code == 0, result.output
        assert "sars-2025-under-65" in result.output
        assert "sars-2025-over-75" in result.output


class TestConfiguredYearWithoutRules:

    @pytest.fixture(autouse=True)
    def missing_year(self):
        set_setting("tax_year", "2024")

    def test_explicit_tax_year_still_works(self, runner):
        result = runner.invoke(cli, ["calc", "25000", "--tax-year", "2025", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tax_year"] == "2025"

    def test_default_lookup_reports_missing_year(self, runner):
        result = runner.invoke(cli, ["calc", "25000"])

        assert result.exit_code == 1
        assert "Default tax year 2024 has no rules" in result.output

    def test_years_still_listed(self, runner):
        result = runner.invoke(cli, ["tables", "years"])

        assert result.exit_code == 0, result.output
        assert "2025" in result.output
        assert "Configured tax year 2024 has no rules" in result.output

    def test_env_year_overrides_setting(self, runner, monkeypatch):
        monkeypatch.setenv("SARS_CALC_TAX_YEAR", "2025")

        result = runner.invoke(cli, ["calc", "25000", "--format", "json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["tax_year"] == "2025"


class TestSettings:

    def test_show_empty(self, runner):
        result = runner.invoke(cli, ["settings", "show"])

        assert result.exit_code == 0
        assert "No settings configured" in result.output

    def test_set_tax_year(self, runner):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "2025"])

        assert result.exit_code == 0, result.output
        assert load_settings() == {"tax_year": "2025"}

        shown = runner.invoke(cli, ["settings", "show"])
        assert "tax_year: 2025" in shown.output

    def test_invalid_tax_year(self, runner):
        result = runner.invoke(cli, ["settings", "set", "tax_year", "25"])

        assert result.exit_code == 2
        assert load_settings() == {}

    def test_rules_dir_must_exist(self, runner, tmp_path):
        result = runner.invoke(cli, ["settings", "set", "tax_rules_dir", str(tmp_path / "missing")])

        assert result.exit_code == 1
        assert "Not a directory" in result.output

    def test_unset(self, runner):
        runner.invoke(cli, ["settings", "set", "tax_year", "2025"])

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "Cleared tax_year." in result.output

        result = runner.invoke(cli, ["settings", "unset", "tax_year"])
        assert "tax_year was not set." in result.output

    def test_unknown_key(self, runner):
        result = runner.invoke(cli, ["settings", "set", "colour", "blue"])
        assert result.exit_code == 2


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "sars-calc" in result.output
