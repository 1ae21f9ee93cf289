"""Tests for UIF and pension fund limits."""

import pytest

from sarscalc.sdk.taxes import calculate_uif, validate_pension_fund


class TestCalculateUif:

    def test_below_ceiling(self, rules_2025):
        assert calculate_uif(10000, rules_2025) == pytest.approx(100.0)

    def test_at_ceiling(self, rules_2025):
        assert calculate_uif(17712, rules_2025) == pytest.approx(177.12)

    def test_above_ceiling_is_capped(self, rules_2025):
        uif = calculate_uif(50000, rules_2025)
        assert uif == pytest.approx(177.12)
        assert uif <= rules_2025.uif.max_monthly_contribution

    def test_zero(self, rules_2025):
        assert calculate_uif(0, rules_2025) == 0

    def test_default_rules(self):
        assert calculate_uif(10000) == pytest.approx(100.0)


class TestValidatePensionFund:

    def test_within_limits_unchanged(self, rules_2025):
        assert validate_pension_fund(1000, 20000, rules_2025) == 1000

    def test_percentage_limit(self, rules_2025):
        assert validate_pension_fund(5000, 20000, rules_2025) == pytest.approx(1500)

    def test_annual_cap(self, rules_2025):
        limited = validate_pension_fund(50000, 1_000_000, rules_2025)
        assert limited == pytest.approx(350000 / 12)

    def test_large_contribution_on_modest_salary(self, rules_2025):
        assert validate_pension_fund(500000 / 12, 20000, rules_2025) == pytest.approx(1500)

    def test_zero(self, rules_2025):
        assert validate_pension_fund(0, 20000, rules_2025) == 0
