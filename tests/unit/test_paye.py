"""Tests for PAYE calculation against the 2025 SARS tables.

Expected values are worked by hand from the published brackets:

    R25 000/month -> R300 000/year
    18% of 237 100                     = 42 678.00
    26% of (300 000 - 237 101) = 62 899 = 16 353.74
    less primary rebate                 = 17 235.00
    annual 41 796.74 -> monthly 3 483.06
"""

import pytest

from sarscalc.sdk.taxes import ConfigurationError, TaxRules, calculate_paye_tax


@pytest.fixture
def two_band_rules():
    """Rules whose second band starts exactly at the first band's max."""
    return TaxRules.model_validate({
        "tax_year": "2030",
        "tables": [{
            "id": "flat-under-65",
            "age_bracket": "under_65",
            "threshold_amount": 0,
            "tax_brackets": [
                {"min": 0, "max": 120000, "rate": 0.1},
                {"min": 120000, "max": None, "rate": 0.2},
            ],
            "rebates": {"primary": 0},
        }],
        "uif": {"rate": 0.01, "max_monthly_salary": 17712, "max_monthly_contribution": 177.12},
        "pension_fund": {"max_deduction_percentage": 0.075, "max_annual_amount": 350000},
    })


class TestCalculatePayeTax:

    def test_second_bracket(self, rules_2025):
        result = calculate_paye_tax(25000, "under_65", rules_2025)

        assert result.tax == pytest.approx(41796.74 / 12)
        assert result.annual_tax_before_rebates == pytest.approx(59031.74)
        assert len(result.breakdown) == 2
        assert result.breakdown[0].taxable_amount == pytest.approx(237100)
        assert result.breakdown[0].tax_amount == pytest.approx(42678.0)
        assert result.breakdown[1].taxable_amount == pytest.approx(62899)
        assert result.breakdown[1].tax_amount == pytest.approx(16353.74)

    def test_income_below_threshold_pays_nothing(self, rules_2025):
        # 84 000 * 18% = 15 120, less than the primary rebate
        result = calculate_paye_tax(7000, "under_65", rules_2025)
        assert result.tax == 0
        assert result.annual_tax_before_rebates == pytest.approx(15120)

    def test_zero_income(self, rules_2025):
        result = calculate_paye_tax(0, "under_65", rules_2025)
        assert result.tax == 0
        assert result.breakdown == []

    def test_older_categories_get_more_rebates(self, rules_2025):
        under_65 = calculate_paye_tax(25000, "under_65", rules_2025).tax
        mid = calculate_paye_tax(25000, "65_to_75", rules_2025).tax
        over_75 = calculate_paye_tax(25000, "over_75", rules_2025).tax

        assert mid == pytest.approx((59031.74 - 26679) / 12)
        assert over_75 == pytest.approx((59031.74 - 29824) / 12)
        assert under_65 > mid > over_75

    def test_top_bracket_uses_every_band(self, rules_2025):
        result = calculate_paye_tax(200000, "under_65", rules_2025)

        assert len(result.breakdown) == 7
        assert result.breakdown[-1].bracket.rate == 0.45
        assert result.breakdown[-1].taxable_amount == pytest.approx(2400000 - 1817001)

    def test_marginal_rate_within_bracket(self, rules_2025):
        # R480 000 and R492 000 a year both sit in the 31% band
        low = calculate_paye_tax(40000, "under_65", rules_2025).tax
        high = calculate_paye_tax(41000, "under_65", rules_2025).tax
        assert high - low == pytest.approx(1000 * 0.31)

    def test_monotonic(self, rules_2025):
        previous = 0.0
        for monthly in range(0, 300001, 5000):
            tax = calculate_paye_tax(monthly, "under_65", rules_2025).tax
            assert tax >= previous
            previous = tax

    def test_income_on_boundary_stays_in_lower_band(self, two_band_rules):
        result = calculate_paye_tax(10000, "under_65", two_band_rules)

        assert len(result.breakdown) == 1
        assert result.breakdown[0].bracket.rate == 0.1
        assert result.tax == pytest.approx(1000)

    def test_income_above_boundary(self, two_band_rules):
        result = calculate_paye_tax(11000, "under_65", two_band_rules)

        # 120 000 at 10% plus 12 000 at 20%
        assert result.tax == pytest.approx((12000 + 2400) / 12)

    def test_missing_table(self, two_band_rules):
        with pytest.raises(ConfigurationError, match="No active tax table found for age category: over_75"):
            calculate_paye_tax(10000, "over_75", two_band_rules)

    def test_default_rules(self):
        assert calculate_paye_tax(25000, "under_65").tax == pytest.approx(41796.74 / 12)
