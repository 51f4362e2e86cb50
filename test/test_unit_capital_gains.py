# Test type: Unit Test
# Validation to be executed: Validates holding-period classification,
#   indexation, equity LTCG exemption and capital-gains tax per asset type.
# Command: pytest test/test_unit_capital_gains.py -v

"""Unit tests for taxcore.services.capital_gains_service module."""

import logging
from datetime import date, datetime

import pytest

from taxcore.models.tax import AssetType, CapitalGainInput, GainType, RegimeName
from taxcore.services.capital_gains_service import (
    approximate_marginal_rate,
    classify_gain,
    compute_capital_gains_tax,
    holding_period_days,
    indexation_base_year,
    indexed_cost,
)


class TestHoldingPeriod:

    def test_calendar_days(self):
        assert holding_period_days(date(2022, 1, 1), date(2023, 1, 1)) == 365

    def test_order_does_not_matter(self):
        assert holding_period_days(date(2023, 1, 1), date(2022, 1, 1)) == 365

    def test_partial_day_rounds_up(self):
        start = datetime(2023, 1, 1, 0, 0)
        end = datetime(2023, 1, 2, 1, 0)
        assert holding_period_days(start, end) == 2

    def test_mixed_date_and_datetime(self):
        assert holding_period_days(date(2023, 1, 1), datetime(2023, 1, 3)) == 2


class TestClassifyGain:
    """Long-term only when the holding period strictly exceeds the threshold."""

    @pytest.mark.parametrize(
        "asset, threshold",
        [
            (AssetType.EQUITY, 365),
            (AssetType.PROPERTY, 730),
            (AssetType.DEBT, 1095),
            (AssetType.GOLD, 1095),
        ],
    )
    def test_threshold_boundary(self, asset, threshold):
        assert classify_gain(asset, threshold) == GainType.SHORT
        assert classify_gain(asset, threshold + 1) == GainType.LONG

    def test_plain_string_asset(self):
        assert classify_gain("property", 731) == GainType.LONG

    def test_unknown_asset_uses_equity_threshold(self):
        assert classify_gain("crypto", 365) == GainType.SHORT
        assert classify_gain("crypto", 366) == GainType.LONG


class TestIndexedCost:

    def test_notified_ratio(self):
        """1,00,000 × 348 / 254 = 1,37,007.87 → 1,37,008."""
        assert indexed_cost(100_000, "2015-16", "2023-24") == 137_008

    def test_same_year_is_neutral(self):
        assert indexed_cost(250_000, "2019-20", "2019-20") == 250_000

    def test_fixture_table(self, fixture_cii):
        assert indexed_cost(100_000, "2020-21", "2023-24", fixture_cii) == 120_000

    def test_missing_year_falls_back_to_100(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert indexed_cost(100_000, "1990-91", "2023-24") == 348_000
        assert "1990-91" in caplog.text

    def test_both_years_missing_is_neutral(self):
        assert indexed_cost(100_000, "1980-81", "2090-91") == 100_000

    def test_non_positive_index_raises(self):
        with pytest.raises(ValueError, match="must be positive"):
            indexed_cost(100_000, "2020-21", "2023-24", {"2020-21": 0, "2023-24": 120})

    def test_base_year_for_old_assets(self):
        assert indexation_base_year("1995-96") == "2001-02"
        assert indexation_base_year("2010-11") == "2010-11"


class TestApproximateMarginalRate:

    def test_flat_rate_of_other_income_bracket(self, old_regime):
        rate, tax = approximate_marginal_rate(100_000, 450_000, old_regime.slabs)
        assert rate == 5
        assert tax == pytest.approx(5_000)


class TestEquity:

    def test_long_term_with_exemption(self, equity_long_term):
        """Gain 1,49,000 → taxable 49,000 → 4,900 + 196 cess."""
        result = compute_capital_gains_tax(equity_long_term)
        assert result.holding_days == 366
        assert result.gain_type == GainType.LONG
        assert result.capital_gain == 149_000
        assert result.indexed_cost == 100_000
        assert result.taxable_gain == 49_000
        assert result.tax_rate == 10
        assert result.tax_amount == 4_900
        assert result.surcharge == 0
        assert result.cess == 196
        assert result.total_tax == 5_096

    def test_long_term_gain_within_exemption(self):
        cg = CapitalGainInput(
            asset_type=AssetType.EQUITY,
            acquisition_date=date(2021, 5, 1),
            disposal_date=date(2023, 5, 1),
            purchase_price=100_000,
            sale_price=180_000,
        )
        result = compute_capital_gains_tax(cg)
        assert result.capital_gain == 80_000
        assert result.taxable_gain == 0
        assert result.total_tax == 0

    def test_exemption_leaves_excess_taxable(self):
        cg = CapitalGainInput(
            asset_type=AssetType.EQUITY,
            acquisition_date=date(2021, 5, 1),
            disposal_date=date(2023, 5, 1),
            purchase_price=100_000,
            sale_price=250_000,
        )
        assert compute_capital_gains_tax(cg).taxable_gain == 50_000

    def test_short_term_flat_15(self):
        cg = CapitalGainInput(
            asset_type=AssetType.EQUITY,
            acquisition_date=date(2023, 4, 1),
            disposal_date=date(2023, 10, 1),
            purchase_price=100_000,
            sale_price=150_000,
        )
        result = compute_capital_gains_tax(cg)
        assert result.gain_type == GainType.SHORT
        assert result.taxable_gain == 50_000
        assert result.tax_rate == 15
        assert result.tax_amount == 7_500
        assert result.total_tax == 7_800

    def test_equity_never_indexed(self):
        cg = CapitalGainInput(
            asset_type=AssetType.EQUITY,
            acquisition_date=date(2015, 6, 1),
            disposal_date=date(2023, 6, 1),
            purchase_price=100_000,
            sale_price=300_000,
        )
        assert compute_capital_gains_tax(cg).indexed_cost == 100_000

    def test_surcharge_on_large_short_term_gain(self):
        """6 crore STCG: 90,00,000 tax, 37% surcharge, 4% cess."""
        cg = CapitalGainInput(
            asset_type=AssetType.EQUITY,
            acquisition_date=date(2023, 4, 1),
            disposal_date=date(2023, 12, 1),
            purchase_price=10_000_000,
            sale_price=70_000_000,
        )
        result = compute_capital_gains_tax(cg)
        assert result.tax_amount == 9_000_000
        assert result.surcharge == 3_330_000
        assert result.cess == 493_200
        assert result.total_tax == 12_823_200


class TestIndexedAssets:

    def test_debt_long_term_indexed(self, debt_long_term, fixture_cii):
        """Cost indexed to 1,20,000 → gain 80,000 → 16,000 + 640 cess."""
        result = compute_capital_gains_tax(debt_long_term, cii_table=fixture_cii)
        assert result.holding_days == 1125
        assert result.gain_type == GainType.LONG
        assert result.purchase_fy == "2020-21"
        assert result.sale_fy == "2023-24"
        assert result.indexed_cost == 120_000
        assert result.capital_gain == 80_000
        assert result.taxable_gain == 80_000
        assert result.tax_rate == 20
        assert result.tax_amount == 16_000
        assert result.cess == 640
        assert result.total_tax == 16_640

    def test_property_with_notified_cii(self):
        """10 L bought FY 2015-16, sold FY 2023-24 for 20 L with 50,000 costs."""
        cg = CapitalGainInput(
            asset_type=AssetType.PROPERTY,
            acquisition_date=date(2015, 6, 1),
            disposal_date=date(2023, 6, 1),
            purchase_price=1_000_000,
            sale_price=2_000_000,
            expenses=50_000,
        )
        result = compute_capital_gains_tax(cg)
        assert result.indexed_cost == 1_370_079
        assert result.capital_gain == 579_921
        assert result.tax_amount == pytest.approx(115_984.2)
        assert result.total_tax == pytest.approx(
            result.tax_amount + result.surcharge + result.cess
        )

    def test_explicit_financial_years_override_dates(self, fixture_cii):
        cg = CapitalGainInput(
            asset_type=AssetType.GOLD,
            acquisition_date=date(2019, 6, 1),
            disposal_date=date(2023, 6, 1),
            purchase_price=100_000,
            sale_price=150_000,
            purchase_fy="2020-21",
            sale_fy="2023-24",
        )
        result = compute_capital_gains_tax(cg, cii_table=fixture_cii)
        assert result.purchase_fy == "2020-21"
        assert result.indexed_cost == 120_000
        assert result.capital_gain == 30_000

    def test_loss_clamped_to_zero(self, fixture_cii):
        cg = CapitalGainInput(
            asset_type=AssetType.DEBT,
            acquisition_date=date(2020, 6, 1),
            disposal_date=date(2023, 7, 1),
            purchase_price=100_000,
            sale_price=110_000,
        )
        result = compute_capital_gains_tax(cg, cii_table=fixture_cii)
        assert result.capital_gain == 0
        assert result.taxable_gain == 0
        assert result.total_tax == 0


class TestShortTermSlabRate:
    """Short-term debt / property / gold gains are taxed at slab rates."""

    @pytest.fixture
    def debt_short_term(self):
        return CapitalGainInput(
            asset_type=AssetType.DEBT,
            acquisition_date=date(2022, 6, 1),
            disposal_date=date(2023, 6, 1),
            purchase_price=100_000,
            sale_price=200_000,
        )

    def test_approximated_with_marginal_rate(self, debt_short_term):
        result = compute_capital_gains_tax(debt_short_term, other_income=450_000)
        assert result.gain_type == GainType.SHORT
        assert result.approximated_marginal_rate is True
        assert result.tax_rate == 5
        assert result.tax_amount == 5_000
        assert result.total_tax == 5_200

    def test_integrated_with_other_income(self, debt_short_term):
        """slab(5.5 L) − slab(4.5 L) = 22,500 − 10,000 = 12,500."""
        result = compute_capital_gains_tax(
            debt_short_term, other_income=450_000, include_other_income=True
        )
        assert result.approximated_marginal_rate is False
        assert result.tax_amount == 12_500
        assert result.tax_rate == 12.5
        assert result.cess == 500
        assert result.total_tax == 13_000

    def test_new_regime_slabs(self, debt_short_term):
        result = compute_capital_gains_tax(
            debt_short_term, other_income=1_000_000, regime=RegimeName.NEW
        )
        assert result.tax_rate == 15
        assert result.tax_amount == 15_000

    def test_taxable_never_exceeds_gain(self, debt_short_term):
        result = compute_capital_gains_tax(debt_short_term, other_income=2_000_000)
        assert result.taxable_gain <= result.capital_gain
