# Test type: Unit Test
# Validation to be executed: Validates the static slab and CII tables —
#   slab contiguity, default regime, monotonic CII and year fallback.
# Command: pytest test/test_unit_tables.py -v

"""Unit tests for taxcore.tables modules."""

import logging

import pytest

from taxcore.config import settings
from taxcore.models.tax import AssetType, GainType, RegimeName
from taxcore.tables.cii import COST_INFLATION_INDEX
from taxcore.tables.slabs import (
    CAPITAL_GAINS_RATES,
    SENIOR_CITIZEN_SLABS,
    SUPER_SENIOR_CITIZEN_SLABS,
    TAX_SLABS_BY_YEAR,
    default_tax_slabs,
    get_regime,
    get_tax_slabs_by_year,
)

ALL_SLAB_LISTS = [
    (f"{year}-{regime.regime.value}", regime.slabs)
    for year, table in TAX_SLABS_BY_YEAR.items()
    for regime in table.regimes
] + [("senior", SENIOR_CITIZEN_SLABS), ("super-senior", SUPER_SENIOR_CITIZEN_SLABS)]


class TestSlabTables:

    def test_years_covered(self):
        assert sorted(TAX_SLABS_BY_YEAR) == ["2023-24", "2024-25", "2025-26", "2026-27"]

    @pytest.mark.parametrize("label, slabs", ALL_SLAB_LISTS)
    def test_slabs_contiguous(self, label, slabs):
        assert slabs[0].income_from == 0
        for current, nxt in zip(slabs, slabs[1:]):
            assert current.income_to == nxt.income_from
        assert slabs[-1].income_to is None

    @pytest.mark.parametrize("year", sorted(TAX_SLABS_BY_YEAR))
    def test_single_default_new_regime(self, year):
        defaults = [r for r in TAX_SLABS_BY_YEAR[year].regimes if r.is_default]
        assert len(defaults) == 1
        assert defaults[0].regime == RegimeName.NEW
        assert TAX_SLABS_BY_YEAR[year].default_regime is defaults[0]

    def test_cess_is_4_percent(self):
        for table in TAX_SLABS_BY_YEAR.values():
            assert all(regime.cess == 4 for regime in table.regimes)

    def test_descriptions(self):
        slabs = get_regime("2024-25", RegimeName.OLD).slabs
        assert slabs[0].description == "Nil tax up to ₹2.5 lakh"
        assert slabs[1].description == "5% tax between ₹2.5-5 lakh"
        assert slabs[-1].description == "30% tax above ₹10 lakh"

    def test_unknown_year_falls_back(self, caplog):
        with caplog.at_level(logging.WARNING):
            table = get_tax_slabs_by_year("2031-32")
        assert table.assessment_year == "2024-25"
        assert "2031-32" in caplog.text

    def test_none_year_falls_back(self):
        assert get_tax_slabs_by_year(None).assessment_year == "2024-25"

    def test_misconfigured_default_uses_newest_table(self, monkeypatch, caplog):
        monkeypatch.setattr(settings, "DEFAULT_ASSESSMENT_YEAR", "2099-00")
        with caplog.at_level(logging.WARNING):
            table = get_tax_slabs_by_year("1999-00")
        assert table.assessment_year == "2026-27"
        assert default_tax_slabs() is table
        assert "2099-00" in caplog.text


class TestCostInflationIndex:

    def test_strictly_increasing(self):
        years = sorted(COST_INFLATION_INDEX)
        values = [COST_INFLATION_INDEX[y] for y in years]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_known_values(self):
        assert COST_INFLATION_INDEX["2001-02"] == 100
        assert COST_INFLATION_INDEX["2015-16"] == 254
        assert COST_INFLATION_INDEX["2023-24"] == 348

    def test_read_only(self):
        with pytest.raises(TypeError):
            COST_INFLATION_INDEX["2030-31"] = 500


class TestCapitalGainsRates:

    def test_every_asset_and_term_has_entry(self):
        for asset in AssetType:
            for term in GainType:
                assert (asset, term) in CAPITAL_GAINS_RATES

    def test_slab_rate_only_for_non_equity_short_term(self):
        slab_rated = {key for key, rate in CAPITAL_GAINS_RATES.items() if rate is None}
        assert slab_rated == {
            (AssetType.DEBT, GainType.SHORT),
            (AssetType.PROPERTY, GainType.SHORT),
            (AssetType.GOLD, GainType.SHORT),
        }
