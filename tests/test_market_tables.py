"""Tests for the lookup tables."""

import json

import pydantic
import pytest

from avm.core.market_tables import MarketTables, load_market_tables


class TestMarketTables:

    def test_defaults(self, tables):
        assert tables.base_price("Madrid") == 4200
        assert tables.base_price("Barcelona") == 4800
        assert tables.base_price("Atlantis") == 2500
        assert tables.construction_cost("warehouse") == 600
        assert tables.construction_cost("land") == 1200
        assert tables.land_value_per_area("Madrid") == pytest.approx(1260)

    def test_type_multipliers(self, tables):
        assert tables.type_multiplier("house") == pytest.approx(1.15)
        assert tables.type_multiplier("LAND") == pytest.approx(0.5)
        assert tables.type_multiplier("mansion") == pytest.approx(1.0)

    def test_cap_rates(self, tables):
        assert tables.cap_rate("Madrid", "apartment") == pytest.approx(4.5)
        assert tables.cap_rate("Barcelona", "house") == pytest.approx(4.7)
        assert tables.cap_rate("Valencia", "commercial") == pytest.approx(4.5)
        assert tables.cap_rate("Atlantis", "land") == pytest.approx(5.0)

    def test_frozen(self, tables):
        with pytest.raises(pydantic.ValidationError):
            tables.land_share = 0.5

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "tables.json"
        path.write_text(json.dumps({
            "base_price_per_area": {"Lisboa": 5100, "default": 3000},
            "land_share": 0.25,
            "type_price_multiplier": {"Commercial": 0.8, "default": 1.0},
        }))
        tables = load_market_tables(str(path))
        assert tables.base_price("lisboa") == 5100
        assert tables.base_price("Madrid") == 3000
        assert tables.land_value_per_area("Lisboa") == pytest.approx(1275)
        assert tables.type_multiplier("commercial") == pytest.approx(0.8)
        # Untouched tables keep their defaults
        assert tables.construction_cost("house") == 1400

    def test_default_entry_required(self):
        with pytest.raises(pydantic.ValidationError):
            MarketTables(base_price_per_area={"madrid": 4200})

    def test_rates_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            MarketTables(construction_cost_per_area={"house": 0, "default": 1200})

    def test_no_path_means_defaults(self):
        assert load_market_tables(None) == MarketTables()
