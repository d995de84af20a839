"""Tests for the risk catalogue."""

from dataclasses import replace

from avm.data.base import InventoryLevel
from avm.report import RiskCategory, Severity
from avm.services.risk import assess_risks


class TestAssessRisks:
    """Each check is independent and emitted in catalogue order."""

    def test_clean_property_has_no_risks(self, madrid_apartment, madrid_trend, clustered_comps):
        assert assess_risks(madrid_apartment, madrid_trend, clustered_comps) == []

    def test_overheating_market(self, madrid_apartment, trend_factory, clustered_comps):
        risks = assess_risks(madrid_apartment, trend_factory(price_change_1y=16), clustered_comps)
        assert len(risks) == 1
        assert risks[0].category == RiskCategory.MARKET
        assert risks[0].severity == Severity.MEDIUM
        assert risks[0].impact == -5

    def test_high_inventory(self, madrid_apartment, trend_factory, clustered_comps):
        trend = trend_factory(inventory_level=InventoryLevel.HIGH)
        risks = assess_risks(madrid_apartment, trend, clustered_comps)
        assert [(r.category, r.impact) for r in risks] == [(RiskCategory.MARKET, -3)]

    def test_old_building(self, madrid_apartment, madrid_trend, clustered_comps):
        risks = assess_risks(replace(madrid_apartment, year_built=1965), madrid_trend, clustered_comps)
        assert [(r.category, r.severity, r.impact) for r in risks] == [
            (RiskCategory.PROPERTY, Severity.MEDIUM, -8)
        ]

    def test_small_unit_and_thin_evidence(self, small_studio, madrid_trend, create_comp):
        risks = assess_risks(small_studio, madrid_trend, [create_comp()])
        assert [(r.category, r.severity, r.impact) for r in risks] == [
            (RiskCategory.PROPERTY, Severity.LOW, -3),
            (RiskCategory.LOCATION, Severity.HIGH, -10),
        ]

    def test_all_checks_fire_together(self, small_studio, trend_factory):
        prop = replace(small_studio, year_built=1970)
        trend = trend_factory(price_change_1y=20, inventory_level=InventoryLevel.HIGH)
        risks = assess_risks(prop, trend, [])
        assert [r.impact for r in risks] == [-5, -3, -8, -3, -10]

    def test_thresholds_are_strict(self, madrid_apartment, trend_factory, create_comp):
        """15%, 1980, 30 m² and three comparables do not trigger."""
        prop = replace(madrid_apartment, year_built=1980, total_area=30)
        comps = [create_comp() for _ in range(3)]
        assert assess_risks(prop, trend_factory(price_change_1y=15), comps) == []
