"""Tests for recommendation rules."""

from dataclasses import replace
from datetime import date

from avm.data.base import DemandLevel, EnergyRating
from avm.report import InvestmentMetrics, RiskFactor, RiskCategory, Severity
from avm.services.recommendations import generate_recommendations

HIGH_RISK = RiskFactor(RiskCategory.LOCATION, Severity.HIGH, "thin evidence", -10)
LOW_RISK = RiskFactor(RiskCategory.PROPERTY, Severity.LOW, "small", -3)


class TestRecommendations:

    def test_quiet_market_gives_nothing(self, small_studio, trend_factory, reference_date):
        trend = trend_factory(price_change_1y=1.0, demand_level=DemandLevel.MODERATE)
        out = generate_recommendations(small_studio, trend, InvestmentMetrics(), [LOW_RISK], reference_date)
        assert out == []

    def test_selling_season(self, small_studio, trend_factory):
        trend = trend_factory(price_change_1y=1.0, demand_level=DemandLevel.MODERATE)
        out = generate_recommendations(small_studio, trend, InvestmentMetrics(), [], date(2025, 4, 2))
        assert out == ["Current month is optimal for selling based on seasonal trends"]

    def test_rising_market_with_high_demand(self, small_studio, madrid_trend, reference_date):
        out = generate_recommendations(small_studio, madrid_trend, InvestmentMetrics(), [], reference_date)
        assert out == ["Strong market conditions favor sellers - consider listing at asking price"]

    def test_rising_market_needs_high_demand(self, small_studio, trend_factory, reference_date):
        trend = trend_factory(demand_level=DemandLevel.MODERATE)
        assert generate_recommendations(small_studio, trend, InvestmentMetrics(), [], reference_date) == []

    def test_energy_retrofit(self, small_studio, trend_factory, reference_date):
        trend = trend_factory(price_change_1y=0)
        for rating, expected in ((EnergyRating.F, 1), (EnergyRating.C, 0)):
            prop = replace(small_studio, energy_rating=rating)
            out = generate_recommendations(prop, trend, InvestmentMetrics(), [], reference_date)
            assert len(out) == expected

    def test_all_rules_in_declaration_order(self, small_studio, madrid_trend):
        prop = replace(small_studio, energy_rating=EnergyRating.G)
        metrics = InvestmentMetrics(net_rental_yield=6.5, cash_flow=1200.0)
        out = generate_recommendations(prop, madrid_trend, metrics, [LOW_RISK, HIGH_RISK], date(2025, 9, 1))
        assert out == [
            "Current month is optimal for selling based on seasonal trends",
            "Strong market conditions favor sellers - consider listing at asking price",
            "Excellent rental yield makes this attractive for investment",
            "Positive cash flow potential for rental investment",
            "Energy efficiency improvements could increase value by 5-10%",
            "Consider additional due diligence given identified high-risk factors",
        ]

    def test_yield_and_cash_flow_thresholds(self, small_studio, trend_factory, reference_date):
        trend = trend_factory(price_change_1y=0)
        metrics = InvestmentMetrics(net_rental_yield=6.0, cash_flow=0.0)
        assert generate_recommendations(small_studio, trend, metrics, [], reference_date) == []
