"""Tests for investment metrics."""

from dataclasses import fields, replace

import pytest

from avm.report import InvestmentMetrics
from avm.services.investment import investment_metrics


class TestInvestmentMetrics:
    """Rental metrics derived from the estimated value."""

    def test_no_rent_means_unknown_not_zero(self, small_studio):
        metrics = investment_metrics(small_studio, 100000)
        assert metrics.is_empty
        assert all(getattr(metrics, f.name) is None for f in fields(InvestmentMetrics))

    def test_zero_rent_means_unknown(self, small_studio):
        assert investment_metrics(replace(small_studio, rent_price=0), 100000).is_empty

    def test_yields_and_cash_flow(self, madrid_apartment):
        """1,500/month on a 320,000 valuation."""
        m = investment_metrics(madrid_apartment, 320000)
        assert m.gross_rental_yield == pytest.approx(5.625)
        assert m.net_rental_yield == pytest.approx(13500 / 320000 * 100)
        assert m.cap_rate == m.net_rental_yield
        assert m.cash_flow == pytest.approx(13500 - 12800)
        assert m.roi == pytest.approx(700 / 64000 * 100)
        assert m.payback_period == pytest.approx(64000 / 700)

    def test_five_year_return(self, madrid_apartment):
        value = 320000
        m = investment_metrics(madrid_apartment, value)
        future_value = value * 1.05 ** 5
        future_rent = 1500 * 1.03 ** 5 * 12
        expected = (future_value + future_rent * 5 - value) / value * 100
        assert m.total_return_5y == pytest.approx(expected)

    def test_negative_cash_flow_payback_is_floored(self, madrid_apartment):
        """Payback divides by at least one currency unit."""
        prop = replace(madrid_apartment, rent_price=1000)
        m = investment_metrics(prop, 500000)
        assert m.cash_flow == pytest.approx(9000 - 20000)
        assert m.roi < 0
        assert m.payback_period == pytest.approx(100000)
        assert not m.is_empty
