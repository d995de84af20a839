"""Pytest fixtures and test utilities."""

import asyncio
from datetime import date, timedelta

import pytest

from avm.core.exceptions import ProviderUnavailable
from avm.core.market_tables import MarketTables
from avm.data.base import (
    AdjustmentSet,
    ComparableSale,
    DemandLevel,
    InventoryLevel,
    MarketTrendSnapshot,
    PriceDirection,
    PropertyRecord,
    PropertyType,
    Seasonality,
)
from avm.services.valuation_service import ValuationOrchestrator


class FixedComps:
    """Comparables provider returning a fixed list (or raising)."""

    def __init__(self, comparables=None, error=None, delay=0.0):
        self.comparables = list(comparables or [])
        self.error = error
        self.delay = delay
        self.calls = []

    async def fetch_comparables(self, location, property_type, radius):
        self.calls.append((location, property_type, radius))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.comparables)


class FixedTrends:
    """Trend provider returning a fixed snapshot (or raising)."""

    def __init__(self, snapshot=None, error=None, delay=0.0):
        self.snapshot = snapshot
        self.error = error
        self.delay = delay
        self.calls = []

    async def fetch_market_trend(self, area):
        self.calls.append(area)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.snapshot


@pytest.fixture
def reference_date() -> date:
    """Fixed reference date (March: neither a buy nor a sell month)."""
    return date(2025, 3, 15)


@pytest.fixture
def tables() -> MarketTables:
    return MarketTables()


def make_trend(
    area: str = "Madrid",
    price_change_1y: float = 8.5,
    inventory_level: InventoryLevel = InventoryLevel.NORMAL,
    demand_level: DemandLevel = DemandLevel.HIGH,
    best_months_to_sell=(4, 5, 9, 10),
) -> MarketTrendSnapshot:
    return MarketTrendSnapshot(
        area=area,
        price_change_1y=price_change_1y,
        price_change_3y=25.3,
        average_days_on_market=45,
        inventory_level=inventory_level,
        demand_level=demand_level,
        price_direction=PriceDirection.from_change(price_change_1y),
        seasonality=Seasonality(
            best_months_to_buy=(1, 2, 7, 8),
            best_months_to_sell=tuple(best_months_to_sell),
            current_season_multiplier=1.0,
        ),
    )


@pytest.fixture
def trend_factory():
    """Factory fixture for trend snapshots."""
    return make_trend


@pytest.fixture
def madrid_trend() -> MarketTrendSnapshot:
    return make_trend()


@pytest.fixture
def create_comp(reference_date):
    """Factory fixture for comparable sales priced at a given rate per m²."""
    counter = iter(range(1, 1000))

    def _create(
        price_per_area: float = 4200,
        total_area: float = 80,
        distance_m: float = 300,
        adjustments: AdjustmentSet = None,
        property_type: PropertyType = PropertyType.APARTMENT,
    ) -> ComparableSale:
        n = next(counter)
        return ComparableSale(
            id=f"comp-{n}",
            address=f"Calle Test {n}, Madrid",
            distance_m=distance_m,
            sold_price=price_per_area * total_area,
            sold_date=reference_date - timedelta(days=30 * n),
            total_area=total_area,
            property_type=property_type,
            adjustments=adjustments or AdjustmentSet(),
        )

    return _create


@pytest.fixture
def clustered_comps(create_comp) -> list[ComparableSale]:
    """Four 80 m² sales within 5% of each other around 4200/m²."""
    return [
        create_comp(price_per_area=rate, distance_m=d)
        for rate, d in ((4100, 150), (4200, 320), (4250, 480), (4300, 700))
    ]


@pytest.fixture
def madrid_apartment() -> PropertyRecord:
    return PropertyRecord(
        id="prop-madrid-1",
        address="Calle de Alcala 100",
        city="Madrid",
        property_type=PropertyType.APARTMENT,
        total_area=80,
        bedrooms=2,
        bathrooms=1,
        year_built=2015,
        rent_price=1500,
    )


@pytest.fixture
def small_studio() -> PropertyRecord:
    return PropertyRecord(
        id="prop-studio-1",
        address="Calle Pequena 3",
        city="Madrid",
        property_type=PropertyType.APARTMENT,
        total_area=25,
    )


@pytest.fixture
def make_orchestrator(reference_date, tables):
    """Orchestrator wired to fixed providers."""

    def _make(comparables=(), trend=None, comps_error=None, trend_error=None,
              comps_delay=0.0, trend_delay=0.0, provider_timeout=5.0):
        comps = FixedComps(comparables, error=comps_error, delay=comps_delay)
        trends = FixedTrends(trend or make_trend(), error=trend_error, delay=trend_delay)
        return ValuationOrchestrator(
            comps=comps,
            trends=trends,
            tables=tables,
            reference_date=reference_date,
            provider_timeout=provider_timeout,
            comps_radius=1000,
        )

    return _make


@pytest.fixture
def provider_down() -> ProviderUnavailable:
    return ProviderUnavailable("comparables", "connection refused")
