import json
import logging
from datetime import date
from typing import Optional

import httpx

from .base import (
    TrendsClient, MarketTrendSnapshot, Seasonality,
    InventoryLevel, DemandLevel, PriceDirection,
)
from ..core.cache import Cache, cache as shared_cache
from ..core.config import settings
from ..core.exceptions import ProviderUnavailable
from ..core.utils import normalize_address

logger = logging.getLogger(__name__)

BEST_MONTHS_TO_BUY = (1, 2, 7, 8)     # winter and summer
BEST_MONTHS_TO_SELL = (4, 5, 9, 10)   # spring and fall

# area → (1y %, 3y %, days on market, inventory, demand)
_AREA_TRENDS = {
    "madrid": (8.5, 25.3, 45, InventoryLevel.NORMAL, DemandLevel.HIGH),
    "barcelona": (6.2, 22.1, 38, InventoryLevel.LOW, DemandLevel.HIGH),
}
_NEUTRAL_TREND = (5.0, 18.0, 50, InventoryLevel.NORMAL, DemandLevel.MODERATE)

def season_multiplier(month: int) -> float:
    if month in BEST_MONTHS_TO_SELL:
        return 1.05
    if month in BEST_MONTHS_TO_BUY:
        return 0.95
    return 1.0

class MockTrends(TrendsClient):
    """
    Static trend table for a handful of cities; every other area gets a neutral trend.
    """
    def __init__(self, reference_date: Optional[date] = None):
        self.reference_date = reference_date

    async def fetch_market_trend(self, area: str) -> MarketTrendSnapshot:
        change_1y, change_3y, dom, inventory, demand = _AREA_TRENDS.get(
            normalize_address(area), _NEUTRAL_TREND
        )
        month = (self.reference_date or date.today()).month
        return MarketTrendSnapshot(
            area=area,
            price_change_1y=change_1y,
            price_change_3y=change_3y,
            average_days_on_market=dom,
            inventory_level=inventory,
            demand_level=demand,
            price_direction=PriceDirection.from_change(change_1y),
            seasonality=Seasonality(
                best_months_to_buy=BEST_MONTHS_TO_BUY,
                best_months_to_sell=BEST_MONTHS_TO_SELL,
                current_season_multiplier=season_multiplier(month),
            ),
        )

class HttpTrends(TrendsClient):
    """
    Client for a market-trends service exposing GET /market-trend.
    Responses are cached per area for CACHE_TTL_SECONDS.
    """
    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 cache: Optional[Cache] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS
        self._transport = transport
        self.cache = cache or shared_cache

    async def fetch_market_trend(self, area: str) -> MarketTrendSnapshot:
        cache_key = f"trend:{normalize_address(area)}"
        cached = self.cache.get(cache_key)
        if cached:
            logger.debug("trend cache hit for %s", area)
            return _parse_trend(area, json.loads(cached))

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(f"{self.base_url}/market-trend", params={"area": area})
                r.raise_for_status()
                body = r.json()
        except httpx.HTTPError as exc:
            raise ProviderUnavailable("market_trend", str(exc) or type(exc).__name__) from exc

        try:
            snapshot = _parse_trend(area, body)
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderUnavailable("market_trend", f"malformed response: {exc}") from exc
        self.cache.set(cache_key, json.dumps(body, separators=(",", ":")))
        return snapshot

def _parse_trend(area: str, j: dict) -> MarketTrendSnapshot:
    change_1y = float(j["price_change_1y"])
    season = j.get("seasonality") or {}
    return MarketTrendSnapshot(
        area=j.get("area", area),
        price_change_1y=change_1y,
        price_change_3y=float(j["price_change_3y"]),
        average_days_on_market=float(j["average_days_on_market"]),
        inventory_level=InventoryLevel(j["inventory_level"]),
        demand_level=DemandLevel(j["demand_level"]),
        # The service may omit the direction; it is derivable from the 1y change.
        price_direction=PriceDirection(j["price_direction"]) if j.get("price_direction")
        else PriceDirection.from_change(change_1y),
        seasonality=Seasonality(
            best_months_to_buy=tuple(season.get("best_months_to_buy", BEST_MONTHS_TO_BUY)),
            best_months_to_sell=tuple(season.get("best_months_to_sell", BEST_MONTHS_TO_SELL)),
            current_season_multiplier=float(season.get("current_season_multiplier", 1.0)),
        ),
    )

def trends_client() -> TrendsClient:
    if settings.TRENDS_PROVIDER == "http" and settings.TRENDS_BASE_URL:
        return HttpTrends(settings.TRENDS_BASE_URL)
    return MockTrends()
