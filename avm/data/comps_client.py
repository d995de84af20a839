import logging
from datetime import date, timedelta
from typing import List, Optional

import httpx

from .base import CompsClient, ComparableSale, AdjustmentSet, Location, PropertyType
from ..core.config import settings
from ..core.exceptions import ProviderUnavailable
from ..core.market_tables import MarketTables, default_tables
from ..core.utils import fnv1a_32, normalize_address, seeded_rand, seeded_uniform

logger = logging.getLogger(__name__)

# Half-widths of the synthetic adjustment ranges, in percent
_ADJUSTMENT_SPREAD = {
    "location": 5.0,
    "size": 7.5,
    "age": 4.0,
    "condition": 6.0,
    "features": 3.0,
}

class MockComps(CompsClient):
    """
    Synthetic comps around a subject address, sized within ±20% of the subject when
    its area is known. Prices/attributes are plausible but fake, and fully determined
    by (address, property type, subject area, reference date).
    """
    def __init__(self, tables: Optional[MarketTables] = None, reference_date: Optional[date] = None,
                 count: int = 5):
        self.tables = tables or default_tables()
        self.reference_date = reference_date
        self.count = count

    async def fetch_comparables(self, location: Location, property_type: PropertyType,
                                radius: float) -> List[ComparableSale]:
        seed = fnv1a_32(f"{normalize_address(location.address)}|{PropertyType(property_type).value}")
        today = self.reference_date or date.today()
        rate = self.tables.base_price(location.city)
        max_distance = min(900.0, radius)
        out: List[ComparableSale] = []
        for i in range(self.count):
            if location.total_area:
                area = round(location.total_area * seeded_uniform(seed + 11 * i, 0.8, 1.2), 1)
            else:
                area = round(seeded_uniform(seed + 11 * i, 50, 150), 1)
            variance = seeded_uniform(seed + 31 * i, -0.15, 0.15)
            distance = round(seeded_uniform(seed + 7 * i, min(100.0, max_distance), max_distance), 1)
            age_days = int(seeded_uniform(seed + 3 * i, 30, 395))
            adjustments = AdjustmentSet(**{
                name: round(seeded_uniform(seed + 101 * i + k, -spread, spread))
                for k, (name, spread) in enumerate(_ADJUSTMENT_SPREAD.items())
            })
            out.append(ComparableSale(
                id=f"comp_{i + 1}",
                address=f"{location.address} nearby {i + 1}",
                distance_m=distance,
                sold_price=round(area * rate * (1 + variance), 2),
                sold_date=today - timedelta(days=age_days),
                total_area=area,
                property_type=PropertyType(property_type),
                adjustments=adjustments,
                bedrooms=1 + int(seeded_rand(seed + 13 * i, 1)[0] * 4),
                bathrooms=1 + int(seeded_rand(seed + 17 * i, 1)[0] * 2),
            ))
        # Sort by proximity (closer first)
        out.sort(key=lambda c: (c.distance_m, -c.sold_date.toordinal()))
        return out

class HttpComps(CompsClient):
    """
    Client for a comps microservice exposing GET /recent-sales.
    A 404 means "nothing in range"; anything else that fails is a provider outage.
    """
    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS
        self._transport = transport

    async def fetch_comparables(self, location: Location, property_type: PropertyType,
                                radius: float) -> List[ComparableSale]:
        params = {"address": location.address, "city": location.city,
                  "property_type": PropertyType(property_type).value, "radius_m": radius}
        if location.point is not None:
            params.update(lat=location.point.lat, lon=location.point.lon)
        if location.total_area:
            params["total_area"] = location.total_area
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.get(f"{self.base_url}/recent-sales", params=params)
                if r.status_code == 404:
                    logger.debug("no comparables near %s within %gm", location.address, radius)
                    return []
                r.raise_for_status()
                items = r.json()
        except httpx.HTTPError as exc:
            raise ProviderUnavailable("comparables", str(exc) or type(exc).__name__) from exc
        try:
            return [_parse_sale(i) for i in items]
        except (KeyError, TypeError, ValueError) as exc:
            raise ProviderUnavailable("comparables", f"malformed response: {exc}") from exc

def _parse_sale(i: dict) -> ComparableSale:
    adj = i.get("adjustments") or {}
    return ComparableSale(
        id=str(i["id"]),
        address=i["address"],
        distance_m=float(i["distance_m"]),
        sold_price=float(i["sold_price"]),
        sold_date=date.fromisoformat(i["sold_date"]),
        total_area=float(i["total_area"]),
        property_type=PropertyType(i["property_type"]),
        adjustments=AdjustmentSet(
            location=float(adj.get("location", 0)), size=float(adj.get("size", 0)),
            age=float(adj.get("age", 0)), condition=float(adj.get("condition", 0)),
            features=float(adj.get("features", 0)),
        ),
        bedrooms=i.get("bedrooms"), bathrooms=i.get("bathrooms"),
    )

def comps_client() -> CompsClient:
    """
    Factory picks mock or http based on env flags.
    """
    if settings.COMPS_PROVIDER == "http" and settings.COMPS_BASE_URL:
        return HttpComps(settings.COMPS_BASE_URL)
    return MockComps()
