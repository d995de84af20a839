from typing import Protocol, List, Optional, Dict, Tuple
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

# ----- Enumerations -----

class PropertyType(str, Enum):
    APARTMENT = "apartment"
    HOUSE = "house"
    COMMERCIAL = "commercial"
    WAREHOUSE = "warehouse"
    LAND = "land"

class EnergyRating(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"

class InventoryLevel(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

class DemandLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

class PriceDirection(str, Enum):
    DECLINING = "declining"
    STABLE = "stable"
    RISING = "rising"

    @classmethod
    def from_change(cls, price_change_1y: float) -> "PriceDirection":
        """Above +3% a year is rising, below -2% declining."""
        if price_change_1y > 3:
            return cls.RISING
        if price_change_1y < -2:
            return cls.DECLINING
        return cls.STABLE

# ----- Data shapes (thin & explicit) -----

@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lon: float

@dataclass(frozen=True)
class PropertyRecord:
    id: str
    address: str
    city: str
    property_type: PropertyType
    total_area: float                      # m²
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    year_built: Optional[int] = None
    condition: Optional[str] = None
    features: Dict[str, bool] = field(default_factory=dict)
    listing_price: Optional[float] = None
    rent_price: Optional[float] = None     # monthly
    energy_rating: Optional[EnergyRating] = None

    @property
    def has_rent(self) -> bool:
        # A zero rent carries no income evidence; treat it like a missing one.
        return self.rent_price is not None and self.rent_price > 0

    def age(self, as_of: date) -> Optional[int]:
        if self.year_built is None:
            return None
        return max(0, as_of.year - self.year_built)

    def location(self) -> "Location":
        point = None
        if self.latitude is not None and self.longitude is not None:
            point = GeoPoint(lat=self.latitude, lon=self.longitude)
        return Location(address=self.address, city=self.city, point=point, total_area=self.total_area)

@dataclass(frozen=True)
class Location:
    address: str
    city: str
    point: Optional[GeoPoint] = None
    total_area: Optional[float] = None      # subject size, m²

@dataclass(frozen=True)
class AdjustmentSet:
    """Signed percentage adjustments applied to a comparable's sold price."""
    location: float = 0.0
    size: float = 0.0
    age: float = 0.0
    condition: float = 0.0
    features: float = 0.0
    total: float = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "total", self.location + self.size + self.age + self.condition + self.features
        )

@dataclass(frozen=True)
class ComparableSale:
    id: str
    address: str
    distance_m: float
    sold_price: float
    sold_date: date
    total_area: float
    property_type: PropertyType
    adjustments: AdjustmentSet = field(default_factory=AdjustmentSet)
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    adjusted_price: float = field(init=False)

    def __post_init__(self):
        if self.distance_m < 0:
            raise ValueError("distance_m must be >= 0")
        if self.total_area <= 0:
            raise ValueError("total_area must be > 0")
        object.__setattr__(
            self, "adjusted_price", self.sold_price * (1 + self.adjustments.total / 100)
        )

    @property
    def adjusted_price_per_area(self) -> float:
        return self.adjusted_price / self.total_area

@dataclass(frozen=True)
class Seasonality:
    best_months_to_buy: Tuple[int, ...]
    best_months_to_sell: Tuple[int, ...]
    current_season_multiplier: float = 1.0

@dataclass(frozen=True)
class MarketTrendSnapshot:
    area: str
    price_change_1y: float                 # %
    price_change_3y: float                 # %
    average_days_on_market: float
    inventory_level: InventoryLevel
    demand_level: DemandLevel
    price_direction: PriceDirection
    seasonality: Seasonality

# ----- Protocols (interfaces) -----

class CompsClient(Protocol):
    async def fetch_comparables(
        self, location: Location, property_type: PropertyType, radius: float
    ) -> List[ComparableSale]:
        """Recent nearby sales; an empty list means no results. Raises ProviderUnavailable on failure."""
        ...

class TrendsClient(Protocol):
    async def fetch_market_trend(self, area: str) -> MarketTrendSnapshot:
        """Always a snapshot (providers fall back to a neutral one). Raises ProviderUnavailable on failure."""
        ...
