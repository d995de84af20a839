"""
Process-wide lookup tables: price per m² by city, price multipliers and
construction cost by property type, and cap rates. Loaded once and never
mutated; swap them by pointing MARKET_TABLES_PATH at a JSON file with the
same shape.
"""
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import settings

DEFAULT_KEY = "default"

class MarketTables(BaseModel):
    model_config = ConfigDict(frozen=True)

    # EUR per m², city → rate
    base_price_per_area: dict[str, float] = Field(default_factory=lambda: {
        "madrid": 4200,
        "barcelona": 4800,
        "valencia": 2100,
        "sevilla": 1800,
        "bilbao": 3200,
        DEFAULT_KEY: 2500,
    })
    # EUR per m² to rebuild, property type → cost
    construction_cost_per_area: dict[str, float] = Field(default_factory=lambda: {
        "apartment": 1200,
        "house": 1400,
        "commercial": 1000,
        "warehouse": 600,
        DEFAULT_KEY: 1200,
    })
    # Price per m² multiplier, property type → factor
    type_price_multiplier: dict[str, float] = Field(default_factory=lambda: {
        "apartment": 1.00,
        "house": 1.15,
        "commercial": 0.90,
        "warehouse": 0.70,
        "land": 0.50,
        DEFAULT_KEY: 1.00,
    })
    # Cap rate in %, city → base rate
    cap_rate_base: dict[str, float] = Field(default_factory=lambda: {
        "madrid": 4.5,
        "barcelona": 4.2,
        "valencia": 5.5,
        DEFAULT_KEY: 5.0,
    })
    # Percentage points added to the city cap rate, property type → delta
    cap_rate_type_adjustment: dict[str, float] = Field(default_factory=lambda: {
        "apartment": 0.0,
        "house": 0.5,
        "commercial": -1.0,
        DEFAULT_KEY: 0.0,
    })
    # Land value as a share of the city base rate
    land_share: float = Field(default=0.3, gt=0, lt=1)

    @field_validator("base_price_per_area", "construction_cost_per_area", "type_price_multiplier",
                     "cap_rate_base", "cap_rate_type_adjustment")
    @classmethod
    def _normalize_keys(cls, table: dict[str, float]) -> dict[str, float]:
        table = {k.strip().lower(): float(v) for k, v in table.items()}
        if DEFAULT_KEY not in table:
            raise ValueError(f"table needs a '{DEFAULT_KEY}' entry")
        return table

    @field_validator("base_price_per_area", "construction_cost_per_area", "type_price_multiplier", "cap_rate_base")
    @classmethod
    def _positive_rates(cls, table: dict[str, float]) -> dict[str, float]:
        bad = sorted(k for k, v in table.items() if v <= 0)
        if bad:
            raise ValueError(f"rates must be positive: {bad}")
        return table

    @staticmethod
    def _lookup(table: dict[str, float], key: str) -> float:
        return table.get(key.strip().lower(), table[DEFAULT_KEY])

    def base_price(self, city: str) -> float:
        return self._lookup(self.base_price_per_area, city)

    def construction_cost(self, property_type: str) -> float:
        return self._lookup(self.construction_cost_per_area, property_type)

    def type_multiplier(self, property_type: str) -> float:
        return self._lookup(self.type_price_multiplier, property_type)

    def land_value_per_area(self, city: str) -> float:
        return self.base_price(city) * self.land_share

    def cap_rate(self, city: str, property_type: str) -> float:
        rate = self._lookup(self.cap_rate_base, city) + self._lookup(self.cap_rate_type_adjustment, property_type)
        if rate <= 0:
            raise ValueError(f"non-positive cap rate for {city}/{property_type}")
        return rate

def load_market_tables(path: str | None = None) -> MarketTables:
    """Read tables from a JSON file, or return the built-in defaults."""
    if not path:
        return MarketTables()
    return MarketTables.model_validate_json(Path(path).read_text(encoding="utf-8"))

@lru_cache(maxsize=1)
def default_tables() -> MarketTables:
    return load_market_tables(settings.MARKET_TABLES_PATH)
