from datetime import date
from typing import List, Optional

from .base import ValuationMethod, ValuationMethodResult
from ..core.market_tables import MarketTables
from ..data.base import PropertyRecord, ComparableSale, MarketTrendSnapshot, PropertyType

# (max age in years, multiplier); older than the last band gets AGE_MULTIPLIER_OLD
AGE_BANDS = ((5, 1.10), (15, 1.05), (30, 1.00))
AGE_MULTIPLIER_OLD = 0.90

LARGE_AREA = 150.0
SMALL_AREA = 50.0

def age_multiplier(age: Optional[int]) -> float:
    if age is None:
        return 1.0
    for max_age, multiplier in AGE_BANDS:
        if age <= max_age:
            return multiplier
    return AGE_MULTIPLIER_OLD

def size_multiplier(total_area: float) -> float:
    # Larger units trade at lower prices per m², very small ones at higher
    if total_area > LARGE_AREA:
        return 0.95
    if total_area < SMALL_AREA:
        return 1.05
    return 1.0

class PricePerArea(ValuationMethod):
    name = "Price per Square Meter"
    weight = 30.0
    confidence = 75.0

    def __init__(self, tables: MarketTables):
        self.tables = tables

    def estimate(self, prop: PropertyRecord, comparables: List[ComparableSale],
                 trend: MarketTrendSnapshot, as_of: date) -> Optional[ValuationMethodResult]:
        base_rate = self.tables.base_price(prop.city)
        # Half the annual change: the base rate is treated as a mid-year snapshot
        trend_factor = 1 + trend.price_change_1y / 100 / 2
        type_factor = self.tables.type_multiplier(PropertyType(prop.property_type).value)
        age_factor = age_multiplier(prop.age(as_of))
        size_factor = size_multiplier(prop.total_area)

        rate = base_rate * trend_factor * type_factor * age_factor * size_factor
        return ValuationMethodResult(
            name=self.name,
            weight=self.weight,
            value=rate * prop.total_area,
            confidence=self.confidence,
            rationale=(
                f"{prop.city} base {base_rate:,.0f}/m² x trend {trend_factor:.4f} x type {type_factor:.2f} "
                f"x age {age_factor:.2f} x size {size_factor:.2f} = {rate:,.0f}/m² over {prop.total_area:g} m²"
            ),
        )
