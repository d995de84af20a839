from datetime import date
from typing import List, Optional

from .base import ValuationMethod, ValuationMethodResult
from ..core.market_tables import MarketTables
from ..data.base import PropertyRecord, ComparableSale, MarketTrendSnapshot, PropertyType

DEPRECIATION_PER_YEAR = 0.02
MAX_DEPRECIATION = 0.5

def depreciation(age: int) -> float:
    """Straight-line, capped at 50%."""
    return min(age * DEPRECIATION_PER_YEAR, MAX_DEPRECIATION)

class CostApproach(ValuationMethod):
    """Replacement cost of the building, depreciated, plus land value."""
    name = "Cost Approach"
    weight = 20.0
    confidence = 70.0

    def __init__(self, tables: MarketTables):
        self.tables = tables

    def estimate(self, prop: PropertyRecord, comparables: List[ComparableSale],
                 trend: MarketTrendSnapshot, as_of: date) -> Optional[ValuationMethodResult]:
        age = prop.age(as_of)
        if age is None:
            return None

        cost_rate = self.tables.construction_cost(PropertyType(prop.property_type).value)
        land_rate = self.tables.land_value_per_area(prop.city)
        dep = depreciation(age)
        building = cost_rate * prop.total_area * (1 - dep)
        land = land_rate * prop.total_area
        return ValuationMethodResult(
            name=self.name,
            weight=self.weight,
            value=building + land,
            confidence=self.confidence,
            rationale=(
                f"Construction {cost_rate:,.0f}/m² less {dep:.0%} depreciation ({age} years) "
                f"plus land {land_rate:,.0f}/m²"
            ),
        )
