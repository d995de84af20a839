from datetime import date
from typing import List, Optional

from .base import ValuationMethod, ValuationMethodResult
from ..core.market_tables import MarketTables
from ..data.base import PropertyRecord, ComparableSale, MarketTrendSnapshot, PropertyType

class IncomeApproach(ValuationMethod):
    """Direct capitalization of the annual rent at the local cap rate."""
    name = "Income Approach"
    weight = 10.0
    confidence = 65.0

    def __init__(self, tables: MarketTables):
        self.tables = tables

    def estimate(self, prop: PropertyRecord, comparables: List[ComparableSale],
                 trend: MarketTrendSnapshot, as_of: date) -> Optional[ValuationMethodResult]:
        if not prop.has_rent:
            return None

        annual_rent = prop.rent_price * 12
        cap_rate = self.tables.cap_rate(prop.city, PropertyType(prop.property_type).value)
        return ValuationMethodResult(
            name=self.name,
            weight=self.weight,
            value=annual_rent / (cap_rate / 100),
            confidence=self.confidence,
            rationale=f"Annual rent {annual_rent:,.0f} capitalized at {cap_rate:.2f}%",
        )
