from typing import List

from .base import ValuationMethod
from .cma import ComparativeMarketAnalysis
from .cost_approach import CostApproach
from .income_approach import IncomeApproach
from .price_per_area import PricePerArea
from ..core.market_tables import MarketTables

def default_methods(tables: MarketTables) -> List[ValuationMethod]:
    """The four methods in report order."""
    return [
        ComparativeMarketAnalysis(),
        PricePerArea(tables),
        CostApproach(tables),
        IncomeApproach(tables),
    ]
