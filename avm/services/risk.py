from typing import Callable, List, NamedTuple, Sequence

from ..data.base import PropertyRecord, MarketTrendSnapshot, ComparableSale, InventoryLevel
from ..report import RiskFactor, RiskCategory, Severity

OVERHEATING_CHANGE_1Y = 15.0
OLD_BUILDING_YEAR = 1980
SMALL_AREA = 30.0
MIN_COMPARABLES = 3

class RiskCheck(NamedTuple):
    triggered: Callable[[PropertyRecord, MarketTrendSnapshot, Sequence[ComparableSale]], bool]
    factor: RiskFactor

# Evaluated independently, emitted in this order.
RISK_CHECKS = (
    RiskCheck(
        lambda p, t, c: t.price_change_1y > OVERHEATING_CHANGE_1Y,
        RiskFactor(RiskCategory.MARKET, Severity.MEDIUM,
                   "Rapid price appreciation may indicate market overheating", -5),
    ),
    RiskCheck(
        lambda p, t, c: t.inventory_level == InventoryLevel.HIGH,
        RiskFactor(RiskCategory.MARKET, Severity.MEDIUM,
                   "High inventory levels may pressure prices downward", -3),
    ),
    RiskCheck(
        lambda p, t, c: p.year_built is not None and p.year_built < OLD_BUILDING_YEAR,
        RiskFactor(RiskCategory.PROPERTY, Severity.MEDIUM,
                   "Older property may require significant maintenance and updates", -8),
    ),
    RiskCheck(
        lambda p, t, c: p.total_area < SMALL_AREA,
        RiskFactor(RiskCategory.PROPERTY, Severity.LOW,
                   "Very small properties may have limited resale appeal", -3),
    ),
    RiskCheck(
        lambda p, t, c: len(c) < MIN_COMPARABLES,
        RiskFactor(RiskCategory.LOCATION, Severity.HIGH,
                   "Limited comparable sales data increases valuation uncertainty", -10),
    ),
)

def assess_risks(prop: PropertyRecord, trend: MarketTrendSnapshot,
                 comparables: Sequence[ComparableSale]) -> List[RiskFactor]:
    """
    Flags risk patterns. Impacts are reported only; the estimate is never
    adjusted by them.
    """
    return [check.factor for check in RISK_CHECKS if check.triggered(prop, trend, comparables)]
