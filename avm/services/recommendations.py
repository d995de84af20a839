from datetime import date
from typing import Sequence, List

from ..data.base import PropertyRecord, MarketTrendSnapshot, PriceDirection, DemandLevel, EnergyRating
from ..report import InvestmentMetrics, RiskFactor, Severity

STRONG_NET_YIELD = 6.0
RETROFIT_RATINGS = {EnergyRating.E, EnergyRating.F, EnergyRating.G}

def generate_recommendations(prop: PropertyRecord, trend: MarketTrendSnapshot,
                             metrics: InvestmentMetrics, risks: Sequence[RiskFactor],
                             as_of: date) -> List[str]:
    """One sentence per matching rule, in rule order. No rule suppresses another."""
    out: List[str] = []

    # Market timing
    if as_of.month in trend.seasonality.best_months_to_sell:
        out.append("Current month is optimal for selling based on seasonal trends")
    if trend.price_direction == PriceDirection.RISING and trend.demand_level == DemandLevel.HIGH:
        out.append("Strong market conditions favor sellers - consider listing at asking price")

    # Investment
    if metrics.net_rental_yield is not None and metrics.net_rental_yield > STRONG_NET_YIELD:
        out.append("Excellent rental yield makes this attractive for investment")
    if metrics.cash_flow is not None and metrics.cash_flow > 0:
        out.append("Positive cash flow potential for rental investment")

    # Property improvement
    if prop.energy_rating is not None and EnergyRating(prop.energy_rating) in RETROFIT_RATINGS:
        out.append("Energy efficiency improvements could increase value by 5-10%")

    # Risk mitigation
    if any(r.severity == Severity.HIGH for r in risks):
        out.append("Consider additional due diligence given identified high-risk factors")

    return out
