from datetime import date
from typing import List, Optional

import numpy as np

from .base import ValuationMethod, ValuationMethodResult
from ..data.base import PropertyRecord, ComparableSale, MarketTrendSnapshot

MIN_COMPARABLES = 3
CONFIDENCE_CEILING = 95.0
CONFIDENCE_FLOOR = 60.0

class ComparativeMarketAnalysis(ValuationMethod):
    """
    Mean of the comparables' adjusted prices. Confidence falls with the
    coefficient of variation of that evidence, floored at 60.
    """
    name = "Comparative Market Analysis"
    weight = 40.0

    def estimate(self, prop: PropertyRecord, comparables: List[ComparableSale],
                 trend: MarketTrendSnapshot, as_of: date) -> Optional[ValuationMethodResult]:
        if len(comparables) < MIN_COMPARABLES:
            return None

        prices = np.array([c.adjusted_price for c in comparables], dtype=float)
        mean = float(prices.mean())
        cv = float(prices.std()) / mean if mean > 0 else 1.0   # population stddev
        confidence = max(CONFIDENCE_FLOOR, CONFIDENCE_CEILING - cv * 100)

        nearest = min(c.distance_m for c in comparables)
        farthest = max(c.distance_m for c in comparables)
        return ValuationMethodResult(
            name=self.name,
            weight=self.weight,
            value=mean,
            confidence=confidence,
            rationale=(
                f"Mean adjusted price of {len(comparables)} comparable sales "
                f"{nearest:.0f}-{farthest:.0f} m away; coefficient of variation {cv:.1%}"
            ),
        )
