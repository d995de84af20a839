"""
Reconciles the method results into one estimate.

Weights are renormalized over the methods that actually ran, so the relative
influence of the included methods is preserved whatever subset is present.
"""
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

import numpy as np

from ..core.exceptions import NoApplicableMethodError
from ..data.base import ComparableSale
from ..models.base import ValuationMethodResult
from ..report import MarketPosition

BELOW_MEDIAN_RATIO = 0.9
ABOVE_MEDIAN_RATIO = 1.1

@dataclass(frozen=True)
class Aggregate:
    estimated_value: float
    confidence: float
    methods: Tuple[ValuationMethodResult, ...]

def aggregate(results: Sequence[ValuationMethodResult]) -> Aggregate:
    if not results:
        raise NoApplicableMethodError("no valuation method was applicable to this property")

    weights = np.array([r.weight for r in results], dtype=float)
    total = weights.sum()
    if total <= 0:
        raise NoApplicableMethodError("applicable valuation methods carry no weight")

    values = np.array([r.value for r in results], dtype=float)
    confidences = np.array([r.confidence for r in results], dtype=float)
    estimated = float(np.average(values, weights=weights))
    confidence = float(np.clip(np.average(confidences, weights=weights), 0, 100))

    methods = tuple(
        replace(r, normalized_weight=float(w / total * 100)) for r, w in zip(results, weights)
    )
    return Aggregate(estimated_value=estimated, confidence=confidence, methods=methods)

def local_median_price_per_area(comparables: Sequence[ComparableSale]) -> Optional[float]:
    """Median adjusted price per m² of the comparable set (None without comparables)."""
    if not comparables:
        return None
    return float(np.median([c.adjusted_price_per_area for c in comparables]))

def classify_market_position(price_per_area: float,
                             comparables: Sequence[ComparableSale]) -> MarketPosition:
    median = local_median_price_per_area(comparables)
    if median is None:
        # Nothing to compare against
        return MarketPosition.AVERAGE
    if price_per_area < median * BELOW_MEDIAN_RATIO:
        return MarketPosition.BELOW
    if price_per_area > median * ABOVE_MEDIAN_RATIO:
        return MarketPosition.ABOVE
    return MarketPosition.AVERAGE
