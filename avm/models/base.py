from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Protocol

from ..data.base import PropertyRecord, ComparableSale, MarketTrendSnapshot

@dataclass(frozen=True)
class ValuationMethodResult:
    name: str
    weight: float               # nominal weight, 0–100
    value: float                # currency
    confidence: float           # 0–100
    rationale: str
    normalized_weight: Optional[float] = None   # share in %, set by the aggregator

class ValuationMethod(Protocol):
    name: str
    weight: float

    def estimate(
        self,
        prop: PropertyRecord,
        comparables: List[ComparableSale],
        trend: MarketTrendSnapshot,
        as_of: date,
    ) -> Optional[ValuationMethodResult]:
        """
        Returns None when the method does not apply to this property
        (missing evidence), never a placeholder value.
        """
        ...
