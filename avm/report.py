from dataclasses import dataclass, fields
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from .data.base import ComparableSale, MarketTrendSnapshot
from .models.base import ValuationMethodResult

class MarketPosition(str, Enum):
    BELOW = "below"
    AVERAGE = "average"
    ABOVE = "above"

class RiskCategory(str, Enum):
    MARKET = "market"
    PROPERTY = "property"
    LOCATION = "location"
    ECONOMIC = "economic"

class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

@dataclass(frozen=True)
class InvestmentMetrics:
    # None means "unknown" (no rent data), never zero
    gross_rental_yield: Optional[float] = None
    net_rental_yield: Optional[float] = None
    cap_rate: Optional[float] = None
    cash_flow: Optional[float] = None
    roi: Optional[float] = None
    payback_period: Optional[float] = None     # years
    total_return_5y: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

@dataclass(frozen=True)
class RiskFactor:
    category: RiskCategory
    severity: Severity
    description: str
    impact: float       # signed % of value, informational only

@dataclass(frozen=True)
class ValuationReport:
    property_id: str
    as_of: date
    estimated_value: float
    confidence: float
    price_per_area: float
    market_position: MarketPosition
    methods: Tuple[ValuationMethodResult, ...]
    comparables: Tuple[ComparableSale, ...]
    market_trend: MarketTrendSnapshot
    investment_metrics: InvestmentMetrics
    risks: Tuple[RiskFactor, ...]
    recommendations: Tuple[str, ...]

    def method_names(self) -> list[str]:
        return [m.name for m in self.methods]

@dataclass(frozen=True)
class AvmEstimate:
    estimate: int
    confidence: int
    low: int
    high: int
