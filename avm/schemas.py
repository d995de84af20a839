import dataclasses
from datetime import date

from pydantic import BaseModel, Field

from .data.base import (
    PropertyRecord, PropertyType, EnergyRating,
    InventoryLevel, DemandLevel, PriceDirection,
)
from .report import ValuationReport, AvmEstimate, MarketPosition, RiskCategory, Severity

# ----- Request -----

class PropertyRequest(BaseModel):
    id: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    property_type: PropertyType
    total_area: float = Field(gt=0, description="m²")
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    bedrooms: int | None = Field(default=None, ge=0)
    bathrooms: int | None = Field(default=None, ge=0)
    year_built: int | None = Field(default=None, ge=1000)
    condition: str | None = None
    features: dict[str, bool] = Field(default_factory=dict)
    listing_price: float | None = Field(default=None, ge=0)
    rent_price: float | None = Field(default=None, ge=0, description="monthly")
    energy_rating: EnergyRating | None = None

    def to_record(self) -> PropertyRecord:
        return PropertyRecord(**self.model_dump())

# ----- Response -----

class MethodOut(BaseModel):
    name: str
    weight: float
    normalized_weight: float | None
    value: float
    confidence: float
    rationale: str

class AdjustmentsOut(BaseModel):
    location: float
    size: float
    age: float
    condition: float
    features: float
    total: float

class ComparableOut(BaseModel):
    id: str
    address: str
    distance_m: float
    sold_price: float
    sold_date: date
    adjusted_price: float
    total_area: float
    property_type: PropertyType
    bedrooms: int | None
    bathrooms: int | None
    adjustments: AdjustmentsOut

class SeasonalityOut(BaseModel):
    best_months_to_buy: list[int]
    best_months_to_sell: list[int]
    current_season_multiplier: float

class MarketTrendOut(BaseModel):
    area: str
    price_change_1y: float
    price_change_3y: float
    average_days_on_market: float
    inventory_level: InventoryLevel
    demand_level: DemandLevel
    price_direction: PriceDirection
    seasonality: SeasonalityOut

class InvestmentMetricsOut(BaseModel):
    gross_rental_yield: float | None
    net_rental_yield: float | None
    cap_rate: float | None
    cash_flow: float | None
    roi: float | None
    payback_period: float | None
    total_return_5y: float | None

class RiskFactorOut(BaseModel):
    category: RiskCategory
    severity: Severity
    description: str
    impact: float

class ValuationResponse(BaseModel):
    property_id: str
    as_of: date
    currency: str = "EUR"
    estimated_value: float
    confidence: float = Field(ge=0, le=100)
    price_per_area: float
    market_position: MarketPosition
    methods: list[MethodOut]
    comparables: list[ComparableOut]
    market_trend: MarketTrendOut
    investment_metrics: InvestmentMetricsOut
    risks: list[RiskFactorOut]
    recommendations: list[str]
    disclaimer: str = "This valuation is an estimate and not a financial appraisal."

    @classmethod
    def from_report(cls, report: ValuationReport, currency: str) -> "ValuationResponse":
        return cls.model_validate({**dataclasses.asdict(report), "currency": currency})

class Range(BaseModel):
    low: int
    high: int

class AvmEstimateResponse(BaseModel):
    estimate: int
    confidence: int = Field(ge=0, le=100)
    range: Range
    currency: str = "EUR"

    @classmethod
    def from_estimate(cls, est: AvmEstimate, currency: str) -> "AvmEstimateResponse":
        return cls(estimate=est.estimate, confidence=est.confidence,
                   range=Range(low=est.low, high=est.high), currency=currency)

class ErrorResponse(BaseModel):
    error: str
    detail: str
    field: str | None = None
    provider: str | None = None
