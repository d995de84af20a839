import asyncio
import logging
from datetime import date
from typing import Awaitable, List, Optional, Sequence, Tuple, TypeVar

from ..core.config import settings
from ..core.exceptions import ProviderUnavailable, ValidationError
from ..core.market_tables import MarketTables, default_tables
from ..core.utils import is_finite_number
from ..data.base import (
    CompsClient, TrendsClient, PropertyRecord, ComparableSale, MarketTrendSnapshot,
    PropertyType, EnergyRating,
)
from ..data.comps_client import comps_client
from ..data.trends_client import trends_client
from ..models.base import ValuationMethod, ValuationMethodResult
from ..models.library import default_methods
from ..report import ValuationReport, AvmEstimate
from .aggregator import aggregate, classify_market_position
from .investment import investment_metrics
from .recommendations import generate_recommendations
from .risk import assess_risks

logger = logging.getLogger(__name__)

T = TypeVar("T")

def validate_property(prop: PropertyRecord, as_of: date) -> None:
    """Raises ValidationError for the first malformed field."""
    if not is_finite_number(prop.total_area) or prop.total_area <= 0:
        raise ValidationError("total_area", "must be a positive number")
    try:
        PropertyType(prop.property_type)
    except ValueError:
        raise ValidationError("property_type", f"unknown property type {prop.property_type!r}") from None
    for name in ("listing_price", "rent_price"):
        value = getattr(prop, name)
        if value is not None and (not is_finite_number(value) or value < 0):
            raise ValidationError(name, "must be a non-negative number")
    for name in ("bedrooms", "bathrooms"):
        value = getattr(prop, name)
        if value is not None and value < 0:
            raise ValidationError(name, "must be non-negative")
    if prop.year_built is not None and prop.year_built > as_of.year:
        raise ValidationError("year_built", f"cannot be after {as_of.year}")
    if prop.latitude is not None and not -90 <= prop.latitude <= 90:
        raise ValidationError("latitude", "must be within [-90, 90]")
    if prop.longitude is not None and not -180 <= prop.longitude <= 180:
        raise ValidationError("longitude", "must be within [-180, 180]")
    if prop.energy_rating is not None:
        try:
            EnergyRating(prop.energy_rating)
        except ValueError:
            raise ValidationError("energy_rating", "must be one of A-G") from None

class ValuationOrchestrator:
    """
    Orchestrates:
      validate → comps + trend (concurrently) → valuation methods → aggregate
      → investment metrics → risks → recommendations → ValuationReport
    Holds no per-call state, so one instance can serve concurrent valuations.
    """
    def __init__(
        self,
        comps: Optional[CompsClient] = None,
        trends: Optional[TrendsClient] = None,
        tables: Optional[MarketTables] = None,
        reference_date: Optional[date] = None,
        provider_timeout: Optional[float] = None,
        comps_radius: Optional[float] = None,
        methods: Optional[Sequence[ValuationMethod]] = None,
    ):
        # Data adapters (mock or HTTP)
        self.comps = comps or comps_client()
        self.trends = trends or trends_client()
        self.tables = tables or default_tables()
        # Pin the date for reproducible reports; otherwise today's date per call
        self.reference_date = reference_date
        self.provider_timeout = provider_timeout if provider_timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS
        self.comps_radius = comps_radius if comps_radius is not None else settings.COMPS_RADIUS_METERS
        self.methods = list(methods) if methods is not None else default_methods(self.tables)

    async def valuate(self, prop: PropertyRecord) -> ValuationReport:
        as_of = self.reference_date or date.today()
        validate_property(prop, as_of)

        comparables, trend = await self._fetch_market_data(prop)

        results: List[ValuationMethodResult] = []
        for method in self.methods:
            result = method.estimate(prop, comparables, trend, as_of)
            if result is None:
                logger.debug("%s not applicable to property %s", method.name, prop.id)
                continue
            results.append(result)

        agg = aggregate(results)
        price_per_area = agg.estimated_value / prop.total_area
        metrics = investment_metrics(prop, agg.estimated_value)
        risks = assess_risks(prop, trend, comparables)
        recommendations = generate_recommendations(prop, trend, metrics, risks, as_of)

        logger.info(
            "valuated property %s: value=%.0f confidence=%.1f methods=%s comps=%d risks=%d",
            prop.id, agg.estimated_value, agg.confidence,
            ",".join(m.name for m in agg.methods), len(comparables), len(risks),
        )
        return ValuationReport(
            property_id=prop.id,
            as_of=as_of,
            estimated_value=agg.estimated_value,
            confidence=agg.confidence,
            price_per_area=price_per_area,
            market_position=classify_market_position(price_per_area, comparables),
            methods=agg.methods,
            comparables=tuple(comparables),
            market_trend=trend,
            investment_metrics=metrics,
            risks=tuple(risks),
            recommendations=tuple(recommendations),
        )

    async def get_avm_estimate(self, prop: PropertyRecord) -> AvmEstimate:
        return avm_estimate(await self.valuate(prop))

    async def _fetch_market_data(self, prop: PropertyRecord) -> Tuple[List[ComparableSale], MarketTrendSnapshot]:
        # Independent reads; both must finish before any method runs
        comps_res, trend_res = await asyncio.gather(
            self._bounded("comparables", self.comps.fetch_comparables(
                prop.location(), PropertyType(prop.property_type), self.comps_radius)),
            self._bounded("market_trend", self.trends.fetch_market_trend(prop.city)),
            return_exceptions=True,
        )
        for res in (comps_res, trend_res):
            if isinstance(res, BaseException) and not isinstance(res, ProviderUnavailable):
                raise res
        if isinstance(trend_res, ProviderUnavailable):
            # Every method reads the trend; nothing meaningful can be computed without it
            raise trend_res
        if isinstance(comps_res, ProviderUnavailable):
            logger.warning("continuing without comparables for property %s: %s", prop.id, comps_res)
            comps_res = []
        return list(comps_res), trend_res

    async def _bounded(self, provider: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self.provider_timeout)
        except asyncio.TimeoutError:
            raise ProviderUnavailable(provider, f"no response within {self.provider_timeout:g}s") from None

def avm_estimate(report: ValuationReport) -> AvmEstimate:
    """Point estimate with a band that widens as confidence drops."""
    estimate = round(report.estimated_value)
    confidence = round(report.confidence)
    margin = estimate * (1 - confidence / 100) * 0.5
    return AvmEstimate(
        estimate=estimate,
        confidence=confidence,
        low=round(estimate - margin),
        high=round(estimate + margin),
    )
