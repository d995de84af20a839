from fastapi import APIRouter, Depends, Header, Response
from ..schemas import PropertyRequest, ValuationResponse, AvmEstimateResponse, ErrorResponse
from ..services.valuation_service import ValuationOrchestrator, avm_estimate
from ..core.config import settings
from ..core.metrics import observe_valuation
from ..core.utils import canonical_json, weak_etag

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse, "description": "Invalid property data"},
    422: {"model": ErrorResponse, "description": "No valuation method applicable"},
    503: {"model": ErrorResponse, "description": "Market data provider unavailable"},
}

def orchestrator_dep() -> ValuationOrchestrator:
    # Cheap factory; providers come from settings (mock or http).
    return ValuationOrchestrator()

@router.post("/valuation", response_model=ValuationResponse, responses=_ERRORS)
async def post_valuation(
    body: PropertyRequest,
    response: Response,
    if_none_match: str | None = Header(default=None),
    svc: ValuationOrchestrator = Depends(orchestrator_dep),
):
    report = await svc.valuate(body.to_record())
    observe_valuation(report)
    payload = ValuationResponse.from_report(report, settings.DEFAULT_CURRENCY)

    # Reports are deterministic for identical inputs, so the ETag is stable too
    etag = weak_etag(canonical_json(payload.model_dump(mode="json")))
    if if_none_match and if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})
    response.headers["ETag"] = etag
    return payload

@router.post("/valuation/estimate", response_model=AvmEstimateResponse, responses=_ERRORS)
async def post_estimate(
    body: PropertyRequest,
    svc: ValuationOrchestrator = Depends(orchestrator_dep),
):
    report = await svc.valuate(body.to_record())
    observe_valuation(report)
    return AvmEstimateResponse.from_estimate(avm_estimate(report), settings.DEFAULT_CURRENCY)
