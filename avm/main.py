import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from .routers.valuation import router as valuation_router

# Core modules
from .core.config import settings
from .core.exceptions import ValuationError, ValidationError, NoApplicableMethodError, ProviderUnavailable
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint, observe_failure

logger = logging.getLogger(__name__)

_STATUS = {
    ValidationError: 400,
    NoApplicableMethodError: 422,
    ProviderUnavailable: 503,
}

async def valuation_error_handler(request: Request, exc: ValuationError):
    status = next((code for cls, code in _STATUS.items() if isinstance(exc, cls)), 500)
    if status >= 500:
        logger.error("valuation failed: %s", exc)
    else:
        logger.info("valuation rejected: %s", exc)
    observe_failure(exc.code)
    return JSONResponse(status_code=status, content=exc.to_dict())

async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Same shape as the domain ValidationError so callers see one error format
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ())[1:]) or None
    observe_failure(ValidationError.code)
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.code, "detail": first.get("msg", "invalid request"), "field": field},
    )

def create_app() -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    """
    configure_logging()  # Set up JSON logs + request-id filter

    app = FastAPI(
        title="Automated Property Valuation API",
        version="1.0.0",
        description="Multi-method property valuation with investment and risk analytics.",
    )

    # CORS: allow the property pages to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag","X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    app.add_exception_handler(ValuationError, valuation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(valuation_router, prefix="/v1", tags=["valuation"])

    return app

app = create_app()
