import time
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

# Define metrics (names follow Prometheus conventions)
REQ_COUNT = Counter("http_requests_total", "Total HTTP requests", ["path","method","code"])
REQ_LATENCY = Histogram("http_request_duration_seconds", "Request latency", ["path","method"])

VALUATION_COUNT = Counter("valuations_total", "Valuation calls by outcome", ["outcome"])
METHOD_USAGE = Counter("valuation_methods_total", "Valuation methods that produced a value", ["method"])
VALUATION_CONFIDENCE = Histogram(
    "valuation_confidence", "Aggregate confidence of completed valuations",
    buckets=(50, 60, 65, 70, 75, 80, 85, 90, 95, 100),
)

class PromMiddleware(BaseHTTPMiddleware):
    """
    Per-path request counts and latency for every HTTP call, valuation or not.
    """
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed = time.perf_counter() - start

        # Raw path as label; the API exposes a handful of fixed routes
        path = request.url.path
        method = request.method
        code = str(response.status_code)

        REQ_COUNT.labels(path=path, method=method, code=code).inc()
        REQ_LATENCY.labels(path=path, method=method).observe(elapsed)
        return response

def observe_valuation(report) -> None:
    """Record a completed ValuationReport."""
    VALUATION_COUNT.labels(outcome="ok").inc()
    VALUATION_CONFIDENCE.observe(report.confidence)
    for method in report.methods:
        METHOD_USAGE.labels(method=method.name).inc()

def observe_failure(code: str) -> None:
    VALUATION_COUNT.labels(outcome=code).inc()

async def metrics_endpoint(request: Request):
    """
    GET /v1/metrics, scraped by Prometheus.
    """
    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
