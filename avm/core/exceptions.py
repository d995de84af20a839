"""Domain exceptions for the valuation engine.

Each error carries a machine-readable ``code`` so the HTTP layer can tell the
caller which precondition failed.
"""


class ValuationError(Exception):
    """Base exception for all valuation errors."""

    code = "valuation_error"

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": str(self)}


class ValidationError(ValuationError):
    """Malformed property input. Raised before any provider is called."""

    code = "validation_error"

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message, "field": self.field}


class NoApplicableMethodError(ValuationError):
    """Every valuation method declined to run."""

    code = "no_applicable_method"


class ProviderUnavailable(ValuationError):
    """A data provider failed (transport error, bad response or timeout)."""

    code = "provider_unavailable"

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider} provider unavailable: {reason}")
        self.provider = provider
        self.reason = reason

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.reason, "provider": self.provider}
