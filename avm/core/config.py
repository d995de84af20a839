import os
from pydantic import BaseModel

class Settings(BaseModel):
    # Basic
    ENV: str = os.getenv("ENV", "dev")
    DEFAULT_CURRENCY: str = os.getenv("CURRENCY", "EUR")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "43200"))

    # Data providers
    COMPS_PROVIDER: str = os.getenv("COMPS_PROVIDER", "mock")      # mock | http
    COMPS_BASE_URL: str | None = os.getenv("COMPS_BASE_URL")
    TRENDS_PROVIDER: str = os.getenv("TRENDS_PROVIDER", "mock")    # mock | http
    TRENDS_BASE_URL: str | None = os.getenv("TRENDS_BASE_URL")
    PROVIDER_TIMEOUT_SECONDS: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "10"))
    COMPS_RADIUS_METERS: float = float(os.getenv("COMPS_RADIUS_METERS", "1000"))

    # Lookup tables (base prices, construction costs, cap rates). Built-ins if unset.
    MARKET_TABLES_PATH: str | None = os.getenv("MARKET_TABLES_PATH")

    # CORS
    ALLOW_ORIGINS: str = os.getenv("ALLOW_ORIGINS", "*")

    # Cache
    USE_REDIS: bool = os.getenv("USE_REDIS", "false").lower() == "true"
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

    # Metrics
    PROMETHEUS_ENABLED: bool = os.getenv("PROMETHEUS_ENABLED", "true").lower() == "true"

settings = Settings()
