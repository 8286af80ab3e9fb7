"""Location Finder configuration — place-search provider, viewport defaults, logging."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Place-search provider (Nominatim-compatible)
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    nominatim_user_agent: str = "locationfinder/0.1 (contact: locationfinder@example.com)"
    nominatim_min_interval: float = 1.0  # seconds between requests to the public host
    search_timeout: float = 10.0
    search_cache_ttl: int = 3600  # 1 hour
    search_limit: int = 5

    # Autocomplete
    autocomplete_limit: int = 8
    autocomplete_debounce_ms: int = 250

    # Viewport, default city view is San Francisco
    default_latitude: float = 37.7749
    default_longitude: float = -122.4194
    default_span: float = 0.05
    min_span: float = 0.0005
    max_span: float = 180.0

    @model_validator(mode="after")
    def _check_viewport(self) -> "Settings":
        """Reject span bounds that would make zooming impossible."""
        if not 0 < self.min_span < self.max_span:
            raise ValueError(
                f"min_span ({self.min_span}) must be positive and below max_span ({self.max_span})"
            )
        if not self.min_span <= self.default_span <= self.max_span:
            raise ValueError(f"default_span ({self.default_span}) outside [min_span, max_span]")
        return self

    @model_validator(mode="after")
    def _strip_user_agent(self) -> "Settings":
        """Strip whitespace/newlines from the user agent (common paste error in .env files)."""
        self.nominatim_user_agent = self.nominatim_user_agent.strip()
        return self

    # MLflow tracing
    mlflow_tracking_uri: str = "sqlite:///mlruns/mlflow.db"
    mlflow_experiment_name: str = "locationfinder"
    tracing_enabled: bool = True

    # Logging
    log_json: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
