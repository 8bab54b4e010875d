"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    Every setting has a default so the resolver can run against a local
    content backend without any configuration.
    """

    # App
    app_name: str = "site-content"
    app_version: str = "1.0.0"
    debug: bool = False

    # Content backend (CRUD REST API that owns apartados/categorias/secciones/contenidos)
    content_api_base_url: str = "http://localhost:3000/api"
    content_api_token: SecretStr | None = None
    content_api_timeout_seconds: float = 10.0

    # Content admin API: disabled (503) until a secret is configured
    admin_api_secret: SecretStr | None = None

    # Routing: slug used when the route carries none
    home_slug: str = "inicio"

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # OpenTelemetry
    telemetry_enabled: bool = True
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_content_api_and_routing(self) -> "Settings":
        """Validate the backend URL scheme and the home slug."""
        if not self.content_api_base_url.startswith(("http://", "https://")):
            raise ValueError(
                "CONTENT_API_BASE_URL must be an http(s) URL, "
                f"got: {self.content_api_base_url!r}"
            )
        if not self.home_slug.strip():
            raise ValueError("HOME_SLUG must be a non-empty string")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (loaded once per process)."""
    return Settings()
