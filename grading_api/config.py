"""Configuration management using pydantic-settings."""

from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FRONTEND_URL = "https://pdtgrading.com"


class Settings(BaseSettings):
    """
    Settings for the grading API.

    Loaded once at process start and read-only afterwards. Build one instance
    and hand it to ``create_app`` instead of reading the environment ad hoc.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # API Settings
    api_title: str = "Card Grading API"
    api_version: str = "1.0.0"
    api_description: str = "Orders, customers and analytics for the card grading business"
    api_prefix: str = "/api"

    # Deployment mode
    environment: Literal["development", "production", "test"] = "development"

    # Credential compared against the x-api-key header
    api_secret_key: SecretStr | None = None

    # CORS
    frontend_url: str = DEFAULT_FRONTEND_URL
    development_origins: tuple[str, ...] = ("http://localhost:3000", "http://localhost:3001")
    cors_max_age: int = 86400

    # Service
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def allowed_origins(self) -> tuple[str, ...]:
        """Origins allowed to make cross-origin calls in the current mode."""
        if self.is_production:
            return (self.frontend_url or DEFAULT_FRONTEND_URL,)
        return self.development_origins
