from functools import lru_cache
from typing import Literal
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings read from the environment and an optional .env file.

    Names are case-insensitive: OPENAI_API_KEY sets openai_api_key.
    Unknown variables are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Decision Assistant"
    app_version: str = "0.1.0"
    environment: Literal["local", "dev", "staging", "prod"] = "local"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Observability
    log_level: int = 20  # INFO by default (DEBUG=10, INFO=20, WARNING=30, ERROR=40)
    log_format: Literal["json", "console"] = "json"

    # Language model
    openai_api_key: SecretStr | None = None
    openai_base_url: str | None = None
    openai_model: str = "gpt-4.1"
    openai_timeout: float = 60.0
    classification_model: str | None = None  # falls back to openai_model
    classification_max_tokens: int = 30

    # Reflection timer
    reflection_default_importance: str = "routine"
    reflection_default_duration: int = 60  # seconds, used when classification fails
    reflection_max_duration: int = 240  # seconds

    # Security headers
    security_hsts_enabled: bool = True  # only sent when environment is prod
    security_hsts_max_age: int = 31536000  # 1 year in seconds
    security_csp_policy: str = "default-src 'self'"
    security_frame_options: str = "DENY"

    # CORS
    cors_origins: list[str] = Field(default_factory=list)  # empty: localhost in local/dev, none elsewhere
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["GET", "POST", "OPTIONS"])
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"])
    cors_max_age: int = 600  # Preflight cache time in seconds

    # Terminal client
    client_api_url: str = "http://localhost:8000"
    client_timeout: float = 120.0

    @property
    def is_production(self) -> bool:
        return self.environment == "prod"

    @property
    def effective_classification_model(self) -> str:
        return self.classification_model or self.openai_model


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
