from typing import List

from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings

from utils.errors import ConfigurationError


class Settings(BaseSettings):
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    ANTHROPIC_API_KEY: str
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Completion provider
    COMPLETION_MODEL: str = "claude-sonnet-4-5"
    COMPLETION_MAX_TOKENS: int = 500
    COMPLETION_TEMPERATURE: float = 0.7
    TRANSLATION_MAX_TOKENS: int = 2000
    TRANSLATION_TEMPERATURE: float = 0.3
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    # Ask flow
    ASK_RATE_LIMIT: int = 15
    ASK_RATE_WINDOW_SECONDS: int = 600  # 15 requests per 10 minutes
    HISTORY_WINDOW: int = 10

    GEOLOCATION_URL: str = "https://ipapi.co/{ip}/json/"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"


def load_settings() -> Settings:
    """Build settings, failing fast when a required credential is missing"""
    try:
        loaded = Settings()
    except SettingsValidationError as e:
        missing = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise ConfigurationError(f"Missing or invalid configuration: {', '.join(missing)}") from e

    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_ROLE_KEY", "ANTHROPIC_API_KEY"):
        if not getattr(loaded, name).strip():
            raise ConfigurationError(f"{name} must not be empty")

    return loaded


settings = load_settings()
