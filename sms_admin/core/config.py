"""Application configuration using Pydantic settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Mock data store
    # Multiplier applied to each store call's simulated latency (0 disables it)
    mock_latency_scale: float = Field(default=1.0, ge=0.0)
    seed_fixtures: bool = True

    # Dashboard
    recent_logs_limit: int = 10
    search_results_per_kind: int = 5
    sms_segment_length: int = 160

    # Identity stamped on audit entries written through the API
    audit_user_id: str = "admin-1"
    audit_user_name: str = "Sarah Admin"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
