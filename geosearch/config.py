"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Immutable application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        # Allow extra fields from .env that aren't defined here
        extra="ignore",
        frozen=True,
    )

    # ===== HTTP Server =====
    BIND_ADDR: str = ":10000"

    # ===== Index =====
    ELASTIC_SEARCH_URL: str = "http://localhost:9200"
    DATASET_INDEX: str = "test_geolocation"
    POSTCODE_INDEX: str = "test_postcode"
    BOUNDARY_FILE_INDEX: str = "test_boundary_files"
    ELASTIC_SEARCH_TIMEOUT_SECONDS: float = 30.0

    # ===== Pagination =====
    MAX_SEARCH_RESULTS_OFFSET: int = 1000

    # ===== Connection Pooling =====
    HTTP_MAX_CONNECTIONS: int = 100
    HTTP_MAX_KEEPALIVE: int = 50

    # ===== Logging =====
    LOG_LEVEL: str = "INFO"

    @property
    def bind_host(self) -> str:
        """Host part of BIND_ADDR, defaulting to all interfaces."""
        host, _, _ = self.BIND_ADDR.rpartition(":")
        return host or "0.0.0.0"

    @property
    def bind_port(self) -> int:
        """Port part of BIND_ADDR."""
        _, _, port = self.BIND_ADDR.rpartition(":")
        return int(port)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance for the API dependency layer.

    Code below the API layer receives the Settings value explicitly.
    """
    return Settings()
