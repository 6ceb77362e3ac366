"""Application configuration using pydantic-settings.

Points the client at a Garden Finance deployment (testnet by default) and
controls which network category of chains is selectable.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PER_PAGE_CHOICES = (10, 25, 50, 100)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Garden API
    # ======================
    garden_api_url: str = Field(
        default="https://testnet.api.garden.finance",
        description="Base URL of the Garden REST API",
    )
    network_type: str = Field(
        default="testnet", description="Network category of selectable chains (testnet/mainnet)"
    )
    order_explorer_url: str = Field(
        default="https://testnet-explorer.garden.finance",
        description="Explorer used for order links",
    )
    http_timeout_seconds: float = Field(
        default=30.0, ge=1, le=120, description="Timeout for REST calls"
    )

    # ======================
    # Swap SDK
    # ======================
    sdk_mode: str = Field(default="dry_run", description="Swap SDK backend (dry_run)")

    # ======================
    # Order history
    # ======================
    default_per_page: int = Field(default=10, description="Initial order history page size")

    # ======================
    # Swap sessions
    # ======================
    session_idle_seconds: float = Field(
        default=3600.0, gt=0, description="Idle time after which a swap session is dropped"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")

    def get_safe_dict(self) -> dict:
        """Return settings dict for diagnostics."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "garden": {
                "api_url": self.garden_api_url,
                "network_type": self.network_type,
                "order_explorer_url": self.order_explorer_url,
                "http_timeout_seconds": self.http_timeout_seconds,
            },
            "sdk_mode": self.sdk_mode,
            "default_per_page": self.default_per_page,
            "session_idle_seconds": self.session_idle_seconds,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
