"""
Market data configuration using Pydantic Settings.

This module provides configuration management for the market data adapter,
allowing environment-based configuration with type validation and defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.marketdata.enums import Provider


class DataApiConfig(BaseSettings):
    """Upstream data API connection configuration."""

    model_config = SettingsConfigDict(env_prefix="MARKETDATA_API_")

    # Connection settings
    base_url: str = "https://data.alpaca.markets"
    key_id: str = Field(default="", description="API key identifier")
    secret_key: str = Field(default="", description="API secret key")

    timeout_seconds: float = Field(
        default=10.0,
        ge=0.5,
        le=120.0,
        description="Total request timeout in seconds",
    )
    user_agent: str = Field(
        default="marketdata-adapter/0.1.0",
        description="User-Agent header sent with every request",
    )

    @property
    def has_credentials(self) -> bool:
        """Check if both credential halves are configured."""
        return bool(self.key_id and self.secret_key)


class MarketDataConfig(BaseSettings):
    """Root configuration combining all sub-configs."""

    model_config = SettingsConfigDict(env_prefix="MARKETDATA_")

    # Sub-configurations
    api: DataApiConfig = Field(default_factory=DataApiConfig)

    # Global settings
    provider: Provider = Provider.ALPACA
    debug: bool = False
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
    )

    @classmethod
    def from_env(cls) -> "MarketDataConfig":
        """
        Load configuration from environment variables.

        Returns:
            Configured MarketDataConfig instance

        """
        return cls(api=DataApiConfig())
