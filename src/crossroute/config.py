"""Application configuration using pydantic-settings.

All values can be overridden through environment variables or a local .env file.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SDK settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug logging")

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="Quote API server host")
    api_port: int = Field(default=8000, description="Quote API server port")

    # ======================
    # Chain RPC Endpoints
    # ======================
    eth_rpc_url: str = Field(default="https://eth.llamarpc.com", description="Ethereum RPC URL")
    bsc_rpc_url: str = Field(default="https://bsc-dataseed.binance.org", description="BSC RPC URL")
    polygon_rpc_url: str = Field(default="https://polygon-rpc.com", description="Polygon RPC URL")
    avax_rpc_url: str = Field(
        default="https://api.avax.network/ext/bc/C/rpc", description="Avalanche RPC URL"
    )
    arbitrum_rpc_url: str = Field(
        default="https://arb1.arbitrum.io/rpc", description="Arbitrum One RPC URL"
    )
    optimism_rpc_url: str = Field(
        default="https://mainnet.optimism.io", description="Optimism RPC URL"
    )
    fantom_rpc_url: str = Field(default="https://rpc.ftm.tools", description="Fantom RPC URL")

    # ======================
    # Provider APIs
    # ======================
    xy_api_url: str = Field(default="https://open-api.xy.finance/v1", description="XY Finance API")
    via_api_url: str = Field(default="https://router-api.via.exchange", description="Via router API")
    via_explorer_api_url: str = Field(
        default="https://explorer-api.via.exchange/v1", description="Via token price API"
    )
    via_api_key: str = Field(default="", description="Via router API key")
    http_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")

    # ======================
    # Providers
    # ======================
    stargate_enabled: bool = Field(default=True, description="Quote Stargate routes")
    xy_enabled: bool = Field(default=True, description="Quote XY routes")
    via_enabled: bool = Field(default=True, description="Quote Via routes")

    # ======================
    # Trade defaults
    # ======================
    default_slippage: Decimal = Field(
        default=Decimal("0.02"), ge=0, lt=1, description="Default slippage tolerance (2%)"
    )
    deadline_minutes: int = Field(default=20, description="On-chain swap deadline in minutes")
    provider_address: str = Field(
        default="0x0000000000000000000000000000000000000000",
        description="Integrator address used for proxy fee lookups",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_rpc_url(self, chain: str) -> str:
        """Get RPC URL for a blockchain name."""
        rpc_map = {
            "ETH": self.eth_rpc_url,
            "BSC": self.bsc_rpc_url,
            "POLYGON": self.polygon_rpc_url,
            "AVALANCHE": self.avax_rpc_url,
            "ARBITRUM": self.arbitrum_rpc_url,
            "OPTIMISM": self.optimism_rpc_url,
            "FANTOM": self.fantom_rpc_url,
        }
        return rpc_map.get(chain.upper(), "")

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "providers": {
                "stargate": self.stargate_enabled,
                "xy": {"enabled": self.xy_enabled, "api": self.xy_api_url},
                "via": {
                    "enabled": self.via_enabled,
                    "api": self.via_api_url,
                    "api_key": "***" if self.via_api_key else "(not set)",
                },
            },
            "slippage": str(self.default_slippage),
            "provider_address": self.provider_address,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
