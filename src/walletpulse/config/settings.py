"""Application settings and configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="WALLETPULSE_",
    )

    app_name: str = "WalletPulse"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    api_host: str = "127.0.0.1"
    api_port: int = 8001

    # Holdings are read from the ledger database owned by the monitoring stack
    database_url: str = "sqlite:///./walletpulse.db"

    # Shared price cache; empty means an in-process store
    redis_url: Optional[str] = None

    # Upstream endpoints; market_data_provider is "dexscreener" or "stub" (offline)
    market_data_provider: str = "dexscreener"
    dexscreener_base_url: str = "https://api.dexscreener.com/latest/dex"
    coingecko_price_url: str = "https://api.coingecko.com/api/v3/simple/price"
    jupiter_price_url: str = "https://lite-api.jup.ag/price/v2"
    http_timeout_seconds: float = 10.0
    user_agent: str = "WalletPulse/1.0"

    # Market data cache service
    price_cache_ttl_seconds: int = 300
    upstream_min_interval_seconds: float = 0.1
    batch_chunk_size: int = 5
    batch_chunk_delay_seconds: float = 0.2
    max_mints_per_request: int = 500

    # Native (SOL/USD) price oracle
    native_price_refresh_seconds: float = 300.0
    native_price_default_usd: float = 100.0


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
