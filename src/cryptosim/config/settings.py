"""Application settings and configuration."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


def get_default_data_dir() -> Path:
    """Return the default data directory for the local wallet store."""
    return Path.home() / ".cryptosim"


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Crypto Trading Simulator"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Local wallet store (derived from data_dir if database_url is not set)
    data_dir: Optional[Path] = None
    database_url: Optional[str] = None
    wallet_storage_key: str = "userWallet"
    initial_cash: Decimal = Decimal("1000.00")

    # Upstream market data provider
    coingecko_api_url: str = "https://api.coingecko.com/api/v3"
    vs_currency: str = "usd"
    markets_per_page: int = 50
    upstream_timeout_seconds: float = 10.0
    upstream_max_retries: int = 2
    upstream_backoff_factor: float = 0.5

    # Gateway cache behavior
    market_data_cache_ttl_seconds: int = 60
    rate_limit_retry_after_seconds: int = 60

    cors_origins: list[str] = ["*"]

    # Hardcoded demo login
    demo_username: str = "demo@coinbase.com"
    demo_password: str = "demo123456"

    def get_data_dir(self) -> Path:
        """Get the data directory, creating it if needed."""
        data_dir = self.data_dir or get_default_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def get_database_url(self) -> str:
        """Get database URL, deriving from data_dir if not set."""
        if self.database_url:
            return self.database_url
        db_path = self.get_data_dir() / "wallet.db"
        return f"sqlite:///{db_path}"


# Global settings instance (can be replaced at runtime)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the current settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (used by the app context)."""
    global _settings
    _settings = settings


def reset_settings() -> None:
    """Reset settings to force reload."""
    global _settings
    _settings = None
