"""
Application configuration using pydantic-settings.

Loads configuration from environment variables with sensible defaults.
"""
from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FINSTATEMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Database (SQLite for local dev, PostgreSQL for production)
    database_url: str = "sqlite:///./finstatements.db"

    # Per-statement timeout enforced by the ledger store (PostgreSQL only)
    ledger_statement_timeout_ms: int = 30_000

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Ledger conventions
    cash_account_code: str = "1100"
    opening_balance_marker: str = "Opening Balance"
    opening_balance_reference_prefix: str = "OB-"

    # Cash flow reconciliation tolerates one cent of rounding
    cash_reconciliation_tolerance: Decimal = Decimal("0.01")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
