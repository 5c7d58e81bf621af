"""Application configuration via pydantic-settings.

Reads from .env file or environment variables. The ledger identities are
validated when the ledger is constructed at startup, so a missing seller or
escrow agent address fails fast with a clear error message.

Usage:
    from escrow_ledger.config import get_settings
    settings = get_settings()
    print(settings.escrow_seller_address)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the Escrow Ledger."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = True
    app_log_level: str = "DEBUG"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    # --- Ledger identities ---
    escrow_seller_address: str = ""
    escrow_agent_address: str = ""
    # Empty means the seller deployed the ledger and owns it
    escrow_owner_address: str = ""
    escrow_custody_address: str = "0x000000000000000000000000000000000000e5c0"

    # --- Simulated accounts ---
    escrow_faucet_balance_wei: int = 10**20  # 100 native units

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"

    @property
    def owner_address(self) -> str:
        """Owner identity, defaulting to the seller."""
        return self.escrow_owner_address or self.escrow_seller_address


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the application settings."""
    return Settings()
