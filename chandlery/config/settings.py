"""
Chandlery settings, read from the environment with Pydantic v2.

Each group has its own prefix: ``STORAGE_*`` for the database,
``FINANCE_*`` for currencies and reports, ``ORDER_*`` for the order
workflow. A ``.env`` file in the working directory is honoured.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Where the SQLite database lives and how it is pooled."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "chandlery.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="Write-lock wait in ms")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class FinanceSettings(BaseSettings):
    """Currency and reporting configuration."""

    model_config = SettingsConfigDict(env_prefix="FINANCE_")

    # Used for order totals when the order row itself cannot be found
    fallback_currency: str = "USD"
    # Headline currency for portfolio summaries that span more than one currency
    reporting_currency: str = "TRY"
    top_orders_limit: int = Field(default=10, ge=1)
    unknown_ship_label: str = "Unknown ship"

    @field_validator("fallback_currency", "reporting_currency")
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        code = v.strip().upper()
        if len(code) != 3 or not code.isalpha():
            raise ValueError(f"Invalid currency code: {v}")
        return code


class OrderSettings(BaseSettings):
    """Order workflow configuration."""

    model_config = SettingsConfigDict(env_prefix="ORDER_")

    number_prefix: str = Field(default="ORD", pattern=r"^[A-Z][A-Z0-9]*$")
    # Re-reads after an optimistic version conflict before giving up
    conflict_retries: int = Field(default=1, ge=0)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Chandlery"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    finance: FinanceSettings = Field(default_factory=FinanceSettings)
    orders: OrderSettings = Field(default_factory=OrderSettings)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Settings are read once per process and then reused."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
