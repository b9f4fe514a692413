"""
Application settings loaded from environment variables.

Uses pydantic-settings for validation and type safety.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    Application settings.

    All values loaded from .env file or environment variables.
    Validation happens automatically on startup.
    """

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),  # Check current dir, then parent
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"  # Ignore extra env vars
    )

    # ===================
    # SUPABASE
    # ===================
    supabase_url: Optional[str] = Field(
        None,
        description="Supabase project URL (required by the default inventory fetcher)"
    )
    supabase_key: Optional[str] = Field(
        None,
        description="Supabase anon/public key"
    )
    inventory_table: str = Field(
        default="inventory_items",
        min_length=1,
        description="Table holding per-SKU stock and daily sales history"
    )

    # ===================
    # DEFAULT PLANNING PARAMETERS
    # ===================
    default_target_days_of_coverage: int = Field(
        default=60,
        ge=0,
        description="Days of inventory coverage to target"
    )
    default_safety_stock_days: int = Field(
        default=14,
        ge=0,
        description="Buffer days added on top of forecast demand"
    )
    default_minimum_reorder_quantity: int = Field(
        default=1,
        ge=0,
        description="Smallest non-zero reorder quantity"
    )
    default_maximum_reorder_quantity: int = Field(
        default=10000,
        ge=0,
        description="Largest reorder quantity for a single SKU"
    )
    default_lead_time_days: int = Field(
        default=30,
        ge=0,
        description="Days from reorder to stock availability"
    )

    # ===================
    # REPORTS
    # ===================
    velocity_day_range: int = Field(
        default=90,
        ge=1,
        le=365,
        description="Days of sales history analysed for velocity metrics"
    )
    low_inventory_threshold_days: int = Field(
        default=14,
        ge=0,
        description="Coverage days below which an item is reported as low"
    )
    default_currency_code: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Currency code for fee estimates"
    )

    # ===================
    # APP SETTINGS
    # ===================
    environment: str = Field(
        default="development",
        pattern="^(development|staging|production)$",
        description="Application environment"
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Logging level"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API host"
    )
    api_port: int = Field(
        default=8000,
        ge=1000,
        le=65535,
        description="API port"
    )
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Origins allowed by CORS (JSON list in env)"
    )

    # ===================
    # COMPUTED PROPERTIES
    # ===================
    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    @property
    def supabase_configured(self) -> bool:
        """Check if Supabase credentials are present."""
        return bool(self.supabase_url and self.supabase_key)


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings: Application settings

    Raises:
        ValidationError: If env vars are invalid
    """
    return Settings()


# For convenient imports: from config.settings import settings
settings = get_settings()
