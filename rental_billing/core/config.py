"""Application configuration settings."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    PROJECT_NAME: str = "Rental Billing"
    VERSION: str = "0.1.0"
    DEBUG: bool = True
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    DATABASE_URL: str = "sqlite:///./rental_billing.db"

    # Fallback per-unit rates, used only when a property has no rate of its own
    DEFAULT_LIGHT_COST_PER_UNIT: Decimal = Decimal("0.25")
    DEFAULT_WATER_COST_PER_UNIT: Decimal = Decimal("0.15")

    # "single": one meter per type per department, enforced on create
    # "sum": several meters per type, consumption is summed across them
    METER_AGGREGATION: Literal["single", "sum"] = "single"


settings = Settings()
