"""
Engine configuration settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="SALES_ENGINE_",
        env_file=".env",
        extra="ignore",
        case_sensitive=True,
    )

    # Options defaults
    DEFAULT_PROFIT_MARGIN: float = 0.2
    TOP_PRODUCTS_LIMIT: int = 10
    ROUNDING: str = "per_step"  # per_step, final

    # Bonus tiers (fraction of profit)
    FIRST_PLACE_RATE: float = 0.15
    PODIUM_RATE: float = 0.10
    STANDARD_RATE: float = 0.05

    # Receipt total_amount vs computed revenue
    TOTAL_AMOUNT_TOLERANCE: float = 0.01

    # Monitoring and Logging
    LOG_LEVEL: str = "INFO"


# Create settings instance
settings = EngineSettings()

if settings.ROUNDING not in ("per_step", "final"):
    raise ValueError(f"Invalid SALES_ENGINE_ROUNDING: {settings.ROUNDING!r}")

if not 0 <= settings.DEFAULT_PROFIT_MARGIN <= 1:
    raise ValueError("SALES_ENGINE_DEFAULT_PROFIT_MARGIN must be between 0 and 1")
