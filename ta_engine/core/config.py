"""
Engine Configuration

Default indicator parameters, loaded from environment variables.
"""

import logging
from functools import lru_cache
from typing import Literal, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    # Application
    app_name: str = "ta-engine"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Numeric precision: "float32" or "float64"
    default_dtype: Literal["float32", "float64"] = "float64"

    # Bollinger Bands
    bollinger_lookback: int = 20
    bollinger_multiplier: float = 2.0
    ema_smoothing: float = 0.0  # 0 derives 2 / (lookback + 1)

    # Average True Range
    atr_periods: int = 14
    atr_period_size: int = 1

    # Decimal places for service output (None keeps full precision)
    output_precision: Optional[int] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "TA_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the configured log level to the package logger."""
    level_name = (level or get_settings().log_level).upper()
    logging.basicConfig(
        level=level_name,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("ta_engine").setLevel(level_name)


settings = get_settings()
