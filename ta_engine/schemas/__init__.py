"""
ta-engine Schema Contracts

Request and response models for the volatility indicator service.
"""

from ta_engine.schemas.indicators import (
    BandStrategy,
    Precision,
    VolatilityRequest,
    VolatilityOutput,
    BollingerBandData,
    BoundData,
    ATRData,
)

__all__ = [
    "BandStrategy",
    "Precision",
    "VolatilityRequest",
    "VolatilityOutput",
    "BollingerBandData",
    "BoundData",
    "ATRData",
]
