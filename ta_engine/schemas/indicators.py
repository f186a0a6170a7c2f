"""
CONTRACT: Volatility Indicator Engine

Input: VolatilityRequest (a price series and indicator parameters)
Output: VolatilityOutput

Parameters left unset fall back to the configured defaults.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class BandStrategy(str, Enum):
    CONSTANT = "CONSTANT"
    SMA = "SMA"
    EMA = "EMA"


class Precision(str, Enum):
    FLOAT32 = "float32"
    FLOAT64 = "float64"


# =============================================================================
# INPUT: VolatilityRequest
# =============================================================================


class VolatilityRequest(BaseModel):
    """
    Request for Bollinger Band and ATR calculation.
    Sent by: caller holding a price series
    Received by: Indicator Service
    """

    symbol: str = Field(..., description="Instrument the series belongs to")
    series: list[float] = Field(..., description="Samples in ascending time order")

    strategy: BandStrategy = BandStrategy.SMA
    lookback: Optional[int] = Field(default=None, ge=1)
    multiplier: Optional[float] = Field(default=None, ge=0)
    midpoint: Optional[float] = Field(
        default=None, description="Required for the CONSTANT strategy"
    )
    smoothing: Optional[float] = Field(
        default=None, ge=0, lt=1, description="EMA smoothing, 0 derives the default"
    )

    atr_periods: Optional[int] = Field(default=None, ge=1)
    atr_period_size: Optional[int] = Field(default=None, ge=1)

    precision: Optional[Precision] = None


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class BoundData(BaseModel):
    """One Bollinger Bound."""

    lower: float
    midpoint: float
    upper: float


class BollingerBandData(BaseModel):
    """Bollinger Band over the full series."""

    strategy: BandStrategy
    lookback: int = Field(..., ge=1)
    multiplier: float = Field(..., ge=0)
    smoothing: Optional[float] = Field(default=None, description="EMA strategy only")
    bounds: list[BoundData] = Field(
        ..., description="One bound per sample, zeroed during warm-up"
    )
    latest: Optional[BoundData] = Field(
        default=None, description="Last bound with a complete window"
    )


class ATRData(BaseModel):
    """Average True Range of the series."""

    periods: int = Field(..., ge=1)
    period_size: int = Field(..., ge=1)
    value: float = Field(..., ge=0)
    curve: list[float] = Field(
        ..., description="ATR after each complete period, zero during warm-up"
    )


# =============================================================================
# OUTPUT: VolatilityOutput (Complete Response)
# =============================================================================


class VolatilityOutput(BaseModel):
    """
    Complete volatility analysis for a series.
    Returned by: Indicator Service
    """

    symbol: str
    timestamp: datetime
    precision: Precision
    samples: int = Field(..., ge=0)
    bollinger: BollingerBandData
    atr: ATRData

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "RELIANCE",
                "timestamp": "2024-02-04T10:30:00+05:30",
                "precision": "float64",
                "samples": 5,
                "bollinger": {
                    "strategy": "SMA",
                    "lookback": 5,
                    "multiplier": 2.0,
                    "bounds": [
                        {"lower": 0, "midpoint": 0, "upper": 0},
                        {"lower": -0.66, "midpoint": 5.0, "upper": 10.66},
                    ],
                    "latest": {"lower": -0.66, "midpoint": 5.0, "upper": 10.66},
                },
                "atr": {
                    "periods": 3,
                    "period_size": 1,
                    "value": 2.0,
                    "curve": [0.0, 0.0, 2.0, 2.0, 2.0],
                },
            }
        }
