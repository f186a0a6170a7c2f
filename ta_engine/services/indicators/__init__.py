"""
Indicator Engine Service

CONTRACT:
    Input:  VolatilityRequest (price series + parameters)
    Output: VolatilityOutput

RESPONSIBILITIES:
    - Statistics primitives and EWMA recurrence (calculations)
    - True range and Average True Range (atr)
    - Bollinger Bounds and Bands with constant, SMA and EMA midpoints (bollinger)

Uses NumPy for calculations in float32 or float64.
All math is deterministic and reproducible.
"""

from ta_engine.services.indicators.interface import IndicatorServiceInterface
from ta_engine.services.indicators.service import IndicatorService, get_indicator_service

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
]
