"""
Indicator Engine Service Interface

Defines the contract for the volatility indicator layer.
"""

from abc import abstractmethod
from typing import Optional

from ta_engine.services.base import BaseService
from ta_engine.schemas.indicators import (
    ATRData,
    BollingerBandData,
    VolatilityOutput,
    VolatilityRequest,
)


class IndicatorServiceInterface(BaseService[VolatilityRequest, VolatilityOutput]):
    """
    Indicator Engine Service Contract.

    INPUT: VolatilityRequest
        - series: price samples in ascending time order
        - band strategy and ATR parameters (defaults from settings)

    OUTPUT: VolatilityOutput
        - Bollinger Band over the series
        - ATR value and per-period ATR curve
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def execute(self, request: VolatilityRequest) -> VolatilityOutput:
        """Calculate Bollinger Band and ATR for one series."""
        pass

    @abstractmethod
    def calculate_bollinger(self, request: VolatilityRequest) -> BollingerBandData:
        pass

    @abstractmethod
    def calculate_atr(self, request: VolatilityRequest) -> ATRData:
        pass

    @abstractmethod
    def execute_many(
        self, requests: list[VolatilityRequest]
    ) -> dict[str, Optional[VolatilityOutput]]:
        """
        Calculate indicators for several series.

        A failing request is logged and mapped to None; the others still run.
        """
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
