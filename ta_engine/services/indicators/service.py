"""
Indicator Engine Service Implementation

Runs a volatility request through the indicator engine.
Pure Python/NumPy calculations.
"""

import logging
from datetime import datetime
from typing import Optional

import numpy as np

from ta_engine.core.config import Settings, get_settings
from ta_engine.core.exceptions import IndicatorError
from ta_engine.schemas.indicators import (
    ATRData,
    BandStrategy,
    BollingerBandData,
    BoundData,
    Precision,
    VolatilityOutput,
    VolatilityRequest,
)
from ta_engine.services.base import ValidationError
from ta_engine.services.indicators.interface import IndicatorServiceInterface
from ta_engine.services.indicators.calculations import as_series, resolve_dtype
from ta_engine.services.indicators.atr import atr_curve, static_atr
from ta_engine.services.indicators.bollinger import (
    Bound,
    static_bollinger_const,
    static_bollinger_ema,
    static_bollinger_sma,
)

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Calculates Bollinger Bands and ATR for a price series.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or get_settings()

    def execute(self, request: VolatilityRequest) -> VolatilityOutput:
        """Calculate Bollinger Band and ATR for one series."""
        request = self.validate_input(request)
        bollinger = self.calculate_bollinger(request)
        atr = self.calculate_atr(request)

        return VolatilityOutput(
            symbol=request.symbol,
            timestamp=datetime.now(),
            precision=self._precision(request),
            samples=len(request.series),
            bollinger=bollinger,
            atr=atr,
        )

    def validate_input(self, request: VolatilityRequest) -> VolatilityRequest:
        if request.strategy == BandStrategy.CONSTANT and request.midpoint is None:
            raise ValidationError(
                self.name,
                "CONSTANT strategy requires a midpoint",
                {"symbol": request.symbol},
            )
        if request.series and not np.all(np.isfinite(request.series)):
            raise ValidationError(
                self.name,
                "Series contains non-finite samples",
                {"symbol": request.symbol},
            )
        return request

    def calculate_bollinger(self, request: VolatilityRequest) -> BollingerBandData:
        """Bollinger Band over the full series using the requested midpoint strategy."""
        dtype = resolve_dtype(self._precision(request).value)
        lookback = request.lookback or self.config.bollinger_lookback
        multiplier = (
            request.multiplier
            if request.multiplier is not None
            else self.config.bollinger_multiplier
        )
        smoothing = None

        try:
            series = as_series(request.series, dtype)
            if request.strategy == BandStrategy.CONSTANT:
                band = static_bollinger_const(
                    series, lookback, request.midpoint, multiplier, dtype
                )
            elif request.strategy == BandStrategy.EMA:
                smoothing = (
                    request.smoothing
                    if request.smoothing is not None
                    else self.config.ema_smoothing
                )
                band = static_bollinger_ema(series, lookback, smoothing, multiplier, dtype)
            else:
                band = static_bollinger_sma(series, lookback, multiplier, dtype)
        except IndicatorError as e:
            raise self._rejection(request, e) from e

        bounds = [self._bound_data(b) for b in band]
        latest = bounds[-1] if len(series) >= lookback else None

        return BollingerBandData(
            strategy=request.strategy,
            lookback=lookback,
            multiplier=multiplier,
            smoothing=smoothing,
            bounds=bounds,
            latest=latest,
        )

    def calculate_atr(self, request: VolatilityRequest) -> ATRData:
        """ATR of the series and its per-period curve."""
        dtype = resolve_dtype(self._precision(request).value)
        periods = request.atr_periods or self.config.atr_periods
        period_size = request.atr_period_size or self.config.atr_period_size

        try:
            series = as_series(request.series, dtype)
            value = static_atr(series, periods, period_size, dtype)
            curve = atr_curve(series, periods, period_size, dtype)
        except IndicatorError as e:
            raise self._rejection(request, e) from e

        return ATRData(
            periods=periods,
            period_size=period_size,
            value=self._round(value),
            curve=[self._round(v) for v in curve],
        )

    def execute_many(
        self, requests: list[VolatilityRequest]
    ) -> dict[str, Optional[VolatilityOutput]]:
        """Calculate indicators for several series."""
        results = {}

        for request in requests:
            try:
                results[request.symbol] = self.execute(request)
            except ValidationError as e:
                # Log error but continue with other symbols
                logger.error(f"Error calculating indicators for {request.symbol}: {e}")
                results[request.symbol] = None

        return results

    def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True

    def _precision(self, request: VolatilityRequest) -> Precision:
        return request.precision or Precision(self.config.default_dtype)

    def _round(self, value) -> float:
        if self.config.output_precision is None:
            return float(value)
        return round(float(value), self.config.output_precision)

    def _bound_data(self, bound: Bound) -> BoundData:
        return BoundData(
            lower=self._round(bound.lower),
            midpoint=self._round(bound.midpoint),
            upper=self._round(bound.upper),
        )

    def _rejection(self, request: VolatilityRequest, error: IndicatorError) -> ValidationError:
        logger.warning(f"Rejected request for {request.symbol}: {error.message}")
        return ValidationError(
            self.name, error.message, {"symbol": request.symbol, **error.details}
        )


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
