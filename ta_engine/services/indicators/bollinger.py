"""
Bollinger Bands

A Bollinger Bound is a midpoint plus/minus a multiple of the standard
deviation of a period. Three midpoint strategies are supported:

    CONSTANT: a caller supplied midpoint (e.g. a fixed target price)
    SMA:      simple moving average of the period
    EMA:      exponentially weighted moving average, seeded with the SMA

The rolling_* functions build one bound per call and are meant to be driven
by the caller over a live feed. The static_* functions build a full band over
a historical series. Both produce identical midpoints for the same inputs.
"""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np

from ta_engine.core.exceptions import EmptyInputError, InvalidParameterError
from ta_engine.services.indicators.calculations import (
    EmaState,
    FloatType,
    SeriesLike,
    as_series,
    ema_start,
    ema_step,
    mean,
    resolve_dtype,
    stddev,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bound:
    """A lower and upper value around a midpoint."""

    lower: float = 0.0
    midpoint: float = 0.0
    upper: float = 0.0

    @classmethod
    def empty(cls, dtype: FloatType = np.float64) -> "Bound":
        """Sentinel for indices without a complete lookback window."""
        zero = resolve_dtype(dtype)(0.0)
        return cls(lower=zero, midpoint=zero, upper=zero)

    @property
    def is_empty(self) -> bool:
        """
        True when every field is zero.

        A computed bound over an all-zero window around a zero midpoint also
        reads as empty; use the index (i < lookback - 1) to find warm-up
        entries of a band.
        """
        return self.lower == 0 and self.midpoint == 0 and self.upper == 0

    @property
    def width(self) -> float:
        return self.upper - self.lower


def compare_bounds(first: Bound, second: Bound) -> bool:
    """True if the first bound is wider than the second."""
    return first.width > second.width


# =============================================================================
# BOUND CALCULATOR
# =============================================================================


def bollinger_bound(
    period: SeriesLike, midpoint: float, multiplier: float, dtype: FloatType = np.float64
) -> Bound:
    """
    Bollinger Bound for a period.

    Args:
        period: data values of one period
        midpoint: midpoint of the bound
        multiplier: multiplier on the standard deviation of the period
    """
    dtype = resolve_dtype(dtype)
    values = as_series(period, dtype)
    if values.size == 0:
        raise EmptyInputError()

    leg = stddev(values, dtype) * dtype(multiplier)
    k = dtype(midpoint)

    return Bound(lower=k - leg, midpoint=k, upper=k + leg)


def rolling_bollinger_const(
    period: SeriesLike, midpoint: float, multiplier: float, dtype: FloatType = np.float64
) -> Bound:
    """Bound for one period around a constant midpoint."""
    return bollinger_bound(period, midpoint, multiplier, dtype)


def rolling_bollinger_sma(
    period: SeriesLike, multiplier: float, dtype: FloatType = np.float64
) -> Bound:
    """Bound for one period around the period's simple average."""
    dtype = resolve_dtype(dtype)
    values = as_series(period, dtype)
    if values.size == 0:
        raise EmptyInputError()

    return bollinger_bound(values, mean(values, dtype), multiplier, dtype)


def rolling_bollinger_ema(
    period: SeriesLike,
    multiplier: float,
    state: Optional[EmaState] = None,
    smoothing: float = 0.0,
    dtype: FloatType = np.float64,
) -> tuple[Bound, EmaState]:
    """
    Bound for one period around an EWMA midpoint.

    The period must end with the current sample. Pass state=None for the
    first bound of a sequence: its midpoint is the period's simple average
    and the smoothing factor (0 derives 2 / (len(period) + 1)) is fixed into
    the returned state. Every later call must be given the state returned
    by the previous one.

    Returns:
        (bound, state for the next call)
    """
    dtype = state.dtype if state is not None else resolve_dtype(dtype)
    values = as_series(period, dtype)
    if values.size == 0:
        raise EmptyInputError()

    if state is None:
        state = ema_start(values, smoothing, dtype)
    else:
        state = ema_step(state, values[-1])

    return bollinger_bound(values, state.value, multiplier, dtype), state


# =============================================================================
# STATIC BANDS
# =============================================================================


def _windows(values: np.ndarray, lookback: int) -> Iterator[tuple[int, np.ndarray]]:
    """Yield (index, window ending at index) for every complete window."""
    if values.size == 0:
        raise EmptyInputError()
    if lookback < 1:
        raise InvalidParameterError(
            f"Lookback must be at least 1, got {lookback}", {"lookback": lookback}
        )
    if lookback > values.size:
        logger.debug(
            f"Lookback {lookback} exceeds series length {values.size}, band is empty"
        )

    for i in range(lookback - 1, values.size):
        yield i, values[i + 1 - lookback : i + 1]


def static_bollinger_const(
    series: SeriesLike,
    lookback: int,
    midpoint: float,
    multiplier: float,
    dtype: FloatType = np.float64,
) -> list[Bound]:
    """
    Bollinger Band around a constant midpoint.

    One bound per sample; the first lookback-1 entries are empty bounds.
    Time series data is assumed to be in ascending order.
    """
    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)

    band = [Bound.empty(dtype)] * values.size
    for i, period in _windows(values, lookback):
        band[i] = rolling_bollinger_const(period, midpoint, multiplier, dtype)

    return band


def static_bollinger_sma(
    series: SeriesLike, lookback: int, multiplier: float, dtype: FloatType = np.float64
) -> list[Bound]:
    """Bollinger Band around a simple moving average midpoint."""
    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)

    band = [Bound.empty(dtype)] * values.size
    for i, period in _windows(values, lookback):
        band[i] = rolling_bollinger_sma(period, multiplier, dtype)

    return band


def static_bollinger_ema(
    series: SeriesLike,
    lookback: int,
    smoothing: float,
    multiplier: float,
    dtype: FloatType = np.float64,
) -> list[Bound]:
    """
    Bollinger Band around an EWMA midpoint.

    The first complete window seeds the midpoint with its simple average.
    A smoothing of 0.0 derives 2 / (lookback + 1).
    """
    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)

    band = [Bound.empty(dtype)] * values.size
    state = None
    for i, period in _windows(values, lookback):
        band[i], state = rolling_bollinger_ema(period, multiplier, state, smoothing, dtype)

    return band


def band_to_arrays(band: list[Bound], dtype: FloatType = np.float64) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Split a band into arrays.

    Returns: (lower, midpoint, upper)
    """
    dtype = resolve_dtype(dtype)
    lower = np.array([b.lower for b in band], dtype=dtype)
    midpoint = np.array([b.midpoint for b in band], dtype=dtype)
    upper = np.array([b.upper for b in band], dtype=dtype)
    return lower, midpoint, upper
