"""
Statistical Primitives and EWMA Recurrence

Pure NumPy implementations shared by every indicator.
All math is deterministic; every function takes a `dtype` keyword
(numpy.float32 or numpy.float64) and carries out its arithmetic in that width.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Sequence, Union

import numpy as np

from ta_engine.core.exceptions import (
    ERR_SMOOTHING_RANGE,
    EmptyInputError,
    InvalidParameterError,
)

logger = logging.getLogger(__name__)

FloatType = Union[type[np.float32], type[np.float64]]
SeriesLike = Union[Sequence[float], np.ndarray]

DTYPES: dict[str, FloatType] = {
    "float32": np.float32,
    "float64": np.float64,
}


# =============================================================================
# PRECISION
# =============================================================================


def resolve_dtype(dtype: Union[str, FloatType]) -> FloatType:
    """Map a dtype name or numpy type onto numpy.float32 / numpy.float64."""
    if isinstance(dtype, str):
        try:
            return DTYPES[dtype.lower()]
        except KeyError:
            raise InvalidParameterError(
                f"Unsupported dtype: {dtype}", {"supported": list(DTYPES)}
            ) from None

    try:
        scalar_type = np.dtype(dtype).type
    except TypeError:
        raise InvalidParameterError(f"Unsupported dtype: {dtype!r}") from None

    if scalar_type not in (np.float32, np.float64):
        raise InvalidParameterError(
            f"Unsupported dtype: {scalar_type.__name__}", {"supported": list(DTYPES)}
        )
    return scalar_type


def as_series(data: SeriesLike, dtype: FloatType = np.float64) -> np.ndarray:
    """Convert a sequence of samples into a 1-D array of the given width."""
    values = np.asarray(data, dtype=resolve_dtype(dtype))
    if values.ndim != 1:
        raise InvalidParameterError(
            f"Series must be one-dimensional, got shape {values.shape}"
        )
    return values


# =============================================================================
# STATISTICS
# =============================================================================


def mean(xs: SeriesLike, dtype: FloatType = np.float64):
    """Arithmetic mean."""
    dtype = resolve_dtype(dtype)
    values = as_series(xs, dtype)
    if values.size == 0:
        raise EmptyInputError()

    return values.sum(dtype=dtype) / dtype(values.size)


def variance(xs: SeriesLike, dtype: FloatType = np.float64):
    """Population variance (divides by n, never n - 1)."""
    dtype = resolve_dtype(dtype)
    values = as_series(xs, dtype)
    if values.size == 0:
        raise EmptyInputError()

    diffs = values - mean(values, dtype)
    return (diffs * diffs).sum(dtype=dtype) / dtype(values.size)


def stddev(xs: SeriesLike, dtype: FloatType = np.float64):
    """Population standard deviation, 0 when the root is not a number."""
    dtype = resolve_dtype(dtype)
    with np.errstate(invalid="ignore"):
        res = np.sqrt(variance(xs, dtype))

    if np.isnan(res):
        return dtype(0.0)
    return dtype(res)


# =============================================================================
# EXPONENTIALLY WEIGHTED MOVING AVERAGE
# =============================================================================


def default_smoothing(lookback: int, dtype: FloatType = np.float64):
    """Standard EWMA smoothing factor 2 / (lookback + 1)."""
    dtype = resolve_dtype(dtype)
    return dtype(2.0) / dtype(lookback + 1)


def resolve_smoothing(smoothing: float, lookback: int, dtype: FloatType = np.float64):
    """
    Return the smoothing factor to use for a lookback.

    0 selects the default; anything else must lie strictly inside (0, 1).
    """
    dtype = resolve_dtype(dtype)
    if smoothing == 0:
        return default_smoothing(lookback, dtype)
    if not 0.0 < smoothing < 1.0:
        raise InvalidParameterError(ERR_SMOOTHING_RANGE, {"smoothing": smoothing})
    return dtype(smoothing)


def rolling_ema(value: float, last: float, smoothing: float, dtype: FloatType = np.float64):
    """
    Next EWMA value in a series.

    Assumes `last` is the correct prior EWMA. Constraint: 0 < smoothing < 1.
    """
    dtype = resolve_dtype(dtype)
    y = dtype(smoothing)
    return dtype(value) * y + (dtype(1.0) - y) * dtype(last)


def ewma_series(
    series: SeriesLike,
    smoothing: float = 0.0,
    lookback: int = 1,
    dtype: FloatType = np.float64,
) -> np.ndarray:
    """
    Exponentially Weighted Moving Average of a series, aligned to the input.

    Index lookback-1 holds the simple average of the first `lookback`
    samples; earlier indices hold 0. A lookback longer than the series is
    clamped to the series length.
    """
    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)
    if values.size == 0:
        raise EmptyInputError()
    if lookback < 1:
        raise InvalidParameterError(
            f"Lookback must be at least 1, got {lookback}", {"lookback": lookback}
        )

    size = values.size
    if lookback > size:
        logger.debug(f"Lookback {lookback} exceeds series length {size}, using full series")
        lookback = size

    y = resolve_smoothing(smoothing, lookback, dtype)

    ewmas = np.zeros(size, dtype=dtype)
    last = mean(values[:lookback], dtype)
    ewmas[lookback - 1] = last

    for i in range(lookback, size):
        last = rolling_ema(values[i], last, y, dtype)
        ewmas[i] = last

    return ewmas


@dataclass(frozen=True)
class EmaState:
    """Last EWMA value and the smoothing factor it was built with."""

    value: float
    smoothing: float
    dtype: FloatType = np.float64


def ema_start(window: SeriesLike, smoothing: float = 0.0, dtype: FloatType = np.float64) -> EmaState:
    """Seed an EWMA recurrence with the simple average of its first window."""
    dtype = resolve_dtype(dtype)
    values = as_series(window, dtype)
    if values.size == 0:
        raise EmptyInputError()

    return EmaState(
        value=mean(values, dtype),
        smoothing=resolve_smoothing(smoothing, values.size, dtype),
        dtype=dtype,
    )


def ema_step(state: EmaState, value: float) -> EmaState:
    """Advance an EWMA recurrence by one observation."""
    return replace(
        state, value=rolling_ema(value, state.value, state.smoothing, state.dtype)
    )


# =============================================================================
# ROUNDING
# =============================================================================


def round_up(x: float, n: int, dtype: FloatType = np.float64):
    """Round up to the nearest nth decimal place."""
    factor = math.pow(10, n)
    return resolve_dtype(dtype)(math.ceil(float(x) * factor) / factor)


def round_down(x: float, n: int, dtype: FloatType = np.float64):
    """Round down to the nearest nth decimal place."""
    factor = math.pow(10, n)
    return resolve_dtype(dtype)(math.floor(float(x) * factor) / factor)
