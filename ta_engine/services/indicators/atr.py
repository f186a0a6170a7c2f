"""
Average True Range

Average True Range (ATR), developed by J. Welles Wilder Jr., measures price
volatility. A series is cut into consecutive periods of a fixed size; each
complete period yields one true range, and the ATR smooths those true ranges
with Wilder's recurrence ((n - 1) * last + current) / n.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ta_engine.core.exceptions import EmptyInputError, InvalidParameterError
from ta_engine.services.indicators.calculations import (
    FloatType,
    SeriesLike,
    as_series,
    mean,
    resolve_dtype,
)

logger = logging.getLogger(__name__)


def _no_close(last: Optional[float]) -> bool:
    return last is None or last == 0


# =============================================================================
# TRUE RANGE
# =============================================================================


def true_range(period: SeriesLike, last: Optional[float] = None, dtype: FloatType = np.float64):
    """
    Wilder true range of one period: max(high, last) - min(low, last).

    `last` is the previous period's close; None or 0 means there is none and
    the result is high - low. Non-positive samples never count as the low.
    Degenerate periods (empty, or nothing positive) give 0.
    """
    dtype = resolve_dtype(dtype)
    values = as_series(period, dtype)
    if values.size == 0:
        return dtype(0.0)

    high = max(np.max(values), dtype(0.0))

    positives = values[values > 0]
    low = np.min(positives) if positives.size > 0 else None

    if _no_close(last):
        if low is None:
            return dtype(0.0)
        tr = high - low
    else:
        close = dtype(last)
        floor = close if low is None else min(low, close)
        tr = max(high, close) - floor

    if tr < 0:
        return dtype(0.0)
    return dtype(tr)


def period_true_ranges(series: SeriesLike, period_size: int, dtype: FloatType = np.float64) -> np.ndarray:
    """
    True range of every complete period in a series.

    A trailing partial period is dropped. Each period uses the last sample
    of the period before it as its previous close.
    """
    if period_size < 1:
        raise InvalidParameterError(
            f"Period size must be at least 1, got {period_size}",
            {"period_size": period_size},
        )

    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)

    count = values.size // period_size
    trs = np.zeros(count, dtype=dtype)

    for p in range(count):
        start = p * period_size
        last = values[start - 1] if start > 0 else None
        trs[p] = true_range(values[start : start + period_size], last, dtype)

    return trs


# =============================================================================
# WILDER SMOOTHING
# =============================================================================


def rolling_atr(last_atr: float, cur_tr: float, n: int, dtype: FloatType = np.float64):
    """
    Next ATR from the prior ATR, the current true range and the number of
    periods n. Returns 0 when n is 0.
    """
    dtype = resolve_dtype(dtype)
    if n == 0:
        return dtype(0.0)
    if n < 0:
        raise InvalidParameterError(f"Number of periods cannot be negative: {n}", {"n": n})

    return (dtype(last_atr) * dtype(n - 1) + dtype(cur_tr)) / dtype(n)


def _smooth(trs: np.ndarray, n: int, dtype: FloatType):
    # Warm-up ATR is the simple average of the first n true ranges
    atr = mean(trs[:n], dtype)
    for tr in trs[n:]:
        atr = rolling_atr(atr, tr, n, dtype)
    return atr


def static_atr(series: SeriesLike, n: int, period_size: int, dtype: FloatType = np.float64):
    """
    ATR of a full series for n periods of `period_size` samples each.

    The period size is in the same unit as the series indices: with daily
    samples, period_size=7 makes each period a week. When the series has no
    more than n complete periods, the simple average of the available true
    ranges is returned as an approximation. Returns 0 when n or period_size
    is 0, or when there is no complete period.
    """
    dtype = resolve_dtype(dtype)
    if n == 0 or period_size == 0:
        return dtype(0.0)
    if n < 0:
        raise InvalidParameterError(f"Number of periods cannot be negative: {n}", {"n": n})

    trs = period_true_ranges(series, period_size, dtype)
    if trs.size == 0:
        return dtype(0.0)

    if n >= trs.size:
        logger.debug(
            f"Only {trs.size} complete periods for ATR({n}), using simple average"
        )
        return mean(trs, dtype)

    return _smooth(trs, n, dtype)


def atr_curve(series: SeriesLike, n: int, period_size: int, dtype: FloatType = np.float64) -> np.ndarray:
    """
    ATR after every complete period, aligned to the period true ranges.

    Entries before period n-1 are 0 (warm-up); entry n-1 is the average of the
    first n true ranges and later entries apply Wilder smoothing.
    """
    if n < 1:
        raise InvalidParameterError(f"Number of periods must be at least 1, got {n}", {"n": n})

    dtype = resolve_dtype(dtype)
    trs = period_true_ranges(series, period_size, dtype)

    curve = np.zeros(trs.size, dtype=dtype)
    if trs.size < n:
        logger.debug(f"Only {trs.size} complete periods for ATR({n}), curve is all warm-up")
        return curve

    atr = mean(trs[:n], dtype)
    curve[n - 1] = atr
    for p in range(n, trs.size):
        atr = rolling_atr(atr, trs[p], n, dtype)
        curve[p] = atr

    return curve


# =============================================================================
# ROLLING STATE
# =============================================================================


@dataclass(frozen=True)
class AtrState:
    """
    Recurrence state for a live ATR.

    value: ATR after the last consumed period
    periods: number of periods n used for smoothing
    period_size: samples in each period
    last_close: last sample of the last consumed period
    """

    value: float
    periods: int
    period_size: int
    last_close: Optional[float]
    dtype: FloatType = np.float64


def atr_state_from_series(
    series: SeriesLike, n: int, period_size: int, dtype: FloatType = np.float64
) -> AtrState:
    """
    Build ATR state from history, following the warm-up rules of static_atr.

    Samples after the last complete period are not consumed; the next call to
    atr_step should be given the period that starts right after it.
    """
    if n < 1:
        raise InvalidParameterError(f"Number of periods must be at least 1, got {n}", {"n": n})

    dtype = resolve_dtype(dtype)
    values = as_series(series, dtype)
    trs = period_true_ranges(values, period_size, dtype)
    if trs.size == 0:
        raise EmptyInputError(
            "Series must contain at least one complete period.",
            {"length": int(values.size), "period_size": period_size},
        )

    value = mean(trs, dtype) if n >= trs.size else _smooth(trs, n, dtype)

    return AtrState(
        value=value,
        periods=n,
        period_size=period_size,
        last_close=values[trs.size * period_size - 1],
        dtype=dtype,
    )


def atr_step(state: AtrState, period: SeriesLike) -> AtrState:
    """
    Consume one new complete period and return the updated ATR state.

    The period must hold exactly state.period_size samples.
    """
    values = as_series(period, state.dtype)
    if values.size == 0:
        raise EmptyInputError()
    if values.size != state.period_size:
        raise InvalidParameterError(
            f"Period must hold {state.period_size} samples, got {values.size}",
            {"period_size": state.period_size, "length": int(values.size)},
        )

    tr = true_range(values, state.last_close, state.dtype)
    return AtrState(
        value=rolling_atr(state.value, tr, state.periods, state.dtype),
        periods=state.periods,
        period_size=state.period_size,
        last_close=values[-1],
        dtype=state.dtype,
    )
