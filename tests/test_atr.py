"""Tests for true range, Wilder smoothing and the ATR drivers."""

import numpy as np
import pytest

from ta_engine.core.exceptions import EmptyInputError, InvalidParameterError
from ta_engine.services.indicators.atr import (
    AtrState,
    atr_curve,
    atr_state_from_series,
    atr_step,
    period_true_ranges,
    rolling_atr,
    static_atr,
    true_range,
)


@pytest.mark.parametrize("c", [0.0, 5.0, 123.25])
def test_true_range_constant_period(c):
    assert true_range([c, c, c, c], 0) == 0.0


def test_true_range_zero_period_with_close():
    assert true_range([0, 0, 0, 0], 10.0) == 0.0


def test_true_range():
    s = [1, 0, 4, 2, 7, 9, 4]
    assert true_range(s, 0) == 8.0
    assert true_range(s, None) == 8.0
    assert true_range(s, 11.0) == 10.0


def test_true_range_float32():
    s = [1, 4, 0, 2, 7, 9, 4]
    assert true_range(s, 0, dtype=np.float32) == np.float32(8.0)
    assert true_range(s, 11.0, dtype=np.float32) == np.float32(10.0)
    assert isinstance(true_range(s, 11.0, dtype=np.float32), np.float32)


def test_true_range_close_inside_period():
    assert true_range([3, 8, 5], 6.0) == 5.0


def test_true_range_ignores_non_positive_lows():
    assert true_range([-5, 3, 6]) == 3.0


def test_true_range_degenerate_periods():
    assert true_range([]) == 0.0
    assert true_range([-1, -2, -3]) == 0.0
    assert true_range([-1, -2, -3], 4.0) == 0.0


def test_rolling_atr():
    assert rolling_atr(8.0, 3.0, 0) == 0.0
    assert rolling_atr(8.0, 3.0, 5) == 7.0
    assert rolling_atr(8.0, 3.0, 5, dtype=np.float32) == np.float32(7.0)
    assert rolling_atr(8.0, 3.0, 0, dtype=np.float32) == np.float32(0.0)


def test_rolling_atr_negative_periods():
    with pytest.raises(InvalidParameterError):
        rolling_atr(8.0, 3.0, -1)


def test_period_true_ranges(prices):
    np.testing.assert_allclose(period_true_ranges(prices, 5), [8.0, 5.0, 7.0, 13.0])
    # trailing partial period is dropped
    np.testing.assert_allclose(period_true_ranges(prices[:18], 5), [8.0, 5.0, 7.0])


def test_static_atr_degenerate_parameters():
    s = [1, 4, 2, 7, 9, 4]
    assert static_atr(s, 0, 10) == 0.0
    assert static_atr(s, 10, 0) == 0.0
    # no complete period
    assert static_atr(s, 10, 10) == 0.0
    assert static_atr([], 3, 5) == 0.0


def test_static_atr_single_period():
    assert static_atr([1, 4, 2, 7, 9, 4], 3, 5) == 8.0


@pytest.mark.parametrize("dtype", [np.float32, np.float64])
def test_static_atr(prices, dtype):
    result = static_atr(prices, 3, 5, dtype=dtype)
    assert result == pytest.approx(8.777777777777779, rel=1e-6)
    assert isinstance(result, dtype)


def test_static_atr_falls_back_to_average(prices):
    # four complete periods, n = 4: no Wilder smoothing
    assert static_atr(prices, 4, 5) == pytest.approx((8 + 5 + 7 + 13) / 4)
    assert static_atr(prices, 9, 5) == pytest.approx((8 + 5 + 7 + 13) / 4)


def test_atr_curve(prices):
    curve = atr_curve(prices, 3, 5)
    np.testing.assert_allclose(curve, [0.0, 0.0, 20 / 3, 79 / 9])
    assert curve[-1] == static_atr(prices, 3, 5)


def test_atr_curve_all_warm_up(prices):
    np.testing.assert_allclose(atr_curve(prices, 6, 5), [0.0, 0.0, 0.0, 0.0])


def test_atr_curve_rejects_bad_parameters(prices):
    with pytest.raises(InvalidParameterError):
        atr_curve(prices, 0, 5)
    with pytest.raises(InvalidParameterError):
        atr_curve(prices, 3, 0)


def test_atr_state_from_series(prices):
    state = atr_state_from_series(prices[:15], 3, 5)
    assert isinstance(state, AtrState)
    assert state.value == pytest.approx(20 / 3)
    assert state.periods == 3
    assert state.last_close == 2.0


def test_atr_state_ignores_partial_period(prices):
    assert atr_state_from_series(prices[:17], 3, 5) == atr_state_from_series(prices[:15], 3, 5)


def test_atr_step_matches_static(prices):
    state = atr_state_from_series(prices[:15], 3, 5)
    state = atr_step(state, prices[15:20])

    assert state.value == pytest.approx(static_atr(prices, 3, 5))
    assert state.last_close == 15.0


def test_atr_step_over_random_walk(random_walk):
    n, size = 4, 6
    state = atr_state_from_series(random_walk[: n * size], n, size)
    curve = atr_curve(random_walk, n, size)

    for p in range(n, len(curve)):
        state = atr_step(state, random_walk[p * size : (p + 1) * size])
        assert state.value == pytest.approx(curve[p])


def test_atr_state_errors(prices):
    with pytest.raises(EmptyInputError):
        atr_state_from_series(prices[:4], 3, 5)
    with pytest.raises(InvalidParameterError):
        atr_state_from_series(prices, 0, 5)

    state = atr_state_from_series(prices, 3, 5)
    with pytest.raises(EmptyInputError):
        atr_step(state, [])


def test_atr_step_requires_complete_period(prices):
    state = atr_state_from_series(prices[:15], 3, 5)
    assert state.period_size == 5

    with pytest.raises(InvalidParameterError):
        atr_step(state, prices[15:17])
    with pytest.raises(InvalidParameterError):
        atr_step(state, prices[13:20])

    # the rejected calls leave the state usable
    assert atr_step(state, prices[15:20]).value == pytest.approx(static_atr(prices, 3, 5))
