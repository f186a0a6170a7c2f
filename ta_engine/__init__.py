"""
ta-engine

Technical-analysis volatility indicators (ATR, Bollinger Bands) over numeric
price series, computed either as a static pass over a full series or as
incremental updates that thread their recurrence state through the caller.
"""

from ta_engine.services.indicators.calculations import (
    mean,
    variance,
    stddev,
    rolling_ema,
    ewma_series,
    EmaState,
    ema_start,
    ema_step,
    round_up,
    round_down,
)
from ta_engine.services.indicators.atr import (
    true_range,
    rolling_atr,
    static_atr,
    atr_curve,
    AtrState,
    atr_state_from_series,
    atr_step,
)
from ta_engine.services.indicators.bollinger import (
    Bound,
    bollinger_bound,
    compare_bounds,
    rolling_bollinger_const,
    rolling_bollinger_sma,
    rolling_bollinger_ema,
    static_bollinger_const,
    static_bollinger_sma,
    static_bollinger_ema,
)
from ta_engine.core.exceptions import (
    IndicatorError,
    EmptyInputError,
    InvalidParameterError,
)

__version__ = "0.1.0"

__all__ = [
    "mean",
    "variance",
    "stddev",
    "rolling_ema",
    "ewma_series",
    "EmaState",
    "ema_start",
    "ema_step",
    "round_up",
    "round_down",
    "true_range",
    "rolling_atr",
    "static_atr",
    "atr_curve",
    "AtrState",
    "atr_state_from_series",
    "atr_step",
    "Bound",
    "bollinger_bound",
    "compare_bounds",
    "rolling_bollinger_const",
    "rolling_bollinger_sma",
    "rolling_bollinger_ema",
    "static_bollinger_const",
    "static_bollinger_sma",
    "static_bollinger_ema",
    "IndicatorError",
    "EmptyInputError",
    "InvalidParameterError",
]
