"""
Calculation errors raised by the indicator engine.

Genuinely invalid input (empty series, bad parameters) fails loudly.
Well-defined degeneracies such as the variance of a single sample, or the
documented zero results of the ATR functions, are not errors.
"""

ERR_EMPTY_LIST = "List cannot be empty."
ERR_SMOOTHING_RANGE = (
    "Custom defined smoothing factor must be less than 1 and greater than 0."
)


class IndicatorError(ValueError):
    """Base exception for indicator calculation errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class EmptyInputError(IndicatorError):
    """An empty sequence was given where at least one sample is required."""

    def __init__(self, message: str = ERR_EMPTY_LIST, details: dict = None):
        super().__init__(message, details)


class InvalidParameterError(IndicatorError):
    """A scalar parameter (lookback, smoothing, dtype) is out of range."""
    pass
