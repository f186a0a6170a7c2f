"""
Pytest configuration and shared fixtures.

Provides price series and a service configured independently of any .env file.
"""

from pathlib import Path

import numpy as np
import pytest

from ta_engine.core.config import Settings
from ta_engine.services.indicators.service import IndicatorService

DATA_DIR = Path(__file__).parent / "data"

PRICES = [1, 4, 2, 7, 9, 4, 5, 6, 7, 9, 4, 7, 6, 9, 2, 3, 10, 12, 11, 15]


@pytest.fixture
def prices() -> list[float]:
    """Twenty samples, four complete periods of five."""
    return [float(p) for p in PRICES]


@pytest.fixture
def random_walk() -> np.ndarray:
    """Positive random walk for property style checks."""
    rng = np.random.default_rng(7)
    return 100.0 + np.cumsum(rng.normal(0.0, 1.0, size=120))


@pytest.fixture
def series_file() -> Path:
    return DATA_DIR / "atr_series.txt"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        bollinger_lookback=5,
        bollinger_multiplier=2.0,
        atr_periods=3,
        atr_period_size=5,
    )


@pytest.fixture
def service(settings) -> IndicatorService:
    return IndicatorService(settings)
