"""
Series file loader.

A series file holds one sample per line in ascending time order.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np

from ta_engine.services.indicators.calculations import FloatType, as_series

logger = logging.getLogger(__name__)


def load_series(path: Union[str, Path], dtype: FloatType = np.float64) -> np.ndarray:
    """
    Read a series file into an array.

    Blank lines are skipped. A line that is not a number raises ValueError
    naming the file and line.
    """
    path = Path(path)
    values = []
    skipped = 0

    with path.open(encoding="utf-8") as f:
        for line_no, line in enumerate(f, start=1):
            text = line.strip()
            if not text:
                skipped += 1
                continue
            try:
                values.append(float(text))
            except ValueError:
                raise ValueError(
                    f"Invalid sample on line {line_no} of {path}: {text!r}"
                ) from None

    logger.debug(f"Loaded {len(values)} samples from {path} ({skipped} blank lines skipped)")
    return as_series(values, dtype)
