"""
Input coercion and validation helpers shared by the decomposition modules.
"""

import math
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Sequence

import numpy as np
import pandas as pd

from tsdecomposition.helpers.exceptions import InvalidArgumentError

__version__ = "1.0.0"

# Minimal seasonal period in samples
MIN_PERIOD = 2

# Number of full cycles required per period
MIN_CYCLES = 2


def validate_required_locals(required_params: list, input_params: dict):
    """
    Validation through locals() - the most efficient way

    Usage:
        validate_required_locals(['series', 'period'], locals())
    """
    missing_params = [
        param
        for param in required_params
        if param not in input_params or input_params[param] is None
    ]
    if missing_params:
        raise InvalidArgumentError(f"Required parameters missing: {missing_params}")


def as_float_array(series: Any) -> np.ndarray:
    """
    Convert a caller-supplied series into a fresh float64 array.

    Accepts lists, tuples, numpy arrays (float32/float64/int), pd.Series and
    mappings. Mapping values are ordered by their sorted keys.

    Args:
        series: Time series values

    Returns:
        One-dimensional float64 copy of the values

    Raises:
        InvalidArgumentError: If the series is empty, not one-dimensional,
            not numeric or contains NaN/inf values
    """
    if series is None:
        raise InvalidArgumentError("series must not be None")

    if isinstance(series, pd.Series):
        raw = series.to_numpy()
    elif isinstance(series, Mapping):
        raw = [series[key] for key in sorted(series)]
    else:
        raw = series

    try:
        values = np.array(raw, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"series must contain only numbers: {e}") from e

    if values.ndim != 1:
        raise InvalidArgumentError(
            f"series must be one-dimensional, got {values.ndim} dimensions"
        )

    if values.size == 0:
        raise InvalidArgumentError("series must not be empty")

    if not np.all(np.isfinite(values)):
        raise InvalidArgumentError("series must not contain NaN or infinite values")

    return values


def series_index(series: Any) -> Optional[pd.Index]:
    """Return the index of a pd.Series input, None for anything else."""
    if isinstance(series, pd.Series):
        return series.index
    return None


def validate_period(period: Any, series_length: int, name: str = "period") -> int:
    """
    Validate a seasonal period against the series length.

    Raises:
        InvalidArgumentError: If the period is not an integer >= 2 or the
            series holds fewer than two full periods
    """
    if isinstance(period, (bool, np.bool_)) or not isinstance(
        period, (int, np.integer)
    ):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(period).__name__}: {period}"
        )

    period = int(period)
    if period < MIN_PERIOD:
        raise InvalidArgumentError(f"{name} must be greater than 1")

    if series_length < MIN_CYCLES * period:
        raise InvalidArgumentError("series has less than two periods")

    return period


def validate_periods(periods: Any, series_length: int) -> List[int]:
    """
    Validate an ordered collection of seasonal periods.

    Raises:
        InvalidArgumentError: If the collection is empty, any period is < 2
            or the series is shorter than two of any listed period
    """
    if periods is None or isinstance(periods, (str, bytes, Mapping)):
        raise InvalidArgumentError(f"periods must be a sequence of integers, got {periods}")

    try:
        periods = list(periods)
    except TypeError as e:
        raise InvalidArgumentError(
            f"periods must be a sequence of integers, got {periods}"
        ) from e

    if not periods:
        raise InvalidArgumentError("periods must not be empty")

    # Check all values first so that a bad period is reported before a short series
    for i, period in enumerate(periods):
        if isinstance(period, (bool, np.bool_)) or not isinstance(
            period, (int, np.integer)
        ):
            raise InvalidArgumentError(
                f"period at index {i} must be an integer, got {type(period).__name__}: {period}"
            )
        if period < MIN_PERIOD:
            raise InvalidArgumentError("periods must be at least 2")

    return [validate_period(period, series_length) for period in periods]


def validate_same_length(first: Sequence, second: Sequence, names: Iterable[str]):
    """Raise InvalidArgumentError unless both sequences are non-empty and equal in length."""
    first_name, second_name = names
    if len(first) == 0 or len(second) == 0:
        raise InvalidArgumentError(f"{first_name} and {second_name} must not be empty")
    if len(first) != len(second):
        raise InvalidArgumentError(
            f"{first_name} and {second_name} must have the same length, "
            f"got {len(first)} and {len(second)}"
        )


def make_odd(value: int) -> int:
    """Round an integer up to the next odd number."""
    return value if value % 2 == 1 else value + 1


def default_jump(window: int) -> int:
    """Default subsampling stride: a tenth of the window, rounded up."""
    return int(math.ceil(window / 10.0))
