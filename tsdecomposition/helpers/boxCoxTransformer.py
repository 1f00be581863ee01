"""
Box-Cox power transform applied to a series before MSTL.

- lambda = 0: y = ln(x)
- 0 < lambda <= 1: y = (x^lambda - 1) / lambda

Only exponents in [0, 1] and strictly positive series are accepted.
MSTL leaves its components in transformed space; inverse_transform maps
them (or their sum) back to the original scale.
"""

import logging
from typing import Union

import numpy as np
import pandas as pd
from scipy.special import boxcox, inv_boxcox

from tsdecomposition.helpers.exceptions import InvalidArgumentError

__version__ = "1.0.0"

# Admissible lambda range
MIN_LAMBDA = 0.0
MAX_LAMBDA = 1.0

SeriesLike = Union[pd.Series, np.ndarray]


class BoxCoxTransformer:
    """
    Stateless Box-Cox transform for a fixed, caller-chosen exponent.

    Usage:
        transformer = BoxCoxTransformer()
        transformed = transformer.transform(values, 0.5)
        restored = transformer.inverse_transform(transformed, 0.5)
    """

    def __str__(self) -> str:
        return "BoxCoxTransformer()"

    @staticmethod
    def validate_lambda(lambda_value: float) -> float:
        """
        Check that lambda is a finite number in [0, 1].

        Raises:
            InvalidArgumentError: Otherwise
        """
        if isinstance(lambda_value, (bool, np.bool_)) or not isinstance(
            lambda_value, (int, float, np.integer, np.floating)
        ):
            raise InvalidArgumentError(
                f"lambda must be a number, got {type(lambda_value).__name__}"
            )

        lambda_value = float(lambda_value)
        if not (np.isfinite(lambda_value) and MIN_LAMBDA <= lambda_value <= MAX_LAMBDA):
            raise InvalidArgumentError("lambda must be between 0 and 1")

        return lambda_value

    def transform(self, data: SeriesLike, lambda_value: float) -> SeriesLike:
        """
        Forward transform.

        Returns:
            Transformed values; a pd.Series input keeps its index and name

        Raises:
            InvalidArgumentError: If lambda is out of range or any value is <= 0
        """
        lmbda = self.validate_lambda(lambda_value)
        values = self._values(data)

        if values.size == 0 or not np.all(np.isfinite(values)):
            raise InvalidArgumentError("series must be non-empty and finite for the Box-Cox transform")
        if np.any(values <= 0.0):
            raise InvalidArgumentError(
                "series must be strictly positive for the Box-Cox transform"
            )

        transformed = boxcox(values, lmbda)
        logging.debug(f"{self} - Transformed {values.size} values with lambda={lmbda}")

        return self._like(transformed, data)

    def inverse_transform(self, data: SeriesLike, lambda_value: float) -> SeriesLike:
        """Map transformed values back to the original scale."""
        lmbda = self.validate_lambda(lambda_value)
        return self._like(inv_boxcox(self._values(data), lmbda), data)

    @staticmethod
    def _values(data: SeriesLike) -> np.ndarray:
        if isinstance(data, pd.Series):
            data = data.to_numpy()
        return np.asarray(data, dtype=np.float64)

    @staticmethod
    def _like(values: np.ndarray, template: SeriesLike) -> SeriesLike:
        if isinstance(template, pd.Series):
            return pd.Series(values, index=template.index, name=template.name)
        return values
