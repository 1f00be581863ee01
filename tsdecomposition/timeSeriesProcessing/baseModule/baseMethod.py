"""
Shared base of the STL and MSTL decomposer methods.

BaseTimeSeriesMethod holds the method parameters, turns the caller's series
into a float64 array and provides the logging prefix used by every method.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from tsdecomposition.helpers.utils import as_float_array

__version__ = "1.0.0"


class BaseTimeSeriesMethod(ABC):
    """
    Base class for decomposition methods.

    Validation runs before any computation and every failure is raised,
    so a method never returns a partial result.
    """

    def __init__(self, params: Any):
        """
        Args:
            params: Immutable, already validated method parameters
        """
        self.params = params
        self.name = self.__class__.__name__

    def __str__(self) -> str:
        return f"{self.name}(params={self.params})"

    @abstractmethod
    def process(self, data: Any, *args: Any) -> Any:
        """
        Decompose the series.

        Args:
            data: Series values (list, tuple, ndarray, pd.Series or mapping)

        Returns:
            Result object of the concrete method
        """
        pass

    def validate_input(self, data: Any) -> np.ndarray:
        """
        Coerce the series.

        Returns:
            Float64 copy of the series; the caller's data is never modified

        Raises:
            InvalidArgumentError: If the series is empty, not one-dimensional,
                not numeric or non-finite
        """
        return as_float_array(data)

    def handle_error(self, error: Exception, operation: str) -> None:
        """Log an unexpected failure with its traceback; the caller re-raises."""
        logging.error(f"{self} - Error in {operation}: {error}", exc_info=True)
