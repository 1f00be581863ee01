"""
Period validation and the reconstruction check shared by STL and MSTL.
"""

import logging
from typing import Any, List

import numpy as np

from tsdecomposition.helpers.utils import validate_period, validate_periods
from tsdecomposition.timeSeriesProcessing.baseModule.baseMethod import (
    BaseTimeSeriesMethod,
)

__version__ = "1.0.0"

# Relative tolerance for series == sum of components
RECONSTRUCTION_TOLERANCE = 1e-4


class BaseDecomposerMethod(BaseTimeSeriesMethod):
    """Seasonal-trend decomposer: series == sum of seasonal components + trend + remainder."""

    def validate_period(self, values: np.ndarray, period: Any) -> int:
        """Validate one period against the prepared series."""
        return validate_period(period, len(values))

    def validate_periods(self, values: np.ndarray, periods: Any) -> List[int]:
        """Validate an ordered collection of periods against the prepared series."""
        return validate_periods(periods, len(values))

    def check_reconstruction(self, original: np.ndarray, *components: np.ndarray) -> float:
        """
        Log a warning when the components do not add back up to the series.

        Returns:
            Maximum absolute reconstruction error
        """
        reconstructed = np.sum(np.vstack(components), axis=0)
        error = float(np.max(np.abs(original - reconstructed)))
        scale = max(1.0, float(np.max(np.abs(original))))

        if error > RECONSTRUCTION_TOLERANCE * scale:
            logging.warning(
                f"{self} - High reconstruction error: {error:.3e} "
                f"(tolerance {RECONSTRUCTION_TOLERANCE * scale:.3e})"
            )

        return error
