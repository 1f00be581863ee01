"""
STL method for time series decomposition.

Seasonal-Trend decomposition using Loess (Cleveland et al., 1990):
an inner loop alternates cycle-subseries smoothing, low-pass filtering and
trend smoothing; an outer loop recomputes robustness weights from the
remainder between passes. Iteration counts are fixed, there is no
convergence-based early exit.
"""

import logging
from typing import Any, Dict, Optional, Union

import numpy as np
from numba import njit

from tsdecomposition.helpers.exceptions import InvalidArgumentError
from tsdecomposition.helpers.utils import series_index
from tsdecomposition.timeSeriesProcessing.decomposition.configDecomposition import (
    ResolvedStlConfig,
    StlParams,
)
from tsdecomposition.timeSeriesProcessing.decomposition.decompositionResult import (
    StlResult,
)
from tsdecomposition.timeSeriesProcessing.decomposition.methods.baseDecomposerMethod import (
    BaseDecomposerMethod,
)
from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms.filters import (
    cycle_subseries_kernel,
    low_pass_kernel,
)
from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms.loess import loess_kernel
from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms.robustness import (
    robustness_weights,
)

__version__ = "1.0.0"


@njit
def stl_inner_loop(
    y, n, period,
    seasonal_length, trend_length, low_pass_length,
    seasonal_degree, trend_degree, low_pass_degree,
    seasonal_jump, trend_jump, low_pass_jump,
    inner_loops, use_weights, rweights,
    season, trend,
    detrended, cycle, low_pass, sub_values, sub_smoothed, sub_weights, work1, work2,
):
    """Run inner_loops passes, updating season and trend in place."""
    for _ in range(inner_loops):
        for i in range(n):
            detrended[i] = y[i] - trend[i]

        cycle_subseries_kernel(
            detrended, n, period, seasonal_length, seasonal_degree, seasonal_jump,
            use_weights, rweights, cycle, sub_values, sub_smoothed, sub_weights, work1,
        )
        low_pass_kernel(cycle, n + 2 * period, period, low_pass, work1)

        # detrended is free again and receives the smoothed low-pass series
        loess_kernel(
            low_pass, n, low_pass_length, low_pass_degree, low_pass_jump,
            False, rweights, detrended, work2,
        )
        for i in range(n):
            season[i] = cycle[period + i] - detrended[i]

        for i in range(n):
            detrended[i] = y[i] - season[i]
        loess_kernel(
            detrended, n, trend_length, trend_degree, trend_jump,
            use_weights, rweights, trend, work2,
        )


class STLDecomposerMethod(BaseDecomposerMethod):
    """
    STL decomposition for a single seasonal period.

    Usage:
        method = STLDecomposerMethod(StlParams(robust=True))
        result = method.process(series, period=12)
    """

    def __init__(self, params: Optional[Union[StlParams, Dict[str, Any]]] = None):
        """
        Initialize STL method.

        Args:
            params: StlParams or a plain dict accepted by StlParams.from_dict
        """
        if params is None:
            params = StlParams()
        elif isinstance(params, dict):
            params = StlParams.from_dict(params)
        elif not isinstance(params, StlParams):
            raise InvalidArgumentError(
                f"params must be StlParams or dict, got {type(params).__name__}"
            )
        super().__init__(params)

    def __str__(self) -> str:
        """Standard string representation for STL logging."""
        return f"STLDecomposerMethod(v{__version__}, robust={self.params.robust})"

    def process(self, data: Any, period: Any) -> StlResult:
        """
        Perform STL decomposition.

        Args:
            data: Time series (length >= 2 * period)
            period: Seasonal period (>= 2)

        Returns:
            StlResult with seasonal, trend, remainder and robustness weights

        Raises:
            InvalidArgumentError: On invalid series, period or parameters
        """
        # 1. Fail-fast validation, nothing is computed before this passes
        values = self.validate_input(data)
        period = self.validate_period(values, period)
        config = self.params.resolve(period)

        logging.debug(
            f"{self} - Starting STL decomposition: length={len(values)}, "
            f"period={period}, config={config.to_dict()}"
        )

        # 2. Algorithm
        try:
            seasonal, trend, weights = self.decompose_values(values, config)
        except Exception as e:
            self.handle_error(e, "STL decomposition")
            raise

        remainder = values - seasonal - trend
        self.check_reconstruction(values, seasonal, trend, remainder)

        logging.debug(
            f"{self} - STL decomposition completed: passes={1 + config.outer_loops}"
        )

        return StlResult(
            seasonal=seasonal,
            trend=trend,
            remainder=remainder,
            weights=weights,
            period=period,
            index=series_index(data),
        )

    def decompose_values(self, values: np.ndarray, config: ResolvedStlConfig):
        """
        Run the STL loops on an already validated float64 series.

        Returns:
            Tuple (seasonal, trend, weights)
        """
        n = values.size
        period = config.period

        seasonal = np.zeros(n, dtype=np.float64)
        trend = np.zeros(n, dtype=np.float64)
        weights = np.ones(n, dtype=np.float64)

        # Scratch buffers, private to this call
        extended = n + 2 * period
        detrended = np.empty(n, dtype=np.float64)
        cycle = np.empty(extended, dtype=np.float64)
        low_pass = np.empty(extended, dtype=np.float64)
        sub_values = np.empty(n, dtype=np.float64)
        sub_smoothed = np.empty(n + 2, dtype=np.float64)
        sub_weights = np.empty(n, dtype=np.float64)
        work1 = np.empty(extended, dtype=np.float64)
        work2 = np.empty(n, dtype=np.float64)

        use_weights = False
        for outer in range(1 + config.outer_loops):
            if outer > 0:
                weights = robustness_weights(values - (trend + seasonal))
                use_weights = True

            stl_inner_loop(
                values, n, period,
                config.seasonal_length, config.trend_length, config.low_pass_length,
                config.seasonal_degree, config.trend_degree, config.low_pass_degree,
                config.seasonal_jump, config.trend_jump, config.low_pass_jump,
                config.inner_loops, use_weights, weights,
                seasonal, trend,
                detrended, cycle, low_pass, sub_values, sub_smoothed, sub_weights, work1, work2,
            )

        return seasonal, trend, weights
