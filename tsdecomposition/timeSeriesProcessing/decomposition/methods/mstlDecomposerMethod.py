"""
MSTL method for time series decomposition.

Multiple Seasonal-Trend decomposition (Bandara et al., 2021): STL is applied
once per seasonal period against a running deseasonalized series, and the
sweep over all periods is repeated a fixed number of times.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import numpy as np

from tsdecomposition.helpers.boxCoxTransformer import BoxCoxTransformer
from tsdecomposition.helpers.exceptions import InvalidArgumentError
from tsdecomposition.helpers.utils import series_index
from tsdecomposition.timeSeriesProcessing.decomposition.configDecomposition import (
    MstlParams,
)
from tsdecomposition.timeSeriesProcessing.decomposition.decompositionResult import (
    MstlResult,
)
from tsdecomposition.timeSeriesProcessing.decomposition.methods.baseDecomposerMethod import (
    BaseDecomposerMethod,
)
from tsdecomposition.timeSeriesProcessing.decomposition.methods.stlDecomposerMethod import (
    STLDecomposerMethod,
)

__version__ = "1.0.0"

# A single period needs only one sweep
SINGLE_PERIOD_ITERATIONS = 1


class MSTLDecomposerMethod(BaseDecomposerMethod):
    """
    MSTL decomposition method for time series with multiple seasonality.

    Periods are processed in ascending order; components are returned in
    the order the caller listed the periods. With lmbda set the series is
    Box-Cox transformed first and every component stays in transformed space.
    """

    def __init__(self, params: Optional[Union[MstlParams, Dict[str, Any]]] = None):
        """
        Initialize MSTL method.

        Args:
            params: MstlParams or a flat dict accepted by MstlParams.from_dict
        """
        if params is None:
            params = MstlParams()
        elif isinstance(params, dict):
            params = MstlParams.from_dict(params)
        elif not isinstance(params, MstlParams):
            raise InvalidArgumentError(
                f"params must be MstlParams or dict, got {type(params).__name__}"
            )
        super().__init__(params)
        self.transformer = BoxCoxTransformer()

    def __str__(self) -> str:
        """Standard string representation for MSTL logging."""
        return (
            f"MSTLDecomposerMethod(v{__version__}, iterations={self.params.iterations}, "
            f"lmbda={self.params.lmbda}, robust={self.params.stl_params.robust})"
        )

    def process(self, data: Any, periods: Any) -> MstlResult:
        """
        Perform MSTL decomposition.

        Args:
            data: Time series (length >= 2 * max(periods))
            periods: Non-empty sequence of seasonal periods (each >= 2)

        Returns:
            MstlResult with one seasonal component per period

        Raises:
            InvalidArgumentError: On invalid series, periods or parameters
        """
        # 1. Fail-fast validation of everything before any smoothing
        values = self.validate_input(data)
        periods = self.validate_periods(values, periods)

        seasonal_lengths = self.params.seasonal_lengths
        if seasonal_lengths is not None and len(seasonal_lengths) != len(periods):
            raise InvalidArgumentError(
                "seasonal_lengths must have the same length as periods"
            )

        if self.params.lmbda is not None:
            values = self.transformer.transform(values, self.params.lmbda)

        # Stable ascending order keeps duplicates in caller order
        order = sorted(range(len(periods)), key=lambda position: periods[position])
        components = []
        for rank, position in enumerate(order):
            stl_params = self.params.component_params(position, rank)
            period = periods[position]
            components.append(
                (position, STLDecomposerMethod(stl_params), stl_params.resolve(period))
            )

        iterations = self.params.iterations
        if len(periods) == 1 and iterations != SINGLE_PERIOD_ITERATIONS:
            logging.info(f"{self} - Single period, iterations reduced to 1")
            iterations = SINGLE_PERIOD_ITERATIONS

        logging.debug(
            f"{self} - Starting MSTL decomposition: length={len(values)}, "
            f"periods={periods}, iterations={iterations}"
        )

        # 2. Algorithm
        try:
            seasonal, trend, deseasonalized = self._iterate(values, components, iterations)
        except Exception as e:
            self.handle_error(e, "MSTL decomposition")
            raise

        remainder = deseasonalized - trend
        self.check_reconstruction(values, *seasonal, trend, remainder)

        logging.debug(f"{self} - MSTL decomposition completed with {len(periods)} periods")

        return MstlResult(
            seasonal=tuple(seasonal),
            trend=trend,
            remainder=remainder,
            periods=tuple(periods),
            lmbda=self.params.lmbda,
            index=series_index(data),
        )

    def _iterate(self, values: np.ndarray, components: List, iterations: int):
        """
        Sweep STL over the periods.

        Returns:
            Tuple (seasonal components in caller order, trend, deseasonalized series)
        """
        n = values.size
        deseasonalized = values.copy()
        seasonal = [np.zeros(n, dtype=np.float64) for _ in components]
        trend = np.zeros(n, dtype=np.float64)

        for iteration in range(iterations):
            for position, method, config in components:
                # Put this period's previous estimate back before refitting it
                deseasonalized += seasonal[position]

                fitted, fitted_trend, _ = method.decompose_values(deseasonalized, config)
                seasonal[position] = fitted
                trend = fitted_trend

                deseasonalized -= fitted

            logging.debug(f"{self} - Iteration {iteration + 1}/{iterations} finished")

        return seasonal, trend, deseasonalized
