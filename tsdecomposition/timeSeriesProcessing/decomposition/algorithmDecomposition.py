"""
Decomposition entry points.

fit_single: STL for one seasonal period.
fit_multi: MSTL for several seasonal periods.
seasonal_strength / trend_strength: strength metrics on computed components.
decompose: dispatches to fit_single for an integer period and to fit_multi
for a sequence of periods, accepting flat keyword options.
"""

import logging
from typing import Any, ClassVar, Dict, Optional, Union

import numpy as np

from tsdecomposition.helpers.configs import DecompositionMethodConfig
from tsdecomposition.helpers.evaluation.qualityEvaluator import (
    seasonal_strength,
    trend_strength,
)
from tsdecomposition.helpers.exceptions import InvalidArgumentError
from tsdecomposition.timeSeriesProcessing.decomposition.configDecomposition import (
    MstlParams,
    StlParams,
)
from tsdecomposition.timeSeriesProcessing.decomposition.decompositionResult import (
    MstlResult,
    StlResult,
)
from tsdecomposition.timeSeriesProcessing.decomposition.methods.mstlDecomposerMethod import (
    MSTLDecomposerMethod,
)
from tsdecomposition.timeSeriesProcessing.decomposition.methods.stlDecomposerMethod import (
    STLDecomposerMethod,
)

__version__ = "1.0.0"

__all__ = [
    "DecompositionAlgorithm",
    "decompose",
    "fit_multi",
    "fit_single",
    "seasonal_strength",
    "trend_strength",
]


class DecompositionAlgorithm:
    """
    Selects the decomposition method from the shape of the period argument.

    An integer period runs STL, a sequence of periods runs MSTL.
    """

    AVAILABLE_METHODS: ClassVar[Dict[DecompositionMethodConfig, type]] = {
        DecompositionMethodConfig.STL: STLDecomposerMethod,
        DecompositionMethodConfig.MSTL: MSTLDecomposerMethod,
    }

    def __init__(self, options: Optional[Dict[str, Any]] = None):
        """
        Initialize with flat options (STL fields plus iterations, lambda/lmbda
        and seasonal_lengths).
        """
        self.options = dict(options or {})
        self._class_name = self.__class__.__name__

    def __str__(self) -> str:
        return f"{self._class_name}(options={sorted(self.options)})"

    @staticmethod
    def select_method(period: Any) -> DecompositionMethodConfig:
        if isinstance(period, (int, np.integer)) and not isinstance(period, (bool, np.bool_)):
            return DecompositionMethodConfig.STL
        return DecompositionMethodConfig.MSTL

    def build_params(self, method: DecompositionMethodConfig) -> Union[StlParams, MstlParams]:
        if method == DecompositionMethodConfig.STL:
            mstl_only = sorted(
                key for key in ("iterations", "lambda", "lmbda", "seasonal_lengths")
                if self.options.get(key) is not None
            )
            if mstl_only:
                raise InvalidArgumentError(
                    f"Options {mstl_only} require a list of periods"
                )
            return StlParams.from_dict(self.options)
        return MstlParams.from_dict(self.options)

    def process(self, data: Any, period: Any) -> Union[StlResult, MstlResult]:
        method = self.select_method(period)
        params = self.build_params(method)
        logging.debug(f"{self} - Selected {method.value}")
        return self.AVAILABLE_METHODS[method](params).process(data, period)


def fit_single(series: Any, period: int, params: Optional[StlParams] = None) -> StlResult:
    """
    Decompose a series with one seasonal period (STL).

    Args:
        series: Equally spaced values, length >= 2 * period
        period: Seasonal period, >= 2
        params: StlParams (or dict); defaults derived from the period

    Raises:
        InvalidArgumentError: If period < 2, the series is shorter than two
            periods, or the parameters are invalid
    """
    return STLDecomposerMethod(params).process(series, period)


def fit_multi(series: Any, periods: Any, params: Optional[MstlParams] = None) -> MstlResult:
    """
    Decompose a series with several seasonal periods (MSTL).

    Args:
        series: Equally spaced values, length >= 2 * max(periods)
        periods: Non-empty sequence of seasonal periods, each >= 2
        params: MstlParams (or flat dict)

    Raises:
        InvalidArgumentError: If periods is empty, any period < 2, the series
            is shorter than twice any period, or the parameters are invalid
    """
    return MSTLDecomposerMethod(params).process(series, periods)


def decompose(
    series: Any,
    period: Any,
    params: Optional[Union[StlParams, MstlParams]] = None,
    **options: Any,
) -> Union[StlResult, MstlResult]:
    """
    Decompose with STL (integer period) or MSTL (sequence of periods).

    Either pass a params object or flat keyword options, not both. StlParams
    with a list of periods is wrapped into MstlParams; MstlParams with an
    integer period runs STL with its stl_params (iterations is ignored,
    lmbda and seasonal_lengths are rejected).

    Usage:
        decompose(values, 7, robust=True)
        decompose(values, [7, 365], iterations=3, lmbda=0.5)
    """
    if params is not None and options:
        raise InvalidArgumentError("Pass either params or keyword options, not both")

    algorithm = DecompositionAlgorithm(options)
    if params is None:
        return algorithm.process(series, period)

    method = algorithm.select_method(period)
    if method == DecompositionMethodConfig.STL:
        if isinstance(params, MstlParams):
            if params.lmbda is not None or params.seasonal_lengths is not None:
                raise InvalidArgumentError(
                    "Options ['lmbda', 'seasonal_lengths'] require a list of periods"
                )
            params = params.stl_params
        return fit_single(series, period, params)
    if isinstance(params, StlParams):
        params = MstlParams(stl_params=params)
    return fit_multi(series, period, params)
