"""
Seasonal-trend decomposition of equally spaced time series.

Provides STL (single seasonal period) and MSTL (multiple seasonal periods)
decomposition built on a Loess smoother, plus seasonal and trend strength
metrics.

Components:
- fit_single / fit_multi: STL and MSTL entry points
- decompose: dispatch on an integer period or a list of periods
- seasonal_strength / trend_strength: strength metrics
- StlParams / MstlParams: immutable configuration
- StlResult / MstlResult: decomposition output
"""

from tsdecomposition.helpers.boxCoxTransformer import BoxCoxTransformer
from tsdecomposition.helpers.exceptions import InvalidArgumentError
from tsdecomposition.timeSeriesProcessing.decomposition.algorithmDecomposition import (
    decompose,
    fit_multi,
    fit_single,
    seasonal_strength,
    trend_strength,
)
from tsdecomposition.timeSeriesProcessing.decomposition.configDecomposition import (
    MstlParams,
    StlParams,
)
from tsdecomposition.timeSeriesProcessing.decomposition.decompositionResult import (
    MstlResult,
    StlResult,
)

__version__ = "1.0.0"

__all__ = [
    'BoxCoxTransformer',
    'InvalidArgumentError',
    'MstlParams',
    'MstlResult',
    'StlParams',
    'StlResult',
    'decompose',
    'fit_multi',
    'fit_single',
    'seasonal_strength',
    'trend_strength'
]
