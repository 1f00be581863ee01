import numpy as np
import pytest

from tsdecomposition import (
    InvalidArgumentError,
    MstlParams,
    MstlResult,
    StlParams,
    StlResult,
    decompose,
    fit_multi,
    fit_single,
)
from tsdecomposition.helpers.configs import DecompositionMethodConfig
from tsdecomposition.timeSeriesProcessing.decomposition import DecompositionAlgorithm


def test_integer_period_runs_stl(reference_series):
    result = decompose(reference_series, 7, robust=True)

    assert isinstance(result, StlResult)
    np.testing.assert_array_equal(
        result.trend, fit_single(reference_series, 7, StlParams(robust=True)).trend
    )


def test_period_list_runs_mstl(reference_series):
    result = decompose(reference_series, [6, 10], iterations=3)

    assert isinstance(result, MstlResult)
    np.testing.assert_array_equal(
        result.trend, fit_multi(reference_series, [6, 10], MstlParams(iterations=3)).trend
    )


def test_lambda_keyword_alias(reference_series):
    positive = np.asarray(reference_series) + 1.0

    result = decompose(positive, [6, 10], **{"lambda": 0.5})

    assert result.lmbda == 0.5


def test_params_object_is_used(reference_series):
    stl = decompose(reference_series, 7, StlParams(robust=True))
    mstl = decompose(reference_series, [6, 10], StlParams(robust=True))

    assert isinstance(stl, StlResult)
    assert isinstance(mstl, MstlResult)
    assert stl.weights[4] < 1.0


def test_mstl_params_with_integer_period_run_stl(reference_series):
    result = decompose(reference_series, 7, MstlParams(stl_params=StlParams(robust=True)))

    assert isinstance(result, StlResult)
    np.testing.assert_array_equal(
        result.trend, fit_single(reference_series, 7, StlParams(robust=True)).trend
    )


@pytest.mark.parametrize("params", [MstlParams(lmbda=0.5), MstlParams(seasonal_lengths=(9,))])
def test_mstl_only_params_with_integer_period_raise(reference_series, params):
    with pytest.raises(InvalidArgumentError, match="require a list of periods"):
        decompose(reference_series, 7, params)


def test_mstl_options_with_single_period_raise(reference_series):
    with pytest.raises(InvalidArgumentError, match="require a list of periods"):
        decompose(reference_series, 7, iterations=3)


def test_params_and_options_together_raise(reference_series):
    with pytest.raises(InvalidArgumentError):
        decompose(reference_series, 7, StlParams(), robust=True)


def test_unknown_option_raises(reference_series):
    with pytest.raises(InvalidArgumentError):
        decompose(reference_series, 7, seasonal_window=7)


@pytest.mark.parametrize(
    "period,expected",
    [
        (7, DecompositionMethodConfig.STL),
        (np.int64(7), DecompositionMethodConfig.STL),
        ([7], DecompositionMethodConfig.MSTL),
        ((7, 30), DecompositionMethodConfig.MSTL),
    ],
)
def test_method_selection(period, expected):
    assert DecompositionAlgorithm.select_method(period) == expected
