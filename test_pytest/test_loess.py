import math

import numpy as np
import pytest

from tsdecomposition import InvalidArgumentError
from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms import (
    loess_estimate,
    loess_smooth,
)


@pytest.mark.parametrize("degree", [0, 1])
@pytest.mark.parametrize("window,jump", [(3, 1), (7, 1), (7, 3), (31, 4)])
def test_constant_series_is_preserved(degree, window, jump):
    values = np.full(25, 4.2)

    smoothed = loess_smooth(values, window, degree=degree, jump=jump)

    np.testing.assert_allclose(smoothed, values, atol=1e-12)


@pytest.mark.parametrize("jump", [1, 2, 5])
def test_linear_series_is_preserved_by_local_linear_fit(jump):
    values = 3.0 + 0.5 * np.arange(40)

    smoothed = loess_smooth(values, 9, degree=1, jump=jump)

    np.testing.assert_allclose(smoothed, values, atol=1e-9)


def test_jump_interpolates_between_fitted_positions():
    rng = np.random.default_rng(1)
    values = rng.normal(size=30)

    exact = loess_smooth(values, 7, degree=1, jump=1)
    jumped = loess_smooth(values, 7, degree=1, jump=3)

    # Every third position (1-based 1, 4, 7, ...) and the last one are fitted exactly
    fitted = list(range(0, 30, 3)) + [29]
    np.testing.assert_allclose(jumped[fitted], exact[fitted], atol=1e-12)

    for i in range(0, 27, 3):
        expected = np.linspace(jumped[i], jumped[i + 3], 4)
        np.testing.assert_allclose(jumped[i:i + 4], expected, atol=1e-12)


def test_window_larger_than_series_uses_all_points():
    values = np.array([1.0, 2.0, 4.0, 8.0])

    smoothed = loess_smooth(values, 11, degree=0)

    assert smoothed.shape == values.shape
    assert np.all(np.isfinite(smoothed))
    assert values.min() < smoothed[0] < values.max()


def test_zero_weights_fall_back_to_observation():
    values = np.array([1.0, 2.0, 3.0, 4.0, 5.0])
    weights = np.zeros(5)

    smoothed = loess_smooth(values, 3, degree=1, weights=weights)

    np.testing.assert_array_equal(smoothed, values)


def test_weights_reduce_outlier_influence():
    values = np.zeros(21)
    values[10] = 100.0
    weights = np.ones(21)
    weights[10] = 0.0

    plain = loess_smooth(values, 7, degree=1)
    weighted = loess_smooth(values, 7, degree=1, weights=weights)

    assert plain[10] > 10.0
    np.testing.assert_allclose(weighted, 0.0, atol=1e-12)


def test_estimate_extrapolates_a_line():
    values = 2.0 * np.arange(1, 11) + 1.0

    # x = 0 and x = 11 lie one step outside the data
    assert loess_estimate(values, 0, 5, degree=1, left=1, right=5) == pytest.approx(1.0)
    assert loess_estimate(values, 11, 5, degree=1, left=6, right=10) == pytest.approx(23.0)


def test_estimate_default_window_bounds():
    values = np.arange(1.0, 21.0)

    assert loess_estimate(values, 10, 5, degree=1) == pytest.approx(10.0)
    assert loess_estimate(values, 10, 5, degree=0) == pytest.approx(10.0)


def test_estimate_returns_nan_when_all_weights_vanish():
    values = np.arange(1.0, 6.0)

    result = loess_estimate(values, 3, 3, weights=np.zeros(5))

    assert math.isnan(result)


def test_estimate_rejects_invalid_bounds():
    with pytest.raises(InvalidArgumentError):
        loess_estimate(np.arange(5.0), 2, 3, left=4, right=2)


@pytest.mark.parametrize("degree", [-1, 2])
def test_invalid_degree_raises(degree):
    with pytest.raises(InvalidArgumentError, match="degree must be 0 or 1"):
        loess_smooth(np.arange(10.0), 3, degree=degree)


def test_invalid_window_and_jump_raise():
    with pytest.raises(InvalidArgumentError):
        loess_smooth(np.arange(10.0), 0)
    with pytest.raises(InvalidArgumentError):
        loess_smooth(np.arange(10.0), 3, jump=0)


def test_weights_length_mismatch_raises():
    with pytest.raises(InvalidArgumentError):
        loess_smooth(np.arange(10.0), 3, weights=np.ones(9))
