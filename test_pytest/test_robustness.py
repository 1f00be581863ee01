import numpy as np
import pytest

from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms import robustness_weights
from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms.robustness import (
    bisquare,
    robustness_scale,
)


def test_scale_is_six_times_median_absolute_remainder():
    remainder = np.array([-1.0, 2.0, -3.0, 4.0])

    # middle order statistics of |r| are 2 and 3
    assert robustness_scale(remainder) == pytest.approx(15.0)


def test_bisquare_values():
    np.testing.assert_allclose(bisquare([0.0, 0.5, 1.0, 2.0]), [1.0, 0.5625, 0.0, 0.0])


def test_weights_are_bounded():
    rng = np.random.default_rng(3)
    remainder = rng.standard_t(2, size=200)

    weights = robustness_weights(remainder)

    assert weights.shape == remainder.shape
    assert np.all(weights >= 0.0)
    assert np.all(weights <= 1.0)


def test_outlier_gets_zero_weight():
    remainder = np.array([0.1, -0.2, 0.15, -0.1, 0.05, 50.0, -0.12])

    weights = robustness_weights(remainder)

    assert weights[5] == 0.0
    assert np.all(weights[[0, 1, 2, 3, 4, 6]] > 0.5)


def test_zero_remainder_gives_full_weight():
    weights = robustness_weights(np.array([0.0, 1.0, 0.0, 0.0, 0.0]))

    # median absolute remainder is zero, every observation keeps weight one
    np.testing.assert_array_equal(weights, np.ones(5))


def test_small_residuals_keep_full_weight():
    remainder = np.array([1.0, -1.0, 1.0, -1.0, 1e-6])

    weights = robustness_weights(remainder)

    assert weights[4] == 1.0
