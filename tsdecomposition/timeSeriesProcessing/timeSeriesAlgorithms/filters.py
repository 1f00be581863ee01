"""
Seasonal filters used by the STL inner loop.

- cycle_subseries_kernel: smooths every phase of the period separately and
  extends each cycle-subseries by one point on both sides
- low_pass_kernel: moving averages of length period, period and 3
"""

import numpy as np
from numba import njit

from tsdecomposition.timeSeriesProcessing.timeSeriesAlgorithms.loess import (
    loess_kernel,
    loess_point,
)

__version__ = "1.0.0"

# Length of the final moving average in the low-pass filter
LOW_PASS_FINAL_AVERAGE = 3


@njit
def moving_average_kernel(x, n, window, out):
    """Write the n - window + 1 running means of x[0:n] into out."""
    count = n - window + 1
    fwindow = float(window)

    total = 0.0
    for i in range(window):
        total += x[i]
    out[0] = total / fwindow

    if count > 1:
        k = window
        m = 0
        for j in range(1, count):
            total = total - x[m] + x[k]
            out[j] = total / fwindow
            k += 1
            m += 1


@njit
def low_pass_kernel(x, n, period, out, work):
    """
    Low-pass filter of the extended cycle-subseries buffer.

    x holds n values (series length + 2 * period); out receives
    n - 2 * period values.
    """
    moving_average_kernel(x, n, period, out)
    moving_average_kernel(out, n - period + 1, period, work)
    moving_average_kernel(work, n - 2 * period + 2, LOW_PASS_FINAL_AVERAGE, out)


@njit
def cycle_subseries_kernel(
    y, n, period, window, degree, jump, use_weights, rweights,
    season, values, smoothed, weights, work,
):
    """
    Smooth each cycle-subseries of y[0:n] and write the result into season.

    season must hold n + 2 * period values: the smoothed subseries plus one
    extrapolated point before and after the data span for every phase.
    values, weights and work need n entries; smoothed needs n + 2.
    """
    for j in range(1, period + 1):
        k = (n - j) // period + 1

        for i in range(1, k + 1):
            values[i - 1] = y[(i - 1) * period + j - 1]
        if use_weights:
            for i in range(1, k + 1):
                weights[i - 1] = rweights[(i - 1) * period + j - 1]

        loess_kernel(values, k, window, degree, jump, use_weights, weights, smoothed[1:], work)

        nright = min(window, k)
        ok, value = loess_point(
            values, k, window, degree, 0.0, 1, nright, work, use_weights, weights
        )
        smoothed[0] = value if ok else smoothed[1]

        nleft = max(1, k - window + 1)
        ok, value = loess_point(
            values, k, window, degree, float(k + 1), nleft, k, work, use_weights, weights
        )
        smoothed[k + 1] = value if ok else smoothed[k]

        for m in range(1, k + 3):
            season[(m - 1) * period + j - 1] = smoothed[m - 1]
