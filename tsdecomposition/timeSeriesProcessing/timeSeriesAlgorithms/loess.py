"""
Loess smoother on a regular grid.

Local weighted polynomial regression (degree 0 or 1) with tricube weights.
Positions are 1-based (x = 1..n) inside the kernels; arrays are 0-based.
The kernels write into caller-supplied buffers so that a single fit
allocates its scratch space once.
"""

import numpy as np
from numba import njit

from tsdecomposition.helpers.exceptions import InvalidArgumentError

__version__ = "1.0.0"

# Distances below this fraction of the bandwidth get full weight
NEAR_FRACTION = 0.001
# Distances above this fraction of the bandwidth get zero weight
FAR_FRACTION = 0.999
# Minimal spread of x (relative to the data range) for a linear fit
SLOPE_SPREAD_FRACTION = 0.001

SUPPORTED_DEGREES = (0, 1)


@njit
def loess_point(y, n, window, degree, xs, nleft, nright, work, use_weights, rweights):
    """
    Fit one local regression at position xs using points nleft..nright.

    Returns (ok, value); ok is False when every weight in the window is zero.
    """
    data_range = float(n) - 1.0
    h = max(xs - float(nleft), float(nright) - xs)
    if window > n:
        h += float((window - n) // 2)

    h9 = FAR_FRACTION * h
    h1 = NEAR_FRACTION * h

    # tricube weights, ties on the right are picked up
    total = 0.0
    for j in range(nleft, nright + 1):
        work[j - 1] = 0.0
        r = abs(float(j) - xs)
        if r <= h9:
            if r <= h1:
                work[j - 1] = 1.0
            else:
                work[j - 1] = (1.0 - (r / h) ** 3) ** 3
            if use_weights:
                work[j - 1] *= rweights[j - 1]
            total += work[j - 1]

    if total <= 0.0:
        return False, 0.0

    for j in range(nleft, nright + 1):
        work[j - 1] /= total

    if h > 0.0 and degree > 0:
        center = 0.0
        for j in range(nleft, nright + 1):
            center += work[j - 1] * float(j)
        slope = xs - center
        spread = 0.0
        for j in range(nleft, nright + 1):
            spread += work[j - 1] * (float(j) - center) * (float(j) - center)
        if np.sqrt(spread) > SLOPE_SPREAD_FRACTION * data_range:
            slope /= spread
            for j in range(nleft, nright + 1):
                work[j - 1] *= slope * (float(j) - center) + 1.0

    value = 0.0
    for j in range(nleft, nright + 1):
        value += work[j - 1] * y[j - 1]

    return True, value


@njit
def loess_kernel(y, n, window, degree, jump, use_weights, rweights, out, work):
    """
    Smooth y[0:n] into out[0:n].

    Only every jump-th position (and the last one) is fitted; positions in
    between are linearly interpolated.
    """
    if n < 2:
        out[0] = y[0]
        return

    nleft = 0
    nright = 0
    step = min(jump, n - 1)

    if window >= n:
        nleft = 1
        nright = n
        for i in range(1, n + 1, step):
            ok, value = loess_point(
                y, n, window, degree, float(i), nleft, nright, work, use_weights, rweights
            )
            out[i - 1] = value if ok else y[i - 1]
    elif step == 1:
        half = (window + 1) // 2
        nleft = 1
        nright = window
        for i in range(1, n + 1):
            if i > half and nright != n:
                nleft += 1
                nright += 1
            ok, value = loess_point(
                y, n, window, degree, float(i), nleft, nright, work, use_weights, rweights
            )
            out[i - 1] = value if ok else y[i - 1]
    else:
        half = (window + 1) // 2
        for i in range(1, n + 1, step):
            if i < half:
                nleft = 1
                nright = window
            elif i >= n - half + 1:
                nleft = n - window + 1
                nright = n
            else:
                nleft = i - half + 1
                nright = window + i - half
            ok, value = loess_point(
                y, n, window, degree, float(i), nleft, nright, work, use_weights, rweights
            )
            out[i - 1] = value if ok else y[i - 1]

    if step != 1:
        for i in range(1, n - step + 1, step):
            delta = (out[i + step - 1] - out[i - 1]) / float(step)
            for j in range(i + 1, i + step):
                out[j - 1] = out[i - 1] + delta * float(j - i)

        last = ((n - 1) // step) * step + 1
        if last != n:
            ok, value = loess_point(
                y, n, window, degree, float(n), nleft, nright, work, use_weights, rweights
            )
            out[n - 1] = value if ok else y[n - 1]
            if last != n - 1:
                delta = (out[n - 1] - out[last - 1]) / float(n - last)
                for j in range(last + 1, n):
                    out[j - 1] = out[last - 1] + delta * float(j - last)


def _validate_smoother_args(values, window, degree, jump, weights):
    values = np.ascontiguousarray(values, dtype=np.float64)
    if values.ndim != 1 or values.size == 0:
        raise InvalidArgumentError("values must be a non-empty one-dimensional sequence")

    if int(window) < 1:
        raise InvalidArgumentError(f"window must be positive, got {window}")
    if int(degree) not in SUPPORTED_DEGREES:
        raise InvalidArgumentError("degree must be 0 or 1")
    if int(jump) < 1:
        raise InvalidArgumentError(f"jump must be positive, got {jump}")

    if weights is None:
        return values, False, np.ones(values.size, dtype=np.float64)

    weights = np.ascontiguousarray(weights, dtype=np.float64)
    if weights.shape != values.shape:
        raise InvalidArgumentError("weights must have the same length as values")
    return values, True, weights


def loess_smooth(values, window, degree=1, jump=1, weights=None) -> np.ndarray:
    """
    Smooth a regularly spaced sequence with Loess.

    Args:
        values: Observations at x = 1..n
        window: Number of neighbours used for each local fit
        degree: Local polynomial degree (0 or 1)
        jump: Stride of exactly fitted positions; the rest is interpolated
        weights: Optional per-observation weights multiplied into the
            tricube weights

    Returns:
        Smoothed values, same length as the input
    """
    values, use_weights, weights = _validate_smoother_args(
        values, window, degree, jump, weights
    )
    n = values.size
    out = np.empty(n, dtype=np.float64)
    work = np.empty(n, dtype=np.float64)
    loess_kernel(values, n, int(window), int(degree), int(jump), use_weights, weights, out, work)
    return out


def loess_estimate(
    values, position, window, degree=1, weights=None, left=None, right=None
) -> float:
    """
    Fit a single local regression at an arbitrary (possibly outside) position.

    Args:
        values: Observations at x = 1..n
        position: Target x, may lie outside 1..n for extrapolation
        window: Nominal window size, widens the bandwidth when larger than n
        degree: Local polynomial degree (0 or 1)
        weights: Optional per-observation weights
        left, right: 1-based inclusive bounds of the points used; default to
            the window closest to the position

    Returns:
        Fitted value, or NaN when every weight in the window is zero
    """
    values, use_weights, weights = _validate_smoother_args(
        values, window, degree, 1, weights
    )
    n = values.size
    window = int(window)

    if left is None or right is None:
        span = min(window, n)
        center = int(round(min(max(float(position), 1.0), float(n))))
        left = min(max(1, center - span // 2), n - span + 1)
        right = left + span - 1

    if not 1 <= left <= right <= n:
        raise InvalidArgumentError(f"invalid window bounds [{left}, {right}] for {n} values")

    work = np.empty(n, dtype=np.float64)
    ok, value = loess_point(
        values, n, window, int(degree), float(position), int(left), int(right),
        work, use_weights, weights,
    )
    return float(value) if ok else float("nan")
