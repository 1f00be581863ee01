"""
Robustness weights for the STL outer loop.

Each observation is weighted by the bisquare function of its residual scaled
by six times the median absolute residual, so that large residuals stop
influencing the next inner-loop pass.
"""

import numpy as np

__version__ = "1.0.0"

# Multiplier of the median absolute residual
MAD_MULTIPLIER = 6.0
# Scaled residuals at or below this value keep full weight
NEAR_FRACTION = 0.001
# Scaled residuals above this value get zero weight
FAR_FRACTION = 0.999
# Scales at or below this value are treated as zero
DEGENERATE_SCALE = 1e-12


def robustness_scale(remainder: np.ndarray) -> float:
    """Six times the median absolute remainder."""
    abs_remainder = np.sort(np.abs(np.asarray(remainder, dtype=np.float64)))
    n = abs_remainder.size
    # Average of the two middle order statistics
    mid_low = (n - 1) // 2
    mid_high = n // 2
    return (MAD_MULTIPLIER / 2.0) * float(abs_remainder[mid_low] + abs_remainder[mid_high])


def bisquare(u: np.ndarray) -> np.ndarray:
    """(1 - u^2)^2 for u < 1, else 0."""
    u = np.abs(np.asarray(u, dtype=np.float64))
    return np.where(u < 1.0, (1.0 - u * u) ** 2, 0.0)


def robustness_weights(remainder: np.ndarray) -> np.ndarray:
    """
    Compute per-observation robustness weights.

    Args:
        remainder: Current remainder (series - seasonal - trend)

    Returns:
        Weights in [0, 1]; all ones when the median absolute remainder is ~0
    """
    remainder = np.asarray(remainder, dtype=np.float64)
    scale = robustness_scale(remainder)

    if scale <= DEGENERATE_SCALE:
        return np.ones(remainder.size, dtype=np.float64)

    scaled = np.abs(remainder) / scale
    weights = bisquare(scaled)
    weights[scaled <= NEAR_FRACTION] = 1.0
    weights[scaled > FAR_FRACTION] = 0.0

    return weights
