"""
Numerical kernels: Loess smoother, seasonal filters and robustness weights.
"""

from .loess import loess_estimate, loess_smooth
from .robustness import robustness_weights

__all__ = [
    'loess_estimate',
    'loess_smooth',
    'robustness_weights'
]
