"""
Decomposition quality evaluation.
"""

from .qualityEvaluator import QualityEvaluator, seasonal_strength, trend_strength

__all__ = [
    'QualityEvaluator',
    'seasonal_strength',
    'trend_strength'
]
