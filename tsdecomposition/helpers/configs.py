"""
Configuration enums for the decomposition engine:

QualityMetricConfig: Enum of decomposition quality metrics computed by QualityEvaluator.
DecompositionMethodConfig: Enum of the available decomposition methods.
"""

from enum import Enum


class QualityMetricConfig(Enum):
    """Decomposition quality metrics computed by QualityEvaluator"""

    SEASONAL_STRENGTH = "seasonal_strength"
    TREND_STRENGTH = "trend_strength"
    RECONSTRUCTION_ERROR = "reconstruction_error"


class DecompositionMethodConfig(Enum):
    """Time series decomposition methods"""

    STL = "stl"
    MSTL = "mstl"  # Multiple STL
