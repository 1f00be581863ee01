"""
Quality evaluation for seasonal-trend decompositions.

Strength metrics follow Hyndman's definitions with population variance:
- seasonal strength = max(0, 1 - Var(remainder) / Var(seasonal + remainder))
- trend strength = max(0, 1 - Var(remainder) / Var(trend + remainder))
"""

import logging
from typing import Dict, List, Optional, Sequence

import numpy as np

from tsdecomposition.helpers.configs import QualityMetricConfig
from tsdecomposition.helpers.utils import validate_required_locals, validate_same_length

__version__ = "2.0.0"

# Variances at or below this value are treated as zero
ZERO_VARIANCE_TOLERANCE = 1e-12

# Strength returned when the denominator variance vanishes
DEGENERATE_STRENGTH = 0.0


def _component_strength(component: Sequence[float], remainder: Sequence[float]) -> float:
    component = np.asarray(component, dtype=np.float64)
    remainder = np.asarray(remainder, dtype=np.float64)

    var_combined = np.var(component + remainder)
    if not np.isfinite(var_combined) or var_combined <= ZERO_VARIANCE_TOLERANCE:
        return DEGENERATE_STRENGTH

    var_remainder = np.var(remainder)
    strength = max(0.0, 1.0 - var_remainder / var_combined)

    return float(min(strength, 1.0))


def seasonal_strength(seasonal: Sequence[float], remainder: Sequence[float]) -> float:
    """
    Calculate seasonal component strength.

    Args:
        seasonal: Seasonal component
        remainder: Remainder component of the same length

    Returns:
        Strength in [0, 1]; 0 when Var(seasonal + remainder) is ~0

    Raises:
        InvalidArgumentError: If the inputs are empty or differ in length
    """
    validate_required_locals(["seasonal", "remainder"], locals())
    validate_same_length(seasonal, remainder, ("seasonal", "remainder"))
    return _component_strength(seasonal, remainder)


def trend_strength(trend: Sequence[float], remainder: Sequence[float]) -> float:
    """
    Calculate trend component strength.

    Args:
        trend: Trend component
        remainder: Remainder component of the same length

    Returns:
        Strength in [0, 1]; 0 when Var(trend + remainder) is ~0

    Raises:
        InvalidArgumentError: If the inputs are empty or differ in length
    """
    validate_required_locals(["trend", "remainder"], locals())
    validate_same_length(trend, remainder, ("trend", "remainder"))
    return _component_strength(trend, remainder)


class QualityEvaluator:
    """
    Quality evaluation of a finished decomposition.

    Computes component strengths and the reconstruction error
    |original - (trend + seasonal + remainder)|.
    """

    DEFAULT_METRICS = [
        QualityMetricConfig.SEASONAL_STRENGTH,
        QualityMetricConfig.TREND_STRENGTH,
        QualityMetricConfig.RECONSTRUCTION_ERROR,
    ]

    def __init__(self, metrics: Optional[List[QualityMetricConfig]] = None):
        """
        Initialize quality evaluator.

        Args:
            metrics: Metrics to compute (all by default)
        """
        self.metrics = list(metrics) if metrics is not None else list(self.DEFAULT_METRICS)

    def __str__(self) -> str:
        """Standard string representation for logging."""
        return f"QualityEvaluator(metrics={[metric.value for metric in self.metrics]})"

    def evaluate_decomposition(
        self,
        original: Sequence[float],
        trend: Sequence[float],
        seasonal: Sequence[float],
        residual: Sequence[float],
    ) -> Dict[str, float]:
        """
        Decomposition quality evaluation.

        Args:
            original: Original (or transformed) time series
            trend: Trend component
            seasonal: Seasonal component (sum of components for MSTL)
            residual: Residual component

        Returns:
            Dictionary keyed by metric name
        """
        validate_required_locals(
            ["original", "trend", "seasonal", "residual"], locals()
        )
        for name, component in (
            ("trend", trend),
            ("seasonal", seasonal),
            ("residual", residual),
        ):
            validate_same_length(original, component, ("original", name))

        scores = {}
        for metric in self.metrics:
            scores[metric.value] = self._calculate_decomposition_metric(
                metric, original, trend, seasonal, residual
            )

        logging.debug(f"{self} - Scores: {scores}")
        return scores

    def calculate_reconstruction_error(
        self,
        original: Sequence[float],
        trend: Sequence[float],
        seasonal: Sequence[float],
        residual: Sequence[float],
    ) -> float:
        """Maximum absolute deviation between the original and the sum of components."""
        reconstructed = (
            np.asarray(trend, dtype=np.float64)
            + np.asarray(seasonal, dtype=np.float64)
            + np.asarray(residual, dtype=np.float64)
        )
        return float(np.max(np.abs(np.asarray(original, dtype=np.float64) - reconstructed)))

    def _calculate_decomposition_metric(
        self,
        metric: QualityMetricConfig,
        original: Sequence[float],
        trend: Sequence[float],
        seasonal: Sequence[float],
        residual: Sequence[float],
    ) -> float:
        if metric == QualityMetricConfig.SEASONAL_STRENGTH:
            return _component_strength(seasonal, residual)
        if metric == QualityMetricConfig.TREND_STRENGTH:
            return _component_strength(trend, residual)
        if metric == QualityMetricConfig.RECONSTRUCTION_ERROR:
            return self.calculate_reconstruction_error(original, trend, seasonal, residual)
        raise ValueError(f"Unsupported metric: {metric}")
