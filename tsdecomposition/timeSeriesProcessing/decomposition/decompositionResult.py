"""
Decomposition results.

StlResult: seasonal, trend, remainder and robustness weights of one STL fit.
MstlResult: one seasonal component per period plus shared trend and remainder.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd

from tsdecomposition.helpers.evaluation.qualityEvaluator import (
    seasonal_strength,
    trend_strength,
)


@dataclass(frozen=True, eq=False)
class StlResult:
    """Single-period decomposition: series == seasonal + trend + remainder."""

    seasonal: np.ndarray
    trend: np.ndarray
    remainder: np.ndarray
    weights: np.ndarray
    period: Optional[int] = None
    index: Optional[pd.Index] = field(default=None, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.trend)

    def seasonal_strength(self) -> float:
        return seasonal_strength(self.seasonal, self.remainder)

    def trend_strength(self) -> float:
        return trend_strength(self.trend, self.remainder)

    def to_frame(self, index: Optional[pd.Index] = None) -> pd.DataFrame:
        """Components as columns; index defaults to the input pd.Series index."""
        frame = pd.DataFrame(
            {
                "seasonal": self.seasonal,
                "trend": self.trend,
                "remainder": self.remainder,
                "weights": self.weights,
            },
            index=index if index is not None else self.index,
        )
        return frame


@dataclass(frozen=True, eq=False)
class MstlResult:
    """
    Multi-period decomposition.

    sum(seasonal) + trend + remainder equals the series, or its Box-Cox
    transform when lmbda is set. Components stay in transformed space.
    """

    seasonal: Tuple[np.ndarray, ...]
    trend: np.ndarray
    remainder: np.ndarray
    periods: Tuple[int, ...]
    weights: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))
    lmbda: Optional[float] = None
    index: Optional[pd.Index] = field(default=None, repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.trend)

    @property
    def seasonal_total(self) -> np.ndarray:
        """Sum of all seasonal components."""
        return np.sum(np.vstack(self.seasonal), axis=0)

    def seasonal_strengths(self) -> List[float]:
        """Seasonal strength of every component, in period order."""
        return [seasonal_strength(component, self.remainder) for component in self.seasonal]

    def seasonal_strength(self) -> float:
        """Strength of the combined seasonal component."""
        return seasonal_strength(self.seasonal_total, self.remainder)

    def trend_strength(self) -> float:
        return trend_strength(self.trend, self.remainder)

    def to_frame(self, index: Optional[pd.Index] = None) -> pd.DataFrame:
        """Columns seasonal_<period> (in period order), trend and remainder."""
        columns = {}
        for position, (period, component) in enumerate(zip(self.periods, self.seasonal)):
            name = f"seasonal_{period}"
            if name in columns:
                name = f"seasonal_{period}_{position}"
            columns[name] = component
        columns["trend"] = self.trend
        columns["remainder"] = self.remainder
        return pd.DataFrame(columns, index=index if index is not None else self.index)
