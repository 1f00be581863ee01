"""
Decomposition configuration.

StlParams: immutable STL configuration, every field optional.
MstlParams: shared StlParams plus the MSTL-specific options.
ResolvedStlConfig: StlParams with every default derived for a concrete period.

Instances are validated on construction; period-dependent checks happen in
StlParams.resolve(). Updates go through with_options(), which returns a new
validated instance.
"""

import logging
import math
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple

import numpy as np

from tsdecomposition.helpers.boxCoxTransformer import BoxCoxTransformer
from tsdecomposition.helpers.exceptions import InvalidArgumentError
from tsdecomposition.helpers.utils import MIN_PERIOD, default_jump, make_odd

__version__ = "1.0.0"

# Smallest admissible window for any smoother
MIN_WINDOW_LENGTH = 3

# Polynomial degree defaults
DEFAULT_SEASONAL_DEGREE = 0
DEFAULT_TREND_DEGREE = 1
SUPPORTED_DEGREES = (0, 1)

# Loop defaults: (non-robust, robust)
DEFAULT_INNER_LOOPS = (2, 1)
DEFAULT_OUTER_LOOPS = (0, 15)
MIN_ROBUST_OUTER_LOOPS = 1

# MSTL defaults
DEFAULT_MSTL_ITERATIONS = 2
MIN_MSTL_ITERATIONS = 1
# Seasonal window for the i-th smallest period: BASE + STEP * (i + 1)
MSTL_SEASONAL_LENGTH_BASE = 7
MSTL_SEASONAL_LENGTH_STEP = 4

# Key aliases accepted by from_dict
LAMBDA_ALIASES = ("lambda", "lmbda")


def _is_integer(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _check_integer(name: str, value: Any, minimum: int) -> int:
    if not _is_integer(value):
        raise InvalidArgumentError(
            f"{name} must be an integer, got {type(value).__name__}: {value}"
        )
    if value < minimum:
        raise InvalidArgumentError(f"{name} must be at least {minimum}, got {value}")
    return int(value)


def _check_window(name: str, value: Any) -> int:
    value = _check_integer(name, value, MIN_WINDOW_LENGTH)
    if value % 2 != 1:
        raise InvalidArgumentError(f"{name} must be odd")
    return value


def _check_degree(name: str, value: Any) -> int:
    if not _is_integer(value) or value not in SUPPORTED_DEGREES:
        raise InvalidArgumentError(f"{name} must be 0 or 1")
    return int(value)


@dataclass(frozen=True)
class ResolvedStlConfig:
    """STL configuration with every window, jump and loop count fixed for one period."""

    period: int
    seasonal_length: int
    trend_length: int
    low_pass_length: int
    seasonal_degree: int
    trend_degree: int
    low_pass_degree: int
    seasonal_jump: int
    trend_jump: int
    low_pass_jump: int
    inner_loops: int
    outer_loops: int
    robust: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StlParams:
    """
    STL parameters.

    Window lengths left as None are derived from the period in resolve():
    - seasonal_length: the period, at least 3, made odd
    - trend_length: ceil(1.5 * period / (1 - 1.5 / seasonal_length)), made odd
    - low_pass_length: the period, made odd

    Jumps default to a tenth of their window (rounded up). inner_loops
    defaults to 2 (1 when robust) and outer_loops to 0 (15 when robust).
    outer_loops counts the robustness passes that follow the initial
    unweighted pass; it is ignored when robust is False and raised to 1 when
    robust is True.
    """

    seasonal_length: Optional[int] = None
    trend_length: Optional[int] = None
    low_pass_length: Optional[int] = None
    seasonal_degree: int = DEFAULT_SEASONAL_DEGREE
    trend_degree: int = DEFAULT_TREND_DEGREE
    low_pass_degree: Optional[int] = None
    seasonal_jump: Optional[int] = None
    trend_jump: Optional[int] = None
    low_pass_jump: Optional[int] = None
    inner_loops: Optional[int] = None
    outer_loops: Optional[int] = None
    robust: bool = False

    def __post_init__(self):
        for name in ("seasonal_length", "trend_length", "low_pass_length"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _check_window(name, value))

        for name in ("seasonal_degree", "trend_degree"):
            object.__setattr__(self, name, _check_degree(name, getattr(self, name)))
        if self.low_pass_degree is not None:
            object.__setattr__(
                self, "low_pass_degree", _check_degree("low_pass_degree", self.low_pass_degree)
            )

        for name in ("seasonal_jump", "trend_jump", "low_pass_jump"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _check_integer(name, value, 1))

        for name in ("inner_loops", "outer_loops"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _check_integer(name, value, 0))

        if not isinstance(self.robust, (bool, np.bool_)):
            raise InvalidArgumentError(
                f"robust must be a boolean, got {type(self.robust).__name__}"
            )
        object.__setattr__(self, "robust", bool(self.robust))

        # Jumps larger than an explicitly given window can never be valid
        for jump_name, window_name in (
            ("seasonal_jump", "seasonal_length"),
            ("trend_jump", "trend_length"),
            ("low_pass_jump", "low_pass_length"),
        ):
            jump, window = getattr(self, jump_name), getattr(self, window_name)
            if jump is not None and window is not None and jump > window:
                raise InvalidArgumentError(
                    f"{jump_name} must not exceed {window_name}, got {jump} > {window}"
                )

    def __str__(self) -> str:
        """Compact representation for logging."""
        options = {key: value for key, value in self.to_dict().items() if value is not None}
        return f"StlParams({options})"

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "StlParams":
        """
        Build parameters from a plain configuration dictionary.

        None values are treated as absent.

        Raises:
            InvalidArgumentError: On unknown keys or invalid values
        """
        config = {key: value for key, value in (config or {}).items() if value is not None}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown STL parameters: {unknown}")
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def with_options(self, **changes: Any) -> "StlParams":
        """Return a new validated instance with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown STL parameters: {unknown}")
        return replace(self, **changes)

    def resolve(self, period: int) -> ResolvedStlConfig:
        """
        Derive every default for the given period and validate the result.

        Raises:
            InvalidArgumentError: If the period is < 2 or a jump exceeds its window
        """
        if not _is_integer(period) or period < MIN_PERIOD:
            raise InvalidArgumentError("period must be greater than 1")
        period = int(period)

        seasonal_length = self.seasonal_length
        if seasonal_length is None:
            seasonal_length = make_odd(max(period, MIN_WINDOW_LENGTH))

        trend_length = self.trend_length
        if trend_length is None:
            trend_length = int(
                math.ceil((1.5 * period) / (1.0 - 1.5 / float(seasonal_length)))
            )
            trend_length = make_odd(max(trend_length, MIN_WINDOW_LENGTH))

        low_pass_length = self.low_pass_length
        if low_pass_length is None:
            low_pass_length = make_odd(period)

        low_pass_degree = (
            self.low_pass_degree if self.low_pass_degree is not None else self.trend_degree
        )

        seasonal_jump = (
            self.seasonal_jump if self.seasonal_jump is not None else default_jump(seasonal_length)
        )
        trend_jump = self.trend_jump if self.trend_jump is not None else default_jump(trend_length)
        low_pass_jump = (
            self.low_pass_jump if self.low_pass_jump is not None else default_jump(low_pass_length)
        )

        for jump_name, jump, window_name, window in (
            ("seasonal_jump", seasonal_jump, "seasonal_length", seasonal_length),
            ("trend_jump", trend_jump, "trend_length", trend_length),
            ("low_pass_jump", low_pass_jump, "low_pass_length", low_pass_length),
        ):
            if jump > window:
                raise InvalidArgumentError(
                    f"{jump_name} must not exceed {window_name}, got {jump} > {window}"
                )

        robust_index = 1 if self.robust else 0
        inner_loops = (
            self.inner_loops if self.inner_loops is not None else DEFAULT_INNER_LOOPS[robust_index]
        )

        if self.robust:
            outer_loops = (
                self.outer_loops if self.outer_loops is not None else DEFAULT_OUTER_LOOPS[1]
            )
            if outer_loops < MIN_ROBUST_OUTER_LOOPS:
                logging.info(
                    f"{self} - outer_loops={outer_loops} raised to "
                    f"{MIN_ROBUST_OUTER_LOOPS} because robust is enabled"
                )
                outer_loops = MIN_ROBUST_OUTER_LOOPS
        else:
            if self.outer_loops:
                logging.warning(
                    f"{self} - outer_loops={self.outer_loops} ignored because robust is disabled"
                )
            outer_loops = 0

        return ResolvedStlConfig(
            period=period,
            seasonal_length=seasonal_length,
            trend_length=trend_length,
            low_pass_length=low_pass_length,
            seasonal_degree=self.seasonal_degree,
            trend_degree=self.trend_degree,
            low_pass_degree=low_pass_degree,
            seasonal_jump=seasonal_jump,
            trend_jump=trend_jump,
            low_pass_jump=low_pass_jump,
            inner_loops=inner_loops,
            outer_loops=outer_loops,
            robust=self.robust,
        )


@dataclass(frozen=True)
class MstlParams:
    """
    MSTL parameters.

    stl_params: STL configuration shared by every period
    iterations: number of passes over all periods (forced to 1 for a single period)
    lmbda: optional Box-Cox exponent in [0, 1]; None disables the transform
    seasonal_lengths: optional seasonal window per period, in period order
    """

    stl_params: StlParams = field(default_factory=StlParams)
    iterations: int = DEFAULT_MSTL_ITERATIONS
    lmbda: Optional[float] = None
    seasonal_lengths: Optional[Tuple[int, ...]] = None

    def __post_init__(self):
        if not isinstance(self.stl_params, StlParams):
            raise InvalidArgumentError(
                f"stl_params must be StlParams, got {type(self.stl_params).__name__}"
            )

        object.__setattr__(
            self, "iterations", _check_integer("iterations", self.iterations, MIN_MSTL_ITERATIONS)
        )

        if self.lmbda is not None:
            object.__setattr__(self, "lmbda", BoxCoxTransformer.validate_lambda(self.lmbda))

        if self.seasonal_lengths is not None:
            if isinstance(self.seasonal_lengths, (str, bytes)):
                raise InvalidArgumentError("seasonal_lengths must be a sequence of integers")
            try:
                lengths = tuple(self.seasonal_lengths)
            except TypeError as e:
                raise InvalidArgumentError(
                    "seasonal_lengths must be a sequence of integers"
                ) from e
            object.__setattr__(
                self,
                "seasonal_lengths",
                tuple(_check_window("seasonal_lengths", value) for value in lengths),
            )

    def __str__(self) -> str:
        """Compact representation for logging."""
        return (
            f"MstlParams(iterations={self.iterations}, lmbda={self.lmbda}, "
            f"seasonal_lengths={self.seasonal_lengths}, stl={self.stl_params})"
        )

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "MstlParams":
        """
        Build MSTL parameters from one flat dictionary.

        STL fields and the MSTL options (iterations, lambda/lmbda,
        seasonal_lengths) share a single namespace. None values are treated
        as absent.
        """
        config = {key: value for key, value in (config or {}).items() if value is not None}

        mstl_options = {}
        if "iterations" in config:
            mstl_options["iterations"] = config.pop("iterations")
        lambda_keys = [key for key in LAMBDA_ALIASES if key in config]
        if len(lambda_keys) > 1:
            raise InvalidArgumentError("Pass only one of 'lambda' and 'lmbda'")
        if lambda_keys:
            mstl_options["lmbda"] = config.pop(lambda_keys[0])
        if "seasonal_lengths" in config:
            mstl_options["seasonal_lengths"] = config.pop("seasonal_lengths")

        return cls(stl_params=StlParams.from_dict(config), **mstl_options)

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.stl_params.to_dict(),
            "iterations": self.iterations,
            "lmbda": self.lmbda,
            "seasonal_lengths": self.seasonal_lengths,
        }

    def with_options(self, **changes: Any) -> "MstlParams":
        """
        Return a new validated instance.

        Accepts MSTL fields directly and STL fields, which are forwarded to
        the shared stl_params.
        """
        own = {f.name for f in fields(self)}
        mstl_changes = {key: value for key, value in changes.items() if key in own}
        stl_changes = {key: value for key, value in changes.items() if key not in own}

        updated = replace(self, **mstl_changes)
        if stl_changes:
            updated = replace(updated, stl_params=updated.stl_params.with_options(**stl_changes))
        return updated

    def component_params(self, position: int, rank: int) -> StlParams:
        """
        STL parameters for one seasonal component.

        Args:
            position: Index of the period in caller order
            rank: Index of the period in ascending order

        Returns:
            seasonal_lengths[position] when given, else the shared seasonal
            length when set, else 7 + 4 * (rank + 1)
        """
        if self.seasonal_lengths is not None:
            return self.stl_params.with_options(seasonal_length=self.seasonal_lengths[position])
        if self.stl_params.seasonal_length is not None:
            return self.stl_params
        return self.stl_params.with_options(
            seasonal_length=MSTL_SEASONAL_LENGTH_BASE + MSTL_SEASONAL_LENGTH_STEP * (rank + 1)
        )
