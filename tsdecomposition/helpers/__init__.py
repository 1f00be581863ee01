"""
Shared helpers for the decomposition engine.

Components:
- exceptions: InvalidArgumentError raised for every caller error
- utils: input coercion and validation helpers
- boxCoxTransformer: power transform applied before MSTL
- evaluation/: strength and reconstruction quality metrics
"""

from .exceptions import InvalidArgumentError

__all__ = [
    'InvalidArgumentError'
]
