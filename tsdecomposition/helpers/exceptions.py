"""
Exceptions raised by the decomposition engine.
"""

__version__ = "1.0.0"


class InvalidArgumentError(ValueError):
    """Custom exception for invalid series, periods or parameter combinations."""
    pass
