"""
Decomposer methods.
"""

from .mstlDecomposerMethod import MSTLDecomposerMethod
from .stlDecomposerMethod import STLDecomposerMethod

__all__ = [
    'MSTLDecomposerMethod',
    'STLDecomposerMethod'
]
