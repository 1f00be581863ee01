"""
Time series decomposition module.

Components:
- DecompositionAlgorithm: STL/MSTL selection from the period argument
- configDecomposition: StlParams, MstlParams, ResolvedStlConfig
- decompositionResult: StlResult, MstlResult
- methods/: STL and MSTL decomposer methods
"""

from .algorithmDecomposition import DecompositionAlgorithm
from .configDecomposition import MstlParams, ResolvedStlConfig, StlParams
from .decompositionResult import MstlResult, StlResult

__all__ = [
    'DecompositionAlgorithm',
    'MstlParams',
    'MstlResult',
    'ResolvedStlConfig',
    'StlParams',
    'StlResult'
]
