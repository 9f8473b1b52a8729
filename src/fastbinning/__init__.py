"""
fastbinning - non-uniform binning in average constant time.

This package implements the quantization scheme of Cadenas and Megson,
'Non-uniform quantization with linear average-case computation time'
(https://arxiv.org/abs/2108.08228): after an O(m) preprocessing pass over
m + 1 strictly increasing boundaries, any value is assigned to its bin in
O(1) time on average.

Features:
- BinIndex: immutable index with scalar and vectorized search
- NonUniformDiscretizer: column-wise fit/transform binning
- Quantile, uniform and explicit boundary strategies

Example usage:
    >>> from fastbinning import BinIndex
    >>>
    >>> index = BinIndex([2, 11, 19, 20, 21, 27, 29, 30])
    >>> index.search(19.9)
    3
    >>> index.search_array([-4, 2, 20, 99]).tolist()
    [0, 1, 4, 8]
"""

__version__ = "1.0.0"
__author__ = "fastbinning Contributors"

# Core index
from .bin_index import BinIndex

# Discretizer
from .discretizer import NonUniformDiscretizer

# Configuration
from .base import BinningParams

# Utility functions
from .utils import (
    check_boundaries,
    check_values,
    ValidationError,
    NotFittedError,
    log_message,
    log_index_summary,
)

# Public API
__all__ = [
    # Version
    "__version__",
    # Core index
    "BinIndex",
    # Discretizer
    "NonUniformDiscretizer",
    # Configuration
    "BinningParams",
    # Utilities
    "check_boundaries",
    "check_values",
    "ValidationError",
    "NotFittedError",
    "log_message",
    "log_index_summary",
]
