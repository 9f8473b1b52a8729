"""
Utility functions for input validation, errors and logging.

All validation is done with NumPy only; pandas objects are accepted
through their ``values`` attribute.
"""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union

import numpy as np


# =============================================================================
# Type Aliases
# =============================================================================

ArrayLike = Union[np.ndarray, List[Any], Tuple[Any, ...]]


# =============================================================================
# Custom Exceptions
# =============================================================================

class ValidationError(ValueError):
    """
    Exception raised when a boundary sequence is rejected.

    Attributes
    ----------
    index : int or None
        Position of the left element of the first pair that is not
        strictly increasing, or None for shape and finiteness failures.
    values : tuple of float or None
        The two offending values ``(boundaries[index], boundaries[index + 1])``.
    """

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        values: Optional[Tuple[float, float]] = None,
    ):
        super().__init__(message)
        self.index = index
        self.values = values


class NotFittedError(ValueError):
    """
    Exception raised when a discretizer is used before fitting.

    This exception is raised when calling transform or bin_edges_
    before calling fit.
    """
    pass


# =============================================================================
# Input Validation Functions
# =============================================================================

def _to_numpy(X: ArrayLike, dtype: type = float) -> np.ndarray:
    if isinstance(X, np.ndarray):
        return X.astype(dtype, copy=False)
    if isinstance(X, (list, tuple)):
        return np.array(X, dtype=dtype)
    try:
        # Try pandas DataFrame/Series
        if hasattr(X, 'values'):
            return np.asarray(X.values, dtype=dtype)
        return np.asarray(X, dtype=dtype)
    except (TypeError, ValueError) as e:
        raise TypeError(
            f"Cannot convert input of type {type(X).__name__} to numpy array: {e}"
        ) from e


def check_boundaries(boundaries: ArrayLike) -> np.ndarray:
    """
    Validate a boundary sequence and return a private read-only copy.

    Parameters
    ----------
    boundaries : array-like of shape (m + 1,)
        Bin boundaries. Must be finite and strictly increasing.

    Returns
    -------
    boundaries : np.ndarray of dtype float64
        Validated copy with ``flags.writeable`` set to False.

    Raises
    ------
    ValidationError
        If the sequence is not 1D, has fewer than two values, contains
        NaN or infinite values, or is not strictly increasing.
    """
    try:
        b = np.array(_to_numpy(boundaries), dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"boundaries must be numeric: {e}") from e

    if b.ndim != 1:
        raise ValidationError(
            f"boundaries must be a 1D sequence, got {b.ndim}D array instead."
        )

    if b.size < 2:
        raise ValidationError(
            f"At least 2 boundaries are required, got {b.size}."
        )

    if not np.all(np.isfinite(b)):
        raise ValidationError("boundaries contain NaN or infinite values.")

    bad = np.flatnonzero(b[:-1] >= b[1:])
    if bad.size > 0:
        i = int(bad[0])
        raise ValidationError(
            "boundaries must be strictly increasing. "
            f"Found {b[i]!r} >= {b[i + 1]!r} at index {i} and {i + 1}",
            index=i,
            values=(float(b[i]), float(b[i + 1])),
        )

    b.flags.writeable = False
    return b


def check_values(
    X: ArrayLike,
    *,
    ensure_2d: bool = False,
    allow_nan: bool = True,
) -> np.ndarray:
    """
    Validate and convert values to be binned.

    Parameters
    ----------
    X : array-like
        Input data to validate. Infinite values are allowed, they fall
        into the outer bins.
    ensure_2d : bool, default=False
        Whether to reshape 1D input into a single column and reject
        anything that is not 2D afterwards.
    allow_nan : bool, default=True
        Whether to allow NaN values.

    Returns
    -------
    X_converted : np.ndarray of dtype float64

    Raises
    ------
    ValueError
        If validation fails.
    TypeError
        If input type is not supported.
    """
    X_out = _to_numpy(X)

    if ensure_2d:
        if X_out.ndim == 1:
            X_out = X_out.reshape(-1, 1)
        elif X_out.ndim != 2:
            raise ValueError(
                f"Expected 2D array, got {X_out.ndim}D array instead."
            )

    if not allow_nan and np.any(np.isnan(X_out)):
        raise ValueError("Input array contains NaN values but allow_nan=False.")

    return X_out


# =============================================================================
# Logging Utilities
# =============================================================================

def log_message(message: str, *, verbose: int = 0) -> None:
    """
    Print a log message if verbose level is sufficient.

    Parameters
    ----------
    message : str
        Message to print.
    verbose : int, default=0
        Verbosity level. Message is printed if verbose >= 1.
    """
    if verbose >= 1:
        print(f"[fastbinning] {message}")


def log_index_summary(
    n_bins: int,
    uniform_bin_width: float,
    max_cell_load: int,
    *,
    verbose: int = 0,
    label: str = "BinIndex",
) -> None:
    """
    Log a one-line summary of a freshly built index.

    Parameters
    ----------
    n_bins : int
        Number of finite bins (m).
    uniform_bin_width : float
        Width of one uniform cell.
    max_cell_load : int
        Largest number of interior boundaries in a single uniform cell.
    verbose : int, default=0
        Verbosity level.
    label : str, default="BinIndex"
        Prefix identifying the index, e.g. a column name.
    """
    if verbose >= 1:
        print(
            f"[fastbinning] {label}: {n_bins} bins, "
            f"uniform width {uniform_bin_width:.6g}, "
            f"max cell load {max_cell_load}"
        )
