"""
Non-uniform binning with average constant-time lookup.

Based on the paper 'Non-uniform quantization with linear average-case
computation time' by Oswaldo Cadenas and Graham M. Megson
(https://arxiv.org/abs/2108.08228).

A ``BinIndex`` lays m equal-width uniform cells over the range of the
m + 1 boundaries and records how many interior boundaries land in each
cell. A query finds its uniform cell with one division and then only has
to look at the few boundaries inside that cell.
"""

from __future__ import annotations

from bisect import bisect_right
import numbers
import operator
from typing import Tuple

import numpy as np

from .utils import (
    ArrayLike,
    ValidationError,
    check_boundaries,
    check_values,
    log_index_summary,
)


def _precalculate(boundaries: np.ndarray) -> Tuple[float, np.ndarray, np.ndarray]:
    """
    Build the uniform-cell histogram of the interior boundaries.

    Parameters
    ----------
    boundaries : np.ndarray of shape (m + 1,)
        Validated, strictly increasing boundaries.

    Returns
    -------
    uniform_bin_width : float
        Width of one uniform cell.
    histogram : np.ndarray of shape (m,)
        Number of interior boundaries in each uniform cell.
    cumulative_histogram : np.ndarray of shape (m + 1,)
        Prefix sum of ``histogram`` starting at 1 for the first boundary.
    """
    m = len(boundaries) - 1
    first = float(boundaries[0])
    uniform_bin_width = (float(boundaries[m]) - first) / m

    if not (np.isfinite(uniform_bin_width) and uniform_bin_width > 0):
        raise ValidationError(
            f"Boundary range [{first!r}, {float(boundaries[m])!r}] cannot be "
            f"split into {m} uniform cells of positive finite width."
        )

    histogram = np.zeros(m, dtype=np.intp)

    # Uniform cells are numbered 1..m. Both the cell edges and the boundaries
    # are sorted, so one forward sweep assigns every interior boundary.
    # Cells are left-closed like the query: a boundary on the lower edge of a
    # cell belongs to that cell.
    cell = 1
    for b in boundaries[1:m].tolist():
        position = (b - first) / uniform_bin_width
        while position >= cell and cell < m:
            cell += 1
        histogram[cell - 1] += 1

    # The first boundary is excluded from the histogram, hence the bias of 1
    cumulative_histogram = np.empty(m + 1, dtype=np.intp)
    cumulative_histogram[0] = 1
    cumulative_histogram[1:] = 1 + np.cumsum(histogram)

    histogram.flags.writeable = False
    cumulative_histogram.flags.writeable = False
    return uniform_bin_width, histogram, cumulative_histogram


class BinIndex:
    """
    Immutable index mapping scalars to non-uniform bins.

    Bins are numbered as follows for boundaries ``b[0] < ... < b[m]``:

    - 0 for values below ``b[0]``,
    - k for values in ``[b[k-1], b[k])``, 1 <= k <= m,
    - m + 1 for values at or above ``b[m]``.

    Equivalently, the bin number of a value is the count of boundaries
    less than or equal to it.

    Construction validates the boundaries and runs the precalculation in
    O(m) time and space; there is no other way to obtain an instance.

    Parameters
    ----------
    boundaries : array-like of shape (m + 1,)
        Strictly increasing finite boundaries, at least two.
    verbose : int, default=0
        Verbosity level (0=silent, 1=summary after construction).

    Raises
    ------
    ValidationError
        If the boundaries are not strictly increasing, not finite, or
        fewer than two.

    Examples
    --------
    >>> index = BinIndex([2, 11, 19, 20, 21, 27, 29, 30])
    >>> index.search(13.2)
    2
    >>> index.search(30)
    8
    """

    __slots__ = (
        "_boundaries",
        "_histogram",
        "_cumulative_histogram",
        "_uniform_bin_width",
        "_max_cell_load",
        "_bounds",
        "_hist",
        "_cum",
    )

    def __init__(self, boundaries: ArrayLike, *, verbose: int = 0):
        b = check_boundaries(boundaries)
        width, histogram, cumulative = _precalculate(b)

        setattr_ = object.__setattr__
        setattr_(self, "_boundaries", b)
        setattr_(self, "_histogram", histogram)
        setattr_(self, "_cumulative_histogram", cumulative)
        setattr_(self, "_uniform_bin_width", width)
        setattr_(self, "_max_cell_load", int(histogram.max()) if histogram.size else 0)
        # Plain Python copies for the scalar query path
        setattr_(self, "_bounds", tuple(b.tolist()))
        setattr_(self, "_hist", tuple(histogram.tolist()))
        setattr_(self, "_cum", tuple(cumulative.tolist()))

        log_index_summary(
            self.n_bins, width, self._max_cell_load, verbose=verbose
        )

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self):
        return (type(self), (self._bounds,))

    def __len__(self) -> int:
        return len(self._bounds)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_bins={self.n_bins}, "
            f"range=[{self._bounds[0]!r}, {self._bounds[-1]!r}], "
            f"max_cell_load={self._max_cell_load})"
        )

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def n_bins(self) -> int:
        """Number of finite bins m (one less than the number of boundaries)."""
        return len(self._bounds) - 1

    @property
    def boundaries(self) -> np.ndarray:
        return self._boundaries

    @property
    def histogram(self) -> np.ndarray:
        return self._histogram

    @property
    def cumulative_histogram(self) -> np.ndarray:
        return self._cumulative_histogram

    @property
    def uniform_bin_width(self) -> float:
        return self._uniform_bin_width

    @property
    def max_cell_load(self) -> int:
        """Largest number of interior boundaries sharing one uniform cell."""
        return self._max_cell_load

    def boundary(self, index: int) -> float:
        """
        Return ``boundaries[index]``.

        Raises
        ------
        IndexError
            If ``index`` is outside ``[0, m]``. Negative indices are not
            interpreted from the end.
        """
        i = operator.index(index)
        if not 0 <= i < len(self._bounds):
            raise IndexError(
                f"boundary index {i} out of range [0, {self.n_bins}]"
            )
        return self._bounds[i]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def search(self, value: float) -> int:
        """
        Return the bin number of a value.

        Runs in O(1) time on average and O(log m) in the worst case,
        using O(1) space.

        Parameters
        ----------
        value : float
            Value to classify. Infinite values fall into the outer bins.

        Returns
        -------
        bin : int
            Bin number in ``[0, m + 1]``, see the class docstring.

        Raises
        ------
        ValueError
            If ``value`` is NaN.
        TypeError
            If ``value`` is not a real number, e.g. a string.
        """
        if not isinstance(value, numbers.Real):
            raise TypeError(
                f"value must be a real number, got {type(value).__name__}"
            )
        value = float(value)
        if value != value:
            raise ValueError("Cannot bin NaN.")

        b = self._bounds
        if value < b[0]:
            return 0
        m = len(b) - 1
        if value >= b[m]:
            return m + 1

        # b[0] <= value < b[m], so the quotient is non-negative
        cell = int((value - b[0]) / self._uniform_bin_width) + 1
        if cell > m:
            cell = m

        h = self._hist[cell - 1]
        r = self._cum[cell - 1]

        if h == 0:
            return r
        if h == 1:
            return r + 1 if value >= b[r] else r
        if h == 2:
            if value >= b[r + 1]:
                return r + 2
            if value < b[r]:
                return r
            return r + 1
        # Smallest position in [r, r + h) whose boundary exceeds value
        return bisect_right(b, value, r, r + h)

    def search_array(self, values: ArrayLike, *, allow_nan: bool = False) -> np.ndarray:
        """
        Return the bin numbers of an array of values.

        The uniform cell of every value is found in one vectorized step;
        the refinement inside the cells is a vectorized binary search of
        log2(max_cell_load) passes.

        Parameters
        ----------
        values : array-like
            Values to classify, any shape.
        allow_nan : bool, default=False
            If True, NaN values are mapped to -1 instead of raising.

        Returns
        -------
        bins : np.ndarray of dtype intp
            Bin numbers with the same shape as ``values``.

        Raises
        ------
        ValueError
            If ``values`` contains NaN and ``allow_nan`` is False.
        """
        x = check_values(values, allow_nan=allow_nan)
        b = self._boundaries
        m = len(b) - 1

        nan_mask = np.isnan(x)
        below = x < b[0]
        above = x >= b[m]
        inner = ~(below | above | nan_mask)

        out = np.empty(x.shape, dtype=np.intp)
        out[below] = 0
        out[above] = m + 1
        out[nan_mask] = -1

        xi = x[inner]
        cells = ((xi - b[0]) / self._uniform_bin_width).astype(np.intp)
        np.minimum(cells, m - 1, out=cells)
        h = self._histogram[cells]
        # Binary search for the first boundary above each value in [r, r + h)
        lo = self._cumulative_histogram[cells]
        hi = lo + h
        for _ in range(self._max_cell_load.bit_length()):
            active = lo < hi
            mid = (lo + hi) // 2
            go = active & (xi >= b[mid])
            lo = np.where(go, mid + 1, lo)
            hi = np.where(active & ~go, mid, hi)
        out[inner] = lo

        return out
