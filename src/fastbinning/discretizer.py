"""
Column-wise discretization on top of ``BinIndex``.

Each column is binned independently: boundaries are derived from the
training data (or given explicitly), one ``BinIndex`` is built per column,
and ``transform`` maps values to bin numbers in average constant time
per value.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, List, Optional

import numpy as np

from .base import BinningParams
from .bin_index import BinIndex
from .utils import ArrayLike, NotFittedError, check_values, log_message


class NonUniformDiscretizer:
    """
    Fit/transform discretizer with non-uniform bins per column.

    Bin numbers follow ``BinIndex``: 0 below the first boundary, k for
    ``[b[k-1], b[k])`` and m + 1 at or above the last boundary. For the
    "quantile" and "uniform" strategies the last boundary is nudged just
    above the column maximum, so training values land in bins 1..m.
    Missing values are binned as -1 when ``allow_nan`` is set.

    Parameters
    ----------
    params : BinningParams, optional
        Configuration. Defaults to ``BinningParams()``.
    **overrides
        Individual fields of ``BinningParams`` overriding ``params``.

    Attributes
    ----------
    bin_indices_ : list of BinIndex
        One index per fitted column.
    n_features_ : int
        Number of columns seen during fit.
    """

    def __init__(self, params: Optional[BinningParams] = None, **overrides: Any):
        self.params = replace(params or BinningParams(), **overrides)
        self.params.validate()

        # State
        self.bin_indices_: Optional[List[BinIndex]] = None
        self.n_features_: Optional[int] = None

    def _column_boundaries(self, column: np.ndarray) -> np.ndarray:
        p = self.params
        if p.strategy == "explicit":
            return np.asarray(p.boundaries, dtype=np.float64)

        finite = column[np.isfinite(column)]
        if finite.size == 0:
            return np.array([-0.5, 0.5])

        lo, hi = finite.min(), finite.max()
        if lo == hi:
            # Constant column
            return np.array([lo - 0.5, hi + 0.5])

        if p.strategy == "quantile":
            edges = np.quantile(finite, np.linspace(0.0, 1.0, p.n_bins + 1))
        else:
            edges = np.linspace(lo, hi, p.n_bins + 1)

        edges = np.unique(edges)
        edges[-1] = np.nextafter(edges[-1], np.inf)
        return edges

    def fit(self, X: ArrayLike) -> "NonUniformDiscretizer":
        """
        Compute boundaries and build one ``BinIndex`` per column.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, n_features)
            Training data. Infinite values are ignored when choosing
            boundaries.

        Returns
        -------
        self : NonUniformDiscretizer
            Fitted discretizer.
        """
        X = check_values(X, ensure_2d=True, allow_nan=self.params.allow_nan)
        n_features = X.shape[1]

        indices = []
        for feature_idx in range(n_features):
            edges = self._column_boundaries(X[:, feature_idx])
            index = BinIndex(edges)
            indices.append(index)
            log_message(
                f"column {feature_idx}: {index.n_bins} bins, "
                f"max cell load {index.max_cell_load}",
                verbose=self.params.verbose,
            )

        self.bin_indices_ = indices
        self.n_features_ = n_features
        return self

    def transform(self, X: ArrayLike) -> np.ndarray:
        """
        Transform values to bin numbers.

        Parameters
        ----------
        X : array-like of shape (n_samples,) or (n_samples, n_features)
            Values to bin. 1D input is treated as a single column and
            gives 1D output.

        Returns
        -------
        X_binned : np.ndarray of dtype intp
            Bin numbers, same shape as ``X``.
        """
        if self.bin_indices_ is None:
            raise NotFittedError(
                f"This {type(self).__name__} instance is not fitted yet. "
                "Call 'fit' with appropriate arguments before using it."
            )

        X = check_values(X, allow_nan=self.params.allow_nan)
        is_1d = X.ndim == 1
        X = check_values(X, ensure_2d=True)
        if X.shape[1] != self.n_features_:
            raise ValueError(
                f"X has {X.shape[1]} features, but {type(self).__name__} "
                f"was fitted with {self.n_features_} features."
            )

        X_binned = np.empty(X.shape, dtype=np.intp)
        for feature_idx, index in enumerate(self.bin_indices_):
            X_binned[:, feature_idx] = index.search_array(
                X[:, feature_idx], allow_nan=self.params.allow_nan
            )

        if is_1d:
            return X_binned.ravel()
        return X_binned

    def fit_transform(self, X: ArrayLike) -> np.ndarray:
        """Fit and transform in one step."""
        return self.fit(X).transform(X)

    @property
    def bin_edges_(self) -> List[np.ndarray]:
        """Boundaries of every fitted column."""
        if self.bin_indices_ is None:
            raise NotFittedError(
                f"This {type(self).__name__} instance is not fitted yet."
            )
        return [index.boundaries for index in self.bin_indices_]
