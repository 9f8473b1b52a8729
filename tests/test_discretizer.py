"""
Test suite for the column-wise NonUniformDiscretizer.
"""

import numpy as np
import pandas as pd
import pytest

import sys
from pathlib import Path
_repo_root = Path(__file__).resolve().parents[1]
src_path = str(_repo_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from fastbinning import BinIndex, BinningParams, NonUniformDiscretizer, NotFittedError


def test_quantile_bins_are_balanced():
    """Test that quantile bins hold similar counts on continuous data."""
    rng = np.random.default_rng(0)
    X = rng.lognormal(size=(1000, 3))
    disc = NonUniformDiscretizer(n_bins=8, strategy="quantile")
    binned = disc.fit_transform(X)

    assert binned.shape == X.shape
    assert binned.min() >= 1
    assert binned.max() <= 8
    for col in range(3):
        counts = np.bincount(binned[:, col], minlength=9)[1:]
        assert np.all(counts >= 115)
        assert np.all(counts <= 135)


def test_uniform_strategy_edges():
    """Test equal-width edges and the outer bins for unseen data."""
    X = np.linspace(0.0, 10.0, 101)
    disc = NonUniformDiscretizer(n_bins=5, strategy="uniform").fit(X)

    edges = disc.bin_edges_[0]
    assert np.allclose(edges, [0.0, 2.0, 4.0, 6.0, 8.0, 10.0])
    assert edges[-1] > 10.0

    assert disc.transform([0.0, 1.9, 2.0, 10.0]).tolist() == [1, 1, 2, 5]
    assert disc.transform([-1.0, 11.0]).tolist() == [0, 6]


def test_explicit_strategy_matches_bin_index():
    """Test that explicit boundaries are used unchanged for every column."""
    boundaries = [2, 11, 19, 20, 21, 27, 29, 30]
    X = np.array([[-4.0, 13.2], [19.9, 20.0], [29.9, 99.0]])
    disc = NonUniformDiscretizer(strategy="explicit", boundaries=boundaries)
    binned = disc.fit_transform(X)

    index = BinIndex(boundaries)
    assert np.array_equal(binned, index.search_array(X))
    assert binned.tolist() == [[0, 2], [3, 4], [7, 8]]


def test_constant_and_empty_columns():
    """Test that constant and all-NaN columns get a single bin."""
    X = np.array([[5.0, np.nan], [5.0, np.nan], [5.0, np.nan]])
    disc = NonUniformDiscretizer().fit(X)
    assert disc.bin_edges_[0].tolist() == [4.5, 5.5]
    assert disc.bin_edges_[1].tolist() == [-0.5, 0.5]
    assert disc.transform(X).tolist() == [[1, -1], [1, -1], [1, -1]]


def test_nan_is_binned_as_minus_one():
    """Test the missing-value code."""
    X = np.array([1.0, 2.0, np.nan, 3.0, 4.0])
    binned = NonUniformDiscretizer(n_bins=2).fit_transform(X)
    assert binned[2] == -1
    assert np.all(binned[[0, 1, 3, 4]] >= 1)


def test_nan_rejected_when_not_allowed():
    """Test allow_nan=False."""
    X = np.array([1.0, 2.0, np.nan])
    disc = NonUniformDiscretizer(allow_nan=False)
    with pytest.raises(ValueError, match="NaN"):
        disc.fit(X)


def test_transform_before_fit_raises():
    """Test NotFittedError."""
    disc = NonUniformDiscretizer()
    with pytest.raises(NotFittedError):
        disc.transform([[1.0]])
    with pytest.raises(NotFittedError):
        disc.bin_edges_


def test_transform_feature_mismatch():
    """Test that a different column count is rejected."""
    disc = NonUniformDiscretizer(n_bins=3).fit(np.random.rand(20, 2))
    with pytest.raises(ValueError, match="features"):
        disc.transform(np.random.rand(5, 3))


def test_one_dimensional_round_shape():
    """Test that 1D input gives 1D output."""
    X = np.arange(10, dtype=float)
    disc = NonUniformDiscretizer(n_bins=2)
    out = disc.fit_transform(X)
    assert out.shape == (10,)
    assert disc.n_features_ == 1


def test_accepts_dataframe():
    """Test pandas DataFrame input."""
    df = pd.DataFrame({"a": np.arange(20.0), "b": np.arange(20.0) ** 2})
    binned = NonUniformDiscretizer(n_bins=4).fit_transform(df)
    assert binned.shape == (20, 2)
    assert binned.min() == 1
    assert binned.max() == 4


def test_params_and_overrides():
    """Test that keyword overrides take precedence over params."""
    base = BinningParams(n_bins=4, strategy="quantile")
    disc = NonUniformDiscretizer(base, strategy="uniform")
    assert disc.params.n_bins == 4
    assert disc.params.strategy == "uniform"
    assert base.strategy == "quantile"


def test_invalid_params_rejected():
    """Test validation at construction."""
    with pytest.raises(ValueError):
        NonUniformDiscretizer(n_bins=0)
    with pytest.raises(TypeError):
        NonUniformDiscretizer(max_bins=4)
