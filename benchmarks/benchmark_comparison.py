"""
Benchmark: BinIndex vs bisect and numpy.searchsorted

This script times scalar and vectorized binning on boundary sets with
different shapes:
- Uniform: equally spaced boundaries
- Lognormal: boundaries at quantiles of a skewed distribution
- Clustered: most boundaries packed into a small part of the range
"""

import argparse
import time
from bisect import bisect_right

import numpy as np

import sys
from pathlib import Path
_repo_root = Path(__file__).resolve().parents[1]
src_path = str(_repo_root / "src")
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from fastbinning import BinIndex


def print_header(title: str):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def print_subheader(title: str):
    """Print a formatted subheader."""
    print(f"\n--- {title} ---")


def make_boundaries(kind: str, n: int, rng: np.random.Generator) -> np.ndarray:
    """Build n + 1 strictly increasing boundaries of the given kind."""
    if kind == "uniform":
        return np.linspace(0.0, 1.0, n + 1)
    if kind == "lognormal":
        sample = rng.lognormal(size=50 * n)
        return np.unique(np.quantile(sample, np.linspace(0.0, 1.0, n + 1)))
    if kind == "clustered":
        dense = np.sort(rng.uniform(0.0, 0.01, size=n - 1))
        return np.unique(np.concatenate([dense, [0.5, 1.0]]))
    raise ValueError(f"Unknown boundary kind: {kind}")


def benchmark_boundaries(boundaries: np.ndarray, n_queries: int, rng: np.random.Generator):
    """Time every method on one boundary set and check they agree."""
    lo, hi = boundaries[0], boundaries[-1]
    values = rng.uniform(lo - 0.05 * (hi - lo), hi + 0.05 * (hi - lo), size=n_queries)
    scalar_values = values.tolist()
    bounds = boundaries.tolist()

    start = time.time()
    index = BinIndex(boundaries)
    build_time = time.time() - start
    print(f"  Build: {build_time * 1e3:.2f} ms "
          f"(max cell load {index.max_cell_load})")

    results = {}

    start = time.time()
    ours = [index.search(v) for v in scalar_values]
    results["BinIndex.search"] = time.time() - start

    start = time.time()
    reference = [bisect_right(bounds, v) for v in scalar_values]
    results["bisect_right"] = time.time() - start

    start = time.time()
    ours_vec = index.search_array(values)
    results["BinIndex.search_array"] = time.time() - start

    start = time.time()
    reference_vec = np.searchsorted(boundaries, values, side="right")
    results["np.searchsorted"] = time.time() - start

    assert ours == reference, "scalar results disagree"
    assert np.array_equal(ours_vec, reference_vec), "vectorized results disagree"

    for name, elapsed in results.items():
        print(f"  {name:<24s} {elapsed * 1e9 / n_queries:10.1f} ns/query")

    return results


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--queries", type=int, default=200_000)
    p.add_argument("--sizes", type=int, nargs="+", default=[16, 256, 4096, 65536])
    p.add_argument("--seed", type=int, default=42)
    return p.parse_args()


def main():
    args = parse_args()
    rng = np.random.default_rng(args.seed)

    print_header("fastbinning benchmark")
    for kind in ("uniform", "lognormal", "clustered"):
        for n in args.sizes:
            boundaries = make_boundaries(kind, n, rng)
            print_subheader(f"{kind}: {len(boundaries) - 1} bins")
            benchmark_boundaries(boundaries, args.queries, rng)


if __name__ == "__main__":
    main()
