from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))
from fastbinning import BinIndex, NonUniformDiscretizer  # type: ignore


def make_frame(n_rows: int, seed: int) -> pd.DataFrame:
    """Synthetic skewed features, with a few missing incomes."""
    rng = np.random.default_rng(seed)
    income = rng.lognormal(mean=10.5, sigma=0.6, size=n_rows)
    income[rng.random(n_rows) < 0.02] = np.nan
    return pd.DataFrame({
        "income": income,
        "age": rng.integers(18, 90, size=n_rows).astype(float),
        "session_seconds": rng.exponential(scale=300.0, size=n_rows),
    })


def parse_args():
    p = argparse.ArgumentParser()
    p.add_argument("--rows", type=int, default=10_000)
    p.add_argument("--bins", type=int, default=8)
    p.add_argument("--seed", type=int, default=42)
    return p.parse_args()


def main():
    args = parse_args()
    df = make_frame(args.rows, args.seed)

    # Quantile bins learned from the data, one index per column
    disc = NonUniformDiscretizer(n_bins=args.bins, strategy="quantile", verbose=1)
    binned = pd.DataFrame(disc.fit_transform(df), columns=df.columns, index=df.index)

    for name, edges in zip(df.columns, disc.bin_edges_):
        print(f"\n{name}: edges {np.round(edges, 2).tolist()}")
        print(binned[name].value_counts().sort_index().to_string())

    # Hand-picked age brackets
    brackets = BinIndex([18, 25, 35, 50, 65, 90])
    labels = ["<18", "18-24", "25-34", "35-49", "50-64", "65-89", "90+"]
    codes = brackets.search_array(df["age"])
    print("\nage brackets:")
    print(pd.Series(np.asarray(labels)[codes]).value_counts().reindex(labels, fill_value=0).to_string())


if __name__ == "__main__":
    main()
