"""
Configuration for the discretizer.

This module provides the dataclass holding every option of
``NonUniformDiscretizer`` in a single, type-safe structure.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence


STRATEGIES = ("quantile", "uniform", "explicit")


# =============================================================================
# Binning Parameters Dataclass
# =============================================================================

@dataclass
class BinningParams:
    """
    Dataclass containing all discretizer options.

    Parameters
    ----------
    n_bins : int
        Number of finite bins per column for the "quantile" and
        "uniform" strategies. Quantile bins may end up fewer when
        quantiles coincide.
    strategy : str
        How boundaries are chosen: "quantile", "uniform" or "explicit".
    boundaries : sequence of float or None
        Boundaries shared by every column when strategy is "explicit".
    allow_nan : bool
        Whether NaN values are accepted; they are binned as -1.
    verbose : int
        Verbosity level (0=silent, 1=progress).
    """
    n_bins: int = 10
    strategy: str = "quantile"
    boundaries: Optional[Sequence[float]] = None
    allow_nan: bool = True
    verbose: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert parameters to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "BinningParams":
        """Create BinningParams from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in params.items() if k in valid_keys}
        return cls(**filtered)

    def validate(self) -> None:
        """
        Validate all parameters.

        Raises
        ------
        ValueError
            If any parameter is invalid.
        """
        if self.n_bins < 1:
            raise ValueError(f"n_bins must be >= 1, got {self.n_bins}")
        if self.strategy not in STRATEGIES:
            raise ValueError(
                f"strategy must be one of {STRATEGIES}, got {self.strategy!r}"
            )
        if self.strategy == "explicit" and self.boundaries is None:
            raise ValueError("strategy='explicit' requires boundaries")
        if self.verbose < 0:
            raise ValueError(f"verbose must be non-negative, got {self.verbose}")
