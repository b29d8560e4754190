"""Clamped index helpers for the REBA lookup grids.

Every grid read in the scoring pipeline goes through :func:`grid_lookup`,
which pins each index into its own axis before reading, so composite
indices built from posture codes and modifier flags can never fall off a
table edge.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

__all__ = [
    "clamp",
    "clamp_index",
    "grid_lookup",
    "grid_lookup_or",
]


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp_index(index: int, size: int) -> int:
    """Clamp ``index`` into ``[0, size - 1]``."""
    return int(clamp(int(index), 0, size - 1))


def grid_lookup(grid: np.ndarray, *indices: int) -> int:
    """Read ``grid`` at ``indices``, clamping each index to its axis."""
    if len(indices) != grid.ndim:
        raise ValueError(f"expected {grid.ndim} indices, got {len(indices)}")
    pos: Tuple[int, ...] = tuple(
        clamp_index(idx, size) for idx, size in zip(indices, grid.shape)
    )
    return int(grid[pos])


def grid_lookup_or(grid: np.ndarray, default: int, *indices: int) -> int:
    """Read ``grid`` at ``indices``, or return ``default`` when any index is off the grid."""
    if len(indices) != grid.ndim:
        raise ValueError(f"expected {grid.ndim} indices, got {len(indices)}")
    if any(not 0 <= int(idx) < size for idx, size in zip(indices, grid.shape)):
        return int(default)
    return int(grid[tuple(int(idx) for idx in indices)])
