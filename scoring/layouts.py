"""Table-shape strategies for the REBA Table A and Table B reads.

``standard`` addresses the published tables on independent axes.
``flattened`` reproduces the addressing used by older evaluation records,
where trunk and legs (and lower arm and wrist) share a single column
index. It is kept to re-score those records and compare both readings.
Indices are not clamped there: a cell missing from a legacy table reads as
``LEGACY_MISSING_CELL``, the score those records were stored with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from constants.grids import (
    LEGACY_TABLE_A,
    LEGACY_TABLE_A_LEGS_STRIDE,
    LEGACY_TABLE_A_TRUNK_STRIDE,
    LEGACY_TABLE_B,
    LEGACY_TABLE_B_LOWER_ARM_STRIDE,
    LEGACY_TABLE_B_MAX_COLUMN,
    LEGACY_TABLE_B_MAX_ROW,
    LEGACY_TABLE_B_WRIST_STRIDE,
    LEGACY_MISSING_CELL,
    TABLE_A,
    TABLE_B,
)
from core.lookup import grid_lookup, grid_lookup_or

__all__ = [
    "FlattenedLayout",
    "LAYOUTS",
    "StandardLayout",
    "TableLayout",
    "get_layout",
]


@dataclass(frozen=True)
class TableLayout:
    name: str

    def table_a(self, neck: int, trunk: int, legs: int) -> int:
        raise NotImplementedError

    def table_b(self, upper_arm: int, lower_arm: int, wrist: int) -> int:
        raise NotImplementedError


@dataclass(frozen=True)
class StandardLayout(TableLayout):
    name: str = "standard"

    def table_a(self, neck: int, trunk: int, legs: int) -> int:
        return grid_lookup(TABLE_A, neck, trunk, legs)

    def table_b(self, upper_arm: int, lower_arm: int, wrist: int) -> int:
        return grid_lookup(TABLE_B, upper_arm, lower_arm, wrist)


@dataclass(frozen=True)
class FlattenedLayout(TableLayout):
    name: str = "flattened"

    def table_a(self, neck: int, trunk: int, legs: int) -> int:
        column = trunk * LEGACY_TABLE_A_TRUNK_STRIDE + legs * LEGACY_TABLE_A_LEGS_STRIDE
        return grid_lookup_or(LEGACY_TABLE_A, LEGACY_MISSING_CELL, neck, column)

    def table_b(self, upper_arm: int, lower_arm: int, wrist: int) -> int:
        column = lower_arm * LEGACY_TABLE_B_LOWER_ARM_STRIDE + wrist * LEGACY_TABLE_B_WRIST_STRIDE
        row = min(upper_arm, LEGACY_TABLE_B_MAX_ROW)
        column = min(column, LEGACY_TABLE_B_MAX_COLUMN)
        return grid_lookup_or(LEGACY_TABLE_B, LEGACY_MISSING_CELL, row, column)


LAYOUTS: Dict[str, TableLayout] = {
    layout.name: layout for layout in (StandardLayout(), FlattenedLayout())
}


def get_layout(name: str) -> TableLayout:
    try:
        return LAYOUTS[name]
    except KeyError:
        raise ValueError(f"unknown table layout {name!r}; choose from {sorted(LAYOUTS)}") from None
