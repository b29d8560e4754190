import numpy as np

"""Lookup tables digitised from the published REBA scoring sheet.

Tables A and B are stored with one numpy axis per body segment, in the
order the scoring sheet lists them. Table C crosses Score A (rows) with
Score B (columns). All axes are zero-based: index ``i`` holds the entry
for code ``i + 1``.
"""

# === Table A (Neck, Trunk, Legs) ===
# Axis 0: neck 1..3 ; axis 1: trunk 1..5 ; axis 2: legs 1..4
TABLE_A_NECK_AXIS = np.array([1, 2, 3], dtype=int)
TABLE_A_TRUNK_AXIS = np.array([1, 2, 3, 4, 5], dtype=int)
TABLE_A_LEGS_AXIS = np.array([1, 2, 3, 4], dtype=int)
TABLE_A = np.array([
    [  # neck 1
        [1, 2, 3, 4],
        [2, 3, 4, 5],
        [2, 4, 5, 6],
        [3, 5, 6, 7],
        [4, 6, 7, 8],
    ],
    [  # neck 2
        [1, 2, 3, 4],
        [3, 4, 5, 6],
        [4, 5, 6, 7],
        [5, 6, 7, 8],
        [6, 7, 8, 9],
    ],
    [  # neck 3
        [3, 3, 5, 6],
        [4, 5, 6, 7],
        [5, 6, 7, 8],
        [6, 7, 8, 9],
        [7, 8, 9, 9],
    ],
], dtype=int)

# === Table B (Upper arm, Lower arm, Wrist) ===
# Axis 0: upper arm 1..6 ; axis 1: lower arm 1..2 ; axis 2: wrist 1..3
TABLE_B_UPPER_ARM_AXIS = np.array([1, 2, 3, 4, 5, 6], dtype=int)
TABLE_B_LOWER_ARM_AXIS = np.array([1, 2], dtype=int)
TABLE_B_WRIST_AXIS = np.array([1, 2, 3], dtype=int)
TABLE_B = np.array([
    [[1, 2, 2], [1, 2, 3]],
    [[1, 2, 3], [2, 3, 4]],
    [[3, 4, 5], [4, 5, 5]],
    [[4, 5, 5], [5, 6, 7]],
    [[6, 7, 8], [7, 8, 8]],
    [[7, 8, 8], [8, 9, 9]],
], dtype=int)

# === Table C (Score A vs Score B) ===
# Rows: Score A (1..12) ; Columns: Score B (1..12)
TABLE_C_AXIS = np.arange(1, 13, dtype=int)
TABLE_C = np.array([
    [1, 1, 1, 2, 3, 3, 4, 5, 6, 7, 7, 7],
    [1, 2, 2, 3, 4, 4, 5, 6, 6, 7, 7, 8],
    [2, 3, 3, 3, 4, 5, 6, 7, 7, 8, 8, 8],
    [3, 4, 4, 4, 5, 6, 7, 8, 8, 9, 9, 9],
    [4, 4, 4, 5, 6, 7, 8, 8, 9, 9, 9, 9],
    [6, 6, 6, 7, 8, 8, 9, 9, 10, 10, 10, 10],
    [7, 7, 7, 8, 9, 9, 9, 10, 10, 11, 11, 11],
    [8, 8, 8, 9, 10, 10, 10, 10, 11, 11, 11, 12],
    [9, 9, 9, 10, 10, 10, 11, 11, 11, 12, 12, 12],
    [10, 10, 10, 11, 11, 11, 11, 12, 12, 12, 12, 12],
    [11, 11, 11, 11, 12, 12, 12, 12, 12, 12, 12, 12],
    [12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12, 12],
], dtype=int)

# === Legacy flattened tables ===
# Stored by earlier evaluation records. Table A rows are neck composites,
# columns are addressed as trunk + legs * 4; Table B rows are upper-arm
# composites, columns lower arm + wrist * 2.
LEGACY_TABLE_A = np.array([
    [1, 2, 3, 4], [2, 3, 4, 5], [2, 4, 5, 6], [3, 5, 6, 7], [4, 6, 7, 8],
    [1, 2, 3, 4], [3, 4, 5, 6], [4, 5, 6, 7], [5, 7, 8, 9], [6, 8, 9, 9],
    [3, 3, 4, 5], [4, 5, 6, 7], [5, 6, 7, 8], [6, 7, 8, 9], [7, 9, 9, 9],
], dtype=int)
LEGACY_TABLE_A_TRUNK_STRIDE = 1
LEGACY_TABLE_A_LEGS_STRIDE = 4

LEGACY_TABLE_B = np.array([
    [1, 2, 3], [2, 3, 4], [3, 4, 5], [4, 5, 6], [5, 6, 7], [7, 8, 9],
    [2, 2, 3], [3, 3, 4], [4, 4, 5], [5, 5, 6], [6, 6, 7], [7, 7, 8],
], dtype=int)
LEGACY_TABLE_B_LOWER_ARM_STRIDE = 1
LEGACY_TABLE_B_WRIST_STRIDE = 2
LEGACY_TABLE_B_MAX_ROW = 7
LEGACY_TABLE_B_MAX_COLUMN = 2

# score read for any cell missing from a legacy table
LEGACY_MISSING_CELL = 1
