"""Code ranges and score cut-offs from the REBA worksheet.

The dictionaries below collect the discrete choices offered for every body
segment, the final-score bands of the REBA action levels and the rules used
to tag an evaluation with occupational risk factors.
"""

# --- Posture code ranges (inclusive) ---
# Keys are dotted field paths on the posture input model.
CODE_RANGES = {
    "neck.code": (1, 3),
    "trunk.code": (1, 5),
    "legs.code": (1, 2),
    "legs.knee_flexion": (0, 2),   # +1 for 30-60 deg, +2 above 60 deg
    "load_force_a": (0, 3),
    "upper_arm.code": (1, 6),
    "lower_arm.code": (1, 2),
    "wrist.code": (1, 4),
    "load_force_b": (0, 3),
    "coupling": (0, 3),            # 0 good, 1 fair, 2 poor, 3 unacceptable
}

FLAG_FIELDS = (
    "neck.rotated",
    "neck.side_bent",
    "trunk.rotated",
    "trunk.side_bent",
    "upper_arm.abducted",
    "upper_arm.supported",
    "upper_arm.rotated",
    "wrist.deviated",
    "wrist.rotated",
    "activity.static_posture",
    "activity.repetitive",
    "activity.rapid_change",
)

# --- Final score bands (upper bound inclusive) ---
RISK_BANDS = (
    (1, "negligible"),
    (3, "low"),
    (7, "medium"),
    (10, "high"),
)
RISK_TOP_LEVEL = "very_high"

RISK_LEVEL_INFO = {
    "negligible": {
        "label": "Negligible",
        "action_level": 0,
        "action": "No action necessary",
        "color": "#22c55e",
    },
    "low": {
        "label": "Low",
        "action_level": 1,
        "action": "Action may be necessary",
        "color": "#84cc16",
    },
    "medium": {
        "label": "Medium",
        "action_level": 2,
        "action": "Action necessary",
        "color": "#eab308",
    },
    "high": {
        "label": "High",
        "action_level": 3,
        "action": "Action necessary soon",
        "color": "#f97316",
    },
    "very_high": {
        "label": "Very high",
        "action_level": 4,
        "action": "Action necessary now",
        "color": "#ef4444",
    },
}

# --- Risk factor tagging ---
# (field path or result attribute, minimum value, factor tag)
RISK_FACTOR_RULES = (
    ("neck.code", 2, "awkward_posture"),
    ("trunk.code", 3, "awkward_posture"),
    ("upper_arm.code", 4, "prolonged_position"),
    ("load_force_a", 2, "load_handling"),
    ("load_force_b", 2, "load_handling"),
    ("activity_bonus", 1, "repetitive_movements"),
)
