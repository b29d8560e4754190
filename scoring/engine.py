"""REBA scoring for a complete posture input.

``compute`` turns a :class:`PostureInput` into Score A, Score B, Score C,
the final score and its risk level. It is pure: the same posture always
yields an equal :class:`ScoreResult`, and composite indices outside a
table never raise: the standard layout clamps them, the flattened layout
reads the score its legacy records were stored with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from config import DEFAULT_TABLE_LAYOUT
from constants.grids import TABLE_C
from constants.thresholds import RISK_BANDS, RISK_LEVEL_INFO, RISK_TOP_LEVEL
from core.lookup import grid_lookup
from models.posture import PostureInput
from scoring.layouts import TableLayout, get_layout


class RiskLevel(str, Enum):
    NEGLIGIBLE = "negligible"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"

    @property
    def info(self) -> Dict[str, Any]:
        return RISK_LEVEL_INFO[self.value]

    @property
    def action_level(self) -> int:
        return self.info["action_level"]


@dataclass(frozen=True)
class GroupScore:
    name: str
    table_score: int
    adjustments: Dict[str, int] = field(default_factory=dict)

    @property
    def adjustment_total(self) -> int:
        return sum(self.adjustments.values())

    @property
    def total(self) -> int:
        return self.table_score + self.adjustment_total

    def as_dict(self) -> Dict[str, int]:
        out = {f"{self.name}_table": self.table_score, f"{self.name}_total": self.total}
        for key, val in self.adjustments.items():
            out[f"{self.name}_adj_{key}"] = val
        return out


@dataclass(frozen=True)
class ScoreResult:
    group_a: GroupScore
    group_b: GroupScore
    score_c: int
    activity_bonus: int
    final_score: int
    risk_level: RiskLevel
    layout: str = DEFAULT_TABLE_LAYOUT

    @property
    def score_a(self) -> int:
        return self.group_a.total

    @property
    def score_b(self) -> int:
        return self.group_b.total

    def to_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "layout": self.layout,
            "score_a": self.score_a,
            "score_b": self.score_b,
            "score_c": self.score_c,
            "activity_bonus": self.activity_bonus,
            "final_score": self.final_score,
            "risk_level": self.risk_level.value,
            "action_level": self.risk_level.action_level,
        }
        row.update(self.group_a.as_dict())
        row.update(self.group_b.as_dict())
        return row


def classify(final_score: int) -> RiskLevel:
    for upper, level in RISK_BANDS:
        if final_score <= upper:
            return RiskLevel(level)
    return RiskLevel(RISK_TOP_LEVEL)


def _score_group_a(posture: PostureInput, layout: TableLayout) -> GroupScore:
    neck = posture.neck.code - 1 + int(posture.neck.rotated) + int(posture.neck.side_bent)
    trunk = posture.trunk.code - 1 + int(posture.trunk.rotated) + int(posture.trunk.side_bent)
    legs = posture.legs.code - 1 + posture.legs.knee_flexion
    table_score = layout.table_a(neck, trunk, legs)
    return GroupScore("group_a", table_score, {"load_force": posture.load_force_a})


def _score_group_b(posture: PostureInput, layout: TableLayout) -> GroupScore:
    arm = posture.upper_arm
    # a supported arm at code 1 gives row -1; the layout decides how to read it
    upper_arm = arm.code - 1 + int(arm.abducted) - int(arm.supported) + int(arm.rotated)
    lower_arm = posture.lower_arm.code - 1
    wrist = posture.wrist.code - 1 + int(posture.wrist.deviated) + int(posture.wrist.rotated)
    table_score = layout.table_b(upper_arm, lower_arm, wrist)
    adjustments = {"load_force": posture.load_force_b, "coupling": posture.coupling}
    return GroupScore("group_b", table_score, adjustments)


def compute(posture: PostureInput, layout: Optional[TableLayout] = None) -> ScoreResult:
    layout = layout or get_layout(DEFAULT_TABLE_LAYOUT)
    group_a = _score_group_a(posture, layout)
    group_b = _score_group_b(posture, layout)
    score_c = grid_lookup(TABLE_C, group_a.total - 1, group_b.total - 1)
    activity_bonus = posture.activity.bonus
    final_score = score_c + activity_bonus
    return ScoreResult(
        group_a=group_a,
        group_b=group_b,
        score_c=score_c,
        activity_bonus=activity_bonus,
        final_score=final_score,
        risk_level=classify(final_score),
        layout=layout.name,
    )


__all__ = [
    "GroupScore",
    "RiskLevel",
    "ScoreResult",
    "classify",
    "compute",
]
