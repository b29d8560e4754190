"""Tag a scored evaluation with occupational risk factors."""

from __future__ import annotations

from typing import List

from constants.thresholds import RISK_FACTOR_RULES
from models.posture import PostureInput
from scoring.engine import ScoreResult

__all__ = ["identify_risk_factors"]


def identify_risk_factors(posture: PostureInput, result: ScoreResult) -> List[str]:
    """Return the risk factors triggered by ``posture``, in rule order, without repeats."""
    factors: List[str] = []
    for source, minimum, factor in RISK_FACTOR_RULES:
        if hasattr(result, source):
            value = getattr(result, source)
        else:
            value = posture.get(source)
        if value >= minimum and factor not in factors:
            factors.append(factor)
    return factors
