"""Re-score stored REBA evaluations, e.g. after a table correction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

from models.posture import PostureInput
from reba_io.logger import get_logger
from scoring.engine import ScoreResult, compute
from scoring.layouts import TableLayout

log = get_logger("reba.batch")

__all__ = [
    "RescoreOutcome",
    "rescore",
]


@dataclass
class RescoreOutcome:
    record_id: Any
    previous_final: Optional[int]
    result: ScoreResult

    @property
    def changed(self) -> bool:
        return self.previous_final is not None and self.previous_final != self.result.final_score

    def to_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {
            "id": self.record_id,
            "previous_final_score": self.previous_final,
            "changed": self.changed,
        }
        row.update(self.result.to_row())
        return row


def _record_posture(record: Mapping[str, Any], record_id: Any) -> PostureInput:
    snapshot = record.get("input")
    if not isinstance(snapshot, Mapping):
        raise ValueError(f"record {record_id!r} has no 'input' mapping")
    try:
        return PostureInput.from_mapping(snapshot)
    except (KeyError, ValueError) as exc:
        raise ValueError(f"record {record_id!r}: {exc}") from exc


def _stored_final(record: Mapping[str, Any], record_id: Any) -> Optional[int]:
    stored = record.get("result")
    if stored is None:
        return None
    if not isinstance(stored, Mapping):
        raise ValueError(f"record {record_id!r} has a 'result' that is not a mapping")
    previous = stored.get("final_score")
    try:
        return int(previous) if previous is not None else None
    except (TypeError, ValueError) as exc:
        raise ValueError(f"record {record_id!r}: stored final_score {previous!r} is not a number") from exc


def rescore(records: Iterable[Mapping[str, Any]], layout: Optional[TableLayout] = None) -> List[RescoreOutcome]:
    outcomes: List[RescoreOutcome] = []
    for idx, record in enumerate(records):
        record_id = record.get("id", idx)
        posture = _record_posture(record, record_id)
        previous = _stored_final(record, record_id)
        outcome = RescoreOutcome(
            record_id=record_id,
            previous_final=previous,
            result=compute(posture, layout),
        )
        if outcome.changed:
            log.info(
                "final score changed",
                extra={
                    "record": record_id,
                    "previous": outcome.previous_final,
                    "current": outcome.result.final_score,
                },
            )
        outcomes.append(outcome)
    return outcomes
