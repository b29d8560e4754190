"""Seven-step REBA capture wizard.

A :class:`WizardSession` walks the assessor through the worksheet in a
fixed order and owns the session's :class:`PostureInput`. Every field
change re-scores the whole posture, so the live result is available from
the first step on. The last step only adds the activity modifiers before
``submit`` hands the evaluation to the host.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from models.posture import PostureInput
from reba_io.logger import get_logger
from scoring.engine import ScoreResult, compute
from scoring.layouts import TableLayout

__all__ = [
    "InvalidTransition",
    "STEPS",
    "SessionStatus",
    "Step",
    "StepInfo",
    "Submission",
    "WizardSession",
    "create_session",
    "fields_for",
]


class InvalidTransition(RuntimeError):
    """Raised when the session is asked to move somewhere it cannot go."""


class Step(IntEnum):
    NECK = 1
    TRUNK = 2
    LOAD_A = 3
    ARM = 4
    WRIST = 5
    LOAD_B_GRIP = 6
    RESULT = 7


class SessionStatus(str, Enum):
    ACTIVE = "active"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StepInfo:
    title: str
    description: str
    fields: Tuple[str, ...]


STEPS: Dict[Step, StepInfo] = {
    Step.NECK: StepInfo("Neck", "Neck posture", ("neck.code", "neck.rotated", "neck.side_bent")),
    Step.TRUNK: StepInfo(
        "Trunk",
        "Trunk and legs posture",
        ("trunk.code", "trunk.rotated", "trunk.side_bent", "legs.code", "legs.knee_flexion"),
    ),
    Step.LOAD_A: StepInfo("Load A", "Load and force", ("load_force_a",)),
    Step.ARM: StepInfo(
        "Arms",
        "Upper and lower arm posture",
        ("upper_arm.code", "upper_arm.abducted", "upper_arm.supported", "upper_arm.rotated", "lower_arm.code"),
    ),
    Step.WRIST: StepInfo("Wrists", "Wrist posture", ("wrist.code", "wrist.deviated", "wrist.rotated")),
    Step.LOAD_B_GRIP: StepInfo("Load B", "Load, force and coupling", ("load_force_b", "coupling")),
    Step.RESULT: StepInfo(
        "Result",
        "Final score",
        ("activity.static_posture", "activity.repetitive", "activity.rapid_change"),
    ),
}


def fields_for(step: Step) -> Tuple[str, ...]:
    return STEPS[step].fields


@dataclass(frozen=True)
class Submission:
    posture: PostureInput
    result: ScoreResult

    def to_row(self) -> Dict[str, Any]:
        row = self.posture.to_row()
        row.update(self.result.to_row())
        return row


CompleteCallback = Callable[[Submission], None]
CancelCallback = Callable[[], None]


class WizardSession:
    def __init__(
        self,
        posture: Optional[PostureInput] = None,
        on_complete: Optional[CompleteCallback] = None,
        on_cancel: Optional[CancelCallback] = None,
        layout: Optional[TableLayout] = None,
    ) -> None:
        self.session_id = uuid.uuid4().hex[:12]
        self.posture = posture or PostureInput()
        self.on_complete = on_complete
        self.on_cancel = on_cancel
        self.layout = layout
        self.step = Step.NECK
        self.status = SessionStatus.ACTIVE
        self._result = compute(self.posture, self.layout)
        self.log = get_logger("reba.wizard", session=self.session_id)
        self.log.info("session started", extra={"step": self.step})

    @property
    def result(self) -> ScoreResult:
        return self._result

    @property
    def is_active(self) -> bool:
        return self.status is SessionStatus.ACTIVE

    @property
    def progress(self) -> float:
        return int(self.step) / len(Step)

    @property
    def info(self) -> StepInfo:
        return STEPS[self.step]

    def _require_active(self, action: str) -> None:
        if not self.is_active:
            raise InvalidTransition(f"cannot {action}: session is {self.status.value}")

    def set_field(self, path: str, value: Any) -> ScoreResult:
        self._require_active("set a field")
        self.posture.set(path, value)
        self._result = compute(self.posture, self.layout)
        self.log.debug(
            "field set",
            extra={"step": self.step, "field": path, "value": value, "final_score": self._result.final_score},
        )
        return self._result

    def next(self) -> Step:
        self._require_active("advance")
        if self.step is Step.RESULT:
            raise InvalidTransition("already at the result step; submit instead")
        self.step = Step(self.step + 1)
        self.log.info("step advanced", extra={"step": self.step})
        return self.step

    def previous(self) -> Step:
        """Go back one step; on the first step this cancels the session."""
        self._require_active("go back")
        if self.step is Step.NECK:
            self.cancel()
            return self.step
        self.step = Step(self.step - 1)
        self.log.info("step reverted", extra={"step": self.step})
        return self.step

    def cancel(self) -> None:
        self._require_active("cancel")
        self.status = SessionStatus.CANCELLED
        self.log.info("session cancelled", extra={"step": self.step})
        if self.on_cancel is not None:
            self.on_cancel()

    def submit(self) -> Submission:
        self._require_active("submit")
        if self.step is not Step.RESULT:
            raise InvalidTransition(f"submit is only allowed on the result step, not step {int(self.step)}")
        submission = Submission(posture=self.posture.snapshot(), result=self._result)
        self.status = SessionStatus.SUBMITTED
        self.log.info(
            "session submitted",
            extra={"final_score": self._result.final_score, "risk_level": self._result.risk_level},
        )
        if self.on_complete is not None:
            self.on_complete(submission)
        return submission


def create_session(
    initial: Optional[Mapping[str, Any]] = None,
    on_complete: Optional[CompleteCallback] = None,
    on_cancel: Optional[CancelCallback] = None,
    layout: Optional[TableLayout] = None,
) -> WizardSession:
    posture = PostureInput.from_mapping(initial) if initial else PostureInput()
    return WizardSession(posture, on_complete=on_complete, on_cancel=on_cancel, layout=layout)
