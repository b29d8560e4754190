"""Terminal front end for the REBA wizard."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from constants.thresholds import CODE_RANGES
from core.wizard import Step, Submission, WizardSession
from scoring.engine import ScoreResult

Ask = Callable[[str], str]
Write = Callable[[str], None]

# Choice labels shown for integer codes.
OPTION_LABELS: Dict[str, List[str]] = {
    "neck.code": ["0-20 deg flexion", "20-45 deg flexion or extension", "45 deg or more flexion or extension"],
    "trunk.code": ["Upright", "0-20 deg flexion/extension", "20-60 deg flexion/extension", "60 deg or more flexion", "Extension"],
    "legs.code": ["Bilateral weight bearing", "Unilateral or unstable support"],
    "legs.knee_flexion": ["Knees straight", "30-60 deg knee flexion", "Over 60 deg knee flexion"],
    "load_force_a": ["Under 5 kg", "5-10 kg", "Over 10 kg", "Over 10 kg with shock or rapid build-up"],
    "upper_arm.code": ["20-45 deg flexion", "45-90 deg flexion", "90 deg or more flexion", "Extension", "Abduction", "Above shoulder"],
    "lower_arm.code": ["60-100 deg flexion", "Under 60 or over 100 deg flexion"],
    "wrist.code": ["Neutral", "0-15 deg flexion/extension", "15 deg or more flexion", "Marked extension"],
    "load_force_b": ["Under 5 kg", "5-10 kg", "Over 10 kg", "Over 10 kg with shock"],
    "coupling": ["Good", "Fair", "Poor", "Unacceptable"],
}

NAV_HELP = {
    Step.NECK: "[n]ext  [c]ancel",
    Step.RESULT: "[p]revious  [s]ubmit  [c]ancel",
}
DEFAULT_NAV_HELP = "[n]ext  [p]revious  [c]ancel"


def format_result(result: ScoreResult) -> List[str]:
    info = result.risk_level.info
    return [
        f"Score A {result.score_a} | Score B {result.score_b} | Score C {result.score_c}",
        f"Final score {result.final_score} (activity {result.activity_bonus:+d})",
        f"Risk: {info['label']} (action level {info['action_level']}) - {info['action']}",
    ]


class ConsoleWizard:
    def __init__(self, session: WizardSession, ask: Optional[Ask] = None, write: Optional[Write] = None) -> None:
        self.session = session
        self.ask = ask or input
        self.write = write or print

    def _prompt_field(self, path: str) -> None:
        current = self.session.posture.get(path)
        if path in CODE_RANGES:
            lo, hi = CODE_RANGES[path]
            for offset, label in enumerate(OPTION_LABELS.get(path, [])):
                self.write(f"  {lo + offset}) {label}")
            prompt = f"{path} [{lo}-{hi}] ({current}): "
        else:
            prompt = f"{path} [y/n] ({'y' if current else 'n'}): "
        while True:
            raw = self.ask(prompt).strip().lower()
            if not raw:
                return
            try:
                value = self._parse(path, raw)
                self.session.set_field(path, value)
                return
            except ValueError as exc:
                self.write(f"  invalid value: {exc}")

    @staticmethod
    def _parse(path: str, raw: str):
        if path in CODE_RANGES:
            return int(raw)
        if raw in ("y", "yes", "1"):
            return True
        if raw in ("n", "no", "0"):
            return False
        raise ValueError(f"answer y or n for {path}")

    def _show_step(self) -> None:
        info = self.session.info
        self.write(f"--- Step {int(self.session.step)}/{len(Step)}: {info.title} ({info.description}) ---")

    def _navigate(self) -> Optional[Submission]:
        step = self.session.step
        while True:
            choice = self.ask(NAV_HELP.get(step, DEFAULT_NAV_HELP) + ": ").strip().lower()
            if choice == "n" and step is not Step.RESULT:
                self.session.next()
                return None
            if choice == "p" and step is not Step.NECK:
                self.session.previous()
                return None
            if choice == "s" and step is Step.RESULT:
                return self.session.submit()
            if choice == "c":
                self.session.cancel()
                return None
            self.write("  unknown choice")

    def run(self) -> Optional[Submission]:
        """Drive the session until it is submitted or cancelled."""
        submission: Optional[Submission] = None
        while self.session.is_active:
            self._show_step()
            for path in self.session.info.fields:
                self._prompt_field(path)
            for line in format_result(self.session.result):
                self.write(line)
            submission = self._navigate()
        return submission


__all__ = [
    "ConsoleWizard",
    "OPTION_LABELS",
    "format_result",
]
