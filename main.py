"""
Main entry point for REBA evaluations.
Runs the interactive wizard (default), scores stored inputs, or re-scores
historical records with a chosen table layout.
"""
import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from config import DEFAULT_TABLE_LAYOUT, LOG_FILE, LOG_LEVEL
from core.wizard import InvalidTransition, Submission, create_session
from gui.console import ConsoleWizard
from models.posture import PostureInput
from reba_io.exporters import EXPORT_MODES, evaluation_row, export_row
from reba_io.logger import FileLoggerConfig, get_logger, setup_file_logger
from reba_io.records import load_records, posture_mapping
from scoring.batch import rescore
from scoring.engine import compute
from scoring.factors import identify_risk_factors
from scoring.layouts import LAYOUTS, get_layout

log = get_logger("reba.main")


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="REBA ergonomic risk assessment")
    p.add_argument("--mode", choices=["wizard", "score", "rescore"], default="wizard", help="interactive wizard, score inputs, or re-score records")
    p.add_argument("--input", type=Path, help="JSON or JSON Lines file for score/rescore modes")
    p.add_argument("--layout", choices=sorted(LAYOUTS), default=DEFAULT_TABLE_LAYOUT, help="table layout used for scoring")
    p.add_argument("--export", choices=EXPORT_MODES, default="csv", help="export format for submitted evaluations")
    p.add_argument("--log-file", type=Path, default=Path(LOG_FILE))
    return p.parse_args(argv)


def run_wizard(layout_name: str, export: str) -> int:
    def on_complete(submission: Submission) -> None:
        path = export_row(evaluation_row(session.session_id, submission.to_row()), mode=export)
        if path is not None:
            print(f"Evaluation saved to {path}")

    session = create_session(on_complete=on_complete, layout=get_layout(layout_name))
    submission = ConsoleWizard(session).run()
    if submission is None:
        print("Evaluation cancelled.")
    return 0


def run_score(input_path: Path, layout_name: str) -> int:
    layout = get_layout(layout_name)
    for idx, record in enumerate(load_records(input_path)):
        posture = PostureInput.from_mapping(posture_mapping(record))
        result = compute(posture, layout)
        out = {"id": record.get("id", idx), **result.to_row(), "risk_factors": identify_risk_factors(posture, result)}
        print(json.dumps(out))
    return 0


def run_rescore(input_path: Path, layout_name: str) -> int:
    outcomes = rescore(load_records(input_path), get_layout(layout_name))
    changed = [o for o in outcomes if o.changed]
    for outcome in changed:
        print(f"{outcome.record_id}: {outcome.previous_final} -> {outcome.result.final_score} ({outcome.result.risk_level.value})")
    print(f"{len(outcomes)} records re-scored with '{layout_name}' layout, {len(changed)} changed")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_file_logger(FileLoggerConfig(path=args.log_file, level=LOG_LEVEL))
    try:
        if args.mode == "wizard":
            return run_wizard(args.layout, args.export)
        if args.input is None:
            print("--input is required for score and rescore modes.", file=sys.stderr)
            return 2
        if args.mode == "score":
            return run_score(args.input, args.layout)
        return run_rescore(args.input, args.layout)
    except (KeyError, ValueError, InvalidTransition, OSError) as exc:
        log.error("run failed", extra={"mode": args.mode, "error": str(exc)})
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
