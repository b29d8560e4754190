"""Tests for the console wizard front end and the command-line entry point."""

import json
import logging

import pytest

import main
from core.wizard import SessionStatus, Step, create_session
from gui.console import ConsoleWizard, format_result
from scoring.engine import compute


def scripted(answers):
    """Return an ``ask`` callable replaying ``answers`` in order."""
    replies = iter(answers)
    return lambda prompt: next(replies)


# blank answers keep every default; one list per step
NECK = ["3", "y", ""]
TRUNK = ["", "", "", "", ""]
LOAD_A = ["2"]
ARM = ["", "", "", "", ""]
WRIST = ["", "", ""]
LOAD_B = ["", "1"]
RESULT = ["", "y", ""]


class TestConsoleWizard:

    def test_full_run_submits(self, callbacks):
        session = create_session(on_complete=callbacks.complete)
        answers = (
            NECK + ["n"] + TRUNK + ["n"] + LOAD_A + ["n"] + ARM + ["n"]
            + WRIST + ["n"] + LOAD_B + ["n"] + RESULT + ["s"]
        )
        output = []
        submission = ConsoleWizard(session, ask=scripted(answers), write=output.append).run()
        assert submission is not None
        assert callbacks.completed == [submission]
        assert submission.posture.neck.code == 3
        assert submission.posture.neck.rotated is True
        assert submission.posture.load_force_a == 2
        assert submission.posture.coupling == 1
        assert submission.posture.activity.repetitive is True
        assert submission.result == compute(submission.posture)
        assert any(line.startswith("--- Step 7/7") for line in output)

    def test_invalid_answers_are_reprompted(self):
        session = create_session()
        answers = ["9", "x", "2", "maybe", "n", "", "c"]
        output = []
        result = ConsoleWizard(session, ask=scripted(answers), write=output.append).run()
        assert result is None
        assert session.status is SessionStatus.CANCELLED
        assert session.posture.neck.code == 2
        assert sum("invalid value" in line for line in output) == 3

    def test_back_and_unknown_choice(self):
        session = create_session()
        answers = NECK + ["n"] + TRUNK + ["z", "p"] + NECK + ["c"]
        output = []
        ConsoleWizard(session, ask=scripted(answers), write=output.append).run()
        assert "  unknown choice" in output
        assert session.step is Step.NECK
        assert session.status is SessionStatus.CANCELLED

    def test_format_result(self, strained_posture):
        lines = format_result(compute(strained_posture))
        assert lines[0] == "Score A 10 | Score B 9 | Score C 12"
        assert "Very high" in lines[2]


class TestMain:

    def test_score_mode(self, tmp_path, records_file, capsys):
        code = main.main(["--mode", "score", "--input", str(records_file), "--log-file", str(tmp_path / "reba.log")])
        assert code == 0
        lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
        assert [row["id"] for row in lines] == ["ev-1", "ev-2", "ev-3"]
        assert lines[1]["final_score"] == 2
        assert lines[2]["risk_factors"] == ["awkward_posture"]

    def test_rescore_mode(self, tmp_path, records_file, capsys):
        code = main.main(["--mode", "rescore", "--input", str(records_file), "--log-file", str(tmp_path / "reba.log")])
        assert code == 0
        out = capsys.readouterr().out
        assert "ev-2: 1 -> 2 (low)" in out
        assert "3 records re-scored with 'standard' layout, 1 changed" in out

    def test_rescore_flattened_layout(self, tmp_path, records_file, capsys):
        main.main(["--mode", "rescore", "--layout", "flattened", "--input", str(records_file), "--log-file", str(tmp_path / "reba.log")])
        assert "0 changed" in capsys.readouterr().out

    def test_score_mode_bare_records(self, tmp_path, capsys):
        path = tmp_path / "bare.json"
        path.write_text(json.dumps([{"id": "ev-9", "neck": {"code": 2}, "result": {"final_score": 1}}]), encoding="utf-8")
        code = main.main(["--mode", "score", "--input", str(path), "--log-file", str(tmp_path / "reba.log")])
        assert code == 0
        row = json.loads(capsys.readouterr().out)
        assert row["id"] == "ev-9"
        assert row["score_a"] == 1
        assert row["risk_factors"] == ["awkward_posture"]

    def test_rescore_rejects_scalar_result(self, tmp_path, capsys):
        path = tmp_path / "scalar.json"
        path.write_text(json.dumps([{"id": "ev-9", "input": {}, "result": 3}]), encoding="utf-8")
        code = main.main(["--mode", "rescore", "--input", str(path), "--log-file", str(tmp_path / "reba.log")])
        assert code == 1
        assert "not a mapping" in capsys.readouterr().err

    def test_repeated_runs_keep_one_log_handler(self, tmp_path, records_file, capsys):
        for name in ("first.log", "second.log"):
            main.main(["--mode", "score", "--input", str(records_file), "--log-file", str(tmp_path / name)])
        handlers = logging.getLogger("reba").handlers
        assert len(handlers) == 1
        assert handlers[0].baseFilename.endswith("second.log")

    def test_missing_input(self, tmp_path, capsys):
        code = main.main(["--mode", "score", "--log-file", str(tmp_path / "reba.log")])
        assert code == 2
        assert "--input is required" in capsys.readouterr().err

    def test_invalid_record_reports_error(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"id": "x", "input": {"neck": {"code": 7}}}]), encoding="utf-8")
        code = main.main(["--mode", "rescore", "--input", str(path), "--log-file", str(tmp_path / "reba.log")])
        assert code == 1
        assert "error:" in capsys.readouterr().err

    def test_wizard_mode_exports_submission(self, tmp_path, monkeypatch, capsys):
        answers = iter(
            NECK + ["n"] + TRUNK + ["n"] + LOAD_A + ["n"] + ARM + ["n"]
            + WRIST + ["n"] + LOAD_B + ["n"] + RESULT + ["s"]
        )
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        monkeypatch.chdir(tmp_path)
        code = main.main(["--mode", "wizard", "--export", "json", "--log-file", str(tmp_path / "reba.log")])
        assert code == 0
        assert "Evaluation saved to" in capsys.readouterr().out
        row = json.loads((tmp_path / "reba_export.jsonl").read_text(encoding="utf-8"))
        assert row["neck_code"] == 3
        assert row["session_id"]
        # Table A 3 + load 2 = 5, Score B 2 -> Score C 4, plus repetitive
        assert row["final_score"] == 5
        assert row["risk_level"] == "medium"


@pytest.fixture(autouse=True)
def _detach_reba_handlers():
    """Keep file handlers added by main() from leaking between tests."""
    yield
    logger = logging.getLogger("reba")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
