"""
Pytest configuration and shared fixtures.

Fixtures build posture inputs, capture wizard callbacks and write stored
evaluation records to temporary files.
"""

import json

import pytest

from models.posture import PostureInput


@pytest.fixture
def neutral_posture():
    """Posture with every code neutral and no modifier flags."""
    return PostureInput()


@pytest.fixture
def strained_posture():
    """
    Posture with a strained neck/trunk and a loaded arm.

    Table A: neck 3, trunk 4, legs 2 -> 7, plus load 3 -> Score A 10.
    Table B: upper arm 3 + abduction -> row 4, lower arm 2, wrist 2 -> 6,
    plus load 1 and coupling 2 -> Score B 9.
    """
    return PostureInput.from_mapping({
        "neck": {"code": 3, "rotated": True, "side_bent": True},
        "trunk": {"code": 4},
        "legs": {"code": 2},
        "load_force_a": 3,
        "upper_arm": {"code": 3, "abducted": True},
        "lower_arm": {"code": 2},
        "wrist": {"code": 2},
        "load_force_b": 1,
        "coupling": 2,
    })


@pytest.fixture
def callbacks():
    """
    Recorder for wizard callbacks.

    Usage:
        session = create_session(on_complete=callbacks.complete, on_cancel=callbacks.cancel)
        assert callbacks.completed == [submission]
    """
    class Recorder:
        def __init__(self):
            self.completed = []
            self.cancelled = 0

        def complete(self, submission):
            self.completed.append(submission)

        def cancel(self):
            self.cancelled += 1

    return Recorder()


@pytest.fixture
def stored_records():
    """Historical records scored with the flattened table layout."""
    return [
        {"id": "ev-1", "input": {}, "result": {"final_score": 1}},
        # flattened column 1 + 1 * 4 is past the table edge -> Table A 1, final 1;
        # standard Table A[neck 1][trunk 2][legs 2] = 3, final 2
        {"id": "ev-2", "input": {"trunk": {"code": 2}, "legs": {"code": 2}}, "result": {"final_score": 1}},
        {"id": "ev-3", "input": {"neck": {"code": 2}}},
    ]


@pytest.fixture
def records_file(tmp_path, stored_records):
    """Write ``stored_records`` as JSON Lines and return the path."""
    path = tmp_path / "records.jsonl"
    with path.open("w", encoding="utf-8") as f:
        for record in stored_records:
            f.write(json.dumps(record) + "\n")
    return path
