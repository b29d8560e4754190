"""Read stored REBA evaluation records (JSON array or JSON Lines)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

__all__ = [
    "RECORD_META_KEYS",
    "load_records",
    "posture_mapping",
]

# keys a stored record carries next to its posture fields
RECORD_META_KEYS = ("id", "session_id", "ts", "result")


def load_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Load evaluation records from ``path``.

    A file whose first non-blank character is ``[`` is parsed as a JSON
    array; a single JSON object is wrapped in a list; anything else is read
    as JSON Lines, skipping blank lines.
    """
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    stripped = text.lstrip()
    if not stripped:
        return []
    if stripped[0] == "[":
        data = json.loads(text)
        records = list(data)
    else:
        try:
            records = [json.loads(text)]
        except json.JSONDecodeError:
            records = []
            for lineno, line in enumerate(text.splitlines(), start=1):
                if not line.strip():
                    continue
                try:
                    records.append(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise ValueError(f"{file_path}:{lineno}: invalid JSON record ({exc.msg})") from exc
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValueError(f"{file_path}: record {idx} is not a JSON object")
    return records


def posture_mapping(record: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the posture fields of ``record``.

    Records either nest the posture under ``"input"`` or hold the fields at
    the top level next to :data:`RECORD_META_KEYS`.
    """
    if "input" in record:
        snapshot = record["input"]
        if not isinstance(snapshot, Mapping):
            raise ValueError(f"record {record.get('id')!r}: 'input' is not a JSON object")
        return snapshot
    return {key: value for key, value in record.items() if key not in RECORD_META_KEYS}
