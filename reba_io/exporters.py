"""Append submitted REBA evaluations to CSV or JSON Lines files."""

from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from config import EXPORT_CSV, EXPORT_JSONL

__all__ = [
    "EXPORT_MODES",
    "ensure_parent",
    "evaluation_row",
    "export_csv",
    "export_json",
    "export_row",
]

EXPORT_MODES = ("csv", "json", "none")


def ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def evaluation_row(session_id: str, row: Mapping[str, Any]) -> Dict[str, Any]:
    """Prefix a flattened evaluation row with the session that produced it."""
    return {"session_id": session_id, **dict(row)}


def _existing_header(file_path: Path) -> Optional[List[str]]:
    if not file_path.exists() or file_path.stat().st_size == 0:
        return None
    with file_path.open(newline="", encoding="utf-8") as f:
        return next(csv.reader(f), None)


def export_csv(path: str, row: Mapping[str, object]) -> None:
    """Append ``row``; the first row written fixes the column order.

    Every evaluation row has the same keys, so a row whose keys differ from
    the file's header belongs to another export and is rejected.
    """
    file_path = Path(path)
    ensure_parent(file_path)
    row_dict = dict(row)
    header = _existing_header(file_path)
    if header is not None and set(header) != set(row_dict):
        raise ValueError(f"{file_path}: row columns do not match the existing header")
    with file_path.open("a", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=header or list(row_dict))
        if header is None:
            writer.writeheader()
        writer.writerow(row_dict)


def export_json(path: str, row: Mapping[str, object]) -> None:
    file_path = Path(path)
    ensure_parent(file_path)
    payload = {"ts": datetime.now().isoformat(timespec="seconds"), **dict(row)}
    with file_path.open("a", encoding="utf-8") as f:
        json.dump(payload, f)
        f.write("\n")


def export_row(
    row: Mapping[str, object],
    mode: str = "csv",
    csv_path: Optional[str] = None,
    jsonl_path: Optional[str] = None,
) -> Optional[Path]:
    """Append ``row`` in the chosen format and return the file written, if any."""
    if mode not in EXPORT_MODES:
        raise ValueError(f"export mode must be one of {EXPORT_MODES}, got {mode!r}")
    if mode == "csv":
        path = csv_path or EXPORT_CSV
        export_csv(path, row)
        return Path(path)
    if mode == "json":
        path = jsonl_path or EXPORT_JSONL
        export_json(path, row)
        return Path(path)
    return None
