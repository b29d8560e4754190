"""Posture input model for a REBA evaluation.

One :class:`PostureInput` holds every observation the worksheet asks for.
It starts at the neutral posture and is mutated field by field, addressed
with dotted paths such as ``"neck.rotated"`` or ``"load_force_a"``.
"""

from __future__ import annotations

import copy
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from typing import Any, Dict, Iterator, Mapping, Tuple

from constants.thresholds import CODE_RANGES, FLAG_FIELDS

__all__ = [
    "Activity",
    "Legs",
    "LowerArm",
    "Neck",
    "PostureInput",
    "Trunk",
    "UpperArm",
    "Wrist",
    "field_paths",
]


@dataclass
class Neck:
    code: int = 1
    rotated: bool = False
    side_bent: bool = False


@dataclass
class Trunk:
    code: int = 1
    rotated: bool = False
    side_bent: bool = False


@dataclass
class Legs:
    code: int = 1
    knee_flexion: int = 0


@dataclass
class UpperArm:
    code: int = 1
    abducted: bool = False
    supported: bool = False
    rotated: bool = False


@dataclass
class LowerArm:
    code: int = 1


@dataclass
class Wrist:
    code: int = 1
    deviated: bool = False
    rotated: bool = False


@dataclass
class Activity:
    static_posture: bool = False
    repetitive: bool = False
    rapid_change: bool = False

    @property
    def bonus(self) -> int:
        return int(self.static_posture) + int(self.repetitive) + int(self.rapid_change)


def field_paths() -> Tuple[str, ...]:
    """All settable dotted paths, integer codes first."""
    return tuple(CODE_RANGES) + FLAG_FIELDS


@dataclass
class PostureInput:
    # Group A
    neck: Neck = field(default_factory=Neck)
    trunk: Trunk = field(default_factory=Trunk)
    legs: Legs = field(default_factory=Legs)
    load_force_a: int = 0
    # Group B
    upper_arm: UpperArm = field(default_factory=UpperArm)
    lower_arm: LowerArm = field(default_factory=LowerArm)
    wrist: Wrist = field(default_factory=Wrist)
    load_force_b: int = 0
    # Grip and activity
    coupling: int = 0
    activity: Activity = field(default_factory=Activity)

    @classmethod
    def from_mapping(cls, initial: Mapping[str, Any]) -> "PostureInput":
        """Build a posture from a partial nested mapping.

        ``{"neck": {"code": 2}, "coupling": 1}`` seeds those two fields and
        leaves the rest neutral. Flat dotted keys (``"neck.code"``) are
        accepted too. Every leaf is validated through :meth:`set`.
        """
        posture = cls()
        for path, value in _walk(initial):
            posture.set(path, value)
        return posture

    def _resolve(self, path: str) -> Tuple[Any, str]:
        if path not in CODE_RANGES and path not in FLAG_FIELDS:
            raise KeyError(f"unknown posture field: {path!r}")
        head, _, attr = path.rpartition(".")
        owner = getattr(self, head) if head else self
        return owner, attr

    def get(self, path: str) -> Any:
        owner, attr = self._resolve(path)
        return getattr(owner, attr)

    def set(self, path: str, value: Any) -> None:
        owner, attr = self._resolve(path)
        if path in FLAG_FIELDS:
            if not isinstance(value, bool):
                raise ValueError(f"{path} expects a bool, got {value!r}")
        else:
            lo, hi = CODE_RANGES[path]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{path} expects an integer code, got {value!r}")
            if not lo <= value <= hi:
                raise ValueError(f"{path} must be within {lo}..{hi}, got {value}")
        setattr(owner, attr, value)

    def snapshot(self) -> "PostureInput":
        return copy.deepcopy(self)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def to_row(self) -> Dict[str, Any]:
        row: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if is_dataclass(value):
                for sub in fields(value):
                    row[f"{f.name}_{sub.name}"] = getattr(value, sub.name)
            else:
                row[f.name] = value
        return row


def _walk(mapping: Mapping[str, Any], prefix: str = "") -> Iterator[Tuple[str, Any]]:
    for key, value in mapping.items():
        path = f"{prefix}{key}"
        if isinstance(value, Mapping):
            yield from _walk(value, prefix=f"{path}.")
        else:
            yield path, value
