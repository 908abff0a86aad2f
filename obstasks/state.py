"""既出タスクの記録(JSON)。

形式: {"seen": {"<hash>": "<ISO時刻>", ...}}
"""
from __future__ import annotations
from dataclasses import dataclass, field
import json
from pathlib import Path
from typing import Dict

from .note import read_text_safe, write_text

DEFAULT_STATE_FILE = ".obs_task_state.json"


@dataclass
class TaskState:
    seen: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {"seen": dict(self.seen)}


def load_state(path: str | Path) -> TaskState:
    raw = read_text_safe(path)
    if not raw.strip():
        return TaskState()
    try:
        data = json.loads(raw)
        if not isinstance(data, dict) or not isinstance(data.get("seen"), dict):
            raise ValueError("Invalid state file structure.")
    except ValueError as e:
        raise ValueError(f'Failed to parse state file "{path}": {e}') from e
    return TaskState(seen={str(k): str(v) for k, v in data["seen"].items()})


def save_state(path: str | Path, state: TaskState) -> None:
    write_text(path, json.dumps(state.to_dict(), ensure_ascii=False, indent=2) + "\n")


def mark_seen(state: TaskState, hash_: str, timestamp: str) -> None:
    state.seen[hash_] = timestamp


__all__ = ["DEFAULT_STATE_FILE", "TaskState", "load_state", "save_state", "mark_seen"]
