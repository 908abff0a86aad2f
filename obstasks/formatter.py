"""ノート(Obsidian Tasks 風)向けの整形。

1行目: アイコン 本文 [@担当] [📅 期日] [#タグ ...]
2行目: path:line  [hash:xxxxxxxx]
"""
from __future__ import annotations
from datetime import datetime, timezone
import re
from typing import List

from .comments import ScanResult

PRIORITY_ICONS = {
    "high": "⏫",
    "med": "🔼",
    "low": "🔽",
}
DEFAULT_ICON = "•"

_WS_RE = re.compile(r"\s+")


def iso_timestamp(moment: datetime) -> str:
    """UTC のミリ秒精度 ISO 8601 ('...T00:00:00.000Z')。"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_heading(moment: datetime) -> str:
    return f"## Imported from comments ({iso_timestamp(moment)})"


def _display_message(task: ScanResult) -> str:
    return task.message.strip() or task.pattern


def format_task(task: ScanResult, hash_: str) -> List[str]:
    meta = task.meta
    icon = PRIORITY_ICONS.get(meta.priority or "", DEFAULT_ICON)
    parts = [icon, _display_message(task)]
    if meta.assignee:
        parts.append(f"@{meta.assignee}")
    if meta.due:
        parts.append(f"📅 {meta.due}")
    if meta.tags:
        parts.append(" ".join(t if t.startswith("#") else f"#{t}" for t in meta.tags))
    first = _WS_RE.sub(" ", " ".join(parts)).strip()
    second = f"{task.file_path}:{task.line}  [hash:{hash_}]"
    return [first, second]


__all__ = ["PRIORITY_ICONS", "DEFAULT_ICON", "iso_timestamp", "build_heading", "format_task"]
