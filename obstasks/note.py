"""ノートファイルへの追記(既存内容の末尾に空行を挟んでセクションを足す)。"""
from __future__ import annotations
from pathlib import Path
from typing import List


def read_text_safe(path: str | Path) -> str:
    p = Path(path)
    if not p.is_file():
        return ""
    return p.read_text(encoding="utf-8")


def write_text(path: str | Path, content: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _ensure_trailing_newline(content: str) -> str:
    return content if content.endswith("\n") else content + "\n"


def finalize_section(lines: List[str]) -> str:
    trimmed = list(lines)
    while trimmed and trimmed[-1] == "":
        trimmed.pop()
    trimmed.append("")
    return "\n".join(trimmed)


def merge_note(existing: str, section: str) -> str:
    base = existing.rstrip()
    if not base:
        return _ensure_trailing_newline(section)
    return f"{base}\n\n{_ensure_trailing_newline(section)}"


__all__ = ["read_text_safe", "write_text", "finalize_section", "merge_note"]
