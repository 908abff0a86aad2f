"""コメント抽出エンジン。

対応(固定):
- 行コメント: '//', '#', '--', ';' (行頭のみ。'#!' と '-->' は除外)
- ブロックコメント: /* ... */, <!-- ... -->

注意: 言語ごとの字句解析はしません。文字列リテラル中の '/*' なども
ブロック開始として扱います。行コメントとブロックコメントは独立に走査し、
同じ箇所が両方から報告されることもあります。
"""
from __future__ import annotations
from dataclasses import dataclass, field
import re
from typing import Iterator, List, Pattern, Tuple, Dict, Any

from .keywords import CommentMeta, parse_comment_body

LINE_MARKERS: Tuple[str, ...] = ("//", "#", "--", ";")
BLOCK_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("/*", "*/"),
    ("<!--", "-->"),
)

_NEWLINE_RE = re.compile(r"\r?\n")
_GUTTER_RE = re.compile(r"^\*+\s*")
_DECORATION = {"*", "*/", "-->"}


@dataclass(frozen=True)
class ScanResult:
    pattern: str
    message: str
    meta: CommentMeta = field(default_factory=CommentMeta)
    file_path: str = ""
    line: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "message": self.message,
            "meta": self.meta.to_dict(),
            "file_path": self.file_path,
            "line": self.line,
        }


def resolve_line_marker(trimmed: str) -> str | None:
    for marker in LINE_MARKERS:
        if not trimmed.startswith(marker):
            continue
        if marker == "--" and trimmed.startswith("-->"):
            continue
        if marker == "#" and trimmed.startswith("#!"):
            continue
        return marker
    return None


def sanitize_block_line(line: str) -> str:
    trimmed = line.strip()
    if not trimmed or trimmed in _DECORATION:
        return ""
    return _GUTTER_RE.sub("", trimmed).strip()


def _line_of(text: str, idx: int) -> int:
    # 1-based
    return text.count("\n", 0, idx) + 1


def iter_line_tasks(content: str, file_path: str, keyword_re: Pattern[str]) -> Iterator[ScanResult]:
    for index, raw in enumerate(_NEWLINE_RE.split(content)):
        trimmed = raw.strip()
        if not trimmed:
            continue
        marker = resolve_line_marker(trimmed)
        if marker is None:
            continue
        body = trimmed[len(marker):].strip()
        if not body:
            continue
        parsed = parse_comment_body(body, keyword_re)
        if parsed is None:
            continue
        yield ScanResult(
            pattern=parsed.pattern,
            message=parsed.message,
            meta=parsed.meta,
            file_path=file_path,
            line=index + 1,
        )


def iter_block_tasks(
    content: str,
    file_path: str,
    keyword_re: Pattern[str],
    start: str,
    end: str,
) -> Iterator[ScanResult]:
    cursor = 0
    while cursor < len(content):
        s_idx = content.find(start, cursor)
        if s_idx == -1:
            break
        e_idx = content.find(end, s_idx + len(start))
        if e_idx == -1:
            # 閉じていないブロック以降は走査しない
            break
        block = content[s_idx + len(start):e_idx]
        start_line = _line_of(content, s_idx)
        for offset, raw in enumerate(_NEWLINE_RE.split(block)):
            sanitized = sanitize_block_line(raw)
            if not sanitized or sanitized == end:
                continue
            parsed = parse_comment_body(sanitized, keyword_re)
            if parsed is None:
                continue
            yield ScanResult(
                pattern=parsed.pattern,
                message=parsed.message,
                meta=parsed.meta,
                file_path=file_path,
                line=start_line + offset,
            )
        cursor = e_idx + len(end)


def extract_tasks(content: str, file_path: str, keyword_re: Pattern[str]) -> List[ScanResult]:
    """1ファイル分のテキストからタスクを抽出する。

    順序: 行コメント(行番号順) → /* */ → <!-- -->。
    """
    results: List[ScanResult] = list(iter_line_tasks(content, file_path, keyword_re))
    for start, end in BLOCK_MARKERS:
        results.extend(iter_block_tasks(content, file_path, keyword_re, start, end))
    return results


__all__ = [
    "LINE_MARKERS",
    "BLOCK_MARKERS",
    "ScanResult",
    "resolve_line_marker",
    "sanitize_block_line",
    "iter_line_tasks",
    "iter_block_tasks",
    "extract_tasks",
]
