"""キーワード判定とコメント本文からのメタデータ抽出。

コメント記号を取り除いた1行を受け取り、先頭が設定済みキーワード
(TODO/FIXME/NOTE など) であればタスクとして解釈する。

メタデータ記法 (値に括弧は使えない):
- @due(2024-10-01)
- @tags(auth,bug)  ... カンマ/空白区切り
- @assignee(riku)
- @p(high|med|low) ... それ以外の値は本文にそのまま残す
"""
from __future__ import annotations
from dataclasses import dataclass, field
import re
from typing import Iterable, Pattern, Tuple, Dict, Any

DEFAULT_PATTERNS: Tuple[str, ...] = ("TODO", "FIXME", "NOTE")
PRIORITIES: Tuple[str, ...] = ("high", "med", "low")

_DUE_RE = re.compile(r"@due\(([^)]+)\)", re.IGNORECASE)
_TAGS_RE = re.compile(r"@tags\(([^)]+)\)", re.IGNORECASE)
_ASSIGNEE_RE = re.compile(r"@assignee\(([^)]+)\)", re.IGNORECASE)
_PRIORITY_RE = re.compile(r"@p\(\s*(high|med|low)\s*\)", re.IGNORECASE)
_TAG_SPLIT_RE = re.compile(r"[, ]+")
_WS_RE = re.compile(r"\s+")
# キーワード/トークン除去後に残る区切り記号
_LEADING_DEBRIS_RE = re.compile(r"^[:\-–—\s]+")


@dataclass(frozen=True)
class CommentMeta:
    tags: Tuple[str, ...] = ()
    due: str | None = None
    assignee: str | None = None
    priority: str | None = None  # high/med/low

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tags": list(self.tags),
            "due": self.due,
            "assignee": self.assignee,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class ParsedComment:
    pattern: str
    message: str
    meta: CommentMeta = field(default_factory=CommentMeta)


def build_keyword_regex(patterns: Iterable[str]) -> Pattern[str]:
    """キーワード群から行頭マッチ用の正規表現を作る(大文字小文字無視)。"""
    keywords = [p.strip() for p in patterns if p and p.strip()]
    if not keywords:
        raise ValueError("キーワードが1つも指定されていません")
    escaped = "|".join(re.escape(k) for k in keywords)
    return re.compile(rf"^({escaped})\b[:\s-]*", re.IGNORECASE)


def _take(working: str, regex: Pattern[str]) -> Tuple[str | None, str]:
    # 最初の出現のみ。除去箇所は空白1つに置き換える
    m = regex.search(working)
    if not m:
        return None, working
    return m.group(1), working[:m.start()] + " " + working[m.end():]


def extract_meta(text: str) -> Tuple[CommentMeta, str]:
    """@due → @tags → @assignee → @p の順でトークンを抜き出す。

    戻り値は (メタデータ, 空白を畳んだ残りの文字列)。
    """
    working = text
    due, working = _take(working, _DUE_RE)
    raw_tags, working = _take(working, _TAGS_RE)
    assignee, working = _take(working, _ASSIGNEE_RE)
    priority, working = _take(working, _PRIORITY_RE)

    tags: Tuple[str, ...] = ()
    if raw_tags is not None:
        tags = tuple(t.strip() for t in _TAG_SPLIT_RE.split(raw_tags) if t.strip())

    meta = CommentMeta(
        tags=tags,
        due=due.strip() if due is not None else None,
        assignee=assignee.strip() if assignee is not None else None,
        priority=priority.lower() if priority is not None else None,
    )
    cleaned = _WS_RE.sub(" ", working).strip()
    return meta, cleaned


def parse_comment_body(body: str, keyword_re: Pattern[str]) -> ParsedComment | None:
    m = keyword_re.match(body)
    if not m:
        return None
    meta, cleaned = extract_meta(body[m.end():])
    message = _LEADING_DEBRIS_RE.sub("", cleaned).strip()
    return ParsedComment(pattern=m.group(1).upper(), message=message, meta=meta)


__all__ = [
    "DEFAULT_PATTERNS",
    "PRIORITIES",
    "CommentMeta",
    "ParsedComment",
    "build_keyword_regex",
    "extract_meta",
    "parse_comment_body",
]
