"""obstasks
ソースコード中の TODO/FIXME/NOTE コメントを抽出し、Obsidian のノートへ追記するツール。

主な提供機能:
- 行コメント('//', '#', '--', ';')とブロックコメント('/* */', '<!-- -->')からのタスク抽出
- @due(...) / @tags(...) / @assignee(...) / @p(...) メタデータの解釈
- 既出タスクの記録(JSON)による重複排除
- CLI インターフェース
"""
from .comments import ScanResult, extract_tasks
from .keywords import CommentMeta, build_keyword_regex, parse_comment_body
from .scanner import scan_project

__all__ = [
    "CommentMeta",
    "ScanResult",
    "build_keyword_regex",
    "parse_comment_body",
    "extract_tasks",
    "scan_project",
]

__version__ = "0.1.0"
