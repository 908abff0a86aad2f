"""高レベル API: プロジェクトを走査してコメントタスクを列挙する。

ファイル単位の抽出は純粋な計算なので、--jobs でスレッド並列にしても
結果の順序はファイルの走査順のまま保たれる。
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Pattern

from .comments import ScanResult, extract_tasks
from .file_scanner import DEFAULT_EXTENSIONS, iter_source_files, read_text, relative_posix
from .keywords import DEFAULT_PATTERNS, build_keyword_regex


def scan_file(path: Path, root: Path, keyword_re: Pattern[str]) -> List[ScanResult]:
    content = read_text(path)
    if content is None:
        return []
    return extract_tasks(content, relative_posix(root, path), keyword_re)


def scan_project(
    root: str | os.PathLike[str],
    patterns: Iterable[str] = DEFAULT_PATTERNS,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    jobs: int = 1,
) -> Iterator[ScanResult]:
    base = Path(root).resolve()
    keyword_re = build_keyword_regex(patterns)
    # ルートがファイルの場合は相対パス=ファイル名
    rel_root = base.parent if base.is_file() else base
    files = iter_source_files(base, extensions)

    if jobs and jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            for results in ex.map(lambda p: scan_file(p, rel_root, keyword_re), files):
                yield from results
    else:
        for path in files:
            yield from scan_file(path, rel_root, keyword_re)


__all__ = ["scan_file", "scan_project"]
