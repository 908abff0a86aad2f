"""プロジェクト配下のソースファイル走査ユーティリティ。

- 拡張子フィルタ(拡張子なしのファイルは名前そのものと比較)。
- node_modules / .git は走査しない。
- バイナリらしいもの・デコードできないものは除外(ヒューリスティック)。
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Iterator, Iterable, Set, Tuple

DEFAULT_EXTENSIONS: Tuple[str, ...] = (
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs",
    ".rs", ".py", ".go", ".java", ".kt", ".swift",
    ".c", ".cpp", ".h", ".hpp", ".php",
    ".sh", ".ps1", ".sql",
    ".ini", ".toml", ".yaml", ".yml", ".json",
    ".md", ".html", ".css",
)

EXCLUDED_DIRS = frozenset({"node_modules", ".git"})

# 制御文字(タブ/改行/CR/ESC 以外)の比率で判定する
_CONTROL_BYTES = frozenset(set(range(0, 9)) | {11, 12} | set(range(14, 27)) | set(range(28, 32)))
_SNIFF_SIZE = 8192

# 先頭は utf-8-sig: BOM 付きなら除去し、BOM なしの UTF-8 もそのまま読める
ENCODING_CANDIDATES: Tuple[str, ...] = ("utf-8-sig", "utf-16", "cp932")


def is_probably_text(data: bytes, threshold: float = 0.30) -> bool:
    """先頭 _SNIFF_SIZE バイトだけを見てテキストらしさを判定する。"""
    sample = data[:_SNIFF_SIZE]
    if not sample:
        return True
    control = sum(1 for b in sample if b in _CONTROL_BYTES)
    return control / len(sample) < threshold


def read_text(path: Path, encodings: Iterable[str] = ENCODING_CANDIDATES) -> str | None:
    """ソースファイルを読み、デコードできた最初の候補で返す。

    読めない/バイナリらしい/どの候補でもデコードできない場合は None。
    呼び出し側(scanner)はそのファイルを黙って飛ばす。
    """
    try:
        raw = path.read_bytes()
    except OSError:
        return None
    if not is_probably_text(raw):
        return None
    for enc in encodings:
        try:
            text = raw.decode(enc)
        except UnicodeDecodeError:
            continue
        # 二重 BOM など先頭に残った U+FEFF も落とす
        return text.lstrip("\ufeff")
    return None


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """'.ts' / 'ts' / ' TS ' をすべて '.ts' に揃える。"""
    out: Set[str] = set()
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        out.add(ext if ext.startswith(".") else f".{ext}")
    return out


def matches_extension(path: Path, extensions: Set[str]) -> bool:
    suffix = path.suffix.lower()
    if suffix:
        return suffix in extensions
    # Makefile など拡張子なし
    return f".{path.name.lower()}" in extensions


def to_posix(path: str) -> str:
    return path.replace("\\", "/")


def relative_posix(root: Path, path: Path) -> str:
    rel = to_posix(os.path.relpath(path, root))
    if not rel or rel == ".":
        return path.name
    return rel


def iter_source_files(root: str | os.PathLike[str], extensions: Iterable[str]) -> Iterator[Path]:
    base = Path(root)
    exts = normalize_extensions(extensions)
    if base.is_file():
        if matches_extension(base, exts):
            yield base
        return
    for dirpath, dirs, files in os.walk(base):
        # 除外ディレクトリは降りない。順序は固定しておく
        dirs[:] = sorted(d for d in dirs if d.lower() not in EXCLUDED_DIRS)
        for f in sorted(files):
            p = Path(dirpath) / f
            if matches_extension(p, exts):
                yield p


__all__ = [
    "DEFAULT_EXTENSIONS",
    "EXCLUDED_DIRS",
    "is_probably_text",
    "read_text",
    "normalize_extensions",
    "matches_extension",
    "to_posix",
    "relative_posix",
    "iter_source_files",
]
