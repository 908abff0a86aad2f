"""YAML / JSON からキーワード一覧をロードするユーティリティ。
フォーマット例:

YAML:
---
- TODO
- FIXME
- HACK

または

patterns: [TODO, FIXME, HACK]

JSON: 上記と同じ構造。
"""
from __future__ import annotations
from pathlib import Path
import json
from typing import List

import yaml


def load_pattern_file(path: str) -> List[str]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(path)
    text = p.read_text(encoding="utf-8-sig")
    if p.suffix.lower() in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"YAMLの解析に失敗しました: {path}: {e}") from e
    else:
        data = json.loads(text)
    if isinstance(data, dict):
        data = data.get("patterns")
    if not isinstance(data, list):
        raise ValueError(f"キーワードファイルは配列(または patterns: [...])である必要があります: {path}")
    patterns: List[str] = []
    for item in data:
        if not isinstance(item, str):
            raise ValueError(f"キーワードは文字列で指定してください: {item!r}")
        item = item.strip()
        if item:
            patterns.append(item)
    return patterns


__all__ = ["load_pattern_file"]
