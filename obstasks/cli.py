from __future__ import annotations
import argparse
import json
import sys
import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .external_patterns import load_pattern_file
from .file_scanner import DEFAULT_EXTENSIONS, to_posix
from .formatter import build_heading, format_task, iso_timestamp
from .hashing import task_hash
from .keywords import DEFAULT_PATTERNS
from .note import finalize_section, merge_note, read_text_safe, write_text
from .scanner import scan_project
from .state import DEFAULT_STATE_FILE, load_state, mark_seen, save_state


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="obstasks",
        description="ソースコード中の TODO/FIXME などのコメントを Obsidian のノートへ追記します",
    )
    p.add_argument("command", help="実行するコマンド (現在は scan のみ)")
    p.add_argument("project_dir", help="走査するプロジェクトのディレクトリ")
    p.add_argument("vault_dir", help="Obsidian Vault のディレクトリ")
    p.add_argument("note_path", help="追記先ノート (vault_dir からの相対パス)")
    p.add_argument("--patterns", help=f"カンマ区切りのキーワード (既定: {', '.join(DEFAULT_PATTERNS)})")
    p.add_argument("--patterns-file", action="append", dest="patterns_files", metavar="FILE",
                   help="キーワード一覧の YAML/JSON ファイル (複数指定は繰り返し)")
    p.add_argument("--exts", help="カンマ区切りの拡張子 (既定: 主要なソース/設定/文書の拡張子)")
    p.add_argument("--state", help=f"既出タスクの記録ファイル (既定: vault_dir 直下の {DEFAULT_STATE_FILE})")
    p.add_argument("--config", help="設定ファイル(TOML: pyproject.toml など)の [tool.obstasks] で既定値を上書き")
    p.add_argument("--jobs", type=int, help="並列実行のワーカー数 (既定: 1)")
    p.add_argument("--json", action="store_true", help="結果をJSONで出力")
    return p


def _split_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    return [item.strip() for item in str(value).split(",") if item.strip()]


def _apply_config(args: argparse.Namespace, cfg_path: Path) -> None:
    # CLI引数が最優先。未指定の項目だけ設定で補完する
    with cfg_path.open("rb") as f:
        cfg = tomllib.load(f)
    tool = cfg.get("tool", {}) if isinstance(cfg, dict) else {}
    conf = tool.get("obstasks", {}) if isinstance(tool, dict) else {}
    if "patterns" in conf and args.patterns is None:
        args.patterns = ",".join(_split_list(conf["patterns"]))
    if "exts" in conf and args.exts is None:
        args.exts = ",".join(_split_list(conf["exts"]))
    if "state" in conf and args.state is None:
        args.state = str(conf["state"])
    if "jobs" in conf and args.jobs is None:
        args.jobs = int(conf["jobs"])
    if "patternsFiles" in conf and not args.patterns_files:
        val = conf["patternsFiles"]
        if isinstance(val, list):
            args.patterns_files = [str(x) for x in val]


def resolve_patterns(raw: str | None, files: List[str] | None = None) -> List[str]:
    patterns = _split_list(raw)
    for pf in files or []:
        patterns.extend(load_pattern_file(pf))
    return patterns or list(DEFAULT_PATTERNS)


def resolve_extensions(raw: str | None) -> List[str]:
    exts = [e if e.startswith(".") else f".{e}" for e in _split_list(raw)]
    return exts or list(DEFAULT_EXTENSIONS)


def resolve_state_path(option: str | None, vault_dir: Path) -> Path:
    if option is None or not option.strip():
        return vault_dir / DEFAULT_STATE_FILE
    p = Path(option)
    if p.is_absolute():
        return p
    return vault_dir / p


def run(args: argparse.Namespace) -> int:
    if args.command != "scan":
        raise ValueError(f'Unsupported command "{args.command}". Use "scan".')

    project_dir = Path(args.project_dir).resolve()
    vault_dir = Path(args.vault_dir).resolve()
    note_path = vault_dir / args.note_path
    state_path = resolve_state_path(args.state, vault_dir)
    patterns = resolve_patterns(args.patterns, args.patterns_files)
    extensions = resolve_extensions(args.exts)

    state = load_state(state_path)
    section_lines = [build_heading(datetime.now(timezone.utc)), ""]
    new_tasks: List[Dict[str, Any]] = []

    for result in scan_project(project_dir, patterns=patterns, extensions=extensions, jobs=args.jobs or 1):
        hash_ = task_hash(result)
        if hash_ in state.seen:
            continue
        mark_seen(state, hash_, iso_timestamp(datetime.now(timezone.utc)))
        section_lines.extend(format_task(result, hash_))
        section_lines.append("")
        new_tasks.append(dict(result.to_dict(), hash=hash_))

    if new_tasks:
        merged = merge_note(read_text_safe(note_path), finalize_section(section_lines))
        write_text(note_path, merged)
        save_state(state_path, state)

    note_display = to_posix(str(note_path))
    if args.json:
        data = {"note": note_display, "appended": len(new_tasks), "tasks": new_tasks}
        print(json.dumps(data, ensure_ascii=False, indent=2))
    elif not new_tasks:
        print("No new comment tasks found.")
    else:
        print(f"Appended {len(new_tasks)} task(s) to {note_display}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.config:
        cfg_path = Path(args.config)
        if cfg_path.is_file() and cfg_path.suffix.lower() == ".toml":
            try:
                _apply_config(args, cfg_path)
            except (OSError, TypeError, ValueError) as e:
                print(f"[warn] failed to load config {cfg_path}: {e}", file=sys.stderr)
        else:
            print(f"[warn] config file not found or not TOML: {cfg_path}", file=sys.stderr)
    try:
        return run(args)
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
