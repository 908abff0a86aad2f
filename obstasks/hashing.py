from __future__ import annotations
import hashlib

from .comments import ScanResult

HASH_LENGTH = 8


def create_task_hash(relative_path: str, line: int, message: str) -> str:
    data = f"{relative_path}:{line}:{message}".encode("utf-8")
    return hashlib.sha1(data).hexdigest()[:HASH_LENGTH]


def hash_message(result: ScanResult) -> str:
    # 本文が空ならキーワードで代用
    return result.message.strip() or result.pattern


def task_hash(result: ScanResult) -> str:
    return create_task_hash(result.file_path, result.line, hash_message(result))


__all__ = ["HASH_LENGTH", "create_task_hash", "hash_message", "task_hash"]
