"""CLI から解析対象ファイルを集めるための走査ユーティリティ。

- バイナリらしいものは除外(ヒューリスティック)
- VCS/仮想環境/依存キャッシュなどのディレクトリは降りない
- language_id 指定が無い場合、拡張子から言語が判定できないファイルは除外
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, Iterator

from .languages import language_for_path

BINARY_BYTES = set(range(0, 9)) | {11, 12} | set(range(14, 32))

SKIP_DIRS = frozenset({
    ".git", ".hg", ".svn", ".venv", "venv", "__pycache__", "node_modules",
    ".mypy_cache", ".pytest_cache", ".tox", "dist", "build",
})


def is_probably_text(data: bytes, threshold: float = 0.30) -> bool:
    if not data:
        return True
    non_text = sum(b in BINARY_BYTES for b in data)
    return non_text / len(data) < threshold


def read_text(path: Path, encoding_candidates=("utf-8", "utf-8-sig", "utf-16", "cp1252", "latin-1")) -> str | None:
    try:
        raw = path.read_bytes()
    except OSError:
        return None
    if not is_probably_text(raw):
        return None
    for enc in encoding_candidates:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    return None


def iter_files(paths: Iterable[str | os.PathLike[str]], detect_language: bool = True) -> Iterator[Path]:
    """ファイルはそのまま、ディレクトリは再帰的に列挙する。"""
    for p in paths:
        path = Path(p)
        if path.is_file():
            yield path
        elif path.is_dir():
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(d for d in dirs if d not in SKIP_DIRS)
                for f in sorted(files):
                    candidate = Path(root) / f
                    if detect_language and language_for_path(candidate) is None:
                        continue
                    yield candidate


__all__ = ["iter_files", "read_text", "is_probably_text", "SKIP_DIRS"]
