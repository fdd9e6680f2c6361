"""言語プロファイル駆動のコメント抽出。

3つのパスを独立に実行し、結果を順に連結する(重複排除はしない):
- 単一行: 区切り文字(//, #, --, ' など)以降を行末まで
- ブロック: 開始/終了記号の間(非貪欲マッチで隣接ブロックを結合しない)
- Doc: /** ... */ 形式

注意: これはヒューリスティックです。文字列中の区切り文字を誤認する可能性があります。
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from re import Match, Pattern
from typing import Iterator

from .document import offset_to_linecol
from .languages import LanguageProfile
from .patterns import CompiledPatterns


class CommentKind(str, Enum):
    SINGLE_LINE = "single_line"
    BLOCK = "block"
    DOC_BLOCK = "doc_block"


@dataclass(frozen=True)
class CommentSpan:
    kind: CommentKind
    start: int
    end: int
    line: int
    text: str

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "start": self.start,
            "end": self.end,
            "line": self.line,
            "text": self.text,
        }


def _single_line_spans(text: str, regex: Pattern[str], profile: LanguageProfile) -> Iterator[CommentSpan]:
    for m in regex.finditer(text):
        line, col = offset_to_linecol(text, m.start())
        # shebang 行などファイル先頭の1行目はコメント扱いしない (python 等)
        if profile.ignore_first_line and line == 0 and col == 0:
            continue
        start = m.end() - len(m.group(4))
        end = m.end()
        if start >= end:
            continue
        yield CommentSpan(CommentKind.SINGLE_LINE, start, end, line, text[start:end])


def _block_spans(text: str, regex: Pattern[str], kind: CommentKind) -> Iterator[CommentSpan]:
    for m in regex.finditer(text):
        start = m.start(3)
        end = m.start(4)
        if start >= end:
            continue
        line = _line_of(text, m)
        yield CommentSpan(kind, start, end, line, text[start:end])


def _line_of(text: str, m: Match[str]) -> int:
    # 行番号は本文ではなくブロック開始記号の行
    return text.count("\n", 0, m.start())


def extract_comments(text: str, patterns: CompiledPatterns, profile: LanguageProfile) -> Iterator[CommentSpan]:
    if not profile.supported:
        return
    if patterns.single_line is not None:
        yield from _single_line_spans(text, patterns.single_line, profile)
    if patterns.block is not None:
        yield from _block_spans(text, patterns.block, CommentKind.BLOCK)
    if patterns.doc is not None:
        yield from _block_spans(text, patterns.doc, CommentKind.DOC_BLOCK)


__all__ = ["CommentKind", "CommentSpan", "extract_comments"]
