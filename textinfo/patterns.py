"""言語プロファイルとタグ設定からコメント検出用の正規表現を組み立てる。

グループ番号は全パターン共通:
- 単一行: 1=区切り文字(またはplaintextの行頭), 2=空白, 3=タグ, 4=本文
- ブロック/Doc: 1=直前の行頭/空白, 2=開始記号, 3=本文, 4=終了記号
"""
from __future__ import annotations
from dataclasses import dataclass
import re
from re import Pattern
from typing import Iterable, Optional, Tuple

from .languages import LanguageProfile

# '/' は正規表現の区切りではないが、常にエスケープしておく
_REGEX_META_RE = re.compile(r"[.*+?^${}()|\[\]\\/]")

DOC_BLOCK_RE: Pattern[str] = re.compile(r"(^|[ \t])(\/\*\*)+([\s\S]*?)(\*\/)", re.MULTILINE)


def escape_literal(value: str) -> str:
    return _REGEX_META_RE.sub(lambda m: "\\" + m.group(0), value)


def escape_tags(tags: Iterable[object]) -> Tuple[str, ...]:
    """タグを正規表現用にエスケープ。空タグと重複は除外し、順序は維持する。"""
    escaped: list[str] = []
    for tag in tags:
        text = str(tag)
        if not text:
            continue
        e = escape_literal(text)
        if e not in escaped:
            escaped.append(e)
    return tuple(escaped)


@dataclass(frozen=True)
class CompiledPatterns:
    single_line: Optional[Pattern[str]] = None
    block: Optional[Pattern[str]] = None
    doc: Optional[Pattern[str]] = None

    @property
    def empty(self) -> bool:
        return self.single_line is None and self.block is None and self.doc is None


def single_line_expression(profile: LanguageProfile, tags: Iterable[object], plain_text_allowed: bool) -> Optional[str]:
    if profile.plain_text and plain_text_allowed:
        # plaintext は行頭そのものをコメント開始とみなす
        head = "(^)([ \\t]*)"
    elif profile.single_line:
        head = "(" + escape_literal(profile.single_line) + ")+( |\\t)*"
    else:
        return None
    alternation = "|".join(escape_tags(tags))
    tag_clause = "(" + alternation + ")*" if alternation else "()"
    return head + tag_clause + "([^\\r\\n]*)"


def block_expression(start: str, end: str) -> str:
    return "(^|[ \\t])(" + escape_literal(start) + "[\\s])+([\\s\\S]*?)(" + escape_literal(end) + ")"


def build_patterns(
    profile: LanguageProfile,
    tags: Iterable[object],
    plain_text_allowed: bool,
    *,
    multiline_comments: bool = True,
    doc_style: bool = True,
) -> CompiledPatterns:
    if not profile.supported:
        return CompiledPatterns()

    single = None
    expr = single_line_expression(profile, tags, plain_text_allowed)
    if expr is not None:
        flags = re.IGNORECASE
        if profile.plain_text and plain_text_allowed:
            flags |= re.MULTILINE
        single = re.compile(expr, flags)

    block = None
    if multiline_comments and profile.block is not None:
        block = re.compile(block_expression(*profile.block), re.MULTILINE)

    doc = DOC_BLOCK_RE if (profile.doc_style and doc_style) else None
    return CompiledPatterns(single_line=single, block=block, doc=doc)


__all__ = [
    "CompiledPatterns",
    "DOC_BLOCK_RE",
    "build_patterns",
    "block_expression",
    "escape_literal",
    "escape_tags",
    "single_line_expression",
]
