"""ドキュメントのスナップショットと、文字オフセット -> (行, 桁) 変換。"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


def offset_to_linecol(text: str, idx: int) -> Tuple[int, int]:
    """0-based の (行, 桁) を返す。範囲外のオフセットは端に丸める。"""
    if idx <= 0:
        return 0, 0
    idx = min(idx, len(text))
    line = text.count("\n", 0, idx)
    last_nl = text.rfind("\n", 0, idx)
    col = idx - (last_nl + 1) if last_nl != -1 else idx
    return line, col


@dataclass(frozen=True)
class Document:
    text: str
    language_id: str = "plaintext"
    uri: str | None = None

    def position_at(self, offset: int) -> Tuple[int, int]:
        return offset_to_linecol(self.text, offset)

    def line_of(self, offset: int) -> int:
        return self.text.count("\n", 0, max(0, min(offset, len(self.text))))

    def get_text(self, start: int, end: int) -> str:
        return self.text[start:end]


__all__ = ["Document", "offset_to_linecol"]
