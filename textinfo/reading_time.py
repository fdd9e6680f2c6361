"""読了時間の推定(平均 233 語/分)。コード/文書の区別はしない。"""
from __future__ import annotations
import math
import re

WORDS_PER_MINUTE = 233

_TAG_FRAGMENT_RE = re.compile(r"(< ([^>]+)<)")
_WS_RE = re.compile(r"\s+")


def word_count(text: str) -> int:
    content = _TAG_FRAGMENT_RE.sub("", text)
    content = _WS_RE.sub(" ", content).strip()
    if not content:
        return 0
    return len(content.split(" "))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def estimate_reading_time(text: str, start: int = 0, wpm: int = WORDS_PER_MINUTE) -> str:
    """start 以降を読み切るまでの時間を "MM:SS" で返す。"""
    if wpm <= 0:
        raise ValueError("wpm must be positive")
    words = word_count(text[max(0, start):])
    estimate = _round_half_up(words / wpm * 100) / 100
    minutes = math.floor(estimate)
    seconds = _round_half_up((estimate - minutes) * 60)
    return f"{minutes:02d}:{seconds:02d}"


__all__ = ["WORDS_PER_MINUTE", "estimate_reading_time", "word_count"]
