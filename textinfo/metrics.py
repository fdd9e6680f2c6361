"""コメント本文に対する可読性指標の計算。

各公式は textstat に委譲する。空文字列・文数0などで公式が定義できない場合は
例外を伝播させず 0 を返す(集計側でキー欠落や None を意識しなくて済むように)。

- counts:   文字数/英字数/語数/音節数/文数
- averages: counts から導出する平均値
- scores:   Flesch, FK, SMOG, Coleman-Liau, ARI, Linsear Write, Dale-Chall,
            Gunning Fog, LIX, RIX と、学年系8指標の中央値 text_median
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
import statistics
from typing import Callable, Dict, Mapping, Tuple

import textstat

COUNT_NAMES: Tuple[str, ...] = (
    "char_count",
    "letter_count",
    "lexicon_count",
    "syllable_count",
    "sentence_count",
)

AVERAGE_NAMES: Tuple[str, ...] = (
    "avg_sentence_length",
    "avg_syllables_per_word",
    "avg_character_per_word",
    "avg_letter_per_word",
    "avg_sentence_per_word",
)

SCORE_NAMES: Tuple[str, ...] = (
    "flesch_reading_ease",
    "flesch_reading_ease_grade",
    "flesch_kincaid_grade",
    "poly_syllable_count",
    "smog_index",
    "coleman_liau_index",
    "automated_readability_index",
    "linsear_write_formula",
    "dale_chall_readability_score",
    "dale_chall_grade",
    "gunning_fog",
    "lix",
    "rix",
    "text_median",
)

METRIC_TABLES: Dict[str, Tuple[str, ...]] = {
    "counts": COUNT_NAMES,
    "averages": AVERAGE_NAMES,
    "scores": SCORE_NAMES,
}

# text_median の対象となる学年換算済みの指標
GRADE_SCORE_NAMES: Tuple[str, ...] = (
    "flesch_kincaid_grade",
    "flesch_reading_ease_grade",
    "smog_index",
    "coleman_liau_index",
    "automated_readability_index",
    "dale_chall_grade",
    "linsear_write_formula",
    "gunning_fog",
)

_COUNT_FUNCS: Dict[str, Callable[[str], float]] = {
    "char_count": textstat.char_count,
    "letter_count": textstat.letter_count,
    "lexicon_count": textstat.lexicon_count,
    "syllable_count": textstat.syllable_count,
    "sentence_count": textstat.sentence_count,
}

_SCORE_FUNCS: Dict[str, Callable[[str], float]] = {
    "flesch_reading_ease": textstat.flesch_reading_ease,
    "flesch_kincaid_grade": textstat.flesch_kincaid_grade,
    "poly_syllable_count": textstat.polysyllabcount,
    "smog_index": textstat.smog_index,
    "coleman_liau_index": textstat.coleman_liau_index,
    "automated_readability_index": textstat.automated_readability_index,
    "linsear_write_formula": textstat.linsear_write_formula,
    "dale_chall_readability_score": textstat.dale_chall_readability_score,
    "gunning_fog": textstat.gunning_fog,
    "lix": textstat.lix,
    "rix": textstat.rix,
}


@dataclass(frozen=True)
class ReadabilityStats:
    counts: Mapping[str, float] = field(default_factory=lambda: dict.fromkeys(COUNT_NAMES, 0.0))
    averages: Mapping[str, float] = field(default_factory=lambda: dict.fromkeys(AVERAGE_NAMES, 0.0))
    scores: Mapping[str, float] = field(default_factory=lambda: dict.fromkeys(SCORE_NAMES, 0.0))

    def table(self, name: str) -> Mapping[str, float]:
        if name not in METRIC_TABLES:
            raise ValueError(f"unknown metric table: {name}")
        return getattr(self, name)

    @property
    def text_median(self) -> float:
        return self.scores.get("text_median", 0.0)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "counts": dict(self.counts),
            "averages": dict(self.averages),
            "scores": dict(self.scores),
        }


def _safe(func: Callable[[str], float], text: str) -> float:
    try:
        value = func(text)
    except (ZeroDivisionError, ValueError, TypeError, IndexError):
        return 0.0
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        return 0.0
    return value


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def flesch_reading_ease_to_grade(score: float) -> float:
    if 90 <= score < 100:
        return 5.0
    if 80 <= score < 90:
        return 6.0
    if 70 <= score < 80:
        return 7.0
    if 60 <= score < 70:
        return 8.5
    if 50 <= score < 60:
        return 11.0
    if 40 <= score < 50:
        return 13.0
    if 30 <= score < 40:
        return 15.0
    return 16.0


def dale_chall_to_grade(score: float) -> float:
    if score <= 4.9:
        return 4.0
    if score < 5.9:
        return 5.0
    if score < 6.9:
        return 7.0
    if score < 7.9:
        return 9.0
    if score < 8.9:
        return 11.0
    if score < 9.9:
        return 13.0
    return 16.0


def _averages(counts: Mapping[str, float]) -> Dict[str, float]:
    words = counts["lexicon_count"]
    return {
        "avg_sentence_length": _ratio(words, counts["sentence_count"]),
        "avg_syllables_per_word": _ratio(counts["syllable_count"], words),
        "avg_character_per_word": _ratio(counts["char_count"], words),
        "avg_letter_per_word": _ratio(counts["letter_count"], words),
        "avg_sentence_per_word": _ratio(counts["sentence_count"], words),
    }


def evaluate(text: str) -> ReadabilityStats:
    if not text or not text.strip():
        return ReadabilityStats()

    counts = {name: _safe(func, text) for name, func in _COUNT_FUNCS.items()}
    if not counts["lexicon_count"]:
        # 単語が無い(記号のみ等)なら平均/スコアは定義できない
        return ReadabilityStats(counts=counts)

    scores = {name: _safe(func, text) for name, func in _SCORE_FUNCS.items()}
    scores["flesch_reading_ease_grade"] = flesch_reading_ease_to_grade(scores["flesch_reading_ease"])
    scores["dale_chall_grade"] = dale_chall_to_grade(scores["dale_chall_readability_score"])
    scores["text_median"] = float(statistics.median(scores[n] for n in GRADE_SCORE_NAMES))
    ordered = {name: scores[name] for name in SCORE_NAMES}
    return ReadabilityStats(counts=counts, averages=_averages(counts), scores=ordered)


__all__ = [
    "AVERAGE_NAMES",
    "COUNT_NAMES",
    "GRADE_SCORE_NAMES",
    "METRIC_TABLES",
    "SCORE_NAMES",
    "ReadabilityStats",
    "dale_chall_to_grade",
    "evaluate",
    "flesch_reading_ease_to_grade",
]
