"""学年(grade)の序数表記と、コメント行に付ける読解レベル注釈。"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Dict, Optional

from .comments import CommentSpan
from .metrics import ReadabilityStats

_SUFFIXES: Dict[int, str] = {1: "st", 2: "nd", 3: "rd"}

ANNOTATION_TOOLTIP = (
    "A grade median calculated from the following readability tests: "
    "Flesch Kincaid Grade, Flesch Reading Ease (interpreted as a grade), SMOG Index, "
    "Coleman Liau Index, Automated Readability Index, Dale Chall Readability Score, "
    "Linsear Write Formula, Gunning Fog Index"
)


def grade_suffix(grade: float) -> str:
    """序数の接尾辞 st/nd/rd/th を返す。

    20 を超える学年は 10 で割った余りで判定する。11-13 は 20 以下なので th になるが、
    111 のような大きな値は "st" になる(既知の制限、学年がそこまで大きくなる想定はない)。
    """
    g = math.floor(grade)
    if g > 20:
        g = g % 10
    return _SUFFIXES.get(g, "th")


def grade_label(grade: float) -> str:
    g = math.floor(grade)
    return f"{g}{grade_suffix(g)}"


@dataclass(frozen=True)
class ReadingLevelAnnotation:
    line: int
    grade: int
    title: str
    tooltip: str = ANNOTATION_TOOLTIP

    def to_dict(self) -> dict:
        return {"line": self.line, "grade": self.grade, "title": self.title, "tooltip": self.tooltip}


def annotation_for(span: CommentSpan, stats: ReadabilityStats) -> Optional[ReadingLevelAnnotation]:
    median = stats.text_median
    # 0 以下は算出不能な学年としてスキップ
    if median <= 0:
        return None
    grade = math.floor(median)
    return ReadingLevelAnnotation(
        line=span.line,
        grade=grade,
        title=f"Predicted reading level of {grade_label(grade)} grade",
    )


__all__ = [
    "ANNOTATION_TOOLTIP",
    "ReadingLevelAnnotation",
    "annotation_for",
    "grade_label",
    "grade_suffix",
]
