"""コメント単位の指標をドキュメント全体の統計にまとめる。

箱ひげ図の四分位は「exclusive median」方式(要素数が奇数のとき、全体の中央値の
要素を上下どちらの半分にも含めない)。一般的な inclusive 方式とは奇数件で値が
変わるので、変更しないこと。
"""
from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from .comments import CommentKind
from .metrics import METRIC_TABLES, ReadabilityStats


@dataclass(frozen=True)
class BoxplotFence:
    lower_extreme: float
    lower_quartile: float
    upper_quartile: float
    upper_extreme: float
    median: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> Optional["BoxplotFence"]:
        box = boxplot_values(values)
        if not box:
            return None
        return cls(*box)

    def as_list(self) -> List[float]:
        return [self.lower_extreme, self.lower_quartile, self.upper_quartile, self.upper_extreme, self.median]

    def to_dict(self) -> Dict[str, float]:
        return {
            "lower_extreme": self.lower_extreme,
            "lower_quartile": self.lower_quartile,
            "upper_quartile": self.upper_quartile,
            "upper_extreme": self.upper_extreme,
            "median": self.median,
        }


def find_median(values: Sequence[float], begin: int, end: int) -> float:
    """ソート済み values[begin:end] の中央値。"""
    count = end - begin
    half = count // 2
    if count % 2 == 1:
        return values[begin + half]
    return (values[begin + half - 1] + values[begin + half]) / 2.0


def boxplot_values(values: Sequence[float]) -> List[float]:
    """[下限フェンス, 第1四分位, 第3四分位, 上限フェンス, 中央値] を返す。"""
    if not values:
        return []
    ordered = sorted(values)
    count = len(ordered)
    if count == 1:
        return [ordered[0]] * 5
    median = find_median(ordered, 0, count)
    lower_quartile = find_median(ordered, 0, count // 2)
    upper_quartile = find_median(ordered, count // 2 + count % 2, count)
    iqr = abs(upper_quartile - lower_quartile)
    lower_extreme = lower_quartile - 1.5 * iqr
    upper_extreme = upper_quartile + 1.5 * iqr
    return [lower_extreme, lower_quartile, upper_quartile, upper_extreme, median]


def kind_distribution(kinds: Sequence[CommentKind]) -> Dict[CommentKind, float]:
    total = len(kinds)
    if not total:
        return {}
    counter = Counter(kinds)
    return {kind: count / total * 100 for kind, count in counter.items()}


def _empty_tables() -> Dict[str, Dict[str, None]]:
    return {table: dict.fromkeys(names) for table, names in METRIC_TABLES.items()}


@dataclass(frozen=True)
class CorpusSummary:
    total: int = 0
    kinds: Mapping[CommentKind, float] = field(default_factory=dict)
    fences: Mapping[str, Mapping[str, Optional[BoxplotFence]]] = field(default_factory=_empty_tables)
    means: Mapping[str, Mapping[str, Optional[float]]] = field(default_factory=_empty_tables)
    median_grade: Optional[float] = None

    @classmethod
    def empty(cls) -> "CorpusSummary":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def fence(self, table: str, metric: str) -> Optional[BoxplotFence]:
        return self.fences.get(table, {}).get(metric)

    def to_dict(self) -> Dict[str, object]:
        return {
            "total": self.total,
            "kinds": {k.value: v for k, v in self.kinds.items()},
            "fences": {
                table: {m: (f.to_dict() if f else None) for m, f in metrics.items()}
                for table, metrics in self.fences.items()
            },
            "means": {table: dict(metrics) for table, metrics in self.means.items()},
            "median_grade": self.median_grade,
        }


def summarize(stats: Sequence[ReadabilityStats], kinds: Sequence[CommentKind]) -> CorpusSummary:
    if len(stats) != len(kinds):
        raise ValueError(f"stats and kinds differ in length: {len(stats)} != {len(kinds)}")
    if not stats:
        return CorpusSummary.empty()

    fences: Dict[str, Dict[str, Optional[BoxplotFence]]] = {}
    means: Dict[str, Dict[str, Optional[float]]] = {}
    for table, names in METRIC_TABLES.items():
        fences[table] = {}
        means[table] = {}
        for name in names:
            values = [s.table(table).get(name, 0.0) for s in stats]
            fences[table][name] = BoxplotFence.from_values(values)
            means[table][name] = sum(values) / len(values)

    grades = sorted(s.text_median for s in stats)
    return CorpusSummary(
        total=len(stats),
        kinds=kind_distribution(kinds),
        fences=fences,
        means=means,
        median_grade=find_median(grades, 0, len(grades)),
    )


__all__ = [
    "BoxplotFence",
    "CorpusSummary",
    "boxplot_values",
    "find_median",
    "kind_distribution",
    "summarize",
]
