"""textinfo
ソースコード中のコメントの読みやすさ(読解学年)を算出するライブラリ。

主な提供機能:
- 約80の言語IDに対応した、正規表現ベースのコメント抽出(単一行/ブロック/Doc)
- コメントごとの可読性指標(Flesch, SMOG, Coleman-Liau, Dale-Chall など)
- ドキュメント全体の統計(中央値/四分位/外れ値フェンス, コメント種別の割合)
- 「Nth grade」形式の読解レベル注釈と推定読了時間
- CLI インターフェース
"""
from .comments import CommentKind, CommentSpan
from .config import Config, load_config
from .document import Document
from .grades import grade_suffix
from .languages import profile_for
from .metrics import ReadabilityStats, evaluate
from .pipeline import ReadabilityResult, analyze_document, analyze_text, analyze_file, analyze_paths
from .stats import BoxplotFence, CorpusSummary, summarize

__all__ = [
    "BoxplotFence",
    "CommentKind",
    "CommentSpan",
    "Config",
    "CorpusSummary",
    "Document",
    "ReadabilityResult",
    "ReadabilityStats",
    "analyze_document",
    "analyze_file",
    "analyze_paths",
    "analyze_text",
    "evaluate",
    "grade_suffix",
    "load_config",
    "profile_for",
    "summarize",
]

__version__ = "0.1.0"
