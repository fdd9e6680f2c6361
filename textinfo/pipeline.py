"""高レベル API: テキスト/ファイル/パス群に対するコメント可読性解析

- 言語プロファイル -> パターン構築 -> コメント抽出
- コメントごとの可読性指標 -> ドキュメント全体の統計 -> 学年注釈
- パス走査と並列実行(各ファイルは独立したスナップショットとして処理)

1回の実行は入力テキスト(str, 不変)だけに依存し、状態を持ち越さない。
"""
from __future__ import annotations

from dataclasses import dataclass, field
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .comments import CommentSpan, extract_comments
from .config import Config
from .document import Document
from .file_scanner import iter_files, read_text
from .grades import ReadingLevelAnnotation, annotation_for
from .languages import LanguageProfile, UNSUPPORTED, language_for_path, profile_for
from .logging import get_logger
from .metrics import ReadabilityStats, evaluate
from .patterns import build_patterns
from .stats import CorpusSummary, summarize

logger = get_logger("pipeline")


@dataclass(frozen=True)
class ReadabilityResult:
    language_id: str
    profile: LanguageProfile = UNSUPPORTED
    spans: Tuple[CommentSpan, ...] = ()
    stats: Tuple[ReadabilityStats, ...] = ()
    summary: CorpusSummary = field(default_factory=CorpusSummary.empty)
    file: str | None = None
    text: str = field(default="", repr=False, compare=False)

    @property
    def supported(self) -> bool:
        return self.profile.supported

    def document(self) -> Document:
        return Document(self.text, self.language_id, self.file)

    def comments(self) -> List[Tuple[CommentSpan, ReadabilityStats]]:
        return list(zip(self.spans, self.stats))

    def annotations(self) -> List[ReadingLevelAnnotation]:
        out: List[ReadingLevelAnnotation] = []
        for span, stats in zip(self.spans, self.stats):
            ann = annotation_for(span, stats)
            if ann is not None:
                out.append(ann)
        return out

    def to_dict(self) -> Dict[str, object]:
        return {
            "file": self.file,
            "language_id": self.language_id,
            "supported": self.supported,
            "comments": [
                {**span.to_dict(), "stats": stats.to_dict()}
                for span, stats in zip(self.spans, self.stats)
            ],
            "annotations": [a.to_dict() for a in self.annotations()],
            "summary": self.summary.to_dict(),
        }


def find_comments(text: str, language_id: str, config: Config | None = None) -> List[CommentSpan]:
    cfg = config or Config()
    profile = profile_for(language_id, highlight_plain_text=cfg.highlight_plain_text)
    if not profile.supported:
        return []
    patterns = build_patterns(
        profile,
        cfg.tags,
        cfg.highlight_plain_text,
        multiline_comments=cfg.multiline_comments,
        doc_style=cfg.use_jsdoc_style,
    )
    return list(extract_comments(text, patterns, profile))


def analyze_text(
    text: str,
    language_id: str,
    config: Config | None = None,
    file: str | None = None,
) -> ReadabilityResult:
    cfg = config or Config()
    profile = profile_for(language_id, highlight_plain_text=cfg.highlight_plain_text)
    if not profile.supported:
        logger.debug("unsupported language: %s", language_id)
        return ReadabilityResult(language_id=language_id, profile=profile, file=file, text=text)

    spans = tuple(find_comments(text, language_id, cfg))
    stats = tuple(evaluate(span.text) for span in spans)
    summary = summarize(stats, [span.kind for span in spans])
    logger.debug("%s: %d comment(s) found (%s)", file or "<memory>", len(spans), language_id)
    return ReadabilityResult(
        language_id=language_id,
        profile=profile,
        spans=spans,
        stats=stats,
        summary=summary,
        file=file,
        text=text,
    )


def analyze_document(doc: Document, config: Config | None = None) -> ReadabilityResult:
    """エディタ等のホストから渡されたスナップショットを解析する。"""
    return analyze_text(doc.text, doc.language_id, config=config, file=doc.uri)


def analyze_file(
    path: str,
    config: Config | None = None,
    language_id: str | None = None,
) -> Optional[ReadabilityResult]:
    lang = language_id or language_for_path(path)
    if lang is None:
        logger.debug("skip %s: language could not be detected", path)
        return None
    content = read_text(Path(path))
    if content is None:
        logger.debug("skip %s: not a decodable text file", path)
        return None
    return analyze_text(content, lang, config=config, file=path)


def analyze_paths(
    paths: Iterable[str],
    config: Config | None = None,
    jobs: int = 1,
    language_id: str | None = None,
) -> List[ReadabilityResult]:
    files = [str(f) for f in iter_files(paths, detect_language=language_id is None)]
    results: List[ReadabilityResult] = []

    # 1ファイルの失敗は記録してスキップする(直列/並列で同じ扱い)
    def _run(key: str) -> Optional[ReadabilityResult]:
        try:
            return analyze_file(key, config=config, language_id=language_id)
        except Exception:
            logger.exception("failed to analyze %s", key)
            return None

    # 並列/直列実行
    if jobs and jobs > 1:
        ordered: Dict[str, ReadabilityResult] = {}
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futs = {ex.submit(_run, key): key for key in files}
            for fut in as_completed(futs):
                res = fut.result()
                if res is not None:
                    ordered[futs[fut]] = res
        # 出力順を入力順にそろえる
        results.extend(ordered[key] for key in files if key in ordered)
    else:
        for key in files:
            res = _run(key)
            if res is not None:
                results.append(res)
    return results


__all__ = [
    "ReadabilityResult",
    "analyze_document",
    "analyze_file",
    "analyze_paths",
    "analyze_text",
    "find_comments",
]
