from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import List

from .config import Config, load_config
from .grades import annotation_for
from .languages import SUPPORTED_LANGUAGES, profile_for, suggest_language
from .logging import configure_logging, get_logger
from .metrics import METRIC_TABLES
from .pipeline import ReadabilityResult, analyze_paths
from .reading_time import estimate_reading_time

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="textinfo",
        description="ソースコード中のコメントを抽出し、可読性(読解学年)を算出します"
    )
    p.add_argument("paths", nargs="+", help="走査するファイル/ディレクトリ")
    p.add_argument("--language", help="言語IDを固定する (既定: 拡張子から判定)")
    p.add_argument("--json", action="store_true", help="JSONで出力")
    p.add_argument("--config", help="設定ファイル(TOML/YAML/JSON)を読み込み、既定値を上書き")
    p.add_argument("--tag", action="append", dest="tags", metavar="TAG", help="コメント先頭のタグ (複数指定は繰り返し)")
    p.add_argument("--multiline", dest="multiline", action="store_true", default=None, help="ブロックコメントも対象にする (既定で有効)")
    p.add_argument("--no-multiline", dest="multiline", action="store_false", help="ブロックコメントを対象外にする")
    p.add_argument("--plaintext", dest="plaintext", action="store_true", default=None, help="plaintext を1行ずつコメントとして扱う")
    p.add_argument("--jsdoc", dest="jsdoc", action="store_true", default=None, help="/** */ をDocコメントとして扱う (既定で有効)")
    p.add_argument("--no-jsdoc", dest="jsdoc", action="store_false", help="Docコメントの検出を無効化")
    p.add_argument("--summary", action="store_true", help="ファイルごとの統計(中央値/四分位)を表示")
    p.add_argument("--reading-time", action="store_true", help="ファイルごとの推定読了時間を表示")
    p.add_argument("--min-grade", type=int, default=0, help="この学年未満のコメントは表示しない (既定: 0)")
    p.add_argument("--fail-above", type=int, metavar="GRADE", help="この学年を超えるコメントがあれば終了コード1")
    p.add_argument("--jobs", type=int, default=1, help="並列実行のワーカー数")
    p.add_argument("--list-languages", action="store_true", help="対応言語IDを表示して終了")
    p.add_argument("-v", "--verbose", action="store_true", help="デバッグログを出力")
    return p


def _resolve_config(args: argparse.Namespace) -> Config:
    cfg = Config()
    if args.config:
        cfg = load_config(args.config)
    # CLI引数が最優先、未指定(None)の項目は設定ファイルの値を使う
    return cfg.merged(
        multiline_comments=args.multiline,
        highlight_plain_text=args.plaintext,
        use_jsdoc_style=args.jsdoc,
        tags=args.tags,
    )


def _print_summary(result: ReadabilityResult) -> None:
    summary = result.summary
    if summary.is_empty:
        return
    kinds = ", ".join(f"{k.value}={v:.0f}%" for k, v in summary.kinds.items())
    print(f"  comments: {summary.total} ({kinds})")
    if summary.median_grade is not None:
        print(f"  median grade: {summary.median_grade:.1f}")
    for table in METRIC_TABLES:
        print(f"  [{table}]")
        for metric, fence in summary.fences[table].items():
            if fence is None:
                continue
            mean = summary.means[table][metric] or 0.0
            print(
                f"    {metric:<30} mean={mean:8.2f} median={fence.median:8.2f} "
                f"q1={fence.lower_quartile:8.2f} q3={fence.upper_quartile:8.2f}"
            )


def _print_text(results: List[ReadabilityResult], args: argparse.Namespace, cfg: Config) -> int:
    total = 0
    for res in results:
        abs_path = str(Path(res.file).resolve()) if res.file else "<memory>"
        doc = res.document()
        if cfg.show_annotations:
            for span, stats in res.comments():
                ann = annotation_for(span, stats)
                if ann is None or ann.grade < args.min_grade:
                    continue
                # 注釈はコメント開始行(ブロックは開始記号の行)に付ける
                line, col = doc.position_at(span.start)
                if line != ann.line:
                    col = 0
                snippet = " ".join(span.text.split())
                if len(snippet) > 60:
                    snippet = snippet[:57] + "..."
                # VS Code でクリック可能な file:line:col 形式(1-based)
                print(f"{abs_path}:{ann.line + 1}:{col + 1}: {ann.title} | {snippet}")
                total += 1
        if args.reading_time and cfg.estimated_reading_time:
            print(f"{abs_path}: Est {estimate_reading_time(res.text)} min")
        if args.summary:
            print(f"{abs_path}:")
            _print_summary(res)
    print(f"Total: {total} comment(s) in {len(results)} file(s)")
    return total


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose)

    if args.list_languages:
        print("\n".join(SUPPORTED_LANGUAGES))
        return 0

    try:
        cfg = _resolve_config(args)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Failed to load config {args.config}: {e}", file=sys.stderr)
        return 2

    if args.language and not profile_for(args.language, cfg.highlight_plain_text).supported:
        hint = suggest_language(args.language)
        extra = f" (did you mean '{hint}'?)" if hint and hint != args.language else ""
        logger.warning("language '%s' is not supported%s; no comments will be reported", args.language, extra)

    results = analyze_paths(args.paths, config=cfg, jobs=args.jobs, language_id=args.language)

    if args.json:
        data = [r.to_dict() for r in results]
        print(json.dumps(data, ensure_ascii=False, indent=2))
    else:
        _print_text(results, args, cfg)

    if args.fail_above is not None:
        for res in results:
            if any(s.text_median > args.fail_above for s in res.stats):
                return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
