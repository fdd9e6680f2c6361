from __future__ import annotations
"""
コメントの読解学年ヒストグラムを作るスクリプト。
- リポジトリ内のファイルを走査し、コメントごとの text_median を学年(整数)で集計。
- 生成物は 1行1学年 のプレーンテキスト("9th<TAB>12" 形式)として出力。

使い方(例):
  python tools/grade_histogram.py . --out grades.txt --min-count 2 --no-multiline

注意:
- 拡張子から言語が判定できないファイルはスキップされます。
- 学年が算出できない(0以下)のコメントは集計しません。
"""
import argparse
from collections import Counter
import math
from pathlib import Path
from typing import Iterable

from textinfo.config import Config
from textinfo.grades import grade_label
from textinfo.pipeline import analyze_paths


def gather_grades(paths: Iterable[str], config: Config | None = None) -> Counter:
    cnt: Counter = Counter()
    for res in analyze_paths(paths, config=config):
        for stats in res.stats:
            if stats.text_median > 0:
                cnt[math.floor(stats.text_median)] += 1
    return cnt


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('paths', nargs='+', help='走査するファイル/ディレクトリ')
    ap.add_argument('--out', default='grades.txt', help='出力ファイル(既定: grades.txt)')
    ap.add_argument('--min-count', type=int, default=1, help='出力する最小件数(既定:1)')
    ap.add_argument('--no-multiline', action='store_true', help='ブロックコメントを集計しない')
    args = ap.parse_args()

    cfg = Config(multiline_comments=not args.no_multiline)
    cnt = gather_grades(args.paths, config=cfg)
    rows = [f"{grade_label(g)}\t{c}" for g, c in sorted(cnt.items()) if c >= args.min_count]
    Path(args.out).write_text("\n".join(rows), encoding='utf-8')
    print(f"Wrote {len(rows)} grades to {args.out}")


if __name__ == '__main__':
    main()
