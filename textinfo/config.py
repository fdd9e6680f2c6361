"""設定の読み込み。

対応フォーマット:
- TOML: pyproject.toml の [tool.textinfo] テーブル(無ければトップレベル)
- YAML: PyYAML が必要
- JSON: 上記以外の拡張子

キー(camelCase):
---
multilineComments: true      # ブロックコメントも対象にする
highlightPlainText: false    # plaintext を1行=1コメントとして扱う
useJSDocStyle: true          # /** */ を Doc コメントとして扱う
tags: ["TODO", "FIXME"]      # 区切り文字直後に付くタグ(本文から除外)
showAnnotations: true
estimatedReadingTime: true
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

try:
    import tomllib  # Python 3.11+
except Exception:  # pragma: no cover
    tomllib = None  # type: ignore

try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None  # YAML未インストール時はTOML/JSONのみ

DEFAULT_TAGS: Tuple[str, ...] = ("TODO", "FIXME", "NOTE", "XXX", "!", "?", "*")

_BOOL_KEYS: Tuple[Tuple[str, str], ...] = (
    ("multilineComments", "multiline_comments"),
    ("highlightPlainText", "highlight_plain_text"),
    ("useJSDocStyle", "use_jsdoc_style"),
    ("showAnnotations", "show_annotations"),
    ("estimatedReadingTime", "estimated_reading_time"),
)


@dataclass(frozen=True)
class Config:
    multiline_comments: bool = True
    highlight_plain_text: bool = False
    use_jsdoc_style: bool = True
    tags: Tuple[str, ...] = field(default=DEFAULT_TAGS)
    show_annotations: bool = True
    estimated_reading_time: bool = True

    def merged(self, **overrides: Any) -> "Config":
        """None 以外の値で上書きした新しい Config を返す。"""
        values = {k: v for k, v in overrides.items() if v is not None}
        if "tags" in values:
            values["tags"] = _normalize_tags(values["tags"])
        return replace(self, **values)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {key: getattr(self, attr) for key, attr in _BOOL_KEYS}
        data["tags"] = list(self.tags)
        return data


def _normalize_tags(value: Any) -> Tuple[str, ...]:
    # 文字列1つ/配列のどちらも受け付ける。不正な値も文字列化して扱う(エスケープは patterns 側)
    if value is None:
        return ()
    if isinstance(value, (str, int, float)):
        return (str(value),)
    return tuple(str(v) for v in value if v is not None and str(v) != "")


def config_from_mapping(data: Mapping[str, Any], base: Config | None = None) -> Config:
    if not isinstance(data, Mapping):
        raise ValueError("設定はキー/値のマッピングである必要があります")
    cfg = base or Config()
    values: Dict[str, Any] = {}
    for key, attr in _BOOL_KEYS:
        if key in data:
            value = data[key]
            # "false" などの文字列を真と誤読しないよう、真偽値以外は拒否する
            if not isinstance(value, bool):
                raise ValueError(f"{key} は true/false で指定してください: {value!r}")
            values[attr] = value
    if "tags" in data:
        values["tags"] = _normalize_tags(data["tags"])
    return replace(cfg, **values)


def _decode(raw: bytes) -> str:
    for enc in ("utf-8", "utf-8-sig", "utf-16", "cp932"):
        try:
            text = raw.decode(enc)
            break
        except UnicodeDecodeError:
            continue
    else:
        raise UnicodeDecodeError("unknown", b"", 0, 1, "Unable to decode config file with tried encodings")
    return text.lstrip("\ufeff")


def load_config(path: str | Path, base: Config | None = None) -> Config:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(path))
    suffix = p.suffix.lower()
    if suffix == ".toml":
        if tomllib is None:  # pragma: no cover
            raise RuntimeError("TOMLの読み込みには Python 3.11 以降が必要です")
        with p.open("rb") as f:
            data = tomllib.load(f)
        tool = data.get("tool", {})
        if isinstance(tool, dict) and isinstance(tool.get("textinfo"), dict):
            data = tool["textinfo"]
    elif suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("PyYAMLがインストールされていないためYAMLは読み込めません。'pip install PyYAML' を実行してください")
        try:
            data = yaml.safe_load(_decode(p.read_bytes()))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {path}: {e}")
    else:
        data = json.loads(_decode(p.read_bytes()))
    if data is None:
        data = {}
    return config_from_mapping(data, base=base)


__all__ = ["Config", "DEFAULT_TAGS", "config_from_mapping", "load_config"]
