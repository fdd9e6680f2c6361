"""言語IDからコメント構文プロファイルを引くレジストリ。

- 言語ID は VS Code の language identifier に準拠
  (https://code.visualstudio.com/docs/languages/identifiers)
- 同じ構文を共有する言語はひとつの定数プロファイルにまとめる
- 区切り文字はエスケープ前の生文字列で保持する(エスケープは patterns 側の責務)

注意: plaintext は設定(highlightPlainText)が有効な場合のみサポート扱い。
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Optional, Tuple

try:
    from rapidfuzz import process, fuzz  # type: ignore
    _RF_AVAILABLE = True
except Exception:
    process = None  # type: ignore
    fuzz = None  # type: ignore
    _RF_AVAILABLE = False


@dataclass(frozen=True)
class LanguageProfile:
    supported: bool = False
    single_line: Optional[str] = None
    block: Optional[Tuple[str, str]] = None
    doc_style: bool = False
    ignore_first_line: bool = False
    plain_text: bool = False


def _fmt(single: Optional[str], start: str | None = None, end: str | None = None, **flags) -> LanguageProfile:
    block = (start, end) if start is not None and end is not None else None
    return LanguageProfile(supported=True, single_line=single, block=block, **flags)


UNSUPPORTED = LanguageProfile()

C_STYLE = _fmt("//", "/*", "*/")
JS_STYLE = _fmt("//", "/*", "*/", doc_style=True)
ASCIIDOC = _fmt("//", "////", "////")
CSS = _fmt("/*", "/*", "*/")
HASH = _fmt("#")
SHELL = _fmt("#", ignore_first_line=True)
PYTHON = _fmt("#", '"""', '"""', ignore_first_line=True)
NIM = _fmt("#", "#[", "]#")
POWERSHELL = _fmt("#", "<#", "#>")
TERRAFORM = _fmt("#", "/*", "*/")
SQL = _fmt("--")
LUA = _fmt("--", "--[[", "]]")
HASKELL = _fmt("--", "{-", "-}")
APOSTROPHE = _fmt("'")
PERCENT = _fmt("%")
LISP = _fmt(";")
COBOL = _fmt("*>")
FORTRAN = _fmt("c")
STAR = _fmt("*", "/*", "*/")
MARKUP = _fmt("<!--", "<!--", "-->")
TWIG = _fmt("{#", "{#", "#}")
GENSTAT = _fmt("\\", '"', '"')
CFML = _fmt("<!---", "<!---", "--->")
PLAIN_TEXT = LanguageProfile(supported=True, plain_text=True)


# (言語ID群, プロファイル) の順序付き定義。重複IDは先勝ち(tcl は HASH 側)。
_GROUPS: Tuple[Tuple[Tuple[str, ...], LanguageProfile], ...] = (
    (("asciidoc",), ASCIIDOC),
    (("apex", "javascript", "javascriptreact", "typescript", "typescriptreact"), JS_STYLE),
    ((
        "al", "c", "cpp", "csharp", "dart", "flax", "fsharp", "go", "groovy", "haxe",
        "java", "jsonc", "kotlin", "less", "pascal", "objectpascal", "php", "rust",
        "scala", "sass", "scss", "shaderlab", "stylus", "swift", "verilog", "vue",
    ), C_STYLE),
    (("css",), CSS),
    ((
        "coffeescript", "dockerfile", "gdscript", "graphql", "julia", "makefile",
        "perl", "perl6", "puppet", "r", "ruby", "tcl", "yaml",
    ), HASH),
    (("shellscript", "tcl"), SHELL),
    (("elixir", "python"), PYTHON),
    (("nim",), NIM),
    (("powershell",), POWERSHELL),
    (("ada", "hive-sql", "pig", "plsql", "sql"), SQL),
    (("lua",), LUA),
    (("elm", "haskell"), HASKELL),
    (("brightscript", "diagram", "vb"), APOSTROPHE),  # PlantUML は diagram として認識される
    (("bibtex", "erlang", "latex", "matlab"), PERCENT),
    (("clojure", "racket", "lisp"), LISP),
    (("terraform",), TERRAFORM),
    (("COBOL",), COBOL),
    (("fortran-modern",), FORTRAN),
    (("SAS", "stata"), STAR),
    (("html", "markdown", "xml"), MARKUP),
    (("twig",), TWIG),
    (("genstat",), GENSTAT),
    (("cfml",), CFML),
)


def _build_registry(groups: Iterable[Tuple[Tuple[str, ...], LanguageProfile]]) -> Dict[str, LanguageProfile]:
    registry: Dict[str, LanguageProfile] = {}
    for ids, profile in groups:
        for lang in ids:
            registry.setdefault(lang, profile)
    return registry


_REGISTRY: Dict[str, LanguageProfile] = _build_registry(_GROUPS)

SUPPORTED_LANGUAGES: Tuple[str, ...] = tuple(sorted(_REGISTRY) + ["plaintext"])


def profile_for(language_id: str, highlight_plain_text: bool = False) -> LanguageProfile:
    """言語IDに対応するプロファイルを返す。未対応なら UNSUPPORTED。"""
    if language_id == "plaintext":
        return PLAIN_TEXT if highlight_plain_text else LanguageProfile(plain_text=True)
    return _REGISTRY.get(language_id, UNSUPPORTED)


# 拡張子/ファイル名 -> 言語ID (エディタの言語判定が無いホスト向けの簡易表)
_EXTENSIONS: Dict[str, str] = {
    ".adoc": "asciidoc", ".asciidoc": "asciidoc",
    ".cls": "apex", ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript",
    ".jsx": "javascriptreact", ".ts": "typescript", ".tsx": "typescriptreact",
    ".al": "al", ".c": "c", ".h": "c", ".cpp": "cpp", ".cc": "cpp", ".cxx": "cpp",
    ".hpp": "cpp", ".hh": "cpp", ".cs": "csharp", ".dart": "dart", ".fs": "fsharp",
    ".fsx": "fsharp", ".go": "go", ".groovy": "groovy", ".gradle": "groovy",
    ".hx": "haxe", ".java": "java", ".jsonc": "jsonc", ".kt": "kotlin", ".kts": "kotlin",
    ".less": "less", ".pas": "pascal", ".pp": "objectpascal", ".php": "php",
    ".rs": "rust", ".scala": "scala", ".sass": "sass", ".scss": "scss",
    ".shader": "shaderlab", ".styl": "stylus", ".swift": "swift", ".v": "verilog",
    ".sv": "verilog", ".vue": "vue", ".css": "css",
    ".coffee": "coffeescript", ".gd": "gdscript", ".graphql": "graphql", ".gql": "graphql",
    ".jl": "julia", ".mk": "makefile", ".pl": "perl", ".pm": "perl", ".raku": "perl6",
    ".p6": "perl6", ".r": "r", ".rb": "ruby", ".tcl": "tcl", ".yaml": "yaml", ".yml": "yaml",
    ".sh": "shellscript", ".bash": "shellscript", ".zsh": "shellscript",
    ".ex": "elixir", ".exs": "elixir", ".py": "python", ".pyw": "python",
    ".nim": "nim", ".ps1": "powershell", ".psm1": "powershell",
    ".ada": "ada", ".adb": "ada", ".ads": "ada", ".hql": "hive-sql", ".pig": "pig",
    ".pls": "plsql", ".pkb": "plsql", ".sql": "sql", ".lua": "lua", ".elm": "elm",
    ".hs": "haskell", ".brs": "brightscript", ".puml": "diagram", ".plantuml": "diagram",
    ".vb": "vb", ".bib": "bibtex", ".erl": "erlang", ".hrl": "erlang", ".tex": "latex",
    ".m": "matlab", ".clj": "clojure", ".cljs": "clojure", ".rkt": "racket",
    ".lisp": "lisp", ".lsp": "lisp", ".el": "lisp", ".tf": "terraform",
    ".cbl": "COBOL", ".cob": "COBOL", ".f90": "fortran-modern", ".f95": "fortran-modern",
    ".sas": "SAS", ".do": "stata", ".html": "html", ".htm": "html",
    ".md": "markdown", ".markdown": "markdown", ".xml": "xml", ".twig": "twig",
    ".gen": "genstat", ".cfm": "cfml", ".cfc": "cfml", ".txt": "plaintext",
}

_FILENAMES: Dict[str, str] = {
    "dockerfile": "dockerfile",
    "makefile": "makefile",
    "gnumakefile": "makefile",
    "gemfile": "ruby",
    "rakefile": "ruby",
    "jenkinsfile": "groovy",
}


def language_for_path(path: str | Path) -> Optional[str]:
    p = Path(path)
    name = p.name.lower()
    if name in _FILENAMES:
        return _FILENAMES[name]
    return _EXTENSIONS.get(p.suffix.lower())


def is_available() -> bool:
    """言語ID候補提示(rapidfuzz)が使えるか。"""
    return _RF_AVAILABLE


def suggest_language(language_id: str, threshold: int = 80) -> Optional[str]:
    """未対応の言語IDに最も近いサポート済みIDを返す(rapidfuzz が無ければ None)。"""
    if not _RF_AVAILABLE or not language_id:
        return None
    if language_id in SUPPORTED_LANGUAGES:
        return language_id
    try:
        cand = process.extractOne(language_id, SUPPORTED_LANGUAGES, scorer=fuzz.WRatio)
    except Exception:
        cand = None
    if not cand:
        return None
    best, score, _ = cand
    return best if score >= threshold else None


__all__ = [
    "LanguageProfile",
    "UNSUPPORTED",
    "SUPPORTED_LANGUAGES",
    "profile_for",
    "language_for_path",
    "suggest_language",
    "is_available",
]
