import importlib

from textinfo.languages import (
    SUPPORTED_LANGUAGES,
    UNSUPPORTED,
    language_for_path,
    profile_for,
    suggest_language,
)


def test_all_supported_ids_have_profile():
    for lang in SUPPORTED_LANGUAGES:
        profile = profile_for(lang, highlight_plain_text=True)
        assert profile.supported, lang
        assert profile.single_line or profile.plain_text, lang


def test_unknown_language_is_unsupported():
    assert profile_for("klingon") == UNSUPPORTED
    assert not profile_for("").supported
    # 大文字小文字は区別する (COBOL/SAS は大文字ID)
    assert not profile_for("Python").supported
    assert profile_for("COBOL").single_line == "*>"


def test_shared_profiles():
    assert profile_for("c") is profile_for("rust")
    assert profile_for("javascript").doc_style
    assert not profile_for("java").doc_style
    assert profile_for("css").single_line == "/*"
    assert profile_for("css").block == ("/*", "*/")


def test_python_family_ignores_first_line():
    py = profile_for("python")
    assert py.ignore_first_line
    assert py.block == ('"""', '"""')
    assert profile_for("shellscript").ignore_first_line


def test_tcl_uses_first_group():
    tcl = profile_for("tcl")
    assert tcl.single_line == "#"
    assert not tcl.ignore_first_line


def test_single_line_only_languages_have_no_block():
    for lang in ("sql", "ruby", "lisp", "vb", "latex"):
        assert profile_for(lang).block is None, lang


def test_plaintext_gated_by_config():
    assert not profile_for("plaintext").supported
    assert not profile_for("plaintext", highlight_plain_text=False).supported
    enabled = profile_for("plaintext", highlight_plain_text=True)
    assert enabled.supported and enabled.plain_text


def test_language_for_path():
    assert language_for_path("src/app.py") == "python"
    assert language_for_path("a/b/Main.JAVA") == "java"
    assert language_for_path("Dockerfile") == "dockerfile"
    assert language_for_path("notes.unknownext") is None


def test_suggest_language_optional():
    mod = importlib.import_module("textinfo.languages")
    assert isinstance(mod.is_available(), bool)
    if mod.is_available():
        assert suggest_language("pyton") == "python"
        assert suggest_language("python") == "python"
    else:
        assert suggest_language("pyton") is None
