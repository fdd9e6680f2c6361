import re

from textinfo.languages import profile_for
from textinfo.patterns import DOC_BLOCK_RE, build_patterns, escape_literal, escape_tags


def test_escape_literal_metacharacters():
    assert escape_literal("/*") == r"\/\*"
    assert escape_literal("--[[") == r"--\[\["
    assert escape_literal("{#") == r"\{#"
    assert escape_literal("a.b|c") == r"a\.b\|c"
    assert re.fullmatch(escape_literal("(?^$)"), "(?^$)")


def test_escape_tags_keeps_order_and_drops_duplicates():
    assert escape_tags(["TODO", "?", "TODO", "", "//"]) == ("TODO", r"\?", r"\/\/")
    # 文字列以外は文字列化して扱う
    assert escape_tags([1]) == ("1",)


def test_unsupported_builds_nothing():
    pats = build_patterns(profile_for("klingon"), ["TODO"], False)
    assert pats.empty


def test_single_line_only_language_has_no_block():
    pats = build_patterns(profile_for("sql"), ["TODO"], False)
    assert pats.single_line is not None
    assert pats.block is None
    assert pats.doc is None


def test_block_pattern_respects_multiline_flag():
    assert build_patterns(profile_for("c"), [], False).block is not None
    assert build_patterns(profile_for("c"), [], False, multiline_comments=False).block is None


def test_doc_pattern_only_for_doc_style_languages():
    assert build_patterns(profile_for("typescript"), [], False).doc is DOC_BLOCK_RE
    assert build_patterns(profile_for("typescript"), [], False, doc_style=False).doc is None
    assert build_patterns(profile_for("java"), [], False).doc is None


def test_single_line_groups_with_tags():
    pats = build_patterns(profile_for("c"), ["TODO", "!"], False)
    m = pats.single_line.search("int x; // todo: fix me")
    assert m.group(1) == "//"
    assert m.group(3).lower() == "todo"
    assert m.group(4) == ": fix me"


def test_single_line_without_tags_still_matches():
    pats = build_patterns(profile_for("python"), [], False)
    m = pats.single_line.search("x = 1  # plain note\r\n")
    assert m.group(4) == "plain note"


def test_plaintext_anchor_mode():
    profile = profile_for("plaintext", highlight_plain_text=True)
    pats = build_patterns(profile, [], True)
    assert pats.single_line.flags & re.MULTILINE
    lines = [m.group(4) for m in pats.single_line.finditer("first\n  second") if m.group(4)]
    assert lines == ["first", "second"]
