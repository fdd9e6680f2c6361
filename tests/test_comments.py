from textinfo.comments import CommentKind, extract_comments
from textinfo.config import Config
from textinfo.languages import profile_for
from textinfo.patterns import build_patterns
from textinfo.pipeline import find_comments


def _extract(text, lang, tags=("TODO",), plain=False, **kw):
    profile = profile_for(lang, highlight_plain_text=plain)
    pats = build_patterns(profile, tags, plain, **kw)
    return list(extract_comments(text, pats, profile))


def test_c_single_and_block():
    text = "int x; // hello world\n/* block\ncomment */\nint y;\n"
    spans = _extract(text, "c")
    assert [s.kind for s in spans] == [CommentKind.SINGLE_LINE, CommentKind.BLOCK]
    single, block = spans
    assert single.text == "hello world"
    assert single.line == 0
    assert block.text == "block\ncomment "
    assert block.line == 1


def test_span_text_is_verbatim_slice_and_in_bounds():
    text = "a = 1 # one\n# two\n\"\"\" doc\nstring \"\"\"\n# three"
    for span in _extract(text, "python"):
        assert 0 <= span.start < span.end <= len(text)
        assert text[span.start:span.end] == span.text


def test_python_first_line_suppressed():
    text = "#!/usr/bin/env python\n# real comment\n"
    spans = _extract(text, "python")
    assert [s.text for s in spans] == ["real comment"]
    assert spans[0].line == 1


def test_first_line_kept_when_not_at_column_zero():
    text = "  # indented first line\n"
    spans = _extract(text, "python")
    assert [s.text for s in spans] == ["indented first line"]


def test_first_line_kept_for_languages_without_suppression():
    spans = _extract("# ruby comment\n", "ruby")
    assert [s.text for s in spans] == ["ruby comment"]


def test_tag_is_consumed_before_text():
    spans = _extract("x := 1 // TODO refactor this\n", "go")
    # タグ後の空白は本文側に残る
    assert spans[0].text == " refactor this"
    # タグは大文字小文字を区別しない
    assert _extract("x := 1 // todo: later\n", "go")[0].text == ": later"


def test_adjacent_blocks_not_merged():
    text = "/* first */ code(); /* second */\n"
    blocks = [s for s in _extract(text, "java") if s.kind is CommentKind.BLOCK]
    assert [s.text for s in blocks] == ["first ", "second "]


def test_no_block_delimiter_yields_no_block_spans():
    text = "SELECT 1; -- trailing note\n/* not a comment in this profile */\n"
    spans = _extract(text, "sql")
    assert all(s.kind is CommentKind.SINGLE_LINE for s in spans)
    assert [s.text for s in spans] == ["trailing note"]


def test_multiline_disabled_skips_blocks():
    text = "// one\n/* two */\n"
    spans = _extract(text, "c", multiline_comments=False)
    assert [s.kind for s in spans] == [CommentKind.SINGLE_LINE]


def test_doc_block_for_javascript():
    text = "/** Adds two numbers. */\nfunction add(a, b) { return a + b; }\n"
    spans = _extract(text, "javascript")
    docs = [s for s in spans if s.kind is CommentKind.DOC_BLOCK]
    assert len(docs) == 1
    assert docs[0].text == " Adds two numbers. "
    assert docs[0].line == 0


def test_css_opener_serves_single_and_block():
    text = "a { color: red; } /* note */\n"
    kinds = sorted(s.kind.value for s in _extract(text, "css"))
    assert kinds == ["block", "single_line"]


def test_empty_comment_is_skipped():
    assert _extract("x = 1 //\n", "c") == []


def test_plaintext_disabled_yields_nothing():
    text = "Just some prose.\nAnother line.\n"
    assert _extract(text, "plaintext", plain=False) == []
    assert find_comments(text, "plaintext", Config(highlight_plain_text=False)) == []


def test_plaintext_enabled_one_span_per_line():
    text = "Just some prose.\n\nAnother line.\n"
    spans = find_comments(text, "plaintext", Config(highlight_plain_text=True, tags=()))
    assert [(s.line, s.text) for s in spans] == [(0, "Just some prose."), (2, "Another line.")]


def test_unsupported_language_yields_nothing():
    assert find_comments("// looks like a comment", "klingon") == []


def test_extraction_is_lazy_and_repeatable():
    text = "// a\n// b\n"
    profile = profile_for("c")
    pats = build_patterns(profile, (), False)
    gen = extract_comments(text, pats, profile)
    assert next(gen).text == "a"
    assert list(extract_comments(text, pats, profile)) == list(extract_comments(text, pats, profile))
