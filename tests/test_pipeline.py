from textinfo import Config, analyze_text
from textinfo.comments import CommentKind
from textinfo.pipeline import analyze_file, analyze_paths

PY_SOURCE = '''#!/usr/bin/env python
# Load the settings from disk and merge them with the defaults that ship with the tool.
def load():
    """ Read the configuration file. Return an empty mapping when the file is missing. """
    return {}
'''


def test_pipeline_python_source():
    res = analyze_text(PY_SOURCE, "python")
    assert res.supported
    kinds = [s.kind for s in res.spans]
    assert kinds == [CommentKind.SINGLE_LINE, CommentKind.BLOCK]
    assert len(res.stats) == len(res.spans)
    assert res.summary.total == 2
    assert res.summary.kinds == {CommentKind.SINGLE_LINE: 50.0, CommentKind.BLOCK: 50.0}
    for ann in res.annotations():
        assert ann.title.startswith("Predicted reading level of ")
    assert {a.line for a in res.annotations()} <= {1, 3}


def test_pipeline_is_idempotent():
    cfg = Config()
    assert analyze_text(PY_SOURCE, "python", cfg) == analyze_text(PY_SOURCE, "python", cfg)


def test_unsupported_language_returns_empty_result():
    res = analyze_text("// a comment", "klingon")
    assert not res.supported
    assert res.spans == ()
    assert res.stats == ()
    assert res.summary.is_empty
    assert res.annotations() == []


def test_zero_comments():
    res = analyze_text("int main() { return 0; }\n", "c")
    assert res.supported
    assert res.spans == ()
    assert res.summary.is_empty


def test_plaintext_gating():
    text = "The quick brown fox jumps over the lazy dog.\n"
    assert analyze_text(text, "plaintext").spans == ()
    res = analyze_text(text, "plaintext", Config(highlight_plain_text=True))
    assert [s.text for s in res.spans] == ["The quick brown fox jumps over the lazy dog."]


def test_to_dict_shape():
    data = analyze_text(PY_SOURCE, "python", file="x.py").to_dict()
    assert data["file"] == "x.py"
    assert data["language_id"] == "python"
    assert len(data["comments"]) == 2
    assert set(data["comments"][0]["stats"]) == {"counts", "averages", "scores"}
    assert data["summary"]["total"] == 2


def test_analyze_file_and_paths(tmp_path):
    (tmp_path / "a.py").write_text(PY_SOURCE, encoding="utf-8")
    (tmp_path / "b.js").write_text("// Explain why the cache is cleared here.\nclear();\n", encoding="utf-8")
    (tmp_path / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    sub = tmp_path / "node_modules"
    sub.mkdir()
    (sub / "lib.js").write_text("// vendored\n", encoding="utf-8")

    single = analyze_file(str(tmp_path / "b.js"))
    assert single.language_id == "javascript"
    assert [s.text for s in single.spans] == ["Explain why the cache is cleared here."]

    results = analyze_paths([str(tmp_path)])
    assert sorted(r.language_id for r in results) == ["javascript", "python"]

    parallel = analyze_paths([str(tmp_path)], jobs=2)
    assert [r.file for r in parallel] == [r.file for r in results]


def test_analyze_file_unknown_extension(tmp_path):
    p = tmp_path / "notes.unknownext"
    p.write_text("x = 1  # hello", encoding="utf-8")
    assert analyze_file(str(p)) is None
    assert analyze_file(str(p), language_id="python").spans[0].text == "hello"


def test_analyze_paths_skips_failing_file(tmp_path, monkeypatch):
    import textinfo.pipeline as pipeline

    (tmp_path / "good.py").write_text(PY_SOURCE, encoding="utf-8")
    (tmp_path / "bad.py").write_text(PY_SOURCE, encoding="utf-8")
    original = pipeline.analyze_file

    def flaky(path, config=None, language_id=None):
        if path.endswith("bad.py"):
            raise RuntimeError("boom")
        return original(path, config=config, language_id=language_id)

    monkeypatch.setattr(pipeline, "analyze_file", flaky)
    # 直列でも並列でも、失敗したファイルだけ除外される
    serial = analyze_paths([str(tmp_path)], jobs=1)
    parallel = analyze_paths([str(tmp_path)], jobs=2)
    assert [r.file for r in serial] == [str(tmp_path / "good.py")]
    assert [r.file for r in parallel] == [r.file for r in serial]
