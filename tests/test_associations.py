import pytest

from associations import AssociationStore, build_store, parse_line, parse_text
from errors import ConfigReadError


def _write(tmp_path, name: str, text: str) -> str:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_parse_line_basic() -> None:
    assert parse_line("text/plain=gedit.desktop;vim.desktop;") == ("text/plain", ["gedit.desktop", "vim.desktop"])
    assert parse_line("  text/html = firefox.desktop ; ;chromium.desktop;") == (
        "text/html",
        ["firefox.desktop", "chromium.desktop"],
    )


def test_parse_line_rejects_malformed() -> None:
    assert parse_line("[Default Applications]") is None
    assert parse_line("# comment") is None
    assert parse_line("text/plain=gedit.desktop") is None
    assert parse_line("=gedit.desktop;") is None
    assert parse_line("") is None


def test_parse_text_skips_non_matching_lines() -> None:
    text = "[MIME Cache]\ntext/plain=a.desktop;\ngarbage\nimage/png=b.desktop;c.desktop;\n"
    assert list(parse_text(text)) == [
        ("text/plain", ["a.desktop"]),
        ("image/png", ["b.desktop", "c.desktop"]),
    ]


def test_merge_across_sources(tmp_path) -> None:
    a = _write(tmp_path, "a.list", "text/plain=Editor1;Editor2;\n")
    b = _write(tmp_path, "b.list", "text/plain=Editor2;Editor3;\n")
    store = build_store([a, b])
    assert store["text/plain"].handlers == ("Editor1", "Editor2", "Editor3")


def test_merge_independent_of_source_order(tmp_path) -> None:
    a = _write(tmp_path, "a.list", "text/plain=zed;alpha;\nimage/png=viewer;\n")
    b = _write(tmp_path, "b.list", "text/plain=beta;alpha;\n")
    assert build_store([a, b]).records() == build_store([b, a]).records()


def test_merge_same_source_twice_is_idempotent(tmp_path) -> None:
    a = _write(tmp_path, "a.list", "text/plain=b;a;\ntext/plain=c;\n")
    assert build_store([a, a]).records() == build_store([a]).records()
    assert build_store([a])["text/plain"].handlers == ("a", "b", "c")


def test_dedupe_is_case_sensitive() -> None:
    store = AssociationStore.from_pairs([("x/y", ["Foo", "foo", "Foo"])])
    assert store["x/y"].handlers == ("Foo", "foo")


def test_keys_sorted() -> None:
    store = AssociationStore.from_pairs([("text/plain", ["a"]), ("application/pdf", ["b"]), ("image/png", [])])
    assert store.keys() == ("application/pdf", "image/png", "text/plain")
    assert list(store) == list(store.keys())
    assert len(store) == 3
    assert "image/png" in store
    assert store.get("missing/type") is None


def test_empty_store_from_no_sources() -> None:
    store = build_store([])
    assert len(store) == 0
    assert store.keys() == ()


def test_unreadable_source_aborts(tmp_path) -> None:
    good = _write(tmp_path, "good.list", "text/plain=a;\n")
    missing = str(tmp_path / "missing.list")
    with pytest.raises(ConfigReadError) as info:
        build_store([good, missing])
    assert info.value.path == missing


def test_undecodable_source_aborts(tmp_path) -> None:
    path = tmp_path / "bad.list"
    path.write_bytes(b"text/plain=\xff\xfe;\n")
    with pytest.raises(ConfigReadError):
        build_store([str(path)])


def test_duplicate_records_rejected() -> None:
    from models import AssociationRecord

    with pytest.raises(ValueError):
        AssociationStore([AssociationRecord("a/b"), AssociationRecord("a/b")])


def test_only_newline_ends_a_line() -> None:
    text = "text/plain=a;\r\nimage/png=b;\x0cc;\nvideo/mp4=d;\u2028e;\n"
    assert list(parse_text(text)) == [
        ("text/plain", ["a"]),
        ("image/png", ["b", "c"]),
        ("video/mp4", ["d", "e"]),
    ]


def test_crlf_source_file(tmp_path) -> None:
    path = tmp_path / "crlf.list"
    path.write_bytes(b"[Default Applications]\r\ntext/plain=gedit.desktop;\r\n")
    assert build_store([str(path)])["text/plain"].handlers == ("gedit.desktop",)
