import pytest

from spanreport.named_source import NamedSource
from spanreport.protocol import OutOfBoundsError, SourceCode, SourceSpan
from spanreport.source_impls import read_span

SRC = "source\n  text\n    here"


def test_name_and_inner():
    named = NamedSource("bad_file.rs", SRC)
    assert named.name == "bad_file.rs"
    assert named.inner == SRC
    assert named.language is None


def test_is_source_code():
    named = NamedSource("bad_file.rs", SRC)
    assert isinstance(named, SourceCode)
    contents = SourceCode.read_span.__get__(named)(SourceSpan(0, 6), 0, 0) if False else named.read_span(
        SourceSpan(0, 6), 0, 0
    )
    assert contents.data == b"source"
    assert contents.name == "bad_file.rs"


def test_repr_redacts_source():
    text = repr(NamedSource("bad_file.rs", SRC))
    assert "bad_file.rs" in text
    assert "<redacted>" in text
    assert "text" not in text.replace("<redacted>", "")


def test_read_span_matches_inner_and_adds_name():
    named = NamedSource("bad_file.rs", SRC)
    plain = read_span(SRC, SourceSpan(9, 4), 1, 1)
    contents = named.read_span(SourceSpan(9, 4), 1, 1)
    assert contents.data == plain.data
    assert contents.span == plain.span
    assert contents.line == plain.line
    assert contents.column == plain.column
    assert contents.line_count == plain.line_count
    assert contents.name == "bad_file.rs"
    assert contents.language is None


def test_with_language():
    named = NamedSource("bad_file.rs", SRC)
    tagged = named.with_language("Rust")
    assert tagged.language == "Rust"
    assert named.language is None
    assert tagged.read_span(SourceSpan(0, 6), 0, 0).language == "Rust"


def test_outer_name_overrides_inner():
    inner = NamedSource("inner.rs", SRC).with_language("Rust")
    outer = NamedSource("outer.rs", inner)
    contents = outer.read_span(SourceSpan(0, 6), 0, 0)
    assert contents.name == "outer.rs"
    assert contents.language is None


def test_bytes_inner():
    named = NamedSource("bad_file.rs", SRC.encode())
    assert named.read_span(SourceSpan(9, 4), 0, 0) == NamedSource("bad_file.rs", SRC).read_span(
        SourceSpan(9, 4), 0, 0
    )


def test_equality():
    assert NamedSource("a.rs", SRC) == NamedSource("a.rs", SRC)
    assert NamedSource("a.rs", SRC) != NamedSource("b.rs", SRC)


def test_out_of_bounds_propagates():
    with pytest.raises(OutOfBoundsError):
        NamedSource("bad_file.rs", "foo").read_span(SourceSpan(10, 2), 0, 0)