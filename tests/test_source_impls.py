import pytest

from spanreport.named_source import NamedSource
from spanreport.protocol import OutOfBoundsError, SourceSpan, SpanError
from spanreport.source_impls import context_info, read_span


def test_basic():
    contents = read_span("foo\n", (0, 4), 0, 0)
    assert contents.data.decode() == "foo\n"
    assert contents.line == 0
    assert contents.column == 0


def test_shifted():
    contents = read_span("foobar", (3, 3), 1, 1)
    assert contents.data.decode() == "foobar"
    assert contents.line == 0
    assert contents.column == 0


def test_middle():
    contents = read_span("foo\nbar\nbaz\n", (4, 4), 0, 0)
    assert contents.data.decode() == "bar\n"
    assert contents.line == 1
    assert contents.column == 0


def test_middle_of_line():
    contents = read_span("foo\nbarbar\nbaz\n", (7, 4), 0, 0)
    assert contents.data.decode() == "bar\n"
    assert contents.line == 1
    assert contents.column == 3


def test_with_crlf():
    contents = read_span("foo\r\nbar\r\nbaz\r\n", (5, 5), 0, 0)
    assert contents.data.decode() == "bar\r\n"
    assert contents.line == 1
    assert contents.column == 0


def test_with_context():
    contents = read_span("xxx\nfoo\nbar\nbaz\n\nyyy\n", (8, 3), 1, 1)
    assert contents.data.decode() == "foo\nbar\nbaz\n"
    assert contents.line == 1
    assert contents.column == 0


def test_multiline_with_context():
    src = "aaa\nxxx\n\nfoo\nbar\nbaz\n\nyyy\nbbb\n"
    contents = read_span(src, (9, 11), 1, 1)
    assert contents.data.decode() == "\nfoo\nbar\nbaz\n\n"
    assert contents.line == 2
    assert contents.column == 0
    assert contents.span == SourceSpan(8, 14)


def test_multiline_with_context_line_start():
    src = "one\ntwo\n\nthree\nfour\nfive\n\nsix\nseven\n"
    contents = read_span(src, (2, 0), 2, 2)
    assert contents.data.decode() == "one\ntwo\n\n"
    assert contents.line == 0
    assert contents.column == 0
    assert contents.span == SourceSpan(0, 9)


def test_bytes_and_str_agree():
    src = "foo\nbarbar\nbaz\n"
    assert read_span(src.encode(), (7, 4), 0, 0) == read_span(src, (7, 4), 0, 0)
    assert context_info(bytearray(src.encode()), SourceSpan(7, 4), 0, 0) == read_span(src, (7, 4), 0, 0)


def test_plain_source_has_no_name_or_language():
    contents = read_span("foo\n", (0, 4), 0, 0)
    assert contents.name is None
    assert contents.language is None


def test_data_matches_reported_span():
    src = "aaa\nxxx\n\nfoo\nbar\nbaz\n\nyyy\nbbb\n".encode()
    contents = context_info(src, (9, 11), 1, 1)
    start = contents.span.offset
    assert src[start : start + contents.span.length] == contents.data


def test_out_of_bounds():
    with pytest.raises(OutOfBoundsError):
        read_span("foo", (10, 2), 0, 0)


def test_out_of_bounds_is_span_error():
    with pytest.raises(SpanError):
        context_info(b"", (5, 5), 0, 0)


def test_dispatches_to_source_code():
    named = NamedSource("file.txt", "foo\nbar\nbaz\n")
    contents = read_span(named, (4, 4), 0, 0)
    assert contents.name == "file.txt"
    assert contents.data == b"bar\n"


def test_rejects_unreadable_source():
    with pytest.raises(TypeError):
        read_span(42, (0, 1), 0, 0)