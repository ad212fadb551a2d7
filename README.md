# spanreport

Building blocks for rich diagnostic reports: byte offsets and spans into
source text, labeled spans, a diagnostic exception type carrying report
metadata, and a reader that pulls a span out of source text together with
surrounding context lines.

## Installation

```
pip install spanreport
```

## Core types (`spanreport.protocol`)

- `SourceOffset`: a byte offset into source text.
  `SourceOffset.from_location(source, line, col)` turns a 1-based line/column
  pair into a byte offset; an out-of-range location gives the byte length of
  the source. `SourceOffset.from_current_location()` returns the caller's file
  name and the offset of the call within that file.
- `SourceSpan`: an offset plus a length. `SourceSpan.of(value)` accepts a span,
  a `SourceOffset`, an int, an `(offset, length)` tuple or a `range` with step 1.
  `len(span)` and `span.is_empty()` report its length.
- `LabeledSpan`: a span with an optional label and a `primary` flag. Build one
  with `LabeledSpan.at(span, label)`, `LabeledSpan.at_offset(offset, label)`,
  `LabeledSpan.underline(span)`, `LabeledSpan.new_with_span(label, span)` or
  `LabeledSpan.new_primary_with_span(label, span)`. The `offset` and `length`
  properties read through to the span.
- `Severity`: `ADVICE`, `WARNING` or `ERROR`, ordered in that sequence.
- `Diagnostic`: an exception whose `code`, `severity`, `help`, `url`,
  `source_code`, `labels`, `related` and `diagnostic_source` methods return
  what was passed as the keyword argument of the same name, or `None`.
  Subclasses may override the methods instead.
- `SourceCode`: the abstract base for readable sources, with one method,
  `read_span(span, context_lines_before, context_lines_after)`.
- `SpanContents`: the result of reading a span: `data` (bytes), `span`, `line`,
  `column`, `line_count`, `name` and `language`. `with_language(language)`
  returns a copy with the language set.
- `SpanError` and its subclass `OutOfBoundsError`, raised when a span cannot be
  read or a location cannot be found.

```python
from spanreport.protocol import Diagnostic, LabeledSpan, Severity

err = Diagnostic(
    "oops!",
    code="oops::my::bad",
    severity=Severity.WARNING,
    help="try doing it better next time?",
    labels=[LabeledSpan.at((9, 4), "this bit here")],
)
print(err.code(), list(err.labels()))
```

## Reading spans with context (`spanreport.source_impls`)

`read_span(source, span, before, after)` reads from a `SourceCode`, a `str`
(encoded as UTF-8) or a bytes-like object. `context_info(data, span, before,
after)` does the same work on raw bytes. Both `\n`, `\r` and `\r\n` end a line.

```python
from spanreport.source_impls import read_span

contents = read_span("xxx\nfoo\nbar\nbaz\n\nyyy\n", (8, 3), 1, 1)
print(contents.data)   # b"foo\nbar\nbaz\n"
print(contents.line)   # 1
```

A span that runs past the end of the source raises `OutOfBoundsError`.

## Named sources (`spanreport.named_source`)

`NamedSource(name, source, language=None)` wraps any source that `read_span`
accepts and puts its name and language on every `SpanContents` read from it.
Its `repr` hides the source text.

```python
from spanreport.named_source import NamedSource
from spanreport.protocol import SourceSpan

src = NamedSource("bad_file.rs", "source\n  text\n    here").with_language("Rust")
contents = src.read_span(SourceSpan.of((9, 4)), 0, 0)
print(contents.name, contents.language)   # bad_file.rs Rust
```

## JSON

`SourceOffset` converts to and from a bare integer with `to_json`/`from_json`.
`SourceSpan` and `LabeledSpan` convert to and from plain dicts with
`to_dict`/`from_dict`; a `LabeledSpan` without a label leaves the `label` key
out.

## What this package does not do

It describes diagnostics and reads source snippets, but it does not render
reports: there is no graphical, narrated or JSON report printer, no report or
error-chain type, and no handler to install for uncaught exceptions.

## Running the tests

```
pip install -e .[test]
pytest
```