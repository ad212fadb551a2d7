"""Reading spans, with surrounding context lines, out of in-memory sources."""

from __future__ import annotations

import re
from collections import deque
from typing import Iterator, Tuple, Union

from spanreport.protocol import (
    OutOfBoundsError,
    SourceCode,
    SourceSpan,
    SpanContents,
    SpanLike,
)

_CR = 0x0D
_LF = 0x0A
_UNIT = re.compile(rb"\r\n|.", re.DOTALL)

SourceLike = Union[SourceCode, str, bytes, bytearray, memoryview]


def _units(data: bytes) -> Iterator[Tuple[int, int]]:
    """Yield ``(first_byte, width)`` pairs, treating CRLF as one unit."""
    for match in _UNIT.finditer(data):
        unit = match.group()
        yield unit[0], len(unit)


def context_info(
    data: bytes,
    span: SpanLike,
    context_lines_before: int = 0,
    context_lines_after: int = 0,
) -> SpanContents:
    """Return the bytes covering ``span`` plus the requested context lines.

    Raises :class:`OutOfBoundsError` if the span lies beyond the data.
    """
    data = bytes(data)
    span = SourceSpan.of(span)
    span_start = span.offset
    span_last = span.offset + max(span.length - 1, 0)
    span_end_last = max(span.offset + span.length - 1, 0)

    offset = 0
    line_count = 0
    start_line = 0
    start_column = 0
    before_line_starts: deque = deque()
    current_line_start = 0
    end_lines = 0
    post_span = False
    post_span_got_newline = False

    for byte, width in _units(data):
        if byte in (_CR, _LF):
            line_count += 1
            offset += width - 1
            if offset < span_start:
                # Still before the span: remember where this line started.
                start_column = 0
                before_line_starts.append(current_line_start)
                if len(before_line_starts) > context_lines_before:
                    start_line += 1
                    before_line_starts.popleft()
            elif offset >= span_last and post_span:
                # Past the span: count trailing context lines.
                start_column = 0
                if post_span_got_newline:
                    end_lines += 1
                else:
                    post_span_got_newline = True
                if end_lines >= context_lines_after:
                    offset += 1
                    break
            current_line_start = offset + 1
        elif offset < span_start:
            start_column += 1

        if offset >= span_end_last:
            post_span = True
            if end_lines >= context_lines_after:
                offset += 1
                break

        offset += 1

    if offset < span_end_last:
        raise OutOfBoundsError()

    if before_line_starts:
        starting_offset = before_line_starts[0]
    elif context_lines_before == 0:
        starting_offset = span.offset
    else:
        starting_offset = 0
    if starting_offset > offset:
        raise OutOfBoundsError()

    return SpanContents(
        data=data[starting_offset:offset],
        span=SourceSpan(starting_offset, offset - starting_offset),
        line=start_line,
        column=start_column if context_lines_before == 0 else 0,
        line_count=line_count,
    )


def read_span(
    source: SourceLike,
    span: SpanLike,
    context_lines_before: int = 0,
    context_lines_after: int = 0,
) -> SpanContents:
    """Read ``span`` from a :class:`SourceCode`, a string or a bytes-like object."""
    if isinstance(source, SourceCode):
        return source.read_span(SourceSpan.of(span), context_lines_before, context_lines_after)
    if isinstance(source, str):
        return context_info(source.encode("utf-8"), span, context_lines_before, context_lines_after)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return context_info(bytes(source), span, context_lines_before, context_lines_after)
    raise TypeError(f"cannot read a span from {type(source).__name__}")