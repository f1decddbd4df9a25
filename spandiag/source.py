"""Reading spans with surrounding context lines out of in-memory source text."""

from __future__ import annotations

from collections import deque
from typing import Union

from .protocol import SourceCode, SourceSpan, SpanContents, SpanLike, SpanOutOfBoundsError, to_span

__all__ = ["read_span", "context_info"]

_CR = 0x0D
_LF = 0x0A

SourceLike = Union[SourceCode, str, bytes, bytearray, memoryview]


def context_info(
    data: bytes,
    span: SpanLike,
    context_lines_before: int = 0,
    context_lines_after: int = 0,
) -> SpanContents:
    """Locate ``span`` in ``data`` and widen it by whole context lines.

    Raises ``SpanOutOfBoundsError`` when the span reaches past the data.
    """
    span = to_span(span)
    data = bytes(data)
    span_last = span.offset + max(span.length - 1, 0)
    span_end_last = max(span.offset + span.length - 1, 0)

    offset = 0
    line_count = 0
    start_line = 0
    start_column = 0
    before_line_starts: deque[int] = deque()
    current_line_start = 0
    end_lines = 0
    post_span = False
    post_span_got_newline = False

    position = 0
    size = len(data)
    while position < size:
        char = data[position]
        position += 1
        if char in (_CR, _LF):
            line_count += 1
            if char == _CR and position < size and data[position] == _LF:
                position += 1
                offset += 1
            if offset < span.offset:
                # Still before the span: remember line starts for context.
                start_column = 0
                before_line_starts.append(current_line_start)
                if len(before_line_starts) > context_lines_before:
                    start_line += 1
                    before_line_starts.popleft()
            elif offset >= span_last and post_span:
                start_column = 0
                if post_span_got_newline:
                    end_lines += 1
                else:
                    post_span_got_newline = True
                if end_lines >= context_lines_after:
                    offset += 1
                    break
            current_line_start = offset + 1
        elif offset < span.offset:
            start_column += 1

        if offset >= span_end_last:
            post_span = True
            if end_lines >= context_lines_after:
                offset += 1
                break

        offset += 1

    if offset < span_end_last:
        raise SpanOutOfBoundsError()

    if before_line_starts:
        starting_offset = before_line_starts[0]
    elif context_lines_before == 0:
        starting_offset = span.offset
    else:
        starting_offset = 0
    if starting_offset > offset:
        raise SpanOutOfBoundsError()

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
    """Read ``span`` from text, bytes or any ``SourceCode`` object."""
    if isinstance(source, SourceCode):
        return source.read_span(to_span(span), context_lines_before, context_lines_after)
    if isinstance(source, str):
        data = source.encode("utf-8")
    elif isinstance(source, (bytes, bytearray, memoryview)):
        data = bytes(source)
    else:
        raise TypeError(f"cannot read spans from {type(source).__name__}")
    return context_info(data, span, context_lines_before, context_lines_after)