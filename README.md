# spandiag

Building blocks for rich, human-friendly error diagnostics: byte-accurate
source spans, labelled highlights, severities, and a routine that reads a
span out of source text together with surrounding context lines.

## Install

```
pip install spandiag
```

## Spans and labels

`spandiag.protocol` holds the core types.

```python
from spandiag.protocol import SourceOffset, SourceSpan, LabeledSpan, to_span

span = SourceSpan.from_range(0, 3)          # offset 0, length 3
inclusive = SourceSpan.from_inclusive(0, 3) # offset 0, length 4
label = LabeledSpan.at((12, 4), "misspelled here")
point = LabeledSpan.at_offset(4, "expected a closing parenthesis")
plain = LabeledSpan.underline(to_span(7))
main = LabeledSpan.primary_with_span("the culprit", range(2, 5))

# Convert 1-based line/column positions into a byte offset
offset = SourceOffset.from_location("f\n\noo\r\nbar", 3, 2)   # SourceOffset(4)
```

`to_span` accepts a `SourceSpan`, a `SourceOffset`, an `int` offset, a
`(start, length)` tuple or a `range` with a step of 1. Offsets and lengths
must be non-negative integers.

`SourceOffset.from_current_location()` returns the caller's file name and the
offset of the calling line in that file; it raises `OSError` when the file
cannot be read.

`SourceSpan` and `LabeledSpan` round-trip through plain dictionaries with
`to_dict()` and `from_dict()`, which makes them easy to store as JSON. A
label of `None` is left out of the dictionary.

## Reading source with context

```python
from spandiag.source import read_span
from spandiag.named_source import NamedSource

contents = read_span("xxx\nfoo\nbar\nbaz\n\nyyy\n", (8, 3), 1, 1)
print(contents.data)                 # b"foo\nbar\nbaz\n"
print(contents.line, contents.column)  # 1 0

named = NamedSource("config.toml", "key = 1\n").with_language("TOML")
contents = named.read_span((0, 3), 0, 0)
print(contents.name, contents.language)  # config.toml TOML
```

`read_span` works on `str` (read as UTF-8), `bytes`, `bytearray`,
`memoryview`, or any `SourceCode` object. The returned `SpanContents` holds
the bytes, the span they cover, the 0-based starting line and column, and the
number of lines seen. `context_info` does the same work directly on bytes.
Carriage-return/line-feed pairs count as one line break.

A span that runs past the end of the source raises `SpanOutOfBoundsError`.

To make your own readable source, subclass `SourceCode` and implement
`read_span(span, context_lines_before, context_lines_after)`.

## Describing your own errors

`Diagnostic` is an exception carrying metadata. Pass any of `code`,
`severity`, `help`, `url`, `source_code`, `labels`, `related` or
`diagnostic_source` as keyword arguments, or subclass and override the
methods of the same names. Anything not given returns `None`; a missing
severity is to be treated as `Severity.ERROR`. `Severity` has the members
`ADVICE`, `WARNING` and `ERROR`, ordered in that way.

```python
from spandiag.protocol import Diagnostic, LabeledSpan, Severity

err = Diagnostic(
    "oops!",
    code="oops::my::bad",
    severity=Severity.WARNING,
    help="try doing it better next time?",
    labels=[LabeledSpan.at((9, 4), "this bit here")],
)
```

The `spandiag.panic` module offers `Panic`, a diagnostic for unexpected
failures whose text is its message, and `format_backtrace()`, which renders
the current stack when the `SPANDIAG_BACKTRACE` environment variable is set
to something other than empty or `0`.

## What this package does not do

It provides the types and the span reading only. It has no report renderer:
nothing here turns a `Diagnostic` into graphical, narrated or JSON output,
and it installs no hook for uncaught exceptions. `Panic` has to be raised or
built by your own code.