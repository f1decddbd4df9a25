import pytest

from spandiag.named_source import NamedSource
from spandiag.protocol import SourceSpan, SpanContents, SpanOutOfBoundsError
from spandiag.source import read_span

SRC = "source\n  text\n    here"


def test_read_span_carries_name_and_inner_contents():
    named = NamedSource("bad_file.rs", SRC)
    contents = named.read_span(SourceSpan(9, 4), 1, 1)
    plain = read_span(SRC, (9, 4), 1, 1)
    assert contents.name == "bad_file.rs"
    assert contents.data == plain.data
    assert contents.span == plain.span
    assert (contents.line, contents.column, contents.line_count) == (
        plain.line,
        plain.column,
        plain.line_count,
    )
    assert contents.language is None


def test_with_language_sets_language_on_contents():
    named = NamedSource("bad_file.rs", SRC).with_language("Rust")
    assert named.language == "Rust"
    assert named.read_span(SourceSpan(0, 6)).language == "Rust"


def test_with_language_leaves_original_untouched():
    named = NamedSource("bad_file.rs", SRC)
    named.with_language("TOML")
    assert named.language is None


def test_inner_language_is_not_kept():
    class Tagged(NamedSource):
        pass

    inner = NamedSource("inner.txt", SRC).with_language("C")
    outer = NamedSource("outer.txt", inner)
    contents = outer.read_span(SourceSpan(0, 6))
    assert contents.name == "outer.txt"
    assert contents.language is None


def test_repr_redacts_source():
    named = NamedSource("bad_file.rs", "secret contents")
    assert "secret contents" not in repr(named)
    assert "bad_file.rs" in repr(named)


def test_equality():
    assert NamedSource("a", SRC) == NamedSource("a", SRC)
    assert NamedSource("a", SRC) != NamedSource("b", SRC)


def test_bytes_source():
    named = NamedSource("bin", SRC.encode())
    assert named.read_span(SourceSpan(0, 6)).data == read_span(SRC, (0, 6)).data


def test_out_of_bounds_propagates():
    with pytest.raises(SpanOutOfBoundsError):
        NamedSource("bad_file.rs", "abc").read_span(SourceSpan(50, 3))


def test_contents_type():
    contents = NamedSource("bad_file.rs", SRC).read_span(SourceSpan(0, 0))
    assert isinstance(contents, SpanContents) and contents.name == "bad_file.rs"