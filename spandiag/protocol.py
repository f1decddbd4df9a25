"""Core types of the diagnostic protocol: severities, spans, labels and source access."""

from __future__ import annotations

import functools
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, Union

__all__ = [
    "Severity",
    "SpanOutOfBoundsError",
    "Diagnostic",
    "SourceCode",
    "SourceOffset",
    "SourceSpan",
    "LabeledSpan",
    "SpanContents",
    "to_span",
]


@functools.total_ordering
class Severity(Enum):
    """How serious a diagnostic is. ``ERROR`` is the default."""

    ADVICE = "Advice"
    WARNING = "Warning"
    ERROR = "Error"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        members = list(Severity)
        return members.index(self) < members.index(other)

    @classmethod
    def default(cls) -> "Severity":
        """The severity used when a diagnostic does not state one."""
        return cls.ERROR


class SpanOutOfBoundsError(LookupError):
    """Raised when a span reaches past the end of its source."""

    def __init__(self, message: str = "The given offset is outside the bounds of its Source") -> None:
        super().__init__(message)


class Diagnostic(Exception):
    """An error carrying rich metadata for reporting.

    Metadata may be given as keyword arguments; every hook gives ``None`` when
    nothing was provided. Subclasses may override the hooks instead.
    """

    _code: Optional[str] = None
    _severity: Optional[Severity] = None
    _help: Optional[str] = None
    _url: Optional[str] = None
    _source_code: Optional["SourceCode"] = None
    _labels: Optional[Tuple["LabeledSpan", ...]] = None
    _related: Optional[Tuple["Diagnostic", ...]] = None
    _diagnostic_source: Optional["Diagnostic"] = None

    def __init__(
        self,
        *args: Any,
        code: Optional[str] = None,
        severity: Optional[Severity] = None,
        help: Optional[str] = None,
        url: Optional[str] = None,
        source_code: Optional["SourceCode"] = None,
        labels: Optional[Iterable["LabeledSpan"]] = None,
        related: Optional[Iterable["Diagnostic"]] = None,
        diagnostic_source: Optional["Diagnostic"] = None,
    ) -> None:
        super().__init__(*args)
        self._code = None if code is None else str(code)
        self._severity = severity
        self._help = None if help is None else str(help)
        self._url = None if url is None else str(url)
        self._source_code = source_code
        self._labels = None if labels is None else tuple(labels)
        self._related = None if related is None else tuple(related)
        self._diagnostic_source = diagnostic_source

    def code(self) -> Optional[str]:
        """A unique code for looking up more about this diagnostic."""
        return self._code

    def severity(self) -> Optional[Severity]:
        """The severity; ``None`` is to be treated as ``Severity.ERROR``."""
        return self._severity

    def help(self) -> Optional[str]:
        """Additional advice for whoever runs into this diagnostic."""
        return self._help

    def url(self) -> Optional[str]:
        """A URL with a more detailed explanation."""
        return self._url

    def source_code(self) -> Optional["SourceCode"]:
        """Source code that the labels apply to."""
        return self._source_code

    def labels(self) -> Optional[Iterator["LabeledSpan"]]:
        """Labels to apply to the source code."""
        if self._labels is None:
            return None
        return iter(self._labels)

    def related(self) -> Optional[Iterator["Diagnostic"]]:
        """Additional related diagnostics."""
        if self._related is None:
            return None
        return iter(self._related)

    def diagnostic_source(self) -> Optional["Diagnostic"]:
        """The diagnostic that caused this one."""
        return self._diagnostic_source


class SourceCode(ABC):
    """Readable source code of some sort."""

    @abstractmethod
    def read_span(
        self,
        span: "SourceSpan",
        context_lines_before: int = 0,
        context_lines_after: int = 0,
    ) -> "SpanContents":
        """Read the bytes covered by ``span`` plus surrounding context lines."""


def _check_non_negative(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, not {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative: {value}")
    return value


@dataclass(frozen=True, order=True)
class SourceOffset:
    """A byte offset from the beginning of some source code."""

    offset: int

    def __post_init__(self) -> None:
        _check_non_negative("offset", self.offset)

    def __int__(self) -> int:
        return self.offset

    def __index__(self) -> int:
        return self.offset

    @classmethod
    def from_location(cls, source: str, loc_line: int, loc_col: int) -> "SourceOffset":
        """Convert a 1-based line/column location into a byte offset.

        Out-of-range locations give the length of the source in bytes.
        """
        line = 0
        col = 0
        offset = 0
        for char in source:
            if line + 1 >= loc_line and col + 1 >= loc_col:
                break
            if char == "\n":
                col = 0
                line += 1
            else:
                col += 1
            offset += len(char.encode("utf-8"))
        return cls(offset)

    @classmethod
    def from_current_location(cls) -> Tuple[str, "SourceOffset"]:
        """Return the caller's file name and the offset of the call in that file.

        Raises ``OSError`` when the file cannot be read.
        """
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        if caller is None:
            raise RuntimeError("no calling frame available")
        try:
            info = inspect.getframeinfo(caller, context=0)
        finally:
            del frame, caller
        filename = info.filename
        text = Path(filename).read_text(encoding="utf-8")
        line = info.lineno
        column = 1
        positions = getattr(info, "positions", None)
        col_offset = getattr(positions, "col_offset", None) if positions is not None else None
        if col_offset is not None:
            lines = text.splitlines(keepends=True)
            if 0 < line <= len(lines):
                prefix = lines[line - 1].encode("utf-8")[:col_offset]
                column = len(prefix.decode("utf-8", errors="ignore")) + 1
        return filename, cls.from_location(text, line, column)


@dataclass(frozen=True, order=True)
class SourceSpan:
    """A span of bytes within some source code."""

    offset: int
    length: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.offset, SourceOffset):
            object.__setattr__(self, "offset", self.offset.offset)
        _check_non_negative("offset", self.offset)
        _check_non_negative("length", self.length)

    @property
    def end(self) -> int:
        """The offset one past the last byte of the span."""
        return self.offset + self.length

    @property
    def is_empty(self) -> bool:
        """True when the span has no length; it still points at a position."""
        return self.length == 0

    @classmethod
    def from_range(cls, start: int, end: int) -> "SourceSpan":
        """Span covering the half-open range ``start..end``."""
        return cls(start, max(0, end - start))

    @classmethod
    def from_inclusive(cls, start: int, end: int) -> "SourceSpan":
        """Span covering the inclusive range ``start..=end``."""
        if start > end:
            return cls(start, 0)
        return cls(start, end - start + 1)

    def to_dict(self) -> dict:
        return {"offset": self.offset, "length": self.length}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SourceSpan":
        return cls(data["offset"], data["length"])


SpanLike = Union[SourceSpan, SourceOffset, int, Tuple[Any, int], range]


def to_span(value: SpanLike) -> SourceSpan:
    """Convert a span, offset, ``(start, length)`` tuple or range into a ``SourceSpan``."""
    if isinstance(value, SourceSpan):
        return value
    if isinstance(value, SourceOffset):
        return SourceSpan(value.offset, 0)
    if isinstance(value, bool):
        raise TypeError("a bool is not a span")
    if isinstance(value, int):
        return SourceSpan(value, 0)
    if isinstance(value, range):
        if value.step != 1:
            raise ValueError("only ranges with a step of 1 can become spans")
        return SourceSpan.from_range(value.start, value.stop)
    if isinstance(value, tuple) and len(value) == 2:
        start, length = value
        return SourceSpan(start, length)
    raise TypeError(f"cannot convert {value!r} into a SourceSpan")


@dataclass
class LabeledSpan:
    """A span with an optional label text."""

    label: Optional[str]
    span: SourceSpan
    primary: bool = False

    def __post_init__(self) -> None:
        self.span = to_span(self.span)

    @property
    def offset(self) -> int:
        return self.span.offset

    @property
    def length(self) -> int:
        return self.span.length

    @property
    def is_empty(self) -> bool:
        return self.span.is_empty

    @classmethod
    def at(cls, span: SpanLike, label: str) -> "LabeledSpan":
        """A labeled span at ``span``."""
        return cls(str(label), span)

    @classmethod
    def at_offset(cls, offset: int, label: str) -> "LabeledSpan":
        """A labeled, empty span pointing at ``offset``."""
        return cls(str(label), SourceSpan(offset, 0))

    @classmethod
    def underline(cls, span: SpanLike) -> "LabeledSpan":
        """A span without label text."""
        return cls(None, span)

    @classmethod
    def with_span(cls, label: Optional[str], span: SpanLike) -> "LabeledSpan":
        """A non-primary labeled span."""
        return cls(label, span, primary=False)

    @classmethod
    def primary_with_span(cls, label: Optional[str], span: SpanLike) -> "LabeledSpan":
        """A primary labeled span."""
        return cls(label, span, primary=True)

    def to_dict(self) -> dict:
        data: dict = {}
        if self.label is not None:
            data["label"] = self.label
        data["span"] = self.span.to_dict()
        data["primary"] = self.primary
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LabeledSpan":
        primary = data["primary"]
        if not isinstance(primary, bool):
            raise TypeError("primary must be a bool")
        return cls(data.get("label"), SourceSpan.from_dict(data["span"]), primary)


@dataclass(frozen=True)
class SpanContents:
    """The bytes of a source covered by a span, with position information."""

    data: bytes
    span: SourceSpan
    line: int
    column: int
    line_count: int
    name: Optional[str] = None
    language: Optional[str] = field(default=None)

    def with_language(self, language: str) -> "SpanContents":
        """Copy of these contents with the given language for highlighting."""
        return replace(self, language=str(language))