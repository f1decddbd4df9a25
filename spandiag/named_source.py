"""Source code that carries a name and an optional language."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Optional

from .protocol import SourceCode, SourceSpan, SpanContents
from .source import read_span

__all__ = ["NamedSource"]


@dataclass(frozen=True)
class NamedSource(SourceCode):
    """Wraps any readable source and gives the contents it returns a name."""

    name: str
    source: Any = field(repr=False)
    language: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))

    def __repr__(self) -> str:
        return f"NamedSource(name={self.name!r}, source='<redacted>', language={self.language!r})"

    def with_language(self, language: str) -> "NamedSource":
        """Copy of this source with the language used for highlighting."""
        return replace(self, language=str(language))

    def read_span(
        self,
        span: SourceSpan,
        context_lines_before: int = 0,
        context_lines_after: int = 0,
    ) -> SpanContents:
        inner = read_span(self.source, span, context_lines_before, context_lines_after)
        return SpanContents(
            data=inner.data,
            span=inner.span,
            line=inner.line,
            column=inner.column,
            line_count=inner.line_count,
            name=self.name,
            language=self.language,
        )