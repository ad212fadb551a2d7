"""A source wrapper that gives its contents a name and optional language."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional

from spanreport.protocol import SourceCode, SourceSpan, SpanContents
from spanreport.source_impls import read_span


@dataclass(frozen=True, repr=False)
class NamedSource(SourceCode):
    """Wraps any readable source and attaches a name to the spans read from it."""

    name: str
    source: Any
    language: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        if self.language is not None:
            object.__setattr__(self, "language", str(self.language))

    def __repr__(self) -> str:
        return (
            f"NamedSource(name={self.name!r}, source='<redacted>', "
            f"language={self.language!r})"
        )

    @property
    def inner(self) -> Any:
        """The wrapped source."""
        return self.source

    def with_language(self, language: str) -> "NamedSource":
        """Return a copy whose spans carry ``language``."""
        return replace(self, language=str(language))

    def read_span(
        self,
        span: SourceSpan,
        context_lines_before: int = 0,
        context_lines_after: int = 0,
    ) -> SpanContents:
        """Read from the wrapped source and label the result with this name."""
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