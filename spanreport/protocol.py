"""Core types for describing diagnostics and the source code they point at."""

from __future__ import annotations

import enum
import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Iterator, Optional, Tuple, Union


class SpanError(Exception):
    """Base class for errors raised while reading or locating source spans."""


class OutOfBoundsError(SpanError):
    """Raised when a span lies outside the source it is read from."""

    def __init__(self, message: str = "The given offset is outside the bounds of its Source") -> None:
        super().__init__(message)


_SEVERITY_RANK = {"Advice": 0, "Warning": 1, "Error": 2}


class Severity(enum.Enum):
    """How serious a diagnostic is. ``ERROR`` is the default."""

    ADVICE = "Advice"
    WARNING = "Warning"
    ERROR = "Error"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return _SEVERITY_RANK[self.value] < _SEVERITY_RANK[other.value]

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return _SEVERITY_RANK[self.value] <= _SEVERITY_RANK[other.value]

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return _SEVERITY_RANK[self.value] > _SEVERITY_RANK[other.value]

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return _SEVERITY_RANK[self.value] >= _SEVERITY_RANK[other.value]


class Diagnostic(Exception):
    """An exception carrying rich metadata for reporting.

    The metadata may be given as keyword arguments or supplied by a subclass
    overriding the hooks. Anything not given is ``None``.
    """

    _code: Optional[str] = None
    _severity: Optional[Severity] = None
    _help: Optional[str] = None
    _url: Optional[str] = None
    _source_code: Optional["SourceCode"] = None
    _labels: Optional[list] = None
    _related: Optional[list] = None
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
        if severity is not None and not isinstance(severity, Severity):
            raise TypeError("severity must be a Severity or None")
        self._code = None if code is None else str(code)
        self._severity = severity
        self._help = None if help is None else str(help)
        self._url = None if url is None else str(url)
        self._source_code = source_code
        self._labels = _labels_list(labels)
        self._related = None if related is None else list(related)
        self._diagnostic_source = diagnostic_source

    def code(self) -> Optional[str]:
        """Unique code identifying this kind of diagnostic."""
        return self._code

    def severity(self) -> Optional[Severity]:
        """Severity; ``None`` is to be treated as ``Severity.ERROR``."""
        return self._severity

    def help(self) -> Optional[str]:
        """Additional help text."""
        return self._help

    def url(self) -> Optional[str]:
        """URL with a more detailed explanation."""
        return self._url

    def source_code(self) -> Optional["SourceCode"]:
        """Source code that the labels apply to."""
        return self._source_code

    def labels(self) -> Optional[Iterator["LabeledSpan"]]:
        """Labels to apply to the source code."""
        return None if self._labels is None else iter(self._labels)

    def related(self) -> Optional[Iterator["Diagnostic"]]:
        """Additional related diagnostics."""
        return None if self._related is None else iter(self._related)

    def diagnostic_source(self) -> Optional["Diagnostic"]:
        """The diagnostic that caused this one."""
        return self._diagnostic_source


class SourceCode(ABC):
    """Readable source code of some sort."""

    @abstractmethod
    def read_span(
        self,
        span: "SourceSpan",
        context_lines_before: int,
        context_lines_after: int,
    ) -> "SpanContents":
        """Read the bytes of ``span`` plus surrounding context lines."""


def _check_size(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


@dataclass(frozen=True, order=True)
class SourceOffset:
    """A byte offset from the beginning of a source."""

    offset: int

    def __post_init__(self) -> None:
        _check_size("offset", self.offset)

    @classmethod
    def from_location(cls, source: str, loc_line: int, loc_col: int) -> "SourceOffset":
        """Convert a 1-based line/column pair into a byte offset.

        Out-of-range locations give the offset of the end of the source.
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
        """Return the caller's file name and the offset of the call in it."""
        frame = inspect.currentframe()
        try:
            caller = frame.f_back if frame is not None else None
            if caller is None:
                raise SpanError("caller location is not available")
            info = inspect.getframeinfo(caller, context=0)
        finally:
            del frame
        filename = info.filename
        try:
            with open(filename, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise SpanError(str(exc)) from exc

        column = 1
        positions = getattr(info, "positions", None)
        if positions is not None and positions.col_offset is not None:
            lines = text.splitlines(keepends=True)
            if 0 < info.lineno <= len(lines):
                raw = lines[info.lineno - 1].encode("utf-8")[: positions.col_offset]
                column = len(raw.decode("utf-8", errors="ignore")) + 1
        return filename, cls.from_location(text, info.lineno, column)

    def to_json(self) -> int:
        """Serialize as a bare integer."""
        return self.offset

    @classmethod
    def from_json(cls, value: Any) -> "SourceOffset":
        """Deserialize from a bare integer."""
        return cls(_check_size("offset", value))


SpanLike = Union["SourceSpan", SourceOffset, int, Tuple[Any, int], range]


@dataclass(frozen=True, order=True)
class SourceSpan:
    """A span of bytes within a source: a start offset and a length."""

    offset: int
    length: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.offset, SourceOffset):
            object.__setattr__(self, "offset", self.offset.offset)
        _check_size("offset", self.offset)
        _check_size("length", self.length)

    @classmethod
    def of(cls, value: SpanLike) -> "SourceSpan":
        """Build a span from a span, offset, ``(start, length)`` tuple or range."""
        if isinstance(value, SourceSpan):
            return value
        if isinstance(value, SourceOffset):
            return cls(value.offset, 0)
        if isinstance(value, range):
            if value.step != 1:
                raise ValueError("only ranges with a step of 1 can be spans")
            return cls(value.start, len(value))
        if isinstance(value, tuple):
            if len(value) != 2:
                raise ValueError("a span tuple must be (start, length)")
            start, length = value
            return cls(start, length)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls(value, 0)
        raise TypeError(f"cannot make a SourceSpan from {type(value).__name__}")

    def __len__(self) -> int:
        return self.length

    def is_empty(self) -> bool:
        """True if the span has zero length."""
        return self.length == 0

    def to_dict(self) -> dict:
        """Serialize as ``{"offset": ..., "length": ...}``."""
        return {"offset": self.offset, "length": self.length}

    @classmethod
    def from_dict(cls, data: dict) -> "SourceSpan":
        """Deserialize from the form produced by :meth:`to_dict`."""
        try:
            offset = data["offset"]
            length = data["length"]
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc
        return cls(_check_size("offset", offset), _check_size("length", length))


@dataclass
class LabeledSpan:
    """A source span with an optional label text."""

    label: Optional[str]
    span: SourceSpan
    primary: bool = False

    def __post_init__(self) -> None:
        self.span = SourceSpan.of(self.span)

    @classmethod
    def new_with_span(cls, label: Optional[str], span: SpanLike) -> "LabeledSpan":
        """Make a non-primary labeled span."""
        return cls(label, SourceSpan.of(span), False)

    @classmethod
    def new_primary_with_span(cls, label: Optional[str], span: SpanLike) -> "LabeledSpan":
        """Make a primary labeled span."""
        return cls(label, SourceSpan.of(span), True)

    @classmethod
    def at(cls, span: SpanLike, label: str) -> "LabeledSpan":
        """Make a label covering ``span``."""
        return cls.new_with_span(str(label), span)

    @classmethod
    def at_offset(cls, offset: int, label: str) -> "LabeledSpan":
        """Make a label pointing at a single offset."""
        return cls(str(label), SourceSpan(offset, 0))

    @classmethod
    def underline(cls, span: SpanLike) -> "LabeledSpan":
        """Make a label without text that underlines ``span``."""
        return cls.new_with_span(None, span)

    @property
    def offset(self) -> int:
        """The 0-based starting byte offset."""
        return self.span.offset

    @property
    def length(self) -> int:
        """The number of bytes covered."""
        return self.span.length

    def __len__(self) -> int:
        return self.span.length

    def is_empty(self) -> bool:
        """True if the underlying span has zero length."""
        return self.span.is_empty()

    def to_dict(self) -> dict:
        """Serialize; the label is left out when it is ``None``."""
        data: dict = {}
        if self.label is not None:
            data["label"] = self.label
        data["span"] = self.span.to_dict()
        data["primary"] = self.primary
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "LabeledSpan":
        """Deserialize from the form produced by :meth:`to_dict`."""
        try:
            span = SourceSpan.from_dict(data["span"])
            primary = data["primary"]
        except KeyError as exc:
            raise ValueError(f"missing field {exc.args[0]!r}") from exc
        if not isinstance(primary, bool):
            raise TypeError("primary must be a bool")
        label = data.get("label")
        if label is not None and not isinstance(label, str):
            raise TypeError("label must be a string or null")
        return cls(label, span, primary)


@dataclass(frozen=True)
class SpanContents:
    """Bytes read from a source, with their position and context information."""

    data: bytes
    span: SourceSpan
    line: int
    column: int
    line_count: int
    name: Optional[str] = None
    language: Optional[str] = field(default=None)

    def with_language(self, language: str) -> "SpanContents":
        """Return a copy carrying ``language`` for syntax highlighting."""
        return replace(self, language=str(language))


def _labels_list(labels: Optional[Iterable[LabeledSpan]]) -> Optional[list]:
    return None if labels is None else list(labels)