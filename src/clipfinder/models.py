"""Core ClipFinder data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from clipfinder.utils.files import extract_filename

PREVIEW_LIMIT = 100


class ContentType(str, Enum):
    """Kind of content a clipboard record holds."""

    TEXT = "text"
    URL = "url"
    IMAGE = "image"
    FILE = "file"
    RICH_TEXT = "rich_text"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    ContentType.TEXT: "Text",
    ContentType.URL: "URL",
    ContentType.IMAGE: "Image",
    ContentType.FILE: "File",
    ContentType.RICH_TEXT: "Rich Text",
}


class MatchType(str, Enum):
    """Externally visible kind of match."""

    CONTIGUOUS = "contiguous"
    SUBSEQUENCE = "subsequence"


class MatchCategory(str, Enum):
    """Internal match category, strongest first."""

    EXACT = "exact"
    PREFIX = "prefix"
    WORD_BOUNDARY = "word_boundary"
    SUBSTRING = "substring"
    SUBSEQUENCE = "subsequence"

    @property
    def match_type(self) -> MatchType:
        if self is MatchCategory.SUBSEQUENCE:
            return MatchType.SUBSEQUENCE
        return MatchType.CONTIGUOUS


class MatchField(str, Enum):
    """Record attribute that produced a match."""

    CONTENT = "content"
    PATH = "path"
    SOURCE_APP = "source_app"


@dataclass(frozen=True, slots=True)
class Record:
    """A clipboard history entry as supplied by the record store.

    ``filename`` and ``full_path`` are only meaningful for file records.
    """

    id: Any
    primary_text: str
    content_type: ContentType
    timestamp: datetime
    filename: Optional[str] = None
    full_path: Optional[str] = None
    source_app: Optional[str] = None

    @classmethod
    def from_file_path(
        cls,
        id: Any,
        path: str,
        *,
        timestamp: datetime,
        source_app: Optional[str] = None,
    ) -> "Record":
        """Build a file record, deriving the filename from a path or file URL."""
        filename = extract_filename(path)
        return cls(
            id=id,
            primary_text=path,
            content_type=ContentType.FILE,
            timestamp=timestamp,
            filename=filename or None,
            full_path=path,
            source_app=source_app,
        )

    @property
    def is_file(self) -> bool:
        return self.content_type is ContentType.FILE

    @property
    def preview(self) -> str:
        """Single-line preview, truncated to ``PREVIEW_LIMIT`` characters."""
        if self.content_type is ContentType.IMAGE:
            return "[Image]"
        if self.is_file:
            return self.filename or extract_filename(self.primary_text)
        cleaned = " ".join(self.primary_text.split())
        if len(cleaned) > PREVIEW_LIMIT:
            return cleaned[:PREVIEW_LIMIT] + "…"
        return cleaned


@dataclass(frozen=True, slots=True)
class MatchRange:
    """Span of matched characters, measured in code points."""

    start: int
    length: int

    @property
    def end(self) -> int:
        return self.start + self.length


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of matching a query against one field."""

    score: float
    ranges: Tuple[MatchRange, ...]
    category: MatchCategory

    @property
    def match_type(self) -> MatchType:
        return self.category.match_type


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A record that matched a query, with the field that matched it.

    ``ranges`` always refer to the content field and are empty for
    path and source app matches.
    """

    record: Record
    score: float
    match_type: MatchType
    match_field: MatchField
    ranges: Tuple[MatchRange, ...] = field(default_factory=tuple)
