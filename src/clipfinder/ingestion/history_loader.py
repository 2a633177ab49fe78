"""Load clipboard history exports into records.

The export is a JSON list of objects; each object is validated with
pydantic and converted to a :class:`~clipfinder.models.Record`.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from pydantic import BaseModel, ValidationError

from clipfinder.models import ContentType, Record
from clipfinder.utils.files import extract_filename

LOGGER = logging.getLogger(__name__)


class HistoryLoadError(ValueError):
    """Raised when a history export cannot be read at all."""


class HistoryEntry(BaseModel):
    id: Union[int, str]
    content: str
    content_type: ContentType = ContentType.TEXT
    timestamp: datetime
    source_app: Optional[str] = None
    filename: Optional[str] = None
    path: Optional[str] = None

    def to_record(self) -> Record:
        timestamp = self.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)

        if self.content_type is not ContentType.FILE:
            return Record(
                id=self.id,
                primary_text=self.content,
                content_type=self.content_type,
                timestamp=timestamp,
                source_app=self.source_app,
            )

        full_path = self.path or self.content
        return Record(
            id=self.id,
            primary_text=self.content,
            content_type=ContentType.FILE,
            timestamp=timestamp,
            filename=self.filename or extract_filename(full_path) or None,
            full_path=full_path or None,
            source_app=self.source_app,
        )


def parse_entries(raw_entries: Iterable[Any]) -> List[Record]:
    """Validate raw entries, skipping the ones that do not fit the schema."""
    records: List[Record] = []
    for position, raw in enumerate(raw_entries):
        try:
            entry = HistoryEntry.model_validate(raw)
        except ValidationError as exc:
            LOGGER.warning("Skipping history entry %d: %s", position, exc.errors()[0]["msg"])
            continue
        records.append(entry.to_record())
    return records


def load_history(path: Path) -> List[Record]:
    """Read a history export, newest records first."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise HistoryLoadError(f"Cannot read history file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise HistoryLoadError(f"History file {path} is not UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise HistoryLoadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(payload, list):
        raise HistoryLoadError(f"Expected a JSON list of entries in {path}")

    records = parse_entries(payload)
    records.sort(key=lambda record: record.timestamp, reverse=True)
    LOGGER.info("Loaded %d records from %s", len(records), path)
    return records
