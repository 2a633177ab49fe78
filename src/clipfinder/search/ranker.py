"""Search across clipboard records and order the matches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from clipfinder.models import MatchField, MatchType, Record, SearchResult
from clipfinder.search.matcher import Matcher

LOGGER = logging.getLogger(__name__)


def _content_text(record: Record) -> Optional[str]:
    return record.filename if record.is_file else record.primary_text


def _path_text(record: Record) -> Optional[str]:
    return record.full_path if record.is_file else None


def _source_app_text(record: Record) -> Optional[str]:
    return record.source_app


def _always(fuzzy_enabled: bool) -> bool:
    return True


def _fuzzy_only(fuzzy_enabled: bool) -> bool:
    return fuzzy_enabled


@dataclass(frozen=True, slots=True)
class FieldCandidate:
    """A record field the ranker may match, and when it is allowed to."""

    field: MatchField
    extract: Callable[[Record], Optional[str]]
    enabled: Callable[[bool], bool]
    highlight: bool


# Tried in order; the first field that matches wins.
FIELD_CANDIDATES = (
    FieldCandidate(MatchField.CONTENT, _content_text, _always, highlight=True),
    FieldCandidate(MatchField.PATH, _path_text, _fuzzy_only, highlight=False),
    FieldCandidate(MatchField.SOURCE_APP, _source_app_text, _fuzzy_only, highlight=False),
)


class Ranker:
    """Match a query against records and order the results.

    Contiguous matches come before subsequence matches; within each group
    records are ordered newest first, keeping the caller's order on ties.
    """

    def __init__(
        self,
        matcher: Matcher | None = None,
        candidates: Sequence[FieldCandidate] = FIELD_CANDIDATES,
    ) -> None:
        self.matcher = matcher or Matcher()
        self.candidates = tuple(candidates)

    def search(
        self,
        query: str,
        records: Sequence[Record],
        fuzzy_enabled: bool = False,
    ) -> List[SearchResult]:
        if not query.strip():
            return [
                SearchResult(
                    record=record,
                    score=1.0,
                    match_type=MatchType.CONTIGUOUS,
                    match_field=MatchField.CONTENT,
                )
                for record in records
            ]

        results: List[SearchResult] = []
        for record in records:
            result = self.match_record(query, record, fuzzy_enabled)
            if result is not None:
                results.append(result)

        # Both sorts are stable: newest first, then contiguous before subsequence.
        results.sort(key=lambda result: result.record.timestamp, reverse=True)
        results.sort(key=lambda result: result.match_type is MatchType.SUBSEQUENCE)

        LOGGER.debug(
            "Query %r matched %d of %d records (fuzzy=%s)",
            query,
            len(results),
            len(records),
            fuzzy_enabled,
        )
        return results

    def match_record(
        self,
        query: str,
        record: Record,
        fuzzy_enabled: bool = False,
    ) -> Optional[SearchResult]:
        """Return the result for the first candidate field that matches."""
        for candidate in self.candidates:
            if not candidate.enabled(fuzzy_enabled):
                continue
            text = candidate.extract(record)
            if not text:
                continue
            matched = self.matcher.match(query, text, fuzzy_enabled)
            if matched is None:
                continue
            return SearchResult(
                record=record,
                score=matched.score,
                match_type=matched.match_type,
                match_field=candidate.field,
                ranges=matched.ranges if candidate.highlight else (),
            )
        return None


_DEFAULT_RANKER = Ranker()


def search(query: str, records: Sequence[Record], fuzzy_enabled: bool = False) -> List[SearchResult]:
    """Module-level shortcut for :meth:`Ranker.search`."""
    return _DEFAULT_RANKER.search(query, records, fuzzy_enabled)
