"""Literal, case-insensitive matching of a query against one field of text.

Categories are tried strongest first: exact, prefix, word boundary,
substring and, when fuzzy matching is enabled, subsequence. Every contiguous
category keeps its score inside its own band, so a weaker category never
outscores a stronger one whatever the text length, while a shorter text
always beats a longer one within a category.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from clipfinder.models import MatchCategory, MatchRange, MatchResult
from clipfinder.utils.text import (
    fold_with_offsets,
    is_aligned,
    is_word_start,
    merge_ranges,
    to_original_range,
)

EXACT_SCORE = 1.0

# (floor, base) per contiguous category; the floor is the next category's base.
CONTIGUOUS_BANDS = {
    MatchCategory.PREFIX: (0.75, 0.9),
    MatchCategory.WORD_BOUNDARY: (0.6, 0.75),
    MatchCategory.SUBSTRING: (0.55, 0.6),
}

SUBSEQUENCE_BASE = 0.3
CONSECUTIVE_BONUS = 0.2
WORD_START_BONUS = 0.05

LENGTH_PENALTY = 0.01


def length_factor(length: int) -> float:
    """Scale in (0, 1], strictly decreasing with the field length."""
    return 1.0 / (1.0 + LENGTH_PENALTY * length)


def _occurrences(folded_text: str, folded_query: str, offsets: Sequence[int]) -> Iterator[int]:
    """Yield folded start indices where the query covers whole characters."""
    size = len(folded_query)
    position = folded_text.find(folded_query)
    while position != -1:
        if is_aligned(offsets, position, position + size):
            yield position
        position = folded_text.find(folded_query, position + 1)


def _placeable_folds(text: str, word_starts_only: bool) -> List[str]:
    """Case fold of every character that may take part in a match, else ""."""
    return [
        "" if word_starts_only and not is_word_start(text, index) else char.casefold()
        for index, char in enumerate(text)
    ]


def _locate(text: str, folded_query: str, *, word_starts_only: bool = False) -> Optional[List[int]]:
    """Leftmost placement of the query's characters in ``text``, in order."""
    folds = _placeable_folds(text, word_starts_only)
    positions: List[int] = []
    cursor = 0
    for index, folded in enumerate(folds):
        if cursor >= len(folded_query):
            break
        if folded and folded_query.startswith(folded, cursor):
            positions.append(index)
            cursor += len(folded)
    if cursor >= len(folded_query):
        return positions
    if all(len(folded) <= 1 for folded in folds):
        return None
    return _locate_with_expansions(folds, folded_query)


def _locate_with_expansions(folds: Sequence[str], folded_query: str) -> Optional[List[int]]:
    """Placement when some characters fold to several ("ß" -> "ss").

    Taking the first character that fits can strand the rest of the query,
    so ``finishable[i]`` first collects the query cursors from which
    ``folds[i:]`` can still complete the match.
    """
    size = len(folded_query)
    finishable = [set() for _ in range(len(folds) + 1)]
    finishable[len(folds)].add(size)
    for index in range(len(folds) - 1, -1, -1):
        after = finishable[index + 1]
        current = set(after)
        folded = folds[index]
        if folded:
            for cursor in after:
                start = cursor - len(folded)
                if start >= 0 and folded_query.startswith(folded, start):
                    current.add(start)
        finishable[index] = current
    if 0 not in finishable[0]:
        return None

    positions: List[int] = []
    cursor = 0
    for index, folded in enumerate(folds):
        if cursor == size:
            break
        if (
            folded
            and folded_query.startswith(folded, cursor)
            and cursor + len(folded) in finishable[index + 1]
        ):
            positions.append(index)
            cursor += len(folded)
    return positions


def _subsequence_score(text: str, positions: Sequence[int]) -> float:
    count = len(positions)
    adjacent = sum(1 for prev, cur in zip(positions, positions[1:]) if cur == prev + 1)
    word_starts = sum(1 for index in positions if is_word_start(text, index))
    raw = (
        SUBSEQUENCE_BASE
        + CONSECUTIVE_BONUS * adjacent / count
        + WORD_START_BONUS * word_starts / count
    )
    return raw * length_factor(len(text))


class Matcher:
    """Stateless matcher; safe to share between callers."""

    def match(self, query: str, text: str, fuzzy_enabled: bool = False) -> Optional[MatchResult]:
        """Match ``query`` against ``text``.

        Returns None when there is nothing to match or no category applies.
        """
        needle = query.strip()
        if not needle or not text or len(needle) > len(text):
            return None

        folded_query = needle.casefold()
        folded_text, offsets = fold_with_offsets(text)

        if folded_text == folded_query:
            return MatchResult(EXACT_SCORE, (MatchRange(0, len(text)),), MatchCategory.EXACT)

        result = self._match_contiguous(text, folded_text, folded_query, offsets)
        if result is not None or not fuzzy_enabled:
            return result
        return self._match_subsequence(text, folded_query)

    def _match_contiguous(
        self,
        text: str,
        folded_text: str,
        folded_query: str,
        offsets: Sequence[int],
    ) -> Optional[MatchResult]:
        size = len(folded_query)
        first: Optional[int] = None
        for position in _occurrences(folded_text, folded_query, offsets):
            if position == 0:
                return self._contiguous(text, offsets, 0, size, MatchCategory.PREFIX)
            if is_word_start(text, offsets[position]):
                return self._contiguous(text, offsets, position, size, MatchCategory.WORD_BOUNDARY)
            if first is None:
                first = position
        if first is None:
            return None
        return self._contiguous(text, offsets, first, size, MatchCategory.SUBSTRING)

    @staticmethod
    def _contiguous(
        text: str,
        offsets: Sequence[int],
        position: int,
        size: int,
        category: MatchCategory,
    ) -> MatchResult:
        floor, base = CONTIGUOUS_BANDS[category]
        score = floor + (base - floor) * length_factor(len(text))
        span = to_original_range(offsets, position, position + size)
        return MatchResult(score, (span,), category)

    @staticmethod
    def _match_subsequence(text: str, folded_query: str) -> Optional[MatchResult]:
        best: Optional[MatchResult] = None
        # Initials first ("cm" -> "CopyManager"), then plain greedy placement.
        for word_starts_only in (True, False):
            positions = _locate(text, folded_query, word_starts_only=word_starts_only)
            if not positions:
                continue
            score = _subsequence_score(text, positions)
            if best is None or score > best.score:
                ranges = merge_ranges(MatchRange(index, 1) for index in positions)
                best = MatchResult(score, tuple(ranges), MatchCategory.SUBSEQUENCE)
        return best


_DEFAULT_MATCHER = Matcher()


def match(query: str, text: str, fuzzy_enabled: bool = False) -> Optional[MatchResult]:
    """Module-level shortcut for :meth:`Matcher.match`."""
    return _DEFAULT_MATCHER.match(query, text, fuzzy_enabled)
