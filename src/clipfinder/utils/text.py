"""Text helpers for case-insensitive matching and range bookkeeping.

All offsets handled here are code point indices into Python strings.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from clipfinder.models import MatchRange


def fold_with_offsets(text: str) -> Tuple[str, List[int]]:
    """Case-fold text one character at a time.

    Returns the folded string and, for every folded character, the index of
    the original character it came from. ``str.casefold`` may expand a
    character ("ß" folds to "ss"), so folded and original indices can drift
    apart; the offsets list maps them back.
    """
    parts: List[str] = []
    offsets: List[int] = []
    for index, char in enumerate(text):
        folded = char.casefold()
        parts.append(folded)
        offsets.extend([index] * len(folded))
    return "".join(parts), offsets


def is_aligned(offsets: Sequence[int], start: int, end: int) -> bool:
    """True when folded span [start, end) covers whole original characters."""
    if start > 0 and offsets[start] == offsets[start - 1]:
        return False
    if end < len(offsets) and offsets[end] == offsets[end - 1]:
        return False
    return True


def to_original_range(offsets: Sequence[int], start: int, end: int) -> MatchRange:
    """Map an aligned folded span back onto the original text."""
    first = offsets[start]
    last = offsets[end - 1]
    return MatchRange(first, last - first + 1)


def is_word_start(text: str, index: int) -> bool:
    """Whether ``index`` begins a word in ``text``.

    A word starts at the beginning of the text, after any character that is
    not alphanumeric, or where a lowercase letter is followed by an
    uppercase one ("copyManager").
    """
    if index <= 0:
        return True
    if index >= len(text):
        return False
    previous = text[index - 1]
    if not previous.isalnum():
        return True
    return previous.islower() and text[index].isupper()


def merge_ranges(ranges: Iterable[MatchRange]) -> List[MatchRange]:
    """Sort ranges and merge the ones that touch or overlap."""
    merged: List[MatchRange] = []
    for current in sorted((r for r in ranges if r.length > 0), key=lambda r: r.start):
        if merged and current.start <= merged[-1].end:
            last = merged[-1]
            end = max(last.end, current.end)
            merged[-1] = MatchRange(last.start, end - last.start)
        else:
            merged.append(current)
    return merged


def to_utf16_ranges(text: str, ranges: Iterable[MatchRange]) -> List[MatchRange]:
    """Convert code point ranges to UTF-16 code unit ranges.

    Hosts that index strings in UTF-16 (AppKit, JavaScript) count characters
    outside the basic multilingual plane as two units.
    """
    units = [0]
    for char in text:
        units.append(units[-1] + (2 if ord(char) > 0xFFFF else 1))
    converted = []
    for item in ranges:
        start = units[min(item.start, len(text))]
        end = units[min(item.end, len(text))]
        converted.append(MatchRange(start, end - start))
    return converted


def clamp_ranges(ranges: Iterable[MatchRange], limit: int) -> List[MatchRange]:
    """Clip ranges to the first ``limit`` characters of a truncated preview."""
    clamped = []
    for item in ranges:
        if item.start >= limit:
            continue
        clamped.append(MatchRange(item.start, min(item.end, limit) - item.start))
    return clamped
