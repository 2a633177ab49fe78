"""Utility helpers for working with file paths copied to the clipboard."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Optional
from urllib.parse import unquote

FILE_URL_PREFIX = "file://"


def clean_path(path: str) -> str:
    """Strip a ``file://`` scheme and decode percent escapes."""
    if path.startswith(FILE_URL_PREFIX):
        path = unquote(path[len(FILE_URL_PREFIX) :])
    return path


def extract_filename(path: str) -> str:
    """Return the last path segment, ignoring a trailing slash."""
    return PurePosixPath(clean_path(path)).name


def extract_extension(path: str) -> Optional[str]:
    """Return the lowercase extension without the dot, or None."""
    suffix = PurePosixPath(extract_filename(path)).suffix
    return suffix[1:].lower() if suffix else None


def extract_parent_folder(path: str) -> str:
    """Return the name of the folder containing the path."""
    return PurePosixPath(clean_path(path)).parent.name
