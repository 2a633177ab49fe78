"""Application configuration defaults."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

HISTORY_ENV = "CLIPFINDER_HISTORY"
FUZZY_ENV = "CLIPFINDER_FUZZY"

_TRUTHY = {"1", "true", "yes", "on"}


def _default_history_path() -> Path:
    """Where the clipboard history export is read from when none is given.

    A checkout with a ``data/history.json`` export uses it; bundled builds
    and everything else read the export saved under Documents.
    """
    exported = Path.home() / "Documents" / "ClipFinder" / "history.json"
    checkout_export = Path("data/history.json")
    if not getattr(sys, "frozen", False) and checkout_export.exists():
        return checkout_export
    return exported


@dataclass(slots=True)
class AppConfig:
    history_path: Path | None = None
    fuzzy_enabled: bool = False
    limit: int = 50
    preview_chars: int = 100

    def __post_init__(self) -> None:
        if self.history_path is None:
            self.history_path = _default_history_path()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config honouring ``CLIPFINDER_HISTORY`` and ``CLIPFINDER_FUZZY``."""
        history = os.environ.get(HISTORY_ENV)
        fuzzy = os.environ.get(FUZZY_ENV, "")
        return cls(
            history_path=Path(history) if history else None,
            fuzzy_enabled=fuzzy.strip().lower() in _TRUTHY,
        )

    def resolve_history_path(self, base_dir: Path | None = None) -> Path:
        if self.history_path is None:
            self.history_path = _default_history_path()
        if Path(self.history_path).is_absolute() or base_dir is None:
            return Path(self.history_path)
        return base_dir / self.history_path
