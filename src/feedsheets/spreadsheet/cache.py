"""In-memory worksheet cache."""

from __future__ import annotations

from feedsheets.feeds.models import Row

# Marks a worksheet deleted through this client. Distinct from "never loaded".
TOMBSTONE = object()


class WorksheetCache:
    """Worksheet title -> loaded rows.

    Each title is in one of three states: absent (never loaded), loaded, or
    tombstoned (deleted). Only loaded entries hold rows.

    Not thread-safe. A cache belongs to a single client instance.
    """

    def __init__(self) -> None:
        self._entries: dict[str, list[Row] | object] = {}

    def get(self, title: str) -> list[Row] | None:
        """Rows for ``title``, or None if absent or tombstoned."""
        rows = self._entries.get(title)
        if rows is None or rows is TOMBSTONE:
            return None
        return rows

    def put(self, title: str, rows: list[Row]) -> None:
        self._entries[title] = list(rows)

    def tombstone(self, title: str) -> None:
        self._entries[title] = TOMBSTONE

    def discard(self, title: str) -> None:
        """Forget loaded rows for ``title``. A tombstone is kept."""
        if self.is_loaded(title):
            del self._entries[title]

    def is_loaded(self, title: str) -> bool:
        return self.get(title) is not None

    def is_tombstoned(self, title: str) -> bool:
        return self._entries.get(title) is TOMBSTONE

    def titles(self) -> set[str]:
        """Titles with loaded rows."""
        return {title for title, rows in self._entries.items() if rows is not TOMBSTONE}

    def __contains__(self, title: object) -> bool:
        return isinstance(title, str) and self.is_loaded(title)

    def __len__(self) -> int:
        return len(self.titles())
