"""Feed entry models.

These are the already-deserialized entries a feed service hands back. The
spreadsheet client never sees the wire format.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Credentials:
    """Credentials passed through to the feed service unchanged."""

    username: str | None = None
    password: str | None = None
    token: str | None = None

    @classmethod
    def from_env(cls) -> Credentials:
        """Read FEEDSHEETS_USERNAME, FEEDSHEETS_PASSWORD and FEEDSHEETS_TOKEN."""
        return cls(
            username=os.environ.get("FEEDSHEETS_USERNAME"),
            password=os.environ.get("FEEDSHEETS_PASSWORD"),
            token=os.environ.get("FEEDSHEETS_TOKEN"),
        )

    @property
    def has_login(self) -> bool:
        return self.username is not None and self.password is not None

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def __repr__(self) -> str:
        return f"Credentials(username={self.username!r}, password=***, token=***)"


@dataclass
class Row:
    """One list-feed entry: ordered tag -> value pairs.

    Tag order is the order the feed returned them in and is kept as-is, so
    headers and values line up when printed.
    """

    cells: dict[str, str] = field(default_factory=dict)
    edit_url: str | None = None

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> Row:
        return cls(cells=dict(pairs))

    @property
    def tags(self) -> list[str]:
        return list(self.cells)

    @property
    def values(self) -> list[str]:
        return list(self.cells.values())

    def get(self, tag: str, default: str | None = None) -> str | None:
        return self.cells.get(tag, default)

    def __len__(self) -> int:
        return len(self.cells)


@dataclass
class SpreadsheetEntry:
    """A spreadsheet listed in the spreadsheets feed."""

    title: str
    worksheet_feed_url: str
    key: str | None = None


@dataclass
class WorksheetEntry:
    """A worksheet listed in a spreadsheet's worksheets feed."""

    title: str
    list_feed_url: str
    edit_url: str | None = None
    col_count: int = 0
    row_count: int = 0
