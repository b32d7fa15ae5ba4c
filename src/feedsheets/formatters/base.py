"""Base output formatter."""

from __future__ import annotations

from feedsheets.exceptions import EmptyRowError
from feedsheets.feeds.models import Row


class OutputFormatter:
    """Render one row as a line of delimited text.

    Values are joined as-is. Separators or newlines inside a value are not
    escaped.
    """

    name: str = "delimited"

    def __init__(self, separator: str):
        if not separator:
            raise ValueError("separator must not be empty")
        self.separator = separator

    def format(self, row: Row, is_header: bool = False) -> str:
        """Format a row.

        Args:
            row: Row to render.
            is_header: Render the row's tags instead of its values.

        Returns:
            The row's tags or values joined by the separator.

        Raises:
            EmptyRowError: If the row has no tags.
        """
        if not row.cells:
            raise EmptyRowError("Cannot format a row with no tags")

        fields = row.tags if is_header else row.values
        return self.separator.join("" if value is None else str(value) for value in fields)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(separator={self.separator!r})"
