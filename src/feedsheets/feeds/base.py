"""Base feed service interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from feedsheets.feeds.models import Credentials, Row, SpreadsheetEntry, WorksheetEntry


class BaseFeedService(ABC):
    """Abstract base class for spreadsheet feed services.

    A feed service owns transport, authentication and feed parsing. Feed
    getters return None when the service has no feed at the URL.
    """

    @abstractmethod
    def set_credentials(self, credentials: Credentials) -> None:
        """Use ``credentials`` for subsequent requests."""

    @abstractmethod
    def get_spreadsheets(self, url: str) -> list[SpreadsheetEntry] | None:
        """Fetch the spreadsheets feed at ``url``."""

    @abstractmethod
    def get_worksheets(self, url: str) -> list[WorksheetEntry] | None:
        """Fetch the worksheets feed at ``url``."""

    @abstractmethod
    def get_rows(self, url: str) -> list[Row] | None:
        """Fetch the list (row) feed at ``url``."""

    @abstractmethod
    def insert_worksheet(
        self,
        url: str,
        title: str,
        col_count: int,
        row_count: int,
    ) -> WorksheetEntry:
        """Create a worksheet in the worksheets feed at ``url``.

        Raises:
            AuthenticationError: If the credentials are rejected.
            TransportError: If the service cannot be reached.
            ServiceError: If the service rejects the request.
        """

    @abstractmethod
    def insert_row(self, url: str, row: Row) -> Row:
        """Append ``row`` to the list feed at ``url``.

        Raises:
            AuthenticationError: If the credentials are rejected.
            TransportError: If the service cannot be reached.
            ServiceError: If the service rejects the request.
        """

    @abstractmethod
    def delete(self, entry: WorksheetEntry | Row) -> None:
        """Delete a worksheet or row entry.

        Raises:
            AuthenticationError: If the credentials are rejected.
            TransportError: If the service cannot be reached.
            ServiceError: If the service rejects the request.
        """
