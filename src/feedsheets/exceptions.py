"""Spreadsheet feed exceptions."""

from __future__ import annotations


class FeedsheetsError(Exception):
    """Base exception for spreadsheet feed errors."""


class InvalidUrlError(FeedsheetsError, ValueError):
    """Raised when a feed URL cannot be built from its parts."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Malformed feed URL: {url!r}")


class AuthenticationError(FeedsheetsError):
    """Raised when the feed service rejects the credentials."""


class TransportError(FeedsheetsError):
    """Raised when the feed service cannot be reached."""


class ServiceError(FeedsheetsError):
    """Raised when the feed service rejects a request."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class EmptyRowError(FeedsheetsError, ValueError):
    """Raised when formatting a row that has no tags."""


class WorksheetNotLoadedError(FeedsheetsError, KeyError):
    """Raised when a worksheet is requested before it has been loaded."""

    def __init__(self, title: str):
        self.title = title
        super().__init__(f"Worksheet not loaded: {title!r}")

    def __str__(self) -> str:
        return self.args[0]
