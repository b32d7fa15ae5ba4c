"""Client for spreadsheet feed APIs (spreadsheets, worksheets, list rows)."""

from feedsheets.exceptions import (
    AuthenticationError,
    EmptyRowError,
    FeedsheetsError,
    InvalidUrlError,
    ServiceError,
    TransportError,
    WorksheetNotLoadedError,
)
from feedsheets.feeds import (
    BaseFeedService,
    Credentials,
    HttpFeedService,
    Projection,
    Row,
    Visibility,
    build_feed_url,
)
from feedsheets.formatters import PipeFormatter, TabFormatter
from feedsheets.spreadsheet import SpreadsheetClient, SpreadsheetRef, WriteThrottle

__version__ = "0.1.0"

__all__ = [
    "SpreadsheetClient",
    "SpreadsheetRef",
    "WriteThrottle",
    "BaseFeedService",
    "HttpFeedService",
    "Credentials",
    "Row",
    "Visibility",
    "Projection",
    "build_feed_url",
    "TabFormatter",
    "PipeFormatter",
    "FeedsheetsError",
    "InvalidUrlError",
    "AuthenticationError",
    "TransportError",
    "ServiceError",
    "EmptyRowError",
    "WorksheetNotLoadedError",
]
