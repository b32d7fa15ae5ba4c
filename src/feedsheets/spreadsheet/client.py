"""Spreadsheet feed client implementation."""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from feedsheets.config import FeedEndpoints, get_write_delay
from feedsheets.exceptions import WorksheetNotLoadedError
from feedsheets.feeds.base import BaseFeedService
from feedsheets.feeds.http import HttpFeedService
from feedsheets.feeds.models import Credentials, Row, WorksheetEntry
from feedsheets.feeds.urls import Projection, Visibility, build_feed_url
from feedsheets.formatters import OutputFormatter, TabFormatter
from feedsheets.spreadsheet.cache import WorksheetCache

logger = logging.getLogger(__name__)

DEFAULT_WRITE_DELAY_SECONDS = 0.05


@dataclass(frozen=True)
class WriteThrottle:
    """Pause inserted after every row written to a worksheet.

    Rows are inserted one request at a time. The pause keeps the request rate
    below what the feed service tolerates.

    Attributes:
        delay_seconds: Seconds to sleep after each row insert. Must be > 0.
    """

    delay_seconds: float = DEFAULT_WRITE_DELAY_SECONDS

    def __post_init__(self) -> None:
        if self.delay_seconds <= 0:
            raise ValueError(f"delay_seconds must be positive, got {self.delay_seconds}")


@dataclass(frozen=True)
class SpreadsheetRef:
    """Identifies one spreadsheet on the feed service."""

    key: str
    title: str
    visibility: Visibility = Visibility.PRIVATE
    projection: Projection = Projection.FULL

    def __post_init__(self) -> None:
        if not isinstance(self.visibility, Visibility):
            object.__setattr__(self, "visibility", Visibility.from_value(self.visibility))
        if not isinstance(self.projection, Projection):
            object.__setattr__(self, "projection", Projection.from_value(self.projection))


class SpreadsheetClient:
    """Worksheet access for one spreadsheet over a feed service.

    Loaded worksheets are cached by title. A title is fetched at most once by
    ``load_worksheet`` until it is deleted; ``load_all_worksheets`` always
    refetches.

    Usage:
        client = SpreadsheetClient(SpreadsheetRef(key="0Ak...", title="Budget"))

        client.load_all_worksheets()
        client.print_worksheet("Jan")

        client.add_worksheet("Mar", col_count=5, row_count=10)
        client.write_to_worksheet("Mar", [Row.from_pairs([("amt", "30")])])

    Note:
        Not thread-safe. The worksheet cache is unsynchronized, so callers
        must not share one instance between threads.
    """

    def __init__(
        self,
        ref: SpreadsheetRef,
        credentials: Credentials | None = None,
        service: BaseFeedService | None = None,
        endpoints: FeedEndpoints | None = None,
        throttle: WriteThrottle | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the spreadsheet client.

        Args:
            ref: Spreadsheet key, title, visibility and projection.
            credentials: Credentials for the feed service. If None, read from
                FEEDSHEETS_USERNAME / FEEDSHEETS_PASSWORD / FEEDSHEETS_TOKEN.
            service: Feed service. Defaults to an HttpFeedService.
            endpoints: Feed scopes. If None, read from FEEDSHEETS_FEED_ROOT.
            throttle: Pause between row inserts. If None, read from
                FEEDSHEETS_WRITE_DELAY.
            sleep: Function used to pause between row inserts.
        """
        self._ref = ref
        self._credentials = credentials or Credentials.from_env()
        self._endpoints = endpoints or FeedEndpoints.from_env()
        self._throttle = throttle or WriteThrottle(get_write_delay(DEFAULT_WRITE_DELAY_SECONDS))
        self._sleep = sleep
        self._service = service
        self._owns_service = False
        self._authorized = False
        self._cache = WorksheetCache()

    @property
    def ref(self) -> SpreadsheetRef:
        return self._ref

    @property
    def key(self) -> str:
        return self._ref.key

    @property
    def title(self) -> str:
        return self._ref.title

    @property
    def visibility(self) -> Visibility:
        return self._ref.visibility

    @property
    def projection(self) -> Projection:
        return self._ref.projection

    @property
    def username(self) -> str | None:
        return self._credentials.username

    @property
    def endpoints(self) -> FeedEndpoints:
        return self._endpoints

    @property
    def throttle(self) -> WriteThrottle:
        return self._throttle

    def authorize(self, service: BaseFeedService) -> None:
        """Hand the credentials to ``service``.

        Subclasses can override this to authorize differently.
        """
        if self._credentials.has_token or self._credentials.has_login:
            service.set_credentials(self._credentials)

    def _get_service(self) -> BaseFeedService:
        """Get or create the authorized feed service."""
        if self._service is None:
            self._service = HttpFeedService()
            self._owns_service = True
        if not self._authorized:
            self.authorize(self._service)
            self._authorized = True
        return self._service

    def _feed_url(self, scope: str, key: str | None) -> str:
        return build_feed_url(scope, key, self._ref.visibility, self._ref.projection)

    def _get_worksheets(self, service: BaseFeedService) -> list[WorksheetEntry]:
        url = self._feed_url(self._endpoints.worksheets, self._ref.key)
        logger.debug(f"Fetching worksheets feed {url}")
        return service.get_worksheets(url) or []

    # =========================================================================
    # Worksheets
    # =========================================================================

    def add_worksheet(self, name: str, col_count: int, row_count: int) -> int:
        """Add a worksheet to every spreadsheet titled like this one.

        Spreadsheets are matched by exact title, not by key. The new worksheet
        is not loaded.

        Args:
            name: Worksheet title.
            col_count: Initial number of columns.
            row_count: Initial number of rows.

        Returns:
            Number of spreadsheets the worksheet was added to.
        """
        service = self._get_service()
        url = self._feed_url(self._endpoints.spreadsheets, None)
        logger.debug(f"Fetching spreadsheets feed {url}")

        added = 0
        for spreadsheet in service.get_spreadsheets(url) or []:
            if spreadsheet.title != self._ref.title:
                continue
            service.insert_worksheet(spreadsheet.worksheet_feed_url, name, col_count, row_count)
            logger.info(f"Added worksheet {name!r} ({col_count}x{row_count}) to {self.title!r}")
            added += 1

        if not added:
            logger.warning(f"No spreadsheet titled {self.title!r}; {name!r} not added")
        return added

    def load_worksheet(self, title: str) -> list[Row] | None:
        """Load a worksheet's rows into the cache.

        Does nothing if ``title`` is already loaded. If several worksheets
        share the title, the first one is loaded. A worksheet whose row feed is
        missing or empty is not cached.

        Args:
            title: Worksheet title.

        Returns:
            The cached rows, or None if nothing was loaded.
        """
        cached = self._cache.get(title)
        if cached is not None:
            logger.debug(f"Worksheet {title!r} already loaded")
            return cached

        service = self._get_service()
        for worksheet in self._get_worksheets(service):
            if worksheet.title != title:
                continue
            rows = service.get_rows(worksheet.list_feed_url)
            if rows:
                self._cache.put(title, rows)
                logger.debug(f"Loaded {len(rows)} rows from worksheet {title!r}")
            return self._cache.get(title)

        return None

    def load_all_worksheets(self) -> None:
        """Fetch every worksheet of the spreadsheet, replacing cached rows.

        Rows are cached under each worksheet's own title; with duplicate
        titles the later worksheet wins. A worksheet with no rows is cached
        as empty. A worksheet whose row feed is missing is dropped from the
        cache.
        """
        service = self._get_service()
        for worksheet in self._get_worksheets(service):
            rows = service.get_rows(worksheet.list_feed_url)
            if rows is None:
                logger.debug(f"No row feed for worksheet {worksheet.title!r}")
                self._cache.discard(worksheet.title)
                continue
            self._cache.put(worksheet.title, rows)
            logger.debug(f"Loaded {len(rows)} rows from worksheet {worksheet.title!r}")

    def delete_worksheet(self, title: str | None) -> int:
        """Delete every worksheet titled ``title``.

        The cached rows are dropped before the remote delete and stay dropped
        if it fails.

        Args:
            title: Worksheet title. None or empty does nothing.

        Returns:
            Number of worksheets deleted.
        """
        if not title:
            return 0

        self._cache.tombstone(title)

        service = self._get_service()
        deleted = 0
        for worksheet in self._get_worksheets(service):
            if worksheet.title == title:
                service.delete(worksheet)
                logger.info(f"Deleted worksheet {title!r} from {self._ref.title!r}")
                deleted += 1
        return deleted

    # =========================================================================
    # Rows
    # =========================================================================

    def write_to_worksheet(self, title: str, rows: Iterable[Row] | None) -> int:
        """Append rows to a worksheet, one request per row.

        Each insert is followed by the throttle pause. Rows are written to the
        first worksheet titled ``title``. Nothing is rolled back if an insert
        fails, and the cache is not updated.

        Args:
            title: Worksheet title.
            rows: Rows to insert, in order. None does nothing.

        Returns:
            Number of rows written.

        Raises:
            AuthenticationError: If the credentials are rejected.
            TransportError: If the service cannot be reached.
            ServiceError: If an insert is rejected.
        """
        if rows is None:
            return 0

        service = self._get_service()
        list_feed_url = None
        for worksheet in self._get_worksheets(service):
            if worksheet.title == title:
                list_feed_url = worksheet.list_feed_url
                break

        if list_feed_url is None:
            logger.warning(f"No worksheet titled {title!r}; nothing written")
            return 0

        written = 0
        for row in rows:
            service.insert_row(list_feed_url, row)
            written += 1
            self._pause()

        logger.info(f"Wrote {written} rows to worksheet {title!r}")
        return written

    def _pause(self) -> None:
        with contextlib.suppress(InterruptedError):
            self._sleep(self._throttle.delay_seconds)

    # =========================================================================
    # Output
    # =========================================================================

    def print_worksheet(
        self,
        title: str,
        destination: TextIO | str | os.PathLike | None = None,
        formatter: OutputFormatter | None = None,
    ) -> None:
        """Print a loaded worksheet: a header line, then one line per row.

        Does not load the worksheet.

        Args:
            title: Worksheet title.
            destination: Text stream, or a file path to (over)write.
                Defaults to standard output.
            formatter: Row formatter. Defaults to tab-separated.

        Raises:
            WorksheetNotLoadedError: If the worksheet is not loaded.
            OSError: If the destination file cannot be written.
        """
        rows = self.get_entries(title)
        if rows is None:
            raise WorksheetNotLoadedError(title)

        formatter = formatter or TabFormatter()

        if destination is None:
            self._write_rows(rows, sys.stdout, formatter)
        elif isinstance(destination, (str, os.PathLike)):
            with open(destination, "w", encoding="utf-8") as f:
                self._write_rows(rows, f, formatter)
        else:
            self._write_rows(rows, destination, formatter)

    def print_all_worksheets(
        self,
        directory: str | os.PathLike,
        formatter: OutputFormatter | None = None,
    ) -> list[Path]:
        """Print every loaded worksheet to ``<directory>/<spreadsheet>.<worksheet>``.

        Returns:
            Paths written, sorted by worksheet title.
        """
        paths = []
        for title in sorted(self._cache.titles()):
            path = Path(directory) / f"{self._ref.title}.{title}"
            self.print_worksheet(title, path, formatter)
            paths.append(path)
        return paths

    def _write_rows(self, rows: list[Row], stream: TextIO, formatter: OutputFormatter) -> None:
        if not rows:
            return
        stream.write(formatter.format(rows[0], is_header=True) + "\n")
        for row in rows:
            stream.write(formatter.format(row) + "\n")

    # =========================================================================
    # Cache access
    # =========================================================================

    def get_entries(self, title: str) -> list[Row] | None:
        """Cached rows for ``title``, or None if not loaded or deleted."""
        return self._cache.get(title)

    def is_loaded(self, title: str) -> bool:
        return self._cache.is_loaded(title)

    def get_loaded_worksheet_titles(self) -> set[str]:
        """Titles of loaded worksheets. Deleted worksheets are excluded."""
        return self._cache.titles()

    def close(self):
        """Close the feed service if this client created it."""
        if self._owns_service and isinstance(self._service, HttpFeedService):
            self._service.close()
            self._service = None
            self._owns_service = False
            self._authorized = False

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
