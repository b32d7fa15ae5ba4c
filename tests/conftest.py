"""Shared fixtures: an in-memory feed service and a client wired to it."""

from collections.abc import Callable

import pytest

from feedsheets.config import FeedEndpoints
from feedsheets.exceptions import ServiceError
from feedsheets.feeds import BaseFeedService, Credentials, Row, SpreadsheetEntry, WorksheetEntry
from feedsheets.spreadsheet import SpreadsheetClient, SpreadsheetRef, WriteThrottle

FEED_ROOT = "https://x/feeds"


class FakeFeedService(BaseFeedService):
    """Feed service that serves canned entries and records every call."""

    def __init__(
        self,
        spreadsheets: list[SpreadsheetEntry] | None = None,
        worksheets: list[WorksheetEntry] | None = None,
        rows: dict[str, list[Row] | None] | None = None,
    ):
        self.spreadsheets = spreadsheets or []
        self.worksheets = worksheets or []
        self.rows = rows or {}
        self.credentials: Credentials | None = None
        self.events: list[tuple] = []
        self.fail_delete = False
        self.fail_insert_at: int | None = None

    def set_credentials(self, credentials):
        self.credentials = credentials

    def get_spreadsheets(self, url):
        self.events.append(("get_spreadsheets", url))
        return list(self.spreadsheets)

    def get_worksheets(self, url):
        self.events.append(("get_worksheets", url))
        return list(self.worksheets)

    def get_rows(self, url):
        self.events.append(("get_rows", url))
        return self.rows.get(url)

    def insert_worksheet(self, url, title, col_count, row_count):
        self.events.append(("insert_worksheet", url, title, col_count, row_count))
        return WorksheetEntry(title=title, list_feed_url=f"{url}/{title}/rows")

    def insert_row(self, url, row):
        inserted = len(self.calls("insert_row"))
        if self.fail_insert_at is not None and inserted == self.fail_insert_at:
            raise ServiceError("insert rejected", status_code=400)
        self.events.append(("insert_row", url, row))
        return row

    def delete(self, entry):
        if self.fail_delete:
            raise ServiceError("delete rejected", status_code=500)
        self.events.append(("delete", entry))

    def calls(self, name: str) -> list[tuple]:
        return [event for event in self.events if event[0] == name]


def worksheet(title: str) -> WorksheetEntry:
    return WorksheetEntry(
        title=title,
        list_feed_url=f"{FEED_ROOT}/list/K1/{title}/private/full",
        edit_url=f"{FEED_ROOT}/worksheets/K1/private/full/{title}",
    )


def rows_url(title: str) -> str:
    return worksheet(title).list_feed_url


@pytest.fixture
def service():
    """Spreadsheet "Budget" with worksheets Jan and Feb."""
    return FakeFeedService(
        spreadsheets=[
            SpreadsheetEntry(
                title="Budget", worksheet_feed_url=f"{FEED_ROOT}/worksheets/K1/private/full"
            ),
            SpreadsheetEntry(
                title="Budget 2", worksheet_feed_url=f"{FEED_ROOT}/worksheets/K2/private/full"
            ),
        ],
        worksheets=[worksheet("Jan"), worksheet("Feb")],
        rows={
            rows_url("Jan"): [Row.from_pairs([("amt", "10")])],
            rows_url("Feb"): [Row.from_pairs([("amt", "20")])],
        },
    )


@pytest.fixture
def make_client(service):
    """Build a client around the fake service; pauses are recorded, not slept."""

    def record_sleep(seconds):
        service.events.append(("sleep", seconds))

    def _make(
        title: str = "Budget",
        credentials: Credentials | None = None,
        sleep: Callable[[float], None] = record_sleep,
    ):
        return SpreadsheetClient(
            SpreadsheetRef(key="K1", title=title),
            credentials=credentials or Credentials(username="user", password="secret"),
            service=service,
            endpoints=FeedEndpoints.from_root(FEED_ROOT),
            throttle=WriteThrottle(delay_seconds=0.01),
            sleep=sleep,
        )

    return _make


@pytest.fixture
def client(make_client):
    return make_client()
