"""HTTP feed service for JSON spreadsheet feeds.

Speaks the JSON rendering of spreadsheet feeds (``alt=json``)::

    {"feed": {"entry": [{"title": {"$t": "Sheet1"},
                         "link": [{"rel": "...#listfeed", "href": "..."}],
                         "gsx$amount": {"$t": "10"}}]}}

Writes send a single ``{"entry": {...}}`` document in the same shape.
"""

import logging
from typing import Any

import httpx

from feedsheets.exceptions import AuthenticationError, ServiceError, TransportError
from feedsheets.feeds.base import BaseFeedService
from feedsheets.feeds.models import Credentials, Row, SpreadsheetEntry, WorksheetEntry

logger = logging.getLogger(__name__)

SCHEMA = "http://schemas.google.com/spreadsheets/2006"
REL_WORKSHEETS_FEED = f"{SCHEMA}#worksheetsfeed"
REL_LIST_FEED = f"{SCHEMA}#listfeed"
REL_EDIT = "edit"

CELL_PREFIX = "gsx$"
GDATA_VERSION = "3.0"


def _text(node: Any) -> str:
    if isinstance(node, dict):
        return str(node.get("$t", ""))
    if node is None:
        return ""
    return str(node)


def _link(entry: dict[str, Any], rel: str) -> str | None:
    for link in entry.get("link", []):
        if link.get("rel") == rel:
            return link.get("href")
    return None


def _int(node: Any) -> int:
    try:
        return int(_text(node))
    except ValueError:
        return 0


class HttpFeedService(BaseFeedService):
    """Feed service over HTTP using httpx.

    Credentials are passed through as-is: a token becomes a bearer
    ``Authorization`` header, a username/password pair becomes HTTP basic
    auth. No token negotiation happens here.

    Example:
        >>> service = HttpFeedService()
        >>> service.set_credentials(Credentials(token="ya29..."))
        >>> sheets = service.get_worksheets(
        ...     "https://spreadsheets.google.com/feeds/worksheets/KEY/private/full"
        ... )
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the feed service.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self._client = httpx.Client(timeout=timeout, transport=transport)
        self._credentials: Credentials | None = None

    def set_credentials(self, credentials: Credentials) -> None:
        self._credentials = credentials

    def _get_headers(self) -> dict[str, str]:
        """Get headers for feed requests."""
        headers = {
            "GData-Version": GDATA_VERSION,
            "Content-Type": "application/json",
        }
        if self._credentials and self._credentials.has_token:
            headers["Authorization"] = f"Bearer {self._credentials.token}"
        return headers

    def _get_auth(self) -> httpx.BasicAuth | None:
        creds = self._credentials
        if creds and not creds.has_token and creds.has_login:
            return httpx.BasicAuth(creds.username, creds.password)
        return None

    def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        allow_missing: bool = False,
    ) -> dict[str, Any] | None:
        """Make an authenticated feed request.

        Args:
            method: HTTP method.
            url: Feed or entry URL.
            json: JSON body for POST.
            headers: Extra headers.
            allow_missing: Return None on 404 instead of raising.

        Returns:
            Decoded JSON response, or None for an empty body or a missing feed.

        Raises:
            AuthenticationError: On 401/403.
            TransportError: If the request could not be sent.
            ServiceError: On any other error status, or a body that is not JSON.
        """
        params = {"alt": "json"} if method == "GET" else None
        request_headers = {**self._get_headers(), **(headers or {})}

        logger.debug(f"{method} {url}")
        try:
            response = self._client.request(
                method,
                url,
                params=params,
                json=json,
                headers=request_headers,
                auth=self._get_auth(),
            )
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(f"Access denied to {url} ({response.status_code})")
        if response.status_code == 404 and allow_missing:
            return None
        if response.status_code >= 400:
            raise ServiceError(
                f"Feed service error: {response.text}",
                status_code=response.status_code,
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ServiceError(
                f"Feed service returned a non-JSON body from {url}",
                status_code=response.status_code,
            ) from e

    def _entries(self, url: str) -> list[dict[str, Any]] | None:
        data = self._request("GET", url, allow_missing=True)
        if data is None:
            return None
        return data.get("feed", {}).get("entry", [])

    # =========================================================================
    # Feeds
    # =========================================================================

    def get_spreadsheets(self, url: str) -> list[SpreadsheetEntry] | None:
        entries = self._entries(url)
        if entries is None:
            return None
        return [self._parse_spreadsheet(entry) for entry in entries]

    def get_worksheets(self, url: str) -> list[WorksheetEntry] | None:
        entries = self._entries(url)
        if entries is None:
            return None
        return [self._parse_worksheet(entry) for entry in entries]

    def get_rows(self, url: str) -> list[Row] | None:
        entries = self._entries(url)
        if entries is None:
            return None
        return [self._parse_row(entry) for entry in entries]

    # =========================================================================
    # Mutations
    # =========================================================================

    def insert_worksheet(
        self,
        url: str,
        title: str,
        col_count: int,
        row_count: int,
    ) -> WorksheetEntry:
        body = {
            "entry": {
                "title": {"$t": title},
                "gs$colCount": {"$t": str(col_count)},
                "gs$rowCount": {"$t": str(row_count)},
            }
        }
        data = self._request("POST", url, json=body)
        if data is None:
            return WorksheetEntry(
                title=title, list_feed_url="", col_count=col_count, row_count=row_count
            )
        return self._parse_worksheet(data.get("entry", {}))

    def insert_row(self, url: str, row: Row) -> Row:
        body = {"entry": {f"{CELL_PREFIX}{tag}": {"$t": value} for tag, value in row.cells.items()}}
        data = self._request("POST", url, json=body)
        if data is None:
            return row
        return self._parse_row(data.get("entry", {}))

    def delete(self, entry: WorksheetEntry | Row) -> None:
        if not entry.edit_url:
            raise ServiceError("Entry has no edit link and cannot be deleted")
        self._request("DELETE", entry.edit_url, headers={"If-Match": "*"})

    # =========================================================================
    # Parsing
    # =========================================================================

    def _parse_spreadsheet(self, data: dict[str, Any]) -> SpreadsheetEntry:
        """Parse a spreadsheets feed entry."""
        entry_id = _text(data.get("id"))
        return SpreadsheetEntry(
            title=_text(data.get("title")),
            worksheet_feed_url=_link(data, REL_WORKSHEETS_FEED) or "",
            key=entry_id.rsplit("/", 1)[-1] if entry_id else None,
        )

    def _parse_worksheet(self, data: dict[str, Any]) -> WorksheetEntry:
        """Parse a worksheets feed entry."""
        return WorksheetEntry(
            title=_text(data.get("title")),
            list_feed_url=_link(data, REL_LIST_FEED) or "",
            edit_url=_link(data, REL_EDIT),
            col_count=_int(data.get("gs$colCount")),
            row_count=_int(data.get("gs$rowCount")),
        )

    def _parse_row(self, data: dict[str, Any]) -> Row:
        """Parse a list feed entry, keeping cell order."""
        cells = {
            name[len(CELL_PREFIX) :]: _text(value)
            for name, value in data.items()
            if name.startswith(CELL_PREFIX)
        }
        return Row(cells=cells, edit_url=_link(data, REL_EDIT))

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
