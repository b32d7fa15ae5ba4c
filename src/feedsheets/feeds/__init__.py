"""Spreadsheet feed service seam and feed URL helpers."""

from feedsheets.feeds.base import BaseFeedService
from feedsheets.feeds.http import HttpFeedService
from feedsheets.feeds.models import Credentials, Row, SpreadsheetEntry, WorksheetEntry
from feedsheets.feeds.urls import Projection, Visibility, build_feed_url

__all__ = [
    "BaseFeedService",
    "HttpFeedService",
    "Credentials",
    "Row",
    "SpreadsheetEntry",
    "WorksheetEntry",
    "Projection",
    "Visibility",
    "build_feed_url",
]
