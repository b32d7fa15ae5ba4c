"""Spreadsheet feed client with a per-instance worksheet cache.

Usage:
    from feedsheets.feeds import Row
    from feedsheets.spreadsheet import SpreadsheetClient, SpreadsheetRef

    client = SpreadsheetClient(SpreadsheetRef(key="0Ak...", title="Budget"))

    # Load and print a worksheet
    client.load_worksheet("Jan")
    client.print_worksheet("Jan")

    # Append rows
    client.write_to_worksheet("Jan", [Row.from_pairs([("amt", "10")])])

Credentials:
    Set FEEDSHEETS_TOKEN, or FEEDSHEETS_USERNAME and FEEDSHEETS_PASSWORD,
    in the environment or in ./.env.
"""

from __future__ import annotations

from feedsheets.spreadsheet.cache import WorksheetCache
from feedsheets.spreadsheet.client import SpreadsheetClient, SpreadsheetRef, WriteThrottle

__all__ = ["SpreadsheetClient", "SpreadsheetRef", "WorksheetCache", "WriteThrottle"]
