"""Separator-based formatters."""

from __future__ import annotations

from feedsheets.formatters.base import OutputFormatter

TAB = "\t"
PIPE = "|"


class DelimitedFormatter(OutputFormatter):
    """Formatter with a caller-chosen separator."""


class TabFormatter(OutputFormatter):
    """Tab-separated output."""

    name = "tab"

    def __init__(self):
        super().__init__(TAB)


class PipeFormatter(OutputFormatter):
    """Pipe-separated output."""

    name = "pipe"

    def __init__(self):
        super().__init__(PIPE)
