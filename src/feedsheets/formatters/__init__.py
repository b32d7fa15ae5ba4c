"""Row output formatters."""

from __future__ import annotations

from feedsheets.formatters.base import OutputFormatter
from feedsheets.formatters.delimited import (
    PIPE,
    TAB,
    DelimitedFormatter,
    PipeFormatter,
    TabFormatter,
)

# Formatter registry
FORMATTERS: dict[str, type[OutputFormatter]] = {
    "tab": TabFormatter,
    "pipe": PipeFormatter,
}


def get_formatter(name: str) -> OutputFormatter:
    """Create a formatter by registry name."""
    if name not in FORMATTERS:
        raise ValueError(f"Unknown formatter: {name}. Supported formatters: {list(FORMATTERS)}")
    return FORMATTERS[name]()


__all__ = [
    "FORMATTERS",
    "PIPE",
    "TAB",
    "DelimitedFormatter",
    "OutputFormatter",
    "PipeFormatter",
    "TabFormatter",
    "get_formatter",
]
