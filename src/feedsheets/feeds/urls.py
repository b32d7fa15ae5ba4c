"""Feed URL construction.

Feed endpoints follow the layout::

    <scope>/[<key>/]<visibility>/<projection>

e.g. ``https://spreadsheets.google.com/feeds/worksheets/<key>/private/full``.
"""

from __future__ import annotations

from enum import Enum
from urllib.parse import urlsplit

from feedsheets.exceptions import InvalidUrlError

URL_PATH_SEPARATOR = "/"


class Visibility(str, Enum):
    """Access level of a feed."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def from_value(cls, value: str) -> Visibility:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown visibility: {value}. Use one of: {[m.value for m in cls]}")


class Projection(str, Enum):
    """Level of detail returned by a feed."""

    FULL = "full"
    BASIC = "basic"

    @classmethod
    def from_value(cls, value: str) -> Projection:
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Unknown projection: {value}. Use one of: {[m.value for m in cls]}")


def _part(value: str | Enum) -> str:
    return value.value if isinstance(value, Enum) else value


def build_feed_url(
    scope: str,
    key: str | None,
    visibility: Visibility | str,
    projection: Projection | str,
) -> str:
    """Build a feed URL from its parts.

    Args:
        scope: Feed scope, e.g. "https://spreadsheets.google.com/feeds/worksheets".
        key: Spreadsheet key. Omitted from the path when None or empty.
        visibility: Feed visibility ("public" or "private").
        projection: Feed projection ("full" or "basic").

    Returns:
        The feed URL.

    Raises:
        InvalidUrlError: If the result is not an absolute URL.
    """
    parts = [scope]
    if key:
        parts.append(key)
    parts.append(_part(visibility))
    parts.append(_part(projection))

    url = URL_PATH_SEPARATOR.join(parts)

    try:
        split = urlsplit(url)
    except ValueError as e:
        raise InvalidUrlError(url) from e

    if not split.scheme or not split.netloc:
        raise InvalidUrlError(url)

    return url
