"""Tests for feed URL construction."""

import pytest

from feedsheets.exceptions import InvalidUrlError
from feedsheets.feeds.urls import Projection, Visibility, build_feed_url


class TestBuildFeedUrl:
    """Test feed URL composition."""

    def test_with_key(self):
        url = build_feed_url("https://x/feeds/worksheets", "K1", "private", "full")
        assert url == "https://x/feeds/worksheets/K1/private/full"

    def test_without_key(self):
        """Should leave the key segment out entirely."""
        url = build_feed_url("https://x/feeds/worksheets", None, "private", "full")
        assert url == "https://x/feeds/worksheets/private/full"

    def test_empty_key_omitted(self):
        url = build_feed_url("https://x/feeds/spreadsheets", "", "public", "basic")
        assert url == "https://x/feeds/spreadsheets/public/basic"

    def test_accepts_enums(self):
        url = build_feed_url("https://x/feeds/list", "K1", Visibility.PUBLIC, Projection.BASIC)
        assert url == "https://x/feeds/list/K1/public/basic"

    @pytest.mark.parametrize("scope", ["not a url", "/feeds/worksheets", "https://"])
    def test_malformed_url_raises(self, scope):
        with pytest.raises(InvalidUrlError) as exc_info:
            build_feed_url(scope, "K1", "private", "full")
        assert exc_info.value.url.endswith("K1/private/full")

    def test_invalid_url_error_is_value_error(self):
        with pytest.raises(ValueError):
            build_feed_url("nope", None, "private", "full")


class TestEnums:
    """Test visibility and projection lookups."""

    def test_from_value(self):
        assert Visibility.from_value("public") is Visibility.PUBLIC
        assert Projection.from_value("basic") is Projection.BASIC

    def test_unknown_projection_raises(self):
        with pytest.raises(ValueError, match="Unknown projection"):
            Projection.from_value("partial")
