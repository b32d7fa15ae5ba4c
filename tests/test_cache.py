"""Tests for the worksheet cache."""

from feedsheets.feeds import Row
from feedsheets.spreadsheet import WorksheetCache

ROWS = [Row.from_pairs([("amt", "10")])]


class TestWorksheetCache:
    """Test absent / loaded / tombstoned states."""

    def test_absent(self):
        cache = WorksheetCache()
        assert cache.get("Jan") is None
        assert not cache.is_loaded("Jan")
        assert not cache.is_tombstoned("Jan")
        assert cache.titles() == set()

    def test_put_and_get(self):
        cache = WorksheetCache()
        cache.put("Jan", ROWS)
        assert cache.get("Jan") == ROWS
        assert cache.is_loaded("Jan")
        assert "Jan" in cache
        assert len(cache) == 1

    def test_put_overwrites(self):
        cache = WorksheetCache()
        cache.put("Jan", ROWS)
        cache.put("Jan", [])
        assert cache.get("Jan") == []

    def test_tombstone_differs_from_absent(self):
        cache = WorksheetCache()
        cache.put("Jan", ROWS)
        cache.tombstone("Jan")

        assert cache.get("Jan") is None
        assert not cache.is_loaded("Jan")
        assert cache.is_tombstoned("Jan")
        assert not cache.is_tombstoned("Feb")
        assert "Jan" not in cache

    def test_titles_exclude_tombstones(self):
        cache = WorksheetCache()
        cache.put("Jan", ROWS)
        cache.put("Feb", ROWS)
        cache.tombstone("Feb")
        cache.tombstone("Mar")
        assert cache.titles() == {"Jan"}

    def test_reload_after_tombstone(self):
        cache = WorksheetCache()
        cache.tombstone("Jan")
        cache.put("Jan", ROWS)
        assert cache.is_loaded("Jan")
        assert not cache.is_tombstoned("Jan")

    def test_discard_forgets_loaded_rows(self):
        cache = WorksheetCache()
        cache.put("Jan", ROWS)
        cache.discard("Jan")
        cache.discard("Feb")
        assert not cache.is_loaded("Jan")
        assert not cache.is_tombstoned("Jan")
        assert cache.titles() == set()

    def test_discard_keeps_tombstone(self):
        cache = WorksheetCache()
        cache.tombstone("Jan")
        cache.discard("Jan")
        assert cache.is_tombstoned("Jan")
