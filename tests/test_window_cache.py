"""Unit tests for the window state cache."""

from niri_scheduler_bridge.models import WindowRecord
from niri_scheduler_bridge.window_cache import WindowStateCache


def windows(*ids):
    return [WindowRecord(id=i, pid=i * 100) for i in ids]


class TestWindowStateCache:
    """Test snapshot replacement and lookup."""

    def test_empty_before_first_snapshot(self):
        cache = WindowStateCache()
        assert len(cache) == 0
        assert cache.lookup(1) is None

    def test_lookup_every_window_in_snapshot(self):
        cache = WindowStateCache()
        snapshot = windows(1, 2, 3)
        cache.replace(snapshot)

        for window in snapshot:
            assert cache.lookup(window.id) == window
        assert cache.lookup(4) is None

    def test_replace_is_total_not_additive(self):
        """Windows missing from the new snapshot are gone."""
        cache = WindowStateCache()
        cache.replace(windows(1, 2))
        cache.replace(windows(3))

        assert cache.lookup(1) is None
        assert cache.lookup(2) is None
        assert cache.lookup(3).pid == 300
        assert len(cache) == 1

    def test_replace_with_empty_snapshot(self):
        cache = WindowStateCache()
        cache.replace(windows(1))
        cache.replace([])
        assert cache.lookup(1) is None
        assert len(cache) == 0

    def test_newer_record_wins_for_same_id(self):
        """Lookups reflect the latest snapshot, never older data."""
        cache = WindowStateCache()
        cache.replace([WindowRecord(id=5, title="old", pid=1)])
        cache.replace([WindowRecord(id=5, title="new", pid=2)])

        window = cache.lookup(5)
        assert window.title == "new"
        assert window.pid == 2

    def test_snapshot_copied(self):
        """Mutating the caller's list does not change the cache."""
        cache = WindowStateCache()
        snapshot = windows(1)
        cache.replace(snapshot)
        snapshot.append(WindowRecord(id=2, pid=200))

        assert cache.lookup(2) is None

    def test_accepts_generator(self):
        cache = WindowStateCache()
        cache.replace(w for w in windows(1, 2))
        assert len(cache) == 2
