"""Local copy of the windows niri currently knows about."""

import logging
from typing import Iterable, List, Optional

from .models import WindowRecord

logger = logging.getLogger(__name__)


class WindowStateCache:
    """Holds the most recent WindowsChanged snapshot.

    There is no incremental update: every snapshot replaces the previous one
    wholesale, so lookups always reflect exactly the last snapshot seen (or
    nothing before the first one arrives). Window counts are small, a linear
    scan is fine.
    """

    def __init__(self) -> None:
        self._windows: List[WindowRecord] = []

    def replace(self, snapshot: Iterable[WindowRecord]) -> None:
        """Discard all entries and store the new snapshot."""
        self._windows = list(snapshot)
        logger.debug(f"Window cache replaced: {len(self._windows)} windows")

    def lookup(self, window_id: int) -> Optional[WindowRecord]:
        """Return the window with the given id from the current snapshot."""
        for window in self._windows:
            if window.id == window_id:
                return window
        return None

    def __len__(self) -> int:
        return len(self._windows)
