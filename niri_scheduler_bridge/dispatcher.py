"""
Event dispatcher: the bridge's only long-lived control path.

Pulls niri events one at a time, keeps the window cache in step with the last
WindowsChanged snapshot, and forwards the pid of each newly focused window to
the scheduler. Single-threaded and blocking; events are handled strictly in
arrival order.
"""

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Protocol

from .errors import SchedulerError
from .event_source import EVENT_STREAM_REQUEST
from .models import NiriEvent, Reply, WindowFocusChanged, WindowsChanged
from .scheduler import SchedulerNotifier
from .window_cache import WindowStateCache

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Request/reply call plus a single-pass event sequence."""

    def request(self, request: object) -> Reply:
        ...

    def read_events(self) -> Iterable[NiriEvent]:
        ...


@dataclass
class DispatchStats:
    """Counters for one streaming session."""
    events_processed: int = 0
    snapshots: int = 0
    focus_changes: int = 0
    notifications_sent: int = 0
    notification_failures: int = 0
    ignored_events: int = 0


class EventDispatcher:
    """Routes niri events to the window cache and the scheduler."""

    def __init__(self, source: EventSource, notifier: SchedulerNotifier):
        """Initialize dispatcher.

        Args:
            source: Connected niri event source
            notifier: Scheduler to receive foreground-process hints
        """
        self.source = source
        self.notifier = notifier
        self._cache = WindowStateCache()
        self._stats = DispatchStats()

    @property
    def stats(self) -> DispatchStats:
        """Copy of the counters collected so far."""
        return replace(self._stats)

    def subscribe(self) -> bool:
        """Ask niri to start streaming events.

        A reply other than Ok(Handled) is logged and ignored: the stream may
        still work, or may just yield nothing.

        Returns:
            True if niri handled the request

        Raises:
            EventSourceError: If the request could not be sent at all
        """
        reply = self.source.request(EVENT_STREAM_REQUEST)
        if not reply.is_handled:
            logger.error(f"niri didn't handle event stream request: {reply!r}")
            return False
        logger.info("Subscribed to niri event stream")
        return True

    def run(self) -> DispatchStats:
        """Process events until the stream ends.

        Returns:
            Final counters
        """
        for event in self.source.read_events():
            self.handle_event(event)

        stats = self.stats
        logger.info(
            f"Event stream ended: {stats.events_processed} events, "
            f"{stats.notifications_sent} notifications, "
            f"{stats.notification_failures} failures"
        )
        return stats

    def handle_event(self, event: NiriEvent) -> None:
        """Apply one event."""
        self._stats.events_processed += 1

        if isinstance(event, WindowsChanged):
            self._stats.snapshots += 1
            self._cache.replace(event.windows)
        elif isinstance(event, WindowFocusChanged):
            self._stats.focus_changes += 1
            self._on_focus_changed(event.id)
        else:
            self._stats.ignored_events += 1
            logger.debug(f"Ignoring event: {event!r}")

    def _on_focus_changed(self, window_id: Optional[int]) -> None:
        # Focus cleared: the scheduler keeps the last foreground process
        if window_id is None:
            logger.debug("Focus cleared, leaving scheduler foreground unchanged")
            return

        window = self._cache.lookup(window_id)
        if window is None:
            logger.debug(f"Focused window {window_id} not in window cache")
            return
        if window.pid is None:
            logger.debug(f"Focused window {window_id} has no pid")
            return

        try:
            self.notifier.set_foreground_process(window.pid)
        except SchedulerError as e:
            self._stats.notification_failures += 1
            logger.error(f"Failed to set foreground process PID: {e}")
            return

        self._stats.notifications_sent += 1
        logger.info(
            f"Set window {window.title!r} with PID {window.pid} as the foreground process"
        )
