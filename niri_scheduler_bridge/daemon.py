"""
niri scheduler bridge daemon.

Connects to niri and to com.system76.Scheduler, subscribes to the niri event
stream and hands every event to the EventDispatcher until niri closes the
connection.

    connecting -> streaming -> terminated

Any failure while connecting is fatal (exit 1). The stream ending is a clean
exit (0).
"""
# Module can be run with: python -m niri_scheduler_bridge

import logging
import sys
from typing import Mapping, Optional

try:
    from systemd import journal
    SYSTEMD_AVAILABLE = True
except ImportError:
    SYSTEMD_AVAILABLE = False

from .config import BridgeConfig
from .dispatcher import EventDispatcher
from .errors import BridgeError
from .event_source import NiriEventSource
from .models import BridgeState
from .scheduler import System76SchedulerClient

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    """Setup logging to systemd journal or stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    if SYSTEMD_AVAILABLE:
        handler = journal.JournalHandler(SYSLOG_IDENTIFIER="niri-scheduler-bridge")
    else:
        handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        "%(levelname)s [%(name)s] %(message)s"
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logger.debug(f"Logging configured: level={log_level}")


class SchedulerBridge:
    """Owns the connections and drives the bridge state machine."""

    def __init__(self, config: BridgeConfig):
        self.config = config
        self.state = BridgeState.CONNECTING
        self.source: Optional[NiriEventSource] = None
        self.notifier: Optional[System76SchedulerClient] = None

    def _set_state(self, state: BridgeState) -> None:
        logger.info(f"State: {self.state.value} -> {state.value}")
        self.state = state

    def connect(self) -> None:
        """Connect to niri and the scheduler, then subscribe.

        Raises:
            BridgeError: On any connection failure
        """
        self.source = NiriEventSource.connect(self.config.socket_path)
        try:
            self.notifier = System76SchedulerClient.connect(self.config.scheduler)
        except BridgeError:
            self.source.close()
            raise

    def run(self) -> None:
        """Subscribe and stream until niri closes the connection."""
        dispatcher = EventDispatcher(self.source, self.notifier)
        with self.source:
            dispatcher.subscribe()
            self._set_state(BridgeState.STREAMING)
            dispatcher.run()
        self._set_state(BridgeState.TERMINATED)


def main(environ: Optional[Mapping[str, str]] = None) -> int:
    """Daemon entry point.

    Returns:
        Exit code (0 = stream ended, 1 = startup failure)
    """
    config = BridgeConfig.from_env(environ)
    setup_logging(config.log_level)

    bridge = SchedulerBridge(config)
    try:
        bridge.connect()
        bridge.run()
    except BridgeError as e:
        if bridge.state is not BridgeState.CONNECTING:
            raise
        logger.error(f"Fatal error: {e.message}")
        if e.suggestion:
            logger.error(f"  Suggestion: {e.suggestion}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
