"""Configuration dataclasses for the niri scheduler bridge.

There is no config file and no command line: the niri socket and the log level
come from the environment the compositor session provides.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class SchedulerEndpoint:
    """D-Bus address of the System76 scheduler service."""
    service: str = "com.system76.Scheduler"
    object_path: str = "/com/system76/Scheduler"
    interface: str = "com.system76.Scheduler"


@dataclass
class BridgeConfig:
    """Complete bridge configuration.

    Loaded from the environment or defaults.
    """

    socket_path: Optional[Path] = None  # $NIRI_SOCKET
    log_level: str = "INFO"             # $LOG_LEVEL
    scheduler: SchedulerEndpoint = field(default_factory=SchedulerEndpoint)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BridgeConfig":
        """Build configuration from environment variables.

        Args:
            environ: Environment mapping (defaults to os.environ)

        Returns:
            BridgeConfig with unknown log levels replaced by INFO
        """
        if environ is None:
            environ = os.environ

        socket = environ.get("NIRI_SOCKET") or None
        log_level = environ.get("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            logging.getLogger(__name__).warning(
                f"Unknown LOG_LEVEL {log_level!r}, using INFO"
            )
            log_level = "INFO"

        return cls(
            socket_path=Path(socket) if socket else None,
            log_level=log_level,
        )
