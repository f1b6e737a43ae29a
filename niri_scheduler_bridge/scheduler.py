"""System76 scheduler client over the system D-Bus.

The dispatcher only needs one capability, SchedulerNotifier, so the D-Bus
transport stays behind System76SchedulerClient.

Example:
    >>> client = System76SchedulerClient.connect(SchedulerEndpoint())
    >>> client.set_foreground_process(1234)
"""

import logging
from typing import Any, Optional, Protocol

from .config import SchedulerEndpoint
from .errors import ErrorCode, SchedulerError

logger = logging.getLogger(__name__)

PID_MAX = 2**32 - 1  # SetForegroundProcess takes a D-Bus uint32


class SchedulerNotifier(Protocol):
    """Anything that can tell the scheduler which process is in the foreground."""

    def set_foreground_process(self, pid: int) -> None:
        """Raise SchedulerError if the hint could not be delivered."""
        ...


class System76SchedulerClient:
    """Blocking pydbus proxy for com.system76.Scheduler."""

    def __init__(self, proxy: Any, endpoint: SchedulerEndpoint):
        """Initialize client.

        Args:
            proxy: pydbus interface proxy exposing SetForegroundProcess
            endpoint: Endpoint the proxy was created for
        """
        self._proxy = proxy
        self.endpoint = endpoint

    @classmethod
    def connect(
        cls,
        endpoint: SchedulerEndpoint,
        bus: Optional[Any] = None,
    ) -> "System76SchedulerClient":
        """Connect to the system bus and build the scheduler proxy.

        Args:
            endpoint: Service name, object path and interface
            bus: Existing pydbus bus (defaults to a new SystemBus)

        Returns:
            Connected client

        Raises:
            SchedulerError: If the bus or the proxy cannot be obtained
        """
        if bus is None:
            try:
                # pydbus needs GObject introspection at import time
                from pydbus import SystemBus

                bus = SystemBus()
            except Exception as e:
                raise SchedulerError(
                    "bus connect", str(e), code=ErrorCode.BUS_CONNECT_FAILED
                ) from e

        try:
            proxy = bus.get(endpoint.service, endpoint.object_path)[endpoint.interface]
        except Exception as e:
            raise SchedulerError(
                "proxy", f"{endpoint.service} {endpoint.object_path}: {e}",
                code=ErrorCode.PROXY_FAILED
            ) from e

        logger.info(f"Connected to {endpoint.service} on the system bus")
        return cls(proxy, endpoint)

    def set_foreground_process(self, pid: int) -> None:
        """Call SetForegroundProcess(pid).

        Raises:
            SchedulerError: If pid does not fit a uint32 or the call fails
        """
        if not 0 <= pid <= PID_MAX:
            raise SchedulerError(
                "SetForegroundProcess", f"pid {pid} out of uint32 range",
                code=ErrorCode.INVALID_PID, pid=pid
            )

        try:
            self._proxy.SetForegroundProcess(pid)
        except Exception as e:
            raise SchedulerError("SetForegroundProcess", str(e), pid=pid) from e
