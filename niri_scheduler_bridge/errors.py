"""
Error types for the niri scheduler bridge.

Startup failures (niri socket, system bus, scheduler proxy) are fatal and abort
the daemon. Per-event scheduler failures are logged by the dispatcher and the
loop keeps going.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(Enum):
    """
    Error codes for the niri scheduler bridge.

    - 1400-1499: niri IPC errors
    - 1600-1699: Scheduler / D-Bus errors
    """

    # niri IPC errors (1400-1499)
    NIRI_SOCKET_NOT_SET = 1400
    NIRI_CONNECT_FAILED = 1401
    NIRI_REQUEST_FAILED = 1402
    NIRI_STREAM_CONSUMED = 1403

    # Scheduler errors (1600-1699)
    BUS_CONNECT_FAILED = 1600
    PROXY_FAILED = 1601
    CALL_FAILED = 1602
    INVALID_PID = 1603


class BridgeError(Exception):
    """Base exception for bridge errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize bridge error.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            suggestion: Suggested recovery action
            context: Additional context for debugging
        """
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.context = context or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert error to a dictionary for structured logging.

        Returns:
            Error dictionary with code, message, suggestion, and context
        """
        result = {
            "code": self.code.value,
            "message": self.message
        }

        if self.suggestion:
            result["suggestion"] = self.suggestion

        if self.context:
            result["context"] = self.context

        return result


class EventSourceError(BridgeError):
    """niri IPC communication error."""

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.NIRI_REQUEST_FAILED,
        suggestion: Optional[str] = None
    ):
        """
        Initialize niri IPC error.

        Args:
            operation: IPC operation that failed
            reason: Reason for failure
            code: Specific error code
            suggestion: Recovery suggestion
        """
        super().__init__(
            code=code,
            message=f"niri IPC {operation} failed: {reason}",
            suggestion=suggestion or "Ensure niri is running and NIRI_SOCKET points at its socket",
            context={"operation": operation, "reason": reason}
        )


class SchedulerError(BridgeError):
    """System76 scheduler D-Bus error."""

    def __init__(
        self,
        operation: str,
        reason: str,
        code: ErrorCode = ErrorCode.CALL_FAILED,
        pid: Optional[int] = None
    ):
        context: Dict[str, Any] = {"operation": operation, "reason": reason}
        if pid is not None:
            context["pid"] = pid

        super().__init__(
            code=code,
            message=f"Scheduler {operation} failed: {reason}",
            suggestion="Check that system76-scheduler is running on the system bus",
            context=context
        )
