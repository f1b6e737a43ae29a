"""Synchronous client for the niri IPC socket.

niri speaks newline-delimited JSON over a Unix socket: one request per line,
one reply line, and after an EventStream request an endless sequence of event
lines until the connection closes.

Usage:
    with NiriEventSource.connect(path) as source:
        reply = source.request("EventStream")
        for event in source.read_events():
            ...
"""

import json
import logging
import socket
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional

from .errors import ErrorCode, EventSourceError
from .models import NiriEvent, Reply, parse_event

logger = logging.getLogger(__name__)

EVENT_STREAM_REQUEST = "EventStream"


class NiriEventSource:
    """niri IPC connection producing a single-pass event sequence."""

    def __init__(self, sock: socket.socket):
        """Wrap an already connected socket.

        Args:
            sock: Connected stream socket to niri
        """
        self._sock = sock
        # Reply and events share one buffered reader so no bytes are dropped
        self._reader: BinaryIO = sock.makefile("rb")
        self._streaming = False
        self._closed = False

    @classmethod
    def connect(cls, socket_path: Optional[Path]) -> "NiriEventSource":
        """Connect to the niri socket.

        Args:
            socket_path: Path to the niri socket ($NIRI_SOCKET)

        Returns:
            Connected event source

        Raises:
            EventSourceError: If the path is unset or the connection fails
        """
        if socket_path is None:
            raise EventSourceError(
                "connect",
                "NIRI_SOCKET is not set",
                code=ErrorCode.NIRI_SOCKET_NOT_SET,
                suggestion="Run the bridge inside a niri session",
            )

        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(str(socket_path))
        except OSError as e:
            sock.close()
            raise EventSourceError(
                "connect", f"{socket_path}: {e}", code=ErrorCode.NIRI_CONNECT_FAILED
            ) from e

        logger.info(f"Connected to niri IPC at {socket_path}")
        return cls(sock)

    def request(self, request: Any) -> Reply:
        """Send one request and read its reply line.

        Args:
            request: JSON-serializable niri request (e.g. "EventStream")

        Returns:
            Decoded Reply

        Raises:
            EventSourceError: If the request cannot be sent or no reply arrives
        """
        try:
            self._sock.sendall(json.dumps(request).encode("utf-8") + b"\n")
            line = self._reader.readline()
        except OSError as e:
            raise EventSourceError("request", str(e)) from e

        if not line:
            raise EventSourceError("request", "connection closed before reply")

        try:
            message = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise EventSourceError("request", f"invalid reply: {e}") from e

        return Reply.from_message(message)

    def read_events(self) -> Iterator[NiriEvent]:
        """Return the lazy event sequence for this connection.

        The sequence ends, without raising, on EOF, a socket error, or a line
        that cannot be decoded. It can only be taken once per connection.

        Raises:
            EventSourceError: If the stream was already taken
        """
        if self._streaming:
            raise EventSourceError(
                "read_events",
                "event stream already consumed",
                code=ErrorCode.NIRI_STREAM_CONSUMED,
                suggestion="Open a new connection to resume streaming",
            )
        self._streaming = True
        return self._iter_events()

    def _iter_events(self) -> Iterator[NiriEvent]:
        try:
            while True:
                try:
                    line = self._reader.readline()
                except OSError as e:
                    logger.warning(f"niri event stream read failed: {e}")
                    return

                if not line:
                    logger.info("niri event stream closed")
                    return

                # UnicodeDecodeError, JSONDecodeError and pydantic errors are ValueErrors
                try:
                    event = parse_event(json.loads(line.decode("utf-8")))
                except ValueError as e:
                    logger.warning(f"Undecodable niri event, ending stream: {e}")
                    return

                yield event
        finally:
            self.close()

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._reader.close()
        self._sock.close()

    def __enter__(self) -> "NiriEventSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
