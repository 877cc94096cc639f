"""Synchronous framed transport: one request/reply exchange over a Unix socket."""

import contextlib
import logging
import socket
import threading
from collections.abc import Iterator
from pathlib import Path

from mb_userdb.errors import TransportError
from mb_userdb.varlink.framing import FRAME_DELIMITER, iter_frames

logger = logging.getLogger(__name__)

# Read buffer size
_BUFSIZE = 65536


def _os_error(code: str, action: str, e: OSError) -> TransportError:
    """Map an OSError to a TransportError, keeping timeouts distinguishable."""
    if isinstance(e, TimeoutError):
        return TransportError("timeout", f"Timed out while {action}.")
    return TransportError(code, f"Failed {action}: {e}")


class FramedTransport:
    """Opens a fresh connection per exchange and streams back 0x00-delimited frames."""

    def __init__(self, socket_path: Path, *, timeout: float | None = None) -> None:
        """Initialize the transport.

        Args:
            socket_path: Unix domain socket of the identity service.
            timeout: Per-operation socket timeout in seconds; None blocks indefinitely.

        """
        self._socket_path = socket_path
        self._timeout = timeout
        self._sock: socket.socket | None = None  # connection of the exchange in flight, for abort()
        self._aborted = threading.Event()

    @contextlib.contextmanager
    def exchange(self, payload: bytes) -> Iterator[Iterator[bytes]]:
        """Send ``payload`` as one frame and yield an iterator over reply frames.

        The connection is closed when the ``with`` block exits, whether the
        frames were exhausted, abandoned early, or an error was raised.

        Raises:
            TransportError: Dial, send, or read failure, timeout, or abort().

        """
        sock = self._connect()
        frames = iter_frames(lambda: self._recv(sock))
        try:
            self._send(sock, payload)
            yield frames
        finally:
            frames.close()
            self._sock = None
            sock.close()

    def abort(self) -> None:
        """Cancel the exchange in flight from another thread.

        A blocked read returns promptly and the exchange raises a
        TransportError with code ``cancelled``. Calling abort() before
        exchange() cancels the next exchange immediately.
        """
        self._aborted.set()
        sock = self._sock
        if sock is not None:
            with contextlib.suppress(OSError):
                sock.shutdown(socket.SHUT_RDWR)

    def _check_aborted(self) -> None:
        if self._aborted.is_set():
            raise TransportError("cancelled", "Exchange was cancelled.")

    def _connect(self) -> socket.socket:
        self._check_aborted()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self._timeout)
        try:
            sock.connect(str(self._socket_path))
        except OSError as e:
            sock.close()
            raise _os_error("connect_failed", f"connecting to {self._socket_path}", e) from e
        self._sock = sock
        if self._aborted.is_set():
            self._sock = None
            sock.close()
            self._check_aborted()
        logger.debug("Connected to %s", self._socket_path)
        return sock

    def _send(self, sock: socket.socket, payload: bytes) -> None:
        try:
            sock.sendall(payload + FRAME_DELIMITER)
        except OSError as e:
            self._check_aborted()
            raise _os_error("send_failed", "sending request", e) from e

    def _recv(self, sock: socket.socket) -> bytes:
        self._check_aborted()
        try:
            chunk = sock.recv(_BUFSIZE)
        except OSError as e:
            self._check_aborted()
            raise _os_error("read_failed", "reading reply", e) from e
        if not chunk:
            # shutdown() from abort() surfaces as end of stream
            self._check_aborted()
        return chunk
