"""Shared fixtures: a threaded fake userdb service on a temporary Unix socket."""

import contextlib
import shutil
import socket
import socketserver
import tempfile
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from mb_userdb.config import Config


def frame(payload: str) -> bytes:
    """Terminate a JSON payload with the 0x00 frame delimiter."""
    return payload.encode() + b"\x00"


class FakeUserdbd:
    """Scripted identity service: records each request and replays ``response`` bytes."""

    def __init__(self, sock_path: Path) -> None:
        """Bind the listener; call start() to serve."""
        self.sock_path = sock_path
        self.response = b""
        self.requests: list[bytes] = []
        self.hang = False  # if set, hold the connection open without replying
        self.received = threading.Event()  # set once a request has been read
        self.client_closed = threading.Event()  # set once the client hung up after the reply
        self.release = threading.Event()
        self._server = _Server(str(sock_path), _Handler)
        self._server.fake = self
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    def start(self) -> None:
        """Start serving in a background thread."""
        self._thread.start()

    def stop(self) -> None:
        """Stop serving and release any hung connection."""
        self.release.set()
        self._server.shutdown()
        self._server.server_close()


class _Server(socketserver.ThreadingUnixStreamServer):
    daemon_threads = True
    fake: FakeUserdbd


class _Handler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        fake: FakeUserdbd = self.server.fake  # type: ignore[attr-defined]
        conn: socket.socket = self.request
        buf = b""
        while not buf.endswith(b"\x00"):
            chunk = conn.recv(4096)
            if not chunk:
                return
            buf += chunk
        fake.requests.append(buf)
        fake.received.set()
        if fake.hang:
            fake.release.wait(10)
            return
        with contextlib.suppress(OSError):
            conn.sendall(fake.response)
            conn.shutdown(socket.SHUT_WR)
        conn.settimeout(5)
        try:
            conn.recv(1)
        except ConnectionResetError:
            pass  # client closed with reply bytes still unread
        except TimeoutError:
            return
        fake.client_closed.set()


@pytest.fixture
def sock_dir() -> Iterator[Path]:
    """Short temporary directory for Unix sockets (AF_UNIX paths are length-limited)."""
    path = Path(tempfile.mkdtemp(prefix="userdb-"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def userdbd(sock_dir: Path) -> Iterator[FakeUserdbd]:
    """Running fake identity service."""
    fake = FakeUserdbd(sock_dir / "io.systemd.NameServiceSwitch")
    fake.start()
    yield fake
    fake.stop()


@pytest.fixture
def cfg(userdbd: FakeUserdbd) -> Config:
    """Config pointing at the fake identity service."""
    return Config(socket_path=userdbd.sock_path, timeout=5.0)
