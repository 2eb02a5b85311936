"""Blocking STP client and server over TCP."""

from __future__ import annotations

import socket
from collections.abc import Callable
from typing import Union

from smarthome.stp.errors import (
    BadHandshakeError,
    ConnectError,
    RecvError,
    RequestError,
    SendError,
)
from smarthome.stp.framing import recv_string, send_string

Address = Union[str, "tuple[str, int]"]

_CLIENT_HELLO = b"clnt"
_SERVER_HELLO = b"serv"


def _resolve(address: Address) -> tuple[str, int]:
    """Accept either ``"host:port"`` or a ``(host, port)`` pair."""
    if isinstance(address, str):
        host, sep, port = address.rpartition(":")
        if not sep:
            raise ValueError(f"address must look like host:port, got {address!r}")
        return host.strip("[]"), int(port)
    host, port = address[0], address[1]
    return host, int(port)


def _read_exact(reader, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            raise EOFError("failed to fill whole buffer")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class _Stream:
    """A connected socket with buffered binary reader and writer."""

    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock
        self._reader = sock.makefile("rb")
        self._writer = sock.makefile("wb")

    def _shutdown(self) -> None:
        for closeable in (self._reader, self._writer, self._sock):
            try:
                closeable.close()
            except OSError:
                pass

    def close(self) -> None:
        self._shutdown()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class StpClient(_Stream):
    """Connects to an STP server and checks that it speaks STP."""

    def __init__(self, address: Address) -> None:
        try:
            sock = socket.create_connection(_resolve(address))
        except OSError as error:
            raise ConnectError(error) from error
        super().__init__(sock)
        try:
            self._handshake()
        except BaseException:
            self.close()
            raise

    def _handshake(self) -> None:
        try:
            self._writer.write(_CLIENT_HELLO)
            self._writer.flush()
            reply = _read_exact(self._reader, len(_SERVER_HELLO))
        except (OSError, EOFError) as error:
            raise ConnectError(error) from error
        if reply != _SERVER_HELLO:
            raise BadHandshakeError()

    def send_request(self, request: str) -> str:
        """Send a request and wait for the server's response."""
        try:
            send_string(request, self._writer)
            return recv_string(self._reader)
        except (SendError, RecvError) as error:
            raise RequestError(error) from error

    def close(self) -> None:
        """Close the connection to the server."""
        self._shutdown()


class StpConnection(_Stream):
    """A handshaken connection with a client; serves its requests."""

    def process_request(self, handler: Callable[[str], str]) -> None:
        """Receive one request, answer it with ``handler(request)``."""
        try:
            request = recv_string(self._reader)
        except RecvError as error:
            raise RequestError(error) from error
        response = handler(request)
        try:
            send_string(response, self._writer)
        except SendError as error:
            raise RequestError(error) from error

    def peer_addr(self) -> tuple[str, int]:
        """Address of the connected client."""
        return self._sock.getpeername()[:2]

    def close(self) -> None:
        """Close the connection to the client."""
        self._shutdown()


class StpServer:
    """Listens for STP clients on a TCP address."""

    def __init__(self, address: Address) -> None:
        self._sock = socket.create_server(_resolve(address))
        self.address: tuple[str, int] = self._sock.getsockname()[:2]

    def accept(self) -> StpConnection:
        """Wait for a client and perform the handshake with it."""
        try:
            sock, _ = self._sock.accept()
        except OSError as error:
            raise ConnectError(error) from error
        connection = StpConnection(sock)
        try:
            self._handshake(connection)
        except BaseException:
            connection.close()
            raise
        return connection

    @staticmethod
    def _handshake(connection: StpConnection) -> None:
        try:
            greeting = _read_exact(connection._reader, len(_CLIENT_HELLO))
        except (OSError, EOFError) as error:
            raise ConnectError(error) from error
        if greeting != _CLIENT_HELLO:
            raise BadHandshakeError()
        try:
            connection._writer.write(_SERVER_HELLO)
            connection._writer.flush()
        except OSError as error:
            raise ConnectError(error) from error

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> StpServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()