"""Errors raised while connecting and exchanging messages over STP."""

from __future__ import annotations


class StpError(Exception):
    """Base class for every STP error.

    ``source`` holds the lower-level error that caused this one, if any.
    """

    def __init__(self, message: str, source: BaseException | None = None) -> None:
        super().__init__(message)
        self.source = source


class ConnectError(StpError):
    """The connection could not be established because of an I/O failure."""

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"IO error: {source}", source)


class BadHandshakeError(ConnectError):
    """The peer did not answer the handshake as an STP peer should."""

    def __init__(self) -> None:
        StpError.__init__(self, "bad handshake")


class SendError(StpError):
    """A message could not be sent."""

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"IO error: {source}", source)


class RecvError(StpError):
    """A message could not be received."""

    def __init__(self, source: BaseException) -> None:
        super().__init__(f"IO error: {source}", source)


class BadEncodingError(RecvError):
    """The received message is not valid UTF-8."""

    def __init__(self) -> None:
        StpError.__init__(self, "bad encoding")


class RequestError(StpError):
    """A request/response exchange failed while sending or receiving."""

    def __init__(self, source: SendError | RecvError) -> None:
        prefix = "send error" if isinstance(source, SendError) else "recv error"
        super().__init__(f"{prefix}: {source}", source)