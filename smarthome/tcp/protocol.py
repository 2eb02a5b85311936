"""Commands understood by a networked smart socket and their wire encoding."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_ADDRESS = "127.0.0.1:55331"
UNKNOWN_COMMAND = "unknown command"


class Command(Enum):
    """What a client can ask a smart socket to do."""

    SMART_SOCKET_ON = "on"
    SMART_SOCKET_OFF = "off"
    SMART_SOCKET_INFO = "info"


@dataclass(frozen=True)
class Request:
    """A request carrying one command."""

    command: Command


@dataclass(frozen=True)
class Response:
    """A textual response from the socket."""

    text: str


def encode_request(request: Request) -> str:
    """Turn a request into its wire form."""
    return request.command.value


def decode_request(request: str) -> Request | None:
    """Parse a wire request; None if the command is unknown."""
    try:
        return Request(Command(request))
    except ValueError:
        return None


def encode_response(response: Response) -> str:
    """Turn a response into its wire form."""
    return response.text


def decode_response(response: str) -> Response:
    """Wrap a wire response."""
    return Response(response)