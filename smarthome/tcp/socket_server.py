"""A smart socket that serves commands over STP."""

from __future__ import annotations

import argparse
import sys

from smarthome.devices import SmartSocket
from smarthome.stp.errors import ConnectError, StpError
from smarthome.stp.sync import Address, StpServer
from smarthome.tcp.protocol import (
    DEFAULT_ADDRESS,
    UNKNOWN_COMMAND,
    Command,
    Request,
    Response,
    decode_request,
    encode_response,
)


class TcpSmartSocket:
    """A smart socket controlled by clients over the network."""

    def __init__(
        self, name: str, description: str, is_on: bool, current_power: float
    ) -> None:
        self.socket = SmartSocket(name, description, is_on, current_power)
        self.bound_address: tuple[str, int] | None = None

    def handle(self, request: Request) -> Response:
        """Apply the command and describe the socket's resulting state."""
        if request.command is Command.SMART_SOCKET_ON:
            self.socket.turn_on()
        elif request.command is Command.SMART_SOCKET_OFF:
            self.socket.turn_off()
        return Response(str(self.socket))

    def _answer(self, raw_request: str) -> str:
        request = decode_request(raw_request)
        if request is None:
            return UNKNOWN_COMMAND
        return encode_response(self.handle(request))

    def serve(self, address: Address) -> None:
        """Accept clients forever, answering one request per connection.

        Failed handshakes are skipped; a failure while exchanging a request
        is raised.
        """
        with StpServer(address) as server:
            self.bound_address = server.address
            print(f'Tcp smart socket "{self.socket.name}" works at {address}')
            while True:
                try:
                    connection = server.accept()
                except ConnectError:
                    continue
                with connection:
                    connection.process_request(self._answer)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run a smart socket served over TCP.")
    parser.add_argument("--address", default=DEFAULT_ADDRESS)
    args = parser.parse_args(argv)
    device = TcpSmartSocket(
        "Smarty electric",
        "this is smart socket works by tcp protocol",
        False,
        220.0,
    )
    try:
        device.serve(args.address)
    except KeyboardInterrupt:
        return 0
    except (OSError, StpError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0