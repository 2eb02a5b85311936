"""Client for a networked smart socket and a command-line front end."""

from __future__ import annotations

import argparse
import sys

from smarthome.stp.errors import StpError
from smarthome.stp.sync import Address, StpClient
from smarthome.tcp.protocol import DEFAULT_ADDRESS, Command, Request, encode_request

_USAGE_HINT = "use 'on' or 'off' or 'info'"


class TcpSmartSocketClient:
    """Sends commands to a smart socket over STP."""

    def __init__(self, address: Address) -> None:
        self._stp = StpClient(address)

    def _send(self, command: Command) -> str:
        return self._stp.send_request(encode_request(Request(command)))

    def get_info(self) -> str:
        """Ask the socket to describe itself."""
        return self._send(Command.SMART_SOCKET_INFO)

    def turn_on(self) -> str:
        """Switch the socket on; returns its new description."""
        return self._send(Command.SMART_SOCKET_ON)

    def turn_off(self) -> str:
        """Switch the socket off; returns its new description."""
        return self._send(Command.SMART_SOCKET_OFF)

    def close(self) -> None:
        self._stp.close()

    def __enter__(self) -> TcpSmartSocketClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


_ACTIONS = {
    "on": TcpSmartSocketClient.turn_on,
    "off": TcpSmartSocketClient.turn_off,
    "info": TcpSmartSocketClient.get_info,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Control a smart socket over TCP.")
    parser.add_argument("action", nargs="?", help=_USAGE_HINT)
    parser.add_argument("--address", default=DEFAULT_ADDRESS)
    args = parser.parse_args(argv)

    if args.action is None:
        print(f"No action provided, {_USAGE_HINT}", file=sys.stderr)
        return 1

    print(f"Performing action: '{args.action}'...")
    try:
        with TcpSmartSocketClient(args.address) as client:
            action = _ACTIONS.get(args.action)
            if action is None:
                print(f"Unknown action, {_USAGE_HINT}")
            else:
                print(action(client))
    except StpError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0