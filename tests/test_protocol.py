import pytest

from smarthome.tcp.protocol import (
    Command,
    Request,
    Response,
    decode_request,
    decode_response,
    encode_request,
    encode_response,
)


@pytest.mark.parametrize(
    "command, wire",
    [
        (Command.SMART_SOCKET_ON, "on"),
        (Command.SMART_SOCKET_OFF, "off"),
        (Command.SMART_SOCKET_INFO, "info"),
    ],
)
def test_encode_request_wire_form(command, wire):
    assert encode_request(Request(command)) == wire


@pytest.mark.parametrize("command", list(Command))
def test_request_round_trip(command):
    request = Request(command)
    assert decode_request(encode_request(request)) == request


@pytest.mark.parametrize("wire", ["", "ON", "toggle", "on ", "information"])
def test_decode_unknown_request(wire):
    assert decode_request(wire) is None


def test_response_round_trip():
    text = "Name: x\nDescription: y"
    assert encode_response(decode_response(text)) == text
    assert decode_response(text) == Response(text)