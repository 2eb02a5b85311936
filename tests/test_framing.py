import io

import pytest

from smarthome.stp.errors import BadEncodingError, RecvError, SendError
from smarthome.stp.framing import recv_string, send_string


def test_send_recv():
    data = "hello"
    buf = io.BytesIO()
    send_string(data, buf)
    result = recv_string(io.BytesIO(buf.getvalue()))
    assert result == data


def test_send():
    data = "hello"
    buf = io.BytesIO()
    send_string(data, buf)
    raw = buf.getvalue()
    length = int.from_bytes(raw[:4], "big")
    assert raw[4:].decode("utf-8") == data
    assert length == 5


def test_recv():
    data = "hello"
    raw = (5).to_bytes(4, "big") + data.encode("utf-8")
    assert recv_string(io.BytesIO(raw)) == data


def test_empty_string_round_trip():
    buf = io.BytesIO()
    send_string("", buf)
    assert buf.getvalue() == b"\x00\x00\x00\x00"
    assert recv_string(io.BytesIO(buf.getvalue())) == ""


def test_length_counts_bytes_not_characters():
    data = "Привет"
    buf = io.BytesIO()
    send_string(data, buf)
    raw = buf.getvalue()
    assert int.from_bytes(raw[:4], "big") == len(data.encode("utf-8"))
    assert recv_string(io.BytesIO(raw)) == data


def test_several_messages_in_sequence():
    buf = io.BytesIO()
    messages = ["Hello, server", "Hello, client", "on"]
    for message in messages:
        send_string(message, buf)
    reader = io.BytesIO(buf.getvalue())
    assert [recv_string(reader) for _ in messages] == messages


def test_recv_bad_encoding():
    raw = (2).to_bytes(4, "big") + b"\xff\xfe"
    with pytest.raises(BadEncodingError):
        recv_string(io.BytesIO(raw))


def test_recv_truncated_length():
    with pytest.raises(RecvError) as info:
        recv_string(io.BytesIO(b"\x00\x00"))
    assert isinstance(info.value.source, EOFError)


def test_recv_truncated_payload():
    raw = (5).to_bytes(4, "big") + b"hel"
    with pytest.raises(RecvError) as info:
        recv_string(io.BytesIO(raw))
    assert not isinstance(info.value, BadEncodingError)


class _BrokenWriter:
    def write(self, data):
        raise OSError("broken pipe")

    def flush(self):
        pass


def test_send_io_failure():
    with pytest.raises(SendError) as info:
        send_string("hello", _BrokenWriter())
    assert isinstance(info.value.source, OSError)