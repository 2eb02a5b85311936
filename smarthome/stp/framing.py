"""Length-prefixed string framing: a 4-byte big-endian length, then UTF-8 bytes."""

from __future__ import annotations

import struct
from typing import BinaryIO

from smarthome.stp.errors import BadEncodingError, RecvError, SendError

_LENGTH = struct.Struct(">I")


def _read_exact(reader: BinaryIO, size: int) -> bytes:
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = reader.read(remaining)
        if not chunk:
            raise EOFError("failed to fill whole buffer")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def send_string(data: str, writer: BinaryIO) -> None:
    """Write the byte length of ``data`` as four big-endian bytes, then the data."""
    payload = data.encode("utf-8")
    if len(payload) > 0xFFFFFFFF:
        raise SendError(ValueError("message too long"))
    try:
        writer.write(_LENGTH.pack(len(payload)))
        writer.write(payload)
        writer.flush()
    except OSError as error:
        raise SendError(error) from error


def recv_string(reader: BinaryIO) -> str:
    """Read a four-byte length, then that many bytes, and decode them as UTF-8."""
    try:
        (length,) = _LENGTH.unpack(_read_exact(reader, _LENGTH.size))
        payload = _read_exact(reader, length)
    except (OSError, EOFError) as error:
        raise RecvError(error) from error
    try:
        return payload.decode("utf-8")
    except UnicodeDecodeError as error:
        raise BadEncodingError() from error