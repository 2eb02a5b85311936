"""A thermometer that takes its readings from a datagram stream, and a sender for it."""

from __future__ import annotations

import argparse
import socket
import struct
import sys
import threading
import time
from abc import ABC, abstractmethod

from smarthome.devices import SmartThermometer, _format_float
from smarthome.stp.sync import Address, _resolve

RECEIVER_ADDRESS = "127.0.0.1:55331"
BIND_ADDRESS = "127.0.0.1:55330"

_TEMPERATURE = struct.Struct(">d")


def _encode_temperature(value: float) -> bytes:
    return _TEMPERATURE.pack(value)


def _decode_temperature(data: bytes) -> float:
    """Read a big-endian double; short data is padded with zero bytes."""
    (value,) = _TEMPERATURE.unpack(data[: _TEMPERATURE.size].ljust(_TEMPERATURE.size, b"\0"))
    return value


def _bind_udp(address: Address) -> socket.socket:
    host, port = _resolve(address)
    family, kind, proto, _, sockaddr = socket.getaddrinfo(
        host, port, type=socket.SOCK_DGRAM
    )[0]
    sock = socket.socket(family, kind, proto)
    try:
        sock.bind(sockaddr)
    except BaseException:
        sock.close()
        raise
    return sock


class Streaming(ABC):
    """A source of datagrams carrying temperature readings."""

    @abstractmethod
    def recv_from(self, size: int) -> bytes:
        """Receive one datagram, at most ``size`` bytes of it.

        Raises TimeoutError or BlockingIOError when nothing arrived in time.
        """

    @abstractmethod
    def set_timeout(self, duration: float) -> None:
        """Limit how long ``recv_from`` waits, in seconds."""


class StreamingSmartThermometer:
    """A thermometer updated in the background from a datagram stream."""

    def __init__(self, name: str, description: str, current_temperature: float) -> None:
        self._thermometer = SmartThermometer(name, description, current_temperature)
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._workers: list[tuple[threading.Thread, float]] = []

    @property
    def current_temperature(self) -> float:
        with self._lock:
            return self._thermometer.current_temperature

    def run(self, streaming: Streaming, duration: float) -> None:
        """Start a background thread that applies every reading received."""
        streaming.set_timeout(duration)
        worker = threading.Thread(
            target=self._receive_loop, args=(streaming,), daemon=True
        )
        worker.start()
        self._workers.append((worker, duration))

    def _receive_loop(self, streaming: Streaming) -> None:
        while not self._finished.is_set():
            try:
                data = streaming.recv_from(_TEMPERATURE.size)
            except (BlockingIOError, TimeoutError):
                continue
            except OSError as error:
                print(f"can't receive datagram: {error}")
                continue
            value = _decode_temperature(data)
            with self._lock:
                self._thermometer.set_temperature(value)

    def stop(self) -> None:
        """Ask the background threads to finish and wait for them briefly."""
        self._finished.set()
        for worker, duration in self._workers:
            worker.join(duration)
        self._workers.clear()

    def __enter__(self) -> StreamingSmartThermometer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


class _UdpStreaming(Streaming):
    def __init__(self, sock: socket.socket) -> None:
        self._sock = sock

    def recv_from(self, size: int) -> bytes:
        data, _ = self._sock.recvfrom(size)
        return data

    def set_timeout(self, duration: float) -> None:
        self._sock.settimeout(duration)


class UdpSmartThermometer:
    """A thermometer that listens for readings on a UDP address."""

    def __init__(self, name: str, description: str, current_temperature: float) -> None:
        self._inner = StreamingSmartThermometer(name, description, current_temperature)
        self._socket: socket.socket | None = None
        self.address: tuple[str, int] | None = None

    @property
    def current_temperature(self) -> float:
        return self._inner.current_temperature

    def run(self, address: Address, duration: float) -> None:
        """Bind to ``address`` and start receiving readings in the background."""
        sock = _bind_udp(address)
        sock.setblocking(True)
        self._socket = sock
        self.address = tuple(sock.getsockname()[:2])
        self._inner.run(_UdpStreaming(sock), duration)

    def stop(self) -> None:
        """Stop receiving and release the socket."""
        self._inner.stop()
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> UdpSmartThermometer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


class UdpSmartThermometerClient:
    """Sends temperature readings to a thermometer over UDP."""

    def __init__(self, bind_address: Address, receiver_address: Address) -> None:
        self._receiver = _resolve(receiver_address)
        self._socket = _bind_udp(bind_address)

    def send_temperature(self, value: float) -> None:
        """Send one reading as a big-endian double."""
        self._socket.sendto(_encode_temperature(value), self._receiver)

    def close(self) -> None:
        self._socket.close()

    def __enter__(self) -> UdpSmartThermometerClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run a thermometer that receives readings over UDP."
    )
    parser.add_argument("--address", default=RECEIVER_ADDRESS)
    parser.add_argument("--interval", type=float, default=0.5)
    args = parser.parse_args(argv)
    thermometer = UdpSmartThermometer("test smart thermometer", "test description", 20.2)
    try:
        thermometer.run(args.address, args.interval)
        while True:
            temperature = thermometer.current_temperature
            print(f"current temperature is {_format_float(temperature)}")
            time.sleep(args.interval * 2)
    except KeyboardInterrupt:
        return 0
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    finally:
        thermometer.stop()


def client_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Send a series of temperature readings over UDP."
    )
    parser.add_argument("--bind", default=BIND_ADDRESS)
    parser.add_argument("--receiver", default=RECEIVER_ADDRESS)
    parser.add_argument("--count", type=int, default=300)
    parser.add_argument("--interval", type=float, default=1.0)
    args = parser.parse_args(argv)
    try:
        client = UdpSmartThermometerClient(args.bind, args.receiver)
    except (OSError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    with client:
        temperature = 10.4
        try:
            for step in range(args.count):
                temperature += 0.2 * step
                shown = _format_float(temperature)
                try:
                    client.send_temperature(temperature)
                    print(f"successfully send temperature {shown}")
                except OSError as error:
                    print(f"failure send temperature {shown}, cause of {error}")
                time.sleep(args.interval)
        except KeyboardInterrupt:
            return 0
    return 0