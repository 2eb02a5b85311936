"""Asynchronous thermometer fed by datagrams, and an asynchronous sender for it."""

from __future__ import annotations

import argparse
import asyncio
import sys
from abc import ABC, abstractmethod

from smarthome.devices import SmartThermometer, _format_float
from smarthome.stp.sync import Address, _resolve
from smarthome.udp.thermometer import (
    BIND_ADDRESS,
    RECEIVER_ADDRESS,
    _decode_temperature,
    _encode_temperature,
)

_READING_SIZE = 8


class AsyncStreaming(ABC):
    """An asynchronous source of datagrams carrying temperature readings."""

    @abstractmethod
    async def recv_from(self, size: int) -> bytes:
        """Receive one datagram, at most ``size`` bytes of it."""


class AsyncStreamingSmartThermometer:
    """A thermometer updated by a background task from a datagram stream."""

    def __init__(self, name: str, description: str, current_temperature: float) -> None:
        self._thermometer = SmartThermometer(name, description, current_temperature)
        self._lock = asyncio.Lock()
        self._finished = False
        self._tasks: set[asyncio.Task[None]] = set()

    async def current_temperature(self) -> float:
        async with self._lock:
            return self._thermometer.current_temperature

    async def run(self, streaming: AsyncStreaming, duration: float) -> None:
        """Start a task that waits ``duration`` seconds before each reading."""
        task = asyncio.create_task(self._receive_loop(streaming, duration))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _receive_loop(self, streaming: AsyncStreaming, duration: float) -> None:
        while not self._finished:
            await asyncio.sleep(duration)
            try:
                data = await streaming.recv_from(_READING_SIZE)
            except BlockingIOError:
                continue
            except OSError as error:
                print(f"can't receive datagram: {error}")
                continue
            value = _decode_temperature(data)
            async with self._lock:
                self._thermometer.set_temperature(value)

    async def stop(self) -> None:
        """Stop the background tasks and wait until they are gone."""
        self._finished = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> AsyncStreamingSmartThermometer:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


class _DatagramQueue(asyncio.DatagramProtocol):
    def __init__(self) -> None:
        self.items: asyncio.Queue[bytes | Exception] = asyncio.Queue()

    def datagram_received(self, data: bytes, addr) -> None:
        self.items.put_nowait(data)

    def error_received(self, exc: Exception) -> None:
        self.items.put_nowait(exc)


class _UdpStreaming(AsyncStreaming):
    def __init__(self, protocol: _DatagramQueue) -> None:
        self._protocol = protocol

    async def recv_from(self, size: int) -> bytes:
        item = await self._protocol.items.get()
        if isinstance(item, Exception):
            raise item
        return item[:size]


class AsyncUdpSmartThermometer:
    """A thermometer that listens for readings on a UDP address."""

    def __init__(self, name: str, description: str, current_temperature: float) -> None:
        self._inner = AsyncStreamingSmartThermometer(name, description, current_temperature)
        self._transport: asyncio.DatagramTransport | None = None
        self.address: tuple[str, int] | None = None

    async def current_temperature(self) -> float:
        return await self._inner.current_temperature()

    async def run(self, address: Address, duration: float) -> None:
        """Bind to ``address`` and start receiving readings in the background."""
        loop = asyncio.get_running_loop()
        transport, protocol = await loop.create_datagram_endpoint(
            _DatagramQueue, local_addr=_resolve(address)
        )
        self._transport = transport
        self.address = tuple(transport.get_extra_info("sockname")[:2])
        await self._inner.run(_UdpStreaming(protocol), duration)

    async def stop(self) -> None:
        """Stop receiving and release the socket."""
        await self._inner.stop()
        if self._transport is not None:
            self._transport.close()
            self._transport = None

    async def __aenter__(self) -> AsyncUdpSmartThermometer:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()


class AsyncUdpSmartThermometerClient:
    """Sends temperature readings to a thermometer over UDP."""

    def __init__(
        self, transport: asyncio.DatagramTransport, receiver: tuple[str, int]
    ) -> None:
        self._transport = transport
        self._receiver = receiver

    @classmethod
    async def create(
        cls, bind_address: Address, receiver_address: Address
    ) -> AsyncUdpSmartThermometerClient:
        """Bind a local UDP socket for sending to ``receiver_address``."""
        receiver = _resolve(receiver_address)
        loop = asyncio.get_running_loop()
        transport, _ = await loop.create_datagram_endpoint(
            asyncio.DatagramProtocol, local_addr=_resolve(bind_address)
        )
        return cls(transport, receiver)

    async def send_temperature(self, value: float) -> None:
        """Send one reading as a big-endian double."""
        self._transport.sendto(_encode_temperature(value), self._receiver)

    async def close(self) -> None:
        self._transport.close()

    async def __aenter__(self) -> AsyncUdpSmartThermometerClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()


async def _serve(address: Address, interval: float) -> None:
    thermometer = AsyncUdpSmartThermometer(
        "test smart thermometer", "test description", 20.2
    )
    async with thermometer:
        await thermometer.run(address, interval)
        while True:
            temperature = await thermometer.current_temperature()
            print(f"current temperature is {_format_float(temperature)}")
            await asyncio.sleep(interval)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run an asynchronous thermometer that receives readings over UDP."
    )
    parser.add_argument("--address", default=RECEIVER_ADDRESS)
    parser.add_argument("--interval", type=float, default=0.5)
    args = parser.parse_args(argv)
    try:
        asyncio.run(_serve(args.address, args.interval))
    except KeyboardInterrupt:
        return 0
    except OSError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


async def _send_series(
    bind: Address, receiver: Address, count: int, interval: float
) -> None:
    async with await AsyncUdpSmartThermometerClient.create(bind, receiver) as client:
        temperature = 10.4
        for step in range(count):
            temperature += 0.2 * step
            shown = _format_float(temperature)
            try:
                await client.send_temperature(temperature)
                print(f"successfully send temperature {shown}")
            except OSError as error:
                print(f"failure send temperature {shown}, cause of {error}")
            await asyncio.sleep(interval)


def client_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Send a series of temperature readings over UDP asynchronously."
    )
    parser.add_argument("--bind", default=BIND_ADDRESS)
    parser.add_argument("--receiver", default=RECEIVER_ADDRESS)
    parser.add_argument("--count", type=int, default=300)
    parser.add_argument("--interval", type=float, default=1.0)
    args = parser.parse_args(argv)
    try:
        asyncio.run(_send_series(args.bind, args.receiver, args.count, args.interval))
    except KeyboardInterrupt:
        return 0
    except (OSError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0