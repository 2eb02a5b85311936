import asyncio
import socket
import struct

import pytest

from smarthome.udp.async_thermometer import (
    AsyncStreaming,
    AsyncStreamingSmartThermometer,
    AsyncUdpSmartThermometer,
    AsyncUdpSmartThermometerClient,
    client_main,
)


class QueueStreaming(AsyncStreaming):
    def __init__(self):
        self.items = asyncio.Queue()

    async def recv_from(self, size):
        item = await self.items.get()
        if isinstance(item, BaseException):
            raise item
        return item[:size]


def pack(value):
    return struct.pack(">d", value)


async def wait_for_temperature(thermo, expected, timeout=2.0):
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while loop.time() < deadline:
        if await thermo.current_temperature() == expected:
            return True
        await asyncio.sleep(0.01)
    return await thermo.current_temperature() == expected


@pytest.mark.asyncio
async def test_run():
    streaming = QueueStreaming()
    async with AsyncStreamingSmartThermometer("test name", "test description", 32.0) as thermo:
        await thermo.run(streaming, 0.01)
        assert await thermo.current_temperature() == 32.0

        await streaming.items.put(pack(20.3))
        await asyncio.sleep(0.2)
        assert await thermo.current_temperature() == 20.3

        await streaming.items.put(pack(11.5))
        await asyncio.sleep(0.2)
        assert await thermo.current_temperature() == 11.5


@pytest.mark.asyncio
async def test_receive_error_is_reported_and_skipped(capsys):
    streaming = QueueStreaming()
    async with AsyncStreamingSmartThermometer("t", "d", 1.0) as thermo:
        await thermo.run(streaming, 0.01)
        await streaming.items.put(OSError("boom"))
        await streaming.items.put(pack(7.5))
        assert await wait_for_temperature(thermo, 7.5)
    assert "can't receive datagram: boom" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_would_block_is_silent(capsys):
    streaming = QueueStreaming()
    async with AsyncStreamingSmartThermometer("t", "d", 1.0) as thermo:
        await thermo.run(streaming, 0.01)
        await streaming.items.put(BlockingIOError("again"))
        await streaming.items.put(pack(3.25))
        assert await wait_for_temperature(thermo, 3.25)
    assert "can't receive datagram" not in capsys.readouterr().out


@pytest.mark.asyncio
async def test_short_datagram_is_padded_with_zeros():
    streaming = QueueStreaming()
    async with AsyncStreamingSmartThermometer("t", "d", 1.0) as thermo:
        await thermo.run(streaming, 0.01)
        await streaming.items.put(b"\x40\x34")
        await wait_for_temperature(thermo, 20.0)
        assert await thermo.current_temperature() == 20.0


@pytest.mark.asyncio
async def test_stop_ends_background_task():
    streaming = QueueStreaming()
    thermo = AsyncStreamingSmartThermometer("t", "d", 5.0)
    await thermo.run(streaming, 0.01)
    await thermo.stop()
    await streaming.items.put(pack(99.0))
    await asyncio.sleep(0.1)
    assert await thermo.current_temperature() == 5.0
    assert streaming.items.qsize() == 1


@pytest.mark.asyncio
async def test_udp_round_trip():
    async with AsyncUdpSmartThermometer("udp", "desc", 20.2) as thermo:
        await thermo.run(("127.0.0.1", 0), 0.01)
        assert await thermo.current_temperature() == 20.2
        async with await AsyncUdpSmartThermometerClient.create(
            ("127.0.0.1", 0), thermo.address
        ) as client:
            await client.send_temperature(20.3)
            assert await wait_for_temperature(thermo, 20.3)
            await client.send_temperature(-4.5)
            assert await wait_for_temperature(thermo, -4.5)


@pytest.mark.asyncio
async def test_client_sends_big_endian_double():
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    receiver.bind(("127.0.0.1", 0))
    receiver.settimeout(2.0)
    try:
        client = await AsyncUdpSmartThermometerClient.create(
            "127.0.0.1:0", receiver.getsockname()
        )
        await client.send_temperature(20.0)
        await asyncio.sleep(0.05)
        data = await asyncio.to_thread(lambda: receiver.recvfrom(64)[0])
        await client.close()
    finally:
        receiver.close()
    assert data == b"\x40\x34\x00\x00\x00\x00\x00\x00"


@pytest.mark.asyncio
async def test_client_rejects_bad_address():
    with pytest.raises(ValueError):
        await AsyncUdpSmartThermometerClient.create("127.0.0.1:0", "no-port-here")


def test_client_main_sends_series(capsys):
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    receiver.bind(("127.0.0.1", 0))
    receiver.settimeout(2.0)
    host, port = receiver.getsockname()
    try:
        code = client_main(
            [
                "--bind",
                "127.0.0.1:0",
                "--receiver",
                f"{host}:{port}",
                "--count",
                "3",
                "--interval",
                "0",
            ]
        )
        datagrams = [receiver.recvfrom(64)[0] for _ in range(3)]
    finally:
        receiver.close()
    assert code == 0
    assert datagrams[0] == pack(10.4)
    assert all(len(d) == 8 for d in datagrams)
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3
    assert lines[0] == "successfully send temperature 10.4"


def test_client_main_bad_address_fails(capsys):
    code = client_main(["--receiver", "no-port-here", "--count", "1", "--interval", "0"])
    assert code == 1
    assert "Error:" in capsys.readouterr().err