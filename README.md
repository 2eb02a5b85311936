# smarthome

A small model of a smart house: rooms, devices in them, and reports built
from whatever knows the state of those devices. Around it sit two network
services:

* a **smart socket** that can be switched on and off and queried over TCP,
  using a tiny length-prefixed protocol (STP) with a handshake;
* a **smart thermometer** that takes its readings from UDP datagrams, each
  an 8-byte big-endian float.

No third-party libraries are needed.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## The house and its reports

```python
from smarthome.devices import SmartSocket, SmartThermometer
from smarthome.house import SmartHouse, ReportError
from smarthome.info import BorrowingDeviceInfoProvider

socket = SmartSocket("room1_socket_1", "wall plug", True, 225.5)
thermo = SmartThermometer("room1_thermo_1", "hygrometer", 19.2)

house = SmartHouse("my smart house", {"room1": ["room1_socket_1", "room1_thermo_1"]})
house.add_room("room2")

try:
    print(house.create_report(BorrowingDeviceInfoProvider(socket, thermo)))
except ReportError:
    print("some device has no information")
```

`SmartHouse` offers `rooms()`, `add_room()`, `delete_room()`, `devices()`,
`add_device()`, `delete_device()` and `create_report()`. A report fails with
`ReportError` (a `SmartHouseError`) as soon as the provider returns no
information for one of the house's devices. Devices can only be added to
rooms that already hold a device list; adding to any other room does
nothing. `OwningDeviceInfoProvider` describes a single socket,
`BorrowingDeviceInfoProvider` a socket and a thermometer; any subclass of
`DeviceInfoProvider` can be used instead.

To print the sample reports:

```
smarthome-report
```

## Smart socket over TCP

Start a socket server (default address `127.0.0.1:55331`, change it with
`--address`):

```
smarthome-socket-server
```

The server answers one request per connection. Send it a command:

```
smarthome-socket-cli on
smarthome-socket-cli off
smarthome-socket-cli info
```

Each prints the socket's description; `--address` selects the server.
Unknown commands get the reply `unknown command`.

From code, `smarthome.tcp.socket_client.TcpSmartSocketClient(address)`
offers `turn_on()`, `turn_off()` and `get_info()`, each returning the
socket's description as text, and `close()` (it is also a context manager).
The address is either `"host:port"` or a `(host, port)` pair. Failures are
raised as `ConnectError` (including `BadHandshakeError`) and `RequestError`
from `smarthome.stp.errors`.

The protocol itself is available directly: `smarthome.stp.framing` has
`send_string()` and `recv_string()` for any binary file-like object, and
`smarthome.stp.sync` has `StpClient`, `StpServer` and `StpConnection`.

## Smart thermometer over UDP

Start a thermometer listening on `127.0.0.1:55331` (`--address`), printing
its current temperature every other `--interval` seconds:

```
smarthome-thermometer
```

Feed it readings from `127.0.0.1:55330`; `--bind`, `--receiver`, `--count`
and `--interval` adjust the sender:

```
smarthome-thermometer-client
```

The asyncio versions take the same options:

```
smarthome-async-thermometer
smarthome-async-thermometer-client
```

`StreamingSmartThermometer` accepts any `Streaming` source, and
`AsyncStreamingSmartThermometer` any `AsyncStreaming` source, so readings
can come from somewhere other than a UDP socket; call `stop()` to end the
background reader.

## What is not included

The smart socket is served and controlled only by blocking code: there is
no asyncio socket server, no asyncio socket client, and no asyncio version
of the STP client and server. Only the thermometer has an asyncio flavour.