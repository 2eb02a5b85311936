import pytest

from smarthome.devices import SmartSocket, SmartThermometer
from smarthome.info import (
    BorrowingDeviceInfoProvider,
    DeviceInfoProvider,
    OwningDeviceInfoProvider,
)

SOCKET_INFO = (
    "Location: test_location_name\n"
    "Device/Socket: \n"
    "  Name: test_socket_name\n"
    "  Description: test socket description\n"
    "  Current state: on, 220.2 Volts"
)

THERMO_INFO = (
    "Location: test_location_name\n"
    "Device/Thermometer: \n"
    "  Name: test_thermo_name\n"
    "  Description: test thermo description\n"
    "  Current temperature: 13 Celsus"
)


def test_owning_provider():
    socket = SmartSocket("test_socket_name", "test socket description", True, 220.2)
    provider = OwningDeviceInfoProvider(socket)

    assert provider.info("test_location_name", "test_socket_name") == SOCKET_INFO
    assert provider.info("test_location_name", "unknown_device_name") is None


def test_borrowing_provider():
    socket = SmartSocket("test_socket_name", "test socket description", True, 220.2)
    thermo = SmartThermometer("test_thermo_name", "test thermo description", 13.0)
    provider = BorrowingDeviceInfoProvider(socket, thermo)

    assert provider.info("test_location_name", "test_socket_name") == SOCKET_INFO
    assert provider.info("test_location_name", "test_thermo_name") == THERMO_INFO
    assert provider.info("test_location_name", "unknown_device_name") is None


def test_borrowing_provider_sees_device_changes():
    socket = SmartSocket("s", "d", True, 220.0)
    thermo = SmartThermometer("t", "d", 10.0)
    provider = BorrowingDeviceInfoProvider(socket, thermo)

    socket.turn_off()
    thermo.set_temperature(21.5)

    assert provider.info("room", "s").endswith("Current state: off, 220 Volts")
    assert provider.info("room", "t").endswith("Current temperature: 21.5 Celsus")


def test_base_provider_is_abstract():
    with pytest.raises(TypeError):
        DeviceInfoProvider()