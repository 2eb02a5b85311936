"""Providers that describe devices by room and device name."""

from __future__ import annotations

from abc import ABC, abstractmethod

from smarthome.devices import SmartSocket, SmartThermometer


def _describe(location_name: str, kind: str, rendered: str) -> str:
    return f"Location: {location_name}\nDevice/{kind}: \n{rendered}"


class DeviceInfoProvider(ABC):
    """Something that can describe a device found in a given location."""

    @abstractmethod
    def info(self, location_name: str, device_name: str) -> str | None:
        """Return the device's description, or None if the device is unknown."""


class OwningDeviceInfoProvider(DeviceInfoProvider):
    """Describes the single socket it holds."""

    def __init__(self, socket: SmartSocket) -> None:
        self.socket = socket

    def info(self, location_name: str, device_name: str) -> str | None:
        if self.socket.name != device_name:
            return None
        return _describe(location_name, "Socket", self.socket.render(2))


class BorrowingDeviceInfoProvider(DeviceInfoProvider):
    """Describes a shared socket and a shared thermometer."""

    def __init__(self, socket: SmartSocket, thermo: SmartThermometer) -> None:
        self.socket = socket
        self.thermo = thermo

    def info(self, location_name: str, device_name: str) -> str | None:
        if self.socket.name == device_name:
            return _describe(location_name, "Socket", self.socket.render(2))
        if self.thermo.name == device_name:
            return _describe(location_name, "Thermometer", self.thermo.render(2))
        return None