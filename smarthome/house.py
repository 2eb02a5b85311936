"""A house made of named rooms, each holding the names of its devices."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from smarthome.info import DeviceInfoProvider


class SmartHouseError(Exception):
    """Base class for errors raised by a smart house."""


class ReportError(SmartHouseError):
    """A report could not be built because a device could not be described."""

    def __init__(self, message: str = "create report error") -> None:
        super().__init__(message)


class SmartHouse:
    """Rooms and the devices placed in them."""

    def __init__(self, name: str, devices: Mapping[str, Iterable[str]]) -> None:
        self.name = name
        self._room_names: list[str] = list(devices)
        self._devices: dict[str, list[str]] = {
            room: list(room_devices) for room, room_devices in devices.items()
        }

    def rooms(self) -> Iterator[str]:
        """Iterate over the names of the rooms."""
        return iter(list(self._room_names))

    def add_room(self, room: str) -> None:
        """Add a room unless it is already present."""
        if room not in self._room_names:
            self._room_names.append(room)

    def delete_room(self, room: str) -> None:
        """Remove a room together with its devices."""
        self._room_names = [name for name in self._room_names if name != room]
        self._devices.pop(room, None)

    def devices(self, room: str) -> Iterator[str]:
        """Iterate over the devices of a room; an unknown room has none."""
        return iter(list(self._devices.get(room, [])))

    def add_device(self, room: str, device: str) -> None:
        """Add a device to a room that already holds a device list.

        Nothing happens when the room has no device list.
        """
        room_devices = self._devices.get(room)
        if room_devices is not None:
            room_devices.append(device)

    def delete_device(self, room: str, device: str) -> None:
        """Remove every device of that name from the room, if the room exists."""
        room_devices = self._devices.get(room)
        if room_devices is not None:
            room_devices[:] = [name for name in room_devices if name != device]

    def _room_report(
        self, room: str, room_devices: list[str], info_provider: DeviceInfoProvider
    ) -> str:
        reports = []
        for device in room_devices:
            info = info_provider.info(room, device)
            if info is None:
                raise ReportError()
            reports.append(info)
        return "\n".join(reports)

    def create_report(self, info_provider: DeviceInfoProvider) -> str:
        """Describe every device of every room, one description after another.

        Raises ReportError if the provider cannot describe some device.
        """
        return "\n".join(
            self._room_report(room, room_devices, info_provider)
            for room, room_devices in self._devices.items()
        )