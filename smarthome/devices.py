"""Smart household devices: a power socket and a thermometer."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal


def _format_float(value: float) -> str:
    """Format a number the way the device reports show it.

    Whole numbers lose their fractional part ("220"), other values use the
    shortest exact representation ("220.2"), and exponent notation is never used.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def _indent_lines(lines: list[str], indent: int) -> str:
    prefix = " " * indent
    return "\n".join(prefix + line for line in lines)


@dataclass
class SmartSocket:
    """A switchable power socket that reports its current power."""

    name: str
    description: str
    is_on: bool
    current_power: float

    def turn_on(self) -> None:
        self.is_on = True

    def turn_off(self) -> None:
        self.is_on = False

    def render(self, indent: int = 0) -> str:
        """Describe the socket on three lines, each indented by ``indent`` spaces."""
        state = "on" if self.is_on else "off"
        return _indent_lines(
            [
                f"Name: {self.name}",
                f"Description: {self.description}",
                f"Current state: {state}, {_format_float(self.current_power)} Volts",
            ],
            indent,
        )

    def __str__(self) -> str:
        return self.render(0)


@dataclass
class SmartThermometer:
    """A thermometer that reports the current temperature."""

    name: str
    description: str
    current_temperature: float

    def set_temperature(self, value: float) -> None:
        self.current_temperature = value

    def render(self, indent: int = 0) -> str:
        """Describe the thermometer on three lines, each indented by ``indent`` spaces."""
        return _indent_lines(
            [
                f"Name: {self.name}",
                f"Description: {self.description}",
                f"Current temperature: {_format_float(self.current_temperature)} Celsus",
            ],
            indent,
        )

    def __str__(self) -> str:
        return self.render(0)