"""Data models for Roth library."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .const import Mode, Program, ValveState


class WireItem(NamedTuple):
    """A single name/value pair as exchanged with the controller."""

    name: str
    value: str


@dataclass
class Sensor:
    """State of one thermostat zone."""

    id: int
    name: str = ""
    room_temperature: float = 0.0
    target_temperature: float = 0.0
    program: Program = Program.CONSTANT
    mode: Mode = Mode.DAY

    @property
    def valve_state(self) -> ValveState:
        """Approximate valve state, see valve_state()."""
        return valve_state(self)

    @property
    def valve_value(self) -> int:
        """Approximate valve state as 1 (open) or 0 (closed)."""
        return valve_value(self)


def valve_state(sensor: Sensor) -> ValveState:
    """Return the valve state derived from room and target temperature.

    The controller does not report the valve position. This is an
    approximation: the valve is assumed open while the room is below the
    target temperature, with no hysteresis.
    """
    if sensor.room_temperature < sensor.target_temperature:
        return ValveState.OPEN
    return ValveState.CLOSED


def valve_value(sensor: Sensor) -> int:
    """Return the derived valve state as 1 (open) or 0 (closed)."""
    return 1 if valve_state(sensor) is ValveState.OPEN else 0
