"""Python library for Roth thermostat controllers."""

from .const import Mode, Program, ValveState, WriteField
from .exceptions import (
    RothConnectionError,
    RothDataError,
    RothDecodeError,
    RothError,
    RothFieldParseError,
    RothParseError,
    RothProtocolError,
)
from .models import Sensor, WireItem, valve_state, valve_value
from .roth import Roth

__all__ = [
    "Mode",
    "Program",
    "Roth",
    "RothConnectionError",
    "RothDataError",
    "RothDecodeError",
    "RothError",
    "RothFieldParseError",
    "RothParseError",
    "RothProtocolError",
    "Sensor",
    "ValveState",
    "WireItem",
    "WriteField",
    "valve_state",
    "valve_value",
]
