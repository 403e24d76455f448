"""Conversions between wire strings and domain values."""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from enum import IntEnum
import re
from typing import TypeVar

from .const import TEMPERATURE_SCALE
from .exceptions import RothParseError

_EnumT = TypeVar("_EnumT", bound=IntEnum)

_INTEGER = re.compile(r"-?[0-9]+")


def parse_wire_int(value: str) -> int:
    """Parse a plain decimal wire integer, optionally negative."""
    if not isinstance(value, str) or _INTEGER.fullmatch(value) is None:
        raise RothParseError(f"Unexpected value {value!r}")
    return int(value)


def wire_to_temperature(value: str) -> float:
    """Convert a scaled integer string (2086) to degrees (20.86)."""
    return parse_wire_int(value) / TEMPERATURE_SCALE


def temperature_to_wire(value: float) -> str:
    """Convert degrees to a scaled integer string.

    The fractional part below 1/100 degree is truncated toward zero, so
    21.456 becomes "2145". Decimal arithmetic on the shortest repr keeps
    values such as 20.86 at "2086" instead of "2085".
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid temperature {value!r}")
    try:
        scaled = Decimal(repr(float(value))) * TEMPERATURE_SCALE
        return str(int(scaled.to_integral_value(rounding=ROUND_DOWN)))
    except (InvalidOperation, OverflowError, TypeError, ValueError) as err:
        raise ValueError(f"Invalid temperature {value!r}") from err


def wire_to_enum(value: str, enum_type: type[_EnumT]) -> _EnumT:
    """Convert an integer string to a member of enum_type."""
    number = parse_wire_int(value)
    try:
        return enum_type(number)
    except ValueError as err:
        raise RothParseError(
            f"Unexpected {enum_type.__name__} value {value!r}"
        ) from err


def enum_to_wire(value: int) -> str:
    """Convert an enum member (or its integer value) to a wire string."""
    return str(int(value))
