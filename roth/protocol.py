"""Translation between sensor records and the controller's flat item names."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from functools import partial
import logging
import re
from typing import Any, NamedTuple

from .const import (
    FIELD_DEVICE_COUNT,
    FIELD_MODE,
    FIELD_NAME,
    FIELD_PROGRAM,
    FIELD_ROOM_TEMPERATURE,
    FIELD_TARGET_TEMPERATURE,
    Mode,
    Program,
    WriteField,
)
from .exceptions import RothFieldParseError, RothParseError, RothProtocolError
from .models import Sensor, WireItem
from .units import (
    enum_to_wire,
    parse_wire_int,
    temperature_to_wire,
    wire_to_enum,
    wire_to_temperature,
)

_LOGGER = logging.getLogger(__name__)

_ITEM_NAME = re.compile(r"G([0-9]+)\.(.+)")


class FieldSpec(NamedTuple):
    """Where a read field lands on a Sensor and how its value is converted."""

    attribute: str
    convert: Callable[[str], Any]


def _text(value: str) -> str:
    return value


# Read field catalogue, in request order
SENSOR_FIELDS: Mapping[str, FieldSpec] = {
    FIELD_ROOM_TEMPERATURE: FieldSpec("room_temperature", wire_to_temperature),
    FIELD_TARGET_TEMPERATURE: FieldSpec("target_temperature", wire_to_temperature),
    FIELD_NAME: FieldSpec("name", _text),
    FIELD_PROGRAM: FieldSpec("program", partial(wire_to_enum, enum_type=Program)),
    FIELD_MODE: FieldSpec("mode", partial(wire_to_enum, enum_type=Mode)),
}

_WRITE_ENUMS: Mapping[WriteField, type[Program] | type[Mode]] = {
    WriteField.PROGRAM: Program,
    WriteField.MODE: Mode,
}


def item_name(index: int, field: str) -> str:
    """Return the wire name addressing field of sensor index."""
    return f"G{index}.{field}"


def build_full_read_request(
    sensor_count: int, fields: Iterable[str] = SENSOR_FIELDS
) -> list[str]:
    """Return every item name needed to read sensor_count sensors."""
    if sensor_count < 0:
        raise ValueError(f"Invalid sensor count {sensor_count}")
    field_names = list(fields)
    return [
        item_name(index, field)
        for index in range(sensor_count)
        for field in field_names
    ]


def build_count_request() -> list[str]:
    """Return the item names for the sensor count query."""
    return [FIELD_DEVICE_COUNT]


def split_item_name(name: str, expected_count: int) -> tuple[int, str]:
    """Split an item name into a validated sensor index and a field name."""
    match = _ITEM_NAME.fullmatch(name)
    if match is None:
        raise RothFieldParseError(f"Not a sensor item name: {name!r}")

    index = int(match.group(1))
    if not 0 <= index < expected_count:
        raise RothFieldParseError(
            f"Sensor index {index} out of range for {expected_count} sensors"
        )

    return index, match.group(2)


def parse_sensors(
    items: Iterable[WireItem | tuple[str, str]],
    expected_count: int,
    fields: Mapping[str, FieldSpec] = SENSOR_FIELDS,
) -> dict[int, Sensor]:
    """Build sensor records from a read response.

    Items that cannot be applied are logged and skipped, so one bad item
    never costs the rest of the sensors. Sensors are created on the first
    applied item for their index; fields never received keep their defaults.
    """
    sensors: dict[int, Sensor] = {}
    for name, value in items:
        try:
            index, field = split_item_name(name, expected_count)
        except RothFieldParseError as err:
            _LOGGER.warning("Skipping item %s: %s", name, err)
            continue

        field_spec = fields.get(field)
        if field_spec is None:
            _LOGGER.debug("Unexpected value name %s", field)
            continue

        try:
            converted = field_spec.convert(value)
        except RothParseError as err:
            _LOGGER.warning("Skipping item %s: %s", name, err)
            continue

        sensor = sensors.setdefault(index, Sensor(id=index))
        setattr(sensor, field_spec.attribute, converted)

    return dict(sorted(sensors.items()))


def parse_count(items: Iterable[WireItem | tuple[str, str]]) -> int:
    """Return the sensor count from a count query response."""
    items = list(items)
    if not items:
        raise RothProtocolError("no values returned")

    value = items[0][1]
    try:
        count = parse_wire_int(value)
    except RothParseError as err:
        raise RothProtocolError(f"Unexpected value {value!r}") from err
    if count < 0:
        raise RothProtocolError(f"Unexpected value {value!r}")
    return count


def encode_write(sensor_id: int, field: WriteField | str, value: Any) -> str:
    """Return the query string that writes value to field of sensor_id.

    Temperatures are scaled to hundredths, programs and modes are written
    as plain integers.
    """
    if isinstance(sensor_id, bool) or not isinstance(sensor_id, int) or sensor_id < 0:
        raise ValueError(f"Invalid sensor id {sensor_id!r}")
    try:
        field = WriteField(field)
    except ValueError as err:
        raise ValueError(
            f"Invalid field '{field}'. Must be one of: "
            f"{', '.join(member.value for member in WriteField)}"
        ) from err

    if field is WriteField.TARGET_TEMPERATURE:
        wire_value = temperature_to_wire(value)
    else:
        enum_type = _WRITE_ENUMS[field]
        try:
            if isinstance(value, bool):
                raise ValueError(value)
            wire_value = enum_to_wire(enum_type(value))
        except ValueError as err:
            raise ValueError(
                f"Invalid {enum_type.__name__.lower()} {value!r}. Must be one of: "
                f"{', '.join(str(member.value) for member in enum_type)}"
            ) from err

    return f"{item_name(sensor_id, field.value)}={wire_value}"
