"""Constants for the Roth library."""

from enum import Enum, IntEnum

# API endpoints
ENDPOINT_READ = "/cgi-bin/ILRReadValues.cgi"
ENDPOINT_WRITE = "/cgi-bin/writeVal.cgi"

CONTENT_TYPE_XML = "text/xml"

DEFAULT_TIMEOUT = 10
DEFAULT_RETRIES = 2

# Temperatures travel as integers in hundredths of a degree
TEMPERATURE_SCALE = 100

# Global item holding the number of configured sensors
FIELD_DEVICE_COUNT = "totalNumberOfDevices"

# Per-sensor read fields, requested as G<index>.<field>
FIELD_ROOM_TEMPERATURE = "RaumTemp"
FIELD_TARGET_TEMPERATURE = "SollTemp"
FIELD_NAME = "name"
FIELD_PROGRAM = "WeekProg"
FIELD_MODE = "OPmode"


class WriteField(str, Enum):
    """Writable sensor fields.

    The mode field is spelled OPMode on write but OPmode on read. The
    controller firmware expects exactly these spellings.
    """

    TARGET_TEMPERATURE = "SollTemp"
    PROGRAM = "WeekProg"
    MODE = "OPMode"


class Program(IntEnum):
    """Active week program of a thermostat."""

    CONSTANT = 0
    PROGRAM_1 = 1
    PROGRAM_2 = 2
    PROGRAM_3 = 3


class Mode(IntEnum):
    """Operating mode of a thermostat."""

    DAY = 0
    NIGHT = 1
    HOLIDAY = 2  # frost protection


class ValveState(str, Enum):
    """Derived valve state, see models.valve_state."""

    OPEN = "open"
    CLOSED = "closed"
