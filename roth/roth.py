"""Main Roth class for connecting to thermostat controllers."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from .codec import decode_response, encode_request
from .const import (
    CONTENT_TYPE_XML,
    DEFAULT_RETRIES,
    DEFAULT_TIMEOUT,
    ENDPOINT_READ,
    ENDPOINT_WRITE,
    Mode,
    Program,
    WriteField,
)
from .exceptions import RothConnectionError
from .models import Sensor, WireItem
from .protocol import (
    build_count_request,
    build_full_read_request,
    encode_write,
    parse_count,
    parse_sensors,
)

_LOGGER = logging.getLogger(__name__)


class Roth:
    """Main class for interacting with Roth thermostat controllers."""

    def __init__(
        self,
        host: str,
        websession: aiohttp.ClientSession | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
    ) -> None:
        """Initialize the Roth connection.

        Args:
            host: Hostname, IP address or base URL of the controller
            websession: Optional aiohttp ClientSession. If not provided, one will be created.
            timeout: Total timeout in seconds for each request
            retries: Number of extra attempts after a connection failure
        """
        if retries < 0:
            raise ValueError(f"Invalid retries {retries}")
        if not host.startswith("http"):
            host = f"http://{host}"
        self.base_url = host.rstrip("/")
        self._websession = websession
        self._own_session = websession is None
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._retries = retries

        self.sensor_count: int | None = None
        self.sensors: dict[int, Sensor] = {}

    async def update_info(self) -> None:
        """Fetch the sensor count and the state of every sensor."""
        await self._ensure_session()
        self.sensor_count = await self.get_sensor_count()
        self.sensors = await self.get_sensors(self.sensor_count)

    async def close_connection(self) -> None:
        """Close the connection and clean up resources."""
        if self._own_session and self._websession:
            await self._websession.close()
            self._websession = None

    async def _ensure_session(self) -> None:
        """Ensure a websession exists."""
        if self._websession is None:
            self._websession = aiohttp.ClientSession()
            self._own_session = True

    async def __aenter__(self) -> Roth:
        """Async context manager entry."""
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close_connection()

    async def _request(self, method: str, url: str, **kwargs: Any) -> bytes:
        """Send a request and return the response body.

        Connection failures and 5xx statuses are retried; the last one is
        raised as RothConnectionError. Other error statuses are raised at once.
        """
        await self._ensure_session()
        assert self._websession is not None
        attempts = self._retries + 1
        last_error: Exception | None = None
        for attempt in range(1, attempts + 1):
            try:
                async with self._websession.request(
                    method, url, timeout=self._timeout, **kwargs
                ) as response:
                    response.raise_for_status()
                    return await response.read()
            except (aiohttp.ClientError, TimeoutError) as err:
                if isinstance(err, aiohttp.ClientResponseError) and err.status < 500:
                    raise RothConnectionError(
                        f"Controller rejected request: {err}"
                    ) from err
                last_error = err
                _LOGGER.warning(
                    "Request to %s failed (attempt %s of %s): %s",
                    url,
                    attempt,
                    attempts,
                    err,
                )
        raise RothConnectionError(
            f"Failed to connect to controller: {last_error}"
        ) from last_error

    async def read_values(self, names: list[str]) -> list[WireItem]:
        """Read the given items from the controller."""
        url = f"{self.base_url}{ENDPOINT_READ}"
        body = await self._request(
            "POST",
            url,
            data=encode_request(names),
            headers={"Content-Type": CONTENT_TYPE_XML},
        )
        _LOGGER.debug("Read response: %s", body)
        return decode_response(body)

    async def write_value(
        self, sensor_id: int, field: WriteField | str, value: Any
    ) -> None:
        """Write a single field of a sensor."""
        command = encode_write(sensor_id, field, value)
        _LOGGER.debug("Sending write command: %s", command)
        await self._request("GET", f"{self.base_url}{ENDPOINT_WRITE}?{command}")

    async def get_sensor_count(self) -> int:
        """Return the total number of sensors on the controller."""
        return parse_count(await self.read_values(build_count_request()))

    async def get_sensors(self, sensor_count: int) -> dict[int, Sensor]:
        """Return the current state of sensors 0..sensor_count-1, keyed by id.

        A sensor is only present once at least one of its items was applied,
        so ids below sensor_count can be missing when the controller returns
        nothing usable for them.
        """
        items = await self.read_values(build_full_read_request(sensor_count))
        return parse_sensors(items, sensor_count)

    async def set_target_temperature(
        self, sensor_id: int, target_temperature: float
    ) -> None:
        """Change the target temperature of a sensor."""
        await self.write_value(
            sensor_id, WriteField.TARGET_TEMPERATURE, target_temperature
        )

    async def set_program(self, sensor_id: int, program: Program | int) -> None:
        """Change the active week program of a sensor."""
        await self.write_value(sensor_id, WriteField.PROGRAM, program)

    async def set_mode(self, sensor_id: int, mode: Mode | int) -> None:
        """Change the operating mode of a sensor."""
        await self.write_value(sensor_id, WriteField.MODE, mode)
