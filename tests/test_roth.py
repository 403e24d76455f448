"""Tests for the Roth client against a fake aiohttp session."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from typing import Any

import aiohttp
import pytest

from roth import Roth
from roth.const import Mode, Program
from roth.exceptions import RothConnectionError, RothDecodeError, RothProtocolError
from roth.models import Sensor


def _body(*items: tuple[str, str]) -> bytes:
    entries = "".join(f"<i><n>{name}</n><v>{value}</v></i>" for name, value in items)
    return f"<body><item_list>{entries}</item_list></body>".encode()


class MockResponse:
    def __init__(self, status: int = 200, body: bytes = b"") -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> MockResponse:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                SimpleNamespace(real_url="http://roth/"),
                (),
                status=self.status,
                message="error",
            )

    async def read(self) -> bytes:
        return self._body


class FakeSession:
    def __init__(self) -> None:
        self._queue: list[Any] = []
        self.calls: list[tuple[str, str, dict[str, Any]]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self._queue.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> Any:
        self.calls.append((method, url, kwargs))
        if not self._queue:
            raise AssertionError(f"Unexpected {method} {url} with no queued response")
        result = self._queue.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    async def close(self) -> None:
        self.closed = True


def test_base_url() -> None:
    assert Roth("ROTH-10A6D5").base_url == "http://ROTH-10A6D5"
    assert Roth("https://10.0.0.5/").base_url == "https://10.0.0.5"


def test_invalid_retries() -> None:
    with pytest.raises(ValueError):
        Roth("roth", retries=-1)


def test_get_sensor_count() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(body=_body(("totalNumberOfDevices", "3"))))
        roth = Roth("roth", websession=session)

        assert await roth.get_sensor_count() == 3
        method, url, kwargs = session.calls[0]
        assert method == "POST"
        assert url == "http://roth/cgi-bin/ILRReadValues.cgi"
        assert kwargs["headers"] == {"Content-Type": "text/xml"}
        assert b"<n>totalNumberOfDevices</n>" in kwargs["data"]
        assert isinstance(kwargs["timeout"], aiohttp.ClientTimeout)

    asyncio.run(_run())


def test_get_sensor_count_empty() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(body=_body()))
        roth = Roth("roth", websession=session)

        with pytest.raises(RothProtocolError, match="no values returned"):
            await roth.get_sensor_count()

    asyncio.run(_run())


def test_update_info() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(
            MockResponse(body=_body(("totalNumberOfDevices", "2"))),
            MockResponse(
                body=_body(
                    ("G0.RaumTemp", "2086"),
                    ("G0.SollTemp", "2100"),
                    ("G0.name", "Kitchen"),
                    ("G0.WeekProg", "1"),
                    ("G0.OPmode", "0"),
                    ("G1.RaumTemp", "2250"),
                    ("G1.SollTemp", "2000"),
                    ("G1.name", "Living room"),
                    ("G1.WeekProg", "0"),
                    ("G1.OPmode", "2"),
                    ("G2.RaumTemp", "1500"),
                )
            ),
        )
        roth = Roth("roth", websession=session)
        await roth.update_info()

        assert roth.sensor_count == 2
        assert roth.sensors == {
            0: Sensor(
                id=0,
                name="Kitchen",
                room_temperature=20.86,
                target_temperature=21.0,
                program=Program.PROGRAM_1,
                mode=Mode.DAY,
            ),
            1: Sensor(
                id=1,
                name="Living room",
                room_temperature=22.5,
                target_temperature=20.0,
                program=Program.CONSTANT,
                mode=Mode.HOLIDAY,
            ),
        }
        assert roth.sensors[0].valve_state == "open"
        assert roth.sensors[1].valve_state == "closed"
        request_body = session.calls[1][2]["data"]
        assert request_body.count(b"<n>") == 10
        assert b"<n>G1.OPmode</n>" in request_body

    asyncio.run(_run())


def test_get_sensors_decode_error() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(body=b"<html>oops"))
        roth = Roth("roth", websession=session)

        with pytest.raises(RothDecodeError):
            await roth.get_sensors(1)

    asyncio.run(_run())


def test_retry_then_success() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(
            aiohttp.ClientConnectionError("reset"),
            MockResponse(status=500),
            MockResponse(body=_body(("totalNumberOfDevices", "1"))),
        )
        roth = Roth("roth", websession=session, retries=2)

        assert await roth.get_sensor_count() == 1
        assert len(session.calls) == 3

    asyncio.run(_run())


def test_retries_exhausted() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(TimeoutError(), TimeoutError())
        roth = Roth("roth", websession=session, retries=1)

        with pytest.raises(RothConnectionError):
            await roth.get_sensor_count()
        assert len(session.calls) == 2

    asyncio.run(_run())


def test_decode_error_not_retried() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(body=b"garbage"))
        roth = Roth("roth", websession=session, retries=3)

        with pytest.raises(RothDecodeError):
            await roth.get_sensor_count()
        assert len(session.calls) == 1

    asyncio.run(_run())


@pytest.mark.parametrize(
    ("method", "value", "query"),
    [
        ("set_target_temperature", 21.456, "G2.SollTemp=2145"),
        ("set_program", Program.PROGRAM_2, "G2.WeekProg=2"),
        ("set_mode", Mode.NIGHT, "G2.OPMode=1"),
    ],
)
def test_set_value(method: str, value: Any, query: str) -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse())
        roth = Roth("http://roth", websession=session)

        await getattr(roth, method)(2, value)
        assert session.calls[0][0] == "GET"
        assert session.calls[0][1] == f"http://roth/cgi-bin/writeVal.cgi?{query}"

    asyncio.run(_run())


def test_set_value_connection_error() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(status=404))
        roth = Roth("roth", websession=session, retries=0)

        with pytest.raises(RothConnectionError):
            await roth.set_mode(0, Mode.DAY)

    asyncio.run(_run())


def test_set_value_invalid_sends_nothing() -> None:
    async def _run() -> None:
        session = FakeSession()
        roth = Roth("roth", websession=session)

        with pytest.raises(ValueError):
            await roth.set_program(0, 7)
        assert session.calls == []

    asyncio.run(_run())


def test_context_manager_keeps_external_session() -> None:
    async def _run() -> None:
        session = FakeSession()
        async with Roth("roth", websession=session) as roth:
            assert roth.base_url == "http://roth"
        assert session.closed is False

    asyncio.run(_run())


def test_close_owned_session(monkeypatch: pytest.MonkeyPatch) -> None:
    async def _run() -> None:
        session = FakeSession()
        monkeypatch.setattr(aiohttp, "ClientSession", lambda: session)
        async with Roth("roth") as roth:
            assert roth._websession is session
        assert session.closed is True
        assert roth._websession is None

    asyncio.run(_run())


def test_client_error_status_not_retried() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(status=404), MockResponse(), MockResponse())
        roth = Roth("roth", websession=session, retries=2)

        with pytest.raises(RothConnectionError, match="rejected"):
            await roth.set_mode(0, Mode.NIGHT)
        assert len(session.calls) == 1

    asyncio.run(_run())


def test_server_error_status_retried() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(status=503), MockResponse(status=502))
        roth = Roth("roth", websession=session, retries=1)

        with pytest.raises(RothConnectionError, match="Failed to connect"):
            await roth.set_program(0, Program.PROGRAM_1)
        assert len(session.calls) == 2

    asyncio.run(_run())


def test_get_sensors_missing_ids_absent() -> None:
    async def _run() -> None:
        session = FakeSession()
        session.queue(MockResponse(body=_body(("G0.name", "a"), ("G1.Foo", "x"))))
        roth = Roth("roth", websession=session)

        sensors = await roth.get_sensors(2)
        assert list(sensors) == [0]
        assert 1 not in sensors

    asyncio.run(_run())
