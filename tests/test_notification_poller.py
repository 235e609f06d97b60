"""Tests for the per-connection notification poller."""

from __future__ import annotations

import asyncio

import pytest

from estategate.infrastructure.notifications import NotificationPoller


def test_poller_delivers_immediately_and_periodically():
    delivered: list[int] = []
    calls = 0

    async def fetch() -> int:
        nonlocal calls
        calls += 1
        return calls

    async def deliver(value: int) -> None:
        delivered.append(value)

    async def scenario() -> None:
        poller = NotificationPoller(fetch, deliver, interval=0.01)
        poller.start()
        poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()
        assert not poller.running

    asyncio.run(scenario())

    assert delivered[0] == 1
    assert len(delivered) >= 2
    assert delivered == sorted(delivered)


def test_manual_refresh_does_not_overlap_in_flight_fetch():
    started = 0

    async def scenario() -> tuple[bool, bool]:
        release = asyncio.Event()

        async def fetch() -> str:
            nonlocal started
            started += 1
            await release.wait()
            return "snapshot"

        async def deliver(_: str) -> None:
            return None

        poller = NotificationPoller(fetch, deliver, interval=60)
        first = asyncio.ensure_future(poller.refresh())
        await asyncio.sleep(0)
        assert poller.in_flight
        second = await poller.refresh()
        release.set()
        return await first, second

    first_result, second_result = asyncio.run(scenario())

    assert first_result is True
    assert second_result is False
    assert started == 1


def test_failed_fetch_keeps_polling():
    attempts = 0
    delivered: list[str] = []

    async def fetch() -> str:
        nonlocal attempts
        attempts += 1
        if attempts == 1:
            raise RuntimeError("backend unavailable")
        return "ok"

    async def deliver(value: str) -> None:
        delivered.append(value)

    async def scenario() -> None:
        poller = NotificationPoller(fetch, deliver, interval=0.01)
        poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()

    asyncio.run(scenario())

    assert attempts >= 2
    assert delivered and delivered[0] == "ok"


def test_interval_must_be_positive():
    async def fetch() -> None:
        return None

    async def deliver(_: None) -> None:
        return None

    with pytest.raises(ValueError):
        NotificationPoller(fetch, deliver, interval=0)
