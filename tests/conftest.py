import asyncio
from datetime import datetime, timezone

import pytest

from custom_components.minimal_http_blinds.controller import PositionController

NOW = datetime(2026, 10, 19, 9, 10, tzinfo=timezone.utc)


class FakeClient:
    """In-memory DeviceClient; bodies and errors are set by the test."""

    def __init__(self):
        self.position_body = "0"
        self.position_error = None
        self.battery_body = "100"
        self.battery_error = None
        self.set_error = None
        self.fetch_gate = None
        self.set_gate = None
        self.fetch_calls = 0
        self.battery_calls = 0
        self.set_calls = []

    async def fetch_position(self):
        self.fetch_calls += 1
        if self.fetch_gate is not None:
            await self.fetch_gate.wait()
        if self.position_error is not None:
            raise self.position_error
        return self.position_body

    async def set_position(self, position):
        self.set_calls.append(position)
        if self.set_gate is not None:
            await self.set_gate.wait()
        if self.set_error is not None:
            raise self.set_error

    async def fetch_battery_level(self):
        self.battery_calls += 1
        if self.battery_error is not None:
            raise self.battery_error
        return self.battery_body


class RecordingNotifier:
    def __init__(self):
        self.events = []

    def publish_current_position(self, position):
        self.events.append(("current", position))

    def publish_target_position(self, position):
        self.events.append(("target", position))

    def publish_battery(self, level, status):
        self.events.append(("battery", level, status))

    def publish_last_update(self, description, status):
        self.events.append(("last_update", description, status))

    def of(self, kind):
        return [e[1:] for e in self.events if e[0] == kind]


async def drain():
    """Let spawned background tasks run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
async def make_controller(client, notifier):
    created = []

    def _make(**kwargs):
        kwargs.setdefault("poll_interval_ms", 60_000)
        kwargs.setdefault("clock", lambda: NOW)
        controller = PositionController("Test blind", client, notifier, **kwargs)
        created.append(controller)
        return controller

    yield _make

    for controller in created:
        await controller.async_shutdown()
