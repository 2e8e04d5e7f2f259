"""Position reconciliation for a blinds device polled over HTTP.

PositionController keeps the last known current and target positions of a
single blind. It polls the device on a timer, snaps positions that are within
the configured tolerance of the target onto the target, and suspends polling
while a move request is in flight so a stale poll cannot overwrite the
optimistic update of the move.

The controller knows nothing about Home Assistant entities: it talks to the
device through a DeviceClient and pushes changes out through a Notifier.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Any, Protocol

from homeassistant.util import dt as dt_util

from .const import (
    DEFAULT_POLLING_MILLIS,
    DEFAULT_TOLERANCE,
    LOW_BATTERY_THRESHOLD,
    POSITION_CLOSED,
    POSITION_OPEN,
)
from .exceptions import BlindsInvalidValueError, BlindsParseError, BlindsTransportError
from .helpers import (
    describe_position,
    format_last_update,
    parse_integer,
    parse_position,
    strip_newlines,
)

_LOGGER = logging.getLogger(__name__)


class UpdateStatus(StrEnum):
    PENDING = "Pending"
    SUCCESS = "Success"
    FAILED = "Failed"


class LowBatteryStatus(StrEnum):
    NORMAL = "Normal"
    LOW = "Low"


@dataclass
class LastUpdate:
    timestamp: datetime | None = None
    status: UpdateStatus = UpdateStatus.PENDING


class DeviceClient(Protocol):
    async def fetch_position(self) -> str: ...

    async def set_position(self, position: int) -> None: ...

    async def fetch_battery_level(self) -> str: ...


class Notifier(Protocol):
    def publish_current_position(self, position: int) -> None: ...

    def publish_target_position(self, position: int) -> None: ...

    def publish_battery(self, level: int, status: LowBatteryStatus) -> None: ...

    def publish_last_update(self, description: str, status: UpdateStatus) -> None: ...


def ensure_position(value: Any) -> int:
    """Return value if it is an integer position, raise BlindsInvalidValueError otherwise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise BlindsInvalidValueError(f"not an integer position: {value!r}")
    if not POSITION_CLOSED <= value <= POSITION_OPEN:
        raise BlindsInvalidValueError(f"position out of range: {value}")
    return value


class PositionController:
    def __init__(
        self,
        name: str,
        client: DeviceClient,
        notifier: Notifier,
        *,
        poll_interval_ms: int = DEFAULT_POLLING_MILLIS,
        tolerance: int = DEFAULT_TOLERANCE,
        battery_enabled: bool = False,
        clock: Callable[[], datetime] = dt_util.now,
    ) -> None:
        self._name = name
        self._client = client
        self._notifier = notifier
        self._poll_interval_ms = poll_interval_ms
        self._tolerance = tolerance
        self._battery_enabled = battery_enabled
        self._clock = clock

        self._current_position: int | None = None
        self._target_position: int | None = None
        self._battery_level: int | None = None
        self._last_update = LastUpdate()

        self._poll_handle: asyncio.TimerHandle | None = None
        self._moves_in_flight = 0
        # Bumped on every move request; polls started before a move are discarded.
        self._move_generation = 0
        self._tasks: set[asyncio.Task[None]] = set()
        self._stopped = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def poll_interval_ms(self) -> int:
        return self._poll_interval_ms

    @property
    def tolerance(self) -> int:
        return self._tolerance

    @property
    def battery_enabled(self) -> bool:
        return self._battery_enabled

    def start(self) -> None:
        """Run the initial sync poll; later polls reschedule themselves."""
        _LOGGER.info("%s: Polling blind state every %sms", self._name, self._poll_interval_ms)
        self._spawn(self._run_poll(initial_sync=True))

    async def async_shutdown(self) -> None:
        self._stopped = True
        self.stop_poll_timer()
        tasks = [task for task in self._tasks if task is not asyncio.current_task()]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def has_pending_poll(self) -> bool:
        return self._poll_handle is not None

    def start_poll_timer(self) -> None:
        self.stop_poll_timer()
        if self._stopped:
            return
        self._poll_handle = asyncio.get_running_loop().call_later(
            self._poll_interval_ms / 1000, self._handle_poll_timer
        )

    def stop_poll_timer(self) -> None:
        if self._poll_handle is not None:
            self._poll_handle.cancel()
            self._poll_handle = None

    def _handle_poll_timer(self) -> None:
        self._poll_handle = None
        # Keep trying to sync the target until the first poll succeeds.
        self._spawn(self._run_poll(initial_sync=self._target_position is None))

    async def _run_poll(self, initial_sync: bool) -> None:
        try:
            await self.poll_once(initial_sync=initial_sync)
        except Exception:
            _LOGGER.exception("%s: Unexpected error while polling", self._name)
            if self._moves_in_flight == 0:
                self.start_poll_timer()

    @property
    def current_position(self) -> int | None:
        return self._current_position

    @property
    def target_position(self) -> int | None:
        return self._target_position

    @property
    def battery_level(self) -> int | None:
        return self._battery_level

    @property
    def low_battery_status(self) -> LowBatteryStatus:
        if self._battery_level is not None and self._battery_level <= LOW_BATTERY_THRESHOLD:
            return LowBatteryStatus.LOW
        return LowBatteryStatus.NORMAL

    @property
    def last_update(self) -> LastUpdate:
        return self._last_update

    def last_update_description(self) -> str:
        return format_last_update(self._last_update.timestamp, self._clock())

    def full_status(self) -> dict[str, Any]:
        timestamp = self._last_update.timestamp
        return {
            "battery": self._battery_level,
            "targetPosition": {
                "value": self._target_position,
                "description": describe_position(self._target_position),
            },
            "currentPosition": {
                "value": self._current_position,
                "description": describe_position(self._current_position),
                "lastUpdate": {
                    "value": timestamp.isoformat() if timestamp else None,
                    "description": self.last_update_description(),
                    "status": str(self._last_update.status),
                },
            },
        }

    async def request_position(self, position: int) -> None:
        """Move the blind and return once the move sequence has completed.

        Polling is suspended while the SET call is in flight and resumed
        afterwards whether or not the call succeeded.
        """
        ensure_position(position)

        self._target_position = position
        _LOGGER.info("%s: Requested new position: %s", self._name, describe_position(position))

        self._moves_in_flight += 1
        self._move_generation += 1
        self.stop_poll_timer()
        try:
            try:
                await self._client.set_position(position)
            except BlindsTransportError as err:
                _LOGGER.warning("%s: Error setting the new position: %s", self._name, err)
            self.reconcile_observed_position(position)
        finally:
            self._moves_in_flight -= 1
            if self._moves_in_flight == 0:
                self.start_poll_timer()

    def reconcile_observed_position(self, observed: int) -> None:
        try:
            observed = ensure_position(observed)
        except BlindsInvalidValueError as err:
            _LOGGER.error("%s: Error setting current position: %s", self._name, err)
            return

        effective = observed
        if (
            self._target_position is not None
            and abs(self._target_position - observed) <= self._tolerance
        ):
            effective = self._target_position

        previous = self._current_position
        self._current_position = effective
        if effective == previous:
            return

        if previous is None:
            _LOGGER.info(
                "%s: Setting initial position: %s", self._name, describe_position(effective)
            )
        else:
            _LOGGER.info(
                "%s: Blind has moved, new position: %s", self._name, describe_position(effective)
            )
        self._notifier.publish_current_position(effective)

    def _superseded(self, generation: int) -> bool:
        return self._moves_in_flight > 0 or generation != self._move_generation

    async def poll_once(self, initial_sync: bool = False) -> None:
        generation = self._move_generation

        try:
            body = await self._client.fetch_position()
        except BlindsTransportError as err:
            if self._superseded(generation):
                _LOGGER.debug("%s: Discarding failed poll started before a move", self._name)
                return
            _LOGGER.warning(
                "%s: Error in getting current position: %s", self._name, strip_newlines(str(err))
            )
            self._finish_poll(UpdateStatus.FAILED)
            return

        if self._superseded(generation):
            _LOGGER.debug("%s: Discarding poll result started before a move", self._name)
            return

        try:
            position = parse_position(body)
        except BlindsParseError as err:
            _LOGGER.warning("%s: Error in getting current position: %s", self._name, err)
            self._finish_poll(UpdateStatus.FAILED)
            return

        _LOGGER.debug("%s: Current position fetched: %s", self._name, position)
        self._last_update = LastUpdate(self._clock(), UpdateStatus.SUCCESS)
        self.reconcile_observed_position(position)

        if initial_sync:
            self._target_position = position
            self._notifier.publish_target_position(position)

        if self._battery_enabled:
            self._spawn(self.refresh_battery_level())

        self._finish_poll(UpdateStatus.SUCCESS)

    def _finish_poll(self, status: UpdateStatus) -> None:
        if status is UpdateStatus.FAILED:
            self._last_update = LastUpdate(self._clock(), status)
        self._notifier.publish_last_update(self.last_update_description(), status)
        self.start_poll_timer()

    async def refresh_battery_level(self) -> None:
        try:
            level = parse_integer(await self._client.fetch_battery_level())
        except (BlindsTransportError, BlindsParseError) as err:
            _LOGGER.warning(
                "%s: Error in getting battery level: %s", self._name, strip_newlines(str(err))
            )
            return

        _LOGGER.debug("%s: Battery level fetched: %s", self._name, level)
        self._battery_level = level
        self._notifier.publish_battery(level, self.low_battery_status)
