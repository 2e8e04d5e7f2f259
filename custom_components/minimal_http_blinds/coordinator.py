from __future__ import annotations

import logging

from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .controller import LowBatteryStatus, UpdateStatus

_LOGGER = logging.getLogger(__name__)


class BlindsCoordinator(DataUpdateCoordinator[None]):
    """Push-only coordinator fanning controller updates out to entities.

    It never polls on its own (update_interval is None); the PositionController
    owns the polling timer and calls the publish_* methods. Entities read the
    cached values back from the controller.
    """

    def __init__(self, hass: HomeAssistant, name: str) -> None:
        super().__init__(
            hass,
            logger=_LOGGER,
            name=f"{DOMAIN}_{name}",
            update_interval=None,
        )

    async def _async_update_data(self) -> None:
        return None

    def publish_current_position(self, position: int) -> None:
        self.async_update_listeners()

    def publish_target_position(self, position: int) -> None:
        self.async_update_listeners()

    def publish_battery(self, level: int, status: LowBatteryStatus) -> None:
        self.async_update_listeners()

    def publish_last_update(self, description: str, status: UpdateStatus) -> None:
        self.async_update_listeners()
