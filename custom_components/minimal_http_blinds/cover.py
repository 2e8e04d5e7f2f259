from __future__ import annotations

from typing import Any

from homeassistant.components.cover import (
    ATTR_POSITION,
    CoverDeviceClass,
    CoverEntity,
    CoverEntityFeature,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, POSITION_CLOSED, POSITION_OPEN
from .controller import PositionController
from .coordinator import BlindsCoordinator
from .entity import BlindsEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    async_add_entities(
        [MinimalHttpBlindsCover(data["coordinator"], data["controller"], entry.entry_id)]
    )


class MinimalHttpBlindsCover(BlindsEntity, CoverEntity):
    _attr_name = None
    _attr_device_class = CoverDeviceClass.BLIND
    _attr_supported_features = (
        CoverEntityFeature.OPEN | CoverEntityFeature.CLOSE | CoverEntityFeature.SET_POSITION
    )

    def __init__(
        self, coordinator: BlindsCoordinator, controller: PositionController, entry_id: str
    ) -> None:
        super().__init__(coordinator, controller, entry_id, "cover")

    # 100 = fully open, 0 = fully closed
    @property
    def current_cover_position(self) -> int | None:
        return self._controller.current_position

    @property
    def is_closed(self) -> bool | None:
        pos = self._controller.current_position
        if pos is None:
            return None
        return pos == POSITION_CLOSED

    @property
    def is_opening(self) -> bool:
        current = self._controller.current_position
        target = self._controller.target_position
        return current is not None and target is not None and target > current

    @property
    def is_closing(self) -> bool:
        current = self._controller.current_position
        target = self._controller.target_position
        return current is not None and target is not None and target < current

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "target_position": self._controller.target_position,
            "last_update": self._controller.last_update_description(),
            "last_update_status": str(self._controller.last_update.status),
        }

    async def async_open_cover(self, **kwargs: Any) -> None:
        await self._controller.request_position(POSITION_OPEN)

    async def async_close_cover(self, **kwargs: Any) -> None:
        await self._controller.request_position(POSITION_CLOSED)

    async def async_set_cover_position(self, **kwargs: Any) -> None:
        position = kwargs.get(ATTR_POSITION)
        if position is None:
            return
        position = max(POSITION_CLOSED, min(POSITION_OPEN, int(position)))
        await self._controller.request_position(position)
