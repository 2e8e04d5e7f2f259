from __future__ import annotations

from typing import Any

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .controller import LowBatteryStatus, PositionController
from .coordinator import BlindsCoordinator
from .entity import BlindsEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    controller: PositionController = data["controller"]

    if not controller.battery_enabled:
        return

    async_add_entities(
        [BlindsLowBatteryBinarySensor(data["coordinator"], controller, entry.entry_id)]
    )


class BlindsLowBatteryBinarySensor(BlindsEntity, BinarySensorEntity):
    _attr_device_class = BinarySensorDeviceClass.BATTERY
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(
        self, coordinator: BlindsCoordinator, controller: PositionController, entry_id: str
    ) -> None:
        super().__init__(coordinator, controller, entry_id, "low_battery")
        self._attr_name = "Low battery"

    @property
    def is_on(self) -> bool:
        # BATTERY device class: on means low
        return self._controller.low_battery_status is LowBatteryStatus.LOW

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        return {
            "battery_level": self._controller.battery_level,
            "status": str(self._controller.low_battery_status),
        }
