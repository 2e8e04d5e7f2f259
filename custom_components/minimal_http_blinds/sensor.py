from __future__ import annotations

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import PERCENTAGE, EntityCategory
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN
from .controller import PositionController
from .coordinator import BlindsCoordinator
from .entity import BlindsEntity


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    data = hass.data[DOMAIN][entry.entry_id]
    controller: PositionController = data["controller"]

    # Battery entities exist only when a battery URL is configured
    if not controller.battery_enabled:
        return

    async_add_entities([BlindsBatterySensor(data["coordinator"], controller, entry.entry_id)])


class BlindsBatterySensor(BlindsEntity, SensorEntity):
    _attr_device_class = SensorDeviceClass.BATTERY
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = PERCENTAGE
    _attr_entity_category = EntityCategory.DIAGNOSTIC

    def __init__(
        self, coordinator: BlindsCoordinator, controller: PositionController, entry_id: str
    ) -> None:
        super().__init__(coordinator, controller, entry_id, "battery")
        self._attr_name = "Battery level"

    @property
    def native_value(self) -> int | None:
        return self._controller.battery_level
