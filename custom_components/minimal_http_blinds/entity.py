"""Shared entity helpers for the minimal HTTP blinds integration."""

from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import DOMAIN
from .controller import PositionController
from .coordinator import BlindsCoordinator


class BlindsEntity(CoordinatorEntity[BlindsCoordinator]):
    """Base entity reading its state from the PositionController."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: BlindsCoordinator,
        controller: PositionController,
        entry_id: str,
        key: str,
    ) -> None:
        super().__init__(coordinator)
        self._controller = controller
        self._entry_id = entry_id
        self._attr_unique_id = f"{entry_id}_{key}"

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(
            identifiers={(DOMAIN, self._entry_id)},
            name=self._controller.name,
        )
