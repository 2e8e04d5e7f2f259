"""The minimal HTTP blinds integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import MinimalHttpBlindsApi
from .config import BlindsConfig
from .const import DOMAIN, PLATFORMS
from .controller import PositionController
from .coordinator import BlindsCoordinator
from .status_api import StatusApi

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    conf = BlindsConfig.from_mapping({**entry.data, **entry.options})

    api = MinimalHttpBlindsApi(
        async_get_clientsession(hass),
        get_position_url=conf.get_position_url,
        set_position_url=conf.set_position_url,
        get_position_method=conf.get_position_method,
        set_position_method=conf.set_position_method,
        battery_url=conf.battery_url,
    )
    coordinator = BlindsCoordinator(hass, conf.name)
    controller = PositionController(
        conf.name,
        api,
        coordinator,
        poll_interval_ms=conf.poll_interval_ms,
        tolerance=conf.tolerance,
        battery_enabled=conf.battery_url is not None,
    )

    status_api = None
    if conf.api is not None:
        status_api = StatusApi(controller, conf.api.host, conf.api.port)
        try:
            await status_api.async_start()
        except OSError as err:
            raise ConfigEntryNotReady(
                f"Cannot start status API on {conf.api.host}:{conf.api.port}: {err}"
            ) from err

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        "api": api,
        "coordinator": coordinator,
        "controller": controller,
        "status_api": status_api,
    }

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        hass.data[DOMAIN].pop(entry.entry_id, None)
        if status_api is not None:
            await status_api.async_stop()
        raise

    controller.start()
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if not unload_ok:
        return False

    data = hass.data[DOMAIN].pop(entry.entry_id)
    await data["controller"].async_shutdown()
    if data["status_api"] is not None:
        await data["status_api"].async_stop()

    _LOGGER.debug("Unloaded %s", entry.title)
    return True
