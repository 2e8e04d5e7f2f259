from __future__ import annotations

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import HomeAssistant
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import MinimalHttpBlindsApi
from .config import BlindsConfig
from .const import (
    CONF_API_HOST,
    CONF_API_PORT,
    CONF_BATTERY_URL,
    CONF_GET_POSITION_METHOD,
    CONF_GET_POSITION_URL,
    CONF_NAME,
    CONF_POLLING_MILLIS,
    CONF_SET_POSITION_METHOD,
    CONF_SET_POSITION_URL,
    CONF_TOLERANCE,
    DEFAULT_GET_METHOD,
    DEFAULT_NAME,
    DEFAULT_POLLING_MILLIS,
    DEFAULT_SET_METHOD,
    DEFAULT_TOLERANCE,
    DOMAIN,
    HTTP_METHODS,
)
from .exceptions import BlindsParseError, BlindsTransportError
from .helpers import parse_position


async def _validate(hass: HomeAssistant, conf: BlindsConfig) -> None:
    api = MinimalHttpBlindsApi(
        async_get_clientsession(hass),
        get_position_url=conf.get_position_url,
        set_position_url=conf.set_position_url,
        get_position_method=conf.get_position_method,
        set_position_method=conf.set_position_method,
    )
    parse_position(await api.fetch_position())


class MinimalHttpBlindsConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    async def async_step_user(self, user_input=None):
        errors = {}

        if user_input is not None:
            try:
                conf = BlindsConfig.from_mapping(user_input)
                await _validate(self.hass, conf)
            except vol.Invalid:
                errors["base"] = "invalid_config"
            except BlindsTransportError:
                errors["base"] = "cannot_connect"
            except BlindsParseError:
                errors["base"] = "invalid_response"
            except Exception:
                errors["base"] = "unknown"
            else:
                await self.async_set_unique_id(conf.get_position_url)
                self._abort_if_unique_id_configured()

                data = {k: v for k, v in user_input.items() if v not in (None, "")}
                return self.async_create_entry(title=conf.name, data=data)

        schema = vol.Schema(
            {
                vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
                vol.Required(CONF_GET_POSITION_URL): str,
                vol.Required(CONF_SET_POSITION_URL): str,
                vol.Optional(CONF_GET_POSITION_METHOD, default=DEFAULT_GET_METHOD): vol.In(
                    HTTP_METHODS
                ),
                vol.Optional(CONF_SET_POSITION_METHOD, default=DEFAULT_SET_METHOD): vol.In(
                    HTTP_METHODS
                ),
                vol.Optional(CONF_POLLING_MILLIS, default=DEFAULT_POLLING_MILLIS): int,
                vol.Optional(CONF_TOLERANCE, default=DEFAULT_TOLERANCE): int,
                vol.Optional(CONF_BATTERY_URL): str,
                vol.Optional(CONF_API_HOST): str,
                vol.Optional(CONF_API_PORT): int,
            }
        )

        return self.async_show_form(step_id="user", data_schema=schema, errors=errors)
