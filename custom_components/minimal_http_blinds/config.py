from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

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
    DEFAULT_API_HOST,
    DEFAULT_GET_METHOD,
    DEFAULT_NAME,
    DEFAULT_POLLING_MILLIS,
    DEFAULT_SET_METHOD,
    DEFAULT_TOLERANCE,
    HTTP_METHODS,
)


def _method(value: Any) -> str:
    return vol.In(HTTP_METHODS)(str(value).upper())


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Required(CONF_GET_POSITION_URL): str,
        vol.Required(CONF_SET_POSITION_URL): str,
        vol.Optional(CONF_GET_POSITION_METHOD, default=DEFAULT_GET_METHOD): _method,
        vol.Optional(CONF_SET_POSITION_METHOD, default=DEFAULT_SET_METHOD): _method,
        vol.Optional(CONF_POLLING_MILLIS, default=DEFAULT_POLLING_MILLIS): vol.All(
            vol.Coerce(int), vol.Range(min=1)
        ),
        vol.Optional(CONF_TOLERANCE, default=DEFAULT_TOLERANCE): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=100)
        ),
        vol.Optional(CONF_BATTERY_URL): vol.Any(None, str),
        vol.Optional(CONF_API_HOST): vol.Any(None, str),
        vol.Optional(CONF_API_PORT): vol.Any(
            None, vol.All(vol.Coerce(int), vol.Range(min=1, max=65535))
        ),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True)
class StatusApiConfig:
    host: str
    port: int


@dataclass(frozen=True)
class BlindsConfig:
    name: str
    get_position_url: str
    set_position_url: str
    get_position_method: str = DEFAULT_GET_METHOD
    set_position_method: str = DEFAULT_SET_METHOD
    poll_interval_ms: int = DEFAULT_POLLING_MILLIS
    tolerance: int = DEFAULT_TOLERANCE
    battery_url: str | None = None
    api: StatusApiConfig | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> BlindsConfig:
        """Validate raw config entry data and apply defaults.

        Empty strings for the optional battery URL and API host count as
        "not configured". The status API is enabled only when a port is set.
        """
        conf = CONFIG_SCHEMA(dict(data))

        api = None
        if conf.get(CONF_API_PORT):
            api = StatusApiConfig(
                host=conf.get(CONF_API_HOST) or DEFAULT_API_HOST,
                port=conf[CONF_API_PORT],
            )

        return cls(
            name=conf[CONF_NAME] or DEFAULT_NAME,
            get_position_url=conf[CONF_GET_POSITION_URL],
            set_position_url=conf[CONF_SET_POSITION_URL],
            get_position_method=conf[CONF_GET_POSITION_METHOD],
            set_position_method=conf[CONF_SET_POSITION_METHOD],
            poll_interval_ms=conf[CONF_POLLING_MILLIS],
            tolerance=conf[CONF_TOLERANCE],
            battery_url=conf.get(CONF_BATTERY_URL) or None,
            api=api,
        )
