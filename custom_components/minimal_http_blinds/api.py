from __future__ import annotations

import asyncio

import aiohttp

from .const import (
    DEFAULT_GET_METHOD,
    DEFAULT_SET_METHOD,
    POSITION_PLACEHOLDER,
    REQUEST_TIMEOUT_SEC,
)
from .exceptions import BlindsTransportError


def build_set_position_url(template: str, position: int) -> str:
    return template.replace(POSITION_PLACEHOLDER, str(position))


class MinimalHttpBlindsApi:
    """Plain-text HTTP client for a blinds device.

    The device answers with bare integer bodies; parsing them is left to the
    caller so that transport and parse failures stay distinguishable.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        get_position_url: str,
        set_position_url: str,
        get_position_method: str = DEFAULT_GET_METHOD,
        set_position_method: str = DEFAULT_SET_METHOD,
        battery_url: str | None = None,
        timeout: float = REQUEST_TIMEOUT_SEC,
    ) -> None:
        self._session = session
        self._get_position_url = get_position_url
        self._set_position_url = set_position_url
        self._get_position_method = get_position_method.upper()
        self._set_position_method = set_position_method.upper()
        self._battery_url = battery_url
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def has_battery(self) -> bool:
        return self._battery_url is not None

    async def _request(self, method: str, url: str) -> str:
        try:
            async with self._session.request(method, url, timeout=self._timeout) as resp:
                # Undecodable bytes become U+FFFD and fail integer parsing later
                body = await resp.text(errors="replace")
                if resp.status >= 300:
                    raise BlindsTransportError(
                        f"{method} {url} failed: HTTP {resp.status}"
                    )
                return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise BlindsTransportError(f"{method} {url} failed: {e!r}") from e

    async def fetch_position(self) -> str:
        return await self._request(self._get_position_method, self._get_position_url)

    async def set_position(self, position: int) -> None:
        url = build_set_position_url(self._set_position_url, position)
        await self._request(self._set_position_method, url)

    async def fetch_battery_level(self) -> str:
        if self._battery_url is None:
            raise BlindsTransportError("No battery level URL configured")
        return await self._request("GET", self._battery_url)
