"""Optional local HTTP API exposing the blind status and a position setter.

GET  /                    -> aggregate status as JSON
POST /position/{position} -> move the blind, answers once the move completed
"""

from __future__ import annotations

import logging

import voluptuous as vol
from aiohttp import web

from .const import POSITION_CLOSED, POSITION_OPEN
from .controller import PositionController

_LOGGER = logging.getLogger(__name__)

POSITION_SCHEMA = vol.Schema(
    vol.All(vol.Coerce(int), vol.Range(min=POSITION_CLOSED, max=POSITION_OPEN))
)


class StatusApi:
    def __init__(self, controller: PositionController, host: str, port: int) -> None:
        self._controller = controller
        self._host = host
        self._port = port
        self._runner: web.AppRunner | None = None

    def build_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get("/", self._handle_status)
        app.router.add_post("/position/{position}", self._handle_set_position)
        return app

    async def async_start(self) -> None:
        self._runner = web.AppRunner(self.build_app())
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._host, self._port)
        await site.start()
        _LOGGER.info(
            "%s: Status API listening on %s:%s", self._controller.name, self._host, self._port
        )

    async def async_stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    async def _handle_status(self, request: web.Request) -> web.Response:
        return web.json_response(self._controller.full_status())

    async def _handle_set_position(self, request: web.Request) -> web.Response:
        try:
            position = POSITION_SCHEMA(request.match_info["position"])
        except vol.Invalid as err:
            return web.json_response({"error": f"Invalid position: {err}"}, status=400)

        await self._controller.request_position(position)
        return web.json_response(self._controller.full_status())
