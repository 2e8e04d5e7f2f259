import asyncio

import aiohttp
import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer, unused_port

from custom_components.minimal_http_blinds.api import MinimalHttpBlindsApi
from custom_components.minimal_http_blinds.controller import PositionController, UpdateStatus
from custom_components.minimal_http_blinds.exceptions import BlindsParseError, BlindsTransportError
from custom_components.minimal_http_blinds.helpers import parse_position

from conftest import RecordingNotifier


@pytest.fixture
async def device():
    state = {"position": "42", "battery": "80", "requests": []}

    async def position(request):
        state["requests"].append((request.method, request.path))
        return web.Response(text=state["position"])

    async def set_position(request):
        state["requests"].append((request.method, request.path))
        return web.Response(text="OK")

    async def battery(request):
        state["requests"].append((request.method, request.path))
        return web.Response(text=state["battery"])

    async def broken(request):
        return web.Response(status=500, text="boom")

    async def garbled(request):
        state["requests"].append((request.method, request.path))
        return web.Response(body=b"\xff\xfe4", content_type="text/plain")

    async def slow(request):
        await asyncio.sleep(0.5)
        return web.Response(text="10")

    app = web.Application()
    app.router.add_route("*", "/position", position)
    app.router.add_route("*", "/set/{position}", set_position)
    app.router.add_get("/battery", battery)
    app.router.add_get("/broken", broken)
    app.router.add_get("/slow", slow)
    app.router.add_route("*", "/garbled", garbled)
    app.router.add_route("*", "/garbled/{position}", garbled)

    server = TestServer(app)
    await server.start_server()
    yield server, state
    await server.close()


@pytest.fixture
async def session():
    async with aiohttp.ClientSession() as session:
        yield session


def _api(session, server, **kwargs):
    kwargs.setdefault("get_position_url", str(server.make_url("/position")))
    kwargs.setdefault("set_position_url", str(server.make_url("/set/%position%")))
    return MinimalHttpBlindsApi(session, **kwargs)


async def test_fetch_position(device, session):
    server, state = device
    api = _api(session, server)

    assert await api.fetch_position() == "42"
    assert state["requests"] == [("GET", "/position")]


async def test_set_position_substitutes_placeholder(device, session):
    server, state = device
    api = _api(session, server, set_position_method="put")

    await api.set_position(35)

    assert state["requests"] == [("PUT", "/set/35")]


async def test_default_set_method_is_post(device, session):
    server, state = device
    api = _api(session, server)

    await api.set_position(0)

    assert state["requests"] == [("POST", "/set/0")]


async def test_fetch_battery_level(device, session):
    server, state = device
    api = _api(session, server, battery_url=str(server.make_url("/battery")))

    assert api.has_battery
    assert await api.fetch_battery_level() == "80"


async def test_fetch_battery_level_without_url(device, session):
    server, _ = device
    api = _api(session, server)

    assert not api.has_battery
    with pytest.raises(BlindsTransportError):
        await api.fetch_battery_level()


async def test_http_error_status(device, session):
    server, _ = device
    api = _api(session, server, get_position_url=str(server.make_url("/broken")))

    with pytest.raises(BlindsTransportError, match="HTTP 500"):
        await api.fetch_position()


async def test_timeout(device, session):
    server, _ = device
    api = _api(session, server, get_position_url=str(server.make_url("/slow")), timeout=0.05)

    with pytest.raises(BlindsTransportError):
        await api.fetch_position()


async def test_connection_refused(session):
    url = f"http://127.0.0.1:{unused_port()}/position"
    api = MinimalHttpBlindsApi(session, url, url)

    with pytest.raises(BlindsTransportError):
        await api.fetch_position()


async def test_undecodable_body_is_returned_replaced(device, session):
    server, _ = device
    api = _api(session, server, get_position_url=str(server.make_url("/garbled")))

    body = await api.fetch_position()

    assert body.endswith("4")
    with pytest.raises(BlindsParseError):
        parse_position(body)


async def test_undecodable_replies_keep_controller_polling(device, session):
    server, _ = device
    api = _api(
        session,
        server,
        get_position_url=str(server.make_url("/garbled")),
        set_position_url=str(server.make_url("/garbled/%position%")),
    )
    controller = PositionController("Test blind", api, RecordingNotifier(), poll_interval_ms=60_000)
    try:
        await controller.poll_once(initial_sync=True)

        assert controller.last_update.status is UpdateStatus.FAILED
        assert controller.has_pending_poll

        await controller.request_position(30)

        assert controller.current_position == 30
        assert controller.has_pending_poll
    finally:
        await controller.async_shutdown()
