"""Shared fixtures: an in-process fake bridge served by aiohttp's test server."""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pyhomebridge import HomebridgeClient, HomeKit


class FakeBridge:
    """Minimal bridge keeping accessories in insertion order.

    Tests can inject raw accessory payloads, force every response to a given
    status, delay responses, or replace responses entirely.
    """

    def __init__(self) -> None:
        self.accessories: Dict[str, Dict[str, Any]] = {}
        self.requests: List[Tuple[str, str, Any]] = []
        self.force_status: Optional[int] = None
        self.respond_with: Optional[Callable[[], web.StreamResponse]] = None
        self.delay: float = 0

    def add_switch(self, accessory_id: str, name: str, on: bool = False) -> None:
        self.accessories[accessory_id] = {
            "state": {"on": on},
            "config": {"id": accessory_id, "name": name, "on_url": None, "off_url": None},
        }

    def add_raw(self, accessory_id: str, payload: Any) -> None:
        self.accessories[accessory_id] = payload

    @web.middleware
    async def _middleware(self, request: web.Request, handler):
        body = await request.json() if request.can_read_body else None
        self.requests.append((request.method, request.path, body))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.respond_with is not None:
            return self.respond_with()
        if self.force_status is not None:
            return web.Response(status=self.force_status, text="forced failure")
        return await handler(request)

    def app(self) -> web.Application:
        app = web.Application(middlewares=[self._middleware])
        app.router.add_get("/accessory", self.list_accessories)
        app.router.add_post("/accessory", self.create_accessory)
        app.router.add_get("/accessory/{id}", self.get_accessory)
        app.router.add_delete("/accessory/{id}", self.delete_accessory)
        app.router.add_get("/accessory/{id}/state", self.get_state)
        app.router.add_put("/accessory/{id}/state", self.put_state)
        return app

    def _lookup(self, request: web.Request) -> Dict[str, Any]:
        accessory_id = request.match_info["id"]
        if accessory_id not in self.accessories:
            raise web.HTTPNotFound(text=f"no accessory {accessory_id}")
        return self.accessories[accessory_id]

    async def list_accessories(self, request: web.Request) -> web.Response:
        return web.json_response({"accessories": list(self.accessories.values())})

    async def create_accessory(self, request: web.Request) -> web.Response:
        config = await request.json()
        if config["id"] in self.accessories:
            return web.Response(status=409, text="already exists")
        self.accessories[config["id"]] = {"state": {"on": False}, "config": config}
        return web.Response(status=201)

    async def get_accessory(self, request: web.Request) -> web.Response:
        return web.json_response(self._lookup(request))

    async def delete_accessory(self, request: web.Request) -> web.Response:
        self._lookup(request)
        del self.accessories[request.match_info["id"]]
        return web.Response(status=204)

    async def get_state(self, request: web.Request) -> web.Response:
        return web.json_response({"state": self._lookup(request)["state"]})

    async def put_state(self, request: web.Request) -> web.Response:
        accessory = self._lookup(request)
        accessory["state"] = await request.json()
        return web.Response(status=204)


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest_asyncio.fixture
async def bridge_host(bridge):
    server = TestServer(bridge.app())
    await server.start_server()
    yield f"http://{server.host}:{server.port}"
    await server.close()


@pytest_asyncio.fixture
async def client(bridge_host):
    http_client = HomebridgeClient(bridge_host)
    yield http_client
    await http_client.close_session()


@pytest_asyncio.fixture
async def homekit(bridge_host):
    kit = HomeKit.connect(bridge_host)
    yield kit
    await kit.close()
