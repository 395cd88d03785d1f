"""Fixtures — local HTTP server for probe tests."""

import socket

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


async def _ok(request):
    return web.Response(text="<html><head><title>Home</title></head><body>ok</body></html>",
                        content_type="text/html")


async def _redirect(request):
    raise web.HTTPFound("/landing/")


async def _missing(request):
    return web.Response(status=404, text="not found")


@pytest_asyncio.fixture
async def http_server():
    """aiohttp server with a page, a redirect and a 404 route."""
    app = web.Application()
    app.router.add_get("/", _ok)
    app.router.add_get("/landing/", _ok)
    app.router.add_get("/redirect/", _redirect)
    app.router.add_get("/missing/", _missing)

    server = TestServer(app)
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def dead_url():
    """URL of a local port nothing listens on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/"
