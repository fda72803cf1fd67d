import asyncio
from typing import AsyncIterator, Awaitable, Callable
from urllib.parse import urlsplit

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web

from page_inspector.inspector.safety import is_blocked_url


def loopback_filter(url: str) -> bool:
    """
    URL filter for tests: the regular blocklist, except that the local
    test servers on 127.0.0.1 are reachable.
    """
    try:
        parsed = urlsplit(url)
        host = parsed.hostname
    except ValueError:
        return True
    if parsed.scheme in ("http", "https") and host == "127.0.0.1":
        return False
    return is_blocked_url(url)


@pytest.fixture()
def url_filter() -> Callable[[str], bool]:
    return loopback_filter


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free local ports; yields a starter returning the base URL."""
    runners = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _serve

    for runner in runners:
        await runner.cleanup()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as client:
        yield client


@pytest.fixture()
def slow_handler():
    """Build a handler that sleeps before answering."""

    def _build(delay: float, body: bytes = b"slow"):
        async def handler(_request):
            await asyncio.sleep(delay)
            return web.Response(body=body, content_type="text/plain")

        return handler

    return _build
