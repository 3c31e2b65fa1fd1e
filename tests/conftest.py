# File: tests/conftest.py
from __future__ import annotations

import asyncio
import io
import json
import time
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from robofinder.config import FinderConfig
from robofinder.logger import configure

CDX_HEADER = ["timestamp", "original"]


@dataclass
class FakeArchive:
    """State behind the fake CDX and replay endpoints; tests mutate it freely."""

    index: Any = field(default_factory=lambda: [CDX_HEADER])
    index_raw: Optional[str] = None
    index_status: int = 200
    snapshots: Dict[str, Tuple[int, str]] = field(default_factory=dict)
    delays: Dict[str, float] = field(default_factory=dict)
    index_queries: List[Dict[str, str]] = field(default_factory=list)
    snapshot_requests: List[Tuple[str, float]] = field(default_factory=list)
    base: str = ""

    def add_capture(self, timestamp: str, body: str, status: int = 200, delay: float = 0.0) -> None:
        self.index.append([timestamp, "http://example.com/robots.txt"])
        self.snapshots[timestamp] = (status, body)
        if delay:
            self.delays[timestamp] = delay

    @property
    def cdx_endpoint(self) -> str:
        return f"{self.base}/cdx/search/cdx"

    @property
    def replay_base(self) -> str:
        return f"{self.base}/web"


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def fake_archive() -> FakeArchive:
    return FakeArchive()


@pytest_asyncio.fixture
async def archive_server(fake_archive: FakeArchive, unused_tcp_port: int) -> AsyncIterator[FakeArchive]:
    """Run the fake archive and return its state with ``base`` filled in."""
    app = web.Application()

    async def handle_cdx(request: web.Request) -> web.Response:
        fake_archive.index_queries.append(dict(request.query))
        text = fake_archive.index_raw if fake_archive.index_raw is not None else json.dumps(fake_archive.index)
        return web.Response(text=text, status=fake_archive.index_status, content_type="text/plain")

    async def handle_replay(request: web.Request) -> web.Response:
        stamp = request.match_info["stamp"]
        fake_archive.snapshot_requests.append((stamp, time.monotonic()))
        await asyncio.sleep(fake_archive.delays.get(stamp.removesuffix("if_"), 0))
        status, body = fake_archive.snapshots.get(stamp.removesuffix("if_"), (404, "not archived"))
        return web.Response(text=body, status=status, content_type="text/plain")

    app.router.add_get("/cdx/search/cdx", handle_cdx)
    app.router.add_get("/web/{stamp}/{original:.*}", handle_replay)

    async for url in _serve_app(app, unused_tcp_port):
        fake_archive.base = url
        yield fake_archive


@pytest.fixture()
def make_config():
    """Factory for valid FinderConfig objects with fast defaults."""

    def _make(**overrides: Any) -> FinderConfig:
        data: Dict[str, Any] = {
            "url": "http://example.com",
            "delay": 0.0,
            "limit": 10,
            "paths": True,
            "sitemaps": True,
            "timeout": 5.0,
        }
        data.update(overrides)
        return FinderConfig(**data)

    return _make


@pytest.fixture()
def log_output() -> io.StringIO:
    """
    Project logger at DEBUG level, console handler redirected into a buffer.
    Read lines with ``log_output.getvalue()``.
    """
    buffer = io.StringIO()
    lg = configure(level="DEBUG")
    lg.handlers[0].setStream(buffer)
    return buffer


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    configure(level="INFO")
