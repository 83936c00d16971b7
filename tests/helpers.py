# File: tests/helpers.py
"""Shared helpers for the test-suite: aiohttp handlers, app runner, config factory."""
from collections.abc import AsyncIterator, Callable
from typing import Any, Dict

from aiohttp import web

from script_scout.config import ScannerConfig

APP_JS = "function init() { if (a && b) { go(); } }\n"


def html_page(body: str) -> Callable[[web.Request], Any]:
    """Return an aiohttp handler that serves *body* as text/html."""

    async def handler(_):
        return web.Response(text=body, content_type="text/html")

    return handler


def js_file(code: str) -> Callable[[web.Request], Any]:
    async def handler(_):
        return web.Response(text=code, content_type="application/javascript")

    return handler


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def make_config(root_url: str, **overrides: Any) -> ScannerConfig:
    """ScannerConfig tuned for local test servers: fast, no retries."""
    params: Dict[str, Any] = {
        "root_url": root_url,
        "max_pages": 10,
        "timeout": 2.0,
        "user_agent": "TestAgent/1.0",
        "rate_limit": 1000.0,
        "retry_times": 0,
        "backoff_factor": 0.0,
    }
    params.update(overrides)
    return ScannerConfig(**params)
