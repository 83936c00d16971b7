# File: tests/conftest.py
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import web

from helpers import APP_JS, html_page, js_file, make_config, serve_app
from script_scout.config import ScannerConfig
from script_scout.logger import init_logging


@pytest.fixture()
def basic_config() -> ScannerConfig:
    """
    Return a basic valid ScannerConfig pointing at example.com.
    """
    return make_config("http://example.com")


@pytest_asyncio.fixture
async def site_server(unused_tcp_port: int) -> AsyncIterator[str]:
    """
    Small site: root links to /about, /contact and an ads origin;
    pages carry inline and external scripts.
    """
    app = web.Application()
    root = (
        "<html><head>"
        '<script src="/app.js"></script>'
        "<script>var x = 1;</script>"
        "</head><body>"
        '<a href="/about">About</a>'
        '<a href="/contact#form">Contact</a>'
        '<a href="https://ads.example/x">Ads</a>'
        '<a href="mailto:info@example.com">Mail</a>'
        "</body></html>"
    )
    about = (
        "<script>var x = 1;</script>"
        '<a href="/">Home</a><a href="/contact">Contact</a>'
    )
    contact = '<script src="app.js"></script><a href="/about#team">About</a>'

    app.router.add_get("/", html_page(root))
    app.router.add_get("/about", html_page(about))
    app.router.add_get("/contact", html_page(contact))
    app.router.add_get("/app.js", js_file(APP_JS))

    async for url in serve_app(app, unused_tcp_port):
        yield url


@pytest.fixture(autouse=True)
def reset_logging():
    """CLI tests point the logger at CliRunner streams; restore it afterwards."""
    yield
    init_logging(level="WARNING")
