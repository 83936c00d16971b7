# File: tests/test_engine.py
"""End-to-end runs of start_scan against local servers."""
from __future__ import annotations

import pytest
from aiohttp import web

from helpers import APP_JS, html_page, make_config, serve_app
from script_scout.analyzer.inventory import Origin
from script_scout.analyzer.metrics import ComplexityBucket, ScriptMetrics
from script_scout.crawler.models import ScriptKind
from script_scout.crawler.script_identifier import inline_script_id
from script_scout.engine import start_scan


@pytest.mark.asyncio()
async def test_full_scan_inventory(site_server: str):
    report = await start_scan(make_config(site_server))

    assert [p.url for p in report.pages] == [
        f"{site_server}/",
        f"{site_server}/about",
        f"{site_server}/contact",
    ]
    assert list(report.inventory) == [f"{site_server}/app.js", inline_script_id("var x = 1;")]

    app_js = report.inventory[f"{site_server}/app.js"]
    assert app_js.origin is Origin.FIRST_PARTY
    assert app_js.usage_count == 2
    assert app_js.pages_used_on == [f"{site_server}/", f"{site_server}/contact"]
    assert app_js.metrics.size_bytes == len(APP_JS)
    assert app_js.metrics.function_count == 1

    inline = report.inventory[inline_script_id("var x = 1;")]
    assert inline.kind is ScriptKind.INLINE
    assert inline.origin is Origin.FIRST_PARTY
    assert inline.pages_used_on == [f"{site_server}/", f"{site_server}/about"]
    assert inline.metrics.size_bytes == len("var x = 1;")

    assert report.summary() == {
        "pages_crawled": 3,
        "unique_scripts": 2,
        "first_party_scripts": 2,
        "third_party_scripts": 0,
        "failed_pages": 0,
    }


@pytest.mark.asyncio()
async def test_duplicate_inline_and_missing_external(unused_tcp_port: int):
    """Two identical inline scripts plus an external one that 404s."""
    app = web.Application()
    app.router.add_get(
        "/",
        html_page(
            "<script>track('x');</script>"
            "<script>track('x');</script>"
            '<script src="/app.js"></script>'
        ),
    )

    async for base in serve_app(app, unused_tcp_port):
        report = await start_scan(make_config(base))

    assert len(report.inventory) == 2
    inline = report.inventory[inline_script_id("track('x');")]
    assert inline.usage_count == 2
    assert inline.metrics.complexity_bucket is ComplexityBucket.TRIVIAL
    assert report.inventory[f"{base}/app.js"].metrics == ScriptMetrics()


@pytest.mark.asyncio()
async def test_third_party_scripts(unused_tcp_port_factory):
    cdn_app = web.Application()
    cdn_app.router.add_get("/lib.js", html_page("var lib = 1;"))
    site_app = web.Application()

    async for cdn in serve_app(cdn_app, unused_tcp_port_factory()):
        site_app.router.add_get("/", html_page(f'<script src="{cdn}/lib.js"></script>'))
        async for base in serve_app(site_app, unused_tcp_port_factory()):
            report = await start_scan(make_config(base))

    entry = report.inventory[f"{cdn}/lib.js"]
    assert entry.origin is Origin.THIRD_PARTY
    assert entry.metrics.size_bytes == len("var lib = 1;")
    assert report.summary()["third_party_scripts"] == 1


@pytest.mark.asyncio()
async def test_metrics_can_be_disabled(site_server: str):
    report = await start_scan(make_config(site_server, analyze_scripts=False))
    assert len(report.inventory) == 2
    assert all(e.metrics is None for e in report.inventory.values())


@pytest.mark.asyncio()
async def test_report_serialisation(site_server: str):
    report = await start_scan(make_config(site_server, max_pages=1))
    data = report.to_dict()

    assert data["root_url"] == f"{site_server}/"
    assert data["pages"] == [
        {
            "url": f"{site_server}/",
            "scripts": [
                {"id": f"{site_server}/app.js", "type": "external"},
                {"id": inline_script_id("var x = 1;"), "type": "inline"},
            ],
        }
    ]
    assert data["inventory"][0]["metrics"]["complexity_bucket"] == "trivial"
    assert '"root_url"' in report.json()
