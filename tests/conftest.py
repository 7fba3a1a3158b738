# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from aiohttp import web

from site_binder.config import BinderConfig
from site_binder.crawler.models import FetchedPage
from site_binder.logger import configure


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture(autouse=True)
def reset_logger():
    """CLI tests rebind the stdout handler to CliRunner's stream; restore it."""
    yield
    configure(level="INFO")


def article(title: str, body: str = "", links: tuple[str, ...] = ()) -> str:
    """Minimal HTML page with an <article> container."""
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (
        "<html><body>"
        f"<article><div class=\"Header\"><h1>{title}</h1></div>{body}<p>{anchors}</p></article>"
        "</body></html>"
    )


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


def html_response(text: str) -> web.Response:
    return web.Response(text=text, content_type="text/html")


@pytest.fixture()
def basic_config() -> BinderConfig:
    """
    Return a basic valid BinderConfig with politeness delays switched off.
    """
    return BinderConfig(
        base_url="http://example.com/docs",
        max_depth=1,
        crawl_timeout=10.0,
        request_timeout=2.0,
        delay=0.0,
        random_delay=0.0,
        user_agent="TestAgent/1.0",
    )


@pytest.fixture()
def mock_page() -> FetchedPage:
    """
    Provide a simple FetchedPage with one article, one code block and links.
    """
    html = (
        "<html><body><article>"
        "<div class='Header'><h1>Hello</h1></div>"
        "<p>Intro text.</p>"
        "<h2>Setup</h2>"
        "<pre>fn main() {}</pre>"
        "<ul><li>one</li><li>two</li></ul>"
        '<a href="/link1">L1</a><a href="http://external.com/x">X</a>'
        "</article></body></html>"
    )
    return FetchedPage(url="http://example.com/docs", content=html)
