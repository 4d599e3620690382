"""
Tests for the Hacker News page fetcher, against a local aiohttp server.
"""

from __future__ import annotations

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from listing_fixtures import two_story_page
from models import ListingKind
from scrapers import HackerNewsScraper
from utils.exceptions import PageFetchError


def _listing_app(seen: list) -> web.Application:
    async def _listing(request: web.Request) -> web.Response:
        seen.append((request.path, request.query.get("p"), request.headers.get("User-Agent")))
        return web.Response(body=two_story_page(), content_type="text/html")

    async def _missing(request: web.Request) -> web.Response:
        return web.Response(status=503, text="over capacity")

    app = web.Application()
    app.router.add_get("/news", _listing)
    app.router.add_get("/newest", _listing)
    app.router.add_get("/broken", _missing)
    return app


@pytest.mark.asyncio
async def test_fetch_front_page_and_newest():
    seen: list = []
    async with TestServer(_listing_app(seen)) as server:
        async with HackerNewsScraper(base_url=str(server.make_url("/"))) as scraper:
            front = await scraper.fetch_page(1)
            newest = await scraper.fetch_page(3, ListingKind.NEWEST)

    assert front == two_story_page()
    assert newest == two_story_page()
    assert [(path, p) for path, p, _ in seen] == [("/news", "1"), ("/newest", "3")]
    assert seen[0][2] == scraper.settings.general.user_agent


@pytest.mark.asyncio
async def test_error_status_raises_page_fetch_error(monkeypatch):
    async with TestServer(_listing_app([])) as server:
        async with HackerNewsScraper(base_url=str(server.make_url("/"))) as scraper:
            monkeypatch.setattr(scraper, "page_url", lambda kind=ListingKind.NEWS: f"{scraper.base_url}/broken")

            with pytest.raises(PageFetchError) as exc_info:
                await scraper.fetch_page(2)

    assert exc_info.value.page == 2
    assert exc_info.value.details["status"] == 503


@pytest.mark.asyncio
async def test_transport_failure_raises_page_fetch_error():
    server = TestServer(web.Application())
    await server.start_server()
    base_url = str(server.make_url("/"))
    await server.close()

    async with HackerNewsScraper(base_url=base_url) as scraper:
        with pytest.raises(PageFetchError) as exc_info:
            await scraper.fetch_page(1)

    assert exc_info.value.page == 1


@pytest.mark.asyncio
async def test_invalid_page_number():
    async with HackerNewsScraper(base_url="http://127.0.0.1:9") as scraper:
        with pytest.raises(ValueError):
            await scraper.fetch_page(0)


def test_page_url():
    scraper = HackerNewsScraper(base_url="https://news.ycombinator.com/")

    assert scraper.page_url() == "https://news.ycombinator.com/news"
    assert scraper.page_url(ListingKind.NEWEST) == "https://news.ycombinator.com/newest"
