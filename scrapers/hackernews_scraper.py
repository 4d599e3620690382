"""
Hacker News Scraper
Fetches listing pages (front page or newest) as raw HTML.
"""
import asyncio
from typing import Optional
import logging

import aiohttp

from .base import BaseScraper
from models import ListingKind
from utils.exceptions import PageFetchError


logger = logging.getLogger(__name__)


class HackerNewsScraper(BaseScraper):
    """
    Hacker News listing fetcher

    - ``{base_url}/news?p=N`` for the front page
    - ``{base_url}/newest?p=N`` for the newest submissions
    - single attempt, no retries, no caching
    """

    def __init__(self, base_url: Optional[str] = None):
        super().__init__()
        self.base_url = (base_url or self.settings.listing.base_url).rstrip("/")

    @property
    def name(self) -> str:
        return "Hacker News"

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.general.request_timeout),
                headers={"User-Agent": self.settings.general.user_agent},
            )
        return self._session

    def page_url(self, kind: ListingKind = ListingKind.NEWS) -> str:
        return f"{self.base_url}/{ListingKind(kind).value}"

    async def fetch_page(self, page: int, kind: ListingKind = ListingKind.NEWS) -> bytes:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")

        url = self.page_url(kind)
        logger.debug(f"[{self.name}] GET {url}?p={page}")

        session = await self._get_session()

        try:
            async with session.get(url, params={"p": str(page)}) as response:
                response.raise_for_status()
                content = await response.read()
        except aiohttp.ClientResponseError as e:
            self._log_error(f"Page {page} returned {e.status}", e)
            raise PageFetchError(
                f"Listing page {page} returned HTTP {e.status}",
                page=page,
                status=e.status,
                url=url,
            ) from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._log_error(f"Page {page} failed", e)
            raise PageFetchError(
                f"Listing page {page} could not be fetched: {e!r}",
                page=page,
                url=url,
            ) from e

        self._log_fetch(page, len(content))
        return content
