"""
Base Scraper
Abstract base for listing page fetchers
"""
from abc import ABC, abstractmethod
import logging

from config import get_settings
from models import ListingKind


logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Page fetcher base class.

    A fetcher makes exactly one attempt per page and returns the raw body;
    parsing is left to the caller.
    """

    def __init__(self):
        self.settings = get_settings()
        self._session = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Fetcher name, used in log lines"""
        pass

    @abstractmethod
    async def fetch_page(self, page: int, kind: ListingKind = ListingKind.NEWS) -> bytes:
        """
        Fetch one listing page.

        Args:
            page: 1-based page number
            kind: which listing to read

        Returns:
            Raw page content

        Raises:
            PageFetchError: on transport failure or a non-success status
        """
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Release the HTTP session"""
        if self._session:
            await self._session.close()
            self._session = None

    def _log_fetch(self, page: int, size: int):
        logger.info(f"[{self.name}] Page {page} fetched ({size} bytes)")

    def _log_error(self, message: str, error: Exception):
        logger.error(f"[{self.name}] {message}: {error}")
