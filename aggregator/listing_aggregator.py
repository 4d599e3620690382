"""
Listing Aggregator
Fetches the listing pages a request needs concurrently and merges them into
one rank-ordered result.
"""
import asyncio
import math
from typing import List, Optional
import logging

from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from config import MarkupSettings, get_listing_settings, get_settings
from extraction import parse_listing
from models import ListingKind, PageResult, Story
from scrapers import BaseScraper, HackerNewsScraper
from utils.exceptions import ExtractionError, InvalidRequestError, MergeError
from utils.logger import console


logger = logging.getLogger(__name__)


def plan_page_count(requested: int, page_capacity: int, max_posts: Optional[int] = None) -> int:
    """
    Number of listing pages needed for ``requested`` stories.

    Raises:
        InvalidRequestError: requested count outside ``[1, max_posts]``
    """
    if page_capacity < 1:
        raise InvalidRequestError("page capacity must be positive", {"page_capacity": page_capacity})
    if requested < 1 or (max_posts is not None and requested > max_posts):
        raise InvalidRequestError(
            f"Posts must be between 1 and {max_posts}, inclusive",
            {"requested": requested},
        )
    return math.ceil(requested / page_capacity)


class ResultBuffer:
    """
    Fixed-size, positionally addressed output.

    Page ``p`` owns slots ``[(p-1) * page_capacity, p * page_capacity)``; a
    page never writes outside its block and slots past ``capacity`` are
    dropped, so arrival order does not affect the final content.
    """

    def __init__(self, capacity: int, page_capacity: int):
        self.capacity = capacity
        self.page_capacity = page_capacity
        self._slots: List[Optional[Story]] = [None] * capacity

    def __len__(self) -> int:
        return self.capacity

    @property
    def filled(self) -> int:
        return sum(1 for slot in self._slots if slot is not None)

    def slots(self) -> List[Optional[Story]]:
        return list(self._slots)

    def place(self, result: PageResult) -> int:
        """Write a page into its block; returns the number of stories kept"""
        if len(result.stories) > self.page_capacity:
            logger.warning(
                f"Page {result.page} returned {len(result.stories)} stories, "
                f"only {self.page_capacity} fit its block"
            )

        offset = (result.page - 1) * self.page_capacity
        written = 0
        for index, story in enumerate(result.stories[: self.page_capacity]):
            position = offset + index
            if position >= self.capacity:
                break
            self._slots[position] = story
            written += 1
        return written

    def finalize(self) -> List[Story]:
        """
        The merged stories.

        Trailing empty slots mean the listing ran out and are trimmed. An
        empty slot followed by a filled one is a merge bug.
        """
        filled = [index for index, slot in enumerate(self._slots) if slot is not None]
        last = filled[-1] if filled else -1

        holes = [index for index in range(last + 1) if self._slots[index] is None]
        if holes:
            raise MergeError(
                "Result buffer has empty slots before filled ones",
                {"holes": holes[:10], "capacity": self.capacity},
            )

        if last + 1 < self.capacity:
            logger.warning(
                f"Listing ran out after {last + 1} stories, {self.capacity} were requested"
            )
        return list(self._slots[: last + 1])


class ListingAggregator:
    """
    Paginated retrieval pipeline.

    One task per page (fetch, parse, assemble) is started up front; results
    are merged as they complete. The first failure cancels the remaining
    pages and is raised, no partial output is returned.
    """

    def __init__(
        self,
        scraper: Optional[BaseScraper] = None,
        page_capacity: Optional[int] = None,
        max_posts: Optional[int] = None,
        parser: Optional[str] = None,
        markup: Optional[MarkupSettings] = None,
    ):
        settings = get_settings()
        self._owns_scraper = scraper is None
        self.scraper = scraper or HackerNewsScraper()
        self.page_capacity = settings.listing.page_capacity if page_capacity is None else page_capacity
        self.max_posts = settings.listing.max_posts if max_posts is None else max_posts
        self.parser = settings.listing.parser if parser is None else parser
        self.markup = settings.markup if markup is None else markup

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        if self._owns_scraper:
            await self.scraper.close()

    async def fetch_page(self, page: int, kind: ListingKind = ListingKind.NEWS) -> PageResult:
        """Fetch, parse and assemble one page"""
        content = await self.scraper.fetch_page(page, kind)

        try:
            # parsing is CPU bound, keep it off the event loop
            stories = await asyncio.to_thread(parse_listing, content, self.parser, self.markup)
        except ExtractionError as e:
            raise e.annotate(page=page)

        if not stories:
            logger.warning(f"Page {page} contained no stories")
        else:
            logger.debug(f"Page {page} assembled {len(stories)} stories")
        return PageResult(page=page, stories=stories)

    async def collect(
        self,
        requested: int,
        kind: ListingKind = ListingKind.NEWS,
        show_progress: bool = False,
    ) -> List[Story]:
        """
        Fetch ``requested`` stories from the given listing.

        Args:
            requested: number of stories, in ``[1, max_posts]``
            kind: front page or newest
            show_progress: render a progress bar on stderr

        Returns:
            Stories in listing order, ``requested`` long unless the listing
            ran out
        """
        kind = ListingKind(kind)
        page_count = plan_page_count(requested, self.page_capacity, self.max_posts)
        buffer = ResultBuffer(requested, self.page_capacity)

        logger.info(
            f"Fetching {requested} {kind.value} stories across {page_count} page(s)"
        )

        tasks = [
            asyncio.create_task(self.fetch_page(page, kind), name=f"listing-page-{page}")
            for page in range(1, page_count + 1)
        ]

        try:
            if show_progress:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    console=console,
                    transient=True,
                ) as progress:
                    bar = progress.add_task(f"[cyan]Fetching {page_count} page(s)...", total=page_count)
                    await self._merge_as_completed(tasks, buffer, lambda: progress.advance(bar))
            else:
                await self._merge_as_completed(tasks, buffer)
        finally:
            pending = [task for task in tasks if not task.done()]
            if pending:
                logger.info(f"Cancelling {len(pending)} in-flight page(s)")
                for task in pending:
                    task.cancel()
            # retrieve every outcome so none is reported as unhandled
            await asyncio.gather(*tasks, return_exceptions=True)

        return buffer.finalize()

    @staticmethod
    async def _merge_as_completed(tasks, buffer: ResultBuffer, on_page=None) -> None:
        for next_done in asyncio.as_completed(tasks):
            result = await next_done
            written = buffer.place(result)
            logger.debug(
                f"Merged page {result.page} ({written} stories kept, "
                f"{buffer.filled}/{len(buffer)} filled)"
            )
            if on_page is not None:
                on_page()


async def fetch_listing(
    posts: Optional[int] = None,
    kind: ListingKind = ListingKind.NEWS,
    show_progress: bool = False,
) -> List[Story]:
    """Fetch ``posts`` stories from the live site with default settings"""
    if posts is None:
        posts = get_listing_settings().default_posts
    async with ListingAggregator() as aggregator:
        return await aggregator.collect(posts, kind, show_progress=show_progress)
