from __future__ import annotations

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from aiohttp import ClientSession, ClientTimeout

from site_binder.config import BinderConfig
from site_binder.crawler.fetcher import Fetcher
from site_binder.crawler.link_extractor import discover_links
from site_binder.crawler.models import PageRecord
from site_binder.crawler.store import PageStore
from site_binder.crawler.visited import VisitedSet
from site_binder.exceptions import FetchError
from site_binder.parser.html_parser import extract_page, find_container, parse_document

__all__ = ("AsyncCrawler", "CrawlResult", "CrawlState")


class CrawlState(str, enum.Enum):
    RUNNING = "running"
    DRAINING = "draining"
    FINISHED = "finished"


@dataclass(slots=True)
class CrawlResult:
    """Frozen outcome of one crawl."""
    pages: List[PageRecord]
    timed_out: bool = False
    origin_error: Optional[FetchError] = None
    visited: List[str] = field(default_factory=list)


class AsyncCrawler:
    """Асинхронный краулер: пул воркеров, лимит глубины, дедупликация и общий дедлайн.

    Each worker takes ``(url, depth)`` from the frontier, waits its politeness
    delay, fetches, extracts a record and enqueues same-host links one hop
    deeper. When the crawl deadline passes the crawler drains: nothing new is
    enqueued or dispatched, in-flight fetches finish, and whatever was
    collected is returned.
    """

    def __init__(self, config: BinderConfig) -> None:
        self.config = config
        self.origin: str = config.base_url
        self.visited = VisitedSet()
        self.store = PageStore()
        self.state = CrawlState.RUNNING
        self.session: Optional[ClientSession] = None
        self.fetcher: Optional[Fetcher] = None
        self.origin_error: Optional[FetchError] = None
        self.logger = logging.getLogger("SiteBinder")
        self._draining = asyncio.Event()

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.request_timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        self.fetcher = Fetcher(self.session, self.config)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    @property
    def draining(self) -> bool:
        return self._draining.is_set()

    async def crawl(self) -> CrawlResult:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self.logger.debug("Crawl start: %s (depth %d)", self.origin, self.config.max_depth)
        start = time.monotonic()
        queue: asyncio.Queue[Tuple[str, int]] = asyncio.Queue()
        self._enqueue(queue, self.origin, 0)

        workers = [asyncio.create_task(self._worker(queue)) for _ in range(self.config.concurrency)]
        joined = asyncio.create_task(queue.join())
        timed_out = False
        try:
            await asyncio.wait_for(asyncio.shield(joined), timeout=self.config.crawl_timeout)
        except asyncio.TimeoutError:
            timed_out = True
            self.state = CrawlState.DRAINING
            self._draining.set()
            self.logger.warning(
                "Scraping timed out after %g seconds. Processing collected pages...",
                self.config.crawl_timeout,
            )
            await joined
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)
            if not joined.done():
                joined.cancel()

        self.state = CrawlState.FINISHED
        self.visited.freeze()
        pages = self.store.freeze()
        duration = time.monotonic() - start
        self.logger.debug("Crawl finished: %d pages in %.2f s", len(pages), duration)
        return CrawlResult(
            pages=pages,
            timed_out=timed_out,
            origin_error=self.origin_error,
            visited=list(self.visited),
        )

    def _enqueue(self, queue: asyncio.Queue[Tuple[str, int]], url: str, depth: int) -> bool:
        if self.draining or depth > self.config.max_depth:
            return False
        if not self.visited.mark(url):
            return False
        queue.put_nowait((url, depth))
        return True

    async def _worker(self, queue: asyncio.Queue[Tuple[str, int]]) -> None:
        while True:
            url, depth = await queue.get()
            try:
                if not self.draining:
                    await self._process(queue, url, depth)
            except Exception as exc:
                self.logger.error("Error scraping %s: %s", url, exc)
            finally:
                queue.task_done()

    async def _process(self, queue: asyncio.Queue[Tuple[str, int]], url: str, depth: int) -> None:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        await self.fetcher.wait_turn()
        if self.draining:
            return

        self.logger.info("Visiting %s", url)
        try:
            page = await self.fetcher.fetch(url)
        except FetchError as exc:
            self.logger.error("Error scraping %s: %s", url, exc.reason)
            if url == self.origin:
                self.origin_error = exc
            return
        if page is None:
            return

        try:
            document = parse_document(page)
            container = find_container(document)
            if container is None:
                self.logger.debug("Skipping %s: no article container", url)
                return
            record = extract_page(document, url)
            links = discover_links(container, self.origin) if depth < self.config.max_depth else []
        except Exception as exc:
            self.logger.error("Error scraping %s: %s", url, exc)
            return

        if record is not None:
            self.store.append(record)
        for link in links:
            self._enqueue(queue, link, depth + 1)
