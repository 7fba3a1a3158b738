"""
Fetcher module: one HTTP GET per call, with politeness delay and a per-request
timeout. No retries: a failed URL is abandoned for the rest of the run.
"""
from __future__ import annotations

import asyncio
import random
from typing import Optional

from aiohttp import ClientError, ClientSession

from site_binder.config import BinderConfig
from site_binder.crawler.models import FetchedPage
from site_binder.exceptions import FetchError
from site_binder.logger import logger

_HTML_TYPES = ("text/html", "application/xhtml+xml")


class Fetcher:
    """Fetches HTML pages through a shared aiohttp session."""

    def __init__(self, session: ClientSession, config: BinderConfig) -> None:
        self.session = session
        self.config = config

    def politeness_delay(self) -> float:
        """Fixed delay plus random jitter applied before each request."""
        jitter = random.uniform(0, self.config.random_delay) if self.config.random_delay else 0.0
        return self.config.delay + jitter

    async def wait_turn(self) -> None:
        pause = self.politeness_delay()
        if pause > 0:
            await asyncio.sleep(pause)

    async def fetch(self, url: str) -> Optional[FetchedPage]:
        """
        GET *url* and return its HTML.

        Returns None for non-HTML responses. Raises FetchError on timeouts,
        connection failures and HTTP error statuses.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if resp.status >= 400:
                    raise FetchError(url, f"HTTP {resp.status} {resp.reason or ''}".rstrip())
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime not in _HTML_TYPES:
                    logger.debug("Skipping %s: content type %r", url, mime)
                    return None
                text = await resp.text(errors="replace")
                return FetchedPage(url, text)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, f"timed out after {self.config.request_timeout:g} s") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or type(exc).__name__) from exc
