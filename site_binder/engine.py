# File: site_binder/engine.py
"""site_binder.engine: оркестрация: обход сайта, сборка документа и запись PDF."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from site_binder.config import BinderConfig
from site_binder.crawler.crawler import AsyncCrawler, CrawlResult
from site_binder.exceptions import NoPagesError
from site_binder.logger import logger
from site_binder.report.json_report import render_json
from site_binder.report.pdf_report import render_pdf
from site_binder.synthesizer import BoundDocument, synthesize

__all__ = ["Engine", "start_crawl"]


async def start_crawl(cfg: BinderConfig) -> CrawlResult:
    """Запускает AsyncCrawler в контексте и возвращает CrawlResult."""
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl()


class Engine:
    """Фасад для CLI и тестов: обход, проверка результата, синтез и рендеринг."""

    def __init__(self, config: BinderConfig) -> None:
        self.config = config

    def crawl(self) -> CrawlResult:
        """Запускает обход и бросает NoPagesError, если не собрано ни одной страницы."""
        result = asyncio.run(start_crawl(self.config))
        if not result.pages:
            if result.origin_error is not None:
                raise NoPagesError(
                    f"No pages were scraped. Error visiting base URL: {result.origin_error.reason}",
                    {"url": self.config.base_url},
                ) from result.origin_error
            raise NoPagesError("No pages were scraped. Exiting.", {"url": self.config.base_url})
        if result.timed_out:
            logger.info("Partial crawl: %d pages collected before the deadline", len(result.pages))
        return result

    def assemble(self, result: CrawlResult) -> BoundDocument:
        return synthesize(result.pages, self.config.title)

    def render(self, document: BoundDocument) -> Path:
        return render_pdf(document, self.config.output_path)

    def export_json(self, result: CrawlResult, path: Path | str) -> Path:
        return render_json(result.pages, path)

    def run(self, json_output: Optional[Path | str] = None) -> Path:
        """Полный прогон: обход → синтез → PDF (и JSON, если задан путь)."""
        result = self.crawl()
        if json_output is not None:
            self.export_json(result, json_output)
        return self.render(self.assemble(result))
