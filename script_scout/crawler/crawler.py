# === FILE: script_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional, Set, Tuple

from script_scout.config import ScannerConfig
from script_scout.crawler.fetcher import Fetcher
from script_scout.crawler.link_extractor import canonical_url, extract_links, origin_of
from script_scout.crawler.models import PageResult, ScriptRef
from script_scout.crawler.script_identifier import identify_script
from script_scout.errors import TransportError, UrlParseError
from script_scout.parser.html_parser import ParsedPage, parse_html

__all__ = ("AsyncCrawler",)


class AsyncCrawler:
    """
    Breadth-first same-origin crawler that records the scripts of every page.

    The frontier is a FIFO queue; a URL is enqueued at most once while it is
    pending and visited at most once. At most ``config.max_pages`` pages are
    visited. With ``config.concurrency`` > 1 several workers drain the queue,
    results are still returned in dequeue order.
    """

    def __init__(self, config: ScannerConfig, fetcher: Optional[Fetcher] = None) -> None:
        self.config = config
        self.root_url: str = canonical_url(str(config.root_url))
        self.root_origin: str = origin_of(self.root_url)
        self.visited: Set[str] = set()
        self.failed_pages: List[str] = []
        self.fetcher = fetcher
        self._owns_fetcher = fetcher is None
        self._queued: Set[str] = set()
        self.logger = logging.getLogger("ScriptScout")

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.fetcher = Fetcher(self.config)
            await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_fetcher and self.fetcher is not None:
            await self.fetcher.close()

    async def crawl(self) -> List[PageResult]:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized")
        self.logger.info("Старт обхода: %s (max_pages=%d)", self.root_url, self.config.max_pages)
        start = time.monotonic()
        self.visited.clear()
        self.failed_pages.clear()
        self._queued.clear()

        queue: asyncio.Queue[str] = asyncio.Queue()
        self._enqueue(queue, self.root_url)
        results: List[Tuple[int, PageResult]] = []
        workers = [
            asyncio.create_task(self._worker(queue, results))
            for _ in range(self.config.concurrency)
        ]
        await queue.join()
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)

        results.sort(key=lambda item: item[0])
        pages = [page for _, page in results]
        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (%.2f стр/с)",
            len(pages), duration, len(pages) / duration if duration else 0,
        )
        if self.failed_pages:
            self.logger.info("Не загружено: %d", len(self.failed_pages))
        return pages

    async def _worker(self, queue: asyncio.Queue[str], results: List[Tuple[int, PageResult]]) -> None:
        while True:
            try:
                url = await queue.get()
            except asyncio.CancelledError:
                break
            try:
                self._queued.discard(url)
                if url in self.visited or len(self.visited) >= self.config.max_pages:
                    continue
                # check-then-mark with no await in between
                self.visited.add(url)
                order = len(self.visited)
                page = await self._visit(url, queue)
                if page is not None:
                    results.append((order, page))
            finally:
                queue.task_done()

    async def _visit(self, url: str, queue: asyncio.Queue[str]) -> Optional[PageResult]:
        self.logger.debug("Crawling %s", url)
        try:
            response = await self.fetcher.get(url)
        except TransportError as exc:
            self.logger.warning("Failed to fetch %s: %s", url, exc.reason)
            self.failed_pages.append(url)
            return None
        if not response.ok:
            self.logger.warning("HTTP %s for %s", response.status, url)
            self.failed_pages.append(url)
            return None

        parsed = parse_html(response.text, url)
        scripts = self._identify_scripts(parsed)
        for link in extract_links(parsed, self.root_origin):
            self._enqueue(queue, link)
        self.logger.debug("%s: %d scripts, frontier %d", url, len(scripts), queue.qsize())
        return PageResult(url=url, scripts=tuple(scripts))

    def _identify_scripts(self, parsed: ParsedPage) -> List[ScriptRef]:
        scripts: List[ScriptRef] = []
        for tag in parsed.scripts:
            try:
                scripts.append(identify_script(tag.src, tag.text, parsed.url))
            except UrlParseError as exc:
                self.logger.warning("Skipping script on %s: %s", parsed.url, exc)
        return scripts

    def _enqueue(self, queue: asyncio.Queue[str], url: str) -> None:
        if url in self.visited or url in self._queued:
            return
        self._queued.add(url)
        queue.put_nowait(url)
