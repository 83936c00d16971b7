# File: script_scout/engine.py
"""script_scout.engine: Оркестрация: обход, инвентаризация и подсчёт метрик."""

from __future__ import annotations

from script_scout.aggregator import ScanReport
from script_scout.analyzer.inventory import build_inventory
from script_scout.analyzer.metrics import ComplexityAnalyzer
from script_scout.config import ScannerConfig
from script_scout.crawler.crawler import AsyncCrawler
from script_scout.crawler.fetcher import Fetcher
from script_scout.logger import logger

__all__ = ["start_scan"]


async def start_scan(cfg: ScannerConfig) -> ScanReport:
    """
    Запускает полный проход и возвращает ScanReport.

    Краулер и анализатор используют один Fetcher, поэтому лимиты
    конкурентности и частоты запросов общие на весь запуск.
    """
    async with Fetcher(cfg) as fetcher:
        crawler = AsyncCrawler(cfg, fetcher)
        pages = await crawler.crawl()
        inventory = build_inventory(crawler.root_url, pages)
        logger.info("Уникальных скриптов: %d", len(inventory))
        if cfg.analyze_scripts:
            await ComplexityAnalyzer(fetcher).enrich(inventory)

    return ScanReport(
        root_url=crawler.root_url,
        pages=pages,
        inventory=inventory,
        failed_pages=list(crawler.failed_pages),
    )
