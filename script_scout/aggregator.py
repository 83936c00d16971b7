# File: script_scout/aggregator.py
"""script_scout.aggregator: Итоговый отчёт обхода: страницы, инвентарь скриптов и сводка."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, TypedDict

from script_scout.analyzer.inventory import InventoryEntry, Origin
from script_scout.crawler.models import PageResult


class ScanSummary(TypedDict):
    """Сводные счётчики для шапки отчёта."""

    pages_crawled: int
    unique_scripts: int
    first_party_scripts: int
    third_party_scripts: int
    failed_pages: int


@dataclass(slots=True)
class ScanReport:
    """Результат сканирования: корневой URL, страницы, инвентарь и недоступные страницы."""

    root_url: str
    pages: List[PageResult] = field(default_factory=list)
    inventory: Dict[str, InventoryEntry] = field(default_factory=dict)
    failed_pages: List[str] = field(default_factory=list)

    @property
    def scripts(self) -> List[InventoryEntry]:
        """Уникальные скрипты в порядке первого появления."""
        return list(self.inventory.values())

    def summary(self) -> ScanSummary:
        scripts = self.scripts
        return {
            "pages_crawled": len(self.pages),
            "unique_scripts": len(scripts),
            "first_party_scripts": sum(1 for s in scripts if s.origin is Origin.FIRST_PARTY),
            "third_party_scripts": sum(1 for s in scripts if s.origin is Origin.THIRD_PARTY),
            "failed_pages": len(self.failed_pages),
        }

    def to_dict(self) -> Dict[str, Any]:
        """Схема, которую потребляют рендеры JSON/HTML."""
        return {
            "root_url": self.root_url,
            "summary": self.summary(),
            "pages": [p.to_dict() for p in self.pages],
            "inventory": [s.to_dict() for s in self.scripts],
            "failed_pages": list(self.failed_pages),
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление отчёта."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2 if pretty else None)


__all__ = ["ScanReport", "ScanSummary"]
