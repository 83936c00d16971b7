# script_scout/analyzer/inventory.py
"""
Deduplicated inventory of the scripts seen during a crawl.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from script_scout.analyzer.metrics import ScriptMetrics
from script_scout.crawler.link_extractor import origin_of
from script_scout.crawler.models import PageResult, ScriptKind, ScriptRef
from script_scout.errors import UrlParseError


class Origin(str, Enum):
    FIRST_PARTY = "first-party"
    THIRD_PARTY = "third-party"


@dataclass(slots=True)
class InventoryEntry:
    """One unique script across the whole crawl."""

    id: str
    kind: ScriptKind
    origin: Origin
    pages_used_on: List[str] = field(default_factory=list)
    usage_count: int = 0
    metrics: Optional[ScriptMetrics] = None
    source: Optional[str] = field(default=None, repr=False, compare=False)

    def record_usage(self, page_url: str) -> None:
        self.usage_count += 1
        self.pages_used_on.append(page_url)

    def attach_metrics(self, metrics: ScriptMetrics) -> None:
        if self.metrics is not None:
            raise ValueError(f"metrics already attached to {self.id}")
        self.metrics = metrics

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "origin": self.origin.value,
            "pages_used_on": list(self.pages_used_on),
            "usage_count": self.usage_count,
            "metrics": self.metrics.to_dict() if self.metrics else None,
        }


def classify_origin(ref: ScriptRef, root_origin: str) -> Origin:
    """Inline scripts are first-party; external ones iff they share the root origin."""
    if ref.kind is ScriptKind.INLINE:
        return Origin.FIRST_PARTY
    try:
        same = origin_of(ref.id) == root_origin
    except UrlParseError:
        return Origin.THIRD_PARTY
    return Origin.FIRST_PARTY if same else Origin.THIRD_PARTY


def build_inventory(root_url: str, pages: Iterable[PageResult]) -> Dict[str, InventoryEntry]:
    """
    Group script references by id.

    Keys keep first-sighting order; ``pages_used_on`` lists one page URL per
    occurrence in traversal order, so the result is fully determined by the
    page sequence.
    """
    root_origin = origin_of(root_url)
    inventory: Dict[str, InventoryEntry] = {}
    for page in pages:
        for ref in page.scripts:
            entry = inventory.get(ref.id)
            if entry is None:
                entry = InventoryEntry(
                    id=ref.id,
                    kind=ref.kind,
                    origin=classify_origin(ref, root_origin),
                    source=ref.source,
                )
                inventory[ref.id] = entry
            entry.record_usage(page.url)
    return inventory


__all__ = ["Origin", "InventoryEntry", "classify_origin", "build_inventory"]
