"""script_scout.analyzer: инвентаризация скриптов и их статические метрики."""

from .inventory import InventoryEntry, Origin, build_inventory, classify_origin
from .metrics import (
    ComplexityAnalyzer,
    ComplexityBucket,
    ScriptMetrics,
    analyze_source,
    bucket_complexity,
)

__all__ = [
    "ComplexityAnalyzer",
    "ComplexityBucket",
    "InventoryEntry",
    "Origin",
    "ScriptMetrics",
    "analyze_source",
    "bucket_complexity",
    "build_inventory",
    "classify_origin",
]
