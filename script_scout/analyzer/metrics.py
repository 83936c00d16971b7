# script_scout/analyzer/metrics.py
"""
Static metrics for JavaScript sources.

Size, line count, number of functions and a coarse complexity bucket. The
complexity score starts at 1 and grows by one for every branching construct
found in the syntax tree; sources the parser rejects get a fixed score.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from script_scout.crawler.fetcher import Fetcher
from script_scout.crawler.script_identifier import is_inline_id
from script_scout.errors import HttpStatusError, SourceParseError, TransportError
from script_scout.parser.js_parser import iter_nodes, operator_of, parse_script

logger = logging.getLogger("ScriptScout")


class ComplexityBucket(str, Enum):
    TRIVIAL = "trivial"
    SIMPLE = "simple"
    MODERATE = "moderate"
    COMPLEX = "complex"
    VERY_COMPLEX = "very-complex"


# inclusive upper bounds, checked in order
BUCKET_BOUNDS = (
    (5, ComplexityBucket.TRIVIAL),
    (15, ComplexityBucket.SIMPLE),
    (30, ComplexityBucket.MODERATE),
    (60, ComplexityBucket.COMPLEX),
)

# Score given to sources that fail to parse (upper end of "simple").
UNPARSEABLE_SCORE = 15

# tree-sitter-javascript node kinds; "function" is the pre-0.21 grammar name
# of function_expression. Methods, getters and setters are function values.
FUNCTION_NODES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
    "method_definition",
})
# for_in_statement (for-in, for-of, for-await) is not a branch point
BRANCH_NODES = frozenset({
    "if_statement",
    "for_statement",
    "while_statement",
    "do_statement",
    "switch_case",
    "switch_default",
    "ternary_expression",
})
SHORT_CIRCUIT_OPERATORS = frozenset({"&&", "||"})


@dataclass(frozen=True, slots=True)
class ScriptMetrics:
    size_bytes: int = 0
    lines_of_code: int = 0
    function_count: int = 0
    complexity_bucket: ComplexityBucket = ComplexityBucket.TRIVIAL

    @classmethod
    def empty(cls) -> ScriptMetrics:
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "size_bytes": self.size_bytes,
            "lines_of_code": self.lines_of_code,
            "function_count": self.function_count,
            "complexity_bucket": self.complexity_bucket.value,
        }


def bucket_complexity(score: int) -> ComplexityBucket:
    """Map a complexity score to its bucket."""
    for bound, bucket in BUCKET_BOUNDS:
        if score <= bound:
            return bucket
    return ComplexityBucket.VERY_COMPLEX


class SyntaxTreeVisitor:
    """Counts function forms and branch points over a closed set of node kinds."""

    def __init__(self) -> None:
        self.function_count = 0
        self.complexity_score = 1

    def visit(self, tree: Any) -> SyntaxTreeVisitor:
        for node in iter_nodes(tree):
            kind = node.type
            if kind in FUNCTION_NODES:
                self.function_count += 1
            elif kind in BRANCH_NODES:
                self.complexity_score += 1
            elif kind == "binary_expression" and operator_of(node) in SHORT_CIRCUIT_OPERATORS:
                self.complexity_score += 1
        return self


def count_lines(source: str) -> int:
    """Newline-delimited segments; a trailing line without newline counts."""
    return len(source.split("\n"))


def analyze_source(source: Optional[str]) -> ScriptMetrics:
    """
    Compute ScriptMetrics for JavaScript *source*.

    Empty or whitespace-only source yields all-zero metrics. Source that the
    parser rejects keeps its size and line count but gets no functions and
    the fixed UNPARSEABLE_SCORE.
    """
    if not source or not source.strip():
        return ScriptMetrics.empty()

    size_bytes = len(source.encode("utf-8"))
    lines_of_code = count_lines(source)

    try:
        tree = parse_script(source)
    except SourceParseError as exc:
        logger.debug("Unparseable script (%d bytes): %s", size_bytes, exc)
        function_count = 0
        score = UNPARSEABLE_SCORE
    else:
        visitor = SyntaxTreeVisitor().visit(tree)
        function_count = visitor.function_count
        score = visitor.complexity_score

    return ScriptMetrics(
        size_bytes=size_bytes,
        lines_of_code=lines_of_code,
        function_count=function_count,
        complexity_bucket=bucket_complexity(score),
    )


class ComplexityAnalyzer:
    """Retrieves script sources and computes their metrics."""

    def __init__(self, fetcher: Fetcher) -> None:
        self.fetcher = fetcher

    async def fetch_source(self, script_id: str) -> str:
        """Body of an external script, ``""`` when it cannot be retrieved."""
        try:
            return await self.fetcher.fetch_text(script_id)
        except (TransportError, HttpStatusError) as exc:
            logger.warning("Script %s not retrieved: %s", script_id, exc)
            return ""

    async def analyze(self, script_id: str, source: Optional[str] = None) -> ScriptMetrics:
        """
        Metrics for one script.

        Inline ids are analysed from *source* (their text travels with the
        inventory entry); missing text counts as empty. External ids are
        fetched.
        """
        if is_inline_id(script_id):
            return analyze_source(source or "")
        return analyze_source(await self.fetch_source(script_id))

    async def enrich(self, inventory: Mapping[str, Any]) -> Mapping[str, Any]:
        """
        Attach metrics to every entry of *inventory* that has none yet.

        Entries are processed in insertion order; requests overlap only as
        far as the fetcher's concurrency allows.
        """
        entries = [entry for entry in inventory.values() if entry.metrics is None]
        results = await asyncio.gather(*(self.analyze(e.id, e.source) for e in entries))
        for entry, metrics in zip(entries, results):
            entry.attach_metrics(metrics)
        logger.info("Метрики посчитаны для %d скриптов", len(entries))
        return inventory


__all__ = [
    "BUCKET_BOUNDS",
    "UNPARSEABLE_SCORE",
    "ComplexityAnalyzer",
    "ComplexityBucket",
    "ScriptMetrics",
    "SyntaxTreeVisitor",
    "analyze_source",
    "bucket_complexity",
    "count_lines",
]
