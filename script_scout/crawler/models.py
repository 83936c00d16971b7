# script_scout/crawler/models.py
"""
Data models produced by the ScriptScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ScriptKind(str, Enum):
    """Where the script code lives."""

    EXTERNAL = "external"
    INLINE = "inline"


@dataclass(frozen=True, slots=True)
class ScriptRef:
    """Identity of one ``<script>`` element found on a page.

    ``id`` is the resolved ``src`` URL for external scripts and
    ``inline@sha256:<hex>`` for inline ones. ``source`` keeps the inline text
    so metrics can be computed without refetching; it takes no part in
    equality.
    """

    id: str
    kind: ScriptKind
    source: Optional[str] = field(default=None, compare=False, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "type": self.kind.value}


@dataclass(frozen=True, slots=True)
class PageResult:
    """A successfully fetched page: canonical URL and its scripts in document order."""

    url: str
    scripts: Tuple[ScriptRef, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "scripts": [s.to_dict() for s in self.scripts]}
