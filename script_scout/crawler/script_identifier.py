# script_scout/crawler/script_identifier.py
"""
Stable identities for ``<script>`` elements.

External scripts are identified by their resolved ``src`` URL, inline
scripts by a SHA-256 digest of their text. The ``inline@sha256:`` prefix
cannot appear at the start of a resolved URL, so the two namespaces never
collide.
"""
from __future__ import annotations

import hashlib
from typing import Optional
from urllib.parse import urljoin

from script_scout.crawler.models import ScriptKind, ScriptRef
from script_scout.errors import UrlParseError

INLINE_PREFIX = "inline@sha256:"


def inline_script_id(text: str) -> str:
    """Identity of an inline script with the given text."""
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return f"{INLINE_PREFIX}{digest}"


def is_inline_id(script_id: str) -> bool:
    return script_id.startswith(INLINE_PREFIX)


def identify_script(src: Optional[str], text: Optional[str], page_url: str) -> ScriptRef:
    """
    Build a ScriptRef for a script element found on *page_url*.

    No network access happens here: an external script is only resolved
    against the page URL.
    """
    if src:
        try:
            absolute = urljoin(page_url, src.strip())
        except ValueError as exc:
            raise UrlParseError(src, exc) from exc
        return ScriptRef(id=absolute, kind=ScriptKind.EXTERNAL)

    code = text or ""
    return ScriptRef(id=inline_script_id(code), kind=ScriptKind.INLINE, source=code)


__all__ = ["INLINE_PREFIX", "identify_script", "inline_script_id", "is_inline_id"]
