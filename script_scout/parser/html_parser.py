# === FILE: script_scout/parser/html_parser.py ===
"""HTML parsing utilities for ScriptScout.

:func:`parse_html` turns markup into a :class:`ParsedPage` exposing exactly
what the crawler needs:

* title   — document <title> text or ``""`` if absent.
* scripts — every <script> element as :class:`ScriptTag`, in document order.
* links   — raw ``href`` values of <a> tags, in document order.

Links are *not* resolved here; canonicalisation depends on the crawl root
and lives in :mod:`script_scout.crawler.link_extractor`.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__: Sequence[str] = ("ScriptTag", "ParsedPage", "parse_html")


@dataclass(frozen=True, slots=True)
class ScriptTag:
    """Raw ``src`` attribute (``None`` when absent or blank) and inline text."""

    src: Optional[str]
    text: str = ""


@dataclass(slots=True)
class ParsedPage:
    """Lightweight representation of an HTML page."""

    url: str
    title: str = ""
    scripts: list[ScriptTag] = field(default_factory=list)
    links: list[str] = field(default_factory=list)


def _script_tag(tag: Tag) -> ScriptTag:
    src = tag.get("src")
    if not isinstance(src, str) or not src.strip():
        src = None
    # html.parser keeps script contents as one raw string
    text = "".join(str(child) for child in tag.contents)
    return ScriptTag(src=src.strip() if src else None, text=text)


def parse_html(html: str, url: str = "") -> ParsedPage:
    """Parse raw HTML into a :class:`ParsedPage`.

    Parameters
    ----------
    html
        Page markup.
    url
        URL the markup was served from; stored on the result as-is.
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    scripts = [_script_tag(tag) for tag in soup.find_all("script") if isinstance(tag, Tag)]

    links: list[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            links.append(href_val)

    return ParsedPage(url=url, title=title, scripts=scripts, links=links)
