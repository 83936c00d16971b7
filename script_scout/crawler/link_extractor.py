# script_scout/crawler/link_extractor.py
"""
Link canonicalisation and extraction for ScriptScout.

Every href found on a page is turned into an absolute, fragment-free URL on
the crawl root's origin, or rejected.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from script_scout.errors import UrlParseError
from script_scout.parser.html_parser import ParsedPage

_DEFAULT_PORTS = {"http": 80, "https": 443}
_REJECTED_PREFIXES = ("#", "mailto:", "tel:", "javascript:")
_ABSOLUTE_PREFIXES = ("http://", "https://", "//")


def _split(url: str):
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as exc:
        raise UrlParseError(url, exc) from exc
    scheme = parts.scheme.lower()
    host = parts.hostname
    if not scheme or not host:
        raise UrlParseError(url, "missing scheme or host")
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return scheme, host, parts


def origin_of(url: str) -> str:
    """
    Return ``scheme://host[:port]`` of *url*, lower-cased, default port dropped.

    Raises UrlParseError if the URL has no scheme/host or an invalid port.
    """
    scheme, host, _ = _split(url)
    return f"{scheme}://{host}"


def _remove_dot_segments(path: str) -> str:
    # urljoin resolves "." and ".." in absolute paths and keeps empty segments
    return urljoin("/", path) if path else "/"


def canonical_url(url: str) -> str:
    """
    Canonical form of an absolute URL: lower-case scheme and host, no default
    port, ``/`` for an empty path, dot segments resolved, no fragment.
    """
    scheme, host, parts = _split(url)
    return urlunsplit((scheme, host, _remove_dot_segments(parts.path), parts.query, ""))


def canonicalize_link(href: str, page_url: str, root_origin: str) -> Optional[str]:
    """
    Canonicalise *href* found on *page_url*.

    Returns an absolute same-origin URL without fragment, or None when the
    link must not be followed (empty, in-page anchor, mailto/tel/javascript,
    other origin, unparsable).
    """
    if not href:
        return None
    raw = href.strip()
    if not raw or raw.lower().startswith(_REJECTED_PREFIXES):
        return None

    try:
        if raw.lower().startswith(_ABSOLUTE_PREFIXES):
            absolute = urljoin(page_url, raw)
        elif raw.startswith("/"):
            absolute = urljoin(root_origin + "/", raw)
        else:
            absolute = urljoin(page_url, raw)
        if origin_of(absolute) != root_origin:
            return None
        return canonical_url(absolute)
    except (UrlParseError, ValueError):
        return None


def extract_links(page: ParsedPage, root_origin: str) -> List[str]:
    """
    Canonical same-origin links of *page* in document order, without duplicates.
    """
    seen: set[str] = set()
    links: List[str] = []
    for href in page.links:
        link = canonicalize_link(href, page.url, root_origin)
        if link is not None and link not in seen:
            seen.add(link)
            links.append(link)
    return links


__all__ = ["origin_of", "canonical_url", "canonicalize_link", "extract_links"]
