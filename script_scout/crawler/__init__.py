"""script_scout.crawler: обход сайта и идентификация скриптов на страницах."""

from .crawler import AsyncCrawler
from .fetcher import FetchResponse, Fetcher
from .link_extractor import canonical_url, canonicalize_link, extract_links, origin_of
from .models import PageResult, ScriptKind, ScriptRef
from .script_identifier import INLINE_PREFIX, identify_script

__all__ = [
    "AsyncCrawler",
    "FetchResponse",
    "Fetcher",
    "INLINE_PREFIX",
    "PageResult",
    "ScriptKind",
    "ScriptRef",
    "canonical_url",
    "canonicalize_link",
    "extract_links",
    "identify_script",
    "origin_of",
]
