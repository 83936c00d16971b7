# script_scout/crawler/fetcher.py
"""
Fetcher module: HTTP GET with a concurrency ceiling, rate limiting,
retry/backoff and timeout. One instance is shared by the crawler and the
script analyzer for a whole run.
"""
from __future__ import annotations

import asyncio
import logging
import random
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from aiohttp import ClientError, ClientSession, ClientTimeout

from script_scout.config import ScannerConfig
from script_scout.errors import HttpStatusError, TransportError


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Status and decoded body of a completed request."""

    url: str
    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Fetcher:
    """Handles HTTP fetching with rate limit, retries/backoff, and timeout."""

    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: ScannerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._semaphore = asyncio.Semaphore(config.concurrency)
        self._rate_lock = asyncio.Lock()
        self._last_request_ts = 0.0
        self.requests_made = 0
        self.logger = logging.getLogger("ScriptScout")

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self.session is not None and not self.session.closed:
            await self.session.close()

    async def get(self, url: str) -> FetchResponse:
        """
        GET *url* and return its FetchResponse, whatever the status.

        Retryable statuses (5xx, 429) and transport errors are retried up to
        ``config.retry_times``. Raises TransportError when the request cannot
        be completed.
        """
        attempts = 0
        while True:
            try:
                response = await self._request(url)
            except TransportError:
                if attempts >= self.config.retry_times:
                    raise
            else:
                if response.status not in self._RETRY_STATUS or attempts >= self.config.retry_times:
                    return response
            attempts += 1
            factor = self.config.backoff_factor
            backoff = min(60.0, factor * 2**attempts + factor * random.random())
            self.logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
            await asyncio.sleep(backoff)

    async def fetch_text(self, url: str) -> str:
        """Return the body of *url*; non-2xx responses raise HttpStatusError."""
        response = await self.get(url)
        if not response.ok:
            raise HttpStatusError(url, response.status)
        return response.text

    async def _request(self, url: str) -> FetchResponse:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        async with self._semaphore:
            await self._wait_for_rate_limit()
            self.requests_made += 1
            try:
                async with self.session.get(url) as resp:
                    text = await resp.text(errors="replace")
                    return FetchResponse(url=url, status=resp.status, text=text)
            except (ClientError, asyncio.TimeoutError, ValueError) as exc:
                raise TransportError(url, str(exc) or type(exc).__name__) from exc

    async def _wait_for_rate_limit(self) -> None:
        interval = 1 / self.config.rate_limit
        async with self._rate_lock:
            now = time.monotonic()
            wait = interval - (now - self._last_request_ts)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request_ts = time.monotonic()


__all__ = ["FetchResponse", "Fetcher"]
