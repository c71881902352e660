"""
Memoising HTTP fetcher that normalises every outcome into a FetchResponse.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp
import structlog

from axaudit.config.config import FetcherConfig
from axaudit.observability.metrics import METRICS
from axaudit.protocols import FetchResponse

logger = structlog.get_logger(__name__)

TIMEOUT_ERROR = "Request timed out"


def normalize_headers(headers: Any) -> Dict[str, str]:
    """Lower-case header names, joining repeated headers with ", "."""
    normalized: Dict[str, str] = {}
    for key, value in headers.items():
        name = key.lower()
        if name in normalized:
            normalized[name] = f"{normalized[name]}, {value}"
        else:
            normalized[name] = value
    return normalized


class Fetcher:
    """
    HTTP client scoped to a single audit.

    Responses are cached by exact URL string for the lifetime of the instance,
    failures included, so every check asking for the same URL observes the
    same FetchResponse and the network is hit at most once per URL. Requests
    for a URL that is already in flight share the pending request.
    """

    def __init__(self, config: Optional[FetcherConfig] = None, *, timeout_ms: Optional[int] = None):
        self.config = config or FetcherConfig()
        self.timeout_ms = timeout_ms if timeout_ms is not None else self.config.timeout_ms

        self._cache: Dict[str, FetchResponse] = {}
        self._inflight: Dict[str, asyncio.Future[FetchResponse]] = {}

        self.session: Optional[aiohttp.ClientSession] = None
        self._is_initialized = False
        self.network_requests = 0

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    async def initialize(self) -> None:
        """Open the underlying HTTP session."""
        if self.session is None:
            self.session = aiohttp.ClientSession(
                headers={"User-Agent": self.config.user_agent, "Accept": self.config.accept},
                timeout=aiohttp.ClientTimeout(total=None),
            )
            self._is_initialized = True
            logger.debug("Fetcher session initialized", timeout_ms=self.timeout_ms)

    async def close(self) -> None:
        """Close the session, cancel requests still in flight and drop the cache."""
        for pending in self._inflight.values():
            pending.cancel()
        if self.session:
            await self.session.close()
            self.session = None
        self._cache.clear()
        self._inflight.clear()
        self._is_initialized = False

    async def __aenter__(self) -> "Fetcher":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def cached(self, url: str) -> Optional[FetchResponse]:
        return self._cache.get(url)

    async def fetch(self, url: str) -> FetchResponse:
        """
        Fetch a URL, serving repeated requests from the cache.

        Never raises for network or HTTP problems; those are encoded in the
        returned FetchResponse.
        """
        if not self._is_initialized:
            raise RuntimeError("Fetcher not initialized. Call initialize() first.")

        cached = self.cached(url)
        if cached is not None:
            logger.debug("Cache hit", url=url)
            METRICS["fetch_cache_hits_total"].inc()
            return cached

        pending = self._inflight.get(url)
        if pending is None:
            pending = asyncio.ensure_future(self._fetch_uncached(url))
            self._inflight[url] = pending
        else:
            METRICS["fetch_cache_hits_total"].inc()

        # A cancelled waiter must not cancel the request shared with other checks.
        return await asyncio.shield(pending)

    async def _fetch_uncached(self, url: str) -> FetchResponse:
        try:
            result = await self._perform_request(url)
            self._cache[url] = result
            return result
        finally:
            self._inflight.pop(url, None)

    async def _perform_request(self, url: str) -> FetchResponse:
        assert self.session is not None
        self.network_requests += 1
        start_time = time.perf_counter()
        logger.debug("Fetching", url=url)

        try:
            async with asyncio.timeout(self.timeout_seconds):
                async with self.session.get(url, allow_redirects=True) as response:
                    body = await response.text(errors="replace")
                    result = FetchResponse(
                        status=response.status,
                        headers=normalize_headers(response.headers),
                        body=body,
                        ok=200 <= response.status < 300,
                        url=str(response.url),
                    )
        except TimeoutError:
            logger.warning("Request timed out", url=url, timeout_ms=self.timeout_ms)
            METRICS["fetch_requests_total"].labels(outcome="timeout").inc()
            return FetchResponse.failure(url, TIMEOUT_ERROR)
        except Exception as e:
            error = str(e) or type(e).__name__
            logger.warning("Request failed", url=url, error=error)
            METRICS["fetch_requests_total"].labels(outcome="error").inc()
            return FetchResponse.failure(url, error)
        finally:
            METRICS["fetch_latency_seconds"].observe(time.perf_counter() - start_time)

        METRICS["fetch_requests_total"].labels(outcome="ok" if result.ok else "http_error").inc()
        logger.debug("Fetched", url=url, status=result.status, bytes=len(result.body), final_url=result.url)
        return result

    def get_stats(self) -> Dict[str, Any]:
        return {
            "cached_urls": len(self._cache),
            "in_flight": len(self._inflight),
            "network_requests": self.network_requests,
        }
