"""Document fetching for the attendance extractors.

Extractors only need something that turns a URL into a parsed document; they
receive it as a :class:`DocumentFetcher` argument so tests can hand them
in-memory HTML.  :class:`SenadoFetcher` is the real implementation: a
``requests`` session with retries and a per-instance rate limit, run off the
event loop with :func:`asyncio.to_thread`.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Protocol

import requests
from bs4 import BeautifulSoup
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import MAX_RETRIES, REQUEST_DELAY, TIMEOUT_SECONDS, USER_AGENT

LOGGER = logging.getLogger(__name__)

PERIODO_PLACEHOLDER = ":periodo:"
SENADOR_PLACEHOLDER = ":senador-id:"


def build_url(template: str, periodo: int, senador_id: str | int | None = None) -> str:
    """Substitute the period (and optionally senator) id into a URL template."""
    url = template.replace(PERIODO_PLACEHOLDER, str(periodo), 1)
    if senador_id is not None:
        url = url.replace(SENADOR_PLACEHOLDER, str(senador_id), 1)
    return url


class DocumentFetcher(Protocol):
    async def fetch_document(self, url: str) -> BeautifulSoup: ...


@dataclass
class SenadoFetcher:
    timeout_seconds: int = TIMEOUT_SECONDS
    request_delay: float = REQUEST_DELAY
    max_retries: int = MAX_RETRIES
    _session: requests.Session = field(default_factory=requests.Session, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _last_request_time: float = field(default=0.0, repr=False)

    def __post_init__(self) -> None:
        """Configure retry adapter for resilient HTTP requests."""
        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1.0,
            status_forcelist=[429, 500, 502, 503, 504],
        )
        adapter = HTTPAdapter(
            max_retries=retry_strategy,
            pool_connections=2,
            pool_maxsize=2,
        )
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)
        self._session.headers["User-Agent"] = USER_AGENT

    # ── throttled HTTP ────────────────────────────────────────────────────

    def _throttled_get(self, url: str) -> requests.Response:
        """GET with a per-instance rate limit to avoid IP blocks."""
        with self._lock:
            elapsed = time.time() - self._last_request_time
            wait = max(0.0, self.request_delay - elapsed)
            # Next caller waits from the end of this request's delay.
            self._last_request_time = time.time() + wait
        if wait > 0:
            time.sleep(wait)
        return self._session.get(url, timeout=self.timeout_seconds)

    def get_document(self, url: str) -> BeautifulSoup:
        LOGGER.info("Fetching %s", url)
        t0 = time.perf_counter()
        resp = self._throttled_get(url)
        resp.raise_for_status()
        soup = BeautifulSoup(resp.text, "html.parser")
        LOGGER.info(
            "  %d bytes in %.0fms",
            len(resp.content),
            (time.perf_counter() - t0) * 1000,
        )
        return soup

    async def fetch_document(self, url: str) -> BeautifulSoup:
        return await asyncio.to_thread(self.get_document, url)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> SenadoFetcher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
