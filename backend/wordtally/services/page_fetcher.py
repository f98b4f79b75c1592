"""
WordTally Backend — Page Fetcher
=================================

What:  Retrieves the body of a submitted URL over HTTP.
Why:   The add-URL pipeline needs the page text to count words. Putting the
       fetch behind an abstract interface lets tests (and future fetchers,
       e.g. a headless browser for script-rendered pages) slot in without
       touching UrlService.
How:   HttpxPageFetcher issues one GET with httpx's async client, following
       redirects, bounded by FETCH_TIMEOUT.

Failure policy:
    Any transport error (DNS, refused connection, TLS, timeout) and any HTTP
    status >= 400 raises UpstreamError. Nothing is retried; the failure goes
    straight back to the client as a 500 and nothing is written to the store.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from wordtally.config import settings
from wordtally.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class PageFetcher(ABC):
    """
    Abstract interface for retrieving a page body.

    Contract:
        - fetch() returns the decoded body text (possibly empty)
        - every failure is raised as UpstreamError
    """

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """
        Fetch `url` and return its body as text.

        Raises:
            UpstreamError: The page could not be retrieved.
        """
        ...


class HttpxPageFetcher(PageFetcher):
    """
    httpx-backed fetcher.

    A client is opened per call so no connection state is shared between
    concurrent requests. `transport` is only passed in tests
    (httpx.MockTransport).
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout if timeout is not None else settings.fetch_timeout
        self.user_agent = user_agent or settings.fetch_user_agent
        self._transport = transport

    async def fetch(self, url: str) -> str:
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Fetch of %s returned HTTP %d", url, status)
            raise UpstreamError(
                message=f"The page responded with HTTP {status}",
                context={"url": url, "status": status},
            )
        except httpx.HTTPError as e:
            logger.warning("Fetch of %s failed: %s", url, type(e).__name__)
            raise UpstreamError(
                context={"url": url, "error_type": type(e).__name__, "error": str(e)},
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Fetched %s in %.0fms (%d bytes)",
            url,
            duration_ms,
            len(response.content),
        )
        return response.text


page_fetcher = HttpxPageFetcher()
