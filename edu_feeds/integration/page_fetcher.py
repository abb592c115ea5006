"""HTTP client for retrieving upstream HTML pages.

Performs exactly one GET per ``fetch`` call. Retries are the caller's
concern (see ``SourceJob``). Every transport failure and every non-2xx
response is raised as ``FetchError``; an empty 200 body is returned as-is.
"""

from __future__ import annotations

import logging

import httpx

from edu_feeds.middleware.error_handler import FetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """Fetches raw markup over a shared ``httpx.AsyncClient``.

    Parameters
    ----------
    timeout_seconds:
        Total timeout applied to each request. Must be finite.
    user_agent:
        ``User-Agent`` header sent with every request.
    client:
        Optional pre-built client (tests inject one with a mock transport).
        When omitted the fetcher creates and owns its own client.
    """

    def __init__(
        self,
        timeout_seconds: float = 15.0,
        user_agent: str = "Mozilla/5.0 (compatible; edu-feeds/1.0)",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        self._timeout = timeout_seconds
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
        )

    async def fetch(self, url: str) -> str:
        """GET *url* and return the response body as text.

        Raises
        ------
        FetchError
            On DNS/TLS/connection failures, timeouts, or a non-2xx status.
        """
        try:
            response = await self._client.get(url, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise FetchError(
                f"Timed out after {self._timeout}s fetching {url}",
                target_url=url,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(
                f"Transport error fetching {url}: {exc.__class__.__name__}: {exc}",
                target_url=url,
            ) from exc

        if not response.is_success:
            raise FetchError(
                f"Upstream returned HTTP {response.status_code} for {url}",
                target_url=url,
                status_code=response.status_code,
            )

        logger.debug(
            "Fetched %s (%d bytes)",
            url,
            len(response.content),
            extra={"target_url": url, "status_code": response.status_code},
        )
        return response.text

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()
