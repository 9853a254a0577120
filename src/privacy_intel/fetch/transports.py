"""
Transports: one attempt at turning a URL into markup.

RenderingTransport drives the shared Playwright engine through a fresh
page per call. DirectTransport issues a single httpx GET with a
browser-like header set.
"""

import httpx

from privacy_intel.browser.manager import BrowserManager
from privacy_intel.core.exceptions import (
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
)
from privacy_intel.fetch.models import FetchOptions, TransportKind
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)

MAX_REDIRECTS = 5


def browser_headers(user_agent: str) -> dict[str, str]:
    """Headers sent by the direct transport."""
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


class RenderingTransport:
    """Executes page scripts and returns the DOM after network idle."""

    kind = TransportKind.RENDERED

    def __init__(self, browser_manager: BrowserManager) -> None:
        self.browser_manager = browser_manager

    async def is_ready(self) -> bool:
        """Launch the engine if needed; False when it cannot be used."""
        return await self.browser_manager.ensure_started()

    async def fetch(self, url: str, options: FetchOptions) -> str:
        async with self.browser_manager.page(
            user_agent=options.user_agent,
            timeout_ms=options.timeout_ms,
        ) as page_ctx:
            return await page_ctx.fetch_html(url)


class DirectTransport:
    """
    Plain HTTP GET without script execution.

    A short-lived client is created per call. An httpx transport may be
    injected (tests pass httpx.MockTransport).
    """

    kind = TransportKind.DIRECT

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport

    async def fetch(self, url: str, options: FetchOptions) -> str:
        async with httpx.AsyncClient(
            transport=self._transport,
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        ) as client:
            return await self._get(client, url, options)

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        options: FetchOptions,
    ) -> str:
        logger.debug(f"GET {url}")

        try:
            response = await client.get(
                url,
                headers=browser_headers(options.user_agent),
                timeout=options.timeout_seconds,
            )
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(
                f"Request timed out after {options.timeout_ms}ms", url=url) from e
        except httpx.TooManyRedirects as e:
            raise FetchError(
                f"More than {MAX_REDIRECTS} redirects", url=url) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e

        if response.status_code >= 400:
            raise HTTPStatusError(
                f"HTTP {response.status_code} error",
                url=url,
                status_code=response.status_code,
            )

        return response.text
