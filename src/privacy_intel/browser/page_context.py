"""
Page wrapper used by the rendering transport.

Navigates, waits for the network to settle and returns the final DOM
serialization, translating Playwright failures into NavigationError.
"""

import time

from playwright.async_api import Page, Response

from privacy_intel.core.exceptions import NavigationError
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


class PageContext:
    """
    Wrapper around a Playwright Page owned by a single fetch.

    Example:
        >>> ctx = PageContext(await context.new_page())
        >>> html = await ctx.fetch_html("https://example.com")
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    async def navigate(
        self,
        url: str,
        wait_until: str = "networkidle",
    ) -> Response | None:
        """
        Navigate to URL and wait for the requested load state.

        Raises:
            NavigationError: If navigation fails, times out or returns >= 400
        """
        start_time = time.perf_counter()

        try:
            logger.debug(f"Rendering: {url}")
            response = await self.page.goto(url, wait_until=wait_until)

            elapsed = (time.perf_counter() - start_time) * 1000
            logger.debug(f"Render complete in {elapsed:.0f}ms")

            if response and response.status >= 400:
                raise NavigationError(
                    f"HTTP {response.status} error",
                    url=url,
                    status_code=response.status,
                )

            return response

        except NavigationError:
            raise
        except Exception as e:
            error_msg = str(e)

            if "timeout" in error_msg.lower():
                raise NavigationError(
                    f"Navigation timeout: {error_msg}",
                    url=url,
                ) from e

            if any(x in error_msg.lower() for x in ["net::", "dns", "connection"]):
                raise NavigationError(
                    f"Network error: {error_msg}",
                    url=url,
                ) from e

            raise NavigationError(
                f"Navigation failed: {error_msg}",
                url=url,
            ) from e

    async def fetch_html(self, url: str) -> str:
        """Navigate with network-idle waiting and return the rendered markup."""
        await self.navigate(url, wait_until="networkidle")
        return await self.page.content()

    async def close(self) -> None:
        try:
            await self.page.close()
        except Exception as e:
            logger.warning(f"Error closing page: {e}")
