"""
Rendering engine lifecycle management using Playwright.

The BrowserManager is an explicitly owned handle to a single browser
instance. It launches lazily on first use, hands out one isolated
context + page per fetch, and is shut down explicitly (or by leaving
its async context). A failed launch is permanent for the lifetime of
the manager: every later fetch falls back to the direct transport.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import (
    async_playwright,
    Browser,
    Playwright,
)

from privacy_intel.browser.page_context import PageContext
from privacy_intel.config.settings import BrowserSettings
from privacy_intel.core.exceptions import BrowserError, BrowserUnavailableError
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


class BrowserManager:
    """
    Manages the Playwright browser lifecycle.

    Example:
        >>> async with BrowserManager(settings.browser) as manager:
        ...     async with manager.page(user_agent=ua, timeout_ms=30000) as page_ctx:
        ...         html = await page_ctx.fetch_html("https://example.com")
    """

    def __init__(self, settings: BrowserSettings) -> None:
        self.settings = settings
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._launch_failed = False
        self._launch_lock = asyncio.Lock()

    async def start(self) -> None:
        """
        Start Playwright and launch the browser.

        Raises:
            BrowserError: If the browser fails to launch
        """
        if self._browser is not None:
            logger.warning("Browser already started, skipping launch")
            return

        try:
            logger.info(
                f"Starting {self.settings.browser_type} browser "
                f"(headless={self.settings.headless})"
            )

            self._playwright = await async_playwright().start()
            browser_type = getattr(self._playwright, self.settings.browser_type)
            self._browser = await browser_type.launch(
                headless=self.settings.headless,
                args=list(self.settings.launch_args),
            )

            logger.info("Browser started successfully")

        except Exception as e:
            await self._cleanup()
            raise BrowserError(
                f"Failed to launch browser: {e}",
                details={"browser_type": self.settings.browser_type},
            ) from e

    async def ensure_started(self) -> bool:
        """
        Launch the browser on first use.

        Never raises. A launch failure is logged as a warning and makes
        the engine permanently unavailable for this manager.

        Returns:
            True if a connected browser is available
        """
        if self._launch_failed:
            return False

        async with self._launch_lock:
            if self._browser is None and not self._launch_failed:
                try:
                    await self.start()
                except BrowserError as e:
                    self._launch_failed = True
                    logger.warning(
                        f"Rendering engine unavailable, using direct HTTP fetches: {e}"
                    )

        return self.is_running

    @property
    def available(self) -> bool:
        """False once a launch attempt has failed."""
        return not self._launch_failed

    @property
    def is_running(self) -> bool:
        """Check if the browser is currently running and connected."""
        return self._browser is not None and self._browser.is_connected()

    @asynccontextmanager
    async def page(
        self,
        user_agent: str | None = None,
        timeout_ms: int = 30000,
    ) -> AsyncIterator[PageContext]:
        """
        Acquire a fresh context + page scoped to one fetch.

        Both are closed on exit regardless of success, timeout or error.

        Raises:
            BrowserUnavailableError: If the browser is not running
        """
        if not self.is_running:
            raise BrowserUnavailableError("Browser not started or disconnected")

        context_options: dict = {
            "viewport": {
                "width": self.settings.viewport_width,
                "height": self.settings.viewport_height,
            },
            "ignore_https_errors": self.settings.ignore_https_errors,
        }
        if user_agent:
            context_options["user_agent"] = user_agent

        try:
            context = await self._browser.new_context(**context_options)
        except Exception as e:
            raise BrowserError(f"Failed to create browser context: {e}") from e

        try:
            context.set_default_timeout(timeout_ms)
            context.set_default_navigation_timeout(timeout_ms)
            page_ctx = PageContext(await context.new_page())
            try:
                yield page_ctx
            finally:
                await page_ctx.close()
        finally:
            try:
                await context.close()
            except Exception as e:
                logger.warning(f"Error closing browser context: {e}")

    async def stop(self) -> None:
        """
        Stop browser and cleanup Playwright resources.

        Safe to call multiple times.
        """
        was_running = self._browser is not None
        await self._cleanup()
        if was_running:
            logger.info("Browser stopped")

    async def _cleanup(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error stopping Playwright: {e}")
            self._playwright = None

    async def __aenter__(self) -> "BrowserManager":
        await self.ensure_started()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
