"""
Fetch strategy: transport selection, hard timeout and linear-backoff retry.

Each attempt re-selects its transport, so a renderer crash on one
attempt can fall back to direct HTTP on the next. Failure is returned
as a FetchFailure value; nothing raises past fetch().
"""

import asyncio

from privacy_intel.core.exceptions import FetchTimeoutError
from privacy_intel.fetch.models import (
    FetchContent,
    FetchFailure,
    FetchOptions,
    FetchResult,
    Transport,
)
from privacy_intel.fetch.transports import DirectTransport, RenderingTransport
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


class FetchStrategy:
    """
    Acquires page markup with retry.

    Args:
        rendering: Rendering transport, or None to always fetch directly
        direct: Direct HTTP transport
        backoff_seconds: Attempt n is followed by a pause of backoff_seconds * n

    Example:
        >>> strategy = FetchStrategy(RenderingTransport(manager), DirectTransport())
        >>> result = await strategy.fetch("https://example.com", FetchOptions())
        >>> if result.ok:
        ...     print(len(result.markup))
    """

    def __init__(
        self,
        rendering: RenderingTransport | None = None,
        direct: DirectTransport | None = None,
        backoff_seconds: float = 1.0,
    ) -> None:
        self.rendering = rendering
        self.direct = direct or DirectTransport()
        self.backoff_seconds = backoff_seconds

    async def select_transport(self, options: FetchOptions) -> Transport:
        """Rendering when preferred and the engine is connected, else direct."""
        if options.prefer_rendering and self.rendering is not None:
            if await self.rendering.is_ready():
                return self.rendering
        return self.direct

    async def fetch(self, url: str, options: FetchOptions) -> FetchResult:
        last_reason = "no attempts made"

        for attempt in range(1, options.max_retries + 1):
            transport = await self.select_transport(options)
            logger.debug(
                f"Fetching {url} via {transport.kind.value} "
                f"(attempt {attempt}/{options.max_retries})"
            )

            try:
                markup = await self._attempt(transport, url, options)
                return FetchContent(
                    url=url,
                    markup=markup,
                    transport=transport.kind,
                    attempts=attempt,
                )
            except Exception as e:
                last_reason = str(e) or e.__class__.__name__
                logger.warning(f"Attempt {attempt} failed for {url}: {last_reason}")

            if attempt < options.max_retries:
                await asyncio.sleep(self.backoff_seconds * attempt)

        logger.error(f"All {options.max_retries} attempts failed for {url}")
        return FetchFailure(url=url, reason=last_reason, attempts=options.max_retries)

    async def _attempt(
        self,
        transport: Transport,
        url: str,
        options: FetchOptions,
    ) -> str:
        try:
            return await asyncio.wait_for(
                transport.fetch(url, options),
                timeout=options.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(
                f"Attempt exceeded {options.timeout_ms}ms", url=url) from e
