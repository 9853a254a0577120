"""
Tests for the fetch module.

Tests direct HTTP transport behavior against httpx.MockTransport,
and the retry/backoff/transport-selection logic of FetchStrategy.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from privacy_intel.core.exceptions import (
    BrowserUnavailableError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    NavigationError,
)
from privacy_intel.fetch import (
    DirectTransport,
    FetchContent,
    FetchFailure,
    FetchOptions,
    FetchStrategy,
    TransportKind,
    browser_headers,
)


class ScriptedTransport:
    """Transport replaying a list of outcomes; the last one repeats."""

    def __init__(self, kind: TransportKind, outcomes: list) -> None:
        self.kind = kind
        self.outcomes = list(outcomes)
        self.calls = 0

    async def fetch(self, url: str, options: FetchOptions) -> str:
        self.calls += 1
        outcome = self.outcomes[min(self.calls, len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeRenderingTransport(ScriptedTransport):
    def __init__(self, outcomes: list, ready: bool = True) -> None:
        super().__init__(TransportKind.RENDERED, outcomes)
        self.ready = ready
        self.ready_checks = 0

    async def is_ready(self) -> bool:
        self.ready_checks += 1
        return self.ready


class CrashingRenderingTransport(FakeRenderingTransport):
    """Engine that dies during its first fetch and reports not ready after."""

    def __init__(self, error: Exception) -> None:
        super().__init__([error])

    async def fetch(self, url: str, options: FetchOptions) -> str:
        self.ready = False
        return await super().fetch(url, options)


class SlowTransport:
    kind = TransportKind.DIRECT

    async def fetch(self, url: str, options: FetchOptions) -> str:
        await asyncio.sleep(5)
        return "<html></html>"


class TestFetchOptions:
    """Tests for FetchOptions."""

    def test_defaults(self):
        options = FetchOptions()

        assert options.timeout_ms == 30000
        assert options.max_retries == 3
        assert options.prefer_rendering is True
        assert options.timeout_seconds == 30.0

    def test_invalid_values_rejected(self):
        with pytest.raises(ValueError):
            FetchOptions(timeout_ms=0)

        with pytest.raises(ValueError):
            FetchOptions(max_retries=0)

    def test_from_settings(self, test_settings):
        options = FetchOptions.from_settings(test_settings.fetch)

        assert options.prefer_rendering is False
        assert options.max_retries == test_settings.fetch.max_retries


class TestDirectTransport:
    """Tests for the httpx-based transport."""

    @pytest.mark.asyncio
    async def test_returns_body_and_sends_browser_headers(self, fast_options):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(request.headers)
            return httpx.Response(200, text="<html>ok</html>")

        transport = DirectTransport(transport=httpx.MockTransport(handler))
        markup = await transport.fetch("https://example.com/", fast_options)

        assert markup == "<html>ok</html>"
        assert seen["user-agent"] == fast_options.user_agent
        assert seen["accept-language"] == "en-US,en;q=0.5"
        assert seen["upgrade-insecure-requests"] == "1"

    def test_browser_headers(self):
        headers = browser_headers("TestAgent/1.0")

        assert headers["User-Agent"] == "TestAgent/1.0"
        assert headers["Accept-Encoding"] == "gzip, deflate"
        assert headers["Connection"] == "keep-alive"

    @pytest.mark.asyncio
    async def test_error_status_raises(self, fast_options):
        transport = DirectTransport(
            transport=httpx.MockTransport(lambda request: httpx.Response(404))
        )

        with pytest.raises(HTTPStatusError) as exc_info:
            await transport.fetch("https://example.com/missing", fast_options)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_follows_redirects(self, fast_options):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": "/new"})
            return httpx.Response(200, text="moved here")

        transport = DirectTransport(transport=httpx.MockTransport(handler))

        assert await transport.fetch("https://example.com/old", fast_options) == "moved here"

    @pytest.mark.asyncio
    async def test_redirect_loop_fails(self, fast_options):
        transport = DirectTransport(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(302, headers={"Location": "/loop"})
            )
        )

        with pytest.raises(FetchError):
            await transport.fetch("https://example.com/loop", fast_options)

    @pytest.mark.asyncio
    async def test_timeout_mapped(self, fast_options):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = DirectTransport(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchTimeoutError):
            await transport.fetch("https://example.com/", fast_options)

    @pytest.mark.asyncio
    async def test_connection_error_mapped(self, fast_options):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        transport = DirectTransport(transport=httpx.MockTransport(handler))

        with pytest.raises(FetchError):
            await transport.fetch("https://example.com/", fast_options)


class TestFetchStrategy:
    """Tests for retry and transport selection."""

    @pytest.mark.asyncio
    async def test_first_attempt_success(self, fast_options):
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>hi</html>"])
        strategy = FetchStrategy(direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", fast_options)

        assert isinstance(result, FetchContent)
        assert result.ok
        assert result.markup == "<html>hi</html>"
        assert result.attempts == 1
        assert result.transport == TransportKind.DIRECT

    @pytest.mark.asyncio
    async def test_retry_then_success(self, fast_options):
        direct = ScriptedTransport(
            TransportKind.DIRECT,
            [FetchError("flaky"), "<html>second</html>"],
        )
        strategy = FetchStrategy(direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", fast_options)

        assert result.ok
        assert result.attempts == 2
        assert direct.calls == 2

    @pytest.mark.asyncio
    async def test_exhaustion_returns_failure(self, fast_options):
        """Main fetch that always fails is attempted exactly max_retries times."""
        direct = ScriptedTransport(TransportKind.DIRECT, [FetchError("connection refused")])
        strategy = FetchStrategy(direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://down.example", fast_options)

        assert isinstance(result, FetchFailure)
        assert not result.ok
        assert result.attempts == 3
        assert "connection refused" in result.reason
        assert direct.calls == 3

    @pytest.mark.asyncio
    async def test_linear_backoff_between_attempts(self, fast_options):
        direct = ScriptedTransport(TransportKind.DIRECT, [FetchError("down")])
        strategy = FetchStrategy(direct=direct, backoff_seconds=1.0)

        with patch("privacy_intel.fetch.strategy.asyncio.sleep", new=AsyncMock()) as sleep:
            await strategy.fetch("https://example.com", fast_options)

        # No pause after the final attempt
        assert [c.args[0] for c in sleep.await_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_unexpected_exception_becomes_failure(self, fast_options):
        direct = ScriptedTransport(TransportKind.DIRECT, [ValueError("weird")])
        strategy = FetchStrategy(direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", fast_options)

        assert not result.ok
        assert result.reason == "weird"

    @pytest.mark.asyncio
    async def test_attempt_timeout(self):
        options = FetchOptions(timeout_ms=50, max_retries=2, prefer_rendering=False)
        strategy = FetchStrategy(direct=SlowTransport(), backoff_seconds=0)

        result = await strategy.fetch("https://slow.example", options)

        assert not result.ok
        assert result.attempts == 2
        assert "50ms" in result.reason

    @pytest.mark.asyncio
    async def test_prefers_rendering_when_ready(self):
        rendering = FakeRenderingTransport(["<html>rendered</html>"])
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>direct</html>"])
        strategy = FetchStrategy(rendering=rendering, direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", FetchOptions())

        assert result.transport == TransportKind.RENDERED
        assert result.markup == "<html>rendered</html>"
        assert direct.calls == 0

    @pytest.mark.asyncio
    async def test_falls_back_to_direct_when_engine_unavailable(self):
        rendering = FakeRenderingTransport(["<html>rendered</html>"], ready=False)
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>direct</html>"])
        strategy = FetchStrategy(rendering=rendering, direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", FetchOptions())

        assert result.transport == TransportKind.DIRECT
        assert rendering.calls == 0

    @pytest.mark.asyncio
    async def test_rendering_not_consulted_when_not_preferred(self, fast_options):
        rendering = FakeRenderingTransport(["<html>rendered</html>"])
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>direct</html>"])
        strategy = FetchStrategy(rendering=rendering, direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", fast_options)

        assert result.transport == TransportKind.DIRECT
        assert rendering.ready_checks == 0

    @pytest.mark.asyncio
    async def test_rendering_errors_are_retried(self):
        rendering = FakeRenderingTransport(
            [NavigationError("Navigation timeout", url="https://example.com"), "<html>ok</html>"]
        )
        strategy = FetchStrategy(rendering=rendering, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", FetchOptions(max_retries=2))

        assert result.ok
        assert result.attempts == 2

    @pytest.mark.asyncio
    async def test_renderer_crash_falls_back_to_direct(self):
        rendering = CrashingRenderingTransport(
            NavigationError("Target closed", url="https://example.com")
        )
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>direct</html>"])
        strategy = FetchStrategy(rendering=rendering, direct=direct, backoff_seconds=0)

        result = await strategy.fetch(
            "https://example.com", FetchOptions(max_retries=3, prefer_rendering=True)
        )

        assert result.ok
        assert result.transport == TransportKind.DIRECT
        assert result.markup == "<html>direct</html>"
        assert result.attempts == 2
        assert rendering.calls == 1
        assert direct.calls == 1

    @pytest.mark.asyncio
    async def test_engine_disconnect_mid_fetch_falls_back_to_direct(self):
        rendering = CrashingRenderingTransport(BrowserUnavailableError("Browser disconnected"))
        direct = ScriptedTransport(TransportKind.DIRECT, ["<html>direct</html>"])
        strategy = FetchStrategy(rendering=rendering, direct=direct, backoff_seconds=0)

        result = await strategy.fetch("https://example.com", FetchOptions(max_retries=2))

        assert result.ok
        assert result.transport == TransportKind.DIRECT
        assert rendering.calls == 1
