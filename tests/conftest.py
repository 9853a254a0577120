"""
Shared pytest fixtures for Privacy Intelligence System tests.

Provides reusable fixtures for:
- Configuration and settings
- Sample pages (main page, privacy policy, trust center)
- Fake fetch strategies and summarizers

Nothing here touches the network or launches a browser.
"""

import tempfile
from pathlib import Path
from typing import Generator

import pytest

from privacy_intel.config import Settings, reset_settings
from privacy_intel.fetch import FetchContent, FetchFailure, FetchOptions, TransportKind
from privacy_intel.llm import ContentType, ScoredSummary
from privacy_intel.utils.logging import reset_logging


@pytest.fixture(autouse=True)
def reset_global_state():
    """Reset cached settings and logging before and after each test."""
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory that's cleaned up after the test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no waiting and AI disabled."""
    return Settings(
        fetch={"backoff_seconds": 0, "prefer_rendering": False},
        batch={"inter_request_delay_seconds": 0},
        llm={"enabled": False},
    )


@pytest.fixture
def fast_options() -> FetchOptions:
    return FetchOptions(timeout_ms=2000, max_retries=3, prefer_rendering=False)


class FakeFetchStrategy:
    """
    Serves canned markup per URL.

    URLs missing from `pages` fail as if every retry was exhausted.
    """

    def __init__(self, pages: dict[str, str] | None = None, max_retries: int = 3) -> None:
        self.pages = dict(pages or {})
        self.max_retries = max_retries
        self.calls: list[str] = []

    async def fetch(self, url: str, options: FetchOptions):
        self.calls.append(url)
        if url in self.pages:
            return FetchContent(url=url, markup=self.pages[url], transport=TransportKind.DIRECT)
        return FetchFailure(url=url, reason="connection refused", attempts=options.max_retries)


class FakeSummarizer:
    """Returns queued summaries per content type and records its calls."""

    def __init__(
        self,
        results: dict[ContentType, ScoredSummary | None] | None = None,
        available: bool = True,
        error: Exception | None = None,
    ) -> None:
        self.results = results or {}
        self.available = available
        self.error = error
        self.calls: list[tuple[str, ContentType]] = []

    def is_available(self) -> bool:
        return self.available

    async def summarize(self, content: str, content_type: ContentType = ContentType.GENERAL):
        self.calls.append((content, content_type))
        if self.error is not None:
            raise self.error
        return self.results.get(content_type)


@pytest.fixture
def main_page_html() -> str:
    """Main page with legal links in the footer and contact details."""
    return """
    <!DOCTYPE html>
    <html lang="en">
    <head>
        <meta charset="UTF-8">
        <meta name="description" content="Acme builds secure widgets for businesses.">
        <title>Acme Widgets | Home</title>
        <script>var tracker = "collect everything";</script>
    </head>
    <body>
        <header>
            <nav>
                <a href="/products">Products</a>
                <a href="/blog/privacy-tips">Privacy tips</a>
            </nav>
        </header>
        <main>
            <h1>Widgets for everyone</h1>
            <p>Email us at hello@acme.test or sales@acme.test.</p>
            <p>Call +1 (555) 123-4567 any time.</p>
            <p>Visit 42 Main Street in Springfield.</p>
        </main>
        <footer>
            <a href="/privacy-policy">Privacy Policy</a>
            <a href="https://trust.acme.test/">Trust Center</a>
            <a href="/terms-of-service">Terms</a>
        </footer>
    </body>
    </html>
    """


@pytest.fixture
def privacy_policy_html() -> str:
    return """
    <html><head><title>Privacy Policy</title></head>
    <body>
        <h1>Privacy Policy</h1>
        <p>We collect your email address and store it securely.</p>
        <p>We never share data with a third party without consent.</p>
        <p>We comply with the GDPR and the CCPA.</p>
    </body></html>
    """


@pytest.fixture
def trust_center_html() -> str:
    return """
    <html><head><title>Trust Center</title></head>
    <body>
        <h1>Security at Acme</h1>
        <p>All data is encrypted at rest. We protect your information.</p>
        <p>We are audited for GDPR compliance.</p>
    </body></html>
    """


@pytest.fixture
def scored_summary() -> ScoredSummary:
    return ScoredSummary(
        summary="Clear policy.",
        key_findings=["Collects email"],
        privacy_score=8,
        security_score=7,
        compliance_score=9,
    )
