"""
Tests for component wiring.

Checks which summarizer build_site_analyzer wires in and that the
one-call helpers pass the AI option through.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from privacy_intel.analysis import AnalysisOptions, analyze_website, build_site_analyzer
from privacy_intel.config import Settings
from privacy_intel.llm import AnthropicSummarizer

from tests.conftest import FakeSummarizer


class TestBuildSiteAnalyzer:
    """Tests for summarizer selection in build_site_analyzer."""

    def test_summarizer_built_when_ai_enabled(self, test_settings):
        analyzer = build_site_analyzer(test_settings)

        assert isinstance(analyzer.summarizer, AnthropicSummarizer)

    def test_no_summarizer_when_ai_disabled(self, test_settings):
        with patch("privacy_intel.analysis.service.AnthropicSummarizer") as summarizer_cls:
            analyzer = build_site_analyzer(test_settings, use_ai=False)

        assert analyzer.summarizer is None
        summarizer_cls.assert_not_called()

    def test_ai_setting_used_by_default(self):
        settings = Settings(analysis={"use_ai": False}, llm={"enabled": False})

        assert build_site_analyzer(settings).summarizer is None

    def test_explicit_summarizer_kept(self, test_settings):
        summarizer = FakeSummarizer()

        assert build_site_analyzer(test_settings, summarizer=summarizer).summarizer is summarizer


class TestAnalyzeWebsite:
    """Tests for the one-call helper."""

    @pytest.mark.asyncio
    async def test_ai_option_reaches_builder(self, test_settings):
        analyzer = MagicMock()
        analyzer.analyze = AsyncMock(return_value="analysis")
        browser = MagicMock()
        browser.stop = AsyncMock()
        options = AnalysisOptions(use_ai=False)

        with patch("privacy_intel.analysis.service.BrowserManager", return_value=browser), patch(
            "privacy_intel.analysis.service.build_site_analyzer", return_value=analyzer
        ) as build:
            result = await analyze_website("acme.test", test_settings, options)

        assert result == "analysis"
        assert build.call_args.kwargs["use_ai"] is False
        browser.stop.assert_awaited_once()
