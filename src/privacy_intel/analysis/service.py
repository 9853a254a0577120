"""
Component wiring.

Builds analyzers and orchestrators from Settings and offers one-call
helpers that own the browser for the duration of a run.
"""

from privacy_intel.analysis.batch import BatchOrchestrator, OutputSink
from privacy_intel.analysis.models import AnalysisOptions, BatchResult, SiteAnalysis
from privacy_intel.analysis.site_analyzer import SiteAnalyzer
from privacy_intel.browser.manager import BrowserManager
from privacy_intel.config import Settings, get_settings
from privacy_intel.extraction.links import LinkClassifier
from privacy_intel.extraction.signals import SignalExtractor
from privacy_intel.extraction.validators import ValidatorChain
from privacy_intel.fetch.strategy import FetchStrategy
from privacy_intel.fetch.transports import DirectTransport, RenderingTransport
from privacy_intel.llm.summarizer import AnthropicSummarizer, Summarizer


def build_site_analyzer(
    settings: Settings,
    browser_manager: BrowserManager | None = None,
    summarizer: Summarizer | None = None,
    direct: DirectTransport | None = None,
    use_ai: bool | None = None,
) -> SiteAnalyzer:
    """
    Assemble a SiteAnalyzer from settings.

    Without a browser manager every fetch goes over direct HTTP. Without
    an explicit summarizer an AnthropicSummarizer is created from the
    llm settings, but only when AI summaries are wanted. use_ai defaults
    to settings.analysis.use_ai.
    """
    if use_ai is None:
        use_ai = settings.analysis.use_ai
    if summarizer is None and use_ai:
        summarizer = AnthropicSummarizer(settings.llm)

    fetch_strategy = FetchStrategy(
        rendering=RenderingTransport(browser_manager) if browser_manager else None,
        direct=direct or DirectTransport(),
        backoff_seconds=settings.fetch.backoff_seconds,
    )
    return SiteAnalyzer(
        fetch_strategy=fetch_strategy,
        link_classifier=LinkClassifier(),
        signal_extractor=SignalExtractor(),
        summarizer=summarizer,
        validators=ValidatorChain.from_settings(settings.analysis.validators),
    )


def build_batch_orchestrator(settings: Settings, site_analyzer: SiteAnalyzer) -> BatchOrchestrator:
    return BatchOrchestrator(
        site_analyzer,
        inter_request_delay=settings.batch.inter_request_delay_seconds,
    )


async def analyze_website(
    url: str,
    settings: Settings | None = None,
    options: AnalysisOptions | None = None,
) -> SiteAnalysis:
    """
    Convenience function to analyze one site.

    The browser launches lazily on the first rendered fetch and is
    stopped before returning.

    Raises:
        SiteAnalysisError: If the main page cannot be fetched
    """
    settings = settings or get_settings()
    options = options or AnalysisOptions.from_settings(settings)
    browser = BrowserManager(settings.browser)
    try:
        analyzer = build_site_analyzer(settings, browser, use_ai=options.use_ai)
        return await analyzer.analyze(url, options)
    finally:
        await browser.stop()


async def analyze_websites(
    urls: list[str],
    settings: Settings | None = None,
    options: AnalysisOptions | None = None,
    output_sink: OutputSink | None = None,
) -> BatchResult:
    """Convenience function to analyze many sites with one shared browser."""
    settings = settings or get_settings()
    options = options or AnalysisOptions.from_settings(settings)
    browser = BrowserManager(settings.browser)
    try:
        analyzer = build_site_analyzer(settings, browser, use_ai=options.use_ai)
        orchestrator = build_batch_orchestrator(settings, analyzer)
        return await orchestrator.run_batch(urls, options, output_sink)
    finally:
        await browser.stop()
