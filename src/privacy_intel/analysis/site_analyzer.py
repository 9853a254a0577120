"""
Single-site analysis.

Drives one site through its stages:

    INIT -> MAIN_FETCHED -> LINKS_CLASSIFIED -> SUBPAGES_ANALYZED -> DONE

A failed main-page fetch (from INIT) or a blocking validator rejection
(from MAIN_FETCHED) ends in FAILED and raises SiteAnalysisError.

Only the main-page fetch is mandatory. Sub-page fetches, the AI
summary and content validators are enrichment: their failures are
logged and recorded as absence, never as an analysis failure (unless
validators are configured as blocking).
"""

import time
from datetime import datetime, timezone
from types import MappingProxyType

from privacy_intel.analysis.models import AnalysisOptions, AnalysisStage, SiteAnalysis
from privacy_intel.core.exceptions import SiteAnalysisError
from privacy_intel.extraction.links import LinkClassifier
from privacy_intel.extraction.models import empty_signals
from privacy_intel.extraction.signals import (
    PRIVACY_NOT_FOUND,
    PRIVACY_UNAVAILABLE,
    TRUST_NOT_FOUND,
    TRUST_UNAVAILABLE,
    SignalExtractor,
    privacy_summary,
    trust_summary,
)
from privacy_intel.extraction.text import html_to_text
from privacy_intel.extraction.validators import ValidationVerdict, ValidatorChain
from privacy_intel.fetch.strategy import FetchStrategy
from privacy_intel.llm.summarizer import Summarizer
from privacy_intel.llm.summary import ContentType, ScoredSummary
from privacy_intel.utils.logging import get_logger, get_logger_with_context

logger = get_logger(__name__)


def normalize_url(url: str) -> str:
    """Strip whitespace and default to https when no scheme is given."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        return f"https://{url}"
    return url


class SiteAnalyzer:
    """
    Analyzes one website end to end.

    Args:
        fetch_strategy: Acquires page markup
        link_classifier: Finds privacy/trust/terms links
        signal_extractor: Extracts company, contact, about and keyword signals
        summarizer: Optional AI summarizer
        validators: Optional content validator chain

    Example:
        >>> analyzer = SiteAnalyzer(FetchStrategy(), LinkClassifier(), SignalExtractor())
        >>> analysis = await analyzer.analyze("example.com")
        >>> analysis.privacy_summary
        'Privacy policy found with 3 data collection mentions, ...'
    """

    def __init__(
        self,
        fetch_strategy: FetchStrategy,
        link_classifier: LinkClassifier | None = None,
        signal_extractor: SignalExtractor | None = None,
        summarizer: Summarizer | None = None,
        validators: ValidatorChain | None = None,
    ) -> None:
        self.fetch_strategy = fetch_strategy
        self.link_classifier = link_classifier or LinkClassifier()
        self.signal_extractor = signal_extractor or SignalExtractor()
        self.summarizer = summarizer
        self.validators = validators or ValidatorChain()

    async def analyze(
        self,
        url: str,
        options: AnalysisOptions | None = None,
    ) -> SiteAnalysis:
        """
        Analyze a site.

        Args:
            url: Site URL; "https://" is assumed when no scheme is given
            options: Fetch and AI options

        Returns:
            Complete SiteAnalysis

        Raises:
            SiteAnalysisError: If the main page cannot be fetched, or a
                blocking validator rejects it
        """
        options = options or AnalysisOptions()
        started = time.perf_counter()
        url = normalize_url(url)
        log = get_logger_with_context(__name__, url=url)
        stage = AnalysisStage.INIT

        log.info("Starting website analysis")

        # Main page
        main = await self.fetch_strategy.fetch(url, options.fetch)
        if not main.ok:
            log.error(f"Main page fetch failed after {main.attempts} attempts: {main.reason}")
            raise self._failure(
                log,
                stage,
                f"Failed to fetch main page: {main.reason}",
                url,
                attempts=main.attempts,
            )
        stage = self._advance(log, stage, AnalysisStage.MAIN_FETCHED)

        verdicts: list[ValidationVerdict] = self.validators.check_content(
            main.markup, "main page"
        )
        self._enforce_blocking(log, stage, url, verdicts)

        company_name = self.signal_extractor.extract_company_name(main.markup)
        verdicts.extend(self.validators.check_company_name(company_name))
        contact = self.signal_extractor.extract_contact(main.markup)
        about = self.signal_extractor.extract_about(main.markup)
        links = self.link_classifier.classify(main.markup, url)
        stage = self._advance(log, stage, AnalysisStage.LINKS_CLASSIFIED)

        # Sub-pages
        signals = empty_signals()
        privacy_text = PRIVACY_NOT_FOUND
        trust_text = TRUST_NOT_FOUND
        privacy_markup = None
        trust_markup = None

        if links.privacy_policy:
            log.info(f"Analyzing privacy policy: {links.privacy_policy}")
            privacy_markup = await self._fetch_subpage(links.privacy_policy, options)
            if privacy_markup is not None:
                verdicts.extend(self.validators.check_content(privacy_markup, "privacy policy"))
                signals = self.signal_extractor.extract_signals(privacy_markup)
                privacy_text = privacy_summary(signals)
            elif links.privacy_policy_guessed:
                links = links.without_privacy_policy()
            else:
                privacy_text = PRIVACY_UNAVAILABLE

        if links.trust_center:
            log.info(f"Analyzing trust center: {links.trust_center}")
            trust_markup = await self._fetch_subpage(links.trust_center, options)
            if trust_markup is not None:
                verdicts.extend(self.validators.check_content(trust_markup, "trust center"))
                trust_text = trust_summary(self.signal_extractor.extract_signals(trust_markup))
            else:
                trust_text = TRUST_UNAVAILABLE
        stage = self._advance(log, stage, AnalysisStage.SUBPAGES_ANALYZED)

        ai_summary = None
        if options.use_ai:
            ai_summary = await self._summarize(privacy_markup, trust_markup)

        processing_time_ms = int((time.perf_counter() - started) * 1000)
        stage = self._advance(log, stage, AnalysisStage.DONE)
        log.info(f"Analysis completed for {company_name} in {processing_time_ms}ms")

        return SiteAnalysis(
            company_name=company_name,
            main_url=url,
            links=links,
            contact=contact,
            about=about,
            privacy_summary=privacy_text,
            trust_summary=trust_text,
            signals=MappingProxyType(signals),
            ai_summary=ai_summary,
            verdicts=tuple(verdicts),
            fetched_at=datetime.now(timezone.utc),
            processing_time_ms=processing_time_ms,
            stage=stage,
        )

    async def _fetch_subpage(self, url: str, options: AnalysisOptions) -> str | None:
        result = await self.fetch_strategy.fetch(url, options.fetch)
        if not result.ok:
            logger.warning(f"Could not retrieve {url}: {result.reason}")
            return None
        return result.markup

    async def _summarize(
        self,
        privacy_markup: str | None,
        trust_markup: str | None,
    ) -> ScoredSummary | None:
        """Privacy policy first; the trust center only if that produced nothing."""
        if self.summarizer is None or not self.summarizer.is_available():
            return None

        candidates = [
            (privacy_markup, ContentType.PRIVACY_POLICY),
            (trust_markup, ContentType.TRUST_CENTER),
        ]
        for markup, content_type in candidates:
            if markup is None:
                continue
            try:
                summary = await self.summarizer.summarize(html_to_text(markup), content_type)
            except Exception as e:
                logger.error(f"Summarizer failed on {content_type.value}: {e}")
                summary = None
            if summary is not None:
                return summary

        return None

    def _enforce_blocking(
        self,
        log,
        stage: AnalysisStage,
        url: str,
        verdicts: list[ValidationVerdict],
    ) -> None:
        if not self.validators.blocking:
            return
        rejected = [v for v in verdicts if not v.passed]
        if rejected:
            raise self._failure(
                log,
                stage,
                f"Main page rejected by {rejected[0].validator}: {rejected[0].reason}",
                url,
            )

    def _failure(
        self,
        log,
        stage: AnalysisStage,
        message: str,
        url: str,
        **details,
    ) -> SiteAnalysisError:
        """Move to FAILED and build the error recording where it happened."""
        failed = self._advance(log, stage, AnalysisStage.FAILED)
        details["failed_from"] = stage.value
        return SiteAnalysisError(message, url=url, details=details, stage=failed.value)

    @staticmethod
    def _advance(log, current: AnalysisStage, target: AnalysisStage) -> AnalysisStage:
        log.debug(f"{current.value} -> {target.value}")
        return target
