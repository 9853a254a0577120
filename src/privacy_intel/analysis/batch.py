"""
Batch orchestration.

Runs the site analyzer over many URLs one at a time, pausing between
sites, isolating per-URL failures and folding outcomes into a
BatchResult with aggregate scores.
"""

import asyncio
import inspect
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Union

from privacy_intel.analysis.models import (
    AnalysisOptions,
    BatchAggregate,
    BatchItem,
    BatchResult,
)
from privacy_intel.analysis.site_analyzer import SiteAnalyzer
from privacy_intel.core.exceptions import BatchError
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)

# Called once per successful site; may be sync or async
OutputSink = Callable[[BatchItem], Union[Awaitable[Any], Any]]


def _average(values: list[int]) -> float | None:
    if not values:
        return None
    mean = Decimal(str(sum(values) / len(values)))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_aggregate(items: Iterable[BatchItem]) -> BatchAggregate:
    """
    Aggregate over successful items.

    Scores average only sites with an AI summary; company names are the
    first five successful sites in processing order.
    """
    analyses = [item.analysis for item in items if item.success and item.analysis]
    scored = [a.ai_summary for a in analyses if a.ai_summary is not None]

    return BatchAggregate(
        avg_privacy_score=_average([s.privacy_score for s in scored]),
        avg_security_score=_average([s.security_score for s in scored]),
        avg_compliance_score=_average([s.compliance_score for s in scored]),
        top_company_names=tuple(
            a.company_name for a in analyses[: BatchAggregate.MAX_COMPANY_NAMES]
        ),
    )


def load_urls(path: str | Path) -> list[str]:
    """
    Read one URL per line, skipping blank lines and # comments.

    Raises:
        BatchError: If the file is missing, unreadable or holds no URLs
    """
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise BatchError(f"Cannot read URL file: {path}", details={"error": str(e)}) from e

    urls = [line.strip() for line in lines]
    urls = [u for u in urls if u and not u.startswith("#")]
    if not urls:
        raise BatchError(f"No URLs found in {path}")
    return urls


@dataclass(frozen=True)
class _Tally:
    """Fold accumulator: items so far and the success count."""

    items: tuple[BatchItem, ...] = ()
    successful: int = 0

    def add(self, item: BatchItem) -> "_Tally":
        return replace(
            self,
            items=self.items + (item,),
            successful=self.successful + (1 if item.success else 0),
        )

    def result(self) -> BatchResult:
        total = len(self.items)
        return BatchResult(
            total=total,
            successful=self.successful,
            failed=total - self.successful,
            items=self.items,
            aggregate=compute_aggregate(self.items),
        )


class BatchOrchestrator:
    """
    Sequential multi-site analysis.

    Args:
        site_analyzer: Analyzer used for every URL
        inter_request_delay: Seconds to pause after each site except the last

    Example:
        >>> orchestrator = BatchOrchestrator(analyzer, inter_request_delay=1.0)
        >>> result = await orchestrator.run_batch(["a.com", "b.com"])
        >>> result.successful + result.failed == result.total
        True
    """

    def __init__(self, site_analyzer: SiteAnalyzer, inter_request_delay: float = 1.0) -> None:
        self.site_analyzer = site_analyzer
        self.inter_request_delay = inter_request_delay

    async def run_batch(
        self,
        urls: list[str],
        options: AnalysisOptions | None = None,
        output_sink: OutputSink | None = None,
    ) -> BatchResult:
        options = options or AnalysisOptions()
        logger.info(f"Starting batch analysis of {len(urls)} websites")

        tally = _Tally()
        for index, url in enumerate(urls):
            item = await self._analyze_one(url, options)
            if item.success and output_sink is not None:
                await self._emit(output_sink, item)
            tally = tally.add(item)

            logger.info(
                f"[{index + 1}/{len(urls)}] {url}: "
                + ("ok" if item.success else f"failed ({item.error})")
            )

            if index < len(urls) - 1 and self.inter_request_delay > 0:
                await asyncio.sleep(self.inter_request_delay)

        result = tally.result()
        logger.info(
            f"Batch complete: {result.successful} successful, {result.failed} failed"
        )
        return result

    async def _analyze_one(self, url: str, options: AnalysisOptions) -> BatchItem:
        try:
            analysis = await self.site_analyzer.analyze(url, options)
        except Exception as e:
            logger.error(f"Failed to analyze {url}: {e}")
            return BatchItem(url=url, success=False, error=str(e) or e.__class__.__name__)
        return BatchItem(url=url, success=True, analysis=analysis)

    async def _emit(self, output_sink: OutputSink, item: BatchItem) -> None:
        try:
            outcome = output_sink(item)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logger.error(f"Output sink failed for {item.url}: {e}")
