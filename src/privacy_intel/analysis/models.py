"""
Analysis result types.

SiteAnalysis is the full picture for one site; BatchResult gathers
per-URL outcomes plus aggregate scores.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from privacy_intel.config.settings import Settings
from privacy_intel.extraction.models import (
    AboutInfo,
    ContactInfo,
    LinkSet,
    SignalBucket,
    SignalCategory,
    empty_signals,
)
from privacy_intel.extraction.validators import ValidationVerdict
from privacy_intel.fetch.models import FetchOptions
from privacy_intel.llm.summary import ScoredSummary


class AnalysisStage(str, Enum):
    """Progress of a single-site analysis."""

    INIT = "init"
    MAIN_FETCHED = "main_fetched"
    LINKS_CLASSIFIED = "links_classified"
    SUBPAGES_ANALYZED = "subpages_analyzed"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class AnalysisOptions:
    """Per-request analysis knobs."""

    fetch: FetchOptions = field(default_factory=FetchOptions)
    use_ai: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisOptions":
        return cls(
            fetch=FetchOptions.from_settings(settings.fetch),
            use_ai=settings.analysis.use_ai,
        )


@dataclass(frozen=True)
class SiteAnalysis:
    """
    Everything learned about one site.

    signals is a read-only mapping holding all five categories. Buckets
    stay empty unless the privacy policy was retrieved.
    """

    company_name: str
    main_url: str
    links: LinkSet
    contact: ContactInfo
    about: AboutInfo
    privacy_summary: str
    trust_summary: str
    signals: Mapping[SignalCategory, SignalBucket] = field(
        default_factory=lambda: MappingProxyType(empty_signals())
    )
    ai_summary: ScoredSummary | None = None
    verdicts: tuple[ValidationVerdict, ...] = ()
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    processing_time_ms: int = 0
    stage: AnalysisStage = AnalysisStage.DONE

    def __post_init__(self) -> None:
        if not isinstance(self.signals, MappingProxyType):
            object.__setattr__(self, "signals", MappingProxyType(dict(self.signals)))

    def signal_count(self, category: SignalCategory) -> int:
        bucket = self.signals.get(category)
        return len(bucket) if bucket else 0

    def to_dict(self) -> dict:
        """JSON-ready representation."""
        return {
            "company_name": self.company_name,
            "main_url": self.main_url,
            "links": self.links.to_dict(),
            "contact": self.contact.to_dict(),
            "about": self.about.to_dict(),
            "signals": {
                category.value: list(bucket.evidence)
                for category, bucket in self.signals.items()
            },
            "privacy_summary": self.privacy_summary,
            "trust_summary": self.trust_summary,
            "ai_summary": self.ai_summary.to_dict() if self.ai_summary else None,
            "verdicts": [v.to_dict() for v in self.verdicts],
            "fetched_at": self.fetched_at.isoformat(),
            "processing_time_ms": self.processing_time_ms,
            "stage": self.stage.value,
        }


@dataclass(frozen=True)
class BatchItem:
    """Outcome for one URL of a batch."""

    url: str
    success: bool
    analysis: SiteAnalysis | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "success": self.success,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "error": self.error,
        }


@dataclass(frozen=True)
class BatchAggregate:
    """Averages over successful sites that carry an AI summary."""

    MAX_COMPANY_NAMES = 5

    avg_privacy_score: float | None = None
    avg_security_score: float | None = None
    avg_compliance_score: float | None = None
    top_company_names: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "avg_privacy_score": self.avg_privacy_score,
            "avg_security_score": self.avg_security_score,
            "avg_compliance_score": self.avg_compliance_score,
            "top_company_names": list(self.top_company_names),
        }


@dataclass(frozen=True)
class BatchResult:
    """Per-URL items in input order plus the aggregate."""

    total: int
    successful: int
    failed: int
    items: tuple[BatchItem, ...]
    aggregate: BatchAggregate

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "successful": self.successful,
            "failed": self.failed,
            "items": [item.to_dict() for item in self.items],
            "aggregate": self.aggregate.to_dict(),
        }
