"""
Analysis module for the Privacy Intelligence System.

Provides site and batch analysis:
- SiteAnalyzer: main page, legal sub-pages and optional AI summary
- BatchOrchestrator: sequential multi-site runs with aggregation
- Builders wiring components from Settings
"""

from privacy_intel.analysis.models import (
    AnalysisStage,
    AnalysisOptions,
    SiteAnalysis,
    BatchItem,
    BatchAggregate,
    BatchResult,
)
from privacy_intel.analysis.site_analyzer import (
    SiteAnalyzer,
    normalize_url,
)
from privacy_intel.analysis.batch import (
    BatchOrchestrator,
    OutputSink,
    compute_aggregate,
    load_urls,
)
from privacy_intel.analysis.service import (
    build_site_analyzer,
    build_batch_orchestrator,
    analyze_website,
    analyze_websites,
)

__all__ = [
    # Models
    "AnalysisStage",
    "AnalysisOptions",
    "SiteAnalysis",
    "BatchItem",
    "BatchAggregate",
    "BatchResult",
    # Site analysis
    "SiteAnalyzer",
    "normalize_url",
    # Batch
    "BatchOrchestrator",
    "OutputSink",
    "compute_aggregate",
    "load_urls",
    # Wiring
    "build_site_analyzer",
    "build_batch_orchestrator",
    "analyze_website",
    "analyze_websites",
]
