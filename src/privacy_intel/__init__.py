"""
Privacy Intelligence System - Website privacy, trust and compliance analysis.

This package fetches a site's main page, discovers its privacy policy,
trust center and terms links, extracts contact details and privacy
signals, and optionally enriches the result with an LLM-scored summary.
Many sites can be analyzed in one batch with aggregate scores.
"""

from privacy_intel.config import Settings, load_config
from privacy_intel.utils.logging import setup_logging, get_logger
from privacy_intel.core.exceptions import PrivacyIntelError
from privacy_intel.analysis import (
    SiteAnalyzer,
    BatchOrchestrator,
    analyze_website,
    analyze_websites,
)

__version__ = "0.1.0"
__author__ = "Privacy Intel Team"

__all__ = [
    "Settings",
    "load_config",
    "setup_logging",
    "get_logger",
    "PrivacyIntelError",
    "SiteAnalyzer",
    "BatchOrchestrator",
    "analyze_website",
    "analyze_websites",
]
