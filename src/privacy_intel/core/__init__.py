"""
Core module for the Privacy Intelligence System.

Contains the exception hierarchy used throughout the application.
"""

from privacy_intel.core.exceptions import (
    PrivacyIntelError,
    ConfigurationError,
    BrowserError,
    BrowserUnavailableError,
    NavigationError,
    FetchError,
    FetchTimeoutError,
    HTTPStatusError,
    SummarizerError,
    SummaryParseError,
    AnalysisError,
    SiteAnalysisError,
    BatchError,
)

__all__ = [
    # Base
    "PrivacyIntelError",
    "ConfigurationError",
    # Browser
    "BrowserError",
    "BrowserUnavailableError",
    "NavigationError",
    # Fetch
    "FetchError",
    "FetchTimeoutError",
    "HTTPStatusError",
    # Summarizer
    "SummarizerError",
    "SummaryParseError",
    # Analysis
    "AnalysisError",
    "SiteAnalysisError",
    "BatchError",
]
