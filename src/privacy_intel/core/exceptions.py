"""
Custom exceptions for the Privacy Intelligence System.

Provides a hierarchy of exceptions for precise error handling across
all subsystems. All exceptions inherit from PrivacyIntelError.

Exception Hierarchy:
    PrivacyIntelError (base)
    ├── ConfigurationError
    ├── BrowserError
    │   ├── BrowserUnavailableError
    │   └── NavigationError
    ├── FetchError
    │   ├── FetchTimeoutError
    │   └── HTTPStatusError
    ├── SummarizerError
    │   └── SummaryParseError
    └── AnalysisError
        ├── SiteAnalysisError
        └── BatchError
"""

from typing import Any


class PrivacyIntelError(Exception):
    """
    Base exception for all Privacy Intelligence System errors.

    Attributes:
        message: Human-readable error description
        details: Optional dictionary with additional context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(
                f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PrivacyIntelError):
    """
    Error in configuration loading or validation.

    Raised when:
    - Configuration file is missing or malformed
    - Setting values fail validation
    """

    pass


# =============================================================================
# Browser Errors
# =============================================================================


class BrowserError(PrivacyIntelError):
    """Base error for browser/Playwright operations."""

    pass


class BrowserUnavailableError(BrowserError):
    """
    The rendering engine could not be launched or is disconnected.

    The fetch strategy counts it as a failed attempt; the next attempt
    moves on to the direct transport once the engine reports not ready.
    """

    pass


class NavigationError(BrowserError):
    """
    Error during page navigation in the rendering engine.

    Raised when:
    - URL is unreachable
    - Navigation times out
    - The page responds with an HTTP error status
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


# =============================================================================
# Fetch Errors
# =============================================================================


class FetchError(PrivacyIntelError):
    """
    A single fetch attempt failed.

    Raised by transports; the fetch strategy converts exhausted retries
    into a FetchFailure value instead of propagating.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if url:
            details["url"] = url
        super().__init__(message, details)
        self.url = url


class FetchTimeoutError(FetchError):
    """A fetch attempt exceeded its timeout."""

    pass


class HTTPStatusError(FetchError):
    """The server answered with an error status (>= 400)."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, url=url, details=details)
        self.status_code = status_code


# =============================================================================
# Summarizer Errors
# =============================================================================


class SummarizerError(PrivacyIntelError):
    """Base error for the external LLM summarizer."""

    pass


class SummaryParseError(SummarizerError):
    """
    LLM output could not be turned into a ScoredSummary.

    Raised when:
    - No JSON object is present in the response
    - The JSON is malformed
    """

    def __init__(
        self,
        message: str,
        raw_text: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if raw_text:
            details["raw_text"] = raw_text[:100] + \
                "..." if len(raw_text) > 100 else raw_text
        super().__init__(message, details)
        self.raw_text = raw_text


# =============================================================================
# Analysis Errors
# =============================================================================


class AnalysisError(PrivacyIntelError):
    """Base error for site and batch analysis."""

    pass


class SiteAnalysisError(AnalysisError):
    """
    A single-site analysis failed.

    Raised when the mandatory main-page fetch fails or a blocking
    content validator rejects the main page. No partial result exists.
    stage names the terminal stage the analysis reached.
    """

    def __init__(
        self,
        message: str,
        url: str,
        details: dict[str, Any] | None = None,
        stage: str | None = None,
    ) -> None:
        details = details or {}
        details["url"] = url
        if stage:
            details["stage"] = stage
        super().__init__(message, details)
        self.url = url
        self.stage = stage


class BatchError(AnalysisError):
    """Invalid batch input, such as a missing or empty URL file."""

    pass

