"""
Fetch module for the Privacy Intelligence System.

Acquires raw page markup through a rendering (Playwright) or direct
(httpx) transport with timeout and linear-backoff retry.
"""

from privacy_intel.fetch.models import (
    FetchOptions,
    FetchContent,
    FetchFailure,
    FetchResult,
    Transport,
    TransportKind,
)
from privacy_intel.fetch.transports import (
    RenderingTransport,
    DirectTransport,
    browser_headers,
)
from privacy_intel.fetch.strategy import FetchStrategy

__all__ = [
    "FetchOptions",
    "FetchContent",
    "FetchFailure",
    "FetchResult",
    "Transport",
    "TransportKind",
    "RenderingTransport",
    "DirectTransport",
    "browser_headers",
    "FetchStrategy",
]
