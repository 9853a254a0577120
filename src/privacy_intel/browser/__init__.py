"""
Browser module for the Privacy Intelligence System.

Provides the Playwright rendering engine handle and the per-fetch
page wrapper.
"""

from privacy_intel.browser.manager import BrowserManager
from privacy_intel.browser.page_context import PageContext

__all__ = [
    "BrowserManager",
    "PageContext",
]
