"""
Extraction module for the Privacy Intelligence System.

Provides markup analysis including:
- Legal link discovery (privacy policy, trust center, terms)
- Company name, contact and about extraction
- Keyword-presence privacy signals
- Optional content validators
"""

from privacy_intel.extraction.models import (
    LinkSet,
    ContactInfo,
    AboutInfo,
    SignalCategory,
    SignalBucket,
    empty_signals,
)
from privacy_intel.extraction.text import (
    parse_html,
    soup_to_text,
    html_to_text,
)
from privacy_intel.extraction.links import (
    LinkClassifier,
    resolve_url,
)
from privacy_intel.extraction.signals import (
    SignalExtractor,
    privacy_summary,
    trust_summary,
    UNKNOWN_COMPANY,
    PRIVACY_NOT_FOUND,
    TRUST_NOT_FOUND,
    PRIVACY_UNAVAILABLE,
    TRUST_UNAVAILABLE,
)
from privacy_intel.extraction.validators import (
    ValidationVerdict,
    ContentValidator,
    PlaceholderContentValidator,
    GenericCompanyNameValidator,
    ValidatorChain,
)

__all__ = [
    # Models
    "LinkSet",
    "ContactInfo",
    "AboutInfo",
    "SignalCategory",
    "SignalBucket",
    "empty_signals",
    # Text
    "parse_html",
    "soup_to_text",
    "html_to_text",
    # Links
    "LinkClassifier",
    "resolve_url",
    # Signals
    "SignalExtractor",
    "privacy_summary",
    "trust_summary",
    "UNKNOWN_COMPANY",
    "PRIVACY_NOT_FOUND",
    "TRUST_NOT_FOUND",
    "PRIVACY_UNAVAILABLE",
    "TRUST_UNAVAILABLE",
    # Validators
    "ValidationVerdict",
    "ContentValidator",
    "PlaceholderContentValidator",
    "GenericCompanyNameValidator",
    "ValidatorChain",
]
