"""
Signal extraction from page markup.

Extracts:
- Company name (title, first heading, Open Graph title)
- Contact details (emails, phone numbers, street addresses)
- About information (meta description or about/mission sections)
- Keyword signals for privacy-policy style text

Keyword signals record presence only: a keyword found once or fifty
times contributes a single evidence string, and negated mentions count.
"""

import re

from bs4 import BeautifulSoup

from privacy_intel.extraction.models import (
    AboutInfo,
    ContactInfo,
    SignalBucket,
    SignalCategory,
)
from privacy_intel.extraction.text import element_text, parse_html, soup_to_text
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_COMPANY = "Unknown Company"

PRIVACY_NOT_FOUND = "Privacy policy not found"
TRUST_NOT_FOUND = "Trust center not found"
PRIVACY_UNAVAILABLE = "Privacy policy found but could not be retrieved"
TRUST_UNAVAILABLE = "Trust center found but could not be retrieved"

KEYWORDS: dict[SignalCategory, list[str]] = {
    SignalCategory.DATA_COLLECTION: ["collect", "gathering", "obtain", "receive", "store"],
    SignalCategory.DATA_SHARING: ["share", "transfer", "disclose", "third party", "partner"],
    SignalCategory.USER_RIGHTS: ["right", "access", "delete", "modify", "opt-out", "consent"],
    SignalCategory.SECURITY_MEASURES: ["security", "encrypt", "protect", "secure", "safeguard"],
    SignalCategory.COMPLIANCE: ["gdpr", "ccpa", "california", "european", "compliance", "regulation"],
}

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
# Optional +country code, area code (bare or parenthesized), then two digit groups
PHONE_RE = re.compile(
    r"(?<![\w+])(?:\+\d{1,3}[\s.-]?)?(?:\(\d{2,4}\)|\d{2,4})[\s.-]?\d{3,4}[\s.-]?\d{3,4}(?!\d)"
)
ADDRESS_RE = re.compile(
    r"\d+\s+[A-Za-z\s]+?(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr)\b"
)

# " - Home", " | Acme", " — Welcome"
TITLE_SUFFIX_RE = re.compile(r"\s*[-|–—]\s.*$")
ABOUT_SECTION_RE = re.compile(r"about|company|mission|vision", re.IGNORECASE)

ABOUT_MIN_CHARS = 50
ABOUT_MAX_CHARS = 1000


def _unique(matches: list[str], limit: int) -> tuple[str, ...]:
    """Deduplicate preserving first appearance, then cap."""
    seen: dict[str, None] = {}
    for match in matches:
        cleaned = " ".join(match.split())
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
        if len(seen) >= limit:
            break
    return tuple(seen)


def _strip_title_suffix(title: str) -> str:
    return TITLE_SUFFIX_RE.sub("", title).strip()


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


class SignalExtractor:
    """
    Derives structured signals from raw markup.

    All methods are pure and never raise on malformed markup; absent
    information yields empty or None fields.

    Example:
        >>> extractor = SignalExtractor()
        >>> extractor.extract_company_name("<title>Acme | Home</title>")
        'Acme'
    """

    def __init__(self, keywords: dict[SignalCategory, list[str]] | None = None) -> None:
        self.keywords = keywords or KEYWORDS

    def extract_company_name(self, markup: str) -> str:
        """Title minus site suffix, else first h1, else og:title, else a fallback."""
        soup = parse_html(markup)

        title_tag = soup.find("title")
        if title_tag:
            name = _strip_title_suffix(title_tag.get_text(strip=True))
            if name:
                return name

        h1 = soup.find("h1")
        if h1:
            heading = element_text(h1)
            if heading:
                return heading

        og_title = _meta_content(soup, property="og:title")
        if og_title:
            name = _strip_title_suffix(og_title)
            if name:
                return name

        return UNKNOWN_COMPANY

    def extract_contact(self, markup: str) -> ContactInfo:
        text = soup_to_text(parse_html(markup))

        return ContactInfo(
            emails=_unique(EMAIL_RE.findall(text), ContactInfo.MAX_EMAILS),
            phones=_unique(PHONE_RE.findall(text), ContactInfo.MAX_PHONES),
            addresses=_unique(ADDRESS_RE.findall(text), ContactInfo.MAX_ADDRESSES),
        )

    def extract_about(self, markup: str) -> AboutInfo:
        """
        Title, main heading and a description.

        The description comes from the standard or Open Graph meta
        description; failing that, from the first div/section whose
        class or id mentions about/company/mission/vision and holds at
        least 50 characters of text (truncated to 1000).
        """
        soup = parse_html(markup)

        title_tag = soup.find("title")
        title = title_tag.get_text(strip=True) if title_tag else ""

        h1 = soup.find("h1")
        main_heading = element_text(h1) if h1 else ""

        description = (
            _meta_content(soup, name="description")
            or _meta_content(soup, property="og:description")
            or self._about_section_text(soup)
        )

        return AboutInfo(
            title=title or None,
            main_heading=main_heading or None,
            description=description,
        )

    def _about_section_text(self, soup: BeautifulSoup) -> str | None:
        for element in soup.find_all(["div", "section"]):
            classes = element.get("class") or []
            if isinstance(classes, str):
                classes = [classes]
            marker = " ".join(classes) + " " + (element.get("id") or "")
            if not ABOUT_SECTION_RE.search(marker):
                continue

            text = element_text(element)
            if len(text) >= ABOUT_MIN_CHARS:
                return text[:ABOUT_MAX_CHARS]

        return None

    def extract_signals(self, markup: str) -> dict[SignalCategory, SignalBucket]:
        """One bucket per category; each present keyword adds one evidence entry."""
        text = soup_to_text(parse_html(markup)).lower()

        signals: dict[SignalCategory, SignalBucket] = {}
        for category in SignalCategory:
            evidence = tuple(
                f"{category.label} mentioned with '{keyword}'"
                for keyword in dict.fromkeys(self.keywords.get(category, []))
                if keyword.lower() in text
            )
            signals[category] = SignalBucket(category, evidence)

        logger.debug(
            "Signals: "
            + ", ".join(f"{c.value}={len(b)}" for c, b in signals.items())
        )
        return signals


def privacy_summary(signals: dict[SignalCategory, SignalBucket]) -> str:
    """Templated sentence for a retrieved privacy policy."""
    return (
        f"Privacy policy found with "
        f"{len(signals[SignalCategory.DATA_COLLECTION])} data collection mentions, "
        f"{len(signals[SignalCategory.DATA_SHARING])} sharing mentions, and "
        f"{len(signals[SignalCategory.COMPLIANCE])} compliance mentions."
    )


def trust_summary(signals: dict[SignalCategory, SignalBucket]) -> str:
    """Templated sentence for a retrieved trust center."""
    return (
        f"Trust center found with "
        f"{len(signals[SignalCategory.SECURITY_MEASURES])} security mentions and "
        f"{len(signals[SignalCategory.COMPLIANCE])} compliance mentions."
    )
