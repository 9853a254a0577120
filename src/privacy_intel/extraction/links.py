"""
Heuristic discovery of privacy policy, trust center and terms links.

Anchors in footer regions are scanned first because legal links
conventionally live there. Only when the footer leaves a category
unfilled is the whole document scanned. A missing privacy link falls
back to a conventional path guess.
"""

import re
from typing import Iterable, Sequence
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from privacy_intel.extraction.models import LinkSet
from privacy_intel.extraction.text import element_text, parse_html
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


PRIVACY_PATTERNS = [
    r"privacy",
    r"privacy-policy",
    r"privacy_policy",
    r"data-protection",
    r"data-privacy",
    r"privacy-statement",
]

TRUST_PATTERNS = [
    r"trust",
    r"trust-center",
    r"security",
    r"data-security",
    r"information-security",
]

TERMS_PATTERNS = [
    r"terms",
    r"terms-of-service",
    r"terms-and-conditions",
    r"legal",
    r"legal-terms",
    r"terms-of-use",
]

COMMON_PRIVACY_PATHS = [
    "/privacy",
    "/privacy-policy",
    "/privacy-statement",
    "/legal/privacy",
    "/terms/privacy",
]

_FIELDS = ("privacy_policy", "trust_center", "terms_of_service")


def resolve_url(base_url: str, href: str) -> str | None:
    """
    Resolve href against base_url.

    Returns None unless the result is an absolute http(s) URL, so
    javascript:, mailto: and malformed hrefs are skipped.
    """
    try:
        absolute = urljoin(base_url, href.strip())
        parsed = urlparse(absolute)
    except ValueError:
        return None

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return absolute


def _is_footer(tag: Tag) -> bool:
    if tag.name == "footer":
        return True
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    if any("footer" in c.lower() for c in classes):
        return True
    return "footer" in (tag.get("id") or "").lower()


class LinkClassifier:
    """
    Finds legal links in a page's markup.

    Pattern sets may be replaced per instance; each pattern is a
    case-insensitive regex searched in both href and anchor text.

    Example:
        >>> classifier = LinkClassifier()
        >>> links = classifier.classify(html, "https://example.com")
        >>> links.privacy_policy
        'https://example.com/privacy'
    """

    def __init__(
        self,
        privacy_patterns: Sequence[str] = PRIVACY_PATTERNS,
        trust_patterns: Sequence[str] = TRUST_PATTERNS,
        terms_patterns: Sequence[str] = TERMS_PATTERNS,
        fallback_privacy_paths: Sequence[str] = COMMON_PRIVACY_PATHS,
    ) -> None:
        self._patterns = {
            "privacy_policy": [re.compile(p, re.IGNORECASE) for p in privacy_patterns],
            "trust_center": [re.compile(p, re.IGNORECASE) for p in trust_patterns],
            "terms_of_service": [re.compile(p, re.IGNORECASE) for p in terms_patterns],
        }
        self.fallback_privacy_paths = list(fallback_privacy_paths)

    def classify(self, markup: str, base_url: str) -> LinkSet:
        soup = parse_html(markup)
        found: dict[str, str] = {}

        footer_anchors = self._footer_anchors(soup)
        if footer_anchors:
            self._scan(footer_anchors, base_url, found)

        if len(found) < len(_FIELDS):
            self._scan(soup.find_all("a", href=True), base_url, found)

        guessed = False
        if "privacy_policy" not in found:
            guess = self._guess_privacy_url(base_url)
            if guess:
                logger.debug(f"No privacy link found, guessing {guess}")
                found["privacy_policy"] = guess
                guessed = True

        return LinkSet(**found, privacy_policy_guessed=guessed)

    def matches(self, field_name: str, href: str, text: str) -> bool:
        """True if any pattern of the category matches href or text."""
        return any(
            pattern.search(href) or pattern.search(text)
            for pattern in self._patterns[field_name]
        )

    def _footer_anchors(self, soup: BeautifulSoup) -> list[Tag]:
        """Anchors inside any footer region, once each, in document order."""
        in_footer: set[int] = set()
        for region in soup.find_all(_is_footer):
            for anchor in region.find_all("a", href=True):
                in_footer.add(id(anchor))

        return [a for a in soup.find_all("a", href=True) if id(a) in in_footer]

    def _scan(self, anchors: Iterable[Tag], base_url: str, found: dict[str, str]) -> None:
        for anchor in anchors:
            href = anchor.get("href") or ""
            text = element_text(anchor).lower()

            for field_name in _FIELDS:
                if field_name in found:
                    continue
                if not self.matches(field_name, href, text):
                    continue
                resolved = resolve_url(base_url, href)
                if resolved is None:
                    logger.debug(f"Skipping unresolvable href {href!r}")
                    continue
                found[field_name] = resolved

            if len(found) == len(_FIELDS):
                return

    def _guess_privacy_url(self, base_url: str) -> str | None:
        for path in self.fallback_privacy_paths:
            resolved = resolve_url(base_url, path)
            if resolved:
                return resolved
        return None
