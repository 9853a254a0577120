"""
Value types produced by link classification and signal extraction.

All types are immutable. Optional fields use None for "not found",
which is distinct from an empty string.
"""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class LinkSet:
    """
    Legally relevant sub-pages discovered on a site's main page.

    privacy_policy_guessed is set when privacy_policy came from the
    conventional-path fallback rather than an anchor on the page.
    """

    privacy_policy: str | None = None
    trust_center: str | None = None
    terms_of_service: str | None = None
    privacy_policy_guessed: bool = False

    def without_privacy_policy(self) -> "LinkSet":
        return LinkSet(
            trust_center=self.trust_center,
            terms_of_service=self.terms_of_service,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.privacy_policy or self.trust_center or self.terms_of_service)

    @property
    def is_complete(self) -> bool:
        return bool(self.privacy_policy and self.trust_center and self.terms_of_service)

    def to_dict(self) -> dict:
        return {
            "privacy_policy": self.privacy_policy,
            "trust_center": self.trust_center,
            "terms_of_service": self.terms_of_service,
            "privacy_policy_guessed": self.privacy_policy_guessed,
        }


@dataclass(frozen=True)
class ContactInfo:
    """Contact details found in a page's text, capped per field."""

    MAX_EMAILS = 5
    MAX_PHONES = 5
    MAX_ADDRESSES = 3

    emails: tuple[str, ...] = ()
    phones: tuple[str, ...] = ()
    addresses: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "emails": list(self.emails),
            "phones": list(self.phones),
            "addresses": list(self.addresses),
        }


@dataclass(frozen=True)
class AboutInfo:
    """Descriptive information about the site owner."""

    title: str | None = None
    main_heading: str | None = None
    description: str | None = None

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "main_heading": self.main_heading,
            "description": self.description,
        }


class SignalCategory(str, Enum):
    """Privacy/security/compliance topic tracked by keyword presence."""

    DATA_COLLECTION = "data_collection"
    DATA_SHARING = "data_sharing"
    USER_RIGHTS = "user_rights"
    SECURITY_MEASURES = "security_measures"
    COMPLIANCE = "compliance"

    @property
    def label(self) -> str:
        """Human-readable prefix used in evidence strings."""
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    SignalCategory.DATA_COLLECTION: "Data collection",
    SignalCategory.DATA_SHARING: "Data sharing",
    SignalCategory.USER_RIGHTS: "User rights",
    SignalCategory.SECURITY_MEASURES: "Security",
    SignalCategory.COMPLIANCE: "Compliance",
}


@dataclass(frozen=True)
class SignalBucket:
    """Evidence strings for one category, one per matched keyword."""

    category: SignalCategory
    evidence: tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.evidence)

    def __iter__(self):
        return iter(self.evidence)


def empty_signals() -> dict[SignalCategory, SignalBucket]:
    """One empty bucket per category."""
    return {category: SignalBucket(category) for category in SignalCategory}
