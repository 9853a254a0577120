"""
Content validators.

Validators inspect fetched markup (or the derived company name) and
return a verdict instead of raising. The analyzer records verdicts on
the result; only a chain configured as blocking turns a rejected main
page into a failure.
"""

import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from privacy_intel.config.settings import ValidatorSettings
from privacy_intel.extraction.text import html_to_text
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


PLACEHOLDER_PHRASES = [
    "lorem ipsum",
    "placeholder text",
    "sample content",
    "demo site",
    "test page",
    "404 not found",
    "page not found",
    "access denied",
    "maintenance mode",
    "coming soon",
    "under construction",
    "this domain is for sale",
    "domain parking",
    "buy this domain",
    "domain expired",
    "site is being updated",
]

GENERIC_NAME_TOKENS = [
    "example",
    "demo",
    "test",
    "sample",
    "placeholder",
    "company",
    "corporation",
    "inc",
    "llc",
    "ltd",
    "unknown",
    "website",
    "site",
]


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of one validator on one input."""

    passed: bool
    validator: str
    reason: str | None = None

    def to_dict(self) -> dict:
        return {"validator": self.validator, "passed": self.passed, "reason": self.reason}


@runtime_checkable
class ContentValidator(Protocol):
    """Anything that can judge a piece of text."""

    name: str

    def validate(self, value: str) -> ValidationVerdict:
        ...


class PlaceholderContentValidator:
    """
    Rejects placeholder, parked-domain and error pages.

    Checks, in order: known placeholder phrases, a minimum amount of
    visible text, and a minimum unique-word ratio.
    """

    name = "placeholder_content"

    def __init__(
        self,
        phrases: list[str] | None = None,
        min_text_length: int = 20,
        min_unique_ratio: float = 0.05,
    ) -> None:
        self.phrases = [p.lower() for p in (phrases or PLACEHOLDER_PHRASES)]
        self.min_text_length = min_text_length
        self.min_unique_ratio = min_unique_ratio

    def validate(self, value: str) -> ValidationVerdict:
        text = html_to_text(value).lower()

        for phrase in self.phrases:
            if phrase in text:
                return self._reject(f"contains placeholder phrase '{phrase}'")

        if len(text) < self.min_text_length:
            return self._reject(f"only {len(text)} characters of text")

        words = text.split()
        ratio = len(set(words)) / len(words)
        if ratio < self.min_unique_ratio:
            return self._reject(f"repetitive text (unique word ratio {ratio:.3f})")

        return ValidationVerdict(passed=True, validator=self.name)

    def _reject(self, reason: str) -> ValidationVerdict:
        return ValidationVerdict(passed=False, validator=self.name, reason=reason)


class GenericCompanyNameValidator:
    """Flags company names containing generic tokens as whole words."""

    name = "generic_company_name"

    def __init__(self, tokens: list[str] | None = None) -> None:
        tokens = tokens or GENERIC_NAME_TOKENS
        self._pattern = re.compile(
            r"\b(" + "|".join(re.escape(t) for t in tokens) + r")\b",
            re.IGNORECASE,
        )

    def validate(self, value: str) -> ValidationVerdict:
        match = self._pattern.search(value or "")
        if match:
            return ValidationVerdict(
                passed=False,
                validator=self.name,
                reason=f"generic token '{match.group(1).lower()}' in company name",
            )
        return ValidationVerdict(passed=True, validator=self.name)


class ValidatorChain:
    """
    Runs the enabled validators over page content and company names.

    Content validators and name validators are kept apart because they
    judge different inputs.
    """

    def __init__(
        self,
        content_validators: list[ContentValidator] | None = None,
        name_validators: list[ContentValidator] | None = None,
        blocking: bool = False,
    ) -> None:
        self.content_validators = list(content_validators or [])
        self.name_validators = list(name_validators or [])
        self.blocking = blocking

    @classmethod
    def from_settings(cls, settings: ValidatorSettings) -> "ValidatorChain":
        content = [PlaceholderContentValidator()] if settings.placeholder_content else []
        names = [GenericCompanyNameValidator()] if settings.generic_company_name else []
        return cls(content, names, blocking=settings.blocking)

    @property
    def enabled(self) -> bool:
        return bool(self.content_validators or self.name_validators)

    def check_content(self, markup: str, label: str = "page") -> list[ValidationVerdict]:
        return self._run(self.content_validators, markup, label)

    def check_company_name(self, name: str) -> list[ValidationVerdict]:
        return self._run(self.name_validators, name, "company name")

    def _run(
        self, validators: list[ContentValidator], value: str, label: str
    ) -> list[ValidationVerdict]:
        verdicts = []
        for validator in validators:
            verdict = validator.validate(value)
            if not verdict.passed:
                logger.warning(f"{label} rejected by {verdict.validator}: {verdict.reason}")
            verdicts.append(verdict)
        return verdicts
