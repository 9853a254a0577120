"""
Scored summary returned by a summarizer.

LLM output is untrusted: `ScoredSummary.from_response_text` pulls the
JSON object out of the raw reply and normalizes every field, so callers
only ever see well-formed values.
"""

import json
import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from privacy_intel.core.exceptions import SummaryParseError

DEFAULT_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n(.*?)\n```", re.DOTALL)
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")


class ContentType(str, Enum):
    """What kind of page is being summarized."""

    PRIVACY_POLICY = "privacy_policy"
    TRUST_CENTER = "trust_center"
    GENERAL = "general"


def normalize_score(value: Any) -> int:
    """Integer score in 1..10; anything else becomes 5."""
    if isinstance(value, bool):
        return DEFAULT_SCORE
    try:
        score = int(float(value)) if isinstance(value, (int, float, str)) else None
    except (ValueError, OverflowError):
        return DEFAULT_SCORE
    if score is None or not MIN_SCORE <= score <= MAX_SCORE:
        return DEFAULT_SCORE
    return score


def extract_json_object(raw_text: str) -> str:
    """
    Locate the JSON object in an LLM reply.

    Prefers a fenced code block, then falls back to the span from the
    first '{' to the last '}'.

    Raises:
        SummaryParseError: If no object-shaped span exists
    """
    match = _FENCED_JSON.search(raw_text)
    if match:
        candidate = match.group(1)
    else:
        start = raw_text.find("{")
        end = raw_text.rfind("}") + 1
        if start == -1 or end <= start:
            raise SummaryParseError("No JSON object found in response", raw_text=raw_text)
        candidate = raw_text[start:end]

    return _CONTROL_CHARS.sub("", candidate)


class ScoredSummary(BaseModel):
    """
    Structured AI assessment of a privacy policy or trust center.

    Accepts both snake_case and camelCase keys.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    summary: str = "No summary provided"
    key_findings: list[str] = Field(default_factory=list)
    privacy_score: int = DEFAULT_SCORE
    security_score: int = DEFAULT_SCORE
    compliance_score: int = DEFAULT_SCORE
    recommendations: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    data_usage_summary: str = "No data usage information provided"
    user_rights_summary: str = "No user rights information provided"

    @field_validator("privacy_score", "security_score", "compliance_score", mode="before")
    @classmethod
    def validate_score(cls, v: Any) -> int:
        return normalize_score(v)

    @field_validator("key_findings", "recommendations", "risks", mode="before")
    @classmethod
    def validate_list(cls, v: Any) -> list[str]:
        if not isinstance(v, list):
            return []
        return [str(item) for item in v if item is not None]

    @field_validator("summary", mode="before")
    @classmethod
    def validate_summary(cls, v: Any) -> str:
        return str(v) if v else "No summary provided"

    @field_validator("data_usage_summary", mode="before")
    @classmethod
    def validate_data_usage(cls, v: Any) -> str:
        return str(v) if v else "No data usage information provided"

    @field_validator("user_rights_summary", mode="before")
    @classmethod
    def validate_user_rights(cls, v: Any) -> str:
        return str(v) if v else "No user rights information provided"

    @classmethod
    def from_response_text(cls, raw_text: str) -> "ScoredSummary":
        """
        Parse and normalize a raw LLM reply.

        Raises:
            SummaryParseError: If the reply holds no parseable JSON object
        """
        try:
            data = json.loads(extract_json_object(raw_text))
        except json.JSONDecodeError as e:
            raise SummaryParseError(f"Malformed JSON in response: {e}", raw_text=raw_text) from e

        if not isinstance(data, dict):
            raise SummaryParseError("Response JSON is not an object", raw_text=raw_text)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise SummaryParseError(f"Invalid summary payload: {e}", raw_text=raw_text) from e

    def to_dict(self) -> dict:
        return self.model_dump()
