"""
Prompt templates for LLM summarization.

One template per content type. Every template asks for the same JSON
shape so a single parser handles all responses.
"""

from dataclasses import dataclass
from typing import Any

from privacy_intel.llm.summary import ContentType


SYSTEM_PROMPT = (
    "You are a privacy and security expert analyzing website content. "
    "Provide objective, professional analysis in JSON format."
)


def _response_shape(findings: int, recommendations: int, risks: int, sentences: str) -> str:
    finding_items = ", ".join(f'"Key finding {i}"' for i in range(1, findings + 1))
    recommendation_items = ", ".join(
        f'"Recommendation {i}"' for i in range(1, recommendations + 1)
    )
    risk_items = ", ".join(f'"Risk {i}"' for i in range(1, risks + 1))
    return (
        "{{\n"
        '  "summary": "A concise summary (2-3 sentences)",\n'
        f'  "keyFindings": [{finding_items}],\n'
        '  "privacyScore": 7,\n'
        '  "securityScore": 7,\n'
        '  "complianceScore": 7,\n'
        f'  "recommendations": [{recommendation_items}],\n'
        f'  "risks": [{risk_items}],\n'
        f'  "dataUsageSummary": "Summary of how data is used ({sentences} sentences)",\n'
        f'  "userRightsSummary": "Summary of user rights ({sentences} sentences)"\n'
        "}}"
    )


@dataclass
class PromptTemplate:
    """
    A reusable prompt template with variable substitution.

    Example:
        >>> prompt = PRIVACY_POLICY.format(content="We collect...")
        >>> prompt["system"]
        'You are a privacy and security expert ...'
    """

    name: str
    system: str
    user: str

    def format(self, **kwargs: Any) -> dict[str, str]:
        """Format both prompts with the provided variables."""
        return {
            "system": self.system.format(**kwargs) if kwargs else self.system,
            "user": self.user.format(**kwargs) if kwargs else self.user,
        }


PRIVACY_POLICY = PromptTemplate(
    name="privacy_policy",
    system=SYSTEM_PROMPT,
    user=(
        "Analyze this privacy policy content and provide a comprehensive assessment:\n\n"
        "---\n{content}\n---\n\n"
        "Please provide a JSON response with the following structure:\n"
        + _response_shape(5, 3, 3, "2-3")
        + "\n\nScores should be integers from 1-10, where 10 is excellent. "
        "Be objective and professional in your analysis."
    ),
)

TRUST_CENTER = PromptTemplate(
    name="trust_center",
    system=SYSTEM_PROMPT,
    user=(
        "Analyze this trust center content and provide insights:\n\n"
        "---\n{content}\n---\n\n"
        "Please provide a JSON response with the following structure:\n"
        + _response_shape(3, 2, 2, "1-2")
        + "\n\nScores should be integers from 1-10, where 10 is excellent. "
        "Focus on security and trust aspects."
    ),
)

GENERAL = PromptTemplate(
    name="general",
    system=SYSTEM_PROMPT,
    user=(
        "Analyze this general website content and provide insights:\n\n"
        "---\n{content}\n---\n\n"
        "Please provide a JSON response with the following structure:\n"
        + _response_shape(3, 2, 2, "1-2")
        + "\n\nScores should be integers from 1-10, where 10 is excellent. "
        "Provide general insights about privacy and security."
    ),
)

_TEMPLATES = {
    ContentType.PRIVACY_POLICY: PRIVACY_POLICY,
    ContentType.TRUST_CENTER: TRUST_CENTER,
    ContentType.GENERAL: GENERAL,
}


def template_for(content_type: ContentType) -> PromptTemplate:
    return _TEMPLATES[ContentType(content_type)]
