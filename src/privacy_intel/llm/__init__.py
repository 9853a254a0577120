"""
LLM module for the Privacy Intelligence System.

Provides AI summaries of privacy policies and trust centers:
- Summarizer protocol and the Anthropic Messages API implementation
- ScoredSummary parsing and normalization
- Prompt templates per content type
"""

from privacy_intel.llm.summary import (
    ContentType,
    ScoredSummary,
    normalize_score,
    extract_json_object,
)
from privacy_intel.llm.summarizer import (
    Summarizer,
    AnthropicSummarizer,
)
from privacy_intel.llm.prompt_templates import (
    PromptTemplate,
    template_for,
)

__all__ = [
    # Summary
    "ContentType",
    "ScoredSummary",
    "normalize_score",
    "extract_json_object",
    # Summarizers
    "Summarizer",
    "AnthropicSummarizer",
    # Prompts
    "PromptTemplate",
    "template_for",
]
