"""
AI summarizers.

A summarizer turns page text into a ScoredSummary. The analyzer only
depends on the Summarizer protocol; AnthropicSummarizer is the bundled
implementation and calls the Messages API through the anthropic SDK.
"""

import os
from typing import Protocol, runtime_checkable

import anthropic
import httpx

from privacy_intel.config.settings import LLMSettings
from privacy_intel.core.exceptions import SummarizerError
from privacy_intel.llm.prompt_templates import template_for
from privacy_intel.llm.summary import ContentType, ScoredSummary
from privacy_intel.utils.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Summarizer(Protocol):
    """Produces a scored summary of plain text, or None when it cannot."""

    def is_available(self) -> bool:
        ...

    async def summarize(
        self, content: str, content_type: ContentType = ContentType.GENERAL
    ) -> ScoredSummary | None:
        ...


class AnthropicSummarizer:
    """
    Summarizer backed by the Anthropic Messages API.

    Unavailable when no API key is configured or LLM use is disabled;
    summarize() then returns None without touching the network. API and
    parse failures are logged and also yield None.

    An httpx.AsyncClient may be injected (tests pass one built on
    httpx.MockTransport); it is left open for the caller to close.

    Example:
        >>> summarizer = AnthropicSummarizer(settings.llm)
        >>> if summarizer.is_available():
        ...     result = await summarizer.summarize(text, ContentType.PRIVACY_POLICY)
    """

    def __init__(
        self,
        settings: LLMSettings | None = None,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.settings = settings or LLMSettings()
        self._api_key = api_key or os.environ.get(self.settings.api_key_env_var) or None
        self._http_client = http_client

        if not self._api_key:
            logger.warning(
                f"{self.settings.api_key_env_var} not set, AI summaries disabled"
            )

    def is_available(self) -> bool:
        return self.settings.enabled and bool(self._api_key)

    async def summarize(
        self, content: str, content_type: ContentType = ContentType.GENERAL
    ) -> ScoredSummary | None:
        if not self.is_available():
            logger.debug("Summarizer unavailable, skipping AI summary")
            return None

        content_type = ContentType(content_type)
        logger.info(f"Starting AI analysis of {content_type.value} content")

        try:
            raw_text = await self._complete(content, content_type)
            summary = ScoredSummary.from_response_text(raw_text)
        except SummarizerError as e:
            logger.error(f"AI analysis failed: {e}")
            return None

        logger.info("AI analysis completed")
        return summary

    def _client(self) -> anthropic.AsyncAnthropic:
        return anthropic.AsyncAnthropic(
            api_key=self._api_key,
            base_url=self.settings.base_url,
            timeout=self.settings.timeout_seconds,
            max_retries=self.settings.max_retries,
            http_client=self._http_client,
        )

    async def _complete(self, content: str, content_type: ContentType) -> str:
        """Send one Messages API request and return the reply text."""
        truncated = content[: self.settings.max_content_chars]
        prompt = template_for(content_type).format(content=truncated)

        client = self._client()
        try:
            message = await client.messages.create(
                model=self.settings.model_name,
                max_tokens=self.settings.max_tokens,
                temperature=self.settings.temperature,
                system=prompt["system"],
                messages=[{"role": "user", "content": prompt["user"]}],
            )
        except anthropic.APIStatusError as e:
            raise SummarizerError(
                f"API returned {e.status_code}",
                details={"model": self.settings.model_name},
            ) from e
        except anthropic.APIError as e:
            raise SummarizerError(f"API request failed: {e}") from e
        finally:
            if self._http_client is None:
                await client.close()

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        if not text:
            raise SummarizerError("Empty response from API")
        return text
