"""
Pydantic settings models for the Privacy Intelligence System.

All configuration is defined here with defaults matching a polite,
single-threaded analysis run.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class BrowserSettings(BaseModel):
    """Playwright rendering engine configuration."""

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode",
    )
    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to use",
    )
    viewport_width: int = Field(
        default=1920,
        ge=320,
        le=3840,
        description="Browser viewport width in pixels",
    )
    viewport_height: int = Field(
        default=1080,
        ge=240,
        le=2160,
        description="Browser viewport height in pixels",
    )
    ignore_https_errors: bool = Field(
        default=False,
        description="Whether to ignore HTTPS certificate errors",
    )
    launch_args: list[str] = Field(
        default_factory=lambda: [
            "--no-sandbox",
            "--disable-setuid-sandbox",
            "--disable-dev-shm-usage",
            "--disable-gpu",
        ],
        description="Extra command-line arguments passed to the browser",
    )


class FetchSettings(BaseModel):
    """Page acquisition configuration."""

    timeout_ms: int = Field(
        default=30000,
        ge=1000,
        le=180000,
        description="Hard timeout for a single fetch attempt in milliseconds",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum fetch attempts per URL",
    )
    backoff_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=60.0,
        description="Linear backoff unit; attempt n waits backoff_seconds * n",
    )
    prefer_rendering: bool = Field(
        default=True,
        description="Use the rendering engine when it is available",
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent sent by both transports",
    )


class BatchSettings(BaseModel):
    """Batch orchestration configuration."""

    inter_request_delay_seconds: float = Field(
        default=1.0,
        ge=0.0,
        le=300.0,
        description="Pause between consecutive site analyses",
    )


class ValidatorSettings(BaseModel):
    """Toggles for the optional content validators."""

    placeholder_content: bool = Field(
        default=False,
        description="Flag placeholder, parked or error-page content",
    )
    generic_company_name: bool = Field(
        default=False,
        description="Flag generic company names such as 'Example Inc'",
    )
    blocking: bool = Field(
        default=False,
        description="Fail the analysis when the main page is rejected",
    )


class AnalysisSettings(BaseModel):
    """Site analysis configuration."""

    use_ai: bool = Field(
        default=True,
        description="Request an AI summary when a summarizer is available",
    )
    validators: ValidatorSettings = Field(
        default_factory=ValidatorSettings,
        description="Content validator toggles",
    )


class LLMSettings(BaseModel):
    """API LLM (Anthropic Claude) configuration for AI summaries."""

    enabled: bool = Field(
        default=True,
        description="Whether AI summaries may be requested at all",
    )
    provider: Literal["anthropic"] = Field(
        default="anthropic",
        description="API provider to use",
    )
    model_name: str = Field(
        default="claude-sonnet-4-20250514",
        description="Model identifier for API calls",
    )
    api_key_env_var: str = Field(
        default="ANTHROPIC_API_KEY",
        description="Environment variable name containing API key",
    )
    base_url: str = Field(
        default="https://api.anthropic.com",
        description="API base URL",
    )
    max_tokens: int = Field(
        default=1000,
        ge=100,
        le=4096,
        description="Maximum tokens in API response",
    )
    temperature: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Sampling temperature for API calls",
    )
    timeout_seconds: int = Field(
        default=60,
        ge=5,
        le=300,
        description="Timeout for API requests in seconds",
    )
    max_retries: int = Field(
        default=2,
        ge=0,
        le=10,
        description="Retries the API client makes on connection errors and 429/5xx",
    )
    max_content_chars: int = Field(
        default=4000,
        ge=500,
        le=100000,
        description="Page text is truncated to this many characters",
    )


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum logging level",
    )
    format: str = Field(
        default="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        description="Log message format string",
    )
    date_format: str = Field(
        default="%Y-%m-%d %H:%M:%S",
        description="Date format for log timestamps",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path to log file. None means console only.",
    )
    max_file_size_mb: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Maximum log file size before rotation",
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        le=30,
        description="Number of backup log files to keep",
    )
    log_to_console: bool = Field(
        default=True,
        description="Whether to output logs to console",
    )

    @field_validator("file_path", mode="before")
    @classmethod
    def convert_file_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v


class Settings(BaseModel):
    """
    Root configuration model containing all subsystem settings.

    Settings are loaded from YAML with environment variable overrides.
    """

    browser: BrowserSettings = Field(
        default_factory=BrowserSettings,
        description="Browser/Playwright settings",
    )
    fetch: FetchSettings = Field(
        default_factory=FetchSettings,
        description="Fetch strategy settings",
    )
    batch: BatchSettings = Field(
        default_factory=BatchSettings,
        description="Batch orchestration settings",
    )
    analysis: AnalysisSettings = Field(
        default_factory=AnalysisSettings,
        description="Site analysis settings",
    )
    llm: LLMSettings = Field(
        default_factory=LLMSettings,
        description="AI summary settings",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    model_config = {
        "extra": "forbid",
        "validate_default": True,
    }
