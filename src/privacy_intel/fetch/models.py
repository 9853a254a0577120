"""
Value types for page acquisition.

FetchResult is a two-variant union: FetchContent on success and
FetchFailure once retries are exhausted. Callers branch on `.ok`
instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol, Union

from privacy_intel.config.settings import DEFAULT_USER_AGENT

if TYPE_CHECKING:
    from privacy_intel.config.settings import FetchSettings


class TransportKind(str, Enum):
    """Which transport produced a page."""

    RENDERED = "rendered"
    DIRECT = "direct"


@dataclass(frozen=True)
class FetchOptions:
    """Per-call fetch parameters."""

    timeout_ms: int = 30000
    max_retries: int = 3
    prefer_rendering: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    @classmethod
    def from_settings(cls, settings: "FetchSettings") -> "FetchOptions":
        return cls(
            timeout_ms=settings.timeout_ms,
            max_retries=settings.max_retries,
            prefer_rendering=settings.prefer_rendering,
            user_agent=settings.user_agent,
        )


@dataclass(frozen=True)
class FetchContent:
    """Markup acquired for a URL."""

    url: str
    markup: str
    transport: TransportKind
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class FetchFailure:
    """All attempts for a URL failed; reason is the last error seen."""

    url: str
    reason: str
    attempts: int

    @property
    def ok(self) -> bool:
        return False


FetchResult = Union[FetchContent, FetchFailure]


class Transport(Protocol):
    """A single-attempt page acquisition mechanism."""

    kind: TransportKind

    async def fetch(self, url: str, options: FetchOptions) -> str:
        """Return markup for url or raise a FetchError/BrowserError."""
        ...
