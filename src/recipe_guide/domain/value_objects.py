"""Value objects — self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_MAX_TOKENS = 8191

_PUBLIC_OPENAI_HOST = "api.openai.com"


class TransportKind(str, Enum):
    """Which flavour of provider client serves an endpoint."""

    OPENAI = "openai"
    AZURE = "azure"


@dataclass(frozen=True, slots=True)
class TokenBudget:
    """Maximum completion tokens requested per call.

    The configured value arrives as a string; anything that does not parse
    as an integer falls back to :data:`DEFAULT_MAX_TOKENS`.
    """

    value: int = DEFAULT_MAX_TOKENS

    @classmethod
    def from_string(cls, raw: str | None) -> TokenBudget:
        try:
            return cls(value=int(raw))  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls()


@dataclass(frozen=True, slots=True)
class ProviderEndpoint:
    """A provider endpoint URL and the transport it calls for.

    ``https://api.openai.com/...`` is the public OpenAI API; every other URL
    is treated as a private Azure OpenAI gateway.
    """

    url: str
    transport: TransportKind

    @classmethod
    def from_string(cls, url: str) -> ProviderEndpoint:
        url = url.strip()
        if _PUBLIC_OPENAI_HOST in url:
            return cls(url=url, transport=TransportKind.OPENAI)
        return cls(url=url, transport=TransportKind.AZURE)

    @property
    def is_public(self) -> bool:
        return self.transport is TransportKind.OPENAI
