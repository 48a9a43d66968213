"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ChatRole(str, Enum):
    """Author of a single conversation turn."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True, slots=True)
class ConversationMessage:
    """One role-tagged turn of a conversation."""

    role: ChatRole
    content: str

    @classmethod
    def system(cls, content: str) -> ConversationMessage:
        return cls(role=ChatRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> ConversationMessage:
        return cls(role=ChatRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> ConversationMessage:
        return cls(role=ChatRole.ASSISTANT, content=content)

    def to_payload(self) -> dict[str, str]:
        """Render the message in the chat-completions wire shape."""
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True, slots=True)
class CompletionResult:
    """Assistant reply plus the provider-reported token usage.

    Unpacks as ``(text, prompt_tokens, completion_tokens)``.
    """

    text: str
    prompt_tokens: int
    completion_tokens: int

    def __iter__(self) -> Iterator[Any]:
        return iter((self.text, self.prompt_tokens, self.completion_tokens))

    @property
    def total_tokens(self) -> int:
        return self.prompt_tokens + self.completion_tokens


# ── Embedding input ─────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PlainText:
    """Free text to embed as-is."""

    text: str


@dataclass(frozen=True, slots=True)
class StructuredText:
    """A structured document (e.g. a recipe) already serialized to text."""

    text: str

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> StructuredText:
        """Serialize *document* to compact JSON."""
        return cls(text=json.dumps(document, ensure_ascii=False, default=str))


EmbeddingInput = Union[PlainText, StructuredText]
