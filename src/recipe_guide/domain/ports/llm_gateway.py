"""Port: prompt pipeline — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from recipe_guide.domain.entities import CompletionResult, ConversationMessage, EmbeddingInput
from recipe_guide.domain.result import Result


class LlmGateway(Protocol):
    """Abstract contract for the guardrail, embedding and grounded-chat calls."""

    @property
    def is_ready(self) -> bool:
        """False when the provider client failed to initialise."""
        ...

    async def sanitize_prompt(self, user_prompt: str) -> Result[str]:
        """Run the guardrail pass and return the (possibly rewritten) prompt."""
        ...

    async def get_embedding(
        self, data: EmbeddingInput | Mapping[str, Any] | str | None
    ) -> list[float] | None:
        """Return an embedding vector, or ``None`` when one cannot be produced."""
        ...

    async def get_chat_completion(
        self,
        user_prompt: str,
        documents: str,
        conversation_history: Sequence[ConversationMessage],
    ) -> Result[CompletionResult]:
        """Answer *user_prompt* grounded on *documents* and the prior turns."""
        ...
