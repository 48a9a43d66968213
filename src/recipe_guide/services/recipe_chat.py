"""Guarded recipe chat use case — moderation first, then the grounded answer.

This is the single entry point for the chat flow.  It depends only on the
:class:`LlmGateway` port; the interface layer injects the concrete pipeline.
"""

from __future__ import annotations

import logging
from typing import Sequence

from recipe_guide.domain.entities import CompletionResult, ConversationMessage
from recipe_guide.domain.exceptions import PromptRejectedError
from recipe_guide.domain.ports.llm_gateway import LlmGateway
from recipe_guide.domain.prompts import RECIPE_ASSISTANT_SYSTEM_PROMPT, is_rejected
from recipe_guide.services.token_budget import count_message_tokens, trim_history

logger = logging.getLogger(__name__)


class GuardedRecipeChat:
    """Orchestrates the sanitize → grounded-completion pipeline.

    Parameters
    ----------
    llm_gateway:
        Adapter that runs the guardrail and chat calls.
    max_history_tokens:
        Context budget for system prompt, documents, history and the new
        prompt together.  Oldest history turns are dropped to fit.
    """

    def __init__(self, llm_gateway: LlmGateway, max_history_tokens: int = 12_000) -> None:
        self._llm = llm_gateway
        self._max_history_tokens = max_history_tokens

    async def ask(
        self,
        user_prompt: str,
        documents: str,
        history: Sequence[ConversationMessage] = (),
    ) -> CompletionResult:
        """Sanitize *user_prompt* and answer it from *documents*.

        Raises :class:`PromptRejectedError` when the guardrail rejects the
        prompt, and the pipeline's :class:`LlmError` when either call fails.
        """
        sanitized = (await self._llm.sanitize_prompt(user_prompt)).unwrap()
        if is_rejected(sanitized):
            logger.warning("Guardrail rejected a prompt (%d chars)", len(user_prompt))
            raise PromptRejectedError("The prompt was rejected by the guardrail.")

        fitted = self._fit_history(sanitized, documents, history)
        if len(fitted) < len(history):
            logger.info("Dropped %d old turn(s) to fit the token budget", len(history) - len(fitted))

        return (await self._llm.get_chat_completion(sanitized, documents, fitted)).unwrap()

    def _fit_history(
        self,
        prompt: str,
        documents: str,
        history: Sequence[ConversationMessage],
    ) -> list[ConversationMessage]:
        fixed = count_message_tokens(
            [
                ConversationMessage.system(RECIPE_ASSISTANT_SYSTEM_PROMPT + documents),
                ConversationMessage.user(prompt),
            ]
        )
        return trim_history(history, self._max_history_tokens, reserved=fixed)
