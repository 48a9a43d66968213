"""OpenAI adapter — implements the LlmGateway port.

One pipeline instance wraps a single SDK client: ``AsyncOpenAI`` for the
public API, ``AsyncAzureOpenAI`` for a private Azure OpenAI gateway.  Retries
and backoff are left to the SDK.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

import httpx
from openai import AsyncAzureOpenAI, AsyncOpenAI

from recipe_guide.domain.entities import (
    CompletionResult,
    ConversationMessage,
    EmbeddingInput,
    PlainText,
    StructuredText,
)
from recipe_guide.domain.exceptions import LlmError, PipelineNotReadyError
from recipe_guide.domain.prompts import (
    GUARDRAIL_SYSTEM_PROMPT,
    RECIPE_ASSISTANT_SYSTEM_PROMPT,
)
from recipe_guide.domain.result import Err, Ok, Result
from recipe_guide.domain.value_objects import ProviderEndpoint, TokenBudget, TransportKind

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-06-01"
DEFAULT_MAX_RETRIES = 10

# ── Decoding presets ────────────────────────────────────────────────────────

# Moderation must not introduce lexical variance.
_GUARDRAIL_SAMPLING: dict[str, float] = {
    "temperature": 0.0,
    "top_p": 1.0,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}

_ASSISTANT_SAMPLING: dict[str, float] = {
    "temperature": 0.5,
    "top_p": 0.95,
    "frequency_penalty": 0,
    "presence_penalty": 0,
}


def build_messages(
    user_prompt: str,
    documents: str,
    conversation_history: Sequence[ConversationMessage],
) -> list[ConversationMessage]:
    """Assemble the grounded chat request: system, history, then the new prompt."""
    return [
        ConversationMessage.system(RECIPE_ASSISTANT_SYSTEM_PROMPT + documents),
        *conversation_history,
        ConversationMessage.user(user_prompt),
    ]


class PromptPipeline:
    """Concrete ``LlmGateway`` backed by the OpenAI / Azure OpenAI SDK.

    Parameters
    ----------
    endpoint:
        Provider URL.  Anything containing ``api.openai.com`` selects the
        public API; every other URL is used as an Azure endpoint.
    key:
        API key for the selected provider.
    embeddings_deployment, completions_deployment:
        Model (OpenAI) or deployment (Azure) names for each operation.
    max_tokens:
        Completion token budget as configured (a string); unparseable
        values fall back to 8191.
    http_client:
        Optional shared ``httpx.AsyncClient`` used as the SDK transport.

    A failure while building the SDK client is logged and swallowed;
    check :attr:`is_ready` before relying on the instance.
    """

    def __init__(
        self,
        endpoint: str,
        key: str,
        embeddings_deployment: str,
        completions_deployment: str,
        max_tokens: str,
        *,
        api_version: str = DEFAULT_API_VERSION,
        max_retries: int = DEFAULT_MAX_RETRIES,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._embeddings_deployment = embeddings_deployment
        self._completions_deployment = completions_deployment
        self._budget = TokenBudget.from_string(max_tokens)
        self._endpoint = ProviderEndpoint.from_string(endpoint)
        self._client: AsyncOpenAI | None = None

        try:
            if self._endpoint.is_public:
                self._client = AsyncOpenAI(
                    api_key=key,
                    max_retries=max_retries,
                    http_client=http_client,
                )
            else:
                self._client = AsyncAzureOpenAI(
                    azure_endpoint=self._endpoint.url,
                    api_key=key,
                    api_version=api_version,
                    max_retries=max_retries,
                    http_client=http_client,
                )
        except Exception:
            logger.exception("PromptPipeline constructor failure")

    # ── Read-only state ─────────────────────────────────────────────────

    @property
    def is_ready(self) -> bool:
        return self._client is not None

    @property
    def transport(self) -> TransportKind:
        return self._endpoint.transport

    @property
    def max_tokens(self) -> int:
        return self._budget.value

    @property
    def embeddings_deployment(self) -> str:
        return self._embeddings_deployment

    @property
    def completions_deployment(self) -> str:
        return self._completions_deployment

    # ── Guardrail ───────────────────────────────────────────────────────

    async def sanitize_prompt(self, user_prompt: str) -> Result[str]:
        """Pass *user_prompt* through the guardrail model.

        The reply is returned verbatim: the prompt itself, a rewritten
        prompt, or the literal ``REJECTED``.  Interpreting the sentinel is
        the caller's job.
        """
        messages = [
            ConversationMessage.system(GUARDRAIL_SYSTEM_PROMPT),
            ConversationMessage.user(user_prompt),
        ]
        try:
            response = await self._create_chat_completion(messages, _GUARDRAIL_SAMPLING)
            return Ok(_first_choice_text(response))
        except LlmError as exc:
            logger.error("PromptPipeline.sanitize_prompt(): %s", exc)
            return Err(exc)

    # ── Embeddings ──────────────────────────────────────────────────────

    async def get_embedding(
        self, data: EmbeddingInput | Mapping[str, Any] | str | None
    ) -> list[float] | None:
        """Embed *data* with the embeddings deployment.

        Returns ``None`` instead of raising: a caller indexing many
        documents skips the one that failed and carries on.
        """
        try:
            text = _embedding_text(data)
            if not text:
                logger.warning("PromptPipeline.get_embedding(): empty input, nothing to embed")
                return None
            client = self._require_client()
            response = await client.embeddings.create(
                model=self._embeddings_deployment,
                input=[text],
            )
            return list(response.data[0].embedding)
        except Exception as exc:
            logger.error("PromptPipeline.get_embedding(): %s", exc)
            return None

    # ── Grounded chat ───────────────────────────────────────────────────

    async def get_chat_completion(
        self,
        user_prompt: str,
        documents: str,
        conversation_history: Sequence[ConversationMessage],
    ) -> Result[CompletionResult]:
        """Answer *user_prompt* using *documents* as the only source of recipes."""
        messages = build_messages(user_prompt, documents, conversation_history)
        try:
            response = await self._create_chat_completion(messages, _ASSISTANT_SAMPLING)
            text = _first_choice_text(response)
            usage = response.usage
            if usage is None:
                raise LlmError("LLM response carried no token usage.")
            result = CompletionResult(
                text=text,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
            )
        except LlmError as exc:
            logger.error("PromptPipeline.get_chat_completion(): %s", exc)
            return Err(exc)

        logger.info(
            "Chat completion: %d prompt tokens, %d completion tokens",
            result.prompt_tokens,
            result.completion_tokens,
        )
        return Ok(result)

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        if self._client is not None:
            await self._client.close()

    # ── Internals ───────────────────────────────────────────────────────

    def _require_client(self) -> AsyncOpenAI:
        if self._client is None:
            raise PipelineNotReadyError("LLM client was not initialised.")
        return self._client

    async def _create_chat_completion(
        self,
        messages: Sequence[ConversationMessage],
        sampling: dict[str, float],
    ) -> Any:
        client = self._require_client()
        try:
            return await client.chat.completions.create(
                model=self._completions_deployment,
                messages=[m.to_payload() for m in messages],  # type: ignore[misc]
                max_tokens=self._budget.value,
                **sampling,  # type: ignore[arg-type]
            )
        except Exception as exc:
            raise LlmError(f"LLM call failed: {exc}") from exc


# ── Helpers ─────────────────────────────────────────────────────────────────


def _first_choice_text(response: Any) -> str:
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise LlmError("LLM response had no choices.") from exc
    if content is None:
        raise LlmError("LLM returned an empty response.")
    return content


def _embedding_text(data: EmbeddingInput | Mapping[str, Any] | str | None) -> str:
    """Coerce embedding input to the single text item sent to the provider."""
    if data is None:
        return ""
    if isinstance(data, (PlainText, StructuredText)):
        return data.text
    if isinstance(data, Mapping):
        return StructuredText.from_document(data).text
    return str(data)
