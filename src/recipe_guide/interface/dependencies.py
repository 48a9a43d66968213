"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import Depends

from recipe_guide.domain.exceptions import PipelineNotReadyError
from recipe_guide.infrastructure.config import get_settings
from recipe_guide.infrastructure.openai_adapter import PromptPipeline
from recipe_guide.services.document_indexer import DocumentEmbedder
from recipe_guide.services.recipe_chat import GuardedRecipeChat

_http_client: httpx.AsyncClient | None = None
_pipeline: PromptPipeline | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _pipeline  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout_seconds))
    _pipeline = PromptPipeline(
        endpoint=settings.openai_endpoint,
        key=settings.openai_key.get_secret_value(),
        embeddings_deployment=settings.openai_embeddings_deployment,
        completions_deployment=settings.openai_completions_deployment,
        max_tokens=settings.openai_max_tokens,
        api_version=settings.openai_api_version,
        max_retries=settings.openai_max_retries,
        http_client=_http_client,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _pipeline  # noqa: PLW0603

    if _pipeline:
        await _pipeline.close()
        _pipeline = None
    if _http_client:
        await _http_client.aclose()
        _http_client = None


def pipeline_ready() -> bool:
    return _pipeline is not None and _pipeline.is_ready


def get_pipeline() -> PromptPipeline:
    """Return the shared pipeline, refusing to hand out an unusable one."""
    assert _pipeline is not None, "startup() was not called"
    if not _pipeline.is_ready:
        raise PipelineNotReadyError("LLM client is not configured correctly.")
    return _pipeline


def get_chat_use_case(pipeline: PromptPipeline = Depends(get_pipeline)) -> GuardedRecipeChat:
    return GuardedRecipeChat(
        llm_gateway=pipeline,
        max_history_tokens=get_settings().max_history_tokens,
    )


def get_document_embedder(
    pipeline: PromptPipeline = Depends(get_pipeline),
) -> DocumentEmbedder:
    return DocumentEmbedder(llm_gateway=pipeline)
