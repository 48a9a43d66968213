"""API routes — thin controllers that delegate to the pipeline and use cases."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from recipe_guide.domain.entities import PlainText, StructuredText
from recipe_guide.domain.exceptions import LlmError
from recipe_guide.domain.ports.llm_gateway import LlmGateway
from recipe_guide.domain.prompts import is_rejected
from recipe_guide.interface.dependencies import (
    get_chat_use_case,
    get_document_embedder,
    get_pipeline,
)
from recipe_guide.interface.schemas import (
    BatchEmbeddingRequest,
    BatchEmbeddingResponse,
    ChatRequest,
    ChatResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    ErrorResponse,
    SanitizeRequest,
    SanitizeResponse,
)
from recipe_guide.services.document_indexer import DocumentEmbedder
from recipe_guide.services.recipe_chat import GuardedRecipeChat

router = APIRouter()

_LLM_ERRORS: dict[int | str, dict[str, Any]] = {
    502: {"model": ErrorResponse, "description": "LLM provider error"},
    503: {"model": ErrorResponse, "description": "LLM client not configured"},
}


@router.post("/sanitize", response_model=SanitizeResponse, responses=_LLM_ERRORS)
async def sanitize(
    body: SanitizeRequest,
    pipeline: LlmGateway = Depends(get_pipeline),
) -> SanitizeResponse:
    """Run the guardrail pass over a prompt."""
    text = (await pipeline.sanitize_prompt(body.prompt)).unwrap()
    return SanitizeResponse(text=text, rejected=is_rejected(text))


@router.post("/embeddings", response_model=EmbeddingResponse, responses=_LLM_ERRORS)
async def embeddings(
    body: EmbeddingRequest,
    pipeline: LlmGateway = Depends(get_pipeline),
) -> EmbeddingResponse:
    """Embed a single text or structured document."""
    payload = (
        PlainText(body.text)
        if body.text is not None
        else StructuredText.from_document(body.document or {})
    )
    vector = await pipeline.get_embedding(payload)
    if vector is None:
        raise LlmError("Embedding could not be produced.")
    return EmbeddingResponse(embedding=vector, dimensions=len(vector))


@router.post("/embeddings/batch", response_model=BatchEmbeddingResponse, responses=_LLM_ERRORS)
async def embeddings_batch(
    body: BatchEmbeddingRequest,
    embedder: DocumentEmbedder = Depends(get_document_embedder),
) -> BatchEmbeddingResponse:
    """Embed many documents; the ones that fail are listed in ``skipped``."""
    batch = await embedder.embed_documents(body.documents)
    return BatchEmbeddingResponse(vectors=batch.vectors, skipped=batch.skipped)


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Prompt rejected by the guardrail"},
        **_LLM_ERRORS,
    },
)
async def chat(
    body: ChatRequest,
    use_case: GuardedRecipeChat = Depends(get_chat_use_case),
) -> ChatResponse:
    """Answer a cooking question grounded on the supplied recipes."""
    text, prompt_tokens, completion_tokens = await use_case.ask(
        body.prompt,
        body.documents,
        [m.to_entity() for m in body.history],
    )
    return ChatResponse(
        response=text,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
    )
