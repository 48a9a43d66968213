"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from recipe_guide.domain.entities import ChatRole, ConversationMessage


class SanitizeRequest(BaseModel):
    """Request body for ``POST /sanitize``."""

    prompt: str

    @field_validator("prompt")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "prompt must not be empty."
            raise ValueError(msg)
        return v


class SanitizeResponse(BaseModel):
    text: str
    rejected: bool


class EmbeddingRequest(BaseModel):
    """Request body for ``POST /embeddings`` — exactly one of the two fields."""

    text: str | None = None
    document: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _exactly_one_input(self) -> EmbeddingRequest:
        if (self.text is None) == (self.document is None):
            msg = "Provide exactly one of 'text' or 'document'."
            raise ValueError(msg)
        return self


class EmbeddingResponse(BaseModel):
    embedding: list[float]
    dimensions: int


class BatchEmbeddingRequest(BaseModel):
    """Request body for ``POST /embeddings/batch`` keyed by document id."""

    documents: dict[str, dict[str, Any] | str]


class BatchEmbeddingResponse(BaseModel):
    vectors: dict[str, list[float]]
    skipped: list[str]


class MessageSchema(BaseModel):
    """One prior conversation turn."""

    role: ChatRole
    content: str

    def to_entity(self) -> ConversationMessage:
        return ConversationMessage(role=self.role, content=self.content)


class ChatRequest(BaseModel):
    """Request body for ``POST /chat``."""

    prompt: str
    documents: str = ""
    history: list[MessageSchema] = Field(default_factory=list)

    @field_validator("prompt")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "prompt must not be empty."
            raise ValueError(msg)
        return v


class ChatResponse(BaseModel):
    """Successful response from ``POST /chat``."""

    response: str
    prompt_tokens: int
    completion_tokens: int


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
