"""Bulk document embedding — skip-and-continue over a batch of recipes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from recipe_guide.domain.entities import PlainText, StructuredText
from recipe_guide.domain.ports.llm_gateway import LlmGateway

logger = logging.getLogger(__name__)


@dataclass
class EmbeddingBatch:
    """Vectors keyed by document id, plus the ids that produced none."""

    vectors: dict[str, list[float]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


class DocumentEmbedder:
    """Embeds documents one at a time; a failed document is skipped."""

    def __init__(self, llm_gateway: LlmGateway) -> None:
        self._llm = llm_gateway

    async def embed_documents(
        self, documents: Mapping[str, Mapping[str, Any] | str]
    ) -> EmbeddingBatch:
        batch = EmbeddingBatch()
        for doc_id, document in documents.items():
            try:
                payload = (
                    PlainText(document)
                    if isinstance(document, str)
                    else StructuredText.from_document(document)
                )
            except (TypeError, ValueError) as exc:
                logger.warning("Document %s could not be serialized: %s", doc_id, exc)
                batch.skipped.append(doc_id)
                continue
            vector = await self._llm.get_embedding(payload)
            if vector is None:
                batch.skipped.append(doc_id)
                continue
            batch.vectors[doc_id] = vector

        if batch.skipped:
            logger.warning(
                "Embedded %d document(s), skipped %d",
                len(batch.vectors),
                len(batch.skipped),
            )
        return batch
