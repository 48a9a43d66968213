from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from recipe_guide.infrastructure.openai_adapter import PromptPipeline

PUBLIC_ENDPOINT = "https://api.openai.com/v1"
AZURE_ENDPOINT = "https://contoso-recipes.openai.azure.com/"


def chat_response(
    content: str | None, *, prompt_tokens: int = 42, completion_tokens: int = 7
) -> SimpleNamespace:
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens),
    )


def embedding_response(vector: list[float]) -> SimpleNamespace:
    return SimpleNamespace(data=[SimpleNamespace(embedding=vector)])


class _Endpoint:
    """Records ``create(**kwargs)`` calls and replays a canned reply or error."""

    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []
        self.reply: Any = None
        self.error: Exception | None = None

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeOpenAIClient:
    """Stand-in for ``AsyncOpenAI`` exposing only what the pipeline touches."""

    def __init__(self) -> None:
        self.completions = _Endpoint()
        self.completions.reply = chat_response("How do I bake bread?")
        self.embeddings = _Endpoint()
        self.embeddings.reply = embedding_response([0.1, 0.2, 0.3])
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _openai_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_ENDPOINT", PUBLIC_ENDPOINT)
    # Settings are cached via @lru_cache; clear so each test sees its own env.
    from recipe_guide.infrastructure.config import get_settings

    get_settings.cache_clear()


@pytest.fixture
def fake_client() -> FakeOpenAIClient:
    return FakeOpenAIClient()


@pytest.fixture
def pipeline(fake_client: FakeOpenAIClient) -> PromptPipeline:
    p = PromptPipeline(
        endpoint=PUBLIC_ENDPOINT,
        key="sk-test",
        embeddings_deployment="text-embedding-3-small",
        completions_deployment="gpt-4o-mini",
        max_tokens="1024",
    )
    p._client = fake_client  # type: ignore[assignment]
    return p
