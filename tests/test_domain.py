from __future__ import annotations

import json

import pytest

from recipe_guide.domain.entities import (
    ChatRole,
    CompletionResult,
    ConversationMessage,
    StructuredText,
)
from recipe_guide.domain.exceptions import LlmError
from recipe_guide.domain.prompts import (
    GUARDRAIL_SYSTEM_PROMPT,
    REJECTED_SENTINEL,
    is_rejected,
)
from recipe_guide.domain.result import Err, Ok
from recipe_guide.domain.value_objects import (
    DEFAULT_MAX_TOKENS,
    ProviderEndpoint,
    TokenBudget,
    TransportKind,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("4096", 4096),
        (" 512 ", 512),
        ("abc", DEFAULT_MAX_TOKENS),
        ("12.5", DEFAULT_MAX_TOKENS),
        ("", DEFAULT_MAX_TOKENS),
        (None, DEFAULT_MAX_TOKENS),
    ],
)
def test_token_budget_parsing(raw, expected) -> None:
    assert TokenBudget.from_string(raw).value == expected


def test_default_token_budget_is_8191() -> None:
    assert DEFAULT_MAX_TOKENS == 8191


@pytest.mark.parametrize(
    ("url", "transport"),
    [
        ("https://api.openai.com/v1", TransportKind.OPENAI),
        ("https://api.openai.com", TransportKind.OPENAI),
        ("https://contoso.openai.azure.com/", TransportKind.AZURE),
        ("http://10.0.0.5:8080/gateway", TransportKind.AZURE),
    ],
)
def test_endpoint_classification(url: str, transport: TransportKind) -> None:
    endpoint = ProviderEndpoint.from_string(url)
    assert endpoint.transport is transport
    assert endpoint.is_public is (transport is TransportKind.OPENAI)


def test_ok_unwraps_to_value() -> None:
    result = Ok("soup")
    assert result.is_ok
    assert result.unwrap() == "soup"


def test_err_unwrap_raises_captured_error() -> None:
    error = LlmError("provider down")
    result = Err(error)
    assert not result.is_ok
    with pytest.raises(LlmError) as excinfo:
        result.unwrap()
    assert excinfo.value is error


def test_message_payload_uses_wire_role_names() -> None:
    assert ConversationMessage.assistant("Done.").to_payload() == {
        "role": "assistant",
        "content": "Done.",
    }
    assert ConversationMessage(role=ChatRole("user"), content="x").role is ChatRole.USER


def test_message_is_immutable() -> None:
    message = ConversationMessage.user("hi")
    with pytest.raises(AttributeError):
        message.content = "changed"  # type: ignore[misc]


def test_completion_result_unpacks_as_triple() -> None:
    result = CompletionResult(text="Stew", prompt_tokens=100, completion_tokens=25)
    text, prompt_tokens, completion_tokens = result
    assert (text, prompt_tokens, completion_tokens) == ("Stew", 100, 25)
    assert result.total_tokens == 125


def test_structured_text_serializes_document() -> None:
    recipe = {"name": "Crème brûlée", "servings": 4}
    structured = StructuredText.from_document(recipe)
    assert json.loads(structured.text) == recipe
    assert "Crème" in structured.text


def test_guardrail_prompt_names_the_sentinel() -> None:
    assert REJECTED_SENTINEL in GUARDRAIL_SYSTEM_PROMPT
    assert is_rejected("REJECTED")
    assert is_rejected("REJECTED\n")
    assert not is_rejected("Rejected recipes are fine to ask about")
