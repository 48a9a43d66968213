from __future__ import annotations

from recipe_guide.domain.entities import ConversationMessage
from recipe_guide.services.token_budget import (
    count_message_tokens,
    count_tokens,
    trim_history,
)


def test_count_tokens_is_positive_for_text() -> None:
    assert count_tokens("") == 0
    assert count_tokens("Preheat the oven to 180 degrees.") > 0


def test_message_tokens_exceed_content_tokens() -> None:
    messages = [ConversationMessage.system("Be helpful."), ConversationMessage.user("Soup?")]
    content_only = sum(count_tokens(m.content) for m in messages)
    assert count_message_tokens(messages) > content_only
    assert count_message_tokens([]) == 0


def test_trim_history_keeps_everything_when_it_fits() -> None:
    history = [ConversationMessage.user("A"), ConversationMessage.assistant("B")]
    assert trim_history(history, budget=1_000) == history


def test_trim_history_drops_oldest_turns_first() -> None:
    history = [
        ConversationMessage.user("first question " * 50),
        ConversationMessage.assistant("first answer " * 50),
        ConversationMessage.user("latest"),
        ConversationMessage.assistant("reply"),
    ]
    tail_cost = count_message_tokens(history[2:])

    trimmed = trim_history(history, budget=tail_cost + 5)

    assert trimmed == history[2:]


def test_trim_history_respects_reserved_tokens() -> None:
    history = [ConversationMessage.user("A"), ConversationMessage.assistant("B")]
    assert trim_history(history, budget=100, reserved=100) == []


def test_trim_history_never_starts_with_an_orphaned_reply() -> None:
    history = [
        ConversationMessage.user("long question " * 100),
        ConversationMessage.assistant("short"),
    ]

    assert trim_history(history, budget=20) == []


def test_trim_history_keeps_whole_exchange_after_dropping_orphan() -> None:
    history = [
        ConversationMessage.user("old question " * 100),
        ConversationMessage.assistant("old answer"),
        ConversationMessage.user("latest"),
        ConversationMessage.assistant("reply"),
    ]
    budget = count_message_tokens(history[1:])

    assert trim_history(history, budget=budget) == history[2:]
