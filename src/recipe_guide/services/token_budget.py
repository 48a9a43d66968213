"""Token estimates for keeping a chat request inside its context budget.

Uses ``tiktoken`` for counting.  These numbers only decide how much
conversation history to forward; reported usage always comes from the
provider response.
"""

from __future__ import annotations

from typing import Sequence

import tiktoken

from recipe_guide.domain.entities import ChatRole, ConversationMessage

# ── Constants ───────────────────────────────────────────────────────────────

_ENCODING_NAME = "cl100k_base"  # GPT-4o family

# Chat format overhead: role/separator tokens per message, plus reply priming
_TOKENS_PER_MESSAGE = 3
_TOKENS_PER_REPLY = 3


# ── Public helpers ──────────────────────────────────────────────────────────

_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    global _encoder  # noqa: PLW0603
    if _encoder is None:
        _encoder = tiktoken.get_encoding(_ENCODING_NAME)
    return _encoder


def count_tokens(text: str) -> int:
    """Return the exact token count for *text* under cl100k_base."""
    return len(_get_encoder().encode(text))


def count_message_tokens(messages: Sequence[ConversationMessage]) -> int:
    """Estimate the prompt tokens a chat request built from *messages* costs."""
    if not messages:
        return 0
    total = _TOKENS_PER_REPLY
    for message in messages:
        total += _TOKENS_PER_MESSAGE + count_tokens(message.content)
    return total


def trim_history(
    history: Sequence[ConversationMessage],
    budget: int,
    reserved: int = 0,
) -> list[ConversationMessage]:
    """Drop the oldest turns until *history* fits in ``budget - reserved``.

    The surviving turns keep their original order and never open with an
    assistant reply whose question was dropped.  Returns an empty list
    when even the newest turn does not fit.
    """
    available = budget - reserved
    kept: list[ConversationMessage] = []
    used = 0

    for message in reversed(history):
        cost = _TOKENS_PER_MESSAGE + count_tokens(message.content)
        if used + cost > available:
            break
        kept.append(message)
        used += cost

    kept.reverse()
    if len(kept) < len(history):
        while kept and kept[0].role is ChatRole.ASSISTANT:
            kept.pop(0)
    return kept
