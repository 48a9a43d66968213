"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class RecipeGuideError(Exception):
    """Base exception for the entire application."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RecipeGuideError):
    """Any error originating from the LLM provider or its transport."""


class PipelineNotReadyError(LlmError):
    """The provider client could not be constructed; no call can be made."""


# ── Guardrail ───────────────────────────────────────────────────────────────


class PromptRejectedError(RecipeGuideError):
    """The guardrail pass judged the prompt irredeemable."""
