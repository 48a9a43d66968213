"""Explicit success / failure values for fail-closed operations.

A caller cannot read the value of an :class:`Err` — ``unwrap()`` raises the
captured error — so a failed guardrail or completion call can never be
mistaken for a usable answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from recipe_guide.domain.exceptions import LlmError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    error: LlmError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]
