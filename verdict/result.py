"""
Run outcomes.

`Success` and `Failure` are what callers see. `Both` (a value together with
recorded failures) only exists inside a run; `to_result` turns it into a
`Failure` before it crosses the top-level boundary.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .message import Message

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def messages(self) -> tuple[Message, ...]:
        return ()

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False


@dataclass(frozen=True)
class Failure:
    messages: tuple[Message, ...]

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def with_message(self, message: Message) -> Failure:
        return Failure((message,))


@dataclass(frozen=True)
class Both(Generic[T]):
    """A value was produced but failures were recorded along the way."""

    value: T
    messages: tuple[Message, ...]

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def with_message(self, message: Message) -> Both[T]:
        return Both(self.value, (message,))


ValidationResult = Union[Success[T], Failure]
Ior = Union[Success[T], Both[T], Failure]


def to_result(outcome: Ior[T]) -> ValidationResult[T]:
    """Downgrade PARTIAL outcomes so no value escapes alongside failures."""
    if isinstance(outcome, Both):
        return Failure(outcome.messages)
    return outcome
