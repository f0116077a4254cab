"""Exceptions surfaced by the validation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .message import Message


class ValidationError(Exception):
    """Raised by `validate` / `create` when the run produced failures."""

    def __init__(self, messages: list["Message"]):
        self.messages = list(messages)
        super().__init__("; ".join(str(m) for m in self.messages) or "validation failed")


class DeferredValueError(RuntimeError):
    """A deferred binder value was read before it was resolved, or after it failed."""


class ScopeError(RuntimeError):
    """The engine's scope bookkeeping was used incorrectly.

    Raised when an accumulator is used outside of a run, or when an abort
    signal reaches a run boundary without being matched by its owning scope.
    """
