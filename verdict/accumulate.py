"""
Error accumulation strategies and scope-local early exit.

Every recoverable scope mints a `ScopeToken`. Accumulators hand back the
token of the scope that should be aborted if the caller decides to stop, and
the fail-fast strategy raises an `AbortSignal` carrying that token right away.
A scope catches only signals carrying its own token; anything else belongs
to an enclosing scope and is re-raised untouched.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, NoReturn, Protocol, TypeVar, Union

from .errors import ScopeError

if TYPE_CHECKING:
    from .message import Message

T = TypeVar("T")

_token_ids = itertools.count(1)


@dataclass(frozen=True)
class ScopeToken:
    """Identity of one recoverable scope. Compared by value."""

    id: int

    @classmethod
    def mint(cls) -> ScopeToken:
        return cls(next(_token_ids))

    def abort(self) -> NoReturn:
        raise AbortSignal(self) from None


class AbortSignal(BaseException):
    """Non-local exit to the scope owning `token`.

    Derived from BaseException so caller predicates that catch `Exception`
    cannot swallow it.
    """

    def __init__(self, token: ScopeToken):
        super().__init__(token)
        self.token = token


class Accumulator(Protocol):
    def accumulate(self, messages: list[Message]) -> ScopeToken:
        """Record `messages` and return the token to abort if the caller stops."""
        ...


class Uninitialized:
    """Placeholder accumulator of a context that is not inside a run."""

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        raise ScopeError("accumulator used outside of a validation run")


@dataclass
class CollectAll:
    """Buffers messages; evaluation continues."""

    token: ScopeToken
    messages: list[Message] = field(default_factory=list)

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        self.messages.extend(messages)
        return self.token


@dataclass
class FailFast(CollectAll):
    """Buffers messages, then aborts its scope immediately."""

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        self.messages.extend(messages)
        self.token.abort()


def buffer_for(token: ScopeToken, fail_fast: bool) -> CollectAll:
    return FailFast(token) if fail_fast else CollectAll(token)


@dataclass
class Forwarding:
    """Passes messages to the enclosing accumulator but owns its own token.

    The enclosing accumulator may abort on its own (fail-fast); otherwise the
    token of this scope is returned so a caller can stop just this scope.
    """

    token: ScopeToken
    outer: Accumulator
    outer_token: ScopeToken | None = None

    def accumulate(self, messages: list[Message]) -> ScopeToken:
        self.outer_token = self.outer.accumulate(messages)
        return self.token


class Ok(Generic[T]):
    """A scope completed and produced `value`."""

    __slots__ = ("value",)

    def __init__(self, value: T):
        self.value = value

    @property
    def ok(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


class Err:
    """A scope was aborted. Its messages already went to the enclosing scope.

    Reading `value` aborts the scope that received those messages.
    """

    __slots__ = ("token",)

    def __init__(self, token: ScopeToken):
        self.token = token

    @property
    def ok(self) -> bool:
        return False

    @property
    def value(self) -> Any:
        self.token.abort()

    def __repr__(self) -> str:
        return f"Err(scope={self.token.id})"


Accumulated = Union[Ok[T], Err]
